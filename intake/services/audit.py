"""
Best-effort activity logging for admin actions.

:func:`log_activity` hands the entry off and returns ``None``; the
caller's result never depends on whether the write succeeded.  Failures
are reported on their own channel: the ``intake.audit`` logger and the
:data:`activity_log_failed` signal.

With ``settings.INTAKE.audit_async`` enabled the insert runs on a small
thread pool.  Otherwise it runs inline inside a savepoint, so a failed
insert cannot break the surrounding transaction.
"""
from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Optional

from django.conf import settings
from django.db import connection, transaction
from django.dispatch import Signal

from intake.models import ActivityLog

logger = logging.getLogger('intake.audit')

# Sent with ``action``, ``metadata`` and ``exc`` whenever an entry is lost.
activity_log_failed = Signal()

_executor: Optional[ThreadPoolExecutor] = None
_executor_lock = threading.Lock()


def _get_executor(workers: int) -> ThreadPoolExecutor:
    global _executor
    with _executor_lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix='activity-log')
        return _executor


def _write(user_id, action: str, metadata: Dict[str, Any]) -> None:
    with transaction.atomic():
        ActivityLog.objects.create(user_id=user_id, action=action, metadata=metadata)


def _dispatch(user_id, action: str, metadata: Dict[str, Any], *, threaded: bool) -> None:
    try:
        _write(user_id, action, metadata)
    except Exception as exc:
        logger.exception('failed to write activity log entry %r', action)
        activity_log_failed.send_robust(sender=ActivityLog, action=action, metadata=metadata, exc=exc)
    finally:
        if threaded:
            connection.close()


def log_activity(user, action: str, metadata: Optional[Dict[str, Any]] = None) -> None:
    """Record ``action`` performed by ``user`` (``None`` for anonymous)."""
    user_id = getattr(user, 'pk', None)
    metadata = dict(metadata or {})
    conf = settings.INTAKE
    if conf.audit_async:
        try:
            _get_executor(conf.audit_workers).submit(_dispatch, user_id, action, metadata, threaded=True)
        except RuntimeError:
            # executor already shut down (interpreter exit)
            logger.warning('dropped activity log entry %r', action)
    else:
        _dispatch(user_id, action, metadata, threaded=False)
