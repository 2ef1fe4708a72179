"""Patient intake application.

This package contains the models, serializers, services, views and
route registrations for the public intake form and the admin
submissions dashboard.
"""
