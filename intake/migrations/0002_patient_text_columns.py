from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('intake', '0001_initial'),
    ]

    operations = [
        migrations.AlterField(
            model_name='patient',
            name='first_name',
            field=models.TextField(),
        ),
        migrations.AlterField(
            model_name='patient',
            name='last_name',
            field=models.TextField(),
        ),
        migrations.AlterField(
            model_name='patient',
            name='phone',
            field=models.TextField(),
        ),
        migrations.AlterField(
            model_name='patient',
            name='email',
            field=models.TextField(),
        ),
        migrations.AlterField(
            model_name='patient',
            name='address_street',
            field=models.TextField(),
        ),
        migrations.AlterField(
            model_name='patient',
            name='address_city',
            field=models.TextField(),
        ),
        migrations.AlterField(
            model_name='patient',
            name='address_state',
            field=models.TextField(),
        ),
        migrations.AlterField(
            model_name='patient',
            name='address_zip',
            field=models.TextField(),
        ),
    ]
