from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='ProjectDocument',
            fields=[
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='Created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Updated at')),
                ('key', models.CharField(max_length=128, primary_key=True, serialize=False, verbose_name='Key')),
                ('data', models.JSONField(blank=True, default=dict, verbose_name='Document')),
            ],
            options={
                'db_table': 'projects',
                'verbose_name': 'Project document',
                'verbose_name_plural': 'Project documents',
                'ordering': ['created_at', 'key'],
            },
        ),
    ]
