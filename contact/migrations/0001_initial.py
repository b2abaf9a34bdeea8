"""
Initial schema for contacts and replies.

Deployments that predate this project already have a `contacts` table
(sometimes without the `status` column) and possibly a `replies` table.
The models are registered in migration state only; the database side
creates whichever table is missing and adds any column a pre-existing
table lacks.
"""
import django.db.models.deletion
from django.db import migrations, models


MODEL_NAMES = ('Contact', 'Reply')


def create_missing_tables(apps, schema_editor):
    connection = schema_editor.connection
    with connection.cursor() as cursor:
        existing_tables = set(connection.introspection.table_names(cursor))

    for model_name in MODEL_NAMES:
        model = apps.get_model('contact', model_name)
        table = model._meta.db_table

        if table not in existing_tables:
            schema_editor.create_model(model)
            continue

        with connection.cursor() as cursor:
            columns = {
                column.name
                for column in connection.introspection.get_table_description(cursor, table)
            }
        for field in model._meta.local_fields:
            if field.column not in columns:
                schema_editor.add_field(model, field)


def drop_tables(apps, schema_editor):
    for model_name in reversed(MODEL_NAMES):
        schema_editor.delete_model(apps.get_model('contact', model_name))


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.SeparateDatabaseAndState(
            state_operations=[
                migrations.CreateModel(
                    name='Contact',
                    fields=[
                        ('id', models.AutoField(primary_key=True, serialize=False)),
                        ('name', models.CharField(help_text='Name of the person contacting the firm', max_length=255)),
                        ('email', models.EmailField(help_text='Email address for follow-up', max_length=255)),
                        ('phone', models.CharField(blank=True, help_text='Optional phone number', max_length=50, null=True)),
                        ('subject', models.CharField(help_text='Subject line entered by the visitor', max_length=255)),
                        ('message', models.TextField(help_text='The message content')),
                        ('status', models.CharField(default='new', help_text="Advisory status ('new', 'replied' or any admin-set value)", max_length=20)),
                        ('created_at', models.DateTimeField(auto_now_add=True, help_text='When the message was submitted')),
                    ],
                    options={
                        'verbose_name': 'Contact',
                        'verbose_name_plural': 'Contacts',
                        'db_table': 'contacts',
                        'ordering': ['-created_at', '-id'],
                    },
                ),
                migrations.CreateModel(
                    name='Reply',
                    fields=[
                        ('id', models.AutoField(primary_key=True, serialize=False)),
                        ('message', models.TextField(help_text='The reply message content')),
                        ('created_at', models.DateTimeField(auto_now_add=True, help_text='When the reply was sent')),
                        ('contact', models.ForeignKey(help_text='The contact being replied to', on_delete=django.db.models.deletion.CASCADE, related_name='replies', to='contact.contact')),
                    ],
                    options={
                        'verbose_name': 'Reply',
                        'verbose_name_plural': 'Replies',
                        'db_table': 'replies',
                        'ordering': ['created_at', 'id'],
                    },
                ),
            ],
            database_operations=[],
        ),
        migrations.RunPython(create_missing_tables, drop_tables),
    ]
