from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Folder',
            fields=[
                ('folder_id', models.BigAutoField(primary_key=True, serialize=False)),
                ('user_id', models.UUIDField(db_index=True)),
                ('name', models.CharField(max_length=255)),
                ('type', models.CharField(
                    choices=[
                        ('inbox', 'Inbox'), ('sent', 'Sent'), ('drafts', 'Drafts'), ('trash', 'Trash'),
                        ('spam', 'Spam'), ('archive', 'Archive'), ('custom', 'Custom'),
                    ],
                    default='custom', max_length=16)),
                ('parent_id', models.BigIntegerField(blank=True, null=True)),
                ('color', models.CharField(blank=True, max_length=7, null=True)),
                ('icon', models.CharField(blank=True, max_length=64, null=True)),
                ('sort_order', models.IntegerField(default=0)),
                ('sync_enabled', models.BooleanField(default=True)),
                ('ct', models.BigIntegerField(db_index=True, default=0)),
                ('ut', models.BigIntegerField(db_index=True, default=0)),
            ],
            options={
                'db_table': 'folders',
                'indexes': [
                    models.Index(fields=['user_id', 'type'], name='folders_user_type_idx'),
                    models.Index(fields=['user_id', 'name'], name='folders_user_name_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='MailboxMessage',
            fields=[
                ('id', models.BigAutoField(primary_key=True, serialize=False)),
                ('user_id', models.UUIDField(db_index=True)),
                ('thread_id', models.UUIDField(db_index=True)),
                ('message_id', models.CharField(db_index=True, max_length=512)),
                ('folder', models.CharField(max_length=255)),
                ('folder_id', models.BigIntegerField(db_index=True)),
                ('message_type', models.CharField(blank=True, max_length=32, null=True)),
                ('from_email', models.CharField(default='', max_length=512)),
                ('to_email', models.TextField(blank=True, default='')),
                ('cc', models.TextField(blank=True, default='')),
                ('bcc', models.TextField(blank=True, default='')),
                ('subject', models.TextField(blank=True, default='')),
                ('body', models.TextField(blank=True, default='')),
                ('plain_text', models.TextField(blank=True, default='')),
                ('in_reply_to', models.CharField(blank=True, max_length=512, null=True)),
                ('is_read', models.BooleanField(default=False)),
                ('is_starred', models.BooleanField(default=False)),
                ('is_draft', models.BooleanField(default=False)),
                ('ct', models.BigIntegerField(db_index=True, default=0)),
                ('ut', models.BigIntegerField(db_index=True, default=0)),
            ],
            options={
                'db_table': 'mailboxes',
                'unique_together': {('user_id', 'message_id')},
                'indexes': [
                    models.Index(fields=['user_id', 'thread_id'], name='mailboxes_user_thread_idx'),
                    models.Index(fields=['user_id', 'folder_id', 'ct'], name='mailboxes_user_folder_ct_idx'),
                    models.Index(fields=['user_id', 'is_starred'], name='mailboxes_user_starred_idx'),
                ],
            },
        ),
    ]
