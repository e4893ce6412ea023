"""
Django management command to create the system folders of a user

Usage:
    python manage.py provision_system_folders --user-id <uuid>
"""
import logging
import uuid

from django.core.management.base import BaseCommand, CommandError

from app_mailbox.exceptions.mailbox_exception import MailboxException
from app_mailbox.services.folder_service import FolderService

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Create the missing system folders (Inbox, Sent, Drafts, Trash, Spam, Archive) of a user'

    def add_arguments(self, parser):
        parser.add_argument(
            '--user-id',
            required=True,
            help='UUID of the user to provision',
        )

    def handle(self, *args, **options):
        try:
            user_id = uuid.UUID(options['user_id'])
        except ValueError:
            raise CommandError(f"Invalid user id: {options['user_id']}")

        try:
            result = FolderService().provision_system_folders(user_id)
        except MailboxException as e:
            logger.exception("Failed to provision system folders")
            raise CommandError(e.message)

        if result['created']:
            self.stdout.write(self.style.SUCCESS(f"Created folders: {', '.join(result['created'])}"))
        else:
            self.stdout.write(self.style.WARNING('All system folders already exist'))
