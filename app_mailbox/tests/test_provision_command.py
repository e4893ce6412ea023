"""
单元测试：provision_system_folders 管理命令
"""
import uuid
from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase

from app_mailbox.enums.folder_type_enum import FolderTypeEnum
from app_mailbox.repos import get_folders_by_types
from app_mailbox.tests.fixtures import TEST_DATABASES


class TestProvisionCommand(TestCase):
    databases = TEST_DATABASES

    def run_command(self, user_id: str) -> str:
        out = StringIO()
        call_command('provision_system_folders', '--user-id', user_id, stdout=out)
        return out.getvalue()

    def test_provision_twice(self):
        """测试重复执行只创建一次"""
        user_id = uuid.uuid4()
        output = self.run_command(str(user_id))
        self.assertIn("Created folders", output)
        self.assertEqual(len(get_folders_by_types(user_id, FolderTypeEnum.system_types())), 6)

        output = self.run_command(str(user_id))
        self.assertIn("already exist", output)

    def test_invalid_user_id(self):
        with self.assertRaises(CommandError):
            self.run_command("not-a-uuid")
