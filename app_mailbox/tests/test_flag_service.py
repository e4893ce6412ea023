"""
单元测试：FlagService（已读 / 星标）

测试覆盖：
- 会话已读按收发视角限定（to_email 或 from_email 为当前用户）
- 已是目标状态时返回 unchanged，而不是错误
- 不存在时抛出 NotFound
- 星标切换两次结果相反，其他字段不变
- 批量操作全有或全无
"""
import uuid

from django.test import TestCase

from app_mailbox.enums.folder_type_enum import FolderTypeEnum
from app_mailbox.enums.id_kind_enum import IdKindEnum
from app_mailbox.exceptions.message_not_found_exception import MessageNotFoundException
from app_mailbox.exceptions.partial_not_found_exception import PartialNotFoundException
from app_mailbox.exceptions.thread_not_found_exception import ThreadNotFoundException
from app_mailbox.pojo.message_ref import MessageRef
from app_mailbox.services.flag_service import FlagService
from app_mailbox.tests.fixtures import TEST_DATABASES, new_caller, provision_all, add_message, reload


class FlagTestCase(TestCase):
    databases = TEST_DATABASES

    def setUp(self):
        self.service = FlagService()
        self.caller = new_caller("me@example.com")
        self.inbox = provision_all(self.caller.user_id)[FolderTypeEnum.INBOX]


class TestReadFlags(FlagTestCase):
    """测试已读状态"""

    def test_set_thread_read_perspective(self):
        """测试只修改当前用户收发的邮件"""
        thread_id = uuid.uuid4()
        received = add_message(self.caller.user_id, self.inbox, thread_id=thread_id,
                               from_email="bob@other.org", to_email="Me@Example.com")
        sent = add_message(self.caller.user_id, self.inbox, thread_id=thread_id,
                           from_email="me@example.com", to_email="bob@other.org")
        cc_only = add_message(self.caller.user_id, self.inbox, thread_id=thread_id,
                              from_email="bob@other.org", to_email="carol@other.org")

        data = self.service.set_thread_read(self.caller, thread_id, True)
        self.assertEqual(data['updated'], 2)
        self.assertFalse(data['unchanged'])
        self.assertTrue(reload(received).is_read)
        self.assertTrue(reload(sent).is_read)
        self.assertFalse(reload(cc_only).is_read)

    def test_set_thread_read_unchanged(self):
        """测试已是目标状态时返回 unchanged"""
        thread_id = uuid.uuid4()
        add_message(self.caller.user_id, self.inbox, thread_id=thread_id, to_email="me@example.com", is_read=True)
        data = self.service.set_thread_read(self.caller, thread_id, True)
        self.assertEqual(data['updated'], 0)
        self.assertTrue(data['unchanged'])

    def test_set_thread_read_not_found(self):
        with self.assertRaises(ThreadNotFoundException):
            self.service.set_thread_read(self.caller, uuid.uuid4(), True)

    def test_set_threads_read_all_or_nothing(self):
        """测试批量已读中有缺失会话时不修改任何行"""
        thread_id = uuid.uuid4()
        message = add_message(self.caller.user_id, self.inbox, thread_id=thread_id, to_email="me@example.com")
        missing = uuid.uuid4()

        with self.assertRaises(PartialNotFoundException) as ctx:
            self.service.set_threads_read(self.caller, [thread_id, missing], True)
        self.assertEqual(ctx.exception.missing_ids, [str(missing)])
        self.assertFalse(reload(message).is_read)

        data = self.service.set_threads_read(self.caller, [thread_id], True)
        self.assertEqual(data['resultsByThread'], {str(thread_id): [message.id]})
        self.assertTrue(reload(message).is_read)


class TestStarFlags(FlagTestCase):
    """测试星标状态"""

    def test_set_starred_idempotent(self):
        """测试重复设置星标是安全的空操作"""
        message = add_message(self.caller.user_id, self.inbox)
        first = self.service.set_message_starred(self.caller, MessageRef(message.id), True)
        second = self.service.set_message_starred(self.caller, MessageRef(message.id), True)

        self.assertEqual(first['updated'], 1)
        self.assertEqual(second['updated'], 0)
        self.assertTrue(second['unchanged'])
        self.assertTrue(reload(message).is_starred)

    def test_set_starred_not_found(self):
        with self.assertRaises(MessageNotFoundException):
            self.service.set_message_starred(self.caller, MessageRef("<missing@example.com>"), True)

    def test_toggle_twice(self):
        """测试连续切换两次：第一次 true，第二次 false，其他字段不变"""
        message = add_message(self.caller.user_id, self.inbox, is_read=True)
        first = self.service.toggle_message_starred(self.caller, MessageRef(message.message_id))
        second = self.service.toggle_message_starred(self.caller, MessageRef(message.message_id))

        self.assertTrue(first['is_starred'])
        self.assertFalse(second['is_starred'])
        after = reload(message)
        self.assertFalse(after.is_starred)
        self.assertTrue(after.is_read)
        self.assertEqual(after.folder_id, message.folder_id)
        self.assertEqual(after.subject, message.subject)

    def test_set_starred_batch(self):
        """测试批量星标与缺失时整体拒绝"""
        thread_id = uuid.uuid4()
        messages = [add_message(self.caller.user_id, self.inbox, thread_id=thread_id) for _ in range(2)]

        with self.assertRaises(PartialNotFoundException):
            self.service.set_starred_batch(self.caller, IdKindEnum.THREAD, [thread_id, uuid.uuid4()], True)
        self.assertFalse(any(reload(message).is_starred for message in messages))

        data = self.service.set_starred_batch(self.caller, IdKindEnum.THREAD, [thread_id], True)
        self.assertEqual(data['updated'], 2)
        self.assertTrue(all(reload(message).is_starred for message in messages))

        again = self.service.set_starred_batch(
            self.caller, IdKindEnum.MESSAGE, [MessageRef(message.id) for message in messages], True)
        self.assertTrue(again['unchanged'])

    def test_other_users_message(self):
        """测试不能修改其他用户的邮件"""
        other = new_caller()
        theirs = add_message(other.user_id, provision_all(other.user_id)[FolderTypeEnum.INBOX])
        with self.assertRaises(MessageNotFoundException):
            self.service.toggle_message_starred(self.caller, MessageRef(theirs.id))
        self.assertFalse(reload(theirs).is_starred)
