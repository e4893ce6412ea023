"""
单元测试：TransitionService（文件夹迁移引擎）

测试覆盖：
- 单封邮件 / 整个会话移动（folder 与 folder_id 同步写入）
- 从回收站 / 归档恢复（按邮件推断目标文件夹）
- 批量操作全有或全无（PartialNotFound 时不修改任何行）
- 恢复只作用于源文件夹中的邮件
- 用户隔离
- 硬删除
- 事务中途数据库错误时回滚并返回 500
"""
import json
import uuid
from unittest import mock

from django.db import DatabaseError
from django.test import TestCase, override_settings
from rest_framework import status
from rest_framework.test import APIRequestFactory, force_authenticate

from app_mailbox.config import MAILBOX_DB_ALIAS
from app_mailbox.enums.folder_type_enum import FolderTypeEnum
from app_mailbox.enums.id_kind_enum import IdKindEnum
from app_mailbox.exceptions.destination_folders_missing_exception import DestinationFoldersMissingException
from app_mailbox.exceptions.folder_not_configured_exception import FolderNotConfiguredException
from app_mailbox.exceptions.folder_not_found_exception import FolderNotFoundException
from app_mailbox.exceptions.message_not_found_exception import MessageNotFoundException
from app_mailbox.exceptions.partial_not_found_exception import PartialNotFoundException
from app_mailbox.exceptions.thread_not_found_exception import ThreadNotFoundException
from app_mailbox.exceptions.transaction_failure_exception import TransactionFailureException
from app_mailbox.models.mailbox_message import MailboxMessage
from app_mailbox.pojo.folder_ref import FolderRef
from app_mailbox.pojo.message_ref import MessageRef
from app_mailbox.repos import update_folder_by_ids
from app_mailbox.services.folder_service import FolderService
from app_mailbox.services.transition_service import TransitionService
from app_mailbox.tests.fixtures import (
    TEST_DATABASES,
    new_caller,
    provision,
    provision_all,
    add_message,
    reload,
    exists,
)
from app_mailbox.views.transition_view import BatchMoveView
from common.consts.response_const import RET_DB_TRANSACTION_FAILED


class TransitionTestCase(TestCase):
    databases = TEST_DATABASES

    def setUp(self):
        self.service = TransitionService()
        self.caller = new_caller("me@example.com")
        self.folders = provision_all(self.caller.user_id)
        self.inbox = self.folders[FolderTypeEnum.INBOX]
        self.sent = self.folders[FolderTypeEnum.SENT]
        self.drafts = self.folders[FolderTypeEnum.DRAFTS]
        self.trash = self.folders[FolderTypeEnum.TRASH]
        self.archive = self.folders[FolderTypeEnum.ARCHIVE]
        self.spam = self.folders[FolderTypeEnum.SPAM]

    def assertInFolder(self, message, folder):
        message = reload(message)
        self.assertEqual(message.folder_id, folder.folder_id)
        self.assertEqual(message.folder, folder.display_name)


class TestMoveSingle(TransitionTestCase):
    """测试单封邮件与会话移动"""

    def test_move_message_by_protocol_id(self):
        """测试按 Message-ID 移动到回收站，只修改 folder/folder_id"""
        message = add_message(self.caller.user_id, self.inbox, is_read=True, is_starred=True)
        data = self.service.move_message(self.caller, MessageRef(message.message_id), FolderTypeEnum.TRASH)

        self.assertEqual(data['updated'], 1)
        self.assertEqual(data['folder'], "Trash")
        self.assertInFolder(message, self.trash)
        moved = reload(message)
        self.assertTrue(moved.is_read)
        self.assertTrue(moved.is_starred)
        self.assertEqual(moved.subject, message.subject)

    def test_move_message_by_row_id(self):
        """测试按行ID移动到垃圾邮件"""
        message = add_message(self.caller.user_id, self.inbox)
        self.service.move_message(self.caller, MessageRef(message.id), FolderTypeEnum.SPAM)
        self.assertInFolder(message, self.spam)

    def test_move_message_not_found(self):
        """测试移动不存在或不属于自己的邮件"""
        other = new_caller()
        other_message = add_message(other.user_id, provision_all(other.user_id)[FolderTypeEnum.INBOX])

        with self.assertRaises(MessageNotFoundException):
            self.service.move_message(self.caller, MessageRef(other_message.message_id), FolderTypeEnum.TRASH)
        with self.assertRaises(MessageNotFoundException):
            self.service.move_message(self.caller, MessageRef(other_message.id), FolderTypeEnum.TRASH)
        self.assertEqual(reload(other_message).folder, "Inbox")

    def test_move_thread(self):
        """测试移动整个会话并返回影响行数"""
        thread_id = uuid.uuid4()
        messages = [add_message(self.caller.user_id, folder, thread_id=thread_id)
                    for folder in (self.inbox, self.sent, self.inbox)]
        data = self.service.move_thread(self.caller, thread_id, FolderTypeEnum.ARCHIVE)

        self.assertEqual(data['updated'], 3)
        for message in messages:
            self.assertInFolder(message, self.archive)

    def test_move_thread_not_found(self):
        with self.assertRaises(ThreadNotFoundException):
            self.service.move_thread(self.caller, uuid.uuid4(), FolderTypeEnum.TRASH)

    def test_system_folder_not_configured(self):
        """测试目标系统文件夹缺失时抛出 FolderNotConfigured"""
        caller = new_caller()
        folders = provision(caller.user_id, skip=(FolderTypeEnum.TRASH,))
        message = add_message(caller.user_id, folders[FolderTypeEnum.INBOX])
        with self.assertRaises(FolderNotConfiguredException):
            self.service.move_message(caller, MessageRef(message.id), FolderTypeEnum.TRASH)
        self.assertEqual(reload(message).folder, "Inbox")

    def test_move_to_custom_folder(self):
        """测试移动到自定义文件夹时写入自定义名称"""
        work = FolderService().create_custom_folder(self.caller.user_id, "Work")
        message = add_message(self.caller.user_id, self.inbox)
        self.service.move_message(self.caller, MessageRef(message.id), FolderRef.parse("work"))
        message = reload(message)
        self.assertEqual(message.folder, "Work")
        self.assertEqual(message.folder_id, work['folder_id'])


class TestRestore(TransitionTestCase):
    """测试恢复"""

    def test_restore_inference_from_trash_and_archive(self):
        """测试 sent/draft/空 类型分别恢复到 Sent/Drafts/Inbox，与源文件夹无关"""
        for source, source_type in ((self.trash, FolderTypeEnum.TRASH), (self.archive, FolderTypeEnum.ARCHIVE)):
            sent = add_message(self.caller.user_id, source, message_type="sent")
            draft = add_message(self.caller.user_id, source, message_type="draft")
            received = add_message(self.caller.user_id, source, message_type=None)

            for message in (sent, draft, received):
                self.service.restore_message(self.caller, MessageRef(message.message_id), source_type)

            self.assertInFolder(sent, self.sent)
            self.assertInFolder(draft, self.drafts)
            self.assertInFolder(received, self.inbox)

    def test_restore_own_message_goes_to_sent(self):
        """测试发件人为当前用户（大小写不敏感）的邮件恢复到 Sent"""
        message = add_message(self.caller.user_id, self.trash, from_email="ME@example.com")
        data = self.service.restore_message(self.caller, MessageRef(message.id), FolderTypeEnum.TRASH)
        self.assertEqual(data['restoredTo'], "Sent")
        self.assertInFolder(message, self.sent)

    def test_restore_message_not_in_source(self):
        """测试邮件不在源文件夹时抛出 MessageNotFound 且不修改"""
        message = add_message(self.caller.user_id, self.trash)
        with self.assertRaises(MessageNotFoundException):
            self.service.restore_message(self.caller, MessageRef(message.id), FolderTypeEnum.ARCHIVE)
        self.assertInFolder(message, self.trash)

    def test_restore_thread_from_archive_scenario(self):
        """测试会话 3 封邮件（1 封已发送，2 封收件）归档后恢复：1 封到 Sent，2 封到 Inbox，归档中为 0"""
        thread_id = uuid.uuid4()
        mine = add_message(self.caller.user_id, self.sent, thread_id=thread_id,
                           message_type="sent", from_email="me@example.com")
        first = add_message(self.caller.user_id, self.inbox, thread_id=thread_id, from_email="bob@other.org")
        second = add_message(self.caller.user_id, self.inbox, thread_id=thread_id, from_email="bob@other.org")

        self.service.move_thread(self.caller, thread_id, FolderTypeEnum.ARCHIVE)
        data = self.service.restore_thread(self.caller, thread_id, FolderTypeEnum.ARCHIVE)

        self.assertEqual(data['restored'], 3)
        self.assertEqual(data['restorationStats'], {'toInbox': 2, 'toSent': 1, 'toDrafts': 0})
        self.assertInFolder(mine, self.sent)
        self.assertInFolder(first, self.inbox)
        self.assertInFolder(second, self.inbox)
        self.assertEqual(
            MailboxMessage.objects.using(MAILBOX_DB_ALIAS).filter(
                user_id=self.caller.user_id, folder_id=self.archive.folder_id).count(),
            0
        )

    def test_restore_thread_scoped_to_source(self):
        """测试从归档恢复不会修改同一会话中位于回收站的邮件"""
        thread_id = uuid.uuid4()
        archived = add_message(self.caller.user_id, self.archive, thread_id=thread_id)
        trashed = add_message(self.caller.user_id, self.trash, thread_id=thread_id)

        data = self.service.restore_thread(self.caller, thread_id, FolderTypeEnum.ARCHIVE)
        self.assertEqual(data['restored'], 1)
        self.assertInFolder(archived, self.inbox)
        self.assertInFolder(trashed, self.trash)

    def test_restore_thread_not_in_source(self):
        thread_id = uuid.uuid4()
        add_message(self.caller.user_id, self.inbox, thread_id=thread_id)
        with self.assertRaises(ThreadNotFoundException):
            self.service.restore_thread(self.caller, thread_id, FolderTypeEnum.TRASH)

    def test_restore_draft_without_drafts_folder(self):
        """测试没有 Drafts 文件夹时草稿恢复到 Inbox"""
        caller = new_caller()
        folders = provision(caller.user_id, skip=(FolderTypeEnum.DRAFTS,))
        message = add_message(caller.user_id, folders[FolderTypeEnum.TRASH], message_type="draft")
        data = self.service.restore_message(caller, MessageRef(message.id), FolderTypeEnum.TRASH)
        self.assertEqual(data['restoredTo'], "Inbox")
        self.assertEqual(reload(message).folder_id, folders[FolderTypeEnum.INBOX].folder_id)

    def test_restore_destination_folders_missing(self):
        """测试缺少 Inbox 时抛出 DestinationFoldersMissing 且不修改"""
        caller = new_caller()
        folders = provision(caller.user_id, skip=(FolderTypeEnum.INBOX,))
        message = add_message(caller.user_id, folders[FolderTypeEnum.TRASH])
        with self.assertRaises(DestinationFoldersMissingException):
            self.service.restore_message(caller, MessageRef(message.id), FolderTypeEnum.TRASH)
        self.assertEqual(reload(message).folder, "Trash")


class TestBatch(TransitionTestCase):
    """测试批量操作"""

    def test_move_batch_threads(self):
        """测试批量移动会话并按会话分组返回"""
        t1, t2 = uuid.uuid4(), uuid.uuid4()
        m1 = add_message(self.caller.user_id, self.inbox, thread_id=t1)
        m2 = add_message(self.caller.user_id, self.inbox, thread_id=t1)
        m3 = add_message(self.caller.user_id, self.inbox, thread_id=t2)

        data = self.service.move_batch(self.caller, IdKindEnum.THREAD, [t1, t2], FolderRef.parse("Spam"))
        self.assertEqual(data['updated'], 3)
        self.assertEqual(sorted(data['resultsByThread'][str(t1)]), sorted([m1.id, m2.id]))
        self.assertEqual(data['resultsByThread'][str(t2)], [m3.id])
        for message in (m1, m2, m3):
            self.assertInFolder(message, self.spam)

    def test_move_batch_partial_not_found(self):
        """测试批量中有其他用户的会话时整体拒绝，不修改任何行"""
        other = new_caller()
        other_thread = uuid.uuid4()
        other_message = add_message(other.user_id, provision_all(other.user_id)[FolderTypeEnum.INBOX],
                                    thread_id=other_thread)
        mine = add_message(self.caller.user_id, self.inbox)

        with self.assertRaises(PartialNotFoundException) as ctx:
            self.service.move_batch(self.caller, IdKindEnum.THREAD, [mine.thread_id, other_thread],
                                    FolderTypeEnum.TRASH)
        self.assertEqual(ctx.exception.missing_ids, [str(other_thread)])
        self.assertInFolder(mine, self.inbox)
        self.assertEqual(reload(other_message).folder, "Inbox")

    def test_move_batch_unknown_folder(self):
        message = add_message(self.caller.user_id, self.inbox)
        with self.assertRaises(FolderNotFoundException):
            self.service.move_batch(self.caller, IdKindEnum.MESSAGE, [MessageRef(message.id)],
                                    FolderRef.parse("Nowhere"))

    def test_restore_batch_messages(self):
        """测试批量恢复消息并统计目标文件夹"""
        sent = add_message(self.caller.user_id, self.trash, message_type="Sent")
        received = add_message(self.caller.user_id, self.trash)

        data = self.service.restore_batch(
            self.caller,
            IdKindEnum.MESSAGE,
            [MessageRef(sent.message_id), MessageRef(received.id)],
            FolderRef.parse("trash")
        )
        self.assertEqual(data['restored'], 2)
        self.assertEqual(data['restorationStats'], {'toInbox': 1, 'toSent': 1, 'toDrafts': 0})
        self.assertEqual(data['resultsByMessage'][sent.message_id]['folder'], "Sent")
        self.assertInFolder(sent, self.sent)
        self.assertInFolder(received, self.inbox)

    def test_restore_batch_requires_rows_in_source(self):
        """测试批量恢复时不在源文件夹的 ID 视为缺失，整体回滚"""
        in_trash = add_message(self.caller.user_id, self.trash)
        in_inbox = add_message(self.caller.user_id, self.inbox)

        with self.assertRaises(PartialNotFoundException) as ctx:
            self.service.restore_batch(
                self.caller,
                IdKindEnum.MESSAGE,
                [MessageRef(in_trash.id), MessageRef(in_inbox.id)],
                FolderTypeEnum.TRASH
            )
        self.assertEqual(ctx.exception.missing_ids, [str(in_inbox.id)])
        self.assertInFolder(in_trash, self.trash)

    def test_delete_batch_scenario(self):
        """测试批量删除 [存在, 不存在] 返回 PartialNotFound，存在的行保持不变"""
        good = add_message(self.caller.user_id, self.trash)
        with self.assertRaises(PartialNotFoundException) as ctx:
            self.service.delete_batch(
                self.caller,
                IdKindEnum.MESSAGE,
                [MessageRef(good.message_id), MessageRef("<nonexistent@example.com>")]
            )
        self.assertEqual(ctx.exception.http_status, 404)
        self.assertEqual(ctx.exception.missing_ids, ["<nonexistent@example.com>"])
        self.assertTrue(exists(good))
        self.assertInFolder(good, self.trash)

    def test_delete_batch_threads(self):
        thread_id = uuid.uuid4()
        messages = [add_message(self.caller.user_id, self.trash, thread_id=thread_id) for _ in range(2)]
        data = self.service.delete_batch(self.caller, IdKindEnum.THREAD, [thread_id])
        self.assertEqual(data['deleted'], 2)
        for message in messages:
            self.assertFalse(exists(message))


def _update_then_fail(*args, **kwargs):
    """写入一行后抛出数据库错误"""
    update_folder_by_ids(*args, **kwargs)
    raise DatabaseError("connection lost")


class TestTransactionFailure(TransitionTestCase):
    """测试事务中途数据库错误时整体回滚"""

    def test_move_batch_rolls_back(self):
        """测试写入后出错：抛出 TransactionFailure，已写入的行被回滚"""
        message = add_message(self.caller.user_id, self.inbox)

        with mock.patch('app_mailbox.services.transition_service.update_folder_by_ids',
                        side_effect=_update_then_fail):
            with self.assertRaises(TransactionFailureException) as ctx:
                self.service.move_batch(self.caller, IdKindEnum.MESSAGE, [MessageRef(message.id)],
                                        FolderTypeEnum.TRASH)

        self.assertEqual(ctx.exception.details['type'], "DatabaseError")
        self.assertInFolder(message, self.inbox)

    @override_settings(DEBUG=False)
    def test_move_batch_error_envelope(self):
        """测试接口返回 500，非 DEBUG 下不返回详情"""
        message = add_message(self.caller.user_id, self.inbox)
        request = APIRequestFactory().put('/api/mail/folder-or-thread/move?toFolder=Trash',
                                          {"messageIds": [message.message_id]}, format='json')
        force_authenticate(request, user=self.caller)

        with mock.patch('app_mailbox.services.transition_service.update_folder_by_ids',
                        side_effect=_update_then_fail):
            response = BatchMoveView.as_view()(request)

        response.render()
        body = json.loads(response.content)
        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(body['code'], RET_DB_TRANSACTION_FAILED)
        self.assertNotIn('details', body)
        self.assertInFolder(message, self.inbox)


class TestDelete(TransitionTestCase):
    """测试硬删除与用户隔离"""

    def test_delete_message(self):
        message = add_message(self.caller.user_id, self.trash)
        data = self.service.delete_message(self.caller, MessageRef(message.message_id))
        self.assertEqual(data['deleted'], 1)
        self.assertFalse(exists(message))
        with self.assertRaises(MessageNotFoundException):
            self.service.delete_message(self.caller, MessageRef(message.message_id))

    def test_delete_thread_isolation(self):
        """测试相同会话ID下只删除当前用户的邮件"""
        thread_id = uuid.uuid4()
        other = new_caller()
        theirs = add_message(other.user_id, provision_all(other.user_id)[FolderTypeEnum.INBOX], thread_id=thread_id)
        mine = add_message(self.caller.user_id, self.inbox, thread_id=thread_id)

        data = self.service.delete_thread(self.caller, thread_id)
        self.assertEqual(data['deleted'], 1)
        self.assertFalse(exists(mine))
        self.assertTrue(exists(theirs))

        with self.assertRaises(ThreadNotFoundException):
            self.service.delete_thread(self.caller, thread_id)

    def test_move_thread_isolation(self):
        """测试相同会话ID下移动只作用于当前用户"""
        thread_id = uuid.uuid4()
        other = new_caller()
        other_inbox = provision_all(other.user_id)[FolderTypeEnum.INBOX]
        theirs = add_message(other.user_id, other_inbox, thread_id=thread_id)
        add_message(self.caller.user_id, self.inbox, thread_id=thread_id)

        self.service.move_thread(self.caller, thread_id, FolderTypeEnum.TRASH)
        self.assertEqual(reload(theirs).folder_id, other_inbox.folder_id)
