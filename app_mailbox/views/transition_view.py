"""
Folder transition REST API views

Single message and thread moves/restores are bound to a fixed folder type
in urls.py (move-to-trash, restore-from-archive, ...).
Batch moves/restores take the folder from the query string and the ids from the body.
"""
import logging

from rest_framework.views import APIView

from app_mailbox.enums.folder_type_enum import FolderTypeEnum
from app_mailbox.services.request_validator import (
    parse_thread_id,
    parse_message_ref,
    parse_folder_ref,
    parse_batch_ids,
)
from app_mailbox.services.transition_service import TransitionService
from app_mailbox.views.view_util import resp_mailbox_error, request_body
from common.utils.http_util import resp_ok

logger = logging.getLogger(__name__)


class MoveMessageView(APIView):
    """Move one message to a system folder"""
    target: FolderTypeEnum = None

    def put(self, request, message_ref, *args, **kwargs):
        try:
            data = TransitionService().move_message(request.user, parse_message_ref(message_ref), self.target)
            return resp_ok(data, f"Email moved to {self.target.display_name}")
        except Exception as e:
            return resp_mailbox_error(e, f"MoveMessageView.put:{self.target.value}")


class MoveThreadView(APIView):
    """Move every message of a thread to a system folder"""
    target: FolderTypeEnum = None

    def put(self, request, thread_id, *args, **kwargs):
        try:
            data = TransitionService().move_thread(request.user, parse_thread_id(str(thread_id)), self.target)
            return resp_ok(data, f"Thread moved to {self.target.display_name}")
        except Exception as e:
            return resp_mailbox_error(e, f"MoveThreadView.put:{self.target.value}")


class RestoreMessageView(APIView):
    """Restore one message out of Trash/Archive to its origin folder"""
    source: FolderTypeEnum = None

    def put(self, request, message_ref, *args, **kwargs):
        try:
            data = TransitionService().restore_message(request.user, parse_message_ref(message_ref), self.source)
            return resp_ok(data, f"Email restored from {self.source.display_name}")
        except Exception as e:
            return resp_mailbox_error(e, f"RestoreMessageView.put:{self.source.value}")


class RestoreThreadView(APIView):
    """Restore the messages of a thread out of Trash/Archive to their origin folders"""
    source: FolderTypeEnum = None

    def put(self, request, thread_id, *args, **kwargs):
        try:
            data = TransitionService().restore_thread(request.user, parse_thread_id(str(thread_id)), self.source)
            return resp_ok(data, f"Thread restored from {self.source.display_name}")
        except Exception as e:
            return resp_mailbox_error(e, f"RestoreThreadView.put:{self.source.value}")


class BatchMoveView(APIView):
    """Move several threads or messages to any folder of the caller"""

    def put(self, request, *args, **kwargs):
        """
        Query parameters:
        - toFolder: Folder name, system type or folder id (required)

        Request body (JSON), exactly one of:
        {"threadIds": ["<uuid>", ...]}
        {"messageIds": ["<message-id or row id>", ...]}
        """
        try:
            target = parse_folder_ref(request.GET.get("toFolder"), "toFolder")
            kind, ids = parse_batch_ids(request_body(request))
            data = TransitionService().move_batch(request.user, kind, ids, target)
            return resp_ok(data, f"Moved to {data['folder']}")
        except Exception as e:
            return resp_mailbox_error(e, "BatchMoveView.put")


class BatchRestoreView(APIView):
    """Restore several threads or messages out of any folder to their origin folders"""

    def put(self, request, *args, **kwargs):
        """
        Query parameters:
        - restoreFrom: Source folder name, system type or folder id (required)

        Request body (JSON), exactly one of:
        {"threadIds": ["<uuid>", ...]}
        {"messageIds": ["<message-id or row id>", ...]}
        """
        try:
            source = parse_folder_ref(request.GET.get("restoreFrom"), "restoreFrom")
            kind, ids = parse_batch_ids(request_body(request))
            data = TransitionService().restore_batch(request.user, kind, ids, source)
            return resp_ok(data, f"Restored from {data['restoredFrom']}")
        except Exception as e:
            return resp_mailbox_error(e, "BatchRestoreView.put")


class ArchiveMultipleView(APIView):
    """Move several threads or messages to Archive"""

    def post(self, request, *args, **kwargs):
        try:
            kind, ids = parse_batch_ids(request_body(request))
            data = TransitionService().move_batch(request.user, kind, ids, FolderTypeEnum.ARCHIVE)
            return resp_ok(data, "Archived successfully")
        except Exception as e:
            return resp_mailbox_error(e, "ArchiveMultipleView.post")


class RestoreMultipleFromArchiveView(APIView):
    """Restore several threads or messages out of Archive"""

    def post(self, request, *args, **kwargs):
        try:
            kind, ids = parse_batch_ids(request_body(request))
            data = TransitionService().restore_batch(request.user, kind, ids, FolderTypeEnum.ARCHIVE)
            return resp_ok(data, "Restored from Archive")
        except Exception as e:
            return resp_mailbox_error(e, "RestoreMultipleFromArchiveView.post")
