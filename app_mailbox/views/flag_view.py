"""
Read / starred flag REST API views

A target already in the requested state answers 200 with "unchanged": true.
"""
import logging

from rest_framework.views import APIView

from app_mailbox.enums.id_kind_enum import IdKindEnum
from app_mailbox.services.flag_service import FlagService
from app_mailbox.services.request_validator import (
    parse_thread_id,
    parse_message_ref,
    parse_batch_ids,
    require_bool,
)
from app_mailbox.views.view_util import resp_mailbox_error, request_body
from common.utils.http_util import resp_ok

logger = logging.getLogger(__name__)


def _flag_message(data: dict, changed: str, unchanged: str) -> str:
    return unchanged if data.get('unchanged') else changed


class SetThreadReadView(APIView):
    """Mark a thread read or unread"""

    def post(self, request, thread_id, *args, **kwargs):
        """
        Request body (JSON):
        {"is_read": true}
        """
        try:
            is_read = require_bool(request_body(request), 'is_read')
            data = FlagService().set_thread_read(request.user, parse_thread_id(str(thread_id)), is_read)
            return resp_ok(data, _flag_message(data, "Read status updated", "Read status already set"))
        except Exception as e:
            return resp_mailbox_error(e, "SetThreadReadView.post")


class SetMultipleReadView(APIView):
    """Mark several threads read or unread"""

    def post(self, request, *args, **kwargs):
        """
        Request body (JSON):
        {"is_read": true, "threadIds": ["<uuid>", ...]}
        """
        try:
            body = request_body(request)
            is_read = require_bool(body, 'is_read')
            _, thread_ids = parse_batch_ids(body, allowed=(IdKindEnum.THREAD,))
            data = FlagService().set_threads_read(request.user, thread_ids, is_read)
            return resp_ok(data, _flag_message(data, "Read status updated", "Read status already set"))
        except Exception as e:
            return resp_mailbox_error(e, "SetMultipleReadView.post")


class SetStarredView(APIView):
    """Star or unstar one message"""

    def post(self, request, message_ref, *args, **kwargs):
        """
        Request body (JSON):
        {"is_starred": true}
        """
        try:
            is_starred = require_bool(request_body(request), 'is_starred')
            data = FlagService().set_message_starred(request.user, parse_message_ref(message_ref), is_starred)
            return resp_ok(data, _flag_message(data, "Starred status updated", "Starred status already set"))
        except Exception as e:
            return resp_mailbox_error(e, "SetStarredView.post")


class ToggleStarredView(APIView):
    """Flip the starred state of one message"""

    def post(self, request, message_ref, *args, **kwargs):
        try:
            data = FlagService().toggle_message_starred(request.user, parse_message_ref(message_ref))
            return resp_ok(data, "Email starred" if data['is_starred'] else "Email unstarred")
        except Exception as e:
            return resp_mailbox_error(e, "ToggleStarredView.post")


class SetThreadStarredView(APIView):
    """Star or unstar every message of a thread"""

    def post(self, request, thread_id, *args, **kwargs):
        try:
            is_starred = require_bool(request_body(request), 'is_starred')
            data = FlagService().set_starred_batch(
                request.user,
                IdKindEnum.THREAD,
                [parse_thread_id(str(thread_id))],
                is_starred
            )
            return resp_ok(data, _flag_message(data, "Starred status updated", "Starred status already set"))
        except Exception as e:
            return resp_mailbox_error(e, "SetThreadStarredView.post")


class SetMultipleStarredView(APIView):
    """Star or unstar several threads or messages"""

    def post(self, request, *args, **kwargs):
        """
        Request body (JSON):
        {"is_starred": true, "threadIds": [...]} or {"is_starred": true, "messageIds": [...]}
        """
        try:
            body = request_body(request)
            is_starred = require_bool(body, 'is_starred')
            kind, ids = parse_batch_ids(body)
            data = FlagService().set_starred_batch(request.user, kind, ids, is_starred)
            return resp_ok(data, _flag_message(data, "Starred status updated", "Starred status already set"))
        except Exception as e:
            return resp_mailbox_error(e, "SetMultipleStarredView.post")
