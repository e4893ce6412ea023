"""
Message REST API views

Listings, counts, thread summary and hard deletes.
"""
import logging

from rest_framework.views import APIView

from app_mailbox.services.counter_service import CounterService
from app_mailbox.services.message_query_service import MessageQueryService
from app_mailbox.services.request_validator import (
    parse_thread_id,
    parse_message_ref,
    parse_folder_ref,
    parse_batch_ids,
    parse_int,
)
from app_mailbox.services.transition_service import TransitionService
from app_mailbox.views.view_util import resp_mailbox_error, request_body
from common.utils.http_util import resp_ok

logger = logging.getLogger(__name__)


class MessageListView(APIView):
    """List messages of a folder"""

    def get(self, request, *args, **kwargs):
        """
        Query parameters:
        - folder: Folder name, system type or folder id (required)
        - offset: Pagination offset (default: 0)
        - limit: Pagination limit (default: 20, max: 1000)
        """
        try:
            folder_ref = parse_folder_ref(request.GET.get("folder"), "folder")
            page_data = MessageQueryService().list_folder_messages(
                request.user,
                folder_ref,
                offset=parse_int(request.GET.get("offset"), "offset", 0),
                limit=parse_int(request.GET.get("limit"), "limit"),
            )
            return resp_ok(page_data)
        except Exception as e:
            return resp_mailbox_error(e, "MessageListView.get")


class StarredListView(APIView):
    """List starred messages"""

    def get(self, request, *args, **kwargs):
        try:
            page_data = MessageQueryService().list_starred_messages(
                request.user,
                offset=parse_int(request.GET.get("offset"), "offset", 0),
                limit=parse_int(request.GET.get("limit"), "limit"),
            )
            return resp_ok(page_data)
        except Exception as e:
            return resp_mailbox_error(e, "StarredListView.get")


class CountsView(APIView):
    """Per-folder and thread counts of the caller"""

    def get(self, request, *args, **kwargs):
        try:
            return resp_ok(CounterService().get_counts(request.user.user_id))
        except Exception as e:
            return resp_mailbox_error(e, "CountsView.get")


class ThreadView(APIView):
    """Thread summary and hard delete"""

    def get(self, request, thread_id, *args, **kwargs):
        try:
            data = CounterService().get_thread_summary(request.user, parse_thread_id(str(thread_id)))
            return resp_ok(data)
        except Exception as e:
            return resp_mailbox_error(e, "ThreadView.get")

    def delete(self, request, thread_id, *args, **kwargs):
        try:
            data = TransitionService().delete_thread(request.user, parse_thread_id(str(thread_id)))
            return resp_ok(data, "Thread permanently deleted")
        except Exception as e:
            return resp_mailbox_error(e, "ThreadView.delete")


class MessageDetailView(APIView):
    """Hard delete one message"""

    def delete(self, request, message_ref, *args, **kwargs):
        try:
            data = TransitionService().delete_message(request.user, parse_message_ref(message_ref))
            return resp_ok(data, "Email permanently deleted")
        except Exception as e:
            return resp_mailbox_error(e, "MessageDetailView.delete")


class DeleteMultipleView(APIView):
    """Hard delete several threads or messages"""

    def post(self, request, *args, **kwargs):
        """
        Request body (JSON), exactly one of:
        {"threadIds": ["<uuid>", ...]}
        {"messageIds": ["<message-id or row id>", ...]}
        """
        try:
            kind, ids = parse_batch_ids(request_body(request))
            data = TransitionService().delete_batch(request.user, kind, ids)
            return resp_ok(data, "Permanently deleted")
        except Exception as e:
            return resp_mailbox_error(e, "DeleteMultipleView.post")
