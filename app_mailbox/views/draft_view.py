"""
Draft REST API views

Business logic is handled by DraftService.
"""
import logging

from rest_framework import status as http_status
from rest_framework.views import APIView

from app_mailbox.enums.id_kind_enum import IdKindEnum
from app_mailbox.services.draft_service import DraftService
from app_mailbox.services.request_validator import parse_message_ref, parse_batch_ids
from app_mailbox.views.view_util import resp_mailbox_error, request_body
from common.utils.http_util import resp_ok

logger = logging.getLogger(__name__)


def _optional_message_ref(body: dict):
    raw = body.get('message_id')
    if raw is None or raw == "":
        return None
    return parse_message_ref(raw)


class SaveDraftView(APIView):
    """Create or update a draft"""

    def post(self, request, *args, **kwargs):
        """
        Request body (JSON):
        {
            "message_id": "<...>",      # Optional, updates this draft
            "thread_id": "<uuid>",      # Optional
            "in_reply_to": "<...>",     # Optional, joins the replied thread
            "to_email": "...", "cc": "...", "bcc": "...",
            "subject": "...", "body": "...", "plain_text": "..."
        }
        """
        try:
            body = request_body(request)
            data = DraftService().save_draft(request.user, body, _optional_message_ref(body))
            if data['created']:
                return resp_ok(data, "Draft saved", status=http_status.HTTP_201_CREATED)
            return resp_ok(data, "Draft updated")
        except Exception as e:
            return resp_mailbox_error(e, "SaveDraftView.post")


class StoreSentView(APIView):
    """Record a sent message, converting its draft in place"""

    def post(self, request, *args, **kwargs):
        try:
            body = request_body(request)
            data = DraftService().store_sent_message(request.user, body, _optional_message_ref(body))
            return resp_ok(data, "Email stored in Sent")
        except Exception as e:
            return resp_mailbox_error(e, "StoreSentView.post")


class DraftDetailView(APIView):
    """Delete one draft"""

    def delete(self, request, message_ref, *args, **kwargs):
        try:
            data = DraftService().delete_draft(request.user, parse_message_ref(message_ref))
            return resp_ok(data, "Draft deleted")
        except Exception as e:
            return resp_mailbox_error(e, "DraftDetailView.delete")


class DeleteDraftsView(APIView):
    """Delete several drafts"""

    def post(self, request, *args, **kwargs):
        """
        Request body (JSON):
        {"messageIds": ["<message-id or row id>", ...]}
        """
        try:
            _, refs = parse_batch_ids(request_body(request), allowed=(IdKindEnum.MESSAGE,))
            data = DraftService().delete_drafts(request.user, refs)
            return resp_ok(data, "Drafts deleted")
        except Exception as e:
            return resp_mailbox_error(e, "DeleteDraftsView.post")
