"""
Draft service

This service handles the draft lifecycle of a user:
- Save a draft (create in Drafts, or update the caller's existing draft)
- Store a sent message, converting the matching draft in place (same row)
- Delete drafts

Replies (in_reply_to) join the thread of the replied message.
"""
import logging
import uuid
from typing import Dict, Any, List, Optional

from django.db.models import Q

from app_mailbox.config import MAILBOX_DB_ALIAS, get_app_config
from app_mailbox.enums.folder_type_enum import FolderTypeEnum
from app_mailbox.enums.id_kind_enum import IdKindEnum
from app_mailbox.enums.message_type_enum import MessageTypeEnum
from app_mailbox.exceptions.message_not_found_exception import MessageNotFoundException
from app_mailbox.exceptions.partial_not_found_exception import PartialNotFoundException
from app_mailbox.exceptions.validation_exception import ValidationException
from app_mailbox.pojo.message_ref import MessageRef
from app_mailbox.repos import (
    folder_fields,
    lock_messages,
    delete_by_ids,
    get_message,
    get_thread_id_of_message,
    create_message,
    update_message,
)
from app_mailbox.services.atomic_operation import atomic_operation
from app_mailbox.services.folder_service import FolderService
from app_mailbox.services.message_query_service import message_to_dict
from app_mailbox.services.transition_service import find_missing_ids
from common.components.singleton import Singleton
from common.pojo.caller_identity import CallerIdentity

logger = logging.getLogger(__name__)

CONTENT_FIELDS = ('to_email', 'cc', 'bcc', 'subject', 'body', 'plain_text')
RECIPIENT_FIELDS = ('to_email', 'cc', 'bcc')


def read_content(payload: Dict[str, Any]) -> Dict[str, str]:
    """
    Content columns of a draft/sent payload, missing values become empty strings

    Raises:
        ValidationException: if a value is not a string
    """
    content = {}
    for field in CONTENT_FIELDS:
        value = payload.get(field)
        if value is None:
            value = ""
        if not isinstance(value, str):
            raise ValidationException(f"'{field}' must be a string")
        content[field] = value
    return content


class DraftService(Singleton):
    """Draft and sent bookkeeping service"""

    def __init__(self, using: str = MAILBOX_DB_ALIAS, mail_domain: str = None):
        self.using = using
        self.mail_domain = mail_domain or get_app_config()['mail_domain']
        self.folder_service = FolderService(using)

    def generate_message_id(self) -> str:
        return f"<{uuid.uuid4()}@{self.mail_domain}>"

    def _resolve_thread_id(self, caller: CallerIdentity, payload: Dict[str, Any]) -> uuid.UUID:
        in_reply_to = payload.get('in_reply_to')
        if in_reply_to:
            thread_id = get_thread_id_of_message(caller.user_id, in_reply_to, using=self.using)
            if thread_id is not None:
                return thread_id

        raw = payload.get('thread_id')
        if raw:
            try:
                return raw if isinstance(raw, uuid.UUID) else uuid.UUID(str(raw))
            except ValueError:
                raise ValidationException("Invalid UUID format in thread ID", details={"thread_id": raw})
        return uuid.uuid4()

    def save_draft(self, caller: CallerIdentity, payload: Dict[str, Any], message_ref: Optional[MessageRef] = None) \
            -> Dict[str, Any]:
        """
        Create a draft, or update the caller's draft matched by message_ref

        Returns:
            Dictionary with 'created' and the draft

        Raises:
            ValidationException: if the draft is empty
            MessageNotFoundException: if message_ref does not match a draft of the caller
            FolderNotConfiguredException: if the Drafts folder is missing
        """
        content = read_content(payload)
        if not any(content.values()):
            raise ValidationException("Draft is empty", details={"fields": list(CONTENT_FIELDS)})

        with atomic_operation("save draft", self.using):
            drafts = self.folder_service.get_system_folder(caller.user_id, FolderTypeEnum.DRAFTS)
            if message_ref is not None:
                draft = get_message(caller.user_id, message_ref, is_draft=True, for_update=True, using=self.using)
                if draft is None:
                    raise MessageNotFoundException(message_ref, "Draft not found")
                draft = update_message(draft, using=self.using, **content)
                created = False
            else:
                draft = create_message(
                    caller.user_id,
                    using=self.using,
                    thread_id=self._resolve_thread_id(caller, payload),
                    message_id=self.generate_message_id(),
                    message_type=MessageTypeEnum.DRAFT.value,
                    from_email=caller.email,
                    in_reply_to=payload.get('in_reply_to') or None,
                    is_draft=True,
                    is_read=True,
                    **folder_fields(drafts),
                    **content
                )
                created = True

        logger.info(f"[DraftService.save_draft] {'Created' if created else 'Updated'} draft {draft.message_id}, "
                    f"user_id={caller.user_id}")
        return {'created': created, 'draft': message_to_dict(draft)}

    def store_sent_message(
            self,
            caller: CallerIdentity,
            payload: Dict[str, Any],
            message_ref: Optional[MessageRef] = None
    ) -> Dict[str, Any]:
        """
        Record a sent message in Sent

        A draft matched by message_ref is converted in place: same row, is_draft cleared,
        folder Sent and message_type 'sent' written together with the refreshed content.

        Returns:
            Dictionary with 'converted' and the message

        Raises:
            ValidationException: if there is no recipient, or message_ref is already sent
            MessageNotFoundException: if message_ref is a row id that does not resolve
            FolderNotConfiguredException: if the Sent folder is missing
        """
        content = read_content(payload)
        if not any(content[field].strip() for field in RECIPIENT_FIELDS):
            raise ValidationException("At least one recipient is required")

        with atomic_operation("store sent email", self.using):
            sent = self.folder_service.get_system_folder(caller.user_id, FolderTypeEnum.SENT)
            existing = None
            if message_ref is not None:
                existing = get_message(caller.user_id, message_ref, for_update=True, using=self.using)
                if existing is None and message_ref.is_row_id:
                    raise MessageNotFoundException(message_ref)
                if existing is not None and not existing.is_draft:
                    raise ValidationException("Message has already been sent",
                                              details={"message_id": existing.message_id})

            sent_fields = {
                'message_type': MessageTypeEnum.SENT.value,
                'is_draft': False,
                'is_read': True,
                **folder_fields(sent),
                **content,
            }
            if existing is not None:
                message = update_message(existing, using=self.using, **sent_fields)
            else:
                message = create_message(
                    caller.user_id,
                    using=self.using,
                    thread_id=self._resolve_thread_id(caller, payload),
                    message_id=str(message_ref) if message_ref is not None else self.generate_message_id(),
                    from_email=caller.email,
                    in_reply_to=payload.get('in_reply_to') or None,
                    **sent_fields
                )

        logger.info(f"[DraftService.store_sent_message] Stored {message.message_id}, "
                    f"converted={existing is not None}, user_id={caller.user_id}")
        return {'converted': existing is not None, 'message': message_to_dict(message)}

    def delete_draft(self, caller: CallerIdentity, message_ref: MessageRef) -> Dict[str, Any]:
        """
        Permanently delete one draft

        Raises:
            MessageNotFoundException: if message_ref does not match a draft of the caller
        """
        with atomic_operation("delete draft", self.using):
            rows = lock_messages(caller.user_id, refs=[message_ref], extra_q=Q(is_draft=True), using=self.using)
            if not rows:
                raise MessageNotFoundException(message_ref, "Draft not found")
            deleted = delete_by_ids(caller.user_id, [row['id'] for row in rows], using=self.using)

        logger.info(f"[DraftService.delete_draft] Deleted {message_ref}, user_id={caller.user_id}")
        return {'message_id': str(message_ref), 'deleted': deleted}

    def delete_drafts(self, caller: CallerIdentity, message_refs: List[MessageRef]) -> Dict[str, Any]:
        """
        Permanently delete several drafts, all or nothing

        Raises:
            PartialNotFoundException: if any ref is not a draft of the caller, nothing is deleted
        """
        with atomic_operation("delete drafts", self.using):
            rows = lock_messages(caller.user_id, refs=message_refs, extra_q=Q(is_draft=True), using=self.using)
            missing = find_missing_ids(IdKindEnum.MESSAGE, message_refs, rows)
            if missing:
                logger.warning(f"[DraftService.delete_drafts] {len(missing)} drafts not found, "
                               f"user_id={caller.user_id}")
                raise PartialNotFoundException(missing, id_key=IdKindEnum.MESSAGE.value)
            deleted = delete_by_ids(caller.user_id, [row['id'] for row in rows], using=self.using)

        logger.info(f"[DraftService.delete_drafts] Deleted {deleted} drafts, user_id={caller.user_id}")
        return {'deleted': deleted, 'message_ids': [row['message_id'] for row in rows]}
