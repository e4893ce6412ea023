"""
Request validation

Turns raw request values into typed arguments for the services.
Everything here runs before any query, failures raise ValidationException (400).
"""
import uuid
from typing import List, Optional, Tuple, Union

from app_mailbox.enums.id_kind_enum import IdKindEnum
from app_mailbox.exceptions.validation_exception import ValidationException
from app_mailbox.pojo.folder_ref import FolderRef
from app_mailbox.pojo.message_ref import MessageRef
from common.utils.http_util import with_type

# upper bound of ids accepted by one batch request
MAX_BATCH_SIZE = 1000


def parse_thread_id(raw) -> uuid.UUID:
    if isinstance(raw, uuid.UUID):
        return raw
    if not isinstance(raw, str) or not raw.strip():
        raise ValidationException("Thread ID is required")
    try:
        return uuid.UUID(raw.strip())
    except ValueError:
        raise ValidationException("Invalid UUID format in thread ID", details={"thread_id": raw})


def parse_message_ref(raw) -> MessageRef:
    try:
        return MessageRef.parse(raw)
    except ValueError as e:
        raise ValidationException(str(e))


def parse_folder_ref(raw, param: str) -> FolderRef:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise ValidationException(
            "Folder not specified",
            details=f"Please provide a '{param}' parameter (e.g., ?{param}=Spam)",
        )
    try:
        return FolderRef.parse(raw)
    except ValueError as e:
        raise ValidationException(str(e))


def require_bool(data, key: str) -> bool:
    value = data.get(key) if hasattr(data, "get") else None
    if not isinstance(value, bool):
        raise ValidationException(f"'{key}' must be true or false")
    return value


def parse_batch_ids(data, allowed=(IdKindEnum.THREAD, IdKindEnum.MESSAGE)) \
        -> Tuple[IdKindEnum, List[Union[uuid.UUID, MessageRef]]]:
    """
    Read exactly one of threadIds / messageIds from a request body

    Returns:
        (kind, ids) with duplicates removed, order kept.
        Thread ids are UUIDs, message ids are MessageRef.
    """
    if not hasattr(data, "get"):
        raise ValidationException("Request body must be a JSON object")

    present = [kind for kind in allowed if data.get(kind.value) is not None]
    expected = " or ".join(kind.value for kind in allowed)
    if not present:
        raise ValidationException(f"{expected} array is required and must not be empty")
    if len(present) > 1:
        raise ValidationException(f"Provide only one of {expected}")

    kind = present[0]
    raw_ids = data.get(kind.value)
    if not isinstance(raw_ids, list) or len(raw_ids) == 0:
        raise ValidationException(f"{kind.value} array is required and must not be empty")
    if len(raw_ids) > MAX_BATCH_SIZE:
        raise ValidationException(f"{kind.value} cannot contain more than {MAX_BATCH_SIZE} items")

    if kind is IdKindEnum.THREAD:
        ids = []
        invalid = []
        for raw in raw_ids:
            try:
                ids.append(uuid.UUID(raw.strip()) if isinstance(raw, str) else uuid.UUID(str(raw)))
            except (ValueError, AttributeError):
                invalid.append(raw)
        if invalid:
            raise ValidationException(
                "Invalid UUID format in thread IDs",
                details=f"These IDs are not valid UUIDs: {', '.join(str(i) for i in invalid)}",
            )
    else:
        try:
            ids = [MessageRef.parse(raw) for raw in raw_ids]
        except ValueError as e:
            raise ValidationException(str(e))

    return kind, list(dict.fromkeys(ids))


def parse_int(raw, name: str, default: Optional[int] = None) -> Optional[int]:
    """
    Read a non-negative integer from a query/body value
    """
    if raw is None or raw == "":
        return default
    try:
        value = with_type(raw) if isinstance(raw, str) else raw
    except ValueError:
        raise ValidationException(f"'{name}' must be a non-negative integer")
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise ValidationException(f"'{name}' must be a non-negative integer")
    return value
