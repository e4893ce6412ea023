from enum import Enum


class IdKindEnum(Enum):
    """What the ids of a batch request refer to"""
    THREAD = "threadIds"
    MESSAGE = "messageIds"
