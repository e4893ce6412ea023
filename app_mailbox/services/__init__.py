from app_mailbox.services.folder_service import FolderService
from app_mailbox.services.transition_service import TransitionService
from app_mailbox.services.flag_service import FlagService
from app_mailbox.services.counter_service import CounterService
from app_mailbox.services.message_query_service import MessageQueryService
from app_mailbox.services.draft_service import DraftService

__all__ = [
    'FolderService',
    'TransitionService',
    'FlagService',
    'CounterService',
    'MessageQueryService',
    'DraftService',
]
