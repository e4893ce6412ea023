from django.urls import path

from app_mailbox.enums.folder_type_enum import FolderTypeEnum
from app_mailbox.views.draft_view import (
    SaveDraftView,
    StoreSentView,
    DraftDetailView,
    DeleteDraftsView,
)
from app_mailbox.views.flag_view import (
    SetThreadReadView,
    SetMultipleReadView,
    SetStarredView,
    ToggleStarredView,
    SetThreadStarredView,
    SetMultipleStarredView,
)
from app_mailbox.views.folder_view import (
    FolderListView,
    FolderDetailView,
    FolderProvisionView,
)
from app_mailbox.views.message_view import (
    MessageListView,
    StarredListView,
    CountsView,
    ThreadView,
    MessageDetailView,
    DeleteMultipleView,
)
from app_mailbox.views.transition_view import (
    MoveMessageView,
    MoveThreadView,
    RestoreMessageView,
    RestoreThreadView,
    BatchMoveView,
    BatchRestoreView,
    ArchiveMultipleView,
    RestoreMultipleFromArchiveView,
)

# URL patterns for mailbox REST API
# message refs are a database row id or a protocol Message-ID, thread ids are UUIDs

urlpatterns = [
    # Folder directory
    path('folders', FolderListView.as_view(), name='mail-folder-list'),
    path('folders/provision', FolderProvisionView.as_view(), name='mail-folder-provision'),
    path('folders/<int:folder_id>', FolderDetailView.as_view(), name='mail-folder-detail'),
    # Read views
    path('counts', CountsView.as_view(), name='mail-counts'),
    path('messages', MessageListView.as_view(), name='mail-message-list'),
    path('starred', StarredListView.as_view(), name='mail-starred-list'),
    path('threads/<uuid:thread_id>', ThreadView.as_view(), name='mail-thread'),
    # Single message moves
    path('move-to-trash/<path:message_ref>',
         MoveMessageView.as_view(target=FolderTypeEnum.TRASH), name='mail-move-to-trash'),
    path('move-to-spam/<path:message_ref>',
         MoveMessageView.as_view(target=FolderTypeEnum.SPAM), name='mail-move-to-spam'),
    path('move-to-archive/<path:message_ref>',
         MoveMessageView.as_view(target=FolderTypeEnum.ARCHIVE), name='mail-move-to-archive'),
    path('restore-from-trash/<path:message_ref>',
         RestoreMessageView.as_view(source=FolderTypeEnum.TRASH), name='mail-restore-from-trash'),
    path('restore-from-archive/<path:message_ref>',
         RestoreMessageView.as_view(source=FolderTypeEnum.ARCHIVE), name='mail-restore-from-archive'),
    # Thread moves
    path('move-thread-to-trash/<uuid:thread_id>',
         MoveThreadView.as_view(target=FolderTypeEnum.TRASH), name='mail-move-thread-to-trash'),
    path('move-thread-to-spam/<uuid:thread_id>',
         MoveThreadView.as_view(target=FolderTypeEnum.SPAM), name='mail-move-thread-to-spam'),
    path('move-thread-to-archive/<uuid:thread_id>',
         MoveThreadView.as_view(target=FolderTypeEnum.ARCHIVE), name='mail-move-thread-to-archive'),
    path('restore-thread-from-trash/<uuid:thread_id>',
         RestoreThreadView.as_view(source=FolderTypeEnum.TRASH), name='mail-restore-thread-from-trash'),
    path('restore-thread-from-archive/<uuid:thread_id>',
         RestoreThreadView.as_view(source=FolderTypeEnum.ARCHIVE), name='mail-restore-thread-from-archive'),
    # Batch transitions
    path('folder-or-thread/move', BatchMoveView.as_view(), name='mail-batch-move'),
    path('restore', BatchRestoreView.as_view(), name='mail-batch-restore'),
    path('archive-multiple', ArchiveMultipleView.as_view(), name='mail-archive-multiple'),
    path('restore-multiple-from-archive', RestoreMultipleFromArchiveView.as_view(),
         name='mail-restore-multiple-from-archive'),
    # Hard deletes
    path('delete-multiple', DeleteMultipleView.as_view(), name='mail-delete-multiple'),
    path('messages/<path:message_ref>', MessageDetailView.as_view(), name='mail-message-detail'),
    # Flags
    path('set-isread/<uuid:thread_id>', SetThreadReadView.as_view(), name='mail-set-isread'),
    path('set-multiple-isread', SetMultipleReadView.as_view(), name='mail-set-multiple-isread'),
    path('set-starred/<path:message_ref>', SetStarredView.as_view(), name='mail-set-starred'),
    path('toggle-starred/<path:message_ref>', ToggleStarredView.as_view(), name='mail-toggle-starred'),
    path('set-thread-starred/<uuid:thread_id>', SetThreadStarredView.as_view(), name='mail-set-thread-starred'),
    path('set-multiple-starred', SetMultipleStarredView.as_view(), name='mail-set-multiple-starred'),
    # Drafts
    path('save-draft', SaveDraftView.as_view(), name='mail-save-draft'),
    path('store-sent', StoreSentView.as_view(), name='mail-store-sent'),
    path('drafts/<path:message_ref>', DraftDetailView.as_view(), name='mail-draft-detail'),
    path('delete-drafts', DeleteDraftsView.as_view(), name='mail-delete-drafts'),
]
