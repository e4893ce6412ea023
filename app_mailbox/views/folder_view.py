"""
Folder REST API views

Views are responsible for HTTP request/response handling only.
Business logic is handled by FolderService.
"""
import logging

from rest_framework import status as http_status
from rest_framework.views import APIView

from app_mailbox.services.folder_service import FolderService
from app_mailbox.services.request_validator import parse_int
from app_mailbox.views.view_util import resp_mailbox_error, request_body
from common.utils.http_util import resp_ok

logger = logging.getLogger(__name__)


class FolderListView(APIView):
    """List folders and create custom folders of the caller"""

    def get(self, request, *args, **kwargs):
        """
        List folders

        Query parameters:
        - type: Only folders of this type (optional)
        """
        try:
            folders = FolderService().list_folders(request.user.user_id, request.GET.get("type"))
            return resp_ok(folders)
        except Exception as e:
            return resp_mailbox_error(e, "FolderListView.get")

    def post(self, request, *args, **kwargs):
        """
        Create a custom folder

        Request body (JSON):
        {
            "name": "Receipts",     # Required
            "parent_id": 12,        # Optional
            "color": "#FFAA00",     # Optional
            "icon": "receipt",      # Optional
            "sort_order": 0,        # Optional
            "sync_enabled": true    # Optional
        }
        """
        try:
            data = request_body(request)
            folder = FolderService().create_custom_folder(
                user_id=request.user.user_id,
                name=data.get('name'),
                parent_id=data.get('parent_id'),
                color=data.get('color'),
                icon=data.get('icon'),
                sort_order=data.get('sort_order', 0),
                sync_enabled=data.get('sync_enabled', True),
            )
            return resp_ok(folder, "Folder created successfully", status=http_status.HTTP_201_CREATED)
        except Exception as e:
            return resp_mailbox_error(e, "FolderListView.post")


class FolderDetailView(APIView):
    """Rename and delete a custom folder"""

    def put(self, request, folder_id, *args, **kwargs):
        """
        Rename a custom folder

        Request body (JSON):
        {
            "name": "NewName"   # Required
        }
        """
        try:
            folder = FolderService().rename_custom_folder(
                request.user.user_id,
                parse_int(folder_id, "folder_id"),
                request_body(request).get('name'),
            )
            return resp_ok(folder, "Folder name updated successfully")
        except Exception as e:
            return resp_mailbox_error(e, "FolderDetailView.put")

    def delete(self, request, folder_id, *args, **kwargs):
        try:
            data = FolderService().delete_custom_folder(request.user.user_id, parse_int(folder_id, "folder_id"))
            return resp_ok(data, "Folder permanently deleted")
        except Exception as e:
            return resp_mailbox_error(e, "FolderDetailView.delete")


class FolderProvisionView(APIView):
    """Create the missing system folders of the caller"""

    def post(self, request, *args, **kwargs):
        try:
            data = FolderService().provision_system_folders(request.user.user_id)
            return resp_ok(data, "System folders provisioned")
        except Exception as e:
            return resp_mailbox_error(e, "FolderProvisionView.post")
