from django.db import models

from app_mailbox.enums.folder_type_enum import FolderTypeEnum


class Folder(models.Model):
    """邮件文件夹模型"""
    folder_id = models.BigAutoField(primary_key=True)

    # 所属用户ID（由认证服务提供）
    user_id = models.UUIDField(db_index=True)

    # 文件夹名称（系统文件夹使用标准显示名，如：Inbox, Sent）
    name = models.CharField(max_length=255)

    # 文件夹类型（inbox/sent/drafts/trash/spam/archive/custom）
    type = models.CharField(max_length=16, choices=FolderTypeEnum.choices(),
                            default=FolderTypeEnum.CUSTOM.value)

    # 父文件夹ID（仅自定义文件夹，通过程序维护关联关系）
    parent_id = models.BigIntegerField(null=True, blank=True)

    # 颜色（#RRGGBB）
    color = models.CharField(max_length=7, null=True, blank=True)

    # 图标
    icon = models.CharField(max_length=64, null=True, blank=True)

    # 排序
    sort_order = models.IntegerField(default=0)

    # 是否同步
    sync_enabled = models.BooleanField(default=True)

    # 创建时间（UNIX时间戳，毫秒）
    ct = models.BigIntegerField(default=0, db_index=True)

    # 更新时间（UNIX时间戳，毫秒）
    ut = models.BigIntegerField(default=0, db_index=True)

    class Meta:
        db_table = "folders"
        indexes = [
            models.Index(fields=['user_id', 'type'], name='folders_user_type_idx'),
            models.Index(fields=['user_id', 'name'], name='folders_user_name_idx'),
        ]

    @property
    def folder_type(self) -> FolderTypeEnum:
        return FolderTypeEnum(self.type)

    @property
    def display_name(self) -> str:
        """Name written to messages moved into this folder"""
        folder_type = self.folder_type
        if folder_type.is_system:
            return folder_type.display_name
        return self.name
