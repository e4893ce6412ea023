from django.db import models


class MailboxMessage(models.Model):
    """邮箱消息模型（一行即用户邮箱中的一封邮件）"""
    id = models.BigAutoField(primary_key=True)

    # 所属用户ID（由认证服务提供）
    user_id = models.UUIDField(db_index=True)

    # 会话ID（同一会话的邮件共享）
    thread_id = models.UUIDField(db_index=True)

    # 邮件唯一标识（Message-ID）
    message_id = models.CharField(max_length=512, db_index=True)

    # 当前文件夹显示名（与 folder_id 同步写入）
    folder = models.CharField(max_length=255)

    # 当前文件夹ID（通过程序维护关联关系）
    folder_id = models.BigIntegerField(db_index=True)

    # 来源类型（sent/draft/空=收件），用于恢复时推断原文件夹
    message_type = models.CharField(max_length=32, null=True, blank=True)

    # 发件人
    from_email = models.CharField(max_length=512, default="")

    # 收件人
    to_email = models.TextField(default="", blank=True)

    # 抄送
    cc = models.TextField(default="", blank=True)

    # 密送
    bcc = models.TextField(default="", blank=True)

    # 主题
    subject = models.TextField(default="", blank=True)

    # 正文（HTML）
    body = models.TextField(default="", blank=True)

    # 正文（文本）
    plain_text = models.TextField(default="", blank=True)

    # 回复的邮件 Message-ID
    in_reply_to = models.CharField(max_length=512, null=True, blank=True)

    # 是否已读
    is_read = models.BooleanField(default=False)

    # 是否星标
    is_starred = models.BooleanField(default=False)

    # 是否草稿
    is_draft = models.BooleanField(default=False)

    # 创建时间（UNIX时间戳，毫秒）
    ct = models.BigIntegerField(default=0, db_index=True)

    # 更新时间（UNIX时间戳，毫秒）
    ut = models.BigIntegerField(default=0, db_index=True)

    class Meta:
        db_table = "mailboxes"
        unique_together = [['user_id', 'message_id']]
        indexes = [
            models.Index(fields=['user_id', 'thread_id'], name='mailboxes_user_thread_idx'),
            models.Index(fields=['user_id', 'folder_id', 'ct'], name='mailboxes_user_folder_ct_idx'),
            models.Index(fields=['user_id', 'is_starred'], name='mailboxes_user_starred_idx'),
        ]
