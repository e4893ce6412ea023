import logging

from app_mailbox.exceptions.mailbox_exception import MailboxException
from common.consts.response_const import RET_UNKNOWN
from common.utils.http_util import resp_err, resp_exception

logger = logging.getLogger(__name__)


def resp_mailbox_error(e: Exception, where: str):
    """
    Error envelope of an exception raised while serving a mailbox request

    Mailbox exceptions carry their own code and HTTP status,
    anything else is logged and answered with 500.
    """
    if isinstance(e, MailboxException):
        if e.http_status >= 500:
            logger.error(f"[{where}] {e.message}")
        else:
            logger.warning(f"[{where}] {e.message}")
        return resp_err(e.message, code=e.code, status=e.http_status, details=e.details,
                        always_details=e.public_details)

    logger.exception(f"[{where}] Unexpected error: {e}")
    return resp_exception(e, code=RET_UNKNOWN)


def request_body(request) -> dict:
    data = request.data if hasattr(request, 'data') else request.POST
    return data if hasattr(data, 'get') else {}
