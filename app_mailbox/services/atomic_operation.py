import logging
from contextlib import contextmanager

from django.db import DatabaseError, transaction

from app_mailbox.exceptions.transaction_failure_exception import TransactionFailureException

logger = logging.getLogger(__name__)


@contextmanager
def atomic_operation(operation: str, using: str):
    """
    Run a block in one transaction on the given alias

    Commit on success, rollback on any error. Mailbox exceptions propagate as is,
    unexpected database errors are re-raised as TransactionFailureException.
    """
    try:
        with transaction.atomic(using=using):
            yield
    except DatabaseError as e:
        logger.exception(f"[atomic_operation] Failed to {operation}: {e}")
        raise TransactionFailureException(operation, e) from e
