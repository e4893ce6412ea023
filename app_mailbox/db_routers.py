"""
Database router sending every app_mailbox model to MAILBOX_DB_ALIAS.

Django's own apps (auth, sessions, contenttypes) stay on the default database.
"""
from app_mailbox.config import MAILBOX_DB_ALIAS


class ReadWriteRouter:
    app_label = "app_mailbox"

    def _alias_of(self, model):
        return MAILBOX_DB_ALIAS if model._meta.app_label == self.app_label else None

    def db_for_read(self, model, **hints):
        return self._alias_of(model)

    def db_for_write(self, model, **hints):
        return self._alias_of(model)

    def allow_relation(self, obj1, obj2, **hints):
        # folders and messages only ever reference each other
        labels = {obj1._meta.app_label, obj2._meta.app_label}
        if self.app_label in labels:
            return labels == {self.app_label}
        return None

    def allow_migrate(self, db, app_label, model_name=None, **hints):
        if app_label == self.app_label:
            return db == MAILBOX_DB_ALIAS
        if db == MAILBOX_DB_ALIAS:
            return False
        return None
