"""
Signal handlers for django-blog-cms.

Every new SQLite connection is switched to write-ahead logging so that
readers keep working while a request writes.
"""
import logging

from django.db.backends.signals import connection_created
from django.dispatch import receiver

from .conf import blog_settings

logger = logging.getLogger(__name__)


@receiver(connection_created)
def configure_sqlite_connection(sender, connection, **kwargs):
    if connection.vendor != "sqlite":
        return

    with connection.cursor() as cursor:
        cursor.execute("PRAGMA foreign_keys = ON;")
        if blog_settings.SQLITE_WAL:
            cursor.execute("PRAGMA journal_mode = WAL;")
            logger.debug("Enabled WAL journal mode for %s", connection.alias)
