"""
Column types shared by the table models.
"""
from sqlalchemy.types import DateTime, TypeDecorator

from tailorbook.core.timeutils import as_utc


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware UTC datetimes on every backend.

    Values are written as naive UTC so SQLite and MySQL, which drop the
    offset, store the same instant PostgreSQL does. Values read back always
    carry ``timezone.utc``.
    """
    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return as_utc(value).replace(tzinfo=None)

    def process_result_value(self, value, dialect):
        return as_utc(value)
