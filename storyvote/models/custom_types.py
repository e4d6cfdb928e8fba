"""
Custom SQLAlchemy column types shared by the models.
"""

import uuid

from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.types import TypeDecorator, String


class UUIDType(TypeDecorator):
    """
    UUID column that works on both PostgreSQL and SQLite.

    PostgreSQL gets its native UUID type; every other dialect stores the
    canonical 36-character string. Values always come back as ``uuid.UUID``.
    """

    impl = String
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            return dialect.type_descriptor(UUID())
        return dialect.type_descriptor(String(36))

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        if not isinstance(value, uuid.UUID):
            # Validates the format as a side effect
            value = uuid.UUID(str(value))
        if dialect.name == 'postgresql':
            return value
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None or isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(str(value))
