"""
Column types shared by every tenant table.

Rows run on Postgres in production and on SQLite in development and tests,
so ids and JSON documents (company settings, values, job board sources)
go through these decorators instead of dialect-specific types.
"""
from datetime import datetime, timezone
import json
import uuid

from sqlalchemy import TypeDecorator, CHAR, Text
from sqlalchemy.dialects.postgresql import UUID, JSONB


def utcnow() -> datetime:
    """Naive UTC timestamp, the form every DateTime column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _to_uuid(value) -> uuid.UUID:
    return value if isinstance(value, uuid.UUID) else uuid.UUID(str(value))


class GUID(TypeDecorator):
    """
    Primary and foreign keys.

    Native UUID on Postgres, 36-character text elsewhere. Bind parameters
    may be UUIDs or their string form (path parameters, JSON bodies).
    """
    impl = CHAR
    cache_ok = True

    def load_dialect_impl(self, dialect):
        native = dialect.name == "postgresql"
        return dialect.type_descriptor(UUID(as_uuid=True) if native else CHAR(36))

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        as_uuid = _to_uuid(value)
        return as_uuid if dialect.name == "postgresql" else str(as_uuid)

    def process_result_value(self, value, dialect):
        return None if value is None else _to_uuid(value)


class JSON(TypeDecorator):
    """JSONB document on Postgres, serialized text on SQLite."""
    impl = Text
    cache_ok = True

    def load_dialect_impl(self, dialect):
        return dialect.type_descriptor(JSONB() if dialect.name == "postgresql" else Text())

    def process_bind_param(self, value, dialect):
        if value is None or dialect.name == "postgresql":
            return value
        return json.dumps(value)

    def process_result_value(self, value, dialect):
        if value is None or dialect.name == "postgresql":
            return value
        return json.loads(value)
