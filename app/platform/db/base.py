from datetime import datetime, timezone

import sqlalchemy
from sqlalchemy import Column, String
from sqlalchemy.orm import declarative_base
from uuid_extension import uuid7

Base = declarative_base()


def _now() -> datetime:
    return datetime.now(timezone.utc)


class BaseModel(Base):
    """Common columns: time-ordered string id plus created/updated stamps."""

    __abstract__ = True
    id = Column(String, primary_key=True, default=lambda: str(uuid7()), index=True)
    # Python-side defaults keep microseconds, so "newest first" listings are stable
    created_at = Column(
        sqlalchemy.DateTime(timezone=True),
        default=_now,
        server_default=sqlalchemy.func.now(),
        nullable=False,
    )
    updated_at = Column(
        sqlalchemy.DateTime(timezone=True),
        default=_now,
        server_default=sqlalchemy.func.now(),
        onupdate=_now,
        nullable=False,
    )


# Models import Base from here; app/platform/db/models.py imports every model for metadata.
