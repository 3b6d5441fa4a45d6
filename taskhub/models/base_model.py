"""
Base model with the columns every table shares.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column

from taskhub.db.base import Base
from taskhub.utils.time import utc_now

# Column width of task and subtask titles
TITLE_MAX_LENGTH = 255


class TimestampedModel(Base):
    """
    Abstract base for all tables.

    Provides an integer primary key and created/updated timestamps.
    """

    __abstract__ = True

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
    )
