from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column

from src.models.base import Base


def _utcnow() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


class Snapshot(Base):
    """Pasted holdings snapshot plus whatever the dashboard computed from it."""

    __tablename__ = "snapshots"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"))
    stage: Mapped[int] = mapped_column(Integer)
    snapshot_json: Mapped[dict[str, Any]] = mapped_column(JSON)
    drift_result: Mapped[Any] = mapped_column(JSON, nullable=True)  # list of Drift, as sent by the client
    suggestions: Mapped[Any] = mapped_column(JSON, nullable=True)  # list of SuggestedAction
    # Python-side default: microsecond precision keeps "latest" unambiguous
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)

    __table_args__ = (
        Index("idx_snapshots_user_created", "user_id", "created_at"),
    )
