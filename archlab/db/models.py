from __future__ import annotations

from datetime import datetime
from typing import List

from sqlalchemy import JSON, DateTime, Integer, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class LevelProgress(Base):
    __tablename__ = "level_progress"

    player_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    current_level: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    total_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    completed_levels: Mapped[List[int]] = mapped_column(JSON, nullable=False, default=list)
    unlocked_achievements: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    @classmethod
    def start(cls, player_id: str) -> "LevelProgress":
        return cls(
            player_id=player_id,
            current_level=1,
            total_points=0,
            completed_levels=[],
            unlocked_achievements=[],
        )
