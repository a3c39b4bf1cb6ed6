"""SQLAlchemy table definitions.

Quiz definitions are stored as JSON documents (models/codec.py), one row
per (quiz_id, status), so a draft and its published version coexist.
Attempts keep their scalar fields in columns for counting and reporting,
with the graded answers as a document.
"""

from __future__ import annotations

import uuid

from sqlalchemy import BigInteger, Boolean, Index, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from quiz_engine.db.engine import Base


class QuizDefinitionRow(Base):
    __tablename__ = "quiz_definitions"

    quiz_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True)
    status: Mapped[str] = mapped_column(String(32), primary_key=True)  # draft|published
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    title: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    document: Mapped[str] = mapped_column(Text, nullable=False)


class QuizAttemptRow(Base):
    __tablename__ = "quiz_attempts"
    __table_args__ = (Index("ix_quiz_attempts_user_quiz", "user_id", "quiz_id"),)

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    quiz_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False)
    quiz_version: Mapped[int] = mapped_column(Integer, nullable=False)
    user_id: Mapped[str] = mapped_column(String(320), nullable=False)
    attempt_number: Mapped[int] = mapped_column(Integer, nullable=False)
    started_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    submitted_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    time_spent_seconds: Mapped[int] = mapped_column(Integer, nullable=False)
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    passed: Mapped[bool] = mapped_column(Boolean, nullable=False)
    document: Mapped[str] = mapped_column(Text, nullable=False)
