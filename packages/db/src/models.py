"""SQLAlchemy 테이블 정의."""
from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy.orm import declarative_base, Mapped, mapped_column
from sqlalchemy import Text, ForeignKey, DateTime, Integer
from sqlalchemy.dialects.postgresql import UUID, JSONB
import sqlalchemy as sa

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


class Project(Base):
    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(UUID(as_uuid=False), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, server_default=sa.text("''"))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=sa.text("now()"))


class Document(Base):
    __tablename__ = "documents"

    id: Mapped[str] = mapped_column(UUID(as_uuid=False), primary_key=True, default=_new_id)
    project_id: Mapped[str] = mapped_column(UUID(as_uuid=False), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    filename: Mapped[str] = mapped_column(Text, nullable=False)
    page_count: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=sa.text("now()"))
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class IndexRecord(Base):
    __tablename__ = "index_records"
    __table_args__ = (sa.UniqueConstraint("document_id", "page_number", name="uq_index_records_document_page"),)

    id: Mapped[str] = mapped_column(UUID(as_uuid=False), primary_key=True, default=_new_id)
    project_id: Mapped[str] = mapped_column(UUID(as_uuid=False), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    project_name: Mapped[str | None] = mapped_column(Text)
    document_id: Mapped[str] = mapped_column(UUID(as_uuid=False), ForeignKey("documents.id", ondelete="CASCADE"), nullable=False)
    document_name: Mapped[str | None] = mapped_column(Text)
    page_number: Mapped[int] = mapped_column(Integer, nullable=False)
    image_path: Mapped[str] = mapped_column(Text, nullable=False)
    sheet_title: Mapped[str] = mapped_column(Text, nullable=False)
    detail_count: Mapped[int] = mapped_column(Integer, nullable=False, server_default=sa.text("1"))
    details = mapped_column(JSONB, nullable=False, server_default=sa.text("'[]'::jsonb"))
    general_keywords = mapped_column(JSONB, nullable=False, server_default=sa.text("'[]'::jsonb"))
    overall_summary: Mapped[str] = mapped_column(Text, nullable=False, server_default=sa.text("''"))
    search_index: Mapped[str] = mapped_column(Text, nullable=False, server_default=sa.text("''"))
    status: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=sa.text("now()"))
