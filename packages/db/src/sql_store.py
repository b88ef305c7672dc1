"""SQLAlchemy 기반 저장소 구현."""
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from packages.core.src import models as schema

from . import models
from .repository import DocumentStore, IndexRecordStore, ProjectStore


def _is_uuid(value: str) -> bool:
    # UUID 컬럼에 형식이 틀린 값을 넣으면 드라이버 오류가 나므로 미리 걸러낸다
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True


def strip_nul(value):
    """문자열(리스트/딕셔너리 안 포함)에서 NUL 문자 제거. PostgreSQL text/jsonb는 저장하지 못한다."""
    if isinstance(value, str):
        return value.replace("\x00", "")
    if isinstance(value, list):
        return [strip_nul(v) for v in value]
    if isinstance(value, dict):
        return {k: strip_nul(v) for k, v in value.items()}
    return value


class SqlProjectStore(ProjectStore):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def list(self) -> list[schema.Project]:
        async with self.session_factory() as session:
            result = await session.execute(select(models.Project).order_by(models.Project.created_at.desc()))
            return [schema.Project.model_validate(row) for row in result.scalars().all()]

    async def create(self, name: str, description: str = "") -> schema.Project:
        async with self.session_factory() as session:
            project = models.Project(name=name, description=description)
            session.add(project)
            await session.commit()
            await session.refresh(project)
            return schema.Project.model_validate(project)

    async def get(self, project_id: str) -> Optional[schema.Project]:
        if not _is_uuid(project_id):
            return None
        async with self.session_factory() as session:
            project = await session.get(models.Project, project_id)
            return schema.Project.model_validate(project) if project else None

    async def delete(self, project_id: str) -> None:
        if not _is_uuid(project_id):
            return
        async with self.session_factory() as session:
            await session.execute(delete(models.Project).where(models.Project.id == project_id))
            await session.commit()


class SqlDocumentStore(DocumentStore):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def create(self, project_id: str, filename: str, page_count: int, document_id: Optional[str] = None) -> schema.Document:
        async with self.session_factory() as session:
            document = models.Document(
                id=document_id or str(uuid.uuid4()),
                project_id=project_id,
                filename=filename,
                page_count=page_count,
            )
            session.add(document)
            await session.commit()
            await session.refresh(document)
            return schema.Document.model_validate(document)

    async def get(self, document_id: str) -> Optional[schema.Document]:
        if not _is_uuid(document_id):
            return None
        async with self.session_factory() as session:
            document = await session.get(models.Document, document_id)
            return schema.Document.model_validate(document) if document else None

    async def list_by_project(self, project_id: str) -> list[schema.Document]:
        if not _is_uuid(project_id):
            return []
        async with self.session_factory() as session:
            result = await session.execute(
                select(models.Document)
                .where(models.Document.project_id == project_id)
                .order_by(models.Document.created_at)
            )
            return [schema.Document.model_validate(row) for row in result.scalars().all()]

    async def mark_completed(self, document_id: str) -> None:
        async with self.session_factory() as session:
            await session.execute(
                update(models.Document)
                .where(models.Document.id == document_id)
                .values(completed_at=datetime.now(timezone.utc))
            )
            await session.commit()

    async def delete(self, document_id: str) -> None:
        if not _is_uuid(document_id):
            return
        async with self.session_factory() as session:
            await session.execute(delete(models.Document).where(models.Document.id == document_id))
            await session.commit()


class SqlIndexRecordStore(IndexRecordStore):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def add(self, record: schema.IndexRecord) -> schema.IndexRecord:
        row = models.IndexRecord(
            id=record.id,
            project_id=record.project_id,
            project_name=strip_nul(record.project_name),
            document_id=record.document_id,
            document_name=strip_nul(record.document_name),
            page_number=record.page_number,
            image_path=record.image_path,
            sheet_title=strip_nul(record.sheet_title),
            detail_count=record.detail_count,
            details=strip_nul([d.model_dump(mode="json") for d in record.details]),
            general_keywords=strip_nul(list(record.general_keywords)),
            overall_summary=strip_nul(record.overall_summary),
            search_index=strip_nul(record.search_index),
            status=record.status.value,
            created_at=record.created_at,
        )
        # 레코드 단위 커밋: 읽는 쪽은 부분적으로 쓰인 레코드를 볼 수 없다
        async with self.session_factory() as session:
            session.add(row)
            await session.commit()
        return record

    async def get(self, record_id: str) -> Optional[schema.IndexRecord]:
        if not _is_uuid(record_id):
            return None
        async with self.session_factory() as session:
            row = await session.get(models.IndexRecord, record_id)
            return schema.IndexRecord.model_validate(row) if row else None

    async def _select(self, *conditions) -> list[schema.IndexRecord]:
        stmt = select(models.IndexRecord).where(*conditions).order_by(
            models.IndexRecord.created_at, models.IndexRecord.page_number
        )
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return [schema.IndexRecord.model_validate(row) for row in result.scalars().all()]

    async def list_by_project(self, project_id: str) -> list[schema.IndexRecord]:
        if not _is_uuid(project_id):
            return []
        return await self._select(models.IndexRecord.project_id == project_id)

    async def list_by_document(self, document_id: str) -> list[schema.IndexRecord]:
        if not _is_uuid(document_id):
            return []
        return await self._select(models.IndexRecord.document_id == document_id)

    async def find_indexed(self, project_id: Optional[str] = None) -> list[schema.IndexRecord]:
        conditions = [models.IndexRecord.status == schema.RecordStatus.INDEXED.value]
        if project_id:
            if not _is_uuid(project_id):
                return []
            conditions.append(models.IndexRecord.project_id == project_id)
        return await self._select(*conditions)

    async def count_by_status(self, project_id: str) -> dict[str, int]:
        if not _is_uuid(project_id):
            return {}
        async with self.session_factory() as session:
            result = await session.execute(
                select(models.IndexRecord.status, func.count())
                .where(models.IndexRecord.project_id == project_id)
                .group_by(models.IndexRecord.status)
            )
            return {status: count for status, count in result.all()}

    async def count_by_document(self, project_id: str) -> dict[str, int]:
        if not _is_uuid(project_id):
            return {}
        async with self.session_factory() as session:
            result = await session.execute(
                select(models.IndexRecord.document_id, func.count())
                .where(models.IndexRecord.project_id == project_id)
                .group_by(models.IndexRecord.document_id)
            )
            return {str(document_id): count for document_id, count in result.all()}

    async def delete(self, record_id: str) -> None:
        if not _is_uuid(record_id):
            return
        async with self.session_factory() as session:
            await session.execute(delete(models.IndexRecord).where(models.IndexRecord.id == record_id))
            await session.commit()
