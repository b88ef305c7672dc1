"""메모리 저장소 구현 (테스트/로컬 실행용)."""
from __future__ import annotations

import uuid
from collections import Counter
from datetime import datetime, timezone
from typing import Optional

from packages.core.src.models import Document, IndexRecord, Project, RecordStatus

from .repository import DocumentStore, IndexRecordStore, ProjectStore


def _now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryProjectStore(ProjectStore):
    def __init__(self) -> None:
        self._rows: dict[str, Project] = {}

    async def list(self) -> list[Project]:
        # 같은 시각이면 나중에 만든 것이 먼저
        return sorted(reversed(list(self._rows.values())), key=lambda p: p.created_at, reverse=True)

    async def create(self, name: str, description: str = "") -> Project:
        project = Project(id=str(uuid.uuid4()), name=name, description=description, created_at=_now())
        self._rows[project.id] = project
        return project

    async def get(self, project_id: str) -> Optional[Project]:
        return self._rows.get(project_id)

    async def delete(self, project_id: str) -> None:
        self._rows.pop(project_id, None)


class InMemoryDocumentStore(DocumentStore):
    def __init__(self) -> None:
        self._rows: dict[str, Document] = {}

    async def create(self, project_id: str, filename: str, page_count: int, document_id: Optional[str] = None) -> Document:
        document = Document(
            id=document_id or str(uuid.uuid4()),
            project_id=project_id,
            filename=filename,
            page_count=page_count,
            created_at=_now(),
        )
        self._rows[document.id] = document
        return document

    async def get(self, document_id: str) -> Optional[Document]:
        return self._rows.get(document_id)

    async def list_by_project(self, project_id: str) -> list[Document]:
        rows = [d for d in self._rows.values() if d.project_id == project_id]
        return sorted(rows, key=lambda d: d.created_at)

    async def mark_completed(self, document_id: str) -> None:
        document = self._rows.get(document_id)
        if document is not None:
            self._rows[document_id] = document.model_copy(update={"completed_at": _now()})

    async def delete(self, document_id: str) -> None:
        self._rows.pop(document_id, None)


class InMemoryIndexRecordStore(IndexRecordStore):
    def __init__(self) -> None:
        self._rows: dict[str, IndexRecord] = {}

    async def add(self, record: IndexRecord) -> IndexRecord:
        stored = record.model_copy(deep=True)
        self._rows[stored.id] = stored
        return stored.model_copy(deep=True)

    async def get(self, record_id: str) -> Optional[IndexRecord]:
        record = self._rows.get(record_id)
        return record.model_copy(deep=True) if record else None

    def _select(self, **filters) -> list[IndexRecord]:
        rows = [
            r for r in self._rows.values()
            if all(getattr(r, key) == value for key, value in filters.items())
        ]
        # dict는 삽입 순서를 유지하므로 동일 시각이면 쓰기 순서대로
        return [r.model_copy(deep=True) for r in sorted(rows, key=lambda r: r.created_at)]

    async def list_by_project(self, project_id: str) -> list[IndexRecord]:
        return self._select(project_id=project_id)

    async def list_by_document(self, document_id: str) -> list[IndexRecord]:
        return self._select(document_id=document_id)

    async def find_indexed(self, project_id: Optional[str] = None) -> list[IndexRecord]:
        if project_id:
            return self._select(project_id=project_id, status=RecordStatus.INDEXED)
        return self._select(status=RecordStatus.INDEXED)

    async def count_by_status(self, project_id: str) -> dict[str, int]:
        counts = Counter(r.status.value for r in self._rows.values() if r.project_id == project_id)
        return dict(counts)

    async def count_by_document(self, project_id: str) -> dict[str, int]:
        counts = Counter(r.document_id for r in self._rows.values() if r.project_id == project_id)
        return dict(counts)

    async def delete(self, record_id: str) -> None:
        self._rows.pop(record_id, None)
