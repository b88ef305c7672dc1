"""저장소 인터페이스.

파이프라인, 상태 집계, 검색 엔진은 전역 세션 대신 이 인터페이스를 주입받는다.
운영은 SQLAlchemy 구현(`sql_store`), 테스트는 메모리 구현(`memory`)을 쓴다.
"""
from __future__ import annotations

import abc
from typing import Optional

from packages.core.src.models import Document, IndexRecord, Project


class ProjectStore(abc.ABC):
    @abc.abstractmethod
    async def list(self) -> list[Project]:
        """최신 생성 순."""

    @abc.abstractmethod
    async def create(self, name: str, description: str = "") -> Project:
        ...

    @abc.abstractmethod
    async def get(self, project_id: str) -> Optional[Project]:
        ...

    @abc.abstractmethod
    async def delete(self, project_id: str) -> None:
        ...


class DocumentStore(abc.ABC):
    @abc.abstractmethod
    async def create(self, project_id: str, filename: str, page_count: int, document_id: Optional[str] = None) -> Document:
        ...

    @abc.abstractmethod
    async def get(self, document_id: str) -> Optional[Document]:
        ...

    @abc.abstractmethod
    async def list_by_project(self, project_id: str) -> list[Document]:
        ...

    @abc.abstractmethod
    async def mark_completed(self, document_id: str) -> None:
        ...

    @abc.abstractmethod
    async def delete(self, document_id: str) -> None:
        ...


class IndexRecordStore(abc.ABC):
    """페이지 레코드 저장소. 레코드는 한 번 쓰면 바뀌지 않는다."""

    @abc.abstractmethod
    async def add(self, record: IndexRecord) -> IndexRecord:
        ...

    @abc.abstractmethod
    async def get(self, record_id: str) -> Optional[IndexRecord]:
        ...

    @abc.abstractmethod
    async def list_by_project(self, project_id: str) -> list[IndexRecord]:
        """생성 순(오래된 것 먼저)."""

    @abc.abstractmethod
    async def list_by_document(self, document_id: str) -> list[IndexRecord]:
        ...

    @abc.abstractmethod
    async def find_indexed(self, project_id: Optional[str] = None) -> list[IndexRecord]:
        """status=indexed 레코드, 생성 순."""

    @abc.abstractmethod
    async def count_by_status(self, project_id: str) -> dict[str, int]:
        ...

    @abc.abstractmethod
    async def count_by_document(self, project_id: str) -> dict[str, int]:
        ...

    @abc.abstractmethod
    async def delete(self, record_id: str) -> None:
        ...
