"""API 의존성 컨테이너.

저장소, 분할기, 잡 큐를 한 곳에서 조립해 `app.state.services`에 둔다.
테스트는 메모리 저장소와 가짜 분할기/모델로 같은 컨테이너를 만든다.
"""
from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request

from packages.analysis.src import PageAnalyzer
from packages.db.src.repository import DocumentStore, IndexRecordStore, ProjectStore
from packages.indexing.src import IndexingPipeline, JobQueue, LocalJobQueue, RqJobQueue, StatusTracker
from packages.indexing.src.config import INDEXING_BACKEND
from packages.search.src import SearchEngine
from packages.splitter.src import Splitter, split_document
from packages.storage.src import StorageLayout


@dataclass
class Services:
    projects: ProjectStore
    documents: DocumentStore
    records: IndexRecordStore
    layout: StorageLayout
    splitter: Splitter
    queue: JobQueue
    search: SearchEngine
    status: StatusTracker


def assemble_services(
    *,
    projects: ProjectStore,
    documents: DocumentStore,
    records: IndexRecordStore,
    layout: StorageLayout,
    splitter: Splitter = split_document,
    analyzer: PageAnalyzer | None = None,
    backend: str = INDEXING_BACKEND,
) -> Services:
    layout.ensure_dirs()
    if backend == "rq":
        queue: JobQueue = RqJobQueue()
    elif backend == "local":
        pipeline = IndexingPipeline(analyzer or PageAnalyzer(), records, documents, layout)
        queue = LocalJobQueue(pipeline)
    else:
        raise RuntimeError(f"알 수 없는 INDEXING_BACKEND: {backend}")

    return Services(
        projects=projects,
        documents=documents,
        records=records,
        layout=layout,
        splitter=splitter,
        queue=queue,
        search=SearchEngine(records),
        status=StatusTracker(records, documents),
    )


def build_services() -> Services:
    """운영 구성: PostgreSQL 저장소 + pdftoppm + OpenAI 비전 모델."""
    from packages.db.src.session import get_sessionmaker
    from packages.db.src.sql_store import SqlDocumentStore, SqlIndexRecordStore, SqlProjectStore

    session_factory = get_sessionmaker()
    return assemble_services(
        projects=SqlProjectStore(session_factory),
        documents=SqlDocumentStore(session_factory),
        records=SqlIndexRecordStore(session_factory),
        layout=StorageLayout(),
    )


def get_services(request: Request) -> Services:
    return request.app.state.services
