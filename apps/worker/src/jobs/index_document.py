"""문서 페이지 인덱싱 잡 (RQ 워커/CLI)."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from packages.analysis.src import PageAnalyzer
from packages.db.src.session import get_sessionmaker
from packages.db.src.sql_store import SqlDocumentStore, SqlIndexRecordStore, SqlProjectStore
from packages.indexing.src import IndexingJob, IndexingPipeline, PipelineReport, build_resume_job
from packages.storage.src import StorageLayout

logger = logging.getLogger(__name__)


def _build_pipeline() -> IndexingPipeline:
    session_factory = get_sessionmaker()
    return IndexingPipeline(
        PageAnalyzer(),
        SqlIndexRecordStore(session_factory),
        SqlDocumentStore(session_factory),
        StorageLayout(),
    )


async def run(payload: dict[str, Any]) -> PipelineReport:
    """직렬화된 잡 하나를 실행."""
    job = IndexingJob.from_payload(payload)
    return await _build_pipeline().run(job)


def run_job(payload: dict[str, Any]) -> dict[str, Any]:
    """RQ 엔트리포인트. RQ 워커는 동기 함수를 호출하므로 여기서 루프를 돌린다."""
    report = asyncio.run(run(payload))
    return {
        "document_id": report.document_id,
        "indexed": report.indexed,
        "errors": report.errors,
        "failed_pages": report.failed_pages,
        "stopped": report.stopped,
    }


async def resume(document_id: str) -> Optional[PipelineReport]:
    """레코드가 없는 페이지만 다시 처리."""
    pipeline = _build_pipeline()
    session_factory = get_sessionmaker()
    job = await build_resume_job(
        document_id,
        projects=SqlProjectStore(session_factory),
        documents=pipeline.documents,
        records=pipeline.records,
        layout=pipeline.layout,
    )
    if job is None:
        return None
    return await pipeline.run(job)
