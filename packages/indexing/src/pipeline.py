"""페이지 단위 인덱싱 파이프라인.

문서 한 건의 페이지를 순서대로 하나씩 분석하고, 페이지마다 최종 상태
(indexed 또는 error)의 레코드를 한 번만 쓴다. 한 페이지의 실패는 그 페이지의
error 레코드로 남고 나머지 페이지 처리는 계속된다.
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from packages.analysis.src.analyzer import PageAnalyzer
from packages.analysis.src.schema import AnalysisResult, FallbackAnalysis
from packages.core.src.errors import AnalysisError
from packages.core.src.models import IndexRecord, RecordStatus
from packages.db.src.repository import DocumentStore, IndexRecordStore
from packages.storage.src import StorageLayout, read_bytes

from .jobs import IndexingJob, PageImage, PipelineReport

logger = logging.getLogger(__name__)

ERROR_SUMMARY = "Processing failed"

# detail_count 컬럼은 INTEGER
MAX_DETAIL_COUNT = 2**31 - 1


def normalize_detail_count(value: int | None) -> int:
    if not value or value < 1:
        return 1
    return min(value, MAX_DETAIL_COUNT)


class IndexingPipeline:
    def __init__(
        self,
        analyzer: PageAnalyzer,
        records: IndexRecordStore,
        documents: DocumentStore,
        layout: StorageLayout,
    ):
        self.analyzer = analyzer
        self.records = records
        self.documents = documents
        self.layout = layout

    async def run(self, job: IndexingJob) -> PipelineReport:
        """잡의 모든 페이지를 순차 처리하고 문서를 완료 처리한다.

        처리 도중 문서가 삭제되면 (프로젝트 삭제 등) 남은 페이지는 쓰지 않고 멈춘다.
        """
        report = PipelineReport(document_id=job.document_id)
        pages = sorted(job.pages, key=lambda p: p.page_number)
        name = job.document_name or job.document_id
        logger.info("문서 인덱싱 시작: %s (%d pages)", name, len(pages))

        for page in pages:
            record = await self._process_page(job, page)
            if await self.documents.get(job.document_id) is None:
                logger.info("문서가 삭제되어 인덱싱 중단: %s (page %d)", name, page.page_number)
                report.stopped = True
                return report

            record = await self._write(job, page, record)
            if record.status == RecordStatus.INDEXED:
                report.indexed += 1
                logger.info("Indexed page %d/%d of %s", page.page_number, len(pages), name)
            else:
                report.errors += 1
                report.failed_pages.append(page.page_number)

        await self.documents.mark_completed(job.document_id)
        logger.info("문서 인덱싱 완료: %s indexed=%d errors=%d", name, report.indexed, report.errors)
        return report

    async def _process_page(self, job: IndexingJob, page: PageImage) -> IndexRecord:
        try:
            image_bytes = await read_bytes(self.layout.resolve(page.image_path))
            result = await self.analyzer.analyze(image_bytes, page.page_number)
        except (AnalysisError, OSError) as e:
            logger.error("페이지 처리 실패 document=%s page=%d: %s", job.document_id, page.page_number, e)
            return self._error_record(job, page)

        if isinstance(result, FallbackAnalysis):
            logger.warning("구조화되지 않은 응답을 원문으로 저장 document=%s page=%d", job.document_id, page.page_number)
        return self._indexed_record(job, page, result)

    async def _write(self, job: IndexingJob, page: PageImage, record: IndexRecord) -> IndexRecord:
        """레코드 저장. 분석 결과를 저장하지 못하면 그 페이지를 error 레코드로 대신 남긴다.

        error 레코드마저 저장되지 않으면 저장소 자체의 문제로 보고 예외를 올린다.
        """
        if record.status == RecordStatus.ERROR:
            return await self.records.add(record)
        try:
            return await self.records.add(record)
        except Exception:
            logger.exception("레코드 저장 실패, error 레코드로 대체 document=%s page=%d", job.document_id, page.page_number)
        return await self.records.add(self._error_record(job, page))

    def _base_fields(self, job: IndexingJob, page: PageImage) -> dict:
        return {
            "id": str(uuid.uuid4()),
            "project_id": job.project_id,
            "project_name": job.project_name,
            "document_id": job.document_id,
            "document_name": job.document_name,
            "page_number": page.page_number,
            "image_path": page.image_path,
            "created_at": datetime.now(timezone.utc),
        }

    def _indexed_record(self, job: IndexingJob, page: PageImage, result: AnalysisResult) -> IndexRecord:
        analysis = result.analysis
        return IndexRecord(
            **self._base_fields(job, page),
            sheet_title=analysis.sheet_title or f"Page {page.page_number}",
            detail_count=normalize_detail_count(analysis.detail_count),
            details=analysis.details,
            general_keywords=analysis.general_keywords,
            overall_summary=analysis.overall_summary,
            search_index=analysis.search_index(),
            status=RecordStatus.INDEXED,
        )

    def _error_record(self, job: IndexingJob, page: PageImage) -> IndexRecord:
        return IndexRecord(
            **self._base_fields(job, page),
            sheet_title=f"Page {page.page_number}",
            detail_count=0,
            details=[],
            general_keywords=[],
            overall_summary=ERROR_SUMMARY,
            search_index="",
            status=RecordStatus.ERROR,
        )
