"""프로젝트 인덱싱 진행 상태 집계."""
from __future__ import annotations

from packages.core.src.models import ProcessingStatus, RecordStatus
from packages.db.src.repository import DocumentStore, IndexRecordStore


class StatusTracker:
    """저장된 레코드와 업로드 시점의 페이지 수로 진행 상태를 계산한다.

    레코드는 최종 상태가 정해진 뒤에만 쓰이므로, 아직 처리 중인 페이지 수는
    완료되지 않은 문서의 page_count에서 이미 쓰인 레코드 수를 빼서 구한다.
    total은 항상 indexed + errors + processing 이다.
    """

    def __init__(self, records: IndexRecordStore, documents: DocumentStore):
        self.records = records
        self.documents = documents

    async def summary(self, project_id: str) -> ProcessingStatus:
        counts = await self.records.count_by_status(project_id)
        indexed = counts.get(RecordStatus.INDEXED.value, 0)
        errors = counts.get(RecordStatus.ERROR.value, 0)

        written = await self.records.count_by_document(project_id)
        processing = 0
        for document in await self.documents.list_by_project(project_id):
            if document.completed_at is None:
                processing += max(document.page_count - written.get(document.id, 0), 0)

        return ProcessingStatus(
            total=indexed + errors + processing,
            indexed=indexed,
            errors=errors,
            processing=processing,
        )
