"""중단된 문서의 남은 페이지로 잡을 다시 만든다."""
from __future__ import annotations

import logging
from typing import Optional

from packages.db.src.repository import DocumentStore, IndexRecordStore, ProjectStore
from packages.splitter.src import page_number_from_filename
from packages.storage.src import StorageLayout

from .jobs import IndexingJob, PageImage

logger = logging.getLogger(__name__)


async def build_resume_job(
    document_id: str,
    *,
    projects: ProjectStore,
    documents: DocumentStore,
    records: IndexRecordStore,
    layout: StorageLayout,
) -> Optional[IndexingJob]:
    """디스크에 남은 페이지 이미지 중 레코드가 없는 페이지만 담은 잡.

    페이지 번호는 이미지 파일명(page-07.png)에서 읽는다. 레코드와 함께 이미지가
    지워진 페이지는 대상이 아니다. 문서가 없으면 None.
    """
    document = await documents.get(document_id)
    if document is None:
        logger.error("문서를 찾을 수 없습니다: %s", document_id)
        return None

    done = {r.page_number for r in await records.list_by_document(document_id)}
    page_files = {}
    for path in layout.pages_dir(document_id).glob("*.png"):
        number = page_number_from_filename(path)
        if number is None:
            logger.warning("페이지 번호를 알 수 없는 이미지 무시: %s", path)
            continue
        page_files[number] = path

    pages = [
        PageImage(page_number=number, image_path=layout.relative(path))
        for number, path in sorted(page_files.items())
        if number not in done
    ]
    project = await projects.get(document.project_id)
    logger.info("재개 대상: document=%s remaining=%d/%d", document_id, len(pages), len(page_files))
    return IndexingJob(
        project_id=document.project_id,
        document_id=document_id,
        pages=pages,
        project_name=project.name if project else None,
        document_name=document.filename,
    )
