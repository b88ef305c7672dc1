"""프로젝트/레코드 삭제와 이미지 정리."""
from __future__ import annotations

import logging

from packages.db.src.repository import DocumentStore, IndexRecordStore, ProjectStore
from packages.storage.src import StorageLayout, remove_document_files, remove_file

logger = logging.getLogger(__name__)


async def delete_project(
    project_id: str,
    *,
    projects: ProjectStore,
    documents: DocumentStore,
    records: IndexRecordStore,
    layout: StorageLayout,
) -> None:
    """프로젝트와 그 레코드, 문서, 이미지 파일을 모두 삭제."""
    removed_images = 0
    for record in await records.list_by_project(project_id):
        if remove_file(layout, record.image_path):
            removed_images += 1
        await records.delete(record.id)

    project_documents = await documents.list_by_project(project_id)
    for document in project_documents:
        remove_document_files(layout, document.id)
        await documents.delete(document.id)

    await projects.delete(project_id)
    logger.info(
        "프로젝트 삭제: %s (documents=%d, images=%d)",
        project_id,
        len(project_documents),
        removed_images,
    )


async def delete_record(record_id: str, *, records: IndexRecordStore, layout: StorageLayout) -> None:
    """레코드 한 건과 이미지 삭제. 이미지가 이미 없거나 레코드가 없으면 아무것도 하지 않는다."""
    record = await records.get(record_id)
    if record is None:
        return
    if not remove_file(layout, record.image_path):
        logger.info("이미지가 이미 없습니다: %s", record.image_path)
    await records.delete(record_id)
