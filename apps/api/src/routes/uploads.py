"""PDF 업로드 라우터.

분할까지만 요청 안에서 수행하고, 페이지 분석은 잡 큐에 넘긴 뒤 바로 응답한다.
"""
import logging
import uuid
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, File, UploadFile

from packages.core.src import models as schema
from packages.core.src.errors import ConversionError, ValidationError
from packages.indexing.src import IndexingJob, PageImage
from packages.storage.src import remove_document_files, save_stream

from apps.api.src.services import Services, get_services

logger = logging.getLogger(__name__)
router = APIRouter(tags=["uploads"])

ACCEPTED_MIME_TYPE = "application/pdf"


@router.post("/{project_id}/upload", response_model=schema.UploadResponse)
async def upload_document(
    project_id: str,
    background_tasks: BackgroundTasks,
    pdf: Optional[UploadFile] = File(None),
    services: Services = Depends(get_services),
):
    project = await services.projects.get(project_id)
    if not project:
        raise ValidationError("Project not found", status_code=404)
    if pdf is None or not pdf.filename:
        raise ValidationError("No PDF uploaded")
    if pdf.content_type != ACCEPTED_MIME_TYPE:
        raise ValidationError(f"Only {ACCEPTED_MIME_TYPE} uploads are accepted")

    layout = services.layout
    document_id = str(uuid.uuid4())
    document_path = layout.document_path(document_id)
    await save_stream(document_path, pdf.file)

    try:
        page_files = await services.splitter(document_path, layout.pages_dir(document_id))
    except ConversionError:
        remove_document_files(layout, document_id)
        raise

    await services.documents.create(project_id, pdf.filename, len(page_files), document_id=document_id)
    job = IndexingJob(
        project_id=project_id,
        document_id=document_id,
        pages=[PageImage(page_number=i, image_path=layout.relative(p)) for i, p in enumerate(page_files, start=1)],
        project_name=project.name,
        document_name=pdf.filename,
    )
    # 응답을 보낸 뒤 큐에 넣는다
    background_tasks.add_task(services.queue.enqueue, job)
    logger.info("업로드 완료: project=%s document=%s pages=%d", project_id, document_id, len(page_files))
    return schema.UploadResponse(pages=len(page_files), document_id=document_id)
