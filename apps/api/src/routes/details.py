"""인덱스 레코드 삭제 라우터."""
from fastapi import APIRouter, Depends

from packages.core.src import models as schema
from packages.indexing.src import delete_record as delete_record_and_image

from apps.api.src.services import Services, get_services

router = APIRouter(tags=["details"])


@router.delete("/{record_id}", response_model=schema.OkResponse)
async def delete_record(record_id: str, services: Services = Depends(get_services)):
    await delete_record_and_image(record_id, records=services.records, layout=services.layout)
    return schema.OkResponse()
