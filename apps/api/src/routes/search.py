"""키워드 검색 라우터."""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from packages.core.src import models as schema

from apps.api.src.services import Services, get_services

router = APIRouter(tags=["search"])


@router.get("", response_model=list[schema.ScoredIndexRecord])
async def search(
    q: Optional[str] = None,
    project_id: Optional[str] = Query(None, alias="projectId"),
    services: Services = Depends(get_services),
):
    return await services.search.search(q, project_id=project_id)
