"""프로젝트 CRUD 및 프로젝트별 레코드/상태 조회 라우터."""
from typing import Optional

from fastapi import APIRouter, Depends

from packages.core.src import models as schema
from packages.core.src.errors import ValidationError
from packages.indexing.src import delete_project as delete_project_cascade

from apps.api.src.services import Services, get_services

router = APIRouter(tags=["projects"])


@router.get("", response_model=list[schema.Project])
async def list_projects(services: Services = Depends(get_services)):
    return await services.projects.list()


@router.post("", response_model=schema.Project)
async def create_project(payload: Optional[schema.ProjectCreate] = None, services: Services = Depends(get_services)):
    name = (payload.name or "").strip() if payload else ""
    if not name:
        raise ValidationError("Name required")
    return await services.projects.create(name=name, description=payload.description or "")


@router.delete("/{project_id}", response_model=schema.OkResponse)
async def delete_project(project_id: str, services: Services = Depends(get_services)):
    await delete_project_cascade(
        project_id,
        projects=services.projects,
        documents=services.documents,
        records=services.records,
        layout=services.layout,
    )
    return schema.OkResponse()


@router.get("/{project_id}/details", response_model=list[schema.IndexRecord])
async def list_details(project_id: str, services: Services = Depends(get_services)):
    return await services.records.list_by_project(project_id)


@router.get("/{project_id}/status", response_model=schema.ProcessingStatus)
async def get_status(project_id: str, services: Services = Depends(get_services)):
    return await services.status.summary(project_id)
