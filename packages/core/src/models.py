"""Pydantic 스키마 정의."""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


class Location(str, Enum):
    """시트 내 디테일의 대략적 위치."""

    FULL_SHEET = "full-sheet"
    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    TOP_CENTER = "top-center"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"
    BOTTOM_CENTER = "bottom-center"
    CENTER = "center"
    LEFT = "left"
    RIGHT = "right"


class RecordStatus(str, Enum):
    INDEXED = "indexed"
    ERROR = "error"


class CamelModel(BaseModel):
    """JSON 필드는 camelCase, 파이썬 속성은 snake_case."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class DetailEntry(CamelModel):
    """시트 한 장 안의 개별 디테일."""

    title: str = ""
    description: str = ""
    keywords: list[str] = Field(default_factory=list)
    location: Location = Location.FULL_SHEET

    @field_validator("title", "description", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else str(value)

    @field_validator("keywords", mode="before")
    @classmethod
    def _coerce_keywords(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        if isinstance(value, list):
            return [str(v) for v in value if v is not None]
        return value

    @field_validator("location", mode="before")
    @classmethod
    def _coerce_location(cls, value: Any) -> Location:
        # 열거형 밖의 값은 시트 전체로 취급
        if isinstance(value, Location):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower().replace(" ", "-").replace("_", "-")
            try:
                return Location(normalized)
            except ValueError:
                pass
        return Location.FULL_SHEET


class ProjectCreate(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None


class Project(CamelModel):
    id: str
    name: str
    description: str = ""
    created_at: datetime


class Document(CamelModel):
    """업로드된 PDF 한 건."""

    id: str
    project_id: str
    filename: str
    page_count: int
    created_at: datetime
    completed_at: Optional[datetime] = None


class IndexRecord(CamelModel):
    """분석된 페이지 한 장."""

    id: str
    project_id: str
    project_name: Optional[str] = None
    document_id: str
    document_name: Optional[str] = None
    page_number: int
    image_path: str
    sheet_title: str
    detail_count: int = 1
    details: list[DetailEntry] = Field(default_factory=list)
    general_keywords: list[str] = Field(default_factory=list)
    overall_summary: str = ""
    search_index: str = ""
    status: RecordStatus
    created_at: datetime


class ScoredIndexRecord(IndexRecord):
    relevance_score: int


class ProcessingStatus(BaseModel):
    total: int
    indexed: int
    errors: int
    processing: int


class UploadResponse(CamelModel):
    ok: bool = True
    pages: int
    document_id: str
    message: str = "Processing started"


class OkResponse(BaseModel):
    ok: bool = True
