"""인덱싱 잡 정의."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class PageImage:
    page_number: int
    image_path: str  # storage 루트 기준 상대 경로


@dataclass
class IndexingJob:
    """문서 한 건의 페이지 목록. 페이지는 page_number 순서로 처리된다."""

    project_id: str
    document_id: str
    pages: list[PageImage]
    project_name: Optional[str] = None
    document_name: Optional[str] = None

    def to_payload(self) -> dict[str, Any]:
        """RQ로 넘길 수 있는 dict 형태."""
        return asdict(self)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "IndexingJob":
        pages = [PageImage(**p) for p in payload.get("pages", [])]
        return cls(
            project_id=payload["project_id"],
            document_id=payload["document_id"],
            pages=pages,
            project_name=payload.get("project_name"),
            document_name=payload.get("document_name"),
        )


@dataclass
class EnqueueResult:
    document_id: str
    pages: int
    job_id: Optional[str] = None


@dataclass
class PipelineReport:
    document_id: str
    indexed: int = 0
    errors: int = 0
    failed_pages: list[int] = field(default_factory=list)
    # 처리 도중 문서가 삭제되어 멈춘 경우
    stopped: bool = False

    @property
    def total(self) -> int:
        return self.indexed + self.errors
