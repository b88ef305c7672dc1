"""시트 분석 결과 스키마."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from pydantic import Field, field_validator

from packages.core.src.models import CamelModel, DetailEntry, Location

SUMMARY_FALLBACK_LENGTH = 200


class PageAnalysis(CamelModel):
    """비전 모델 응답 JSON. 모든 필드는 선택이며 기본값을 가진다."""

    sheet_title: Optional[str] = None
    detail_count: Optional[int] = None
    details: list[DetailEntry] = Field(default_factory=list)
    general_keywords: list[str] = Field(default_factory=list)
    overall_summary: str = ""

    @field_validator("details", mode="before")
    @classmethod
    def _none_to_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("general_keywords", mode="before")
    @classmethod
    def _coerce_keywords(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        if isinstance(value, list):
            return [str(v) for v in value if v is not None]
        return value

    @field_validator("overall_summary", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else str(value)

    @field_validator("sheet_title", mode="before")
    @classmethod
    def _stringify_title(cls, value: Any) -> Any:
        # 시트 번호만 숫자로 오는 경우가 있다
        if value is None or isinstance(value, str):
            return value
        return str(value)

    def search_index(self) -> str:
        """검색용 소문자 텍스트 블롭.

        generalKeywords 전체, 이어서 디테일마다 keywords, title, description 순으로 이어 붙인다.
        """
        parts: list[str] = list(self.general_keywords)
        for detail in self.details:
            parts.extend(detail.keywords)
            parts.append(detail.title)
            parts.append(detail.description)
        return " ".join(parts).lower()


@dataclass
class AnalysisResult:
    analysis: PageAnalysis
    raw_text: str


@dataclass
class StructuredAnalysis(AnalysisResult):
    """응답이 스키마에 맞게 파싱된 경우."""


@dataclass
class FallbackAnalysis(AnalysisResult):
    """응답을 파싱하지 못해 원문으로 대체한 경우."""

    @classmethod
    def from_raw_text(cls, raw_text: str, page_number: int) -> "FallbackAnalysis":
        analysis = PageAnalysis(
            sheet_title=f"Page {page_number}",
            detail_count=1,
            details=[
                DetailEntry(
                    title="Unknown",
                    description=raw_text,
                    keywords=[],
                    location=Location.FULL_SHEET,
                )
            ],
            general_keywords=[],
            overall_summary=raw_text[:SUMMARY_FALLBACK_LENGTH],
        )
        return cls(analysis=analysis, raw_text=raw_text)
