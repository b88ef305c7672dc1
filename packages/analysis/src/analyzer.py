"""시트 분석기 - 비전 모델 호출 + 관대한 응답 파싱."""
from __future__ import annotations

import base64
import logging
import re

from langchain_core.messages import HumanMessage
from pydantic import ValidationError

from packages.core.src.errors import AnalysisError

from .prompts import AnalysisPrompts
from .schema import AnalysisResult, FallbackAnalysis, PageAnalysis, StructuredAnalysis

logger = logging.getLogger(__name__)

_FENCE_OPEN = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"\s*```\s*$")


def strip_code_fences(text: str) -> str:
    """응답 앞뒤의 마크다운 코드 펜스 제거."""
    text = text.strip()
    text = _FENCE_OPEN.sub("", text)
    text = _FENCE_CLOSE.sub("", text)
    return text.strip()


def parse_analysis(text: str, page_number: int) -> AnalysisResult:
    """응답 텍스트를 분석 결과로 변환.

    JSON이 아니거나 스키마에 맞지 않으면 예외 대신 FallbackAnalysis를 돌려준다.
    """
    cleaned = strip_code_fences(text)
    try:
        analysis = PageAnalysis.model_validate_json(cleaned)
    except ValidationError as e:
        logger.warning("분석 응답 파싱 실패, 원문으로 대체 page=%d: %s", page_number, e.errors()[:1])
        return FallbackAnalysis.from_raw_text(cleaned, page_number)
    return StructuredAnalysis(analysis=analysis, raw_text=cleaned)


def _message_text(content) -> str:
    if isinstance(content, str):
        return content
    # 멀티파트 응답이면 텍스트 조각만 이어 붙인다
    parts = []
    for part in content or []:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


class PageAnalyzer:
    """시트 이미지 한 장을 비전 모델로 분석."""

    def __init__(self, llm=None):
        """
        Args:
            llm: LangChain 채팅 모델 인스턴스 (없으면 자동 로드)
        """
        self.llm = llm

    def _ensure_llm(self):
        if self.llm is None:
            from packages.llm.src.config import get_vision_llm

            self.llm = get_vision_llm()

    async def _call_llm(self, image_bytes: bytes) -> str:
        self._ensure_llm()

        encoded = base64.b64encode(image_bytes).decode("ascii")
        message = HumanMessage(
            content=[
                {"type": "text", "text": AnalysisPrompts.sheet_prompt()},
                {
                    "type": "image_url",
                    "image_url": {"url": f"data:image/png;base64,{encoded}", "detail": "high"},
                },
            ]
        )
        response = await self.llm.ainvoke([message])
        return _message_text(response.content)

    async def analyze(self, image_bytes: bytes, page_number: int) -> AnalysisResult:
        """
        페이지 분석.

        Args:
            image_bytes: PNG 이미지 바이트
            page_number: 1부터 시작하는 페이지 번호 (대체 결과의 시트 제목에 사용)

        Returns:
            StructuredAnalysis 또는 FallbackAnalysis

        Raises:
            AnalysisError: 모델 호출 자체가 실패한 경우
        """
        try:
            raw_text = await self._call_llm(image_bytes)
        except Exception as e:
            raise AnalysisError(f"비전 모델 호출 실패 page={page_number}: {e}") from e

        return parse_analysis(raw_text, page_number)
