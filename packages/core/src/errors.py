"""도메인 예외 정의."""
from __future__ import annotations


class DetailSearchError(Exception):
    """모든 도메인 예외의 기반 클래스."""


class ValidationError(DetailSearchError):
    """요청 검증 실패 (필수 필드 누락, 업로드 형식 오류, 없는 프로젝트)."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ConversionError(DetailSearchError):
    """문서를 페이지 이미지로 분할하지 못함."""


class AnalysisError(DetailSearchError):
    """비전 모델 호출 실패 (전송/인증/서비스 오류)."""
