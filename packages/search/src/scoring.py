"""검색 점수 전략."""
from __future__ import annotations

from typing import Protocol, Sequence


class Scorer(Protocol):
    def score(self, terms: Sequence[str], text: str) -> int:
        ...


class SubstringFrequencyScorer:
    """검색어별 부분 문자열 출현 횟수의 합.

    단어 경계를 보지 않으므로 "steel"은 "steeled" 안에서도 맞는다.
    기존 데이터와의 호환을 위해 이 동작을 기본값으로 유지한다.
    """

    def score(self, terms: Sequence[str], text: str) -> int:
        haystack = text.lower()
        return sum(haystack.count(term) for term in terms if term)


def tokenize_query(query: str | None) -> list[str]:
    """공백으로 나눈 소문자 검색어 (빈 항목 제외)."""
    if not query:
        return []
    return [term for term in query.lower().split() if term]
