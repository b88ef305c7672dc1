"""인덱스 레코드 검색 엔진."""
from __future__ import annotations

import logging
from typing import Optional

from packages.core.src.models import ScoredIndexRecord
from packages.db.src.repository import IndexRecordStore

from .config import SEARCH_RESULT_LIMIT
from .scoring import Scorer, SubstringFrequencyScorer, tokenize_query

logger = logging.getLogger(__name__)


class SearchEngine:
    """status=indexed 레코드의 searchIndex만 읽어 점수를 매긴다."""

    def __init__(self, records: IndexRecordStore, scorer: Optional[Scorer] = None, limit: int = SEARCH_RESULT_LIMIT):
        self.records = records
        self.scorer = scorer or SubstringFrequencyScorer()
        self.limit = limit

    async def search(self, query: str | None, project_id: Optional[str] = None) -> list[ScoredIndexRecord]:
        terms = tokenize_query(query)
        if not terms:
            return []

        candidates = await self.records.find_indexed(project_id)
        scored = []
        for record in candidates:
            score = self.scorer.score(terms, record.search_index or "")
            if score > 0:
                scored.append((score, record))

        # sorted는 안정 정렬: 동점이면 저장소 순서 유지
        ranked = sorted(scored, key=lambda item: item[0], reverse=True)[: self.limit]
        logger.debug("search q=%r candidates=%d hits=%d", query, len(candidates), len(scored))
        return [
            ScoredIndexRecord(**record.model_dump(), relevance_score=score)
            for score, record in ranked
        ]
