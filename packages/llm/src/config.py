"""LLM 설정 로더."""
from __future__ import annotations

import os
from functools import lru_cache

from langchain_openai import ChatOpenAI

OPENAI_VISION_MODEL = os.getenv("OPENAI_VISION_MODEL", "gpt-4o")
OPENAI_VISION_MAX_TOKENS = int(os.getenv("OPENAI_VISION_MAX_TOKENS", "1000"))
OPENAI_TIMEOUT = float(os.getenv("OPENAI_TIMEOUT", "120"))


class MissingConfig(Exception):
    pass


@lru_cache(maxsize=1)
def get_vision_llm() -> ChatOpenAI:
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        raise MissingConfig("OPENAI_API_KEY가 설정되지 않았습니다.")
    # 재시도는 하지 않는다: 실패한 페이지는 error 레코드로 남긴다
    return ChatOpenAI(
        model=OPENAI_VISION_MODEL,
        max_tokens=OPENAI_VISION_MAX_TOKENS,
        timeout=OPENAI_TIMEOUT,
        max_retries=0,
        api_key=api_key,
    )
