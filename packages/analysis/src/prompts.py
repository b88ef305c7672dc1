"""비전 모델 프롬프트 템플릿."""
from __future__ import annotations

from packages.core.src.models import Location

LOCATION_CHOICES = " | ".join(loc.value for loc in Location)


class AnalysisPrompts:
    """시트 분석 프롬프트 관리."""

    @staticmethod
    def sheet_prompt() -> str:
        """시트 이미지 한 장에 대한 고정 지시문."""
        return f"""You are analyzing a construction detail sheet image. This sheet may contain one or more architectural/structural details.

Please analyze this image and respond with a JSON object (no markdown, just raw JSON) with these fields:
{{
  "sheetTitle": "overall sheet title or number if visible",
  "detailCount": number of distinct details visible,
  "details": [
    {{
      "title": "detail title or reference number",
      "description": "thorough description of what this detail shows - construction elements, connections, materials, dimensions if visible",
      "keywords": ["array", "of", "searchable", "keywords"],
      "location": "where on the sheet this detail appears: {LOCATION_CHOICES}"
    }}
  ],
  "generalKeywords": ["keywords that apply to the overall sheet"],
  "overallSummary": "1-2 sentence summary of what this sheet contains"
}}"""
