"""Trend summary of an enriched collection using Google GenAI (Gemini)."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Sequence

from google.genai import Client
from google.genai import types

from yt_pulse.config import DEFAULT_GEMINI_MODEL
from yt_pulse.exceptions import AnalysisGenerationError, AnalysisParseError
from yt_pulse.models import EnrichedVideo, KeyTheme, TrendAnalysis

logger = logging.getLogger(__name__)

DESCRIPTION_SNIPPET = 100

PROMPT_TEMPLATE = """Analyze the following trending YouTube videos and provide insights into current trends.
Focus on content styles, recurring topics, emotional triggers, and why these are currently popular.

Data: {data}"""

RESPONSE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "summary": types.Schema(type=types.Type.STRING, description="Overall summary of the trends."),
        "keyThemes": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(
                type=types.Type.OBJECT,
                properties={
                    "theme": types.Schema(type=types.Type.STRING),
                    "explanation": types.Schema(type=types.Type.STRING),
                },
                required=["theme", "explanation"],
            ),
        ),
        "audienceInsights": types.Schema(
            type=types.Type.STRING,
            description="What this says about current audience behavior.",
        ),
        "prediction": types.Schema(type=types.Type.STRING, description="What trends might emerge next."),
    },
    required=["summary", "keyThemes", "audienceInsights", "prediction"],
)


def strip_markdown_code_blocks(text: str) -> str:
    text = text.strip()
    if text.startswith("```json"):
        text = text[7:]
    elif text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def project_videos(videos: Sequence[EnrichedVideo]) -> List[Dict[str, Any]]:
    """The subset of each video the model sees."""
    out = []
    for v in videos:
        rec = v.video
        out.append(
            {
                "title": rec.title,
                "channel": rec.channel_title,
                "views": str(rec.view_count),
                "tags": ", ".join(rec.tags) if rec.tags else None,
                "description": rec.description[:DESCRIPTION_SNIPPET] + "...",
            }
        )
    return out


def build_prompt(videos: Sequence[EnrichedVideo]) -> str:
    return PROMPT_TEMPLATE.format(data=json.dumps(project_videos(videos), ensure_ascii=False))


def parse_analysis(text: str) -> TrendAnalysis:
    """
    Raises AnalysisParseError unless text is a JSON object with all four fields.
    """
    try:
        data = json.loads(strip_markdown_code_blocks(text))
    except json.JSONDecodeError as e:
        raise AnalysisParseError(f"Trend analysis response is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise AnalysisParseError("Trend analysis response is not a JSON object.")

    missing = [k for k in ("summary", "keyThemes", "audienceInsights", "prediction") if k not in data]
    if missing:
        raise AnalysisParseError(f"Trend analysis response is missing fields: {', '.join(missing)}")

    raw_themes = data["keyThemes"]
    if not isinstance(raw_themes, list):
        raise AnalysisParseError("keyThemes must be a list.")

    themes = []
    for item in raw_themes:
        if not isinstance(item, dict) or "theme" not in item or "explanation" not in item:
            raise AnalysisParseError("Each key theme needs 'theme' and 'explanation'.")
        themes.append(KeyTheme(theme=str(item["theme"]), explanation=str(item["explanation"])))

    return TrendAnalysis(
        summary=str(data["summary"]),
        key_themes=tuple(themes),
        audience_insights=str(data["audienceInsights"]),
        prediction=str(data["prediction"]),
    )


class TrendAnalyzer:
    """Single-shot Gemini call; failures are reported, never retried."""

    def __init__(self, api_key: str, model_name: str = DEFAULT_GEMINI_MODEL, client: Any = None) -> None:
        self.model_name = model_name
        self.client = client or Client(api_key=api_key)

        logger.info("Initialized trend analyzer with model: %s", model_name)

    def analyze(self, videos: Sequence[EnrichedVideo]) -> TrendAnalysis:
        prompt = build_prompt(videos)

        try:
            response = self.client.models.generate_content(
                model=self.model_name,
                contents=prompt,
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=RESPONSE_SCHEMA,
                ),
            )
        except Exception as e:
            logger.error("Trend analysis request failed: %s", e)
            raise AnalysisGenerationError(f"Trend analysis request failed: {e}") from e

        text = getattr(response, "text", None)
        if not text or not text.strip():
            logger.error("AI response is empty")
            raise AnalysisGenerationError("The model returned no text.")

        return parse_analysis(text)
