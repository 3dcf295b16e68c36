"""AI-generated commentary on a trader's recent journal entries.

The narrator is best-effort: every failure becomes a fixed fallback text so
that dashboard and trade routes never depend on the language model.
"""

import asyncio
import json
import logging
from typing import Sequence

from backend.utils.constants import (
    INSIGHT_FALLBACK_MESSAGE,
    INSIGHT_PROMPT_TEMPLATE,
    INSIGHT_SYSTEM_INSTRUCTION,
    MAX_TRADES_FOR_INSIGHTS,
    MIN_TRADES_FOR_INSIGHTS,
    NOT_ENOUGH_TRADES_MESSAGE,
)

logger = logging.getLogger(__name__)


class InsightServiceError(Exception):
    """The text-generation service could not produce an answer."""


class TextGenerator:
    """Interface for a text-generation backend."""

    async def generate(self, prompt: str, system_instruction: str) -> str:
        raise NotImplementedError


class GeminiTextGenerator(TextGenerator):
    """Google Gemini backend via the google-generativeai SDK."""

    def __init__(self, api_key: str, model: str = "gemini-2.0-flash"):
        self.api_key = api_key
        self.model = model

    async def generate(self, prompt: str, system_instruction: str) -> str:
        if not self.api_key:
            raise InsightServiceError("TJ_GEMINI_API_KEY not set")

        import google.generativeai as genai

        genai.configure(api_key=self.api_key)
        gen_model = genai.GenerativeModel(
            model_name=self.model,
            system_instruction=system_instruction,
        )
        response = await gen_model.generate_content_async(prompt)

        text = response.text if response.candidates else ""
        if not text:
            raise InsightServiceError(f"Empty response from {self.model}")
        return text


def summarize_trades(trades: Sequence) -> list[dict]:
    """Fields the model sees for each of the most recent trades (newest first)."""
    return [
        {
            "asset": t.asset,
            "result": t.result_cash,
            "setup": t.setup,
            "planned": t.is_planned,
            "emotion": t.emotion,
            "discipline": t.discipline_note,
            "time": t.entry_time,
        }
        for t in list(trades)[:MAX_TRADES_FOR_INSIGHTS]
    ]


class InsightNarrator:
    """Turns a trade list into a short mentor-style commentary."""

    def __init__(self, generator: TextGenerator, timeout_seconds: float = 20.0):
        self.generator = generator
        self.timeout_seconds = timeout_seconds

    async def summarize(self, trades: Sequence) -> str:
        """Commentary for ``trades`` (store order, newest first). Never raises."""
        if len(trades) < MIN_TRADES_FOR_INSIGHTS:
            return NOT_ENOUGH_TRADES_MESSAGE

        prompt = INSIGHT_PROMPT_TEMPLATE.format(
            data=json.dumps(summarize_trades(trades), ensure_ascii=False)
        )
        try:
            return await asyncio.wait_for(
                self.generator.generate(prompt, INSIGHT_SYSTEM_INSTRUCTION),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Insight generation timed out after {self.timeout_seconds}s")
        except Exception as e:
            logger.error(f"Insight generation failed: {e}")
        return INSIGHT_FALLBACK_MESSAGE
