"""
Enrichment engine. Takes a normalized item + LLM provider, produces the
short text that gets published.
"""

import json
import logging

from llm.provider import LLMProvider, LLMError
from models import NormalizedItem
from synthesizer.prompts import SUMMARY_SYSTEM, SUMMARY_USER

log = logging.getLogger(__name__)


class Enricher:
    def __init__(self, llm: LLMProvider, temperature: float = 0.2, max_tokens: int = 300):
        self._llm = llm
        self._temperature = temperature
        self._max_tokens = max_tokens

    def enrich(self, item: NormalizedItem) -> str:
        """
        Summarize one item.

        Raises:
            LLMError: provider failure, or an empty summary.
        """
        prompt = SUMMARY_USER.format(
            post=json.dumps(item.to_dict(), ensure_ascii=False, indent=2),
        )

        response = self._llm.complete(
            system_prompt=SUMMARY_SYSTEM,
            user_prompt=prompt,
            temperature=self._temperature,
            max_tokens=self._max_tokens,
        )
        log.debug(
            f"Summary for {item.id}: {response.input_tokens} in, "
            f"{response.output_tokens} out ({response.model})"
        )

        text = response.text.strip()
        if not text:
            raise LLMError(f"Empty summary for item {item.id} from {self._llm.name()}")
        return text
