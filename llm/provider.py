"""
LLMProvider interface. Every generation call goes through here.

Implementations live in separate modules. No provider-specific
logic exists outside of llm/*.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class LLMResponse:
    """What comes back from any LLM call."""
    text: str
    input_tokens: int
    output_tokens: int
    model: str


class LLMProvider(ABC):
    """
    Single interface for all LLM providers.

    - One method: `complete`. System prompt + user prompt, no history.
    - Outputs here are short (a post-sized summary), so max_tokens
      defaults low to bound cost and latency.
    - Providers are built once per process and reused across items.
    """

    @abstractmethod
    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.3,
        max_tokens: int = 400,
    ) -> LLMResponse:
        """
        Send a prompt to the LLM and get a response.

        Raises:
            LLMError: On any provider-specific failure.
        """
        ...

    @abstractmethod
    def name(self) -> str:
        """Return provider name for logging."""
        ...


class LLMError(Exception):
    """Raised when an LLM call fails or returns nothing usable."""
    pass
