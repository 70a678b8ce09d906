from llm.factory import create_provider
from llm.provider import LLMProvider, LLMResponse, LLMError

__all__ = ["create_provider", "LLMProvider", "LLMResponse", "LLMError"]
