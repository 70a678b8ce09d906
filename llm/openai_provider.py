"""
OpenAI-compatible LLM providers.

OpenRouter speaks the same chat-completions API at a different base_url,
so both live here on the OpenAI SDK.
"""

from llm.provider import LLMProvider, LLMResponse, LLMError

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"


class OpenAIProvider(LLMProvider):
    label = "openai"
    key_env = "OPENAI_API_KEY"
    base_url: str | None = None

    def __init__(self, api_key: str, model: str = "gpt-4o-mini", timeout: float = 60.0):
        if not api_key:
            raise LLMError(f"{self.key_env} not set")
        try:
            import openai
        except ImportError:
            raise LLMError("openai package not installed: pip install openai")
        self._client = openai.OpenAI(
            api_key=api_key,
            base_url=self.base_url,
            timeout=timeout,
            max_retries=1,
        )
        self._model = model

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.3,
        max_tokens: int = 400,
    ) -> LLMResponse:
        try:
            response = self._client.chat.completions.create(
                model=self._model,
                max_tokens=max_tokens,
                temperature=temperature,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except Exception as e:
            raise LLMError(f"{self.label} API error: {e}") from e

        if not response.choices:
            raise LLMError(f"{self.label} returned no choices")
        usage = response.usage
        return LLMResponse(
            text=response.choices[0].message.content or "",
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
            model=self._model,
        )

    def name(self) -> str:
        return f"{self.label}/{self._model}"


class OpenRouterProvider(OpenAIProvider):
    label = "openrouter"
    key_env = "OPENROUTER_API_KEY"
    base_url = OPENROUTER_BASE_URL
