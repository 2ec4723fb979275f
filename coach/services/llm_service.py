import logging
from dataclasses import dataclass

from openai import AsyncOpenAI, OpenAIError

from coach.config.settings import Settings
from coach.errors import UpstreamError


@dataclass(frozen=True)
class CompletionOptions:
    temperature: float = 0.7
    max_tokens: int = 8000
    json_mode: bool = True


@dataclass(frozen=True)
class Completion:
    text: str
    truncated: bool = False


class LLMService:
    """Thin adapter over an OpenAI-compatible chat completion endpoint."""

    def __init__(self, client: AsyncOpenAI, model: str, timeout: float = 180.0):
        self.client = client
        self.model = model
        self.timeout = timeout

    async def complete(
        self, prompt: str, options: CompletionOptions | None = None
    ) -> Completion:
        """
        Sends one prompt and returns the raw text.

        `truncated` is set when the model stopped on the output token cap; the
        text is returned as-is and the caller must not parse it.
        """
        options = options or CompletionOptions()
        request = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": options.temperature,
            "max_tokens": options.max_tokens,
            "timeout": self.timeout,
        }
        if options.json_mode:
            request["response_format"] = {"type": "json_object"}

        try:
            chat_completion = await self.client.chat.completions.create(**request)
        except OpenAIError as e:
            raise UpstreamError(f"Completion request failed: {e}") from e

        if not chat_completion.choices:
            raise UpstreamError("Empty response from LLM")

        choice = chat_completion.choices[0]
        text = choice.message.content if choice.message else None
        if not text:
            raise UpstreamError("Empty response from LLM")

        truncated = choice.finish_reason == "length"
        if truncated:
            logging.warning(
                f"LLM output hit the token cap ({options.max_tokens}), {len(text)} chars received"
            )
        return Completion(text=text, truncated=truncated)


def create_llm_service(settings: Settings) -> LLMService:
    client = AsyncOpenAI(api_key=settings.LLM_API_KEY, base_url=settings.LLM_API_URL)
    return LLMService(client, model=settings.LLM_MODEL, timeout=settings.LLM_TIMEOUT_SECONDS)
