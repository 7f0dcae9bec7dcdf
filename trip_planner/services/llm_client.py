"""
LLM Client - Unified interface for OpenAI-compatible LLM providers.
Supports Gemini, OpenAI, OpenRouter, and Ollama.
"""
from openai import AsyncOpenAI, BadRequestError
from typing import Optional
import json
import logging
import re

from ..config import get_llm_config
from ..errors import LLMConfigurationError

logger = logging.getLogger(__name__)

# Providers that can run without an API key
KEYLESS_PROVIDERS = ("ollama", "mock")


def _json_candidates(text: str) -> list[str]:
    """The text itself, its fenced block and its outermost-brace slice."""
    candidates = [text]

    # Markdown code block
    fence = re.search(r'```(?:json)?\s*([\s\S]*?)```', text)
    if fence:
        candidates.append(fence.group(1).strip())

    # Outermost braces
    start = text.find('{')
    end = text.rfind('}')
    if start != -1 and end > start:
        sliced = text[start:end + 1]
        candidates.append(sliced)
        # Trailing commas before closing brackets
        candidates.append(re.sub(r",\s*([\]}])", r"\1", sliced))

    return candidates


def parse_json_response(text: Optional[str]) -> dict:
    """
    Parse a JSON object from LLM output, tolerating common damage.

    Handles smart quotes, markdown code fences, leading/trailing prose and
    trailing commas. Anything that still does not parse to an object
    yields an empty dict.
    """
    if not text:
        return {}

    text = text.strip()
    # Curly quotes are legal inside JSON strings, so the untouched text goes first
    normalized = re.sub(r'[\u201c\u201d]', '"', text)
    normalized = re.sub(r"[\u2018\u2019]", "'", normalized)

    candidates = _json_candidates(text)
    if normalized != text:
        candidates += _json_candidates(normalized)

    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, dict):
            return parsed

    logger.warning(f"Could not parse JSON from model response (length: {len(text)})")
    return {}


class LLMClient:
    """Async LLM client with OpenAI-compatible API."""

    def __init__(self):
        config = get_llm_config()
        self.provider = config["provider"]
        self.temperature = config["temperature"]
        self.max_tokens = config["max_tokens"]

        if self.provider == "mock":
            from .mock_llm import MockLLMClient
            self._mock = MockLLMClient()
            self.model = self._mock.model
            self.client = None
            return

        if not config["api_key"] and self.provider not in KEYLESS_PROVIDERS:
            raise LLMConfigurationError("LLM API key missing")

        self._mock = None
        self.model = config["model"]
        self.client = AsyncOpenAI(
            api_key=config["api_key"] or "ollama",
            base_url=config["base_url"],
            timeout=config["timeout"],
        )
        logger.info(f"Initialized LLMClient with provider={self.provider}, model={self.model}")

    async def chat(
        self,
        messages: list[dict],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        json_mode: bool = False
    ) -> str:
        """
        Send a chat completion request.

        Args:
            messages: List of message dicts with 'role' and 'content'
            temperature: Override default temperature
            max_tokens: Override default max tokens
            json_mode: If True, request JSON response format

        Returns:
            The assistant's response content
        """
        if self._mock is not None:
            return await self._mock.chat(messages, temperature, max_tokens, json_mode)

        kwargs = {
            "model": self.model,
            "messages": messages,
            "temperature": self.temperature if temperature is None else temperature,
            "max_tokens": max_tokens or self.max_tokens,
        }

        # JSON mode support (not all providers support this)
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = await self.client.chat.completions.create(**kwargs)
        except BadRequestError as e:
            if "response_format" not in kwargs or "response_format" not in str(e):
                raise
            logger.info(f"Provider rejected JSON mode, retrying without it: {e}")
            del kwargs["response_format"]
            response = await self.client.chat.completions.create(**kwargs)

        # Blocked or empty completions come back without choices
        if not response.choices:
            logger.warning(f"Empty completion from {self.provider}")
            return ""
        return response.choices[0].message.content or ""

    async def chat_json(
        self,
        messages: list[dict],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None
    ) -> dict:
        """
        Send a chat request and parse JSON response.

        Returns:
            Parsed JSON dict ({} when the response is unusable)
        """
        response = await self.chat(
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
            json_mode=True
        )
        return parse_json_response(response)


# Global LLM client instance
llm_client: Optional[LLMClient] = None


def get_llm_client() -> LLMClient:
    """Get or create the global LLM client."""
    global llm_client
    if llm_client is None:
        llm_client = LLMClient()
    return llm_client
