# 📄 File: plantpal/shared/infrastructure/external_apis/llm_client.py

# 🧭 Purpose (Layman Explanation):
# Sends questions to the hosted AI text service and hands back its written answer,
# including pulling structured data out of answers wrapped in chat formatting.

# 🧪 Purpose (Technical Summary):
# Thin async chat-completions client over httpx with a bounded timeout, one shared
# connection pool and JSON answer extraction tolerant of Markdown code fences.

# 🔗 Dependencies:
# - httpx: Async HTTP client (injectable transport for tests)
# - plantpal.shared.core.exceptions: ExternalServiceError

# 🔄 Connected Modules / Calls From:
# Used by: Community search augmenter
# Lifecycle: plantpal.shared.infrastructure.container (aclose on shutdown)

import json
import logging
from typing import Any, Dict, List, Optional

import httpx

from plantpal.shared.core.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)

SERVICE_NAME = "openai"


class ChatCompletionClient:
    """
    Minimal client for an OpenAI-compatible ``/chat/completions`` endpoint.

    A single ``httpx.AsyncClient`` is created on first use and reused until
    ``aclose`` is called. No retries are attempted.
    """

    def __init__(
        self,
        api_key: str,
        api_url: str,
        model: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = api_url
        self.model = model
        self.timeout = timeout
        self._api_key = api_key
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
                headers={
                    "Authorization": f"Bearer {self._api_key}",
                    "Content-Type": "application/json",
                },
            )
        return self._client

    async def complete(self, prompt: str, max_tokens: int = 300, temperature: float = 0.3) -> str:
        """
        Ask a single-turn question.

        Args:
            prompt: User message content
            max_tokens: Completion token budget
            temperature: Sampling temperature

        Returns:
            str: The assistant message content

        Raises:
            ExternalServiceError: On transport errors, non-2xx responses or
                responses without a message
        """
        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        try:
            response = await self.client.post(self.api_url, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning(f"Chat completion failed with status {e.response.status_code}")
            raise ExternalServiceError(
                "Chat completion request failed",
                service=SERVICE_NAME,
                service_response=e.response.text,
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Chat completion request error: {e}")
            raise ExternalServiceError("Chat completion request failed", service=SERVICE_NAME)

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            raise ExternalServiceError("Chat completion response has no message", service=SERVICE_NAME)
        if not isinstance(content, str):
            raise ExternalServiceError("Chat completion message is not text", service=SERVICE_NAME)
        return content

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


def strip_code_fences(content: str) -> str:
    """Remove a surrounding Markdown code fence (```json ... ```) if present."""
    text = (content or "").strip()
    if text.startswith("```"):
        first_newline = text.find("\n")
        text = text[first_newline + 1:] if first_newline != -1 else text[3:]
        if text.rstrip().endswith("```"):
            text = text.rstrip()[:-3]
    return text.strip()


def parse_json_answer(content: str) -> Any:
    """
    Parse the JSON value in a model answer.

    Accepts a bare JSON document, one wrapped in a code fence, or one
    preceded/followed by prose (the first object or array is used).

    Raises:
        ValueError: If no JSON value can be found
    """
    text = strip_code_fences(content)
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    decoder = json.JSONDecoder()
    starts: List[int] = [i for i in (text.find("{"), text.find("[")) if i != -1]
    for start in sorted(starts):
        try:
            value, _ = decoder.raw_decode(text[start:])
            return value
        except json.JSONDecodeError:
            continue
    raise ValueError("No JSON value found in answer")
