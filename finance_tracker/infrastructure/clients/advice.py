"""Streaming HTTP client for the advice text-generation endpoint"""

import json
import httpx
from typing import AsyncIterator, Optional
from finance_tracker.config import settings
from finance_tracker.domain.advice import build_advice_prompt
from finance_tracker.domain.exceptions import AdviceServiceError, AdviceUnavailableError
from finance_tracker.domain.models import FinancialData


def extract_text(chunk: dict) -> str:
    """Concatenate the text parts of one streamed response chunk"""
    texts = []
    for candidate in chunk.get("candidates", []):
        for part in candidate.get("content", {}).get("parts", []):
            text = part.get("text")
            if text:
                texts.append(text)
    return "".join(texts)


class AdviceClient:
    """Client for the external text-generation API"""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.advice_api_key
        self.base_url = base_url or settings.advice_api_base
        self.model = model or settings.advice_model
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    def ensure_configured(self) -> None:
        """
        Raises:
            AdviceUnavailableError: No API credential is configured
        """
        if not self.api_key:
            raise AdviceUnavailableError("ADVICE_API_KEY environment variable is not set.")

    async def stream_advice(self, data: FinancialData, question: str) -> AsyncIterator[str]:
        """
        Stream answer fragments for a question about the snapshot.

        The stream is lazy and finite. A consumer may stop iterating at any
        point; closing the generator closes the HTTP response.

        Raises:
            AdviceUnavailableError: Missing credential (before any network I/O)
            AdviceServiceError: On timeout, HTTP errors, or invalid response
        """
        self.ensure_configured()
        url = f"{self.base_url}/v1beta/models/{self.model}:streamGenerateContent"
        body = {"contents": [{"parts": [{"text": build_advice_prompt(data, question)}]}]}

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                async with client.stream(
                    "POST",
                    url,
                    params={"alt": "sse"},
                    headers={"x-goog-api-key": self.api_key},
                    json=body,
                ) as response:
                    response.raise_for_status()
                    async for line in response.aiter_lines():
                        if not line.startswith("data:"):
                            continue
                        payload = line[len("data:"):].strip()
                        if not payload:
                            continue
                        text = extract_text(json.loads(payload))
                        if text:
                            yield text

            except httpx.TimeoutException as e:
                raise AdviceServiceError(f"Advice API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise AdviceServiceError(f"Advice API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise AdviceServiceError(f"Advice API unreachable: {e}") from e
            except (ValueError, TypeError, AttributeError) as e:
                raise AdviceServiceError(f"Invalid response from advice API: {e}") from e
