"""Adapter for Gemini's native generateContent endpoint.

Sends the raw PDF inline (base64) next to the instruction so the model can
read layout and images directly. The API key travels in the query string,
as the native endpoint expects, and is never logged.
"""

import logging
import time
from typing import Any

import httpx

from pdfanalyzer.domain.errors import (
    RemoteApiError,
    TransportFailureError,
    UnexpectedResponseShapeError,
)
from pdfanalyzer.domain.interfaces.model_client import ModelClient
from pdfanalyzer.domain.models.ai import ModelRequestPayload, ModelResponse, MultimodalPayload
from pdfanalyzer.domain.models.common import ApiKey, Instruction, ModelId

logger = logging.getLogger(__name__)

GEMINI_API_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


class GeminiMultimodalClient(ModelClient):
    """ModelClient for ``models/{model}:generateContent``."""

    endpoint_name = "Gemini generateContent"

    def __init__(self, api_key: ApiKey, http_client: httpx.Client, base_url: str = GEMINI_API_BASE_URL):
        self.api_key = api_key
        self.http_client = http_client
        self.base_url = base_url.rstrip("/")

    def submit_document(self, document_bytes: bytes, instruction: Instruction, model_id: ModelId) -> ModelResponse:
        """Encodes the document and submits it with the instruction."""
        payload = MultimodalPayload.from_document(document_bytes, instruction)
        return self.submit(payload, model_id)

    def submit(self, payload: ModelRequestPayload, model_id: ModelId) -> ModelResponse:
        if not isinstance(payload, MultimodalPayload):
            raise TypeError(f"{self.endpoint_name} accepts MultimodalPayload, got {type(payload).__name__}")

        url = f"{self.base_url}/models/{model_id}:generateContent"
        logger.debug(f"Sending {len(payload.document_bytes_base64)} base64 chars to {self.endpoint_name} (model: {model_id})")
        start_time = time.perf_counter()
        try:
            response = self.http_client.post(
                url,
                params={"key": self.api_key},
                json=payload.to_request_body(),
            )
        except httpx.HTTPError as e:
            logger.warning(f"{self.endpoint_name} transport failure: {type(e).__name__}: {e}")
            raise TransportFailureError(self.endpoint_name, e) from e
        latency_ms = (time.perf_counter() - start_time) * 1000
        logger.debug(f"{self.endpoint_name} answered {response.status_code} in {latency_ms:.2f}ms")

        if not response.is_success:
            raise RemoteApiError(self.endpoint_name, response.status_code, response.text)

        answer = self._parse_answer(response)
        return ModelResponse.success(response.status_code, answer)

    def _parse_answer(self, response: httpx.Response) -> str:
        """Reads candidates[0].content.parts[0].text, verbatim."""
        try:
            data: Any = response.json()
        except ValueError as e:
            raise UnexpectedResponseShapeError(
                self.endpoint_name, response.status_code, response.text, "body is not valid JSON"
            ) from e

        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            logger.debug(f"Raw {self.endpoint_name} response: {response.text}")
            raise UnexpectedResponseShapeError(
                self.endpoint_name,
                response.status_code,
                response.text,
                "missing candidates[0].content.parts[0].text",
            ) from e

        if not isinstance(text, str):
            raise UnexpectedResponseShapeError(
                self.endpoint_name, response.status_code, response.text, "answer text is not a string"
            )
        return text
