"""Adapter for Gemini's OpenAI-compatible chat-completions endpoint.

Hides the specifics of the OpenAI client library and translates between the
domain payloads and the chat-completions format. Used on the fallback path
with extracted PDF text.
"""

import logging
import time
from typing import Optional, Union

import httpx
from openai import APIConnectionError, APIResponseValidationError, APIStatusError, OpenAI

from pdfanalyzer.domain.errors import (
    RemoteApiError,
    TransportFailureError,
    UnexpectedResponseShapeError,
)
from pdfanalyzer.domain.interfaces.model_client import ModelClient
from pdfanalyzer.domain.models.ai import ChatPayload, ModelRequestPayload, ModelResponse
from pdfanalyzer.domain.models.common import ApiKey, ModelId

logger = logging.getLogger(__name__)

GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


class GeminiChatClient(ModelClient):
    """ModelClient for ``chat/completions`` (bearer credential)."""

    endpoint_name = "Gemini chat completions"

    def __init__(
        self,
        api_key: ApiKey,
        http_client: Optional[httpx.Client] = None,
        base_url: str = GEMINI_OPENAI_BASE_URL,
        timeout: Optional[Union[float, httpx.Timeout]] = None,
    ):
        """Initializes the OpenAI client against the Gemini base URL.

        Args:
            api_key: Sent as ``Authorization: Bearer <key>``.
            http_client: Shared transport; the SDK builds its own if None.
            base_url: OpenAI-compatible base URL.
            timeout: Optional request timeout. If None, the SDK follows the
                shared client's timeout, or its own default without one.
        """
        client_kwargs = {"api_key": api_key, "base_url": base_url, "max_retries": 0}
        if http_client is not None:
            client_kwargs["http_client"] = http_client
        if timeout is not None:
            client_kwargs["timeout"] = timeout
        # max_retries=0: one round trip per call, fallback policy lives in the service
        self.client = OpenAI(**client_kwargs)
        logger.debug(f"GeminiChatClient initialized for base URL: {base_url}")

    def submit_chat(self, prompt_text: str, model_id: ModelId) -> ModelResponse:
        """Sends ``prompt_text`` as a single user message."""
        return self.submit(ChatPayload(model_id=model_id, combined_text=prompt_text), model_id)

    def submit(self, payload: ModelRequestPayload, model_id: ModelId) -> ModelResponse:
        if not isinstance(payload, ChatPayload):
            raise TypeError(f"{self.endpoint_name} accepts ChatPayload, got {type(payload).__name__}")

        body = payload.to_request_body()
        logger.debug(f"Sending {len(payload.combined_text)} chars to {self.endpoint_name} (model: {body['model']})")
        start_time = time.perf_counter()
        try:
            raw_response = self.client.chat.completions.with_raw_response.create(
                model=body["model"],
                messages=body["messages"],
                temperature=body["temperature"],
            )
        except APIStatusError as e:
            raise RemoteApiError(self.endpoint_name, e.status_code, e.response.text) from e
        except APIConnectionError as e:
            # Includes APITimeoutError
            logger.warning(f"{self.endpoint_name} transport failure: {type(e).__name__}: {e}")
            raise TransportFailureError(self.endpoint_name, e) from e
        except APIResponseValidationError as e:
            raise UnexpectedResponseShapeError(
                self.endpoint_name, e.status_code, e.response.text, "response failed validation"
            ) from e
        latency_ms = (time.perf_counter() - start_time) * 1000

        status_code = raw_response.http_response.status_code
        logger.debug(f"{self.endpoint_name} answered {status_code} in {latency_ms:.2f}ms")

        try:
            completion = raw_response.parse()
        except ValueError as e:
            # JSON content type, undecodable body
            raise UnexpectedResponseShapeError(
                self.endpoint_name, status_code, raw_response.http_response.text, "body is not valid JSON"
            ) from e

        try:
            content = completion.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as e:
            logger.debug(f"Raw {self.endpoint_name} response: {raw_response.http_response.text}")
            raise UnexpectedResponseShapeError(
                self.endpoint_name, status_code, raw_response.http_response.text, "missing choices[0].message"
            ) from e
        if content is None:
            raise UnexpectedResponseShapeError(
                self.endpoint_name, status_code, raw_response.http_response.text, "choices[0].message.content is empty"
            )
        return ModelResponse.success(status_code, content)
