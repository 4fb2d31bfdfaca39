"""
Core service for handling PDF analysis requests.

Runs the two-strategy pipeline: resolve the file reference, submit the raw
PDF to the multimodal endpoint, and on any failure extract the text locally
and resubmit it to the chat endpoint. The first successful answer wins;
there is no third strategy.
"""

import logging
from typing import List

from pdfanalyzer.core.uri_resolver import UriResolver
from pdfanalyzer.domain.errors import AnalyzerError, FileNotAccessibleError, InvalidReferenceError
from pdfanalyzer.domain.interfaces.file_system import FileSystem
from pdfanalyzer.domain.interfaces.model_client import ModelClient
from pdfanalyzer.domain.interfaces.text_extractor import TextExtractor
from pdfanalyzer.domain.models.ai import ChatPayload, ModelRequestPayload, ModelResponse, MultimodalPayload
from pdfanalyzer.domain.models.analysis import AnalysisOutcome, AnalysisRequest, AttemptRecord
from pdfanalyzer.domain.models.common import STRATEGY_CHAT, STRATEGY_MULTIMODAL, AnswerText, ModelId

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Error: "


class AnalysisService:
    """Orchestrates the PDF analysis functionality."""

    def __init__(
        self,
        resolver: UriResolver,
        file_system: FileSystem,
        multimodal_client: ModelClient,
        chat_client: ModelClient,
        text_extractor: TextExtractor,
    ):
        """Initializes the AnalysisService with its dependencies."""
        self.resolver = resolver
        self.file_system = file_system
        self.multimodal_client = multimodal_client
        self.chat_client = chat_client
        self.text_extractor = text_extractor

    def analyze(self, request: AnalysisRequest) -> AnalysisOutcome:
        """Produces the model's answer for ``request``, or a diagnostic.

        Never raises for per-request failures: every failure kind ends up as
        an error outcome with a one-line message.
        """
        logger.info(f"Analyzing PDF '{request.file_reference}' with model: {request.model_id}")

        # 1. Resolve the reference; no network call unless the file is usable
        try:
            document = self.resolver.resolve(request.file_reference)
        except InvalidReferenceError as e:
            logger.warning(f"Rejected file reference: {e.describe()}")
            return self._error_outcome(str(e), request.model_id, [])

        if not document.accessible:
            logger.warning(f"PDF file does not exist or cannot be read: {document.absolute_path}")
            return self._error_outcome(str(FileNotAccessibleError(document.absolute_path)), request.model_id, [])

        try:
            document_bytes = self.file_system.read_bytes(document.absolute_path)
        except FileNotAccessibleError as e:
            logger.warning(f"Could not read PDF: {e.describe()}")
            return self._error_outcome(str(e), request.model_id, [])

        attempts: List[AttemptRecord] = []

        # 2. Direct multimodal attempt; any failure falls through to step 3
        logger.info("Attempting direct PDF upload to Gemini...")
        try:
            payload = MultimodalPayload.from_document(document_bytes, request.instruction)
            response = self._submit(self.multimodal_client, payload, request.model_id)
        except Exception as e:
            if not isinstance(e, AnalyzerError):
                logger.error(f"Unexpected error during direct PDF upload: {e}", exc_info=True)
            logger.warning(f"Direct PDF upload failed, falling back to text extraction: {type(e).__name__}: {e}")
            attempts.append(AttemptRecord(STRATEGY_MULTIMODAL, False, type(e).__name__, str(e)))
        else:
            attempts.append(AttemptRecord(STRATEGY_MULTIMODAL, True))
            return self._success_outcome(response, request.model_id, attempts)

        # 3. Fallback: local extraction + chat completion, terminal on failure
        logger.info("Using text extraction fallback method...")
        try:
            document_text = self.text_extractor.extract_text(document.absolute_path)
            payload = ChatPayload.for_fallback(request.model_id, request.instruction, document_text)
            response = self._submit(self.chat_client, payload, request.model_id)
        except AnalyzerError as e:
            logger.error(f"Text extraction fallback failed: {e.describe()}")
            attempts.append(AttemptRecord(STRATEGY_CHAT, False, type(e).__name__, str(e)))
            return self._error_outcome(str(e), request.model_id, attempts)
        except Exception as e:
            logger.error(f"Unexpected error during text extraction fallback: {e}", exc_info=True)
            attempts.append(AttemptRecord(STRATEGY_CHAT, False, type(e).__name__, str(e)))
            return self._error_outcome(f"Unexpected failure: {type(e).__name__}: {e}", request.model_id, attempts)

        attempts.append(AttemptRecord(STRATEGY_CHAT, True))
        return self._success_outcome(response, request.model_id, attempts)

    def _submit(self, client: ModelClient, payload: ModelRequestPayload, model_id: ModelId) -> ModelResponse:
        response = client.submit(payload, model_id)
        logger.info(f"{client.endpoint_name} answered with status {response.status_code}")
        return response

    @staticmethod
    def _success_outcome(response: ModelResponse, model_id: ModelId, attempts: List[AttemptRecord]) -> AnalysisOutcome:
        return AnalysisOutcome(
            answer_text=AnswerText(response.answer_text or ""),
            is_error=False,
            attempts=tuple(attempts),
            model_id=model_id,
        )

    @staticmethod
    def _error_outcome(message: str, model_id: ModelId, attempts: List[AttemptRecord]) -> AnalysisOutcome:
        # Diagnostics are one line, whatever the underlying message holds
        diagnostic = " ".join(f"{ERROR_PREFIX}{message}".split())
        return AnalysisOutcome(
            answer_text=AnswerText(diagnostic),
            is_error=True,
            attempts=tuple(attempts),
            model_id=model_id,
        )
