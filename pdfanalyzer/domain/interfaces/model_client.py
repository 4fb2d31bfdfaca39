"""Interface for remote model endpoints.

Both the multimodal and the chat adapter share one contract: one blocking
round trip per call, a parsed ModelResponse on success, and a typed
AnalyzerError on any failure. Neither retries.
"""

import abc

from pdfanalyzer.domain.models.ai import ModelRequestPayload, ModelResponse
from pdfanalyzer.domain.models.common import ModelId


class ModelClient(abc.ABC):
    """Abstract Base Class for a "submit and parse" model endpoint."""

    #: Human-readable endpoint name used in logs and diagnostics.
    endpoint_name: str = "model"

    @abc.abstractmethod
    def submit(self, payload: ModelRequestPayload, model_id: ModelId) -> ModelResponse:
        """Sends one request and parses the answer.

        Args:
            payload: The request payload in the shape this endpoint accepts.
            model_id: The model to address.

        Returns:
            A succeeded ModelResponse carrying the answer text.

        Raises:
            RemoteApiError: Non-success HTTP status.
            UnexpectedResponseShapeError: Success status without an answer.
            TransportFailureError: No HTTP status was received.
        """
        pass
