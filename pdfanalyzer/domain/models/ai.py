"""Domain models related to the remote model endpoints.

Includes the two request payload shapes and the parsed response record.
"""

import base64
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from .common import AnswerText, Instruction, ModelId

PDF_MIME_TYPE = "application/pdf"

# Fixed generation parameters, part of the adapters' contract.
TEMPERATURE = 0.7
MAX_OUTPUT_TOKENS = 8192

# Marker placed between the instruction and extracted text in fallback prompts.
DOCUMENT_SEPARATOR = "\n\n--- PDF Content ---\n"


@dataclass(frozen=True)
class MultimodalPayload:
    """Instruction plus inline document bytes for a generateContent request."""
    instruction_text: Instruction
    document_bytes_base64: str
    mime_type: str = PDF_MIME_TYPE

    @classmethod
    def from_document(cls, document_bytes: bytes, instruction: Instruction) -> "MultimodalPayload":
        encoded = base64.b64encode(document_bytes).decode("ascii")
        return cls(instruction_text=instruction, document_bytes_base64=encoded)

    def to_request_body(self) -> Dict[str, Any]:
        text_part = {"text": self.instruction_text}
        file_part = {
            "inline_data": {
                "mime_type": self.mime_type,
                "data": self.document_bytes_base64,
            }
        }
        return {
            "contents": [{"parts": [text_part, file_part]}],
            "generationConfig": {
                "temperature": TEMPERATURE,
                "maxOutputTokens": MAX_OUTPUT_TOKENS,
            },
        }


@dataclass(frozen=True)
class ChatPayload:
    """A single role-tagged message for a chat-completions request."""
    model_id: ModelId
    combined_text: str
    role: str = "user"

    @classmethod
    def for_fallback(cls, model_id: ModelId, instruction: Instruction, document_text: str) -> "ChatPayload":
        """Builds the degraded prompt: instruction, separator, extracted text."""
        return cls(model_id=model_id, combined_text=f"{instruction}{DOCUMENT_SEPARATOR}{document_text}")

    def to_request_body(self) -> Dict[str, Any]:
        return {
            "model": self.model_id,
            "messages": [{"role": self.role, "content": self.combined_text}],
            "temperature": TEMPERATURE,
        }


ModelRequestPayload = Union[MultimodalPayload, ChatPayload]


@dataclass(frozen=True)
class ModelResponse:
    """Parsed result of one round trip to a model endpoint."""
    succeeded: bool
    status_code: int
    answer_text: Optional[AnswerText] = None  # present iff succeeded
    raw_body: Optional[str] = None            # present iff failed

    @classmethod
    def success(cls, status_code: int, answer_text: str) -> "ModelResponse":
        return cls(succeeded=True, status_code=status_code, answer_text=AnswerText(answer_text))

    @classmethod
    def failure(cls, status_code: int, raw_body: str) -> "ModelResponse":
        return cls(succeeded=False, status_code=status_code, raw_body=raw_body)
