"""Static catalog of the Gemini / Gemma models the analyzer can address.

The catalog is informational: any model id is passed through to the API
unchanged, listed or not.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

DEFAULT_MODEL = "gemini-2.0-flash"


@dataclass(frozen=True)
class GeminiModel:
    """Entity representing a model reachable through the Gemini API."""
    model_id: str
    description: str


GEMINI_MODELS: Tuple[GeminiModel, ...] = (
    GeminiModel("gemini-2.5-flash-preview-05-20", "Latest preview with high RPM (10 RPM, 250K TPM)"),
    GeminiModel("gemini-2.5-flash-preview-04-17", "Latest preview with high RPM (10 RPM, 250K TPM)"),
    GeminiModel("gemini-2.5-pro-preview-05-06", "Pro version with advanced capabilities"),
    GeminiModel("gemini-2.0-flash", "Stable, fast model (15 RPM)"),
    GeminiModel("gemini-2.0-flash-lite", "Lightweight version (30 RPM)"),
    GeminiModel("gemini-1.5-flash", "Stable general-purpose model"),
    GeminiModel("gemini-1.5-flash-8b", "Lightweight 8B parameter model"),
    GeminiModel("gemini-1.5-pro", "Pro version for complex tasks"),
    GeminiModel("gemma-3-27b-it", "Open model, 27B parameters"),
    GeminiModel("gemma-3-12b-it", "Open model, 12B parameters"),
    GeminiModel("gemma-3-4b-it", "Open model, 4B parameters"),
    GeminiModel("gemma-3-1b-it", "Open model, 1B parameters"),
)


def available_model_ids() -> List[str]:
    return [model.model_id for model in GEMINI_MODELS]


def model_capabilities() -> Dict[str, str]:
    return {model.model_id: model.description for model in GEMINI_MODELS}
