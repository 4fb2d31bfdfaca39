"""Service behind the informational model listing."""

import logging
from typing import Any, Dict

from pdfanalyzer.domain.models.common import ModelId
from pdfanalyzer.infrastructure.ai.gemini.gemini_models import available_model_ids, model_capabilities

logger = logging.getLogger(__name__)


class ModelCatalogService:
    """Reports the configured default model and the static catalog."""

    def __init__(self, default_model: ModelId):
        self.default_model = default_model

    def list_models(self) -> Dict[str, Any]:
        listing = {
            "defaultModel": self.default_model,
            "availableModels": available_model_ids(),
            "modelCapabilities": model_capabilities(),
        }
        logger.debug(f"Listing {len(listing['availableModels'])} models (default: {self.default_model})")
        return listing
