"""Command Handler: maps tool invocations and CLI commands onto the services.

Receives either a tool invocation (name + argument mapping, from the MCP
server) or a CLI command (from main.py), builds the AnalysisRequest with the
configured default model, and packages the result as a ToolResult or as
console output.
"""

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from pdfanalyzer.core.services.analysis_service import ERROR_PREFIX, AnalysisService
from pdfanalyzer.core.services.catalog_service import ModelCatalogService
from pdfanalyzer.domain.interfaces.user_interface import UserInterface
from pdfanalyzer.domain.models.analysis import AnalysisOutcome, AnalysisRequest, ToolResult
from pdfanalyzer.domain.models.common import FileReference, Instruction, ModelId, ToolName

logger = logging.getLogger(__name__)

# --- Tool surface ---
ANALYZE_TOOL_NAME = ToolName("analyze_pdf_with_gemini")
LIST_MODELS_TOOL_NAME = ToolName("list_gemini_models")

ARG_FILE_REFERENCE = "pdfResourceUri"
ARG_INSTRUCTION = "originalPrompt"
ARG_MODEL_OVERRIDE = "modelOverride"


class CommandHandler:
    """Handles incoming commands and delegates to appropriate services."""

    def __init__(
        self,
        analysis_service: AnalysisService,
        catalog_service: ModelCatalogService,
        default_model: ModelId,
        ui: Optional[UserInterface] = None,
    ):
        self.analysis_service = analysis_service
        self.catalog_service = catalog_service
        self.default_model = default_model
        self.ui = ui

    # --- Tool invocations ---

    def handle_tool_invocation(self, name: ToolName, arguments: Optional[Mapping[str, Any]]) -> ToolResult:
        """Dispatches a tool invocation by name."""
        arguments = arguments or {}
        logger.info(f"Tool '{name}' called")
        if name == ANALYZE_TOOL_NAME:
            return self.handle_analyze_tool(arguments)
        if name == LIST_MODELS_TOOL_NAME:
            return self.handle_list_models_tool()
        logger.warning(f"Unknown tool requested: {name}")
        return ToolResult(text=f"{ERROR_PREFIX}Unknown tool '{name}'", is_error=True)

    def handle_analyze_tool(self, arguments: Mapping[str, Any]) -> ToolResult:
        file_reference = arguments.get(ARG_FILE_REFERENCE)
        instruction = arguments.get(ARG_INSTRUCTION)
        for arg_name, value in ((ARG_FILE_REFERENCE, file_reference), (ARG_INSTRUCTION, instruction)):
            if not isinstance(value, str) or not value.strip():
                return ToolResult(text=f"{ERROR_PREFIX}Missing required argument '{arg_name}'", is_error=True)

        model_override = arguments.get(ARG_MODEL_OVERRIDE)
        if model_override is not None and not isinstance(model_override, str):
            return ToolResult(text=f"{ERROR_PREFIX}Argument '{ARG_MODEL_OVERRIDE}' must be a string", is_error=True)

        outcome = self.analysis_service.analyze(self.build_request(file_reference, instruction, model_override))
        self._log_outcome(outcome)
        return ToolResult.from_outcome(outcome)

    def handle_list_models_tool(self) -> ToolResult:
        return ToolResult(text=json.dumps(self.catalog_service.list_models(), indent=2))

    def build_request(self, file_reference: str, instruction: str, model_override: Optional[str] = None) -> AnalysisRequest:
        """Applies the default model unless a non-empty override is given."""
        model_id = model_override.strip() if model_override and model_override.strip() else self.default_model
        return AnalysisRequest(
            file_reference=FileReference(file_reference),
            instruction=Instruction(instruction),
            model_id=ModelId(model_id),
        )

    # --- CLI commands ---

    def handle_analyze(self, file_reference: str, prompt: str, model: Optional[str] = None) -> bool:
        """Runs one analysis from the CLI and displays the result.

        Returns:
            True when the model produced an answer.
        """
        reference = to_file_reference(file_reference)
        request = self.build_request(reference, prompt, model)
        self._ui().display_info(f"Analyzing {reference} with {request.model_id}...")

        outcome = self.analysis_service.analyze(request)
        self._log_outcome(outcome)
        if outcome.is_error:
            self._ui().display_error(outcome.answer_text)
            return False

        direct_failure = outcome.direct_failure
        if direct_failure is not None:
            self._ui().display_warning(
                f"Direct PDF upload failed ({direct_failure.error_kind}); answer produced from extracted text."
            )
        self._ui().display_output(outcome.answer_text, title=f"Gemini ({request.model_id})")
        return True

    def handle_list_models(self) -> None:
        self._ui().display_models(self.catalog_service.list_models())

    def _ui(self) -> UserInterface:
        if self.ui is None:
            raise RuntimeError("CommandHandler was created without a user interface")
        return self.ui

    @staticmethod
    def _log_outcome(outcome: AnalysisOutcome) -> None:
        strategies = ", ".join(
            f"{a.strategy}={'ok' if a.succeeded else a.error_kind}" for a in outcome.attempts
        ) or "none"
        if outcome.is_error:
            logger.warning(f"Analysis failed (attempts: {strategies}): {outcome.answer_text}")
        else:
            logger.info(f"Analysis succeeded (attempts: {strategies}), {len(outcome.answer_text)} chars")


def to_file_reference(value: str) -> str:
    """Turns a bare filesystem path into a file:// URI; URIs pass through."""
    if value.startswith("file:"):
        return value
    return Path(value).expanduser().resolve().as_uri()
