"""Main entry point for the pdfanalyzer application.

Sets up the Typer CLI application, performs dependency injection (Composition Root),
defines CLI commands, and delegates execution to the CommandHandler.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

import httpx
import typer
from typing_extensions import Annotated

# --- Setup Logging Early ---
# Basic config until setup_logging is called with the loaded settings
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

# --- Core Layer ---
from pdfanalyzer.core.command_handler import CommandHandler
from pdfanalyzer.core.services.analysis_service import AnalysisService
from pdfanalyzer.core.services.catalog_service import ModelCatalogService
from pdfanalyzer.core.uri_resolver import UriResolver

# --- Domain Layer ---
from pdfanalyzer.domain.errors import ConfigurationError

# --- Infrastructure Layer ---
from pdfanalyzer.infrastructure.ai.gemini.chat_client import GeminiChatClient
from pdfanalyzer.infrastructure.ai.gemini.multimodal_client import GeminiMultimodalClient
from pdfanalyzer.infrastructure.cli.display import ConsoleDisplay
from pdfanalyzer.infrastructure.config.settings import AppSettings, load_settings
from pdfanalyzer.infrastructure.extraction.pdf_extractor import PdfTextExtractor
from pdfanalyzer.infrastructure.filesystem.local_fs import LocalFileSystem
from pdfanalyzer.infrastructure.mcp.server import run_stdio_server
from pdfanalyzer.infrastructure.monitoring.logger_setup import setup_logging

# --- Dependency Injection Container (Manual) ---

def create_dependencies(settings: Optional[AppSettings] = None) -> Dict[str, Any]:
    """Creates and wires up all dependencies for the application.

    This acts as the Composition Root.

    Raises:
        ConfigurationError: If the settings cannot be loaded (e.g. no API key).
    """
    # 1. Load Configuration First
    settings = settings or load_settings()
    setup_logging(log_level=settings.log_level, log_format=settings.log_format, log_file=settings.log_file)
    logger.info(f"Using default Gemini model: {settings.default_model}")

    dependencies: Dict[str, Any] = {'settings': settings}

    # 2. Infrastructure Adapters
    # None: no timeout unless configured (httpx would default to 5s)
    dependencies['http_client'] = httpx.Client(timeout=settings.request_timeout)
    dependencies['ui'] = ConsoleDisplay()
    dependencies['file_system'] = LocalFileSystem()
    dependencies['text_extractor'] = PdfTextExtractor(file_system=dependencies['file_system'])
    dependencies['resolver'] = UriResolver(file_system=dependencies['file_system'])

    # 3. Model Clients (one shared transport)
    dependencies['multimodal_client'] = GeminiMultimodalClient(
        api_key=settings.api_key,
        http_client=dependencies['http_client'],
    )
    dependencies['chat_client'] = GeminiChatClient(
        api_key=settings.api_key,
        http_client=dependencies['http_client'],
        timeout=settings.request_timeout,
    )

    # 4. Core Services
    dependencies['analysis_service'] = AnalysisService(
        resolver=dependencies['resolver'],
        file_system=dependencies['file_system'],
        multimodal_client=dependencies['multimodal_client'],
        chat_client=dependencies['chat_client'],
        text_extractor=dependencies['text_extractor'],
    )
    dependencies['catalog_service'] = ModelCatalogService(default_model=settings.default_model)

    # 5. Command Handler
    dependencies['command_handler'] = CommandHandler(
        analysis_service=dependencies['analysis_service'],
        catalog_service=dependencies['catalog_service'],
        default_model=settings.default_model,
        ui=dependencies['ui'],
    )
    logger.debug("All dependencies initialized successfully.")
    return dependencies


@contextmanager
def application() -> Iterator[Dict[str, Any]]:
    """Builds the dependencies for one command and releases the transport.

    Missing startup configuration ends the process with exit code 1.
    """
    try:
        dependencies = create_dependencies()
    except ConfigurationError as e:
        logger.error(f"Fatal configuration error: {e}")
        ConsoleDisplay().display_error(f"Configuration error: {e}")
        raise typer.Exit(code=1)
    try:
        yield dependencies
    finally:
        dependencies['http_client'].close()


# --- Typer App Definition ---
app = typer.Typer(
    name="pdfanalyzer",
    help="Analyze local PDF files with Google Gemini, as an MCP server or from the command line.",
    add_completion=False,
)

ModelOption = Annotated[
    Optional[str],
    typer.Option("--model", "-m", help="Gemini model to use. Uses the configured default if not set.")
]

@app.command()
def serve():
    """Run the MCP server over stdio."""
    logger.info("Starting Gemini PDF Analyzer MCP Server...")
    with application() as dependencies:
        run_stdio_server(dependencies['command_handler'])

@app.command()
def analyze(
    file_reference: Annotated[str, typer.Argument(help="PDF path or file:// URI.")],
    prompt: Annotated[str, typer.Argument(help="What to ask about the PDF.")],
    model: ModelOption = None,
):
    """Analyze a PDF file once and print Gemini's answer."""
    with application() as dependencies:
        handler: CommandHandler = dependencies['command_handler']
        succeeded = handler.handle_analyze(file_reference, prompt, model)
    if not succeeded:
        raise typer.Exit(code=1)

@app.command(name="list-models")
def list_models_command():
    """List the Gemini models known to the analyzer."""
    with application() as dependencies:
        handler: CommandHandler = dependencies['command_handler']
        handler.handle_list_models()

# --- Main Execution Guard ---

def cli_entry_point():
    """Function to be called by the script entry point in pyproject.toml."""
    app()

if __name__ == "__main__":
    cli_entry_point()
