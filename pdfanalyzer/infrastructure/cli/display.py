import logging
from datetime import datetime
from typing import Any, Dict, Optional

from rich.box import HEAVY, ROUNDED, SIMPLE, Box
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from pdfanalyzer.domain.interfaces.user_interface import UserInterface

logger = logging.getLogger(__name__)

class ConsoleDisplay(UserInterface):
    """Concrete implementation of UserInterface using the rich library for console output."""

    def __init__(self, console: Optional[Console] = None):
        """Initializes the rich Console."""
        self.console = console or Console()

    def display_output(self, output: str, **kwargs: Any) -> None:
        """Displays the model's answer, rendering Markdown.

        Args:
            output: The answer text to display.
            **kwargs: Additional arguments including:
                - title: The title of the panel (default: "Gemini")
        """
        title = kwargs.get("title", "Gemini")
        timestamp = datetime.now().strftime("%H:%M:%S")
        header = f"[bold white]{title}[/bold white] [dim]·[/dim] [dim white]{timestamp}[/dim white]"

        try:
            panel = Panel(
                Markdown(output),
                title=header,
                title_align="left",
                border_style="blue",
                box=ROUNDED,
                padding=(0, 1)
            )
            self.console.print(panel)
        except Exception as e:
            # Fallback if Rich formatting fails
            logger.error(f"Error displaying formatted message: {e}")
            self.console.print(f"\n{title} ({timestamp}):\n{output}\n", markup=False)

    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message in a distinct style."""
        self._print_notice(error_message, "Error", "red", HEAVY)

    def display_info(self, info_message: str, **kwargs: Any) -> None:
        self._print_notice(info_message, "Info", "blue", SIMPLE)

    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        logger.warning(f"Display warning: {warning_message}")
        self._print_notice(warning_message, "Warning", "yellow", HEAVY)

    def _print_notice(self, message: str, label: str, color: str, box: Box) -> None:
        # Text, not markup: diagnostics may quote raw response bodies
        self.console.print(Panel(
            Text(message, style="white"),
            title=f"[bold {color}]{label}[/bold {color}]",
            border_style=color,
            box=box,
            padding=(0, 1),
        ))

    def display_models(self, listing: Dict[str, Any]) -> None:
        """Renders the catalog as a table, marking the default model."""
        default_model = listing.get("defaultModel")
        capabilities: Dict[str, str] = listing.get("modelCapabilities", {})

        table = Table(title="Available Gemini models", box=ROUNDED, title_justify="left")
        table.add_column("Model", style="bold cyan", no_wrap=True)
        table.add_column("Capabilities")
        table.add_column("Default", justify="center")
        for model_id in listing.get("availableModels", []):
            table.add_row(model_id, capabilities.get(model_id, ""), "✓" if model_id == default_model else "")

        self.console.print(table)
        if default_model not in listing.get("availableModels", []):
            self.console.print(Text(f"Default model (not in catalog): {default_model}", style="yellow"))
