import pytest
from unittest.mock import MagicMock

from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from pdfanalyzer.infrastructure.cli.display import ConsoleDisplay


@pytest.fixture
def mock_console():
    """Fixture to create a mock rich Console object."""
    return MagicMock()

@pytest.fixture
def console_display(mock_console: MagicMock):
    """Fixture to create a ConsoleDisplay instance with a mocked console."""
    return ConsoleDisplay(console=mock_console)


def _printed(mock_console: MagicMock):
    args, _ = mock_console.print.call_args
    assert len(args) == 1
    return args[0]


def test_display_output_renders_markdown_panel(console_display: ConsoleDisplay, mock_console: MagicMock):
    console_display.display_output("Hello **World**", title="Gemini (gemini-2.0-flash)")

    mock_console.print.assert_called_once()
    panel = _printed(mock_console)
    assert isinstance(panel, Panel)
    assert isinstance(panel.renderable, Markdown)
    assert panel.renderable.markup == "Hello **World**"
    assert "gemini-2.0-flash" in panel.title


def test_display_error(console_display: ConsoleDisplay, mock_console: MagicMock):
    console_display.display_error("Something went wrong")

    panel = _printed(mock_console)
    assert isinstance(panel.renderable, Text)
    assert panel.renderable.plain == "Something went wrong"
    assert "Error" in panel.title


def test_display_error_does_not_interpret_markup(console_display: ConsoleDisplay, mock_console: MagicMock):
    console_display.display_error("Error: bad body [/red] here")
    assert _printed(mock_console).renderable.plain == "Error: bad body [/red] here"


def test_display_info(console_display: ConsoleDisplay, mock_console: MagicMock):
    console_display.display_info("Analyzing file:///tmp/a.pdf")
    panel = _printed(mock_console)
    assert panel.renderable.plain == "Analyzing file:///tmp/a.pdf"
    assert "Info" in panel.title


def test_display_warning(console_display: ConsoleDisplay, mock_console: MagicMock):
    console_display.display_warning("Direct PDF upload failed")
    panel = _printed(mock_console)
    assert "Warning" in panel.title


def test_display_models_marks_default(console_display: ConsoleDisplay, mock_console: MagicMock):
    listing = {
        "defaultModel": "gemini-2.0-flash",
        "availableModels": ["gemini-2.0-flash", "gemini-1.5-pro"],
        "modelCapabilities": {"gemini-2.0-flash": "fast", "gemini-1.5-pro": "long context"},
    }

    console_display.display_models(listing)

    mock_console.print.assert_called_once()
    table = _printed(mock_console)
    assert isinstance(table, Table)
    assert table.row_count == 2
    default_cells = list(table.columns[2].cells)
    assert default_cells == ["✓", ""]


def test_display_models_notes_uncataloged_default(console_display: ConsoleDisplay, mock_console: MagicMock):
    listing = {"defaultModel": "my-custom-model", "availableModels": ["gemini-2.0-flash"], "modelCapabilities": {}}

    console_display.display_models(listing)

    assert mock_console.print.call_count == 2
    note = mock_console.print.call_args.args[0]
    assert "my-custom-model" in note.plain
