"""Main entry point when executing pdfanalyzer as a package.

This allows running the package using python -m pdfanalyzer.
"""

from pdfanalyzer.main import cli_entry_point

if __name__ == "__main__":
    cli_entry_point()
