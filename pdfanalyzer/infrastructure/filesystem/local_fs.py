"""Concrete implementation of the FileSystem interface using standard Python libraries
for local file system operations.
"""

import logging
import os
from pathlib import Path

# Domain Layer Imports
from pdfanalyzer.domain.errors import FileNotAccessibleError
from pdfanalyzer.domain.interfaces.file_system import FileSystem
from pdfanalyzer.domain.models.common import FilePath

logger = logging.getLogger(__name__)

class LocalFileSystem(FileSystem):
    """Implementation of FileSystem for the local disk."""

    def __init__(self):
        """Initializes the LocalFileSystem adapter."""
        logger.debug("LocalFileSystem initialized.")

    def read_bytes(self, path: FilePath) -> bytes:
        """Reads the whole file into memory."""
        file_path = Path(path)
        logger.debug(f"Attempting to read file: {file_path}")
        if not file_path.is_file():
            raise FileNotAccessibleError(str(path))

        try:
            content = file_path.read_bytes()
        except OSError as e:
            # Covers PermissionError and files removed between check and read
            logger.error(f"Error reading file {file_path}: {e}")
            raise FileNotAccessibleError(str(path), cause=e) from e
        logger.debug(f"Successfully read {len(content)} bytes from {file_path}")
        return content

    def is_file(self, path: FilePath) -> bool:
        exists = Path(path).is_file()
        logger.debug(f"Checked existence for {path}: {exists}")
        return exists

    def is_readable(self, path: FilePath) -> bool:
        try:
            return os.access(path, os.R_OK)
        except ValueError:
            # Embedded NUL byte; Path.is_file reports such paths as missing too
            return False
