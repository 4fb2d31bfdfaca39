"""
Turns the file references handed over by MCP clients into local paths.

Clients send a mix of shapes for the same file: ``file:///C:/docs/a.pdf``
from Windows hosts, ``file:///home/me/a.pdf`` on POSIX, occasionally
``file://`` with the path glued on, or a plain ``file:`` URI. All of them are
normalized to one absolute, platform-native path.
"""

import logging
import os
import re
from types import ModuleType
from urllib.parse import unquote, urlparse

from pdfanalyzer.domain.errors import InvalidReferenceError
from pdfanalyzer.domain.interfaces.file_system import FileSystem
from pdfanalyzer.domain.models.analysis import ResolvedDocument
from pdfanalyzer.domain.models.common import FilePath

logger = logging.getLogger(__name__)

TRIPLE_SLASH_PREFIX = "file:///"
DOUBLE_SLASH_PREFIX = "file://"
LOCALHOST_AUTHORITY = "localhost"

# "/C:/..." - a drive letter behind the separator left over from "file:///"
_DRIVE_LETTER_PATH = re.compile(r"^/[a-zA-Z]:")


class UriResolver:
    """Resolves file references to ResolvedDocument records.

    Args:
        file_system: Used to report existence and readability.
        path_module: Path flavour to build paths with. Defaults to ``os.path``;
            pass ``ntpath`` or ``posixpath`` to resolve for another platform.
    """

    def __init__(self, file_system: FileSystem, path_module: ModuleType = os.path):
        self.file_system = file_system
        self._path = path_module

    def resolve(self, reference: str) -> ResolvedDocument:
        """Resolves ``reference`` to an absolute path and checks access.

        Raises:
            InvalidReferenceError: If the reference is not a supported URI.
        """
        if reference is None or not str(reference).strip():
            raise InvalidReferenceError(str(reference), "reference is empty")
        reference = str(reference).strip()

        if reference.startswith(TRIPLE_SLASH_PREFIX):
            # Keep the third slash: it is the root of the path.
            raw_path = reference[len(DOUBLE_SLASH_PREFIX):]
        elif reference.startswith(DOUBLE_SLASH_PREFIX):
            raw_path = self._strip_localhost(reference[len(DOUBLE_SLASH_PREFIX):])
            if not raw_path:
                raise InvalidReferenceError(reference, "URI has no path")
        else:
            raw_path = self._path_from_generic_uri(reference)

        local_path = self._to_local_path(raw_path)
        if "\x00" in local_path:
            raise InvalidReferenceError(reference, "path contains a NUL byte")
        absolute_path = FilePath(self._path.abspath(local_path))

        document = ResolvedDocument(
            absolute_path=absolute_path,
            exists=self.file_system.is_file(absolute_path),
            readable=self.file_system.is_readable(absolute_path),
        )
        logger.debug(f"Resolved '{reference}' -> {document}")
        return document

    def _path_from_generic_uri(self, reference: str) -> str:
        try:
            parsed = urlparse(reference)
        except ValueError as e:
            raise InvalidReferenceError(reference, "not a parseable URI", cause=e) from e

        if not parsed.scheme:
            raise InvalidReferenceError(reference, "URI has no scheme")
        if parsed.scheme.lower() != "file":
            raise InvalidReferenceError(reference, f"unsupported URI scheme '{parsed.scheme}'")
        if parsed.netloc and parsed.netloc.lower() != LOCALHOST_AUTHORITY:
            raise InvalidReferenceError(reference, f"URI has an authority component '{parsed.netloc}'")
        if not parsed.path.startswith("/"):
            raise InvalidReferenceError(reference, "URI is not absolute")
        return parsed.path

    @staticmethod
    def _strip_localhost(remainder: str) -> str:
        if remainder.lower().startswith(LOCALHOST_AUTHORITY + "/"):
            return remainder[len(LOCALHOST_AUTHORITY):]
        return remainder

    def _to_local_path(self, raw_path: str) -> str:
        """Drops the separator before a drive letter, swaps separators and
        percent-decodes. Decoding is best-effort."""
        if _DRIVE_LETTER_PATH.match(raw_path):
            raw_path = raw_path[1:]

        local_path = raw_path.replace("/", self._path.sep)
        try:
            return unquote(local_path, errors="strict")
        except UnicodeDecodeError as e:
            logger.warning(f"Failed to decode path '{local_path}': {e}")
            return unquote(local_path, errors="replace")
