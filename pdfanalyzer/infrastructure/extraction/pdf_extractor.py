"""Concrete implementation of the TextExtractor interface using pypdf.

Used only on the fallback path: when the model cannot ingest the PDF
directly, its text is extracted locally and sent as a plain chat prompt.
"""

import logging
from io import BytesIO
from typing import List

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from pdfanalyzer.domain.errors import UnreadableDocumentError
from pdfanalyzer.domain.interfaces.file_system import FileSystem
from pdfanalyzer.domain.interfaces.text_extractor import TextExtractor
from pdfanalyzer.domain.models.common import DocumentText, FilePath

logger = logging.getLogger(__name__)

PAGE_SEPARATOR = "\n"


class PdfTextExtractor(TextExtractor):
    """Extracts linear page text from a PDF held fully in memory."""

    def __init__(self, file_system: FileSystem):
        self.file_system = file_system

    def extract_text(self, path: FilePath) -> DocumentText:
        pdf_bytes = self.file_system.read_bytes(path)

        with BytesIO(pdf_bytes) as stream:
            try:
                reader = PdfReader(stream)
                pages: List[str] = [page.extract_text() or "" for page in reader.pages]
            except PyPdfError as e:
                logger.error(f"pypdf could not parse {path}: {e}")
                raise UnreadableDocumentError(str(path), str(e), cause=e) from e
            except (ValueError, KeyError, TypeError) as e:
                # Malformed object trees surface as plain Python errors
                logger.error(f"Malformed PDF structure in {path}: {type(e).__name__}: {e}")
                raise UnreadableDocumentError(str(path), f"malformed PDF structure ({type(e).__name__})", cause=e) from e

        text = PAGE_SEPARATOR.join(pages)
        logger.info(f"Successfully extracted text from PDF. Pages: {len(pages)}, length: {len(text)}")
        return DocumentText(text)
