import abc

from pdfanalyzer.domain.models.common import DocumentText, FilePath


class TextExtractor(abc.ABC):
    """Interface for linear text extraction from a document."""

    @abc.abstractmethod
    def extract_text(self, path: FilePath) -> DocumentText:
        """Returns the text of every page, in document order.

        Raises:
            UnreadableDocumentError: If the document format cannot be parsed.
            FileNotAccessibleError: If the file cannot be read.
        """
        pass
