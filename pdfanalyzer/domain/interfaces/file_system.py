import abc

from pdfanalyzer.domain.models.common import FilePath


class FileSystem(abc.ABC):
    """Interface for file system operations."""

    @abc.abstractmethod
    def read_bytes(self, path: FilePath) -> bytes:
        """Reads the whole content of a file.

        Args:
            path: The path to the file.

        Returns:
            The raw bytes of the file.

        Raises:
            FileNotAccessibleError: If the file is missing or cannot be read.
        """
        pass

    @abc.abstractmethod
    def is_file(self, path: FilePath) -> bool:
        """Whether the path names an existing regular file."""
        pass

    @abc.abstractmethod
    def is_readable(self, path: FilePath) -> bool:
        """Whether the current process may read the path."""
        pass
