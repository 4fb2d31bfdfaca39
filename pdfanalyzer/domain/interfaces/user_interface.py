"""Interface for interacting with the user (output only).

Defines the contract for displaying answers, errors, warnings and the model
catalog, allowing different UI implementations (e.g., console, tests).
"""

import abc
from typing import Any, Dict


class UserInterface(abc.ABC):
    """Abstract Base Class for user interaction."""

    @abc.abstractmethod
    def display_output(self, output: str, **kwargs: Any) -> None:
        """Displays standard output to the user.

        Args:
            output: The answer text to display.
            **kwargs: Additional arguments for formatting (e.g., title).
        """
        pass

    @abc.abstractmethod
    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message to the user."""
        pass

    @abc.abstractmethod
    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        """Displays a warning message to the user."""
        pass

    @abc.abstractmethod
    def display_info(self, info_message: str, **kwargs: Any) -> None:
        """Displays an informational message to the user."""
        pass

    @abc.abstractmethod
    def display_models(self, listing: Dict[str, Any]) -> None:
        """Displays the model catalog listing.

        Args:
            listing: Mapping with defaultModel, availableModels and
                modelCapabilities keys.
        """
        pass
