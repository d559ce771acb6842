"""Interface for interacting with the user (input/output).

Defines the contract for displaying results, errors and information, and
getting input from the user, allowing different UI implementations.
"""

import abc
from typing import Any, Sequence

from geocli.domain.models.geocoding import CallResult


class UserInterface(abc.ABC):
    """Abstract Base Class for user interaction."""

    @abc.abstractmethod
    def display_results(self, results: Sequence[CallResult], **kwargs: Any) -> None:
        """Displays the aggregate result of a batch.

        Args:
            results: Per-address results in input order.
            **kwargs: Additional arguments for formatting.
        """
        pass

    @abc.abstractmethod
    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message to the user.

        Args:
            error_message: The error message string.
            **kwargs: Additional arguments for formatting.
        """
        pass

    @abc.abstractmethod
    def display_info(self, info_message: str, **kwargs: Any) -> None:
        """Displays an informational message to the user.

        Args:
            info_message: The informational message string.
            **kwargs: Additional arguments for formatting.
        """
        pass

    @abc.abstractmethod
    def get_prompt(self, prompt_message: str = "Input: ") -> str:
        """Gets input from the user synchronously.

        Args:
            prompt_message: The message to display before the input prompt.

        Returns:
            The user's input.
        """
        pass

    def display_summary(self, results: Sequence[CallResult]) -> None:
        """Displays a human readable overview of a batch (optional)."""
        pass
