#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdoffice/exceptions.py
"""Exception type for the mdoffice library.

Every converter reports failure through a single :class:`ConversionError`
carrying a human-readable message. The underlying library error, when there
is one, is embedded in the message text and kept on ``original_error`` for
debugging. Callers are not expected to branch on failure kind.

"""

from __future__ import annotations


class ConversionError(Exception):
    """Raised when a single conversion call cannot complete.

    Parameters
    ----------
    message : str
        Human-readable description of the failure, including the cause text
        of the underlying error when available
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    def __str__(self) -> str:
        """Return the message verbatim."""
        return self.message

    @classmethod
    def wrap(cls, context: str, error: Exception) -> "ConversionError":
        """Build an error whose message embeds the cause text.

        Parameters
        ----------
        context : str
            Short description of the step that failed, e.g. "Failed to parse DOCX"
        error : Exception
            The underlying exception

        Returns
        -------
        ConversionError
            New error with message ``"{context}: {error}"``

        """
        return cls(f"{context}: {error}", original_error=error)
