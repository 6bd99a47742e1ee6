#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdoffice/converters/base.py
"""Base class for format converters.

Every supported format implements the same capability interface: import a
container as Markdown text and, where the format supports it, export
Markdown text to a container. Converters hold only their options; each call
builds its own private structures, so one instance may serve concurrent calls.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import ClassVar, Generic, Optional, TypeVar

from mdoffice.exceptions import ConversionError
from mdoffice.options import BaseConverterOptions
from mdoffice.utils.io_utils import Destination, Source

logger = logging.getLogger(__name__)

OptionsT = TypeVar("OptionsT", bound=BaseConverterOptions)


class BaseConverter(ABC, Generic[OptionsT]):
    """Abstract base class for all format converters.

    Parameters
    ----------
    options : BaseConverterOptions or None, default = None
        Format-specific options. If None, the subclass defaults are used.

    Examples
    --------
    Creating a custom converter:

        >>> from mdoffice.options import PdfOptions
        >>> from mdoffice.utils.io_utils import read_source_bytes
        >>> class UpperTextConverter(BaseConverter[PdfOptions]):
        ...     format_name = "upper"
        ...     options_class = PdfOptions
        ...     def to_markdown(self, source):
        ...         return read_source_bytes(source).decode().upper()

    """

    format_name: ClassVar[str] = ""
    options_class: ClassVar[type[BaseConverterOptions]] = BaseConverterOptions

    def __init__(self, options: Optional[OptionsT] = None):
        """Initialize the converter with optional configuration.

        Raises
        ------
        ConversionError
            If ``options`` is not an instance of :attr:`options_class`

        """
        if options is not None and not isinstance(options, self.options_class):
            raise ConversionError(
                f"Invalid options for {self.format_name} converter: expected "
                f"{self.options_class.__name__}, got {type(options).__name__}"
            )
        self.options: OptionsT = options if options is not None else self.options_class()  # type: ignore[assignment]

    @property
    def can_export(self) -> bool:
        """Whether :meth:`from_markdown` is implemented for this format."""
        return type(self).from_markdown is not BaseConverter.from_markdown

    @abstractmethod
    def to_markdown(self, source: Source) -> str:
        """Convert a container to Markdown text.

        Parameters
        ----------
        source : str, Path or bytes
            File path or raw container bytes

        Returns
        -------
        str
            Markdown text

        Raises
        ------
        ConversionError
            If the source cannot be read or parsed

        """
        ...

    def from_markdown(self, markdown: str, destination: Destination) -> None:
        """Convert Markdown text to a container written to ``destination``.

        Parameters
        ----------
        markdown : str
            Markdown source
        destination : str, Path or IO[bytes]
            File path or writable binary stream

        Raises
        ------
        ConversionError
            If the container cannot be built or written, or if the format is
            import-only

        """
        raise ConversionError(f"Export to {self.format_name} is not supported")
