#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdoffice/utils/io_utils.py
"""I/O utilities for conversion sources and destinations.

Converters read a whole source into memory and write a whole destination in
one pass. These helpers centralize the file-system access so that every OS
error surfaces as a :class:`~mdoffice.exceptions.ConversionError`.

"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator, Union

from mdoffice.exceptions import ConversionError

logger = logging.getLogger(__name__)

Source = Union[str, Path, bytes]
Destination = Union[str, Path, IO[bytes]]


def is_path_like(obj: object) -> bool:
    """Return True for ``str`` and ``Path`` inputs."""
    return isinstance(obj, (str, Path))


def source_suffix(source: Source) -> str:
    """Return the lower-cased file extension of a path source, or "" for bytes."""
    if is_path_like(source):
        return Path(source).suffix.lower()  # type: ignore[arg-type]
    return ""


def read_source_bytes(source: Source) -> bytes:
    """Read a conversion source fully into memory.

    Parameters
    ----------
    source : str, Path or bytes
        File path or raw document bytes

    Returns
    -------
    bytes
        Document content

    Raises
    ------
    ConversionError
        If the file cannot be read

    """
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    try:
        data = Path(source).read_bytes()
    except OSError as e:
        raise ConversionError.wrap("Failed to read file", e) from e
    logger.debug("Read %d bytes from %s", len(data), source)
    return data


def ensure_parent_dir(path: Union[str, Path]) -> Path:
    """Create the parent directory of ``path`` if it does not exist.

    Raises
    ------
    ConversionError
        If the directory cannot be created

    """
    target = Path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConversionError.wrap("Failed to create directory", e) from e
    return target


@contextmanager
def open_destination(destination: Destination) -> Iterator[IO[bytes]]:
    """Yield a binary stream for a conversion destination.

    Path destinations are created (or truncated) before any payload is
    written, so a failure while serializing leaves a partial file behind.
    Stream destinations are yielded unchanged and left open.

    Parameters
    ----------
    destination : str, Path or IO[bytes]
        File path or writable binary stream

    Yields
    ------
    IO[bytes]
        Writable binary stream

    Raises
    ------
    ConversionError
        If the destination file cannot be created

    """
    if not is_path_like(destination):
        yield destination  # type: ignore[misc]
        return

    target = ensure_parent_dir(destination)  # type: ignore[arg-type]
    try:
        stream = open(target, "wb")
    except OSError as e:
        raise ConversionError.wrap("Failed to create file", e) from e
    with stream:
        yield stream


def write_content(content: Union[str, bytes], output: Union[str, Path, IO[bytes], IO[str]]) -> None:
    """Write text or bytes to a path or a file-like object.

    Text written to a path is encoded as UTF-8.

    Raises
    ------
    ConversionError
        If the destination cannot be written

    """
    if is_path_like(output):
        target = ensure_parent_dir(output)  # type: ignore[arg-type]
        try:
            if isinstance(content, str):
                target.write_text(content, encoding="utf-8")
            else:
                target.write_bytes(content)
        except OSError as e:
            raise ConversionError.wrap("Failed to write file", e) from e
        return
    output.write(content)  # type: ignore[arg-type]
