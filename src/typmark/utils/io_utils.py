#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/typmark/utils/io_utils.py
"""Input and output helpers shared by the CLI and the renderers."""

from __future__ import annotations

import io
import sys
from io import BytesIO, StringIO
from pathlib import Path
from typing import IO, Union, cast


def read_text_input(source: Union[str, Path]) -> str:
    """Read UTF-8 markup from a file path, or from stdin when ``source`` is ``"-"``."""
    if str(source) == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def write_content(content: Union[str, bytes], output: Union[str, Path, IO[bytes], IO[str]]) -> None:
    """Write content to a file path or a file-like object.

    Parameters
    ----------
    content : str or bytes
        Content to write. Text is encoded as UTF-8 for binary destinations.
    output : str, Path, IO[bytes] or IO[str]
        Output destination.

    Raises
    ------
    TypeError
        If output type is not supported or content type is neither str nor bytes

    """
    if not isinstance(content, (str, bytes)):
        raise TypeError(f"Content must be str or bytes, got {type(content)}")

    if isinstance(output, (str, Path)):
        output_path = Path(output)
        if isinstance(content, str):
            output_path.write_text(content, encoding="utf-8")
        else:
            output_path.write_bytes(content)
        return

    if not hasattr(output, "write"):
        raise TypeError(f"Unsupported output type: {type(output)}")

    if isinstance(output, BytesIO):
        is_binary_mode = True
    elif isinstance(output, StringIO) or isinstance(output, io.TextIOBase):
        is_binary_mode = False
    elif isinstance(output, (io.BufferedIOBase, io.RawIOBase)):
        is_binary_mode = True
    else:
        mode = getattr(output, "mode", "")
        is_binary_mode = isinstance(mode, str) and "b" in mode

    if is_binary_mode:
        binary_output = cast(IO[bytes], output)
        binary_output.write(content.encode("utf-8") if isinstance(content, str) else content)
    else:
        text_output = cast(IO[str], output)
        text_output.write(content.decode("utf-8") if isinstance(content, bytes) else content)


__all__ = ["read_text_input", "write_content"]
