#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/typmark/renderers/base.py
"""Base class for typmark renderers.

Both output targets, the content tree and HTML, derive from ``BaseRenderer``
so they share option validation and output writing.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from typmark.exceptions import InvalidOptionsError
from typmark.options.base import BaseRendererOptions
from typmark.utils.io_utils import write_content


class BaseRenderer(ABC):
    """Abstract base class for all renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Target-specific rendering options

    Examples
    --------
    Creating a custom renderer:

        >>> from typmark.renderers.base import BaseRenderer
        >>>
        >>> class WordCountRenderer(BaseRenderer):
        ...     def render(self, text, output):
        ...         self.write_text_output(self.render_to_string(text), output)
        ...
        ...     def render_to_string(self, text):
        ...         return str(len(text.split()))

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @abstractmethod
    def render(self, text: str, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render markup text and write the result to ``output``.

        Parameters
        ----------
        text : str
            Markup source
        output : str, Path, IO[bytes] or IO[str]
            Output destination

        Raises
        ------
        RenderingError
            If rendering fails

        """

    def render_to_string(self, text: str) -> str:
        """Render markup text to a string (if applicable).

        Raises
        ------
        NotImplementedError
            If the renderer does not support string output

        """
        raise NotImplementedError(f"{self.__class__.__name__} does not support rendering to a string.")

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Parameters
        ----------
        options : BaseRendererOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        renderer_name : str
            Name of the renderer (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                component_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @staticmethod
    def write_text_output(text: str, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Write text output to a file path or IO stream.

        Examples
        --------
            >>> from io import StringIO
            >>> buffer = StringIO()
            >>> BaseRenderer.write_text_output("<p>Hello</p>", buffer)
            >>> buffer.getvalue()
            '<p>Hello</p>'

        """
        write_content(text, output)
