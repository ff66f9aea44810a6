#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the math evaluator."""

from __future__ import annotations

from dataclasses import dataclass, field

from typmark.constants import DEFAULT_IGNORE_SYSTEM_FONTS
from typmark.options.base import CloneFrozenMixin


# src/typmark/options/math.py
@dataclass(frozen=True)
class MathOptions(CloneFrozenMixin):
    """Configuration for compiling math with the Typst engine.

    Parameters
    ----------
    font_paths : tuple of str, default ()
        Extra directories searched for fonts. Directories listed in the
        ``TYPMARK_FONT_PATHS`` environment variable are appended when the
        shared resource cache is initialised.
    ignore_system_fonts : bool, default True
        Only use the fonts embedded in the engine plus ``font_paths``.

    """

    font_paths: tuple[str, ...] = field(
        default=(),
        metadata={"help": "Extra font directories for the Typst engine", "importance": "advanced"},
    )
    ignore_system_fonts: bool = field(
        default=DEFAULT_IGNORE_SYSTEM_FONTS,
        metadata={"help": "Do not search system font directories", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Normalize font paths to a tuple of strings.

        Raises
        ------
        ValueError
            If font_paths is a single string instead of a sequence.

        """
        if isinstance(self.font_paths, str):
            raise ValueError("font_paths must be a sequence of directories, not a string")
        object.__setattr__(self, "font_paths", tuple(str(path) for path in self.font_paths))
