#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/typmark/resources.py
"""Process-wide resources shared by every render call.

Font search paths for the Typst engine and the index of highlighting
grammars are expensive to discover, never change while the process runs, and
are the same for every document. They are gathered once, on first use, and
shared read-only afterwards.

Thread Safety
-------------
Initialisation is guarded by a module lock with a double check, so
concurrent first callers build the cache exactly once. The returned
``ResourceCache`` is immutable.

"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass, field
from typing import Mapping, Optional

from typmark.constants import FONT_PATHS_ENV_VAR
from typmark.options.math import MathOptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceCache:
    """Immutable snapshot of shared rendering resources.

    Parameters
    ----------
    font_paths : tuple of str
        Font directories passed to the Typst engine
    ignore_system_fonts : bool
        Whether the engine skips system font discovery
    lexer_aliases : frozenset of str
        Every grammar name/alias known to the highlighter, lower-cased
    lexer_extensions : Mapping[str, str]
        File extension (without dot) to grammar alias

    """

    font_paths: tuple[str, ...] = ()
    ignore_system_fonts: bool = True
    lexer_aliases: frozenset[str] = field(default_factory=frozenset)
    lexer_extensions: Mapping[str, str] = field(default_factory=dict)

    def resolve_lexer_alias(self, lang: Optional[str]) -> Optional[str]:
        """Map a fence language to a grammar alias.

        Resolution order: grammar name, then file extension. Returns None
        when neither matches, meaning plain text.
        """
        if not lang:
            return None
        key = lang.strip().lower()
        if key in self.lexer_aliases:
            return key
        return self.lexer_extensions.get(key.lstrip("."))


def _collect_font_paths(options: MathOptions) -> tuple[str, ...]:
    paths = list(options.font_paths)
    env_value = os.environ.get(FONT_PATHS_ENV_VAR, "")
    paths.extend(part for part in env_value.split(os.pathsep) if part.strip())

    unique: list[str] = []
    for path in paths:
        if path not in unique:
            unique.append(path)
    for path in unique:
        if not os.path.isdir(path):
            logger.warning("Font directory does not exist: %s", path)
    return tuple(unique)


def _build_lexer_index() -> tuple[frozenset[str], dict[str, str]]:
    from pygments.lexers import get_all_lexers

    aliases: set[str] = set()
    extensions: dict[str, str] = {}
    # get_all_lexers yields (name, aliases, filename patterns, mimetypes)
    for _name, lexer_aliases, patterns, _mimetypes in get_all_lexers():
        if not lexer_aliases:
            continue
        aliases.update(alias.lower() for alias in lexer_aliases)
        for pattern in patterns:
            if not pattern.startswith("*."):
                continue
            ext = pattern[2:].lower()
            # Skip globs such as "*.[ch]"; first registered grammar wins
            if ext and ext.isalnum() and ext not in extensions:
                extensions[ext] = lexer_aliases[0].lower()
    return frozenset(aliases), extensions


def _build_cache(options: MathOptions) -> ResourceCache:
    font_paths = _collect_font_paths(options)
    aliases, extensions = _build_lexer_index()
    logger.debug(
        "Initialised shared resources: %d font paths, %d grammar aliases, %d extensions",
        len(font_paths),
        len(aliases),
        len(extensions),
    )
    return ResourceCache(
        font_paths=font_paths,
        ignore_system_fonts=options.ignore_system_fonts,
        lexer_aliases=aliases,
        lexer_extensions=extensions,
    )


# Global singleton instance
_resources: ResourceCache | None = None
_resources_lock = threading.Lock()
_ignored_options: set[MathOptions] = set()


def get_resources(options: MathOptions | None = None) -> ResourceCache:
    """Get or create the process-wide resource cache.

    Parameters
    ----------
    options : MathOptions, optional
        Only consulted by the call that performs initialisation. Later calls
        receive the existing cache unchanged; options that would have changed
        it are logged once at WARNING.

    Returns
    -------
    ResourceCache
        The shared instance

    """
    global _resources
    if _resources is None:
        with _resources_lock:
            if _resources is None:
                _resources = _build_cache(options or MathOptions())
    elif options is not None and options not in _ignored_options and (
        options.ignore_system_fonts != _resources.ignore_system_fonts
        or not set(options.font_paths) <= set(_resources.font_paths)
    ):
        _ignored_options.add(options)
        logger.warning(
            "Math resources were already initialised; ignoring font paths [%s] and ignore_system_fonts=%s. "
            "Pass these options to the first renderer or evaluator created in the process.",
            ", ".join(options.font_paths),
            options.ignore_system_fonts,
        )
    return _resources


def reset_resources() -> None:
    """Drop the shared cache so the next call rebuilds it. Intended for tests."""
    global _resources
    with _resources_lock:
        _resources = None
        _ignored_options.clear()


__all__ = ["ResourceCache", "get_resources", "reset_resources"]
