#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the typmark library.

This module defines specialized exception classes for the error conditions
that can occur while tokenizing markup, evaluating math and rendering either
output target.

Exception Hierarchy
-------------------
- TypmarkError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for a renderer)

  - RenderingError (output generation failures)
    - UnsupportedHtmlError (raw HTML on the content-tree path)
    - TypesettingError (one or more math compilation failures)
    - MalformedTableError (table children out of the expected order)
    - UnsupportedFeatureError (markup the renderers do not implement yet)

  - EvaluationError (an evaluation context rejected an expression)

  - InternalInvariantError (configuration or programming defect)

  - DependencyError (missing/incompatible packages)

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence

if TYPE_CHECKING:
    from typmark.math.diagnostics import Diagnostic


def _summarize_diagnostics(diagnostics: Sequence["Diagnostic"]) -> str:
    count = len(diagnostics)
    noun = "diagnostic" if count == 1 else "diagnostics"
    first = diagnostics[0].message if diagnostics else ""
    if count > 1:
        return f"{count} {noun}, first: {first}"
    return f"{count} {noun}: {first}"


class TypmarkError(Exception):
    """Base exception class for all typmark-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
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


class ValidationError(TypmarkError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when an incorrect options class is provided.

    Parameters
    ----------
    component_name : str
        Name of the renderer or parser that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        component_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{component_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.component_name = component_name
        self.expected_type = expected_type
        self.received_type = received_type


class RenderingError(TypmarkError):
    """Exception raised when output rendering fails.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        The stage of rendering where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the rendering failure

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class UnsupportedHtmlError(RenderingError):
    """Raw HTML was found on a path whose output format cannot embed it.

    The content tree is consumed by a layout engine, so neither HTML blocks
    nor inline HTML can be carried through.

    Parameters
    ----------
    html : str
        The offending raw HTML
    inline : bool, default = False
        Whether the HTML appeared inline rather than as a block

    """

    def __init__(self, html: str, inline: bool = False):
        """Initialize with the rejected markup."""
        kind = "inline HTML" if inline else "HTML block"
        super().__init__(f"{kind} is not supported in content output", rendering_stage="content")
        self.html = html
        self.inline = inline


class TypesettingError(RenderingError):
    """One or more math expressions failed to compile.

    Parameters
    ----------
    diagnostics : sequence of Diagnostic
        Every diagnostic collected, never empty
    partial_html : str, optional
        HTML produced by a collect-all pass, with a placeholder in place of
        each failing span. Only set by the HTML renderer.

    """

    def __init__(self, diagnostics: Sequence["Diagnostic"], partial_html: str | None = None):
        """Initialize with the collected diagnostics."""
        if not diagnostics:
            raise ValueError("TypesettingError requires at least one diagnostic")
        super().__init__(f"Typesetting failed ({_summarize_diagnostics(diagnostics)})", rendering_stage="math")
        self.diagnostics = tuple(diagnostics)
        self.partial_html = partial_html


class MalformedTableError(RenderingError):
    """A table group did not have the head-then-rows structure.

    Parameters
    ----------
    message : str
        What was wrong with the table
    child_index : int, optional
        Index of the offending child within the table group

    """

    def __init__(self, message: str, child_index: int | None = None):
        """Initialize the malformed table error."""
        super().__init__(message, rendering_stage="table")
        self.child_index = child_index


class UnsupportedFeatureError(RenderingError):
    """Markup that parses but is not implemented by the renderers yet."""

    def __init__(self, feature: str):
        """Initialize with the name of the missing feature."""
        super().__init__(f"{feature} are not yet supported")
        self.feature = feature


class EvaluationError(TypmarkError):
    """An evaluation context failed to compile an expression.

    Parameters
    ----------
    diagnostics : sequence of Diagnostic
        All diagnostics the compiler produced, never empty
    expression : str, optional
        The source that failed

    """

    def __init__(self, diagnostics: Sequence["Diagnostic"], expression: str | None = None):
        """Initialize with the compiler diagnostics."""
        if not diagnostics:
            raise ValueError("EvaluationError requires at least one diagnostic")
        super().__init__(f"Evaluation failed ({_summarize_diagnostics(diagnostics)})")
        self.diagnostics = tuple(diagnostics)
        self.expression = expression


class InternalInvariantError(TypmarkError):
    """A structure appeared that the tokenizer configuration rules out.

    This is not a user error: it indicates that the tokenizer was configured
    differently from what the renderers expect, or a programming defect.
    """


class DependencyError(TypmarkError):
    """Exception raised when required dependencies are not available.

    Parameters
    ----------
    component_name : str
        Name of the component requiring dependencies
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    version_mismatches : list[tuple[str, str, str]], optional
        List of (package_name, required_version, installed_version) tuples
    message : str, optional
        Custom error message. If not provided, generates a helpful message
    original_import_error : ImportError, optional
        The first import failure encountered

    """

    def __init__(
        self,
        component_name: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        """Initialize the dependency error with package details."""
        version_mismatches = version_mismatches or []
        self.original_import_error = original_import_error
        if message is None:
            message_parts = []

            if missing_packages:
                pkg_list = ", ".join(f"'{name}{spec}'" if spec else f"'{name}'" for name, spec in missing_packages)
                message_parts.append(f"{component_name} requires the following packages: {pkg_list}")

            if version_mismatches:
                mismatch_str = ", ".join(
                    f"'{name}' (requires {required}, but {installed} is installed)"
                    for name, required, installed in version_mismatches
                )
                message_parts.append(f"{component_name} has version mismatches: {mismatch_str}")

            packages = [name for name, _ in missing_packages] + [name for name, _, _ in version_mismatches]
            if packages:
                message_parts.append(f"Install with: pip install --upgrade {' '.join(packages)}")

            message = ". ".join(message_parts)

        super().__init__(message, original_error=original_import_error)
        self.component_name = component_name
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches
