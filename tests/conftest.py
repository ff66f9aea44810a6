"""Pytest configuration and shared fixtures for the typmark test suite.

Unit tests use ``FakeContext`` in place of the Typst engine. Any expression
containing ``BAD`` is rejected with one diagnostic naming it, every other
expression is accepted.
"""

from typing import Generator

import pytest

from typmark.constants import EvalMode
from typmark.exceptions import EvaluationError
from typmark.math import Diagnostic, MathEvaluator, Scope, TypstContent
from typmark.resources import reset_resources

FAKE_SVG = b'<?xml version="1.0" encoding="UTF-8"?>\n<svg xmlns="http://www.w3.org/2000/svg" width="10pt"></svg>\n'


class FakeContext:
    """In-memory evaluation context recording every call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, Scope]] = []
        self.documents: list[str] = []

    @property
    def scope(self) -> Scope:
        return Scope.math()

    @staticmethod
    def _check(source: str) -> None:
        if "BAD" in source:
            start = source.index("BAD")
            token = source[start : start + 4].strip("$ ")
            raise EvaluationError([Diagnostic("error", f"unknown variable: {token}")], expression=source)

    def compile(self, expression: str, mode: EvalMode, scope: Scope) -> TypstContent:
        self.calls.append((expression, mode, scope))
        self._check(expression)
        markup = f"${expression}$" if mode == "math" else expression
        return TypstContent(markup=markup, mode=mode, preamble=scope.preamble())

    def compile_svg(self, document: str) -> bytes:
        self.documents.append(document)
        self._check(document)
        return FAKE_SVG


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - real Typst engine")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def fake_context() -> FakeContext:
    """Provide a fresh fake evaluation context."""
    return FakeContext()


@pytest.fixture
def fake_evaluator(fake_context: FakeContext) -> MathEvaluator:
    """Provide a math evaluator backed by the fake context."""
    return MathEvaluator(fake_context)


@pytest.fixture
def clean_resources() -> Generator[None, None, None]:
    """Drop the shared resource cache before and after the test."""
    reset_resources()
    try:
        yield
    finally:
        reset_resources()
