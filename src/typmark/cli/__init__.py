"""Command-line interface for typmark.

Examples
--------
Render to an HTML fragment::

    $ typmark notes.md

Write a complete page::

    $ typmark notes.md --standalone --title "Notes" -o notes.html

Emit the content tree as JSON::

    $ typmark notes.md --format content

Keep the HTML even if some math failed to typeset::

    $ typmark notes.md --keep-partial -o notes.html

Show math diagnostics as a table::

    $ typmark notes.md --rich

"""

import argparse
import logging
import sys

from typmark.cli.builder import create_parser, get_exit_code_for_exception
from typmark.cli.output import print_diagnostics, should_use_rich_output
from typmark.constants import EXIT_ERROR, EXIT_RENDERING_ERROR, EXIT_SUCCESS
from typmark.exceptions import TypmarkError
from typmark.logging_utils import configure_logging
from typmark.utils.io_utils import read_text_input, write_content

logger = logging.getLogger(__name__)


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments."""
    # --trace takes highest precedence, then --verbose, then --log-level
    if parsed_args.trace:
        log_level = logging.DEBUG
    elif parsed_args.verbose and parsed_args.log_level == "WARNING":
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level.upper())

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _emit(text: str, output: str | None) -> None:
    if output:
        write_content(text, output)
    else:
        sys.stdout.write(text)


def _render(parsed_args: argparse.Namespace, text: str, use_rich: bool) -> int:
    from typmark import render_content_json, render_html_result
    from typmark.options import HtmlRendererOptions, MathOptions
    from typmark.resources import get_resources

    get_resources(MathOptions(font_paths=tuple(parsed_args.font_path)))

    if parsed_args.format == "content":
        _emit(render_content_json(text), parsed_args.output)
        return EXIT_SUCCESS

    html_options = HtmlRendererOptions(
        standalone=parsed_args.standalone,
        highlight_code=not parsed_args.no_highlight,
    )
    if parsed_args.title is not None:
        html_options = html_options.create_updated(title=parsed_args.title)

    result = render_html_result(text, options=html_options)
    if result.diagnostics:
        print_diagnostics(result.diagnostics, use_rich)
        if parsed_args.keep_partial:
            _emit(result.html, parsed_args.output)
        return EXIT_RENDERING_ERROR

    _emit(result.html, parsed_args.output)
    return EXIT_SUCCESS


def main(args: list[str] | None = None) -> int:
    """Execute the CLI entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)

    try:
        text = read_text_input(parsed_args.input)
    except OSError as e:
        print(f"Error: cannot read {parsed_args.input}: {e}", file=sys.stderr)
        return EXIT_ERROR

    use_rich = False
    try:
        use_rich = should_use_rich_output(parsed_args)
        return _render(parsed_args, text, use_rich)
    except Exception as e:
        exit_code = get_exit_code_for_exception(e)
        error_msg = str(e)
        if isinstance(e, ImportError):
            error_msg = f"Missing dependency: {e}"
        elif not isinstance(e, TypmarkError):
            error_msg = f"Unexpected error: {e}"
            logger.debug("Unexpected error while rendering", exc_info=True)

        print(f"Error: {error_msg}", file=sys.stderr)
        print_diagnostics(getattr(e, "diagnostics", ()), use_rich)
        return exit_code


if __name__ == "__main__":
    sys.exit(main())
