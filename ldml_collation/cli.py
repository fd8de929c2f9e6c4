"""Command-line interface for the LDML collation rule converter.

WHY: Users and build scripts need a simple way to turn the collation in an
LDML file into rule text from the terminal. The CLI wires together the
pipeline — file validation, LDML parsing through the adapter, pluggable
formatter output, and file saving — behind a single command.

HOW: Uses argparse to accept an input LDML file, the collation type to
extract, the output formats, newline style and output directory. Status
messages go to stderr; output files are saved next to the source (or to
--output-dir), or printed to stdout with --stdout.

RULES:
- Positional argument: input LDML file path
- --formats: comma-separated formatter keys (default: preferred)
- Output naming: {stem}{suffix}, numeric suffix for conflicts (-icu-rules-2.txt)
- Status output goes to stderr (not stdout)
- Structural errors in the collation and malformed XML exit with status 1
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from lxml import etree

from ldml_collation.adapters.ldml_adapter import load_collation_tree
from ldml_collation.config import (
    DEFAULT_COLLATION_TYPE,
    DEFAULT_LOG_LEVEL,
    DEFAULT_NEWLINE_STYLE,
    NEWLINE_STYLES,
    resolve_newline,
)
from ldml_collation.core.errors import CollationConfigError
from ldml_collation.formatters import FORMATTERS
from ldml_collation.formatters.base import FormatterOutput

DEFAULT_FORMATS = "preferred"


def _status(msg: str) -> None:
    """Print a status message to stderr.

    Status output must not pollute stdout so --stdout output can be piped.
    """
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str) -> None:
    print("Error: {}".format(msg), file=sys.stderr)
    sys.exit(1)


def _resolve_output_path(stem: str, suffix: str, output_dir: Path) -> Path:
    """Return ``{stem}{suffix}`` in output_dir, or the first free numbered variant.

    The number goes before the extension: de-rules.txt, de-rules-2.txt,
    de-rules-3.txt, ...
    """
    path = output_dir / (stem + suffix)
    name, ext = os.path.splitext(suffix)
    counter = 2
    while path.exists():
        path = output_dir / "{}{}-{}{}".format(stem, name, counter, ext)
        counter += 1
    return path


def _save_output(
    output: FormatterOutput,
    stem: str,
    output_dir: Path,
) -> Path:
    """Save a single formatter output to disk as UTF-8 and return its path.

    Written as bytes so the chosen newline style is kept exactly.
    """
    path = _resolve_output_path(stem, output.suffix, output_dir)
    path.write_bytes(output.content.encode("utf-8"))
    return path


def _parse_formats(formats: str) -> List[str]:
    """Split and validate the --formats value."""
    format_keys = [f.strip() for f in formats.split(",") if f.strip()]
    if not format_keys:
        _fail("No output formats given.")
    for key in format_keys:
        if key not in FORMATTERS:
            available = ", ".join(sorted(FORMATTERS.keys()))
            _fail("Unknown format '{}'. Available formats: {}".format(key, available))
    return format_keys


def _run(args: argparse.Namespace) -> None:
    """Execute the conversion pipeline.

    RULES:
    - Validate the input file and output directory before parsing
    - Formatters producing no output (not representable) are reported, not fatal
    - Save each formatter's output with conflict avoidance, or print it
    """
    input_path = Path(args.input_file).resolve()
    if not input_path.is_file():
        _fail("File not found: {}".format(input_path))

    output_dir = Path(args.output_dir).resolve() if args.output_dir else input_path.parent
    if not args.stdout and not output_dir.is_dir():
        _fail("Output directory does not exist: {}".format(output_dir))

    format_keys = _parse_formats(args.formats)

    try:
        newline = resolve_newline(args.newline)
    except ValueError as e:
        _fail(str(e))

    _status("Reading <collation type=\"{}\"> from {}...".format(args.collation_type, input_path.name))
    try:
        tree = load_collation_tree(input_path, args.collation_type)
        outputs: List[FormatterOutput] = []
        for key in format_keys:
            formatter = FORMATTERS[key](newline=newline)
            _status("  Running {} formatter...".format(formatter.name))
            produced = formatter.format(tree)
            if not produced:
                _status("  {}: not representable, skipped".format(formatter.name))
            outputs.extend(produced)
    except CollationConfigError as e:
        _fail("Invalid collation in {}: {}".format(input_path.name, e))
    except etree.XMLSyntaxError as e:
        _fail("Malformed XML in {}: {}".format(input_path.name, e))

    if args.stdout:
        for output in outputs:
            sys.stdout.write(output.content)
            sys.stdout.write("\n")
        sys.stdout.flush()
        return

    stem = input_path.stem
    saved_files: List[Path] = []
    for output in outputs:
        saved_path = _save_output(output, stem, output_dir)
        saved_files.append(saved_path)
        _status("  Saved: {}".format(saved_path.name))

    _status("Done! Saved {} file(s) to {}".format(len(saved_files), output_dir))


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    Separate from main() so tests can inspect the parser without running
    the pipeline.
    """
    parser = argparse.ArgumentParser(
        prog="ldml_collation",
        description="Convert the collation of an LDML file into ICU rules "
                    "or the simple rules dialect.",
    )

    parser.add_argument(
        "input_file",
        help="Path to the LDML file containing a <collation> element.",
    )

    parser.add_argument(
        "--collation-type",
        default=DEFAULT_COLLATION_TYPE,
        help="Type attribute of the <collation> to convert (default: %(default)s).",
    )

    parser.add_argument(
        "--formats",
        default=DEFAULT_FORMATS,
        help="Comma-separated list of output formats. "
             "Available: {}. Default: %(default)s.".format(", ".join(sorted(FORMATTERS.keys()))),
    )

    parser.add_argument(
        "--newline",
        default=DEFAULT_NEWLINE_STYLE,
        help="Line break style in the output: {} (default: %(default)s).".format(
            ", ".join(sorted(NEWLINE_STYLES))),
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save output files (default: same as input file).",
    )

    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the rules to stdout instead of saving files.",
    )

    parser.add_argument(
        "--log-level",
        default=DEFAULT_LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for diagnostics on stderr (default: %(default)s).",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    _run(args)


if __name__ == "__main__":
    main()
