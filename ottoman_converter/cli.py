"""Command-line interface for the Ottoman Converter.

WHY: Users need a simple way to convert text from the terminal, try the
live (debounced) mode, manage dictionary entries, and start the HTTP API.
The CLI wires the pipeline together behind a handful of subcommands.

HOW: Uses argparse with subcommands. Async work (dictionary lookups, the
live session) runs via asyncio.run(). Converted text goes to stdout;
status and error messages go to stderr.

RULES:
- convert: text argument or --file; --offline skips the dictionary service;
  --dictionary-file applies local overrides; --json prints per-token detail
- live: each stdin line is a new snapshot of the input; only results for
  the latest snapshot are printed
- lookup / search / add: single-entry dictionary operations (need
  DICTIONARY_BASE_URL)
- serve: runs the FastAPI app with uvicorn
- Lookup failures during conversion are reported on stderr, never fatal
- Status output goes to stderr (not stdout)
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ottoman_converter import config
from ottoman_converter.api.base import (
    DictionaryAPIError,
    DictionaryLookup,
    LookupUnavailableError,
)
from ottoman_converter.api.client import DictionaryClient
from ottoman_converter.api.static import load_dictionary_file
from ottoman_converter.config import (
    DEFAULT_CATEGORY,
    DEFAULT_DEBOUNCE_S,
    DEFAULT_LOOKUP_TIMEOUT_S,
    ConverterOptions,
)
from ottoman_converter.core.converter import OttomanConverter
from ottoman_converter.core.ir import ConversionResult
from ottoman_converter.core.live import LiveConverter


def _status(msg: str) -> None:
    """Print a status message to stderr so stdout stays pipeable."""
    print(msg, file=sys.stderr, flush=True)


def _report_lookup_error(error: LookupUnavailableError) -> None:
    _status("Warning: {} (using fallback for all words)".format(error))


def _options_from_args(args: argparse.Namespace) -> ConverterOptions:
    return ConverterOptions(
        debounce_s=getattr(args, "debounce", DEFAULT_DEBOUNCE_S),
        lookup_timeout_s=args.timeout,
        ottoman_punctuation=args.ottoman_punctuation,
        arabic_indic_digits=args.arabic_digits,
    )


def _result_to_json(result: ConversionResult) -> str:
    """Serialize a ConversionResult with its per-token sources."""
    payload = {
        "output": result.text,
        "lookup_failed": result.lookup_failed,
        "segments": [
            {
                "text": segment.token.text,
                "output": segment.text,
                "kind": segment.token.kind.value,
                "source": segment.source.value,
            }
            for segment in result.segments
        ],
    }
    return json.dumps(payload, ensure_ascii=False, indent=2)


def _read_input_text(args: argparse.Namespace) -> str:
    """Return the text to convert from --file, the positional argument, or stdin."""
    if args.file:
        path = Path(args.file)
        if not path.is_file():
            raise ValueError("File not found: {}".format(path))
        return path.read_text(encoding="utf-8")
    if args.text is not None:
        return args.text
    return sys.stdin.read()


async def _with_dictionary(args: argparse.Namespace, run) -> int:  # noqa: ANN001
    """Open the dictionary selected by the flags and pass it to ``run``.

    RULES:
    - --dictionary-file wins over the service
    - --offline, or no DICTIONARY_BASE_URL, means no dictionary
    """
    if args.dictionary_file:
        return await run(load_dictionary_file(args.dictionary_file))
    if args.offline or not config.DICTIONARY_BASE_URL:
        return await run(None)
    async with DictionaryClient(base_url=config.DICTIONARY_BASE_URL, timeout_s=args.timeout) as client:
        return await run(client)


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------


async def _cmd_convert(args: argparse.Namespace) -> int:
    text = _read_input_text(args)
    options = _options_from_args(args)

    async def _run(dictionary: Optional[DictionaryLookup]) -> int:
        converter = OttomanConverter(dictionary, options)
        result = await converter.convert(text, on_error=_report_lookup_error)
        if args.json:
            print(_result_to_json(result))
        else:
            sys.stdout.write(result.text)
            if not result.text.endswith("\n"):
                sys.stdout.write("\n")
        return 0

    return await _with_dictionary(args, _run)


async def _cmd_live(args: argparse.Namespace) -> int:
    """Treat each stdin line as a new snapshot of the edited text."""
    options = _options_from_args(args)

    def _print_result(result: ConversionResult) -> None:
        print(result.text, flush=True)

    async def _run(dictionary: Optional[DictionaryLookup]) -> int:
        session = LiveConverter(
            dictionary,
            on_result=_print_result,
            on_error=_report_lookup_error,
            options=options,
        )
        loop = asyncio.get_running_loop()
        while True:
            line = await loop.run_in_executor(None, sys.stdin.readline)
            if not line:
                break
            session.update(line.rstrip("\n"))
        session.flush()
        await session.drain()
        return 0

    return await _with_dictionary(args, _run)


async def _cmd_lookup(args: argparse.Namespace) -> int:
    async with DictionaryClient(timeout_s=args.timeout) as client:
        ottoman = await client.lookup(args.word)
    if ottoman is None:
        _status("Not found: {}".format(args.word))
        return 1
    print(ottoman)
    return 0


async def _cmd_search(args: argparse.Namespace) -> int:
    async with DictionaryClient(timeout_s=args.timeout) as client:
        entries = await client.search(args.query)
    if not entries:
        _status("No results for '{}'".format(args.query))
        return 1
    for entry in entries:
        print("{}\t{}\t{}".format(entry.turkish, entry.ottoman, entry.category))
    return 0


async def _cmd_add(args: argparse.Namespace) -> int:
    async with DictionaryClient(timeout_s=args.timeout) as client:
        entry = await client.add_word(args.turkish, args.ottoman, args.category)
    _status("Added: {} → {} (id={})".format(entry.turkish, entry.ottoman, entry.id))
    return 0


def _cmd_serve(args: argparse.Namespace) -> int:
    from ottoman_converter.server.app import run

    run(host=args.host, port=args.port)
    return 0


_ASYNC_COMMANDS = {
    "convert": _cmd_convert,
    "live": _cmd_live,
    "lookup": _cmd_lookup,
    "search": _cmd_search,
    "add": _cmd_add,
}


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def _add_conversion_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Do not contact the dictionary service (fallback only).",
    )
    parser.add_argument(
        "--dictionary-file",
        default=None,
        help="JSON file of curated spellings to use instead of the service.",
    )
    parser.add_argument(
        "--ottoman-punctuation",
        action="store_true",
        help="Render ',' and '?' as '،' and '؟'.",
    )
    parser.add_argument(
        "--arabic-digits",
        action="store_true",
        help="Render digits inside words as Arabic-Indic digits.",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable: tests can inspect the parser without running anything.
    """
    parser = argparse.ArgumentParser(
        prog="ottoman_converter",
        description="Convert Latin-alphabet Turkish text into Ottoman script.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_LOOKUP_TIMEOUT_S,
        help="Dictionary lookup timeout in seconds (default: %(default)s).",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging on stderr.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    convert = subparsers.add_parser("convert", help="Convert text once.")
    convert.add_argument("text", nargs="?", default=None, help="Text to convert (default: stdin).")
    convert.add_argument("--file", default=None, help="Read the text from a UTF-8 file.")
    convert.add_argument("--json", action="store_true", help="Print per-token details as JSON.")
    _add_conversion_flags(convert)

    live = subparsers.add_parser(
        "live",
        help="Read edits from stdin, one snapshot per line; print the latest result.",
    )
    live.add_argument(
        "--debounce",
        type=float,
        default=DEFAULT_DEBOUNCE_S,
        help="Quiet period before a lookup, in seconds (default: %(default)s).",
    )
    _add_conversion_flags(live)

    lookup = subparsers.add_parser("lookup", help="Exact dictionary lookup.")
    lookup.add_argument("word")

    search = subparsers.add_parser("search", help="Search the dictionary.")
    search.add_argument("query")

    add = subparsers.add_parser("add", help="Add a dictionary entry.")
    add.add_argument("turkish")
    add.add_argument("ottoman")
    add.add_argument("--category", default=DEFAULT_CATEGORY)

    serve = subparsers.add_parser("serve", help="Run the HTTP API.")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    - Exits 1 on configuration or dictionary service errors
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command == "serve":
        sys.exit(_cmd_serve(args))

    try:
        code = asyncio.run(_ASYNC_COMMANDS[args.command](args))
    except KeyboardInterrupt:
        _status("\nCancelled by user.")
        sys.exit(130)
    except (ValueError, LookupUnavailableError) as e:
        # Config errors (missing service URL, bad dictionary file) and
        # service failures on single-entry commands
        if isinstance(e, DictionaryAPIError):
            print("Error: dictionary service returned {}: {}".format(e.status_code, e.message), file=sys.stderr)
        else:
            print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()
