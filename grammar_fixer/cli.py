"""Command-line interface for grammar checking sessions.

``check`` analyses a text and prints the grouped report; ``fix`` walks through
the findings interactively and applies the chosen replacements.
"""

from __future__ import annotations

import argparse
import csv
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional

from grammar_fixer.corrections import Classification, fingerprint
from grammar_fixer.errors import GrammarFixerError, ValidationError
from grammar_fixer.models import Finding, SupportedLanguage
from grammar_fixer.report import build_session_csv, build_session_markdown
from grammar_fixer.session import (
    SessionConfiguration,
    SessionController,
    build_analyzer,
    build_fix_service,
)

LOGGER = logging.getLogger(__name__)

QUIT = "q"
SKIP = "n"
REANALYSE = "r"


def _add_input_args(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--text", help="Text to check")
    source.add_argument("--file", type=Path, help="Read the text to check from a UTF-8 file")
    parser.add_argument(
        "--language",
        default=None,
        help=(
            f"Language code ({', '.join(SupportedLanguage.all_values())}); unsupported "
            "values fall back to en (default: env GRAMMAR_FIXER_LANGUAGE or en)"
        ),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Check text with LanguageTool and apply suggested corrections.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print grouped corrections and suggestions
  python -m grammar_fixer check --text "She dont like apples."

  # Write Markdown and CSV reports
  python -m grammar_fixer check --file essay.txt --report reports/essay.md

  # Walk through the findings and apply fixes
  python -m grammar_fixer fix --file essay.txt --output essay-fixed.txt

Environment Variables:
  GRAMMAR_FIXER_LANGUAGE       Default language code (default: en)
  GRAMMAR_FIXER_BACKEND        "http" or "library" (default: http)
  LANGUAGETOOL_URL             LanguageTool server base URL
  GRAMMAR_FIXER_FIX_URL        Remote fix endpoint (default: apply locally)
  GRAMMAR_FIXER_TIMEOUT        HTTP timeout in seconds (default: 30)
  GRAMMAR_FIXER_MAX_RETRIES    Retries for transient failures (default: 3)
  GRAMMAR_FIXER_IGNORED_WORDS  Comma-separated words to ignore
        """,
    )
    parser.add_argument("--dotenv", type=Path, default=None, help="Path to a .env file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to run")

    check = subparsers.add_parser("check", help="Analyse text and print a report")
    _add_input_args(check)
    check.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Write the Markdown report here (a CSV is written next to it)",
    )

    fix = subparsers.add_parser("fix", help="Interactively apply corrections")
    _add_input_args(fix)
    fix.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the corrected text here instead of printing it",
    )
    return parser


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(list(argv) if argv is not None else None)


def _read_text(args: argparse.Namespace) -> str:
    if args.file is not None:
        return args.file.read_text(encoding="utf-8")
    return args.text


def _report_error(exc: GrammarFixerError) -> None:
    LOGGER.debug("%s: %s", type(exc).__name__, exc)
    if isinstance(exc, ValidationError):
        for field, messages in exc.field_errors.items():
            for message in messages:
                print(f"Invalid {field}: {message}", file=sys.stderr)
        return
    print(f"Error: {exc}", file=sys.stderr)


def write_reports(controller: SessionController, report_path: Path) -> Path:
    """Write the Markdown report and a sibling CSV; return the CSV path."""

    snapshot = controller.snapshot()
    report_path.parent.mkdir(parents=True, exist_ok=True)
    report_path.write_text(build_session_markdown(snapshot), encoding="utf-8")

    csv_path = report_path.with_suffix(".csv")
    with csv_path.open("w", encoding="utf-8", newline="") as csv_file:
        writer = csv.writer(csv_file)
        writer.writerows(build_session_csv(snapshot))
    return csv_path


def run_check(
    controller: SessionController,
    text: str,
    language: str,
    report_path: Path | None = None,
) -> int:
    try:
        controller.submit(text, language)
    except GrammarFixerError as exc:
        _report_error(exc)
        return 1

    print(build_session_markdown(controller.snapshot()))
    if report_path is not None:
        csv_path = write_reports(controller, report_path)
        print(f"Report written to {report_path.resolve()}")
        print(f"CSV report written to {csv_path.resolve()}")
    return 0


def _actionable(classification: Classification) -> list[Finding]:
    # Suggestions without replacements have nothing to apply
    return [
        finding
        for finding in classification.corrections + classification.pending_suggestions
        if finding.replacements
    ]


def _prompt_choice(finding: Finding) -> str:
    """Ask which replacement to apply; returns a replacement or a command letter."""

    if len(finding.replacements) == 1:
        prompt = f"Apply {finding.replacements[0]!r}? [y]es / [n]o / [r]e-analyse / [q]uit: "
    else:
        for index, replacement in enumerate(finding.replacements, start=1):
            print(f"  {index}) {replacement}")
        prompt = f"Choose 1-{len(finding.replacements)}, [n]o, [r]e-analyse or [q]uit: "

    while True:
        try:
            answer = input(prompt).strip().lower()
        except EOFError:
            return QUIT
        if answer in (QUIT, SKIP, REANALYSE):
            return answer
        if len(finding.replacements) == 1 and answer in ("y", "yes", ""):
            return finding.replacements[0]
        if answer.isdigit() and 1 <= int(answer) <= len(finding.replacements):
            return finding.replacements[int(answer) - 1]
        print("Please answer with one of the listed options.")


def run_fix(controller: SessionController, text: str, language: str) -> int:
    try:
        controller.submit(text, language)
    except GrammarFixerError as exc:
        _report_error(exc)
        return 1

    skipped: set[str] = set()
    while True:
        candidates = [
            finding
            for finding in _actionable(controller.classify())
            if fingerprint(finding) not in skipped
        ]
        if not candidates:
            print("No more corrections to review.")
            break

        finding = candidates[0]
        print()
        print(finding.context.highlighted() or finding.matched_text(controller.content))
        print(f"  {finding.message}")
        choice = _prompt_choice(finding)

        if choice == QUIT:
            break
        if choice == SKIP:
            skipped.add(fingerprint(finding))
            continue
        if choice == REANALYSE:
            skipped.clear()
            try:
                controller.submit(controller.content, language)
            except GrammarFixerError as exc:
                _report_error(exc)
            continue

        try:
            controller.apply_fix(finding, choice)
        except GrammarFixerError as exc:
            print(f"Could not apply fix: {exc}", file=sys.stderr)
            skipped.add(fingerprint(finding))
    return 0


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    config = SessionConfiguration.from_env(args.dotenv)
    language = args.language or config.language.value
    try:
        text = _read_text(args)
    except OSError as exc:
        LOGGER.error("Could not read %s: %s", args.file, exc)
        return 1

    controller = SessionController(build_analyzer(config), build_fix_service(config))
    try:
        if args.command == "check":
            return run_check(controller, text, language, args.report)

        exit_code = run_fix(controller, text, language)
        if exit_code == 0:
            if args.output is not None:
                args.output.parent.mkdir(parents=True, exist_ok=True)
                args.output.write_text(controller.content, encoding="utf-8")
                print(f"Corrected text written to {args.output.resolve()}")
            else:
                print()
                print(controller.content)
        return exit_code
    finally:
        controller.close()


if __name__ == "__main__":
    raise SystemExit(main())
