"""Entry point for ``python -m transcript_std``.

Provides a CLI that standardizes or validates a transcript file.  Uses
stdlib :mod:`argparse` for argument parsing.

Subcommands:
    process  -- Default. Rewrite, format and score a transcript.
    validate -- Score a transcript against the style guide as-is.

Exit codes:
    0 -- Completed successfully.
    1 -- An error occurred (file not found, unreadable, config error,
         processing failure).
    2 -- Argument parsing error (handled by argparse).
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from transcript_std.config import ConfigError, Settings, load_settings
from transcript_std.exceptions import TranscriptError
from transcript_std.log import setup_logging
from transcript_std.models.metadata import DetectiveInfo, InterviewInfo
from transcript_std.models.speakers import SpeakerDefinition, build_speaker_set, parse_speaker_spec
from transcript_std.pipeline import ingest_transcript, process_transcript
from transcript_std.report import print_processing_result, print_validation_result
from transcript_std.rules import build_rule_table
from transcript_std.validator import validate
from transcript_std.versions import VersionLedger


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "transcript_file",
        type=str,
        help="Path to the .txt transcript file.",
    )
    parser.add_argument(
        "--speaker",
        action="append",
        default=None,
        metavar="LABEL=DESCRIPTION",
        help=(
            "Custom speaker label, e.g. 'MAN:=Male witness'. Repeatable. "
            "Defaults to SPEAKER_LABELS from config, else Q:/A:."
        ),
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug-level logging.",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser with subcommands.

    Returns:
        Configured :class:`argparse.ArgumentParser` with ``process`` and
        ``validate`` subcommands.
    """
    parser = argparse.ArgumentParser(
        prog="transcript-std",
        description="Standardize an interview transcript to the LVMPD statement format.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # --- "process" subcommand (default) -------------------------------
    process_parser = subparsers.add_parser(
        "process",
        help="Rewrite, format and score a transcript.",
    )
    _add_common_arguments(process_parser)
    process_parser.add_argument("--detective-name", default=None, help="Detective name.")
    process_parser.add_argument("--badge", default=None, help="Detective P# number.")
    process_parser.add_argument("--section", default=None, help="Detective section/detail.")
    process_parser.add_argument("--date", default=None, help="Interview date (YYYY-MM-DD).")
    process_parser.add_argument("--time", default=None, help="Interview time (HH:MM).")
    process_parser.add_argument("--location", default=None, help="Interview location.")
    process_parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write the standardized document here instead of stdout.",
    )

    # --- "validate" subcommand ----------------------------------------
    validate_parser = subparsers.add_parser(
        "validate",
        help="Score a transcript against the style guide.",
    )
    _add_common_arguments(validate_parser)

    return parser


def _resolve_command(
    parser: argparse.ArgumentParser,
    argv: list[str],
) -> argparse.Namespace:
    """Parse *argv*, routing to ``process`` when no subcommand is given.

    ``python -m transcript_std file.txt`` is treated as
    ``python -m transcript_std process file.txt``.
    """
    known_subcommands = {"process", "validate"}
    if not argv:
        argv = ["process"]
    elif argv[0] in {"-h", "--help"}:
        pass
    elif argv[0] not in known_subcommands:
        argv = ["process", *argv]

    return parser.parse_args(argv)


def _read_transcript(path: Path) -> str | None:
    """Read *path*, printing an error and returning ``None`` on failure."""
    if not path.exists():
        print(f"Error: File not found: {path}", file=sys.stderr)
        return None
    if not path.is_file():
        print(f"Error: Not a file: {path}", file=sys.stderr)
        return None
    try:
        return path.read_text(encoding="utf-8")
    except PermissionError:
        print(f"Error: Permission denied: {path}", file=sys.stderr)
        return None
    except UnicodeDecodeError:
        print(f"Error: Not a UTF-8 text file: {path}", file=sys.stderr)
        return None


def _resolve_speakers(
    args: argparse.Namespace, settings: Settings
) -> tuple[SpeakerDefinition, ...]:
    if args.speaker:
        return build_speaker_set(parse_speaker_spec(spec) for spec in args.speaker)
    return settings.speakers


def _load_settings_or_report() -> Settings | None:
    try:
        return load_settings()
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None


def _handle_process(args: argparse.Namespace) -> int:
    """Execute the ``process`` subcommand.

    Returns:
        Exit code: ``0`` on success, ``1`` on error.
    """
    text = _read_transcript(Path(args.transcript_file))
    if text is None:
        return 1

    settings = _load_settings_or_report()
    if settings is None:
        return 1
    if not args.verbose:
        setup_logging(settings.log_level)

    try:
        speakers = _resolve_speakers(args, settings)
    except ValueError as exc:
        print(f"Error: Invalid --speaker: {exc}", file=sys.stderr)
        return 1

    default = settings.detective
    detective = DetectiveInfo(
        name=args.detective_name or default.name,
        badge=args.badge or default.badge,
        section=args.section or default.section,
    )
    interview = InterviewInfo(date=args.date, time=args.time, location=args.location)

    ledger = VersionLedger()
    rule_table = build_rule_table(settings.corrections)
    try:
        intake = ingest_transcript(text, speakers, ledger=ledger, rule_table=rule_table)
        result = process_transcript(
            text,
            detective=detective,
            interview=interview,
            speakers=speakers,
            rule_table=rule_table,
            ledger=ledger,
            baseline_score=intake.validation.score,
        )
    except TranscriptError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print_processing_result(result, intake)

    if args.output:
        Path(args.output).write_text(result.final_text + "\n", encoding="utf-8")
    else:
        sys.stdout.write("\n" + result.final_text + "\n")

    return 0


def _handle_validate(args: argparse.Namespace) -> int:
    """Execute the ``validate`` subcommand.

    Returns:
        Exit code: ``0`` on success, ``1`` on error.
    """
    text = _read_transcript(Path(args.transcript_file))
    if text is None:
        return 1

    settings = _load_settings_or_report()
    if settings is None:
        return 1
    if not args.verbose:
        setup_logging(settings.log_level)

    try:
        speakers = _resolve_speakers(args, settings)
    except ValueError as exc:
        print(f"Error: Invalid --speaker: {exc}", file=sys.stderr)
        return 1

    print_validation_result(validate(text, speakers))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the transcript-std CLI.

    Args:
        argv: Command-line arguments.  Defaults to ``sys.argv[1:]``
            when ``None`` (the normal case).

    Returns:
        Exit code: ``0`` on success, ``1`` on error.
    """
    parser = build_parser()
    args = _resolve_command(parser, argv if argv is not None else sys.argv[1:])

    setup_logging("DEBUG" if getattr(args, "verbose", False) else "INFO")

    if args.command == "validate":
        return _handle_validate(args)
    return _handle_process(args)


if __name__ == "__main__":
    raise SystemExit(main())
