from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING
from uuid import UUID

from dotenv import load_dotenv

from jobtracker.app import (
    find_matching_job,
    find_potential_matches,
    merge_jobs,
    track_email_analysis,
)
from jobtracker.config import configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Match, deduplicate and merge tracked jobs")
    subparsers = parser.add_subparsers(dest="command", required=True)

    match = subparsers.add_parser("match", help="Look up an existing job for a title/company")
    match.add_argument("--title", type=str, required=True, help="Job title to search for")
    match.add_argument("--company", type=str, required=True, help="Company name to compare")

    duplicates = subparsers.add_parser("duplicates", help="List likely duplicates of a job")
    duplicates.add_argument("job_id", type=int, help="Job to find duplicates for")

    merge = subparsers.add_parser("merge", help="Merge a duplicate job into another")
    merge.add_argument("source_id", type=int, help="Job to fold away (deleted on success)")
    merge.add_argument("target_id", type=int, help="Job that survives the merge")

    track = subparsers.add_parser(
        "track-email",
        help="Record a classified email (JSON payload) against a user's jobs",
    )
    track.add_argument("payload", type=Path, help="Path to the classifier JSON payload")
    track.add_argument(
        "--user-id",
        type=str,
        required=True,
        help="User the analysed email belongs to",
    )

    return parser.parse_args(list(argv))


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise ValueError(f"Invalid UUID: {value}") from exc


def _load_payload(path: Path) -> dict[str, object]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ValueError(f"Could not read email payload from {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ValueError(f"Email payload in {path} must be a JSON object")
    return payload


def _run(args: argparse.Namespace) -> bool:
    if args.command == "match":
        result = find_matching_job(args.title, args.company)
        if result.is_match and result.matched_job is not None:
            log.info(
                "Matched job %s (%s) with company similarity %.3f",
                result.matched_job.id,
                result.matched_job,
                result.similarity,
            )
        else:
            log.info("No existing job matches %r at %r", args.title, args.company)
        return True

    if args.command == "duplicates":
        matches = find_potential_matches(args.job_id)
        log.info("Found %s potential duplicates of job %s", len(matches), args.job_id)
        for match in matches:
            log.info("  job %s (%s): %.3f", match.job.id, match.job, match.similarity)
        return True

    if args.command == "merge":
        result = merge_jobs(args.source_id, args.target_id)
        if result.success:
            log.info(result.message)
        else:
            log.error(result.message)
        return result.success

    if args.command == "track-email":
        outcome = track_email_analysis(args.payload_data, user_id=args.user_uuid)
        if outcome.skipped:
            log.info("Email %r was already recorded", outcome.subject)
        elif outcome.is_recognized and outcome.job is not None:
            log.info(
                "Email %r recorded against job %s (%s), status %s",
                outcome.subject,
                outcome.job.id,
                outcome.job,
                outcome.status,
            )
        else:
            log.warning("Email %r not recognised: %s", outcome.subject, ", ".join(outcome.notes))
        return True

    raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    load_dotenv()
    configure_logging()
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        if parsed_args.command == "track-email":
            parsed_args.user_uuid = _parse_uuid(parsed_args.user_id)
            parsed_args.payload_data = _load_payload(parsed_args.payload)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        succeeded = _run(parsed_args)
    except Exception:
        log.exception("Fatal error while running %s", parsed_args.command)
        sys.exit(1)

    if not succeeded:
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


if __name__ == "__main__":
    signal(SIGINT, sigint_handler)
    main()
