"""Eligibility rules deciding whether a log file may be compressed."""

from __future__ import annotations

from logpress.core.sizes import format_size
from logpress.types.scan import Candidate, ScanPolicy, Verdict

SECONDS_PER_DAY = 86400


def age_in_days(now: float, modified_at: float) -> int:
    """Whole days elapsed since *modified_at*, truncated toward zero."""
    return int((now - modified_at) / SECONDS_PER_DAY)


def evaluate(candidate: Candidate, policy: ScanPolicy, now: float) -> Verdict:
    """Classify *candidate* against *policy*. First matching rule wins."""
    if candidate.size_bytes < policy.min_size_bytes:
        if candidate.size_bytes == 0:
            return Verdict.SKIPPED_EMPTY
        return Verdict.SKIPPED_TOO_SMALL
    # gzip and friends cannot keep several names pointing at one inode.
    if candidate.hard_link_count > 1:
        return Verdict.SKIPPED_HARD_LINKED
    # A recently modified file may still have an active writer.
    if age_in_days(now, candidate.modified_at) < policy.min_age_days:
        return Verdict.SKIPPED_TOO_RECENT
    return Verdict.ELIGIBLE


def describe(verdict: Verdict, candidate: Candidate, policy: ScanPolicy, now: float) -> str:
    """Operator-facing explanation of why *candidate* was skipped."""
    path = candidate.path
    match verdict:
        case Verdict.SKIPPED_EMPTY:
            return f"skipping {path}: file is empty"
        case Verdict.SKIPPED_TOO_SMALL:
            return (
                f"skipping {path}: {format_size(candidate.size_bytes)} is below "
                f"the {format_size(policy.min_size_bytes)} threshold"
            )
        case Verdict.SKIPPED_HARD_LINKED:
            return (
                f"skipping {path}: file has {candidate.hard_link_count} hard links"
            )
        case Verdict.SKIPPED_TOO_RECENT:
            age = age_in_days(now, candidate.modified_at)
            return (
                f"skipping {path}: modified {age} day(s) ago, "
                f"minimum age is {policy.min_age_days}"
            )
        case _:
            return f"{path} is eligible for compression"
