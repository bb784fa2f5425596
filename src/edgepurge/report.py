from __future__ import annotations

from typing import Iterable

from .models import PurgeOutcome


def summarize(outcomes: Iterable[PurgeOutcome]) -> str:
    outcomes = list(outcomes)
    successes = sum(1 for outcome in outcomes if outcome.succeeded)
    lines = [f"There were {successes} successes."]
    lines.extend(
        f"Failed for reason: {outcome.message}."
        for outcome in outcomes
        if not outcome.succeeded
    )
    return "\n".join(lines) + "\n"
