"""Qualification match score for grants.

The score is a designed heuristic shown to users as a percentage. It depends
only on the grant itself and the reference time, so it can be computed before
or after filtering with the same result.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from listing_finder.models import Grant, RecordStatus
from listing_finder.status import status_of


@dataclass(frozen=True, slots=True)
class ScoreWeights:
    base: int = 65
    open_bonus: int = 15
    broad_scope_bonus: int = 10
    few_requirements_bonus: int = 5
    few_requirements_limit: int = 2
    favorable_use_bonus: int = 5
    favorable_use_keywords: tuple[str, ...] = ("First-Time", "Energy", "Repair")
    floor: int = 45
    ceiling: int = 95


SCORE_WEIGHTS = ScoreWeights()


def calculate_match_score(
    grant: Grant,
    now: datetime,
    weights: ScoreWeights = SCORE_WEIGHTS,
) -> int:
    score = weights.base

    if status_of(grant, now) is RecordStatus.OPEN:
        score += weights.open_bonus

    if grant.is_nationwide:
        score += weights.broad_scope_bonus

    if len(grant.eligibility_requirements or []) <= weights.few_requirements_limit:
        score += weights.few_requirements_bonus

    if _has_favorable_use(grant.uses or [], weights.favorable_use_keywords):
        score += weights.favorable_use_bonus

    return min(weights.ceiling, max(weights.floor, score))


def _has_favorable_use(uses: list[str], keywords: tuple[str, ...]) -> bool:
    # case-sensitive substring match
    return any(keyword in use for use in uses for keyword in keywords)
