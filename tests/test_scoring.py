from __future__ import annotations

from datetime import datetime, timezone

from listing_finder.scoring import SCORE_WEIGHTS, ScoreWeights, calculate_match_score

from conftest import NOW, make_grant

CLOSED_WINDOW = {
    "opens_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
    "closes_at": datetime(2024, 12, 31, tzinfo=timezone.utc),
}


def test_open_grant_with_favorable_use() -> None:
    # base + open + favorable use; three requirements earn nothing
    assert calculate_match_score(make_grant(), NOW) == 85


def test_closed_nationwide_grant_scores_75() -> None:
    grant = make_grant(is_nationwide=True, uses=["Accessibility"], **CLOSED_WINDOW)

    assert calculate_match_score(grant, NOW) == 75


def test_few_requirements_bonus_includes_empty_list() -> None:
    grant = make_grant(uses=[], eligibility_requirements=[], **CLOSED_WINDOW)

    assert calculate_match_score(grant, NOW) == 70


def test_favorable_keyword_match_is_case_sensitive() -> None:
    lower = make_grant(uses=["energy audit"], **CLOSED_WINDOW)
    proper = make_grant(uses=["Energy Efficiency"], **CLOSED_WINDOW)

    assert calculate_match_score(lower, NOW) == 65
    assert calculate_match_score(proper, NOW) == 70


def test_score_is_clamped_to_ceiling() -> None:
    grant = make_grant(
        is_nationwide=True,
        eligibility_requirements=["Homeowner"],
        uses=["First-Time Buyer"],
    )

    assert calculate_match_score(grant, NOW) == SCORE_WEIGHTS.ceiling == 95


def test_score_is_clamped_to_floor_with_custom_weights() -> None:
    weights = ScoreWeights(base=10)

    assert calculate_match_score(make_grant(**CLOSED_WINDOW), NOW, weights) == 45


def test_score_with_indeterminate_dates_stays_in_range() -> None:
    grant = make_grant(opens_at=None, closes_at=None, uses=[])

    score = calculate_match_score(grant, NOW)

    assert 45 <= score <= 95
    assert score == 65
