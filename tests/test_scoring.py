"""Tests du moteur de scoring personnalisé."""

from __future__ import annotations

from astro_daily.domain.aspects import detect_aspects
from astro_daily.domain.scoring import (
    Domain,
    pick_top_explanations,
    round_half_up,
    score_personal_day,
)
from astro_daily.domain.zodiac import Body


def test_leo_without_aspects():
    """Sans aspect: base 50 + coloration du signe + 10."""
    day = score_personal_day("Leo", [])
    assert day.as_scores() == {
        "overall": 61,
        "career": 62,
        "fortune": 60,
        "love": 61,
        "social": 61,
        "study": 59,
    }
    assert day.explanations == []


def test_unknown_sign_is_neutral():
    day = score_personal_day("Ophiuchus", [])
    assert set(day.domains.values()) == {60}
    assert day.overall == 60


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(60.5) == 61
    assert round_half_up(-2.5) == -2
    assert round_half_up(64.49) == 64


def test_single_exact_trine_venus():
    aspects = detect_aspects({Body.VENUS: 10.0}, {Body.VENUS: 130.0})
    assert len(aspects) == 1
    day = score_personal_day("Leo", aspects)
    assert day.domains[Domain.LOVE] == 69
    assert day.domains[Domain.CAREER] == 63
    assert day.domains[Domain.FORTUNE] == 66
    assert day.domains[Domain.SOCIAL] == 66
    assert day.domains[Domain.STUDY] == 60
    assert day.overall == 65
    assert day.explanations == ["Venus Trine natal Venus (strong, supportive)"]


def test_neutral_conjunction_uses_fallback_polarity():
    aspects = detect_aspects({Body.MARS: 50.0}, {Body.MERCURY: 50.0})
    assert aspects[0].polarity == 0.0
    day = score_personal_day("Leo", aspects)
    # Mercure dans la paire: +0.5
    assert day.domains[Domain.STUDY] == 63
    assert day.domains[Domain.CAREER] == 66


def test_ruler_bonus_applies():
    aspects = detect_aspects({Body.SUN: 0.0}, {Body.SUN: 120.0})
    day = score_personal_day("Leo", aspects)
    assert day.domains[Domain.CAREER] == 69


def test_negative_contributions_are_capped():
    square = detect_aspects({Body.SATURN: 0.0}, {Body.SATURN: 90.0})
    assert len(square) == 1
    day = score_personal_day("Leo", square * 30)
    assert day.domains[Domain.CAREER] == 42
    assert day.domains[Domain.FORTUNE] == 40
    assert day.domains[Domain.STUDY] == 39
    assert day.domains[Domain.SOCIAL] == 46


def test_only_top_n_aspects_are_scored():
    aspects = detect_aspects({Body.VENUS: 10.0}, {Body.VENUS: 130.0})
    assert score_personal_day("Leo", aspects, top_n=0).as_scores() == score_personal_day(
        "Leo", []
    ).as_scores()


def test_scores_always_in_range():
    transit = {b: i * 12.0 for i, b in enumerate(Body)}
    natal = {b: i * 12.0 + 1 for i, b in enumerate(Body)}
    aspects = detect_aspects(transit, natal)
    for sign in ("Aries", "Leo", "Capricorn", ""):
        scores = score_personal_day(sign, aspects).as_scores()
        assert all(isinstance(v, int) and 0 <= v <= 100 for v in scores.values())


def test_explanations_moon_first_deduplicated_and_limited():
    transit = {b: 0.0 for b in Body}
    natal = {b: 0.0 for b in Body}
    aspects = detect_aspects(transit, natal)
    top = pick_top_explanations(aspects + aspects, limit=8)
    assert len(top) == 8
    keys = [(a.transit_body, a.aspect, a.natal_body) for a in top]
    assert len(set(keys)) == len(keys)
    moon_flags = [a.involves_moon for a in top]
    assert moon_flags == sorted(moon_flags, reverse=True)

    day = score_personal_day("Cancer", aspects, explanation_limit=3)
    assert len(day.explanations) == 3


def test_zero_explanation_limit_yields_no_explanations():
    aspects = detect_aspects({b: 0.0 for b in Body}, {b: 0.0 for b in Body})
    assert pick_top_explanations(aspects, limit=0) == []
    assert score_personal_day("Cancer", aspects, explanation_limit=0).explanations == []
