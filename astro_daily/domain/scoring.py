"""
Score personnalisé du jour à partir des aspects transit → natal.

Chaque domaine (Career, Fortune, Love, Social, Study) part d'une base de 50,
reçoit une légère coloration selon le signe solaire et une ligne de base
"optimiste" de +10, puis la somme plafonnée des contributions d'aspects.
Le score global est une moyenne pondérée des cinq domaines.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

import structlog

from astro_daily.domain.aspects import CONJUNCTION, DetectedAspect, aspect_to_text
from astro_daily.domain.zodiac import Body, Sign, ensure_complete, normalize_sign, ruler_of

log = structlog.get_logger(__name__)


class Domain(str, Enum):
    """Domaines de vie notés chaque jour."""

    CAREER = "Career"
    FORTUNE = "Fortune"
    LOVE = "Love"
    SOCIAL = "Social"
    STUDY = "Study"


BASE_SCORE = 50
OPTIMISM_BASELINE = 10
TOP_ASPECTS_FOR_SCORING = 25
EXPLANATION_LIMIT = 8
MOON_BOOST = 1.12
RULER_BONUS = 1.12
RELEVANCE_DIVISOR = 1.5

OVERALL_WEIGHTS: dict[Domain, float] = {
    Domain.CAREER: 0.22,
    Domain.FORTUNE: 0.18,
    Domain.LOVE: 0.22,
    Domain.SOCIAL: 0.18,
    Domain.STUDY: 0.20,
}

NEGATIVE_CAPS: dict[Domain, float] = {
    Domain.CAREER: -20,
    Domain.FORTUNE: -20,
    Domain.LOVE: -20,
    Domain.SOCIAL: -18,
    Domain.STUDY: -20,
}
POSITIVE_CAPS: dict[Domain, float] = {
    Domain.CAREER: 24,
    Domain.FORTUNE: 24,
    Domain.LOVE: 24,
    Domain.SOCIAL: 22,
    Domain.STUDY: 24,
}

# Pertinence de chaque corps pour chaque domaine (appliquée aux deux corps d'un aspect)
DOMAIN_RELEVANCE: dict[Domain, dict[Body, float]] = {
    Domain.CAREER: {
        Body.SUN: 0.6, Body.MOON: 0.2, Body.MERCURY: 0.4, Body.VENUS: 0.1, Body.MARS: 0.7,
        Body.JUPITER: 0.4, Body.SATURN: 0.8, Body.URANUS: 0.3, Body.NEPTUNE: 0.1, Body.PLUTO: 0.3,
    },
    Domain.FORTUNE: {
        Body.SUN: 0.2, Body.MOON: 0.1, Body.MERCURY: 0.3, Body.VENUS: 0.6, Body.MARS: 0.2,
        Body.JUPITER: 0.8, Body.SATURN: 0.4, Body.URANUS: 0.3, Body.NEPTUNE: 0.1, Body.PLUTO: 0.2,
    },
    Domain.LOVE: {
        Body.SUN: 0.2, Body.MOON: 0.7, Body.MERCURY: 0.2, Body.VENUS: 0.9, Body.MARS: 0.5,
        Body.JUPITER: 0.2, Body.SATURN: 0.1, Body.URANUS: 0.2, Body.NEPTUNE: 0.5, Body.PLUTO: 0.3,
    },
    Domain.SOCIAL: {
        Body.SUN: 0.2, Body.MOON: 0.5, Body.MERCURY: 0.7, Body.VENUS: 0.5, Body.MARS: 0.2,
        Body.JUPITER: 0.5, Body.SATURN: 0.1, Body.URANUS: 0.3, Body.NEPTUNE: 0.2, Body.PLUTO: 0.1,
    },
    Domain.STUDY: {
        Body.SUN: 0.2, Body.MOON: 0.2, Body.MERCURY: 0.9, Body.VENUS: 0.1, Body.MARS: 0.2,
        Body.JUPITER: 0.4, Body.SATURN: 0.6, Body.URANUS: 0.3, Body.NEPTUNE: 0.1, Body.PLUTO: 0.1,
    },
}


def _flavor(career: int, fortune: int, love: int, social: int, study: int) -> dict[Domain, int]:
    return {
        Domain.CAREER: career,
        Domain.FORTUNE: fortune,
        Domain.LOVE: love,
        Domain.SOCIAL: social,
        Domain.STUDY: study,
    }


# Petite coloration par signe solaire
SIGN_FLAVOR: dict[Sign, dict[Domain, int]] = {
    Sign.ARIES: _flavor(2, 0, 0, 1, -1),
    Sign.TAURUS: _flavor(0, 2, 1, 0, 0),
    Sign.GEMINI: _flavor(1, 0, 0, 2, 2),
    Sign.CANCER: _flavor(0, 0, 2, 0, 0),
    Sign.LEO: _flavor(2, 0, 1, 1, -1),
    Sign.VIRGO: _flavor(1, 1, 0, 0, 2),
    Sign.LIBRA: _flavor(0, 0, 2, 1, 0),
    Sign.SCORPIO: _flavor(1, 0, 1, -1, 0),
    Sign.SAGITTARIUS: _flavor(1, 0, 0, 1, 0),
    Sign.CAPRICORN: _flavor(2, 1, -1, -1, 2),
    Sign.AQUARIUS: _flavor(1, 0, 0, 1, 1),
    Sign.PISCES: _flavor(0, 0, 1, 0, 0),
}
NEUTRAL_FLAVOR = _flavor(0, 0, 0, 0, 0)

ensure_complete(DOMAIN_RELEVANCE, Domain, "DOMAIN_RELEVANCE")
for _domain, _row in DOMAIN_RELEVANCE.items():
    ensure_complete(_row, Body, f"DOMAIN_RELEVANCE[{_domain.value}]")
ensure_complete(SIGN_FLAVOR, Sign, "SIGN_FLAVOR")
for _sign, _row in SIGN_FLAVOR.items():
    ensure_complete(_row, Domain, f"SIGN_FLAVOR[{_sign.value}]")
ensure_complete(OVERALL_WEIGHTS, Domain, "OVERALL_WEIGHTS")
ensure_complete(NEGATIVE_CAPS, Domain, "NEGATIVE_CAPS")
ensure_complete(POSITIVE_CAPS, Domain, "POSITIVE_CAPS")


@dataclass
class DayScore:
    """Résultat du scoring: scores par domaine, global et aspects explicatifs."""

    domains: dict[Domain, int]
    overall: int
    top_aspects: list[DetectedAspect] = field(default_factory=list)

    @property
    def explanations(self) -> list[str]:
        """Phrases lisibles des aspects explicatifs, dans l'ordre."""
        return [aspect_to_text(a) for a in self.top_aspects]

    def as_scores(self) -> dict[str, int]:
        """Scores à plat: overall, career, fortune, love, social, study."""
        out = {"overall": self.overall}
        out.update({d.value.lower(): self.domains[d] for d in Domain})
        return out


def clamp(x: float, lo: float, hi: float) -> float:
    """Borne `x` dans [lo, hi]."""
    return max(lo, min(hi, x))


def round_half_up(x: float) -> int:
    """Arrondi au demi supérieur (2.5 -> 3, -2.5 -> -2), pas l'arrondi bancaire."""
    return math.floor(x + 0.5)


def pair_domain_relevance(domain: Domain, transit_body: Body, natal_body: Body) -> float:
    """Pertinence d'un couple de corps pour un domaine, bornée à [0, 1]."""
    row = DOMAIN_RELEVANCE[domain]
    return clamp((row[transit_body] + row[natal_body]) / RELEVANCE_DIVISOR, 0.0, 1.0)


def conjunction_polarity_fallback(transit_body: Body, natal_body: Body) -> float:
    """Polarité de repli pour une conjonction jugée neutre par le détecteur."""
    pair = {transit_body, natal_body}
    if Body.VENUS in pair or Body.MOON in pair:
        return 0.6
    if Body.MERCURY in pair:
        return 0.5
    if Body.JUPITER in pair:
        return 0.5
    if Body.MARS in pair or Body.SUN in pair:
        return 0.3
    if Body.SATURN in pair:
        return -0.4
    return 0.0


def pick_top_explanations(
    aspects: Sequence[DetectedAspect], limit: int = EXPLANATION_LIMIT
) -> list[DetectedAspect]:
    """
    Sélectionne les aspects à expliquer.

    Les aspects lunaires passent en premier, puis la force décroissante. Les
    doublons (transit, aspect, natal) sont écartés et on garde au plus `limit`.
    """
    if limit <= 0:
        return []
    ranked = sorted(aspects, key=lambda a: (not a.involves_moon, -a.strength))
    seen: set[tuple[Body, str, Body]] = set()
    out: list[DetectedAspect] = []
    for a in ranked:
        key = (a.transit_body, a.aspect, a.natal_body)
        if key in seen:
            continue
        seen.add(key)
        out.append(a)
        if len(out) >= limit:
            break
    return out


def score_personal_day(
    sun_sign: str | Sign | None,
    aspects: Sequence[DetectedAspect],
    *,
    top_n: int = TOP_ASPECTS_FOR_SCORING,
    explanation_limit: int = EXPLANATION_LIMIT,
) -> DayScore:
    """
    Calcule les scores personnalisés du jour.

    Args:
        sun_sign: signe solaire natal; un signe inconnu donne une coloration nulle
            et le Soleil comme maître (dégradation silencieuse, journalisée).
        aspects: aspects déjà classés par `detect_aspects`.
        top_n: nombre d'aspects (les plus forts) pris en compte dans les scores.
        explanation_limit: nombre maximal d'aspects explicatifs.

    Returns:
        DayScore: scores entiers dans [0, 100] et aspects explicatifs.
    """
    name = normalize_sign(sun_sign)
    if name:
        flavor = SIGN_FLAVOR[Sign(name)]
    else:
        log.warning("unknown_sun_sign", sun_sign=str(sun_sign))
        flavor = NEUTRAL_FLAVOR
    ruler = ruler_of(name)

    accum: dict[Domain, float] = {d: 0.0 for d in Domain}
    for asp in aspects[:top_n]:
        polarity = asp.polarity
        if asp.aspect == CONJUNCTION.name and polarity == 0:
            polarity = conjunction_polarity_fallback(asp.transit_body, asp.natal_body)

        moon_boost = MOON_BOOST if asp.involves_moon else 1.0
        ruler_bonus = RULER_BONUS if ruler in (asp.transit_body, asp.natal_body) else 1.0

        for domain in Domain:
            rel = pair_domain_relevance(domain, asp.transit_body, asp.natal_body)
            if rel <= 0:
                continue
            accum[domain] += (
                asp.strength * asp.base_weight * polarity * rel * moon_boost * ruler_bonus
            )

    domains: dict[Domain, int] = {}
    for domain in Domain:
        base = BASE_SCORE + flavor[domain] + OPTIMISM_BASELINE
        delta = clamp(accum[domain], NEGATIVE_CAPS[domain], POSITIVE_CAPS[domain])
        domains[domain] = int(clamp(round_half_up(base + delta), 0, 100))

    weighted = sum(OVERALL_WEIGHTS[d] * domains[d] for d in Domain)
    overall = int(clamp(round_half_up(weighted), 0, 100))

    return DayScore(
        domains=domains,
        overall=overall,
        top_aspects=pick_top_explanations(aspects, explanation_limit),
    )
