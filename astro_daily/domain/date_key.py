"""
Dates locales, clé de cache quotidienne et ancrage à midi local.

La clé de cache est la date "YYYY-MM-DD" dans le fuseau demandé. L'instant
de référence pour les transits du jour est midi local, converti en UTC, pour
rester loin des changements de jour.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime, time
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from astro_daily.domain.errors import InvalidInputError

DATE_FORMAT = "%Y-%m-%d"
ANCHOR_HOUR = 12


@dataclass(frozen=True)
class Anchor:
    """Midi local d'une date et l'instant UTC correspondant."""

    local_noon: datetime
    utc: datetime


def resolve_timezone(tz: str | None) -> ZoneInfo:
    """Résout un fuseau IANA (ex. "Asia/Tokyo").

    Raises:
        InvalidInputError: fuseau absent ou inconnu.
    """
    name = (tz or "").strip()
    if not name:
        raise InvalidInputError("Missing tz (IANA), e.g. Asia/Tokyo.")
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as err:
        raise InvalidInputError("Invalid timezone (IANA), e.g. Asia/Tokyo.") from err


def parse_local_date(date_str: str) -> date:
    """Parse une date calendaire "YYYY-MM-DD"."""
    try:
        return datetime.strptime(date_str.strip(), DATE_FORMAT).date()
    except ValueError as err:
        raise InvalidInputError("Invalid date. Use YYYY-MM-DD.") from err


def local_date_key(tz: str, date_str: str | None = None, now: datetime | None = None) -> str:
    """
    Retourne la date "YYYY-MM-DD" utilisée comme clé de cache.

    Args:
        tz: fuseau IANA de l'utilisateur.
        date_str: date explicite (validée puis reformatée), sinon aujourd'hui dans `tz`.
        now: instant courant (aware), injectable pour les tests.
    """
    zone = resolve_timezone(tz)
    if date_str:
        return parse_local_date(date_str).strftime(DATE_FORMAT)
    current = (now or datetime.now(UTC)).astimezone(zone)
    return current.strftime(DATE_FORMAT)


def anchor_instant(tz: str, local_date: str) -> Anchor:
    """Midi local de `local_date` dans `tz`, et son équivalent UTC."""
    zone = resolve_timezone(tz)
    day = parse_local_date(local_date)
    local_noon = datetime.combine(day, time(hour=ANCHOR_HOUR), tzinfo=zone)
    return Anchor(local_noon=local_noon, utc=local_noon.astimezone(UTC))


def birth_to_utc(birth_date: str, birth_time: str, birth_tz: str) -> datetime:
    """
    Convertit une date/heure de naissance locale en instant UTC.

    Args:
        birth_date: "YYYY-MM-DD".
        birth_time: "HH:MM" (24h) ou "HH:MM:SS".
        birth_tz: fuseau IANA du lieu de naissance.
    """
    zone = resolve_timezone(birth_tz)
    fmt = "%H:%M:%S" if (birth_time or "").count(":") == 2 else "%H:%M"
    try:
        day = datetime.strptime((birth_date or "").strip(), DATE_FORMAT).date()
        clock = datetime.strptime((birth_time or "").strip(), fmt).time()
    except ValueError as err:
        raise InvalidInputError(
            "Invalid birth_date/birth_time. Example date=2002-05-14 time=09:25 tz=Asia/Tokyo"
        ) from err
    return datetime.combine(day, clock, tzinfo=zone).astimezone(UTC)


def isoformat_utc(instant: datetime) -> str:
    """ISO 8601 en UTC avec suffixe "Z" (millisecondes)."""
    return instant.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
