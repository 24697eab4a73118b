"""Tests des fournisseurs d'éphémérides (mouvement moyen, Swiss Ephemeris, factice)."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from astro_daily.domain.angles import angular_separation
from astro_daily.domain.zodiac import Body, Sign, sign_from_longitude
from astro_daily.infra.astro.fake_deterministic import FakeDeterministicEphemeris
from astro_daily.infra.astro.mean_motion import (
    J2000,
    MeanMotionEphemeris,
    julian_date,
)
from astro_daily.infra.astro.swiss_ephemeris import SwissEphemerisProvider

J2000_UTC = datetime(2000, 1, 1, 12, 0, tzinfo=UTC)


def test_julian_date_at_j2000():
    assert julian_date(J2000_UTC) == pytest.approx(J2000)


def test_mean_motion_longitudes():
    eph = MeanMotionEphemeris()
    lons = eph.longitudes_at(J2000_UTC)
    assert list(lons) == list(Body)
    assert all(0.0 <= v < 360.0 for v in lons.values())
    assert lons[Body.SUN] == pytest.approx(280.46646)
    assert lons[Body.MOON] == pytest.approx(218.3165)


def test_mean_motion_sun_sign_mid_august():
    lons = MeanMotionEphemeris().longitudes_at(datetime(2024, 8, 10, 12, tzinfo=UTC))
    assert sign_from_longitude(lons[Body.SUN]) is Sign.LEO


def test_mean_motion_ascendant_moves_through_the_day():
    eph = MeanMotionEphemeris()
    base = datetime(2026, 1, 6, 0, tzinfo=UTC)
    ascs = [eph.ascendant_at(base + timedelta(hours=h), 35.68, 139.65) for h in range(0, 24, 4)]
    assert all(0.0 <= a < 360.0 for a in ascs)
    assert len({round(a, 3) for a in ascs}) == len(ascs)


def test_swiss_ephemeris_close_to_mean_motion():
    swiss = SwissEphemerisProvider(use_moshier=True)
    mean = MeanMotionEphemeris()
    when = datetime(2024, 8, 10, 12, tzinfo=UTC)
    s, m = swiss.longitudes_at(when), mean.longitudes_at(when)
    assert list(s) == list(Body)
    assert all(0.0 <= v < 360.0 for v in s.values())
    # le Soleil moyen s'écarte de moins de 2.5° du Soleil vrai
    assert angular_separation(s[Body.SUN], m[Body.SUN]) < 2.5
    assert 0.0 <= swiss.ascendant_at(when, 35.68, 139.65) < 360.0


def test_fake_ephemeris_records_calls():
    eph = FakeDeterministicEphemeris(ascendant=42.0)
    assert eph.longitudes_at(J2000_UTC)[Body.SUN] == 135.0
    assert eph.ascendant_at(J2000_UTC, 0.0, 0.0) == 42.0
    assert eph.calls == [J2000_UTC]
