"""Tests pour l'endpoint de santé et l'exposition des métriques."""

from astro_daily.core.http_constants import HTTP_OK


def test_health(client):
    """Teste que l'endpoint de santé retourne un statut OK et les backends actifs."""
    r = client.get("/health")
    assert r.status_code == HTTP_OK
    assert r.json() == {
        "status": "ok",
        "storage": "injected",
        "ephemeris": "mean",
        "content_picker": "sha256-le32+mulberry32-v1",
    }
    assert "X-Process-Time-ms" in r.headers
    assert r.headers["X-Request-ID"]


def test_metrics_exposes_daily_counters(client):
    user_id = client.post(
        "/v1/users",
        json={
            "birth_date": "1990-01-01",
            "birth_time": "12:00",
            "birth_tz": "Europe/Paris",
            "lat": 48.8566,
            "lon": 2.3522,
        },
    ).json()["user_id"]
    params = {"user_id": user_id, "tz": "Europe/Paris", "date": "2026-01-06"}
    client.get("/v1/daily-personal", params=params)
    client.get("/v1/daily-personal", params=params)

    r = client.get("/metrics")
    assert r.status_code == HTTP_OK
    text = r.text
    assert 'daily_cache_lookups_total{result="hit"}' in text
    assert 'daily_cache_lookups_total{result="miss"}' in text
    assert 'ephemeris_latency_seconds_count{op="longitudes"}' in text
    assert "content_list_reloads_total" in text
    assert 'route="/v1/daily-personal"' in text
