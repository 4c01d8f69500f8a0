from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import app


def test_health() -> None:
    res = TestClient(app).get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


def test_settings_read_search_env(monkeypatch) -> None:
    monkeypatch.setenv("SEARCH_DEBOUNCE_MS", "450")
    monkeypatch.setenv("ALLOWED_CORS_ORIGINS", "https://lagosweekender.com, http://localhost:3000")
    cfg = Settings()
    assert cfg.search_debounce_seconds == 0.45
    assert cfg.cors_origins == ["https://lagosweekender.com", "http://localhost:3000"]
