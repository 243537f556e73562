from src.common.config import Settings


def test_allowed_origins_accepts_comma_separated_env(monkeypatch):
    monkeypatch.setenv("ALLOWED_ORIGINS", "http://a.example, http://b.example,")

    assert Settings().ALLOWED_ORIGINS == ["http://a.example", "http://b.example"]


def test_allowed_origins_defaults_to_any(monkeypatch):
    monkeypatch.delenv("ALLOWED_ORIGINS", raising=False)

    assert Settings().ALLOWED_ORIGINS == ["*"]
