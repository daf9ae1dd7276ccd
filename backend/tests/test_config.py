from billingdesk.core.config import Settings


def test_cors_origins_comma_separated(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")
    assert Settings(_env_file=None).cors_origins == ["https://a.example", "https://b.example"]


def test_cors_origins_single_url_and_list_values(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", " https://a.example ")
    assert Settings(_env_file=None).cors_origins == ["https://a.example"]
    monkeypatch.delenv("CORS_ORIGINS")
    assert Settings(_env_file=None, CORS_ORIGINS=["https://b.example", " "]).cors_origins == ["https://b.example"]


def test_cors_origins_empty_falls_back(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "")
    assert Settings(_env_file=None).cors_origins == ["http://localhost:5173"]


def test_defaults(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    s = Settings(_env_file=None)
    assert s.log_level == "DEBUG"
    assert s.default_anchor_day == 15
    assert s.currency_label == "JD"
