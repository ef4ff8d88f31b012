from flightproxy.config import Settings, PRODUCTION_BASE_URL, SANDBOX_BASE_URL


def test_defaults(monkeypatch):
    for name in ("AMADEUS_CLIENT_ID", "AMADEUS_KEY", "AMADEUS_ENV", "PORT"):
        monkeypatch.delenv(name, raising=False)

    s = Settings(_env_file=None)

    assert s.PORT == 8787
    assert s.AMADEUS_CLIENT_ID == ""
    assert s.amadeus_base_url == SANDBOX_BASE_URL


def test_legacy_key_names(monkeypatch):
    monkeypatch.delenv("AMADEUS_CLIENT_ID", raising=False)
    monkeypatch.delenv("AMADEUS_CLIENT_SECRET", raising=False)
    monkeypatch.setenv("AMADEUS_KEY", "legacy-id")
    monkeypatch.setenv("AMADEUS_SECRET", "legacy-secret")

    creds = Settings(_env_file=None).amadeus_credentials()

    assert creds.client_id == "legacy-id"
    assert creds.client_secret == "legacy-secret"


def test_production_base_url(monkeypatch):
    monkeypatch.setenv("AMADEUS_ENV", "Production")
    assert Settings(_env_file=None).amadeus_credentials().base_url == PRODUCTION_BASE_URL
