import pytest
from pydantic import ValidationError
from fittrack.settings import Settings

def test_missing_required_settings_fail(monkeypatch):
    for name in ("SUPABASE_URL", "SUPABASE_ANON_KEY", "JWT_SECRET"):
        monkeypatch.delenv(name, raising=False)
    with pytest.raises(ValidationError) as exc:
        Settings(_env_file=None)
    missing = {e["loc"][0] for e in exc.value.errors()}
    assert missing == {"SUPABASE_URL", "SUPABASE_ANON_KEY", "JWT_SECRET"}

def test_defaults_and_derived_values(monkeypatch):
    monkeypatch.setenv("ALLOW_ORIGINS", "https://a.test, https://b.test")
    monkeypatch.setenv("SUPABASE_SERVICE_KEY", "service")
    monkeypatch.setenv("ENVIRONMENT", "Production")
    s = Settings(_env_file=None)
    assert s.PORT == 8080
    assert s.ACCESS_TOKEN_EXPIRE_MINUTES == 1440
    assert s.allowed_origins == ["https://a.test", "https://b.test"]
    assert s.store_key == "service"
    assert s.is_production

def test_store_key_falls_back_to_anon(monkeypatch):
    monkeypatch.delenv("SUPABASE_SERVICE_KEY", raising=False)
    s = Settings(_env_file=None)
    assert s.store_key == s.SUPABASE_ANON_KEY
