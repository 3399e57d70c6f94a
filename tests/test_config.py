import json

import pytest

from app.core.config import Settings
from app.core.config_loader import DEFAULT_SUPPLY_RATES, get_supply_rates, load_venue_config

def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("BUSY_EVENT_PAYMENT", "7500")
    monkeypatch.setenv("LIFECYCLE_TICK_SECONDS", "60")
    settings = Settings(_env_file=None)
    assert settings.BUSY_EVENT_PAYMENT == 7500.0
    assert settings.LIFECYCLE_TICK_SECONDS == 60

def test_settings_carry_no_unrouted_prefix():
    # Routers are mounted at the root; there is no versioned API prefix
    assert "API_V1_STR" not in Settings.model_fields

def test_venue_config_loads(tmp_path):
    path = tmp_path / "venue.json"
    path.write_text(json.dumps({"venue_name": "Hall", "supplies_per_attendee": {"chairs": 2}}))
    config = load_venue_config(str(path))
    assert config["venue_name"] == "Hall"
    assert get_supply_rates(config) == {"chairs": 2.0}

def test_missing_venue_config_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_venue_config(str(tmp_path / "missing.json"))

def test_broken_venue_config_raises(tmp_path):
    path = tmp_path / "venue.json"
    path.write_text("{not json")
    with pytest.raises(ValueError):
        load_venue_config(str(path))

def test_supply_rates_fall_back_to_defaults():
    assert get_supply_rates({}) == DEFAULT_SUPPLY_RATES
