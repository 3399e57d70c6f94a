import json
import os
import logging
from typing import Dict, Any

logger = logging.getLogger("app")

CONFIG_PATH = os.path.join(os.path.dirname(__file__), "..", "..", "data", "venue_config.json")

DEFAULT_SUPPLY_RATES = {
    "chairs": 1,
    "tables": 0.2,
    "plates": 1.2,
    "bowls": 1.1,
    "napkins": 2.1,
    "utensils": 2.5,
}

def load_venue_config(path: str = CONFIG_PATH) -> Dict[str, Any]:
    """
    Loads venue configuration from JSON file.
    Raises FileNotFoundError if config is missing.
    Returns: Dict containing config.
    """
    if not os.path.exists(path):
        logger.critical(f"❌ Venue config file '{path}' not found! The application cannot start.")
        raise FileNotFoundError(f"Configuration file not found at {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            config = json.load(f)
            logger.info(f"✅ Config loaded for: {config.get('venue_name', 'Unknown')}")
            return config
    except json.JSONDecodeError as e:
        logger.critical(f"❌ Failed to parse venue config JSON: {e}")
        raise ValueError(f"Invalid JSON in config file: {e}")

def get_supply_rates(config: Dict[str, Any]) -> Dict[str, float]:
    """
    Helper to get per-attendee supply rates (chairs, plates, ...).
    Returns: Dict {'chairs': 1, 'tables': 0.2, ...}, built-in defaults when unset.
    """
    rates = config.get("supplies_per_attendee")
    if not rates:
        return dict(DEFAULT_SUPPLY_RATES)
    return {name: float(rate) for name, rate in rates.items()}
