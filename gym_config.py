import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

OUTPUT_CSV = "gyms_open_on_sundays.csv"
HEADLESS = True                 # Set False to watch it run
MAX_CLICKS = 20                 # Safety cap on "load more" clicks
LOAD_MORE_TIMEOUT_MS = 15000    # Give up on a click that loads nothing new
NAVIGATION_TIMEOUT_MS = 60000
HOURS_SEPARATOR = " | "

# =======================
# Environment
# =======================
REQUIRED_ENV = {
    "url": "GYM_URL",
    "facilities_selector": "GYM_SELECTOR_FACILITIES",
    "name_selector": "GYM_SELECTOR_NAME",
    "location_selector": "GYM_SELECTOR_LOCATION",
    "schedule_selector": "GYM_SELECTOR_SCHEDULE",
    "load_more_selector": "GYM_SELECTOR_LOAD_MORE_BTN",
}

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ScrapeConfig:
    url: str
    facilities_selector: str
    name_selector: str
    location_selector: str
    schedule_selector: str
    load_more_selector: str
    output_csv: str = OUTPUT_CSV
    headless: bool = HEADLESS


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}")


def load_config(env: Optional[Mapping[str, str]] = None) -> ScrapeConfig:
    """
    Build a ScrapeConfig from the environment (after reading .env).
    Every selector is required; all missing names are reported at once.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    values = {}
    missing = []
    for field, var in REQUIRED_ENV.items():
        raw = (env.get(var) or "").strip()
        if not raw:
            missing.append(var)
        values[field] = raw
    if missing:
        raise ConfigError("Missing required environment variables: " + ", ".join(missing))

    output_csv = (env.get("GYM_OUTPUT_CSV") or "").strip() or OUTPUT_CSV
    headless_raw = env.get("GYM_HEADLESS")
    headless = HEADLESS if not (headless_raw or "").strip() else _parse_bool("GYM_HEADLESS", headless_raw)

    return ScrapeConfig(output_csv=output_csv, headless=headless, **values)
