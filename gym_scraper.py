import csv
import json
import logging
import sys
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import List, Optional

from playwright.sync_api import sync_playwright, TimeoutError as PlaywrightTimeout

from gym_config import (OUTPUT_CSV, MAX_CLICKS, LOAD_MORE_TIMEOUT_MS,
                    NAVIGATION_TIMEOUT_MS, HOURS_SEPARATOR,
                    ConfigError, ScrapeConfig, load_config)
from gym_params import is_open_on_sunday

log = logging.getLogger(__name__)

CSV_HEADER = ["Name", "Location", "Hours"]

# Some listings serve a reduced page to automation-flagged browsers.
LAUNCH_ARGS = [
    "--disable-blink-features=AutomationControlled",
    "--disable-dev-shm-usage",
]
VIEWPORT = {"width": 1500, "height": 950}

# Runs in the page: one round trip for every loaded card.
EXTRACT_FACILITIES_JS = """
(cards, [nameSel, locationSel, scheduleSel]) => cards.map(card => {
    const name = card.querySelector(nameSel);
    const location = card.querySelector(locationSel);
    const hours = Array.from(card.querySelectorAll(scheduleSel)).map(p => p.innerText);
    return {
        name: name ? name.innerText : null,
        location: location ? location.innerText : null,
        hours: hours,
    };
})
"""

COUNT_GREW_JS = "([prev, selector]) => document.querySelectorAll(selector).length > prev"


@dataclass
class FacilityRecord:
    name: Optional[str]
    location: Optional[str]
    hours: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d):
        return cls(
            name=d.get("name"),
            location=d.get("location"),
            hours=list(d.get("hours") or []),
        )

    def to_row(self, separator=HOURS_SEPARATOR):
        return [self.name or "", self.location or "", separator.join(self.hours)]


# =======================
# Loader
# =======================
def load_all_facilities(page, cfg: ScrapeConfig, max_clicks: int = MAX_CLICKS,
                        timeout_ms: int = LOAD_MORE_TIMEOUT_MS) -> int:
    """
    Click the "load more" trigger until it disappears (or is hidden or
    no longer clickable), a click stops adding cards, or max_clicks is
    spent. Returns the number of clicks that went through.
    """
    clicks = 0
    while clicks < max_clicks:
        prev_count = page.locator(cfg.facilities_selector).count()

        button = page.locator(cfg.load_more_selector).first
        if button.count() == 0 or not button.is_visible():
            log.info("No load-more trigger left after %d clicks (%d cards)", clicks, prev_count)
            break

        try:
            button.click(timeout=timeout_ms)
        except PlaywrightTimeout:
            log.warning("Load-more trigger not clickable after %d clicks, stopping", clicks)
            break
        clicks += 1
        try:
            page.wait_for_function(
                COUNT_GREW_JS,
                arg=[prev_count, cfg.facilities_selector],
                timeout=timeout_ms,
            )
        except PlaywrightTimeout:
            log.warning("Click %d added no cards within %d ms, stopping", clicks, timeout_ms)
            break
    else:
        log.info("Reached the %d click cap", max_clicks)

    return clicks


# =======================
# Extractor
# =======================
def extract_facilities(page, cfg: ScrapeConfig) -> List[FacilityRecord]:
    raw = page.eval_on_selector_all(
        cfg.facilities_selector,
        EXTRACT_FACILITIES_JS,
        [cfg.name_selector, cfg.location_selector, cfg.schedule_selector],
    )
    records = [FacilityRecord.from_dict(d) for d in raw or []]
    log.info("Extracted %d facilities", len(records))
    return records


def filter_open_on_sunday(records: List[FacilityRecord]) -> List[FacilityRecord]:
    return [r for r in records if is_open_on_sunday(r.hours)]


# =======================
# Output
# =======================
def report(records: List[FacilityRecord]):
    print(json.dumps([asdict(r) for r in records], indent=2, ensure_ascii=False), flush=True)


def save_to_csv(records: List[FacilityRecord], path=OUTPUT_CSV,
                separator: str = HOURS_SEPARATOR) -> Path:
    out_path = Path(path)
    with out_path.open("w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(CSV_HEADER)
        for r in records:
            w.writerow(r.to_row(separator))
    print(f"Data saved in: {out_path}", flush=True)
    return out_path


# =======================
# Main
# =======================
def scrape(cfg: ScrapeConfig) -> List[FacilityRecord]:
    with sync_playwright() as p:
        browser = p.chromium.launch(headless=cfg.headless, args=LAUNCH_ARGS)
        try:
            page = browser.new_page(viewport=VIEWPORT)
            log.info("Opening %s", cfg.url)
            page.goto(cfg.url, wait_until="networkidle", timeout=NAVIGATION_TIMEOUT_MS)

            clicks = load_all_facilities(page, cfg)
            log.info("Load-more clicked %d times", clicks)

            facilities = extract_facilities(page, cfg)
        finally:
            browser.close()

    open_on_sunday = filter_open_on_sunday(facilities)
    log.info("%d of %d facilities open on Sunday", len(open_on_sunday), len(facilities))
    return open_on_sunday


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
    try:
        cfg = load_config()
    except ConfigError as e:
        log.error("%s", e)
        return 1

    gyms = scrape(cfg)
    report(gyms)
    save_to_csv(gyms, cfg.output_csv)
    return 0


if __name__ == "__main__":
    sys.exit(main())
