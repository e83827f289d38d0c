import pytest
from playwright.sync_api import TimeoutError as PlaywrightTimeout

from gym_config import ScrapeConfig

FACILITIES = ".card"
BUTTON = "button.more"


@pytest.fixture
def cfg():
    return ScrapeConfig(
        url="https://gym.example/sedes",
        facilities_selector=FACILITIES,
        name_selector=".name",
        location_selector=".address",
        schedule_selector=".hours p",
        load_more_selector=BUTTON,
    )


class FakeLocator:
    def __init__(self, count, on_click=None, visible=lambda: True):
        self._count = count
        self._on_click = on_click
        self._visible = visible

    @property
    def first(self):
        return self

    def count(self):
        return self._count()

    def is_visible(self):
        return self._count() > 0 and self._visible()

    def click(self, timeout=None, **kwargs):
        self._on_click(timeout)


class FakePage:
    """
    Listing page stand-in. Each click appends the next batch of cards;
    with endless=True every click adds one card forever.

    Once the batches run out the trigger can be removed
    (hide_trigger_when_done), left in the DOM but hidden
    (conceal_trigger_when_done), or left in place but unclickable
    (jam_trigger_when_done).
    """

    def __init__(self, cards=3, batches=(), trigger=True, hide_trigger_when_done=False,
                 conceal_trigger_when_done=False, jam_trigger_when_done=False,
                 endless=False, rows=None):
        self.cards = cards
        self.batches = list(batches)
        self.trigger = trigger
        self.trigger_visible = True
        self.trigger_jammed = False
        self.hide_trigger_when_done = hide_trigger_when_done
        self.conceal_trigger_when_done = conceal_trigger_when_done
        self.jam_trigger_when_done = jam_trigger_when_done
        self.endless = endless
        self.rows = rows or []
        self.clicks = 0
        self.click_timeouts = []
        self.eval_calls = []

    def locator(self, selector):
        if selector == FACILITIES:
            return FakeLocator(lambda: self.cards)
        if selector == BUTTON:
            return FakeLocator(lambda: 1 if self.trigger else 0, self._click,
                               lambda: self.trigger_visible)
        return FakeLocator(lambda: 0)

    def _click(self, timeout):
        self.click_timeouts.append(timeout)
        if self.trigger_jammed:
            raise PlaywrightTimeout(
                f"locator.click: Timeout {timeout}ms exceeded. element is not enabled")
        self.clicks += 1
        if self.endless:
            self.cards += 1
        elif self.batches:
            self.cards += self.batches.pop(0)
        if not self.batches:
            if self.hide_trigger_when_done:
                self.trigger = False
            if self.conceal_trigger_when_done:
                self.trigger_visible = False
            if self.jam_trigger_when_done:
                self.trigger_jammed = True

    def wait_for_function(self, expression, arg=None, timeout=None, polling=None):
        prev, _selector = arg
        if self.cards <= prev:
            raise PlaywrightTimeout(f"Timeout {timeout}ms exceeded.")

    def eval_on_selector_all(self, selector, expression, arg=None):
        self.eval_calls.append((selector, arg))
        return self.rows
