"""Pytest configuration and common fixtures."""

import asyncio
import os
import sys
import warnings
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

# Set environment variables BEFORE any srt_bot imports
os.environ.setdefault("ENV", "testing")

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from srt_bot.constants import RESERVATION_URL, LoginSelectors, Selectors
from srt_bot.core.exceptions import AutomationError, ElementNotFoundError
from srt_bot.models import (
    GuestIdentity,
    LoginKind,
    MemberIdentity,
    NotificationPreference,
    PassengerRequest,
    TripQuery,
)
from srt_bot.services.booking import PipelineTimings

GUEST_FORM_URL = "https://etk.srail.kr/hpg/hra/02/selectReservationForm.do"
LOGIN_FORM_URL = "https://etk.srail.kr/cmc/01/selectLoginForm.do"
AFTER_LOGIN_URL = "https://etk.srail.kr/hpg/hra/02/confirmReservationInfo.do"


def pytest_configure(config):
    """Configure pytest environment before tests run."""
    warnings.filterwarnings("ignore", message="coroutine.*was never awaited")


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Isolate every test from the developer's environment and .env file."""
    for var in ("SMTP_HOST", "SMTP_PORT", "SENDER_EMAIL", "SENDER_PASSWORD", "MAX_ATTEMPTS"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("ENV", "testing")
    monkeypatch.chdir(tmp_path)


class FakeElement:
    """In-memory ElementHandle: text plus child elements keyed by selector."""

    def __init__(
        self,
        text: Optional[str] = None,
        children: Optional[Dict[str, List["FakeElement"]]] = None,
    ):
        self._text = text
        self.children = children or {}
        self.clicked: List[Optional[str]] = []

    async def locate_all(self, selector: str) -> List["FakeElement"]:
        return list(self.children.get(selector, []))

    async def count(self, selector: str) -> int:
        return len(self.children.get(selector, []))

    async def text(self, selector: Optional[str] = None) -> Optional[str]:
        if selector is None:
            return self._text
        matches = self.children.get(selector)
        return matches[0]._text if matches else None

    async def click(self, selector: Optional[str] = None) -> None:
        if selector is not None and not self.children.get(selector):
            raise ElementNotFoundError(selector)
        self.clicked.append(selector)


def make_row(departure: str, arrival: str, sold_out: bool = False, cells: int = 7) -> FakeElement:
    """Build a schedule row whose departure/arrival cells hold the given text."""
    tds = [FakeElement(f"cell {i}") for i in range(cells)]
    if cells > 3:
        tds[3] = FakeElement(children={Selectors.CELL_TIME_TEXT: [FakeElement(departure)]})
    if cells > 4:
        tds[4] = FakeElement(children={Selectors.CELL_TIME_TEXT: [FakeElement(arrival)]})
    if cells > 6:
        if sold_out:
            tds[6] = FakeElement(children={Selectors.SOLD_OUT: [FakeElement("매진")]})
        else:
            tds[6] = FakeElement(children={Selectors.RESERVE_BUTTON: [FakeElement("예약하기")]})
    return FakeElement(children={Selectors.RESULT_CELLS: tds})


class FakePage:
    """
    Scripted PageAutomationAdapter.

    ``results`` holds the schedule rows shown on each attempt (indexed by
    the number of reloads so far; the last entry repeats). ``gate`` is one
    of ``"absent"``, ``"clears"``, ``"stuck"`` (adapter reports a timeout)
    or ``"hang"`` (never resolves). ``failures`` maps a selector or a
    method name to the exception raised when it is used.
    """

    def __init__(
        self,
        results: Sequence[Sequence[FakeElement]] = ((),),
        gate: str = "absent",
        gate_delay: float = 0.0,
        guest_url: str = GUEST_FORM_URL,
        login_result_url: str = AFTER_LOGIN_URL,
        change_later_prompt: bool = False,
        failures: Optional[Dict[str, Exception]] = None,
    ):
        self.results = [list(rows) for rows in results] or [[]]
        self.gate = gate
        self.gate_delay = gate_delay
        self.guest_url = guest_url
        self.login_result_url = login_result_url
        self.change_later_prompt = change_later_prompt
        self.failures = failures or {}

        self.url = RESERVATION_URL
        self.reloads = 0
        self.calls: List[tuple] = []
        self.fills: List[tuple] = []
        self.selects: List[tuple] = []
        self.clicks: List[str] = []
        self.keystrokes: List[str] = []
        self.keys: List[str] = []
        self.dialog_handlers: List[Callable[[str], bool]] = []
        self.dialog_answers: List[bool] = []
        self.gate_waits = 0

    def _maybe_fail(self, *keys: str) -> None:
        for key in keys:
            if key in self.failures:
                raise self.failures[key]

    @property
    def rows(self) -> List[FakeElement]:
        return self.results[min(self.reloads, len(self.results) - 1)]

    async def fill(self, selector: str, value: str) -> None:
        self.calls.append(("fill", selector, value))
        self._maybe_fail("fill", selector)
        self.fills.append((selector, value))

    async def select(self, selector: str, value: str) -> None:
        self.calls.append(("select", selector, value))
        self._maybe_fail("select", selector)
        self.selects.append((selector, value))

    async def click(self, selector: str) -> None:
        self.calls.append(("click", selector))
        self._maybe_fail("click", selector)
        self.clicks.append(selector)
        if selector == Selectors.GUEST_CHECKOUT_LINK:
            message = "미등록고객으로 예매하시겠습니까?"
            self.dialog_answers.extend(h(message) for h in self.dialog_handlers)
            self.url = self.guest_url
        elif selector == LoginSelectors.SUBMIT:
            self.url = self.login_result_url
        elif selector == LoginSelectors.CHANGE_LATER:
            self.change_later_prompt = False

    async def locate_all(self, selector: str) -> List[FakeElement]:
        self.calls.append(("locate_all", selector))
        self._maybe_fail("locate_all", selector)
        if selector == Selectors.RESULT_ROWS:
            return list(self.rows)
        return []

    async def count(self, selector: str) -> int:
        self._maybe_fail("count", selector)
        if selector == Selectors.GATE:
            return 0 if self.gate == "absent" else 1
        if selector == LoginSelectors.CHANGE_LATER:
            return 1 if self.change_later_prompt else 0
        if selector == Selectors.RESULT_ROWS:
            return len(self.rows)
        return 0

    async def wait_for_hidden(self, selector: str, timeout_ms: float) -> bool:
        self.gate_waits += 1
        self._maybe_fail("wait_for_hidden", selector)
        if self.gate == "hang":
            await asyncio.Event().wait()
        if self.gate_delay:
            await asyncio.sleep(self.gate_delay)
        return self.gate != "stuck"

    def current_url(self) -> str:
        return self.url

    async def type_keystrokes(self, text: str) -> None:
        self.calls.append(("type", text))
        self._maybe_fail("type_keystrokes")
        self.keystrokes.append(text)

    async def press_key(self, name: str) -> None:
        self.calls.append(("press", name))
        self._maybe_fail("press_key", name)
        self.keys.append(name)

    async def reload(self) -> None:
        self.calls.append(("reload",))
        self._maybe_fail("reload")
        self.reloads += 1
        self.url = RESERVATION_URL

    def on_dialog(self, handler: Callable[[str], bool]) -> None:
        self.dialog_handlers.append(handler)


@pytest.fixture
def row():
    """Factory for schedule rows."""
    return make_row


@pytest.fixture
def fake_page():
    """Factory for scripted pages."""
    return FakePage


@pytest.fixture
def element():
    """Factory for bare fake elements."""
    return FakeElement


@pytest.fixture
def timings() -> PipelineTimings:
    """Pipeline timings with every fixed delay removed."""
    return PipelineTimings.instant(gate_timeout=0.5)


@pytest.fixture
def trip() -> TripQuery:
    return TripQuery(
        departure_station="수서",
        arrival_station="부산",
        departure_time="10:37",
        arrival_time="13:10",
        travel_date="20250622",
    )


@pytest.fixture
def guest_request(trip) -> PassengerRequest:
    return PassengerRequest(
        trip=trip,
        identity=GuestIdentity(name="홍길동", phone="01012345678", password="12345"),
        notification=NotificationPreference(enabled=True, email="user@example.com"),
    )


@pytest.fixture
def member_request(trip) -> PassengerRequest:
    return PassengerRequest(
        trip=trip,
        identity=MemberIdentity(
            login_kind=LoginKind.MEMBER_ID, login_id="1234567890", login_password="secret"
        ),
    )


@pytest.fixture
def matching_rows(row) -> List[FakeElement]:
    """Five rows; the third one matches the ``trip`` fixture."""
    return [
        row("수서 06:00", "부산 08:40"),
        row("수서 08:00", "부산 10:35"),
        row("수서 10:37", "부산 13:10"),
        row("수서 12:00", "부산 14:40"),
        row("수서 14:00", "부산 16:40"),
    ]
