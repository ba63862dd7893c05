"""Tests for search form and guest passenger form filling."""

import pytest

from srt_bot.constants import Selectors
from srt_bot.core.cancellation import CancellationToken
from srt_bot.core.exceptions import AutomationError, SessionLostError
from srt_bot.models import GuestIdentity
from srt_bot.services.booking import FormFiller


@pytest.fixture
def filler(timings):
    return FormFiller(timings, CancellationToken())


@pytest.mark.asyncio
async def test_station_fields_cleared_then_committed(filler, fake_page, trip):
    """Test that each station field is clicked, cleared, filled and Tabbed out of."""
    page = fake_page()

    await filler.set_stations(page, trip)

    assert page.calls == [
        ("click", Selectors.DEPARTURE_STATION),
        ("fill", Selectors.DEPARTURE_STATION, ""),
        ("fill", Selectors.DEPARTURE_STATION, "수서"),
        ("press", "Tab"),
        ("click", Selectors.ARRIVAL_STATION),
        ("fill", Selectors.ARRIVAL_STATION, ""),
        ("fill", Selectors.ARRIVAL_STATION, "부산"),
        ("press", "Tab"),
    ]


@pytest.mark.asyncio
async def test_field_failure_names_the_field(filler, fake_page, trip):
    page = fake_page(failures={Selectors.ARRIVAL_STATION: AutomationError("fill timed out")})

    with pytest.raises(AutomationError, match="Arrival station input failed: fill timed out"):
        await filler.set_stations(page, trip)


@pytest.mark.asyncio
async def test_session_lost_is_not_rewrapped(filler, fake_page, trip):
    page = fake_page(failures={"click": SessionLostError()})

    with pytest.raises(SessionLostError):
        await filler.set_stations(page, trip)


@pytest.mark.asyncio
async def test_travel_date_selected(filler, fake_page, trip):
    page = fake_page()

    await filler.set_travel_date(page, trip)

    assert page.selects == [(Selectors.TRAVEL_DATE, "20250622")]


@pytest.mark.asyncio
async def test_search_clicks_button(filler, fake_page):
    page = fake_page()

    await filler.search(page)

    assert page.clicks == [Selectors.SEARCH_BUTTON]


@pytest.mark.asyncio
async def test_guest_form_keyed_in_sequence(filler, fake_page):
    page = fake_page()
    guest = GuestIdentity(name="홍길동", phone="01098765432", password="54321")

    await filler.fill_guest_passenger_form(page, guest)

    assert page.calls[0] == ("click", Selectors.PERSONAL_DATA_CONSENT)
    assert ("fill", Selectors.PASSENGER_NAME, "홍길동") in page.calls
    keyed = [c for c in page.calls if c[0] in ("type", "press")]
    assert keyed[1:] == [
        ("type", "010"),
        ("press", "Tab"),
        ("type", "9876"),
        ("press", "Tab"),
        ("type", "5432"),
        ("press", "Tab"),
        ("type", "54321"),
        ("press", "Tab"),
        ("type", "54321"),
        ("press", "Tab"),
        ("press", "Enter"),
    ]


@pytest.mark.asyncio
async def test_guest_form_keystroke_failure(filler, fake_page):
    page = fake_page(failures={"type_keystrokes": AutomationError("keyboard detached")})
    guest = GuestIdentity(name="홍길동", phone="01098765432", password="54321")

    with pytest.raises(AutomationError, match="phone prefix input failed"):
        await filler.fill_guest_passenger_form(page, guest)
