"""Search form and guest passenger form filling."""

from loguru import logger

from ...constants import Selectors
from ...core.cancellation import CancellationToken
from ...models import GuestIdentity, TripQuery
from ..browser import PageAutomationAdapter, describe_failure
from .timings import PipelineTimings


class FormFiller:
    """Fills the schedule search form and the guest passenger form."""

    def __init__(self, timings: PipelineTimings, token: CancellationToken):
        """
        Initialize form filler.

        Args:
            timings: Pipeline delays
            token: Run cancellation token
        """
        self.timings = timings
        self.token = token

    async def commit_field(
        self, adapter: PageAutomationAdapter, selector: str, value: str, field_name: str
    ) -> None:
        """
        Click, clear, fill and Tab out of a field so the page registers the value.

        Raises:
            AutomationError: Naming the field that could not be filled
        """
        async with describe_failure(f"{field_name} input"):
            await adapter.click(selector)
            await adapter.fill(selector, "")
            await adapter.fill(selector, value)
            await adapter.press_key("Tab")

    async def set_stations(self, adapter: PageAutomationAdapter, trip: TripQuery) -> None:
        """Fill departure and arrival stations."""
        logger.info(f"Departure station: {trip.departure_station}")
        await self.commit_field(
            adapter, Selectors.DEPARTURE_STATION, trip.departure_station, "Departure station"
        )
        logger.info(f"Arrival station: {trip.arrival_station}")
        await self.commit_field(
            adapter, Selectors.ARRIVAL_STATION, trip.arrival_station, "Arrival station"
        )

    async def set_travel_date(self, adapter: PageAutomationAdapter, trip: TripQuery) -> None:
        """Pick the travel date from the date dropdown."""
        async with describe_failure("Travel date selection"):
            await adapter.select(Selectors.TRAVEL_DATE, trip.travel_date)

    async def search(self, adapter: PageAutomationAdapter) -> None:
        """Submit the search and let the results render."""
        async with describe_failure("Search button click"):
            await adapter.click(Selectors.SEARCH_BUTTON)
        await self.token.sleep(self.timings.search_results_load)

    async def fill_guest_passenger_form(
        self, adapter: PageAutomationAdapter, guest: GuestIdentity
    ) -> None:
        """
        Accept the consent box, enter the name, then key in phone and password.

        The phone/password inputs only react to real keystrokes, so each value
        is typed into the focused field and Tab moves focus to the next one.
        """
        async with describe_failure("Consent checkbox click"):
            await adapter.click(Selectors.PERSONAL_DATA_CONSENT)

        await self.commit_field(adapter, Selectors.PASSENGER_NAME, guest.name, "Passenger name")

        first, middle, last = guest.phone_parts
        password = guest.password.get_secret_value()
        keyed_inputs = [
            (first, "phone prefix"),
            (middle, "phone middle digits"),
            (last, "phone last digits"),
            (password, "password"),
            (password, "password confirmation"),
        ]
        for value, description in keyed_inputs:
            async with describe_failure(f"{description} input"):
                await adapter.type_keystrokes(value)
                await adapter.press_key("Tab")
            logger.info(f"✓ {description} entered")

        # Focus has reached the confirm button
        async with describe_failure("Passenger form submit"):
            await adapter.press_key("Enter")
        logger.info("✓ Passenger form submitted")
