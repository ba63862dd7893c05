"""Schedule table scanning and reservation click."""

from dataclasses import dataclass
from typing import List, Optional

from loguru import logger

from ...constants import ResultColumns, Selectors
from ...core.exceptions import (
    AutomationError,
    ElementNotFoundError,
    NoMatchError,
    SoldOutError,
)
from ...models import TripQuery
from ..browser import ElementHandle, PageAutomationAdapter


@dataclass
class TrainRow:
    """One row of the schedule table."""

    index: int
    departure: str
    arrival: str
    action_cell: Optional[ElementHandle] = None

    def matches(self, trip: TripQuery) -> bool:
        return trip.departure_time in self.departure and trip.arrival_time in self.arrival


class TrainSelector:
    """Finds the requested train in the results table and reserves it."""

    async def scan(self, adapter: PageAutomationAdapter) -> List[TrainRow]:
        """
        Read departure/arrival text of every result row.

        Rows with too few cells or without time text are skipped.
        """
        rows = await adapter.locate_all(Selectors.RESULT_ROWS)
        min_cells = max(ResultColumns.DEPARTURE, ResultColumns.ARRIVAL) + 1

        scanned: List[TrainRow] = []
        for index, row in enumerate(rows):
            cells = await row.locate_all(Selectors.RESULT_CELLS)
            if len(cells) < min_cells:
                continue

            departure = await cells[ResultColumns.DEPARTURE].text(Selectors.CELL_TIME_TEXT)
            arrival = await cells[ResultColumns.ARRIVAL].text(Selectors.CELL_TIME_TEXT)
            if departure is None or arrival is None:
                continue

            action_cell = cells[ResultColumns.ACTION] if len(cells) > ResultColumns.ACTION else None
            train = TrainRow(index, departure.strip(), arrival.strip(), action_cell)
            logger.debug(f"Row {index}: {train.departure} -> {train.arrival}")
            scanned.append(train)

        return scanned

    async def _first_match(
        self, adapter: PageAutomationAdapter, trip: TripQuery
    ) -> Optional[TrainRow]:
        for train in await self.scan(adapter):
            if train.matches(trip):
                return train
        return None

    async def find_match(self, adapter: PageAutomationAdapter, trip: TripQuery) -> TrainRow:
        """
        Return the first row (document order) whose times contain the requested ones.

        Raises:
            NoMatchError: No row matched
        """
        train = await self._first_match(adapter, trip)
        if train is None:
            raise NoMatchError(trip.departure_time, trip.arrival_time)
        logger.info(f"✓ Matching train found: {train.departure} -> {train.arrival}")
        return train

    async def reserve(self, adapter: PageAutomationAdapter, trip: TripQuery) -> TrainRow:
        """
        Re-read the table and click the reserve button of the matching row.

        The table is scanned again because the previously located row may
        have been re-rendered while waiting. Matching rows are tried in
        document order; one without a usable reserve button is skipped.

        Raises:
            ElementNotFoundError: No matching row had a clickable reserve button
            SoldOutError: The first matching train with an action cell is sold out
        """
        for train in await self.scan(adapter):
            if not train.matches(trip) or train.action_cell is None:
                continue

            if await train.action_cell.count(Selectors.SOLD_OUT) > 0:
                logger.warning(f"Train {train.departure} -> {train.arrival} is sold out")
                raise SoldOutError(trip.departure_time, trip.arrival_time)

            try:
                await train.action_cell.click(Selectors.RESERVE_BUTTON)
            except AutomationError as e:
                logger.warning(f"Row {train.index} reserve click failed: {e.message}")
                continue

            logger.info("✓ Reserve button clicked")
            return train

        raise ElementNotFoundError(Selectors.RESERVE_BUTTON, "Reserve button")
