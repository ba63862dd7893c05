"""Message templates for outcome notifications - formatting only, no transport."""

from typing import Tuple

from ...constants import Payment
from ...models import Aborted, Exhausted, PassengerRequest, Reserved, RunOutcome


class ReservationTemplates:
    """Static subject/body templates for each run outcome."""

    @staticmethod
    def success(request: PassengerRequest, outcome: Reserved) -> Tuple[str, str]:
        """Template for a reserved seat."""
        trip = request.trip
        subject = "🚄 SRT reservation succeeded"
        body = f"""Your SRT reservation was completed successfully!

📍 Reservation:
- Departure: {trip.departure_station} ({trip.departure_time})
- Arrival: {trip.arrival_station} ({trip.arrival_time})
- Date: {trip.travel_date}
- Passenger: {request.identity.label()}
- Reserved on attempt: {outcome.attempt}

💡 Complete payment within {Payment.DEADLINE_MINUTES} minutes or the seat will be released!
"""
        return subject, body

    @staticmethod
    def failure(request: PassengerRequest, outcome: RunOutcome) -> Tuple[str, str]:
        """Template for an exhausted or aborted run."""
        trip = request.trip
        if isinstance(outcome, Exhausted):
            error = outcome.last_error
            headline = f"All {outcome.attempts} reservation attempts failed."
        elif isinstance(outcome, Aborted):
            error = outcome.error
            headline = f"The reservation run was stopped on attempt {outcome.attempt}."
        else:
            raise TypeError(f"Not a failure outcome: {outcome!r}")

        subject = "⚠️ SRT reservation failed"
        body = f"""{headline}

📍 Requested reservation:
- Departure: {trip.departure_station} ({trip.departure_time})
- Arrival: {trip.arrival_station} ({trip.arrival_time})
- Date: {trip.travel_date}

❌ Error: {error.message}

Run the bot again or reserve manually.
"""
        return subject, body
