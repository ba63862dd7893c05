"""Interactive passenger request collection."""

import getpass
from typing import Callable, Dict, Optional, Sequence, Tuple

from ..core.result import Failure
from ..core.validators import (
    ValidationResult,
    validate_date,
    validate_email,
    validate_guest_password,
    validate_phone,
    validate_required,
    validate_time,
)
from ..models import (
    GuestIdentity,
    LoginKind,
    MemberIdentity,
    NotificationPreference,
    PassengerRequest,
    TripQuery,
)
from ..utils.masking import mask_phone

Validator = Callable[[str], ValidationResult]

LOGIN_KIND_CHOICES: Dict[str, Tuple[LoginKind, str]] = {
    "1": (LoginKind.MEMBER_ID, "Membership number"),
    "2": (LoginKind.EMAIL, "Email"),
    "3": (LoginKind.PHONE, "Phone number"),
}


def required(field: str, *rules: Validator) -> Validator:
    """Chain ``validate_required`` with further rules; the first failure wins."""

    def _validate(value: str) -> ValidationResult:
        result = validate_required(value, field)
        for rule in rules:
            if isinstance(result, Failure):
                break
            result = rule(result.unwrap())
        return result

    return _validate


class InputCollector:
    """
    Prompts for a complete passenger request on the terminal.

    Every field is re-asked until its validator accepts it, then the
    whole request is shown for confirmation; answering "no" starts
    over from the first field.
    """

    def __init__(
        self,
        input_func: Callable[[str], str] = input,
        secret_func: Callable[[str], str] = getpass.getpass,
        output: Callable[[str], None] = print,
    ):
        """
        Initialize input collector.

        Args:
            input_func: Reads one visible line
            secret_func: Reads one line without echo (passwords)
            output: Writes one line
        """
        self._input = input_func
        self._secret = secret_func
        self._output = output

    def _header(self, title: str) -> None:
        self._output("")
        self._output(f"📋 {title}")
        self._output("   " + "-" * 30)

    def ask(
        self, prompt: str, validator: Validator, example: str = "", secret: bool = False
    ) -> str:
        """Ask until ``validator`` accepts; return the normalized value."""
        label = f"   {prompt}" + (f" (e.g. {example})" if example else "") + ": "
        read = self._secret if secret else self._input
        while True:
            result = validator(read(label).strip())
            if isinstance(result, Failure):
                self._output(f"   ❌ {result.error}")
                continue
            return result.unwrap()

    def ask_yes_no(self, prompt: str, default: bool = False) -> bool:
        hint = "Y/n" if default else "y/N"
        while True:
            answer = self._input(f"   {prompt} ({hint}): ").strip().lower()
            if not answer:
                return default
            if answer in ("y", "yes"):
                return True
            if answer in ("n", "no"):
                return False
            self._output("   ❌ Please answer Y or N")

    def ask_choice(self, prompt: str, options: Sequence[Tuple[str, str]]) -> str:
        """Show numbered ``(key, label)`` options and return the chosen key."""
        for key, label in options:
            self._output(f"     {key}) {label}")
        keys = [key for key, _ in options]
        while True:
            answer = self._input(f"   {prompt} [{'/'.join(keys)}]: ").strip()
            if answer in keys:
                return answer
            self._output(f"   ❌ Choose one of: {', '.join(keys)}")

    def collect_trip(self) -> TripQuery:
        self._header("🚉 Stations")
        departure_station = self.ask(
            "Departure station", required("Departure station"), "수서, 동탄, 광명"
        )
        arrival_station = self.ask(
            "Arrival station", required("Arrival station"), "부산, 전주, 광주송정"
        )

        self._header("⏰ Schedule")
        departure_time = self.ask(
            "Departure time", required("Departure time", validate_time), "10:37"
        )
        arrival_time = self.ask("Arrival time", required("Arrival time", validate_time), "12:07")
        travel_date = self.ask("Travel date", required("Travel date", validate_date), "20250622")

        return TripQuery(
            departure_station=departure_station,
            arrival_station=arrival_station,
            departure_time=departure_time,
            arrival_time=arrival_time,
            travel_date=travel_date,
        )

    def collect_guest(self) -> GuestIdentity:
        self._header("👤 Passenger")
        name = self.ask("Passenger name", required("Passenger name"), "홍길동")
        phone = self.ask(
            "Phone number (digits only)", required("Phone", validate_phone), "01012345678"
        )

        self._header("🔐 Reservation password")
        password = self.ask(
            "5-digit password", required("Password", validate_guest_password), secret=True
        )
        return GuestIdentity(name=name, phone=phone, password=password)

    def collect_member(self) -> MemberIdentity:
        self._header("🔑 Member login")
        choice = self.ask_choice(
            "Log in with",
            [(key, label) for key, (_, label) in LOGIN_KIND_CHOICES.items()],
        )
        kind, label = LOGIN_KIND_CHOICES[choice]

        if kind is LoginKind.EMAIL:
            validator = required(label, validate_email)
        elif kind is LoginKind.PHONE:
            validator = required(label, validate_phone)
        else:
            validator = required(label)
        login_id = self.ask(label, validator)
        login_password = self.ask("Password", required("Password"), secret=True)
        return MemberIdentity(login_kind=kind, login_id=login_id, login_password=login_password)

    def collect_notification(self) -> NotificationPreference:
        self._header("📧 Notification")
        if not self.ask_yes_no("Send an email when the run finishes?", default=False):
            return NotificationPreference()
        email = self.ask("Email address", required("Email", validate_email), "example@gmail.com")
        return NotificationPreference(enabled=True, email=email)

    def collect_once(self) -> PassengerRequest:
        trip = self.collect_trip()

        self._header("🪪 Checkout")
        mode = self.ask_choice(
            "Book as", [("1", "Unregistered guest"), ("2", "Logged-in member")]
        )
        identity = self.collect_guest() if mode == "1" else self.collect_member()

        notification = self.collect_notification()
        return PassengerRequest(trip=trip, identity=identity, notification=notification)

    def show_summary(self, request: PassengerRequest) -> None:
        trip = request.trip
        identity = request.identity
        self._header("✅ Please confirm")
        self._output(f"    Departure: {trip.departure_station} ({trip.departure_time})")
        self._output(f"    Arrival:   {trip.arrival_station} ({trip.arrival_time})")
        self._output(f"    Date:      {trip.travel_date}")
        if isinstance(identity, GuestIdentity):
            self._output(f"    Passenger: {identity.name}")
            self._output(f"    Phone:     {mask_phone(identity.phone)}")
        else:
            self._output(f"    Member:    {identity.label()} ({identity.login_kind.value})")
        if request.notification.enabled:
            self._output(f"    Notify:    {request.notification.email}")
        self._output("")

    def collect(self, max_rounds: Optional[int] = None) -> PassengerRequest:
        """
        Collect and confirm a request.

        Args:
            max_rounds: Stop after this many rejected confirmations (None = no limit)

        Raises:
            KeyboardInterrupt/EOFError: Propagated from the input functions
            RuntimeError: When ``max_rounds`` confirmations were rejected
        """
        rounds = 0
        while max_rounds is None or rounds < max_rounds:
            rounds += 1
            request = self.collect_once()
            self.show_summary(request)
            if self.ask_yes_no("Is this correct?", default=True):
                self._output("   ✅ Confirmed. Starting reservation.")
                return request
            self._output("   🔄 Let's start over.")
        raise RuntimeError(f"Request not confirmed after {rounds} rounds")
