"""Reservation step pipeline and retrying orchestrator."""

from .booking_orchestrator import AttemptFailedCallback, ReservationOrchestrator
from .form_filler import FormFiller
from .gate import QueueGate
from .identity import IdentityConfirmer
from .timings import PipelineTimings
from .train_selector import TrainRow, TrainSelector

__all__ = [
    "AttemptFailedCallback",
    "ReservationOrchestrator",
    "FormFiller",
    "QueueGate",
    "IdentityConfirmer",
    "PipelineTimings",
    "TrainRow",
    "TrainSelector",
]
