"""Terminal input and request-file loading."""

from .input_collector import InputCollector
from .request_loader import load_request_file

__all__ = ["InputCollector", "load_request_file"]
