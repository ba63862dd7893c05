"""Runtime configuration."""

from .settings import SRTSettings

__all__ = ["SRTSettings"]
