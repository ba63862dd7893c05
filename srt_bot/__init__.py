"""SRT-Bot - Automated SRT train seat reservation bot."""

# Application version (SemVer)
__version__ = "1.0.0"
__license__ = "MIT"
