"""Browser automation, booking pipeline and notification services."""
