"""X11 session helpers."""
