"""xrandr-backed prober and applier."""
