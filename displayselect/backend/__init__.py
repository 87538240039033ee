"""Backend abstraction layer for external display tools."""

from displayselect.backend.protocols import (
    Applier,
    Hook,
    ManualArranger,
    Notifier,
    Picker,
    Prober,
    Session,
)

__all__ = [
    "Applier",
    "Hook",
    "ManualArranger",
    "Notifier",
    "Picker",
    "Prober",
    "Session",
]
