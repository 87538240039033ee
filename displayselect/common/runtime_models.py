"""Typed runtime models for pipeline orchestration."""

from __future__ import annotations

from dataclasses import dataclass, field

from displayselect.backend.protocols import (
    Applier,
    Hook,
    ManualArranger,
    Notifier,
    Picker,
    Prober,
    Session,
)


@dataclass(frozen=True)
class Components:
    """Resolved collaborators for one selector run."""

    prober: Prober
    picker: Picker
    applier: Applier
    manual: ManualArranger
    notifier: Notifier
    hooks: list[Hook] = field(default_factory=list)
    session: Session | None = None
