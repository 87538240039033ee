"""Arrangement selection: policy, state machine and selector."""

from displayselect.selector.selector import ArrangementSelector

__all__ = ["ArrangementSelector"]
