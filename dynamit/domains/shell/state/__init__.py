"""Shell key state exports."""

from .machine import UIStateMachine
from .root import RootState

__all__ = [
    "RootState",
    "UIStateMachine",
]
