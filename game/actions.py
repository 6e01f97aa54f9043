"""
Action System - Commands a controller can issue to its units.

Only one kind of command exists: the compound attack, which keeps the
unit closing in on its target and striking it every tick until the
target dies or becomes unreachable.
"""

from enum import IntEnum
from dataclasses import dataclass


class ActionType(IntEnum):
    ATTACK = 0


@dataclass(frozen=True)
class Action:
    """A command for one unit."""
    unit_id: int
    target_id: int
    action_type: ActionType = ActionType.ATTACK

    @classmethod
    def attack(cls, unit_id: int, target_id: int) -> 'Action':
        """Compound attack: move toward the target and strike it."""
        return cls(unit_id=unit_id, target_id=target_id)
