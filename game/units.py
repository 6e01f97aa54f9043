"""
Unit System - Unit types, stats, and combat mechanics for the skirmish game.

Modeled after a small tactical squad battle:
- Footman: Sturdy melee infantry, the unit squads are made of
- Archer: Fragile ranged infantry
- Tower: Immobile ranged structure
"""

from enum import IntEnum
from dataclasses import dataclass


class UnitType(IntEnum):
    FOOTMAN = 0
    ARCHER = 1
    TOWER = 2

    @property
    def template_name(self) -> str:
        """Lowercase name as reported to controllers."""
        return self.name.lower()


@dataclass
class UnitStats:
    """Immutable stats for a unit type."""
    hp: int
    damage: int
    attack_range: int      # Chebyshev range, 1 = melee
    can_move: bool


UNIT_STATS = {
    UnitType.FOOTMAN: UnitStats(
        hp=160, damage=10, attack_range=1,
        can_move=True,
    ),
    UnitType.ARCHER: UnitStats(
        hp=50, damage=6, attack_range=4,
        can_move=True,
    ),
    UnitType.TOWER: UnitStats(
        hp=400, damage=8, attack_range=3,
        can_move=False,
    ),
}


def chebyshev_distance(x1: int, y1: int, x2: int, y2: int) -> int:
    """Grid distance where diagonal steps cost the same as straight ones."""
    return max(abs(x1 - x2), abs(y1 - y2))


@dataclass
class Unit:
    """A unit instance in the game."""
    unit_id: int
    unit_type: UnitType
    player: int            # 0 or 1
    x: int
    y: int
    hp: int = -1           # -1 means use max from stats

    def __post_init__(self):
        if self.hp == -1:
            self.hp = self.stats.hp

    @property
    def stats(self) -> UnitStats:
        return UNIT_STATS[self.unit_type]

    @property
    def template_name(self) -> str:
        return self.unit_type.template_name

    @property
    def is_alive(self) -> bool:
        return self.hp > 0

    @property
    def can_move(self) -> bool:
        return self.stats.can_move

    def take_damage(self, damage: int) -> int:
        """Apply damage to this unit. Returns the damage actually taken."""
        taken = min(self.hp, damage)
        self.hp -= taken
        return taken

    def distance_to(self, x: int, y: int) -> int:
        """Chebyshev distance to a position."""
        return chebyshev_distance(self.x, self.y, x, y)

    def in_attack_range(self, x: int, y: int) -> bool:
        """Check if a position is within attack range."""
        return self.distance_to(x, y) <= self.stats.attack_range
