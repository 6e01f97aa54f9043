"""
Roster Tracker - The live friendly and enemy unit ids for one episode.

Rosters keep the order units were listed in at episode start; target
selection breaks Q-value ties by that order.
"""

import logging
from typing import Iterable, List, Sequence

from game.history import DeathLog
from game.units import Unit

logger = logging.getLogger(__name__)


class RosterTracker:
    """Friendly and enemy unit ids, shrinking as units die."""

    def __init__(self, player: int = 0, enemy_player: int = 1,
                 tracked_types: Sequence[str] = ("footman",)):
        self.player = player
        self.enemy_player = enemy_player
        self.tracked_types = tuple(t.lower() for t in tracked_types)
        self.friendly: List[int] = []
        self.enemy: List[int] = []

    def initialize(self, friendly_units: Iterable[Unit],
                   enemy_units: Iterable[Unit]):
        """Populate both rosters from the episode's unit listing."""
        self.friendly = self._classify(friendly_units)
        self.enemy = self._classify(enemy_units)

    def _classify(self, units: Iterable[Unit]) -> List[int]:
        ids = []
        for unit in units:
            name = unit.template_name.lower()
            if name in self.tracked_types:
                ids.append(unit.unit_id)
            else:
                logger.warning(f"Unknown unit type: {name} (unit {unit.unit_id} not tracked)")
        return ids

    def remove_dead(self, death_logs: Iterable[DeathLog]) -> List[int]:
        """
        Drop every unit reported dead from its roster.

        Returns the friendly ids that were removed so per-unit bookkeeping
        can be retired alongside.
        """
        removed_friendly = []
        for log in death_logs:
            if log.unit_id in self.friendly:
                self.friendly.remove(log.unit_id)
                removed_friendly.append(log.unit_id)
            elif log.unit_id in self.enemy:
                self.enemy.remove(log.unit_id)
            else:
                logger.warning(f"Unknown unit killed: player {log.player} unit {log.unit_id}")
        return removed_friendly

    def is_friendly(self, unit_id: int) -> bool:
        return unit_id in self.friendly

    def is_enemy(self, unit_id: int) -> bool:
        return unit_id in self.enemy
