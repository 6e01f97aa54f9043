"""
Scripted AI Opponents - Bot squads for the learning controller to fight.

Provides several behaviours:
- RandomTargetAI: Each unit attacks a random enemy
- NearestTargetAI: Each unit attacks the closest enemy
- WeakestTargetAI: Focus fire on the enemy with the least HP
"""

import random
from typing import Dict, List, Optional

from game.actions import Action
from game.game_state import GameState
from game.history import History, ActionFeedback
from game.units import Unit


class BaseAI:
    """Base class for scripted AI opponents.

    A unit keeps its assigned target until the target dies or the engine
    reports the previous command as failed.
    """

    def __init__(self):
        self.assigned: Dict[int, int] = {}  # unit_id -> target_id

    def reset(self):
        self.assigned.clear()

    def get_action(self, state: GameState, player: int,
                   history: Optional[History] = None) -> Dict[int, Action]:
        """Return {unit_id: Action} for units that need a new target."""
        enemies = state.get_units(1 - player)
        commands: Dict[int, Action] = {}
        if not enemies:
            return commands

        failed = set()
        if history is not None and state.tick > 0:
            feedback = history.get_command_feedback(player, state.tick - 1)
            failed = {uid for uid, result in feedback.items()
                      if result.feedback == ActionFeedback.FAILED}

        for unit in state.get_units(player):
            target_id = self.assigned.get(unit.unit_id)
            if (target_id is not None and state.get_unit(target_id) is not None
                    and unit.unit_id not in failed):
                continue
            target = self._choose_target(unit, enemies)
            self.assigned[unit.unit_id] = target.unit_id
            commands[unit.unit_id] = Action.attack(unit.unit_id, target.unit_id)

        return commands

    def _choose_target(self, unit: Unit, enemies: List[Unit]) -> Unit:
        return enemies[0]


class RandomTargetAI(BaseAI):
    """Picks a random enemy for each unit."""

    def __init__(self, seed: Optional[int] = None):
        super().__init__()
        self.rng = random.Random(seed)

    def _choose_target(self, unit: Unit, enemies: List[Unit]) -> Unit:
        return self.rng.choice(enemies)


class NearestTargetAI(BaseAI):
    """Attacks the closest enemy (ties broken by unit id)."""

    def _choose_target(self, unit: Unit, enemies: List[Unit]) -> Unit:
        return min(enemies, key=lambda e: (unit.distance_to(e.x, e.y), e.unit_id))


class WeakestTargetAI(BaseAI):
    """Focus fire: attacks the enemy with the least remaining HP."""

    def _choose_target(self, unit: Unit, enemies: List[Unit]) -> Unit:
        return min(enemies, key=lambda e: (e.hp, unit.distance_to(e.x, e.y), e.unit_id))
