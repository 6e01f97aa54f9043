"""
Squad Skirmish Game Environment

A pure-Python turn-based tactical battle between two squads, used to
train and evaluate the squad controller. Features:

- Grid-based maps with footmen, archers and towers
- Chebyshev movement and attack ranges
- Compound attack commands with per-tick feedback
- Per-tick history of damage, deaths, commands and feedback
- Deterministic game mechanics
"""

from game.units import UnitType, Unit, UNIT_STATS, chebyshev_distance
from game.game_map import GameMap
from game.game_state import GameState
from game.actions import ActionType, Action
from game.history import (
    History, DamageLog, DeathLog, ActionResult, ActionFeedback,
)
from game.engine import GameEngine
from game.ai_opponents import RandomTargetAI, NearestTargetAI, WeakestTargetAI
from game.renderer import GameRenderer

__all__ = [
    "UnitType", "Unit", "UNIT_STATS", "chebyshev_distance",
    "GameMap", "GameState",
    "ActionType", "Action",
    "History", "DamageLog", "DeathLog", "ActionResult", "ActionFeedback",
    "GameEngine",
    "RandomTargetAI", "NearestTargetAI", "WeakestTargetAI",
    "GameRenderer",
]
