"""
Game History - Per-tick record of everything that happened in an episode.

Controllers read the previous tick's logs to compute rewards and decide
whether to act again:
- Damage logs: who hit whom, for how much
- Death logs: which player lost which unit
- Commands issued: new commands each player gave that tick
- Command feedback: the status of every active command after the tick
"""

from enum import Enum
from dataclasses import dataclass
from typing import Dict, List

from game.actions import Action


class ActionFeedback(Enum):
    COMPLETED = "COMPLETED"    # Target destroyed
    INCOMPLETE = "INCOMPLETE"  # Still closing in or striking
    FAILED = "FAILED"          # Target gone or unreachable


@dataclass(frozen=True)
class DamageLog:
    attacker_id: int
    attacker_player: int
    defender_id: int
    defender_player: int
    damage: int


@dataclass(frozen=True)
class DeathLog:
    player: int
    unit_id: int


@dataclass(frozen=True)
class ActionResult:
    action: Action
    feedback: ActionFeedback

    @property
    def unit_id(self) -> int:
        return self.action.unit_id

    @property
    def target_id(self) -> int:
        return self.action.target_id


class History:
    """Append-only per-tick logs for one episode."""

    def __init__(self):
        self._damage: Dict[int, List[DamageLog]] = {}
        self._deaths: Dict[int, List[DeathLog]] = {}
        self._issued: Dict[int, Dict[int, Dict[int, Action]]] = {}
        self._feedback: Dict[int, Dict[int, Dict[int, ActionResult]]] = {}

    def add_damage(self, tick: int, log: DamageLog):
        self._damage.setdefault(tick, []).append(log)

    def add_death(self, tick: int, log: DeathLog):
        self._deaths.setdefault(tick, []).append(log)

    def add_command(self, tick: int, player: int, action: Action):
        self._issued.setdefault(tick, {}).setdefault(player, {})[action.unit_id] = action

    def add_feedback(self, tick: int, player: int, result: ActionResult):
        self._feedback.setdefault(tick, {}).setdefault(player, {})[result.unit_id] = result

    def get_damage_logs(self, tick: int) -> List[DamageLog]:
        return list(self._damage.get(tick, []))

    def get_death_logs(self, tick: int) -> List[DeathLog]:
        return list(self._deaths.get(tick, []))

    def get_commands_issued(self, player: int, tick: int) -> Dict[int, Action]:
        return dict(self._issued.get(tick, {}).get(player, {}))

    def get_command_feedback(self, player: int, tick: int) -> Dict[int, ActionResult]:
        return dict(self._feedback.get(tick, {}).get(player, {}))
