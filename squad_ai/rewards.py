"""
Reward Accumulator - Per-unit scalar rewards from the previous tick's logs.

Reward components for a friendly unit:
- +damage for every hit it landed
- -damage for every hit it took
- +100 for every enemy death, -100 for every friendly death
- -0.1 if it was given a new command (action cost)
"""

import logging
from typing import Dict, Iterable

from game.game_state import GameState
from game.history import History
from squad_ai.roster import RosterTracker

logger = logging.getLogger(__name__)

KILL_REWARD = 100.0
DEATH_PENALTY = 100.0
ACTION_COST = 0.1


class RewardLedger:
    """Cumulative reward since episode start for each friendly unit.

    Live units have exactly one entry. A unit's entry is retired when it
    dies; retired totals still count toward the episode mean.
    """

    def __init__(self):
        self.entries: Dict[int, float] = {}
        self.retired: Dict[int, float] = {}

    def reset(self, unit_ids: Iterable[int]):
        self.entries = {uid: 0.0 for uid in unit_ids}
        self.retired = {}

    def add(self, unit_id: int, amount: float):
        self.entries[unit_id] = self.entries.get(unit_id, 0.0) + amount

    def get(self, unit_id: int) -> float:
        return self.entries.get(unit_id, self.retired.get(unit_id, 0.0))

    def retire(self, unit_id: int):
        if unit_id in self.entries:
            self.retired[unit_id] = self.entries.pop(unit_id)

    def episode_mean(self) -> float:
        totals = list(self.entries.values()) + list(self.retired.values())
        if not totals:
            return 0.0
        return sum(totals) / len(totals)

    def __contains__(self, unit_id: int) -> bool:
        return unit_id in self.entries

    def __len__(self) -> int:
        return len(self.entries)


class RewardAccumulator:
    """Turns the previous tick's history into per-unit rewards."""

    def __init__(self, roster: RosterTracker, ledger: RewardLedger):
        self.roster = roster
        self.ledger = ledger

    def step_reward(self, unit_id: int, state: GameState, history: History) -> float:
        """Reward earned by one friendly unit on the previous tick."""
        reward = 0.0
        previous_tick = state.tick - 1
        if previous_tick < 0:  # game just started
            return reward

        for log in history.get_damage_logs(previous_tick):
            if log.attacker_id == unit_id:
                reward += log.damage
            elif log.defender_id == unit_id:
                reward -= log.damage

        for log in history.get_death_logs(previous_tick):
            if self.roster.is_friendly(log.unit_id):
                reward -= DEATH_PENALTY
            elif self.roster.is_enemy(log.unit_id):
                reward += KILL_REWARD

        if unit_id in history.get_commands_issued(self.roster.player, previous_tick):
            reward -= ACTION_COST

        return reward

    def accumulate(self, state: GameState, history: History):
        """Add the previous tick's reward into every tracked unit's ledger entry."""
        previous_tick = state.tick - 1
        if previous_tick >= 0:
            self._report_untracked(history, previous_tick)

        for unit_id in self.roster.friendly:
            self.ledger.add(unit_id, self.step_reward(unit_id, state, history))

    def _report_untracked(self, history: History, tick: int):
        for log in history.get_damage_logs(tick):
            for unit_id in (log.attacker_id, log.defender_id):
                if not (self.roster.is_friendly(unit_id) or self.roster.is_enemy(unit_id)):
                    logger.warning(f"Damage log for untracked unit {unit_id} on tick {tick}")
