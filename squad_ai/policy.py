"""
Epsilon-greedy target selection.

Randomness is injected through a RandomSource so tests can script the
exact sequence of draws.
"""

from typing import Iterable, Iterator, List, Optional

import numpy as np

from game.game_state import GameState
from game.history import History
from squad_ai.q_function import WeightUpdater


class RandomSource:
    """Capability interface: uniform floats in [0, 1)."""

    def next_uniform(self) -> float:
        raise NotImplementedError


class SeededRandom(RandomSource):
    """Production source backed by numpy's Generator."""

    def __init__(self, seed: Optional[int] = 12345):
        self.seed = seed
        self.rng = np.random.default_rng(seed)

    def next_uniform(self) -> float:
        return float(self.rng.random())


class ScriptedRandom(RandomSource):
    """Replays a fixed sequence of draws, cycling when exhausted."""

    def __init__(self, values: Iterable[float]):
        self.values: List[float] = list(values)
        if not self.values:
            raise ValueError("ScriptedRandom needs at least one value")
        self._iter: Iterator[float] = iter(())
        self.draws = 0

    def next_uniform(self) -> float:
        self.draws += 1
        try:
            return next(self._iter)
        except StopIteration:
            self._iter = iter(self.values)
            return next(self._iter)


class EpsilonGreedyPolicy:
    """Chooses which enemy each friendly unit should attack."""

    def __init__(self, updater: WeightUpdater, random_source: RandomSource,
                 epsilon: float = 0.02):
        self.updater = updater
        self.roster = updater.roster
        self.random_source = random_source
        self.epsilon = epsilon
        self.explored = 0

    def random_enemy(self) -> int:
        enemies = self.roster.enemy
        index = int(self.random_source.next_uniform() * len(enemies))
        return enemies[min(index, len(enemies) - 1)]

    def greedy_enemy(self, weights: np.ndarray, attacker_id: int,
                     state: GameState, history: History) -> int:
        """Enemy with the highest Q-value; first in roster order on ties."""
        enemies = self.roster.enemy
        values = self.updater.q_values(weights, attacker_id, enemies, state, history)
        return enemies[int(np.argmax(values))]

    def select_target(self, weights: np.ndarray, attacker_id: int,
                      state: GameState, history: History) -> Optional[int]:
        if not self.roster.enemy:  # enemy squad defeated
            return None

        # random target on the first tick, or with probability epsilon
        if state.tick == 0 or self.random_source.next_uniform() < self.epsilon:
            self.explored += 1
            return self.random_enemy()

        return self.greedy_enemy(weights, attacker_id, state, history)
