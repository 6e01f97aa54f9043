"""
Linear Q-function - Q-value estimate and the weight update rule.

Q(s, a) = w . f(s, a)

The update moves every weight toward a bootstrapped target:

    target  = reward + gamma * max_a' Q(s, a')
    loss_i  = (Q(s, a) - target) * f_i
    w_i'    = f_i - learning_rate * loss_i

Note the update starts from the feature value f_i, not from the previous
weight w_i: each step replaces the weight vector outright.
"""

from typing import Sequence

import numpy as np

from game.game_state import GameState
from game.history import History
from squad_ai.features import FeatureExtractor
from squad_ai.roster import RosterTracker


def q_value(weights: np.ndarray, features: np.ndarray) -> float:
    """Linear Q-value. Raises ValueError on a length mismatch."""
    if len(weights) != len(features):
        raise ValueError(
            f"weights ({len(weights)}) and features ({len(features)}) differ in length"
        )
    return float(np.dot(weights, features))


def td_step(weights: np.ndarray, features: np.ndarray, reward: float,
            best_q: float, gamma: float, learning_rate: float) -> np.ndarray:
    """One update of the weight vector; returns the new weights."""
    q = q_value(weights, features)
    target = reward + gamma * best_q
    loss = (q - target) * features
    return features - learning_rate * loss


class WeightUpdater:
    """Applies the update rule against the live enemy roster."""

    def __init__(self, roster: RosterTracker, extractor: FeatureExtractor,
                 gamma: float = 0.9, learning_rate: float = 0.0001):
        self.roster = roster
        self.extractor = extractor
        self.gamma = gamma
        self.learning_rate = learning_rate

    def best_q(self, weights: np.ndarray, attacker_id: int,
               state: GameState, history: History) -> float:
        """Highest Q-value the attacker can reach against any current enemy.

        Recomputed from scratch every call; 0 when no enemy is left.
        """
        values = self.q_values(weights, attacker_id, self.roster.enemy, state, history)
        if not values:
            return 0.0
        return max(values)

    def q_values(self, weights: np.ndarray, attacker_id: int,
                 defender_ids: Sequence[int], state: GameState,
                 history: History) -> list:
        return [
            q_value(weights, self.extractor.features(attacker_id, d, state, history))
            for d in defender_ids
        ]

    def update(self, weights: np.ndarray, features: np.ndarray, reward: float,
               attacker_id: int, state: GameState, history: History) -> np.ndarray:
        """Update ``weights`` in place and return them."""
        best = self.best_q(weights, attacker_id, state, history)
        weights[:] = td_step(weights, features, reward, best,
                             self.gamma, self.learning_rate)
        return weights
