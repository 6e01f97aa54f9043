"""
Feature Extractor - Fixed-size encoding of one (attacker, defender) pair.

Features:
    f0  bias, always 1
    f1  proximity, 100 / Chebyshev distance (distance clamped to >= 1)
    f2  HP ratio attacker / defender (1 when the defender has no HP left)
    f3  follow-through: 100 if the attacker was already on this defender
        last tick, 1 if it was on someone else, 0 with no feedback
    f4  crowding: 1 / number of friendlies that were on this defender
        last tick, 1 when nobody was
"""

from typing import Dict, Optional

import numpy as np

from game.game_state import GameState
from game.history import ActionResult, History
from game.units import chebyshev_distance

NUM_FEATURES = 5

PROXIMITY_SCALE = 100.0
FOLLOW_THROUGH_BONUS = 100.0
MIN_DISTANCE = 1


def bias_only(num_features: int = NUM_FEATURES) -> np.ndarray:
    """Feature vector for a pair where one side has vanished."""
    features = np.zeros(num_features, dtype=np.float64)
    features[0] = 1.0
    return features


class FeatureExtractor:
    """Computes feature vectors for the controller's candidate attacks."""

    def __init__(self, player: int = 0):
        self.player = player

    def previous_feedback(self, state: GameState,
                          history: History) -> Optional[Dict[int, ActionResult]]:
        """Command feedback from the previous tick, None on the first tick."""
        if state.tick <= 0:
            return None
        return history.get_command_feedback(self.player, state.tick - 1)

    def features(self, attacker_id: int, defender_id: int,
                 state: GameState, history: History) -> np.ndarray:
        feature_vector = bias_only()

        attacker = state.get_unit(attacker_id)
        defender = state.get_unit(defender_id)
        if attacker is None or defender is None:
            return feature_vector

        distance = chebyshev_distance(attacker.x, attacker.y, defender.x, defender.y)
        feature_vector[1] = PROXIMITY_SCALE / max(distance, MIN_DISTANCE)

        feature_vector[2] = attacker.hp / defender.hp if defender.hp > 0 else 1.0

        feedback = self.previous_feedback(state, history)
        if feedback is None:
            return feature_vector

        result = feedback.get(attacker_id)
        if result is not None:
            feature_vector[3] = FOLLOW_THROUGH_BONUS if result.target_id == defender_id else 1.0

        num_attackers = sum(1 for r in feedback.values() if r.target_id == defender_id)
        feature_vector[4] = 1.0 / num_attackers if num_attackers > 0 else 1.0

        return feature_vector
