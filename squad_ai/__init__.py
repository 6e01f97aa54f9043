"""
Squad AI - Linear Q-learning controller for a squad of footmen.

Learns which enemy each footman should attack from a five-feature linear
Q-function, alternating learning blocks (weights updated) with frozen
testing blocks (performance measured).

Components:
- Roster tracking and per-unit reward accumulation
- Feature extraction and linear Q-values
- Epsilon-greedy target selection with injectable randomness
- Learning/testing phase scheduling
- Event-driven re-decision
- Weight and performance persistence
"""

from squad_ai.config import AgentConfig
from squad_ai.roster import RosterTracker
from squad_ai.rewards import RewardAccumulator, RewardLedger
from squad_ai.features import FeatureExtractor, NUM_FEATURES
from squad_ai.q_function import q_value, td_step, WeightUpdater
from squad_ai.policy import (
    EpsilonGreedyPolicy, RandomSource, SeededRandom, ScriptedRandom,
)
from squad_ai.phases import PhaseScheduler, PhaseState
from squad_ai.events import has_event
from squad_ai.persistence import (
    WeightStore, FileWeightStore, InMemoryWeightStore, PerformanceLog,
)
from squad_ai.agent import QLearningAgent, EpisodeBudgetExhausted

__all__ = [
    "AgentConfig",
    "RosterTracker",
    "RewardAccumulator", "RewardLedger",
    "FeatureExtractor", "NUM_FEATURES",
    "q_value", "td_step", "WeightUpdater",
    "EpsilonGreedyPolicy", "RandomSource", "SeededRandom", "ScriptedRandom",
    "PhaseScheduler", "PhaseState",
    "has_event",
    "WeightStore", "FileWeightStore", "InMemoryWeightStore", "PerformanceLog",
    "QLearningAgent", "EpisodeBudgetExhausted",
]
