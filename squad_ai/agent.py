"""
Squad Q-learning Agent - The controller session for one training run.

Each tick:
1. Accumulate every friendly unit's reward from the previous tick
2. Check whether anything happened that warrants new orders
3. Drop units that died from the rosters and the reward ledger
4. If an event occurred, pick a target for every living friendly unit,
   apply one learning step (unless testing), and issue attack commands

At every episode end the phase scheduler advances, the weights are saved,
and the run halts once the episode budget is exceeded.
"""

import logging
from typing import Dict, List, Optional

import numpy as np

from game.actions import Action
from game.game_state import GameState
from game.history import History
from squad_ai.config import AgentConfig
from squad_ai.events import has_event
from squad_ai.features import FeatureExtractor
from squad_ai.persistence import (
    WeightStore, FileWeightStore, PerformanceLog, format_test_data,
)
from squad_ai.phases import PhaseScheduler
from squad_ai.policy import EpsilonGreedyPolicy, RandomSource, SeededRandom
from squad_ai.q_function import WeightUpdater
from squad_ai.rewards import RewardAccumulator, RewardLedger
from squad_ai.roster import RosterTracker

logger = logging.getLogger(__name__)

VICTORY = "VICTORY"
DEFEAT = "DEFEAT"


class EpisodeBudgetExhausted(Exception):
    """Raised at the end of the episode that exceeds the configured budget."""

    def __init__(self, episodes: int, outcome: str):
        super().__init__(f"Episode budget exhausted after {episodes} episodes ({outcome})")
        self.episodes = episodes
        self.outcome = outcome


class QLearningAgent:
    """
    Linear Q-learning controller for a squad of footmen.

    Owns all cross-episode state (weights, phase counters, performance
    history). Persistence and randomness are injected so the whole loop
    runs headlessly in tests.
    """

    def __init__(self, config: Optional[AgentConfig] = None,
                 random_source: Optional[RandomSource] = None,
                 weight_store: Optional[WeightStore] = None,
                 performance_log: Optional[PerformanceLog] = None):
        self.config = config or AgentConfig()
        cfg = self.config

        self.random_source = random_source or SeededRandom(cfg.seed)
        self.weight_store = weight_store or FileWeightStore(
            cfg.weights_path, cfg.num_features
        )
        self.performance_log = performance_log or PerformanceLog(
            cfg.rewards_csv_path, cfg.learning_block
        )

        self.roster = RosterTracker(cfg.player, cfg.enemy_player, cfg.tracked_unit_types)
        self.ledger = RewardLedger()
        self.rewards = RewardAccumulator(self.roster, self.ledger)
        self.extractor = FeatureExtractor(cfg.player)
        self.updater = WeightUpdater(self.roster, self.extractor,
                                     gamma=cfg.gamma, learning_rate=cfg.learning_rate)
        self.policy = EpsilonGreedyPolicy(self.updater, self.random_source, cfg.epsilon)
        self.scheduler = PhaseScheduler(cfg.learning_block, cfg.testing_block)

        logger.info(f"Running {cfg.num_episodes} episodes.")
        self.weights = self._initial_weights()

        self.episodes_played = 0
        self.outcomes: List[str] = []

    def _initial_weights(self) -> np.ndarray:
        if self.config.load_weights:
            loaded = self.weight_store.load()
            if loaded is not None:
                return loaded
            logger.warning("Could not load weights, initializing randomly")
        # uniform in [-1, 1)
        return np.array([self.random_source.next_uniform() * 2 - 1
                         for _ in range(self.config.num_features)], dtype=np.float64)

    @property
    def frozen(self) -> bool:
        return self.scheduler.frozen

    @property
    def performance_history(self) -> List[float]:
        return self.scheduler.performance_history

    def initial_step(self, state: GameState, history: History) -> Dict[int, Action]:
        """Start an episode: fill the rosters and reset the reward ledger."""
        self.roster.initialize(state.get_units(self.config.player),
                               state.get_units(self.config.enemy_player))
        self.ledger.reset(self.roster.friendly)
        return self.middle_step(state, history)

    def middle_step(self, state: GameState, history: History) -> Dict[int, Action]:
        """Per-tick hook. Returns {friendly_id: attack}, empty without an event."""
        self.rewards.accumulate(state, history)
        event = has_event(state.tick, history, self.config.player, self.roster.friendly)
        self._remove_dead(state, history)

        actions: Dict[int, Action] = {}
        if not event:
            return actions

        for attacker_id in list(self.roster.friendly):
            defender_id = self.policy.select_target(self.weights, attacker_id, state, history)
            if defender_id is None:
                continue
            if not self.frozen:
                self._learn(attacker_id, defender_id, state, history)
            actions[attacker_id] = Action.attack(attacker_id, defender_id)

        return actions

    def _learn(self, attacker_id: int, defender_id: int,
               state: GameState, history: History):
        features = self.extractor.features(attacker_id, defender_id, state, history)
        self.updater.update(self.weights, features, self.ledger.get(attacker_id),
                            attacker_id, state, history)

    def _remove_dead(self, state: GameState, history: History):
        if state.tick <= 0:
            return
        for unit_id in self.roster.remove_dead(history.get_death_logs(state.tick - 1)):
            self.ledger.retire(unit_id)

    def terminal_step(self, state: GameState, history: History) -> str:
        """
        Close the episode: settle rewards, advance the phase schedule,
        save the weights and report the outcome.

        Raises EpisodeBudgetExhausted once the budget is exceeded.
        """
        self.rewards.accumulate(state, history)
        self._remove_dead(state, history)

        phase = self.scheduler.state.phase
        block_done = self.scheduler.end_episode(self.ledger.episode_mean())
        if block_done:
            logger.info(format_test_data(self.performance_history, self.config.learning_block))
            self.performance_log.save(self.performance_history)

        self.weight_store.save(self.weights)

        outcome = VICTORY if len(self.roster.friendly) > len(self.roster.enemy) else DEFEAT
        self.episodes_played += 1
        self.outcomes.append(outcome)
        logger.info(f"Episode {self.episodes_played} ({phase}): {outcome}")

        if self.scheduler.state.current_episode_number > self.config.num_episodes:
            logger.info("ALL DONE")
            raise EpisodeBudgetExhausted(self.episodes_played, outcome)

        return outcome
