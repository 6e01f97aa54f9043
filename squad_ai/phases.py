"""
Phase Scheduler - Alternates learning and frozen testing episodes.

Learning runs for a block of episodes (10 by default) with the weights
being updated; testing then runs for a block (5 by default) with the
weights frozen, and the mean of the testing episodes' per-unit rewards is
appended to the performance history.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

logger = logging.getLogger(__name__)


@dataclass
class PhaseState:
    """Counters for the learning/testing cycle. ``frozen`` means testing."""
    learning_episodes_completed: int = 0
    testing_episodes_completed: int = 0
    current_episode_number: int = 0
    frozen: bool = False
    running_test_reward_sum: float = 0.0
    performance_history: List[float] = field(default_factory=list)

    @property
    def phase(self) -> str:
        return "testing" if self.frozen else "learning"


class PhaseScheduler:
    """Advances the PhaseState at every episode boundary."""

    def __init__(self, learning_block: int = 10, testing_block: int = 5,
                 state: Optional[PhaseState] = None):
        self.learning_block = learning_block
        self.testing_block = testing_block
        self.state = state or PhaseState()

    @property
    def frozen(self) -> bool:
        return self.state.frozen

    @property
    def performance_history(self) -> List[float]:
        return self.state.performance_history

    def end_episode(self, mean_reward: float) -> bool:
        """
        Record a finished episode.

        mean_reward: the episode's mean per-unit cumulative reward; only
        testing episodes use it.
        Returns True when a testing block completed on this episode.
        """
        s = self.state
        if not s.frozen:
            s.learning_episodes_completed += 1
            s.current_episode_number += 1
            if s.learning_episodes_completed >= self.learning_block:
                s.learning_episodes_completed = 0
                s.frozen = True
                logger.info(f"Episode {s.current_episode_number}: freezing weights for testing")
            return False

        s.testing_episodes_completed += 1
        s.running_test_reward_sum += mean_reward
        if s.testing_episodes_completed < self.testing_block:
            return False

        average = s.running_test_reward_sum / self.testing_block
        s.performance_history.append(average)
        s.testing_episodes_completed = 0
        s.running_test_reward_sum = 0.0
        s.frozen = False
        logger.info(f"Testing block done: average cumulative reward {average:.2f}")
        return True
