"""
Persistence - Weight file, performance history CSV, and result tables.

Weight file: one real number per line, exactly NUM_FEATURES lines, no header.
Performance CSV: ``episodesPlayed,averageReward`` rows, one per testing block.

File failures are logged and never raised: learning carries on in memory.
"""

import csv
import logging
import os
from typing import List, Optional, Sequence

import numpy as np

from squad_ai.features import NUM_FEATURES

logger = logging.getLogger(__name__)


class WeightStore:
    """Capability interface for loading and saving the weight vector."""

    def load(self) -> Optional[np.ndarray]:
        raise NotImplementedError

    def save(self, weights: np.ndarray) -> bool:
        raise NotImplementedError


class FileWeightStore(WeightStore):
    """Weights stored as a plain text file, one ``%f`` value per line."""

    def __init__(self, path: str = os.path.join("agent_weights", "weights.txt"),
                 num_features: int = NUM_FEATURES):
        self.path = path
        self.num_features = num_features

    def load(self) -> Optional[np.ndarray]:
        if not os.path.exists(self.path):
            logger.error(f"Failed to load weights. File does not exist: {self.path}")
            return None

        try:
            with open(self.path, 'r') as f:
                values = [float(line) for line in f if line.strip()]
        except OSError as e:
            logger.error(f"Failed to load weights from file. Reason: {e}")
            return None
        except ValueError as e:
            logger.error(f"Malformed weight file {self.path}: {e}")
            return None

        if len(values) != self.num_features:
            logger.error(f"Weight file {self.path} has {len(values)} values, "
                         f"expected {self.num_features}")
            return None

        return np.array(values, dtype=np.float64)

    def save(self, weights: np.ndarray) -> bool:
        try:
            directory = os.path.dirname(os.path.abspath(self.path))
            os.makedirs(directory, exist_ok=True)
            with open(self.path, 'w') as f:
                for weight in weights:
                    f.write("%f\n" % weight)
        except OSError as e:
            logger.error(f"Failed to write weights to file. Reason: {e}")
            return False
        return True


class InMemoryWeightStore(WeightStore):
    """Keeps the last saved weights in memory. Used for headless runs."""

    def __init__(self, weights: Optional[Sequence[float]] = None):
        self.weights = None if weights is None else np.array(weights, dtype=np.float64)
        self.saves = 0

    def load(self) -> Optional[np.ndarray]:
        if self.weights is None:
            logger.error("Failed to load weights. Nothing stored")
            return None
        return self.weights.copy()

    def save(self, weights: np.ndarray) -> bool:
        self.weights = np.array(weights, dtype=np.float64)
        self.saves += 1
        return True


class PerformanceLog:
    """Writes the performance history as CSV rows."""

    def __init__(self, path: str = os.path.join("outputs", "rewards.csv"),
                 episodes_per_block: int = 10):
        self.path = path
        self.episodes_per_block = episodes_per_block

    def rows(self, history: Sequence[float]) -> List[List[str]]:
        return [[str(self.episodes_per_block * (i + 1)), "%.2f" % average]
                for i, average in enumerate(history)]

    def save(self, history: Sequence[float]) -> bool:
        try:
            directory = os.path.dirname(os.path.abspath(self.path))
            os.makedirs(directory, exist_ok=True)
            with open(self.path, 'w', newline='') as f:
                csv.writer(f).writerows(self.rows(history))
        except OSError as e:
            logger.error(f"Failed to write performance history. Reason: {e}")
            return False
        return True


def format_test_data(history: Sequence[float], episodes_per_block: int = 10) -> str:
    """Console table of average cumulative reward per testing block."""
    lines = [
        "",
        "Games Played      Average Cumulative Reward",
        "-------------     -------------------------",
    ]
    width = len("-------------     ")
    for i, average in enumerate(history):
        games_played = str(episodes_per_block * (i + 1))
        lines.append(games_played.ljust(width) + "%.2f" % average)
    lines.append("")
    return "\n".join(lines)
