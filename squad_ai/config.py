"""
Agent Configuration - Settings for the squad Q-learning controller.

Hyperparameters default to the values the controller was tuned with;
the run-level settings (episode budget, weight loading, file paths) are
normally supplied by the command-line runner or the environment.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple
import os
import json


@dataclass
class AgentConfig:
    """Master configuration for one training run"""
    # Run settings
    num_episodes: int = 10
    load_weights: bool = False
    seed: int = 12345

    # Players
    player: int = 0
    enemy_player: int = 1
    tracked_unit_types: Tuple[str, ...] = ("footman",)

    # Learning
    num_features: int = 5
    gamma: float = 0.9
    learning_rate: float = 0.0001
    epsilon: float = 0.02

    # Phase schedule
    learning_block: int = 10
    testing_block: int = 5

    # Persistence
    weights_path: str = os.path.join("agent_weights", "weights.txt")
    rewards_csv_path: str = os.path.join("outputs", "rewards.csv")

    @classmethod
    def from_env(cls) -> 'AgentConfig':
        """Load from environment variables"""
        defaults = cls()
        return cls(
            num_episodes=int(os.getenv('SQUAD_AI_EPISODES', defaults.num_episodes)),
            load_weights=os.getenv('SQUAD_AI_LOAD_WEIGHTS', 'false').lower() == 'true',
            seed=int(os.getenv('SQUAD_AI_SEED', defaults.seed)),
            weights_path=os.getenv('SQUAD_AI_WEIGHTS_PATH', defaults.weights_path),
            rewards_csv_path=os.getenv('SQUAD_AI_REWARDS_PATH', defaults.rewards_csv_path),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration"""
        return {
            'run': {
                'num_episodes': self.num_episodes,
                'load_weights': self.load_weights,
                'seed': self.seed,
            },
            'players': {
                'player': self.player,
                'enemy_player': self.enemy_player,
                'tracked_unit_types': list(self.tracked_unit_types),
            },
            'learning': {
                'num_features': self.num_features,
                'gamma': self.gamma,
                'learning_rate': self.learning_rate,
                'epsilon': self.epsilon,
            },
            'schedule': {
                'learning_block': self.learning_block,
                'testing_block': self.testing_block,
            },
            'paths': {
                'weights_path': self.weights_path,
                'rewards_csv_path': self.rewards_csv_path,
            },
        }

    def save(self, filepath: str):
        """Save configuration to file"""
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, filepath: str) -> 'AgentConfig':
        """Load configuration from file"""
        with open(filepath, 'r') as f:
            data = json.load(f)
        defaults = cls()
        run = data.get('run', {})
        players = data.get('players', {})
        learning = data.get('learning', {})
        schedule = data.get('schedule', {})
        paths = data.get('paths', {})
        return cls(
            num_episodes=run.get('num_episodes', defaults.num_episodes),
            load_weights=run.get('load_weights', defaults.load_weights),
            seed=run.get('seed', defaults.seed),
            player=players.get('player', defaults.player),
            enemy_player=players.get('enemy_player', defaults.enemy_player),
            tracked_unit_types=tuple(players.get('tracked_unit_types',
                                                 defaults.tracked_unit_types)),
            num_features=learning.get('num_features', defaults.num_features),
            gamma=learning.get('gamma', defaults.gamma),
            learning_rate=learning.get('learning_rate', defaults.learning_rate),
            epsilon=learning.get('epsilon', defaults.epsilon),
            learning_block=schedule.get('learning_block', defaults.learning_block),
            testing_block=schedule.get('testing_block', defaults.testing_block),
            weights_path=paths.get('weights_path', defaults.weights_path),
            rewards_csv_path=paths.get('rewards_csv_path', defaults.rewards_csv_path),
        )
