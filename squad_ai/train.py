"""
Training Script - Train the squad controller against a scripted squad.

Usage:
    python -m squad_ai.train 50                       # 50 learning episodes
    python -m squad_ai.train 50 --load-weights        # Continue from saved weights
    python -m squad_ai.train 50 --opponent weakest    # Specific opponent
    python -m squad_ai.train 50 --squad-size 8        # Bigger squads
"""

import argparse
import logging
import sys
import time
from typing import Dict

from game.ai_opponents import RandomTargetAI, NearestTargetAI, WeakestTargetAI
from game.engine import GameEngine
from game.renderer import GameRenderer
from squad_ai.agent import QLearningAgent, EpisodeBudgetExhausted, VICTORY
from squad_ai.config import AgentConfig
from squad_ai.persistence import format_test_data

logger = logging.getLogger(__name__)

OPPONENTS = {
    'random': RandomTargetAI,
    'nearest': NearestTargetAI,
    'weakest': WeakestTargetAI,
}


def play_episode(agent: QLearningAgent, engine: GameEngine, opponent,
                 render: bool = False) -> str:
    """Run one episode to its end. Returns the outcome reported by the agent."""
    state = engine.reset()
    history = engine.history
    opponent.reset()

    commands = agent.initial_step(state, history)
    while True:
        enemy_commands = opponent.get_action(state, agent.config.enemy_player, history)
        state, info = engine.step(commands, enemy_commands)
        if info['done']:
            break
        commands = agent.middle_step(state, history)

    if render:
        print(GameRenderer.render(state))
    return agent.terminal_step(state, history)


def train(args) -> Dict:
    """Main training loop: play episodes until the budget is exhausted."""
    print("=" * 70)
    print("SQUAD Q-LEARNING - Footman Skirmish Training")
    print("=" * 70)

    config = AgentConfig(
        num_episodes=args.episodes,
        load_weights=args.load_weights,
        seed=args.seed,
        weights_path=args.weights_path,
        rewards_csv_path=args.rewards_path,
    )
    agent = QLearningAgent(config)
    engine = GameEngine(map_size=args.map_size, max_ticks=args.max_ticks,
                        squad_size=args.squad_size)
    opponent = OPPONENTS[args.opponent]()

    print(f"\nEnvironment: {args.map_size}x{args.map_size} map, "
          f"{args.squad_size} vs {args.squad_size}")
    print(f"Opponent: {args.opponent}")
    print(f"Episode budget: {args.episodes}")

    start_time = time.time()
    try:
        while True:
            play_episode(agent, engine, opponent, render=args.render)
    except EpisodeBudgetExhausted as e:
        final_outcome = e.outcome

    elapsed = time.time() - start_time
    wins = sum(1 for o in agent.outcomes if o == VICTORY)

    print(format_test_data(agent.performance_history, config.learning_block))
    print("=" * 70)
    print("TRAINING COMPLETE")
    print("=" * 70)
    print(f"  Episodes played:  {agent.episodes_played}")
    print(f"  Victories:        {wins}")
    print(f"  Final outcome:    {final_outcome}")
    print(f"  Final weights:    {', '.join('%.4f' % w for w in agent.weights)}")
    print(f"  Elapsed time:     {elapsed:.1f}s")

    return {
        'episodes': agent.episodes_played,
        'victories': wins,
        'performance_history': list(agent.performance_history),
        'weights': agent.weights.tolist(),
    }


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Train a Q-learning controller for a footman squad'
    )
    parser.add_argument('episodes', type=int, nargs='?', default=10,
                        help='Number of learning episodes (default: 10)')
    parser.add_argument('--load-weights', action='store_true',
                        help='Start from the saved weight file')
    parser.add_argument('--map-size', type=int, default=12,
                        help='Map size (default: 12)')
    parser.add_argument('--squad-size', type=int, default=5,
                        help='Footmen per side (default: 5)')
    parser.add_argument('--max-ticks', type=int, default=500,
                        help='Max game ticks per episode (default: 500)')
    parser.add_argument('--opponent', type=str, default='nearest',
                        choices=sorted(OPPONENTS),
                        help='Opponent AI (default: nearest)')
    parser.add_argument('--seed', type=int, default=12345,
                        help='Random seed (default: 12345)')
    parser.add_argument('--weights-path', type=str,
                        default=AgentConfig.weights_path,
                        help='Weight file path')
    parser.add_argument('--rewards-path', type=str,
                        default=AgentConfig.rewards_csv_path,
                        help='Performance history CSV path')
    parser.add_argument('--render', action='store_true',
                        help='Print the battlefield at the end of every episode')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Verbose output')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    train(args)
    return 0


if __name__ == '__main__':
    sys.exit(main())
