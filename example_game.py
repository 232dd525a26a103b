"""
Example script running AI-vs-AI Hidden Stations games.

This shows how to:
1. Load settings and configure logging
2. Create a scenario
3. Run a single game and export its log
4. Run multiple games and print statistics
"""

from env.core.types import Team
from env.scenario import create_default_scenario
from infra.logger import configure_from_settings
from infra.settings import load_settings
from runtime.batch import run_multiple_games
from runtime.game_log import save_game_log
from runtime.runner import GameRunner


def main():
    """Run example games."""
    settings = load_settings()
    configure_from_settings(settings)
    seed = settings.seed if settings.seed is not None else 42

    print("Hidden Stations - Example Game Runner")
    print("=" * 80)

    # =========================================================================
    # Example 1: Single game, round by round
    # =========================================================================
    scenario = create_default_scenario(seed=seed, randomize_tokens=settings.randomize_tokens)
    runner = GameRunner(scenario)
    print(f"Red Agent:  {runner.red_agent}")
    print(f"Blue Agent: {runner.blue_agent}")
    print()

    while not runner.done:
        frame = runner.play_round()
        kills = [e["target"] for e in frame.events if e["type"] == "TARGET_KILLED"]
        token = frame.red_decision.strategy_token if frame.red_decision else None
        print(f"Round {frame.round}: token={token} kills={kills} locks={frame.locks}")
        if frame.monitor is None or not frame.monitor.ok:
            break

    print(f"Winner: {runner.env.winner}  (turrets were {runner.env.reveal_turrets()})")
    print(f"Log written to {save_game_log(runner.env)}")

    # =========================================================================
    # Example 2: Statistics over many seeds
    # =========================================================================
    num_games = 100
    print("\n" + "=" * 80)
    print(f"Multiple Games ({num_games} episodes)")
    print("=" * 80)

    results = run_multiple_games(
        num_games,
        base_seed=seed,
        scenario_factory=lambda s: create_default_scenario(seed=s, randomize_tokens=settings.randomize_tokens),
    )

    blue_wins = [r for r in results if r.winner == Team.BLUE]
    red_wins = sum(1 for r in results if r.winner == Team.RED)
    avg_kills = sum(r.kills for r in results) / len(results)

    print(f"  Blue wins: {len(blue_wins)} ({len(blue_wins)/len(results)*100:.1f}%)")
    print(f"  Red wins:  {red_wins} ({red_wins/len(results)*100:.1f}%)")
    if blue_wins:
        print(f"  Average winning round for Blue: {sum(r.rounds for r in blue_wins)/len(blue_wins):.2f}")
    print(f"  Average kills per game: {avg_kills:.2f}")


if __name__ == "__main__":
    main()
