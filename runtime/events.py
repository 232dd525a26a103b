from typing import Any, Dict, List

from env.world import PublicState


def extract_events(
    *,
    prev_state: PublicState,
    state: PublicState,
) -> List[Dict[str, Any]]:
    """
    Summarise what changed between two public snapshots.

    Events are plain dicts so they can go straight into frames, API responses
    and logs.
    """
    events: List[Dict[str, Any]] = []

    # ---------------------------------------------------------
    # 1. KILLS
    # ---------------------------------------------------------
    for event in state.dead_history[len(prev_state.dead_history):]:
        events.append({
            "type": "TARGET_KILLED",
            "round": event.round,
            "target": list(event.target),
            "mode": int(event.mode),
        })

    # ---------------------------------------------------------
    # 2. TOKENS
    # ---------------------------------------------------------
    if prev_state.strategy_tokens_remaining is not None and state.strategy_tokens_remaining is not None:
        remaining = list(state.strategy_tokens_remaining)
        for token in prev_state.strategy_tokens_remaining:
            if token in remaining:
                remaining.remove(token)
            else:
                events.append({
                    "type": "TOKEN_SPENT",
                    "round": prev_state.round,
                    "token": token,
                })

    # ---------------------------------------------------------
    # 3. LOCKS
    # ---------------------------------------------------------
    for event in state.locks_history[len(prev_state.locks_history):]:
        events.append({
            "type": "LOCKS_SUBMITTED",
            "round": event.round,
            "locks": [list(c) for c in event.locks],
        })
    locked = sum(1 for flag in state.turrets_locked if flag)
    if not state.game_over and state.locks_history and locked:
        events.append({
            "type": "TURRETS_LOCKED",
            "round": state.round,
            "count": locked,
        })

    # ---------------------------------------------------------
    # 4. TERMINAL
    # ---------------------------------------------------------
    if state.game_over and not prev_state.game_over:
        events.append({
            "type": "GAME_OVER",
            "round": state.round,
            "winner": state.winner.value if state.winner else None,
        })

    return events
