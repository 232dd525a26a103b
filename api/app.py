"""HTTP API entrypoint for driving a game from a web UI or a script."""

from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from agents import AgentSpec
from env.core.types import DEFAULT_STRATEGY_TOKENS
from env.scenario import create_default_scenario
from infra.logger import configure_from_settings, get_logger
from infra.settings import load_settings
from runtime.runner import GameRunner

settings = load_settings()
configure_from_settings(settings, logfile=None)

log = get_logger(__name__)

app = FastAPI(title="Hidden Stations")
runner: GameRunner | None = None


# Allow a browser-based board (served from file:// or other origins)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class StartRequest(BaseModel):
    turrets: Optional[List[List[int]]] = None
    # null disables token mode
    strategy_tokens: Optional[List[str]] = Field(default_factory=lambda: list(DEFAULT_STRATEGY_TOKENS))
    seed: Optional[int] = None
    randomize_tokens: bool = True
    agents: Optional[List[Dict[str, Any]]] = None


class KillRequest(BaseModel):
    turret_index: int
    target: List[int]
    mode: Optional[int | str] = None
    strategy_token: Optional[str] = None


class KillBatchRequest(BaseModel):
    actions: List[Dict[str, Any]]
    strategy_token: Optional[str] = None


class ConsumeTokenRequest(BaseModel):
    token: str


class MonitorRequest(BaseModel):
    locks: List[List[int]]


def _runner() -> GameRunner:
    if runner is None:
        raise HTTPException(400, "No active game")
    return runner


def _with_state(payload: Dict[str, Any]) -> Dict[str, Any]:
    payload["state"] = _runner().state.to_dict()
    return payload


@app.post("/start")
def start(request: StartRequest):
    global runner
    seed = request.seed if request.seed is not None else settings.seed
    scenario = create_default_scenario(seed=seed, randomize_tokens=request.randomize_tokens)
    scenario.turrets = [tuple(t) for t in request.turrets] if request.turrets is not None else None
    scenario.strategy_tokens = request.strategy_tokens
    try:
        if request.agents is not None:
            scenario.agents = [AgentSpec.from_dict(a) for a in request.agents]
        runner = GameRunner(scenario)
    except (KeyError, TypeError, ValueError) as exc:
        raise HTTPException(400, str(exc)) from exc
    log.info("API game started (seed=%s)", seed)
    return {"success": True, "state": runner.state.to_dict()}


@app.get("/state")
def state():
    return _runner().state.to_dict()


@app.post("/kill")
def kill(request: KillRequest):
    result = _runner().env.kill(
        request.mode,
        tuple(request.target),
        request.turret_index,
        strategy_token=request.strategy_token,
    )
    return _with_state(result.to_dict())


@app.post("/kill_batch")
def kill_batch(request: KillBatchRequest):
    result = _runner().env.kill_batch(request.actions, strategy_token=request.strategy_token)
    return _with_state(result.to_dict())


@app.post("/consume_token")
def consume_token(request: ConsumeTokenRequest):
    result = _runner().env.consume_token(request.token)
    return _with_state(result.to_dict())


@app.post("/monitor")
def monitor(request: MonitorRequest):
    result = _runner().env.monitor([tuple(c) for c in request.locks])
    return _with_state(result.to_dict())


@app.post("/ai/red")
def ai_red():
    decision, metadata, results = _runner().play_red()
    return _with_state({
        "decision": decision.to_dict(),
        "metadata": metadata,
        "results": [r.to_dict() for r in results],
    })


@app.post("/ai/blue")
def ai_blue():
    locks, metadata, result = _runner().play_blue()
    return _with_state({
        "locks": [list(c) for c in locks],
        "metadata": metadata,
        "result": result.to_dict(),
    })


@app.post("/round")
def play_round():
    try:
        return _runner().play_round().to_dict()
    except RuntimeError as exc:
        raise HTTPException(400, str(exc)) from exc


@app.get("/log", response_class=PlainTextResponse)
def game_log():
    return _runner().export_log()


@app.get("/turrets")
def turrets():
    """Debug reveal of the hidden layout."""
    return {"turrets": [list(t) for t in _runner().env.reveal_turrets()]}


@app.get("/status")
def status():
    if runner is None:
        return {"active": False}
    return {
        "active": True,
        "round": runner.env.round,
        "done": runner.done,
        "winner": runner.env.winner.value if runner.env.winner else None,
    }
