from typing import Optional, Tuple
from fastapi import FastAPI, HTTPException
from engine.model import Army, BATTLEFIELD_GRID, UNIT_PROTOTYPES, Unit
from engine.preset import deploy, generate
from engine.programs import arm
from runtime.runner import BattleRunner
from .schemas import EventsResponse, PresetRequest, PresetResponse, StartRequest, UnitOut

app = FastAPI(title="Heroes Battle Core")
runner: BattleRunner | None = None

def _unit_out(u: Unit) -> UnitOut:
    return UnitOut(name=u.name, unit_type=u.unit_type, health=u.health, base_attack=u.base_attack,
                   cost=u.cost, attack_type=u.attack_type, x=u.x, y=u.y, alive=u.alive)

def _make_armies(seed: Optional[int], points: int) -> Tuple[Army, Army]:
    """Generate both armies from the default catalog and line them up on the battlefield."""
    player = generate(UNIT_PROTOTYPES, points, seed)
    computer = generate(UNIT_PROTOTYPES, points, None if seed is None else seed + 1)
    deploy(player, BATTLEFIELD_GRID)
    deploy(computer, BATTLEFIELD_GRID, mirror=True)

    def battlefield():
        return player.living() + computer.living()

    arm(player, computer, battlefield, attacks_left_to_right=True)
    arm(computer, player, battlefield, attacks_left_to_right=False)
    return player, computer

@app.get("/")
async def root():
    """API root endpoint."""
    return {"message": "Heroes Battle Core API - visit /docs for API documentation"}

@app.on_event("shutdown")
async def shutdown():
    """Stop the battle on app shutdown."""
    global runner
    if runner:
        await runner.stop()

@app.post("/battle/start")
async def start_battle(req: StartRequest):
    """Start a new battle with specified seed and army budget."""
    await shutdown()
    global runner
    player, computer = _make_armies(req.seed, req.points)
    runner = BattleRunner(player, computer, round_ms=500, time_compression=30.0)
    await runner.start()
    print(f"[API] Battle started: {len(player.units)} vs {len(computer.units)} units")
    return {"battle_id": "local", "state": runner.state.value}

@app.post("/preset", response_model=PresetResponse)
async def make_preset(req: PresetRequest):
    """Generate an army from the default catalog without starting a battle."""
    army = generate(UNIT_PROTOTYPES, req.points, req.seed)
    return PresetResponse(total_cost=army.total_cost(), units=[_unit_out(u) for u in army.units])

@app.get("/battle/local/state")
async def get_state():
    """Get current battle state snapshot."""
    if not runner:
        raise HTTPException(400, "Battle not started")
    units = await runner.snapshot()
    return {
        "state": runner.state.value,
        "round": runner.engine.round,
        "stalled": runner.engine.stalled,
        "units": [_unit_out(u).model_dump() for u in units],
    }

@app.get("/battle/local/events")
async def get_events(since: int = 0, limit: int = 500):
    """Get events since offset."""
    if not runner:
        raise HTTPException(400, "Battle not started")
    evts, next_offset = runner.events.since(since, limit)
    return EventsResponse(
        next_offset=next_offset,
        events=[{"kind": e.kind, "round": e.round, "data": e.data} for e in evts]
    )

@app.post("/battle/local/time-control")
async def set_time_control(time_compression: float):
    """Set battle pacing (1.0 = one round per round_ms, higher = faster)."""
    if not runner:
        raise HTTPException(400, "Battle not started")
    runner.set_time_compression(time_compression)
    return {"time_compression": runner.time_compression}

@app.get("/battle/local/time-control")
async def get_time_control():
    """Get current time compression setting."""
    if not runner:
        raise HTTPException(400, "Battle not started")
    return {"time_compression": runner.time_compression}
