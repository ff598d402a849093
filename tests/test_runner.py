"""Test the async battle runner."""
import pytest

from engine.model import Army, BATTLEFIELD_GRID, BattleState, UNIT_PROTOTYPES
from engine.preset import deploy, generate
from engine.programs import arm
from runtime.runner import BattleRunner
from tests.conftest import ScriptedProgram, make_unit


@pytest.mark.asyncio
async def test_runner_plays_battle_to_the_end():
    left = deploy(generate(UNIT_PROTOTYPES, 60, 4), BATTLEFIELD_GRID)
    right = deploy(generate(UNIT_PROTOTYPES, 60, 5), BATTLEFIELD_GRID, mirror=True)

    def battlefield():
        return left.living() + right.living()

    arm(left, right, battlefield, attacks_left_to_right=True)
    arm(right, left, battlefield, attacks_left_to_right=False)
    runner = BattleRunner(left, right, round_ms=0, max_rounds=200)
    await runner.start()

    rounds = await runner.wait()
    assert rounds > 0
    assert runner.state is BattleState.DONE
    assert not runner.engine.stalled
    assert not (left.has_living() and right.has_living())
    events, _ = runner.events.since(0, 100000)
    assert events[0].round == 1
    assert events[-1].round == rounds


@pytest.mark.asyncio
async def test_runner_round_limit_leaves_battle_open():
    a = make_unit("a")
    b = make_unit("b")
    a.program = ScriptedProgram()
    b.program = ScriptedProgram()
    runner = BattleRunner(Army([a]), Army([b]), round_ms=0, max_rounds=3)
    await runner.start()

    assert await runner.wait() == 3
    assert runner.engine.stalled
    assert runner.state is BattleState.ROUND_IN_PROGRESS
    assert len(runner.events) == 6
    assert [e.kind for e in runner.events.since(0)[0]] == ["Idle"] * 6
