"""Shared test fixtures and helpers."""
from typing import List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from engine.model import Army, Unit


def make_unit(name: str, attack: int = 10, health: int = 10, cost: int = 10,
              x: int = 0, y: int = 0, unit_type: Optional[str] = None) -> Unit:
    """Create a bare unit with sensible defaults."""
    return Unit(name=name, unit_type=unit_type or name, health=health, base_attack=attack,
                cost=cost, attack_type="melee", x=x, y=y)


class ScriptedProgram:
    """Attack capability test double: returns a fixed target and runs an optional effect."""

    def __init__(self, target: Optional[Unit] = None, effect=None):
        self.target = target
        self.effect = effect
        self.calls = 0

    def attack(self) -> Optional[Unit]:
        self.calls += 1
        if self.effect is not None:
            self.effect()
        return self.target


class RecordingLog:
    """Log sink test double."""

    def __init__(self):
        self.entries: List[tuple] = []

    def log_attack(self, attacker, target):
        self.entries.append((attacker, target))


@pytest.fixture
def log():
    return RecordingLog()


@pytest.fixture
def empty_army():
    return Army()


@pytest_asyncio.fixture
async def api_client():
    """HTTP client against the app, with no battle running before or after."""
    import api.app as app_module

    app_module.runner = None
    async with AsyncClient(transport=ASGITransport(app=app_module.app), base_url="http://test") as ac:
        yield ac
    await app_module.shutdown()
    app_module.runner = None
