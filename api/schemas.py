from typing import Optional
from pydantic import BaseModel, Field

class StartRequest(BaseModel):
    """Battle start request schema."""
    seed: Optional[int] = 42
    points: int = Field(default=300, ge=0)

class PresetRequest(BaseModel):
    """Army preset request schema."""
    points: int
    seed: Optional[int] = None

class UnitOut(BaseModel):
    """Placed unit schema."""
    name: str
    unit_type: str
    health: int
    base_attack: int
    cost: int
    attack_type: str
    x: int
    y: int
    alive: bool

class PresetResponse(BaseModel):
    """Army preset response schema."""
    total_cost: int
    units: list[UnitOut]

class EventsResponse(BaseModel):
    """Events response schema."""
    next_offset: int
    events: list[dict]
