"""World entities — snapshots of the room objects the regulator reasons about."""

from enum import Enum, IntEnum
from typing import Optional, Union
from pydantic import BaseModel, ConfigDict, Field


class ReturnCode(IntEnum):
    """Status codes returned by world commands."""
    OK = 0
    NOT_OWNER = -1
    NO_PATH = -2
    BUSY = -4
    NOT_FOUND = -5
    NOT_ENOUGH_RESOURCES = -6
    INVALID_TARGET = -7
    FULL = -8
    NOT_IN_RANGE = -9
    INVALID_ARGS = -10
    TIRED = -11
    NO_BODYPART = -12


class Action(str, Enum):
    """World commands a unit can issue."""
    ATTACK = "attack"
    BUILD = "build"
    HARVEST = "harvest"
    HEAL = "heal"
    MOVE = "move"
    REPAIR = "repair"
    TRANSFER = "transfer"
    UPGRADE = "upgrade"


class Terrain(str, Enum):
    PLAIN = "plain"
    SWAMP = "swamp"
    WALL = "wall"


class StructureType(str, Enum):
    CONTAINER = "container"
    EXTENSION = "extension"
    RAMPART = "rampart"
    ROAD = "road"
    SPAWN = "spawn"
    TOWER = "tower"
    WALL = "constructedWall"


# Structures that hold energy for spawning and defense
ENERGY_STORES = frozenset({StructureType.SPAWN, StructureType.EXTENSION, StructureType.TOWER})


class Position(BaseModel):
    """A tile inside a room."""

    model_config = ConfigDict(frozen=True)

    x: int = Field(ge=0, le=49)
    y: int = Field(ge=0, le=49)

    def range_to(self, other: "Position") -> int:
        """Chebyshev distance: diagonal steps cost the same as straight ones."""
        return max(abs(self.x - other.x), abs(self.y - other.y))

    def __repr__(self) -> str:
        return f"Position({self.x}, {self.y})"


class RoomObject(BaseModel):
    """Anything with an id and a position in a room."""

    id: str = Field(description="Stable object id")
    room: str = Field(description="Name of the room the object is in")
    pos: Position


class Creep(RoomObject):
    """A mobile unit. Own creeps are workers; others are hostiles."""

    name: str
    my: bool = True
    hits: int = Field(default=100, ge=0)
    hits_max: int = Field(default=100, gt=0)
    energy: int = Field(default=0, ge=0)
    energy_capacity: int = Field(default=50, ge=0)
    ticks_to_live: Optional[int] = Field(default=1500, description="None while spawning")
    spawning: bool = False
    fatigue: int = Field(default=0, ge=0)

    @property
    def free_capacity(self) -> int:
        return self.energy_capacity - self.energy

    @property
    def is_full(self) -> bool:
        return self.energy >= self.energy_capacity

    @property
    def is_empty(self) -> bool:
        return self.energy == 0


class Source(RoomObject):
    energy: int = Field(default=3000, ge=0)
    energy_capacity: int = Field(default=3000, gt=0)


class ConstructionSite(RoomObject):
    structure_type: StructureType
    progress: int = Field(default=0, ge=0)
    progress_total: int = Field(gt=0)

    @property
    def is_complete(self) -> bool:
        return self.progress >= self.progress_total


class Structure(RoomObject):
    """A built structure. Spawns, extensions and towers also carry an energy store."""

    structure_type: StructureType
    my: bool = True
    hits: int = Field(ge=0)
    hits_max: int = Field(gt=0)
    energy: Optional[int] = Field(default=None, ge=0)
    energy_capacity: Optional[int] = Field(default=None, ge=0)

    @property
    def has_store(self) -> bool:
        return self.energy_capacity is not None

    @property
    def free_capacity(self) -> int:
        if not self.has_store:
            return 0
        return self.energy_capacity - (self.energy or 0)


class Controller(RoomObject):
    my: bool = True
    level: int = Field(default=1, ge=0, le=8)
    progress: int = Field(default=0, ge=0)


Entity = Union[Creep, Source, ConstructionSite, Structure, Controller]
