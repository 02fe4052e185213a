"""Job model — one unit of work bound to a single target in the world.

A job is a closed tagged variant: the ``kind`` decides which target type it
holds and therefore which accessors are valid. Asking an ``ATTACK`` job for its
source is a bug in the assignment logic, so accessors raise ``JobKindMismatch``
instead of returning a default.

Jobs never hold live objects. They keep the target id and the position the
target had when the job was offered; accessors re-resolve the id through the
world and return ``None`` when the target is gone.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Optional
from pydantic import BaseModel, ConfigDict, Field

from hivemind import constants
from hivemind.errors import JobKindMismatch
from hivemind.models.entities import (
    ConstructionSite,
    Controller,
    Creep,
    Position,
    RoomObject,
    Source,
    Structure,
)

if TYPE_CHECKING:
    from hivemind.world.base import World


class JobKind(str, Enum):
    ATTACK = "attack"
    BUILD = "build"
    HARVEST = "harvest"
    HEAL = "heal"
    MAINTAIN = "maintain"
    REPAIR = "repair"
    UPGRADE = "upgrade"


class TargetKind(str, Enum):
    CREEP = "creep"
    CONSTRUCTION_SITE = "construction_site"
    SOURCE = "source"
    STRUCTURE = "structure"
    CONTROLLER = "controller"


_PRIORITY: dict[JobKind, int] = {
    JobKind.ATTACK: constants.PRIORITY_ATTACK,
    JobKind.BUILD: constants.PRIORITY_BUILDING,
    JobKind.HARVEST: constants.PRIORITY_HARVESTING,
    JobKind.HEAL: constants.PRIORITY_HEALING,
    JobKind.MAINTAIN: constants.PRIORITY_MAINTAINING,
    JobKind.REPAIR: constants.PRIORITY_REPAIRING,
    JobKind.UPGRADE: constants.PRIORITY_UPGRADING,
}

_INTERACTION_RANGE: dict[JobKind, int] = {
    JobKind.ATTACK: constants.RANGE_ATTACK,
    JobKind.BUILD: constants.RANGE_BUILD,
    JobKind.HARVEST: constants.RANGE_HARVEST,
    JobKind.HEAL: constants.RANGE_HEAL,
    JobKind.MAINTAIN: constants.RANGE_TRANSFER,
    JobKind.REPAIR: constants.RANGE_REPAIR,
    JobKind.UPGRADE: constants.RANGE_UPGRADE_CONTROLLER,
}

_TARGET_KIND: dict[JobKind, TargetKind] = {
    JobKind.ATTACK: TargetKind.CREEP,
    JobKind.BUILD: TargetKind.CONSTRUCTION_SITE,
    JobKind.HARVEST: TargetKind.SOURCE,
    JobKind.HEAL: TargetKind.CREEP,
    JobKind.MAINTAIN: TargetKind.STRUCTURE,
    JobKind.REPAIR: TargetKind.STRUCTURE,
    JobKind.UPGRADE: TargetKind.CONTROLLER,
}


class Job(BaseModel):
    """An immutable unit of work: what to do, and to which target."""

    model_config = ConfigDict(frozen=True)

    kind: JobKind
    target_id: str = Field(description="Id of the targeted room object")
    target_pos: Position = Field(description="Target position when the job was offered")

    # ── Construction ──────────────────────────────────────────────────

    @classmethod
    def attack(cls, creep: Creep) -> Job:
        return cls._for(JobKind.ATTACK, creep)

    @classmethod
    def build(cls, site: ConstructionSite) -> Job:
        return cls._for(JobKind.BUILD, site)

    @classmethod
    def harvest(cls, source: Source) -> Job:
        return cls._for(JobKind.HARVEST, source)

    @classmethod
    def heal(cls, creep: Creep) -> Job:
        return cls._for(JobKind.HEAL, creep)

    @classmethod
    def maintain(cls, structure: Structure) -> Job:
        return cls._for(JobKind.MAINTAIN, structure)

    @classmethod
    def repair(cls, structure: Structure) -> Job:
        return cls._for(JobKind.REPAIR, structure)

    @classmethod
    def upgrade(cls, controller: Controller) -> Job:
        return cls._for(JobKind.UPGRADE, controller)

    @classmethod
    def _for(cls, kind: JobKind, target: RoomObject) -> Job:
        return cls(kind=kind, target_id=target.id, target_pos=target.pos)

    # ── Scheduling attributes ─────────────────────────────────────────

    def priority(self) -> int:
        """Fixed per kind; lower values are scheduled first."""
        return _PRIORITY[self.kind]

    def range_required_to(self, position: Position) -> int:
        """Range from ``position`` to the target."""
        return position.range_to(self.target_pos)

    @property
    def interaction_range(self) -> int:
        """Range at which this job's action takes effect."""
        return _INTERACTION_RANGE[self.kind]

    def target_kind(self) -> TargetKind:
        return _TARGET_KIND[self.kind]

    # ── Target accessors ──────────────────────────────────────────────

    def creep(self, world: World) -> Optional[Creep]:
        self._require("creep", JobKind.ATTACK, JobKind.HEAL)
        return self._resolve(world, Creep)

    def construction_site(self, world: World) -> Optional[ConstructionSite]:
        self._require("construction site", JobKind.BUILD)
        return self._resolve(world, ConstructionSite)

    def source(self, world: World) -> Optional[Source]:
        self._require("source", JobKind.HARVEST)
        return self._resolve(world, Source)

    def structure(self, world: World) -> Optional[Structure]:
        self._require("structure", JobKind.MAINTAIN, JobKind.REPAIR)
        return self._resolve(world, Structure)

    def controller(self, world: World) -> Optional[Controller]:
        self._require("controller", JobKind.UPGRADE)
        return self._resolve(world, Controller)

    def _require(self, what: str, *kinds: JobKind) -> None:
        if self.kind not in kinds:
            raise JobKindMismatch(f"Tried to get {what} when job is a {self.kind.value}")

    def _resolve(self, world: World, expected: type):
        obj = world.get_object(self.target_id)
        return obj if isinstance(obj, expected) else None

    def __str__(self) -> str:
        return f"{self.kind.value}({self.target_id})"
