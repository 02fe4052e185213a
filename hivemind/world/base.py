"""World interface — the query/command layer the regulator runs against.

Implementations wrap the host game (or, in tests and simulations, the
in-memory ``SimulatedWorld``). Queries may raise ``WorldQueryError``; commands
never raise for game-rule failures and report them through ``ReturnCode``.
"""

from abc import ABC, abstractmethod
from typing import Optional

from hivemind.models.entities import (
    ConstructionSite,
    Controller,
    Creep,
    Entity,
    Position,
    ReturnCode,
    Source,
    Structure,
    Terrain,
)


class World(ABC):
    """Read/command access to the game world for one player."""

    # ── Enumeration ───────────────────────────────────────────────────

    @property
    @abstractmethod
    def time(self) -> int:
        """Current game tick."""
        ...

    @abstractmethod
    def rooms(self) -> list[str]:
        """Names of the rooms currently visible and controlled by us."""
        ...

    @abstractmethod
    def my_creeps(self, room: str) -> list[Creep]:
        ...

    @abstractmethod
    def towers(self, room: str) -> list[Structure]:
        """Our towers in the room."""
        ...

    @abstractmethod
    def hostile_creeps(self, room: str) -> list[Creep]:
        ...

    @abstractmethod
    def construction_sites(self, room: str) -> list[ConstructionSite]:
        ...

    @abstractmethod
    def sources(self, room: str) -> list[Source]:
        ...

    @abstractmethod
    def structures(self, room: str) -> list[Structure]:
        ...

    @abstractmethod
    def controller(self, room: str) -> Optional[Controller]:
        ...

    @abstractmethod
    def terrain(self, room: str, x: int, y: int) -> Terrain:
        ...

    @abstractmethod
    def energy_capacity_available(self, room: str) -> int:
        """Total energy capacity of the room's spawns and extensions."""
        ...

    @abstractmethod
    def get_object(self, object_id: str) -> Optional[Entity]:
        """Resolve an id to the live object, or None if it no longer exists."""
        ...

    # ── Commands ──────────────────────────────────────────────────────

    @abstractmethod
    def harvest(self, creep: Creep, source: Source) -> ReturnCode:
        ...

    @abstractmethod
    def build(self, creep: Creep, site: ConstructionSite) -> ReturnCode:
        ...

    @abstractmethod
    def repair(self, unit: Creep | Structure, target: Structure) -> ReturnCode:
        """Repair with a creep or a tower."""
        ...

    @abstractmethod
    def transfer_energy(self, creep: Creep, target: Structure) -> ReturnCode:
        """Transfer all carried energy the target can take."""
        ...

    @abstractmethod
    def upgrade_controller(self, creep: Creep, controller: Controller) -> ReturnCode:
        ...

    @abstractmethod
    def attack(self, unit: Creep | Structure, target: Creep) -> ReturnCode:
        ...

    @abstractmethod
    def heal(self, unit: Creep | Structure, target: Creep) -> ReturnCode:
        ...

    @abstractmethod
    def move_to(self, creep: Creep, target: Position) -> ReturnCode:
        """Take one step toward ``target``."""
        ...

    # ── Persistent memory ─────────────────────────────────────────────

    @abstractmethod
    def memory(self, name: str) -> dict:
        """Mutable memory dict for a unit, created empty on first access."""
        ...

    @abstractmethod
    def memory_names(self) -> list[str]:
        ...

    @abstractmethod
    def delete_memory(self, name: str) -> None:
        ...
