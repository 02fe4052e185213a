"""Simulated world — an in-memory implementation of the World interface.

Implements just enough of the game rules for the regulator to be exercised:
Chebyshev ranges, energy stores, hits, one greedy step per move, creep aging,
source regeneration and construction sites turning into structures.
"""

from typing import Optional

from hivemind import constants
from hivemind.errors import WorldQueryError
from hivemind.models.entities import (
    ENERGY_STORES,
    Action,
    ConstructionSite,
    Controller,
    Creep,
    Entity,
    Position,
    ReturnCode,
    Source,
    Structure,
    StructureType,
    Terrain,
)
from hivemind.world.base import World

# Hits and energy capacity of structures finished from construction sites
STRUCTURE_STATS: dict[StructureType, tuple[int, Optional[int]]] = {
    StructureType.CONTAINER: (250_000, None),
    StructureType.EXTENSION: (1_000, 50),
    StructureType.RAMPART: (1, None),
    StructureType.ROAD: (5_000, None),
    StructureType.SPAWN: (5_000, 300),
    StructureType.TOWER: (3_000, 1_000),
    StructureType.WALL: (1, None),
}

# Neighbour offsets, tried in this order
_STEPS = [(-1, -1), (0, -1), (1, -1), (-1, 0), (1, 0), (-1, 1), (0, 1), (1, 1)]


class SimulatedWorld(World):
    """Deterministic single-player world kept entirely in memory."""

    def __init__(self, time: int = 0):
        self._time = time
        self._walls: dict[str, set[tuple[int, int]]] = {}
        self._objects: dict[str, Entity] = {}
        self._memory: dict[str, dict] = {}
        self._forced: dict[tuple[str, Action], ReturnCode] = {}
        self._broken_rooms: set[str] = set()
        self.command_log: list[tuple[str, Action, ReturnCode]] = []

    # ── Setup ─────────────────────────────────────────────────────────

    def add_room(self, name: str, walls: set[tuple[int, int]] | None = None) -> None:
        self._walls[name] = set(walls or ())

    def add(self, obj: Entity) -> Entity:
        if obj.room not in self._walls:
            self.add_room(obj.room)
        self._objects[obj.id] = obj
        return obj

    def remove(self, object_id: str) -> None:
        self._objects.pop(object_id, None)

    def remove_room(self, name: str) -> None:
        """Lose visibility of a room and everything in it."""
        self._walls.pop(name, None)
        self._broken_rooms.discard(name)
        self._objects = {k: o for k, o in self._objects.items() if o.room != name}

    def force_result(self, unit_id: str, action: Action, code: ReturnCode) -> None:
        """Make every ``action`` by ``unit_id`` return ``code`` without effect."""
        self._forced[(unit_id, action)] = code

    def fail_queries(self, room: str) -> None:
        """Make enumeration queries for ``room`` raise WorldQueryError."""
        self._broken_rooms.add(room)

    def restore_queries(self, room: str) -> None:
        self._broken_rooms.discard(room)

    # ── Queries ───────────────────────────────────────────────────────

    @property
    def time(self) -> int:
        return self._time

    def rooms(self) -> list[str]:
        return list(self._walls)

    def my_creeps(self, room: str) -> list[Creep]:
        return [c for c in self._in_room(room, Creep) if c.my]

    def hostile_creeps(self, room: str) -> list[Creep]:
        return [c for c in self._in_room(room, Creep) if not c.my]

    def towers(self, room: str) -> list[Structure]:
        return [
            s for s in self._in_room(room, Structure)
            if s.my and s.structure_type == StructureType.TOWER
        ]

    def construction_sites(self, room: str) -> list[ConstructionSite]:
        return self._in_room(room, ConstructionSite)

    def sources(self, room: str) -> list[Source]:
        return self._in_room(room, Source)

    def structures(self, room: str) -> list[Structure]:
        return self._in_room(room, Structure)

    def controller(self, room: str) -> Optional[Controller]:
        controllers = self._in_room(room, Controller)
        return controllers[0] if controllers else None

    def terrain(self, room: str, x: int, y: int) -> Terrain:
        if room not in self._walls:
            raise WorldQueryError(f"Room {room} is not visible")
        return Terrain.WALL if (x, y) in self._walls[room] else Terrain.PLAIN

    def energy_capacity_available(self, room: str) -> int:
        return sum(
            s.energy_capacity or 0
            for s in self._in_room(room, Structure)
            if s.structure_type in (StructureType.SPAWN, StructureType.EXTENSION)
        )

    def get_object(self, object_id: str) -> Optional[Entity]:
        return self._objects.get(object_id)

    def _in_room(self, room: str, kind: type) -> list:
        if room not in self._walls or room in self._broken_rooms:
            raise WorldQueryError(f"Room {room} is not visible")
        return [o for o in self._objects.values() if o.room == room and isinstance(o, kind)]

    # ── Commands ──────────────────────────────────────────────────────

    def harvest(self, creep: Creep, source: Source) -> ReturnCode:
        code = self._forced_or(creep, Action.HARVEST)
        if code is None:
            if creep.pos.range_to(source.pos) > constants.RANGE_HARVEST:
                code = ReturnCode.NOT_IN_RANGE
            elif source.energy == 0:
                code = ReturnCode.NOT_ENOUGH_RESOURCES
            else:
                amount = min(constants.HARVEST_POWER, source.energy, creep.free_capacity)
                source.energy -= amount
                creep.energy += amount
                code = ReturnCode.OK
        return self._record(creep.id, Action.HARVEST, code)

    def build(self, creep: Creep, site: ConstructionSite) -> ReturnCode:
        code = self._forced_or(creep, Action.BUILD)
        if code is None:
            if creep.pos.range_to(site.pos) > constants.RANGE_BUILD:
                code = ReturnCode.NOT_IN_RANGE
            elif creep.is_empty:
                code = ReturnCode.NOT_ENOUGH_RESOURCES
            else:
                amount = min(constants.BUILD_POWER, creep.energy, site.progress_total - site.progress)
                site.progress += amount
                creep.energy -= amount
                code = ReturnCode.OK
        return self._record(creep.id, Action.BUILD, code)

    def repair(self, unit: Creep | Structure, target: Structure) -> ReturnCode:
        code = self._forced_or(unit, Action.REPAIR)
        if code is None:
            if isinstance(unit, Structure):
                code = self._tower_spend(unit)
                if code == ReturnCode.OK:
                    target.hits = min(target.hits_max, target.hits + constants.TOWER_REPAIR_POWER)
            elif unit.pos.range_to(target.pos) > constants.RANGE_REPAIR:
                code = ReturnCode.NOT_IN_RANGE
            elif unit.is_empty:
                code = ReturnCode.NOT_ENOUGH_RESOURCES
            else:
                unit.energy -= 1
                target.hits = min(target.hits_max, target.hits + constants.REPAIR_POWER)
                code = ReturnCode.OK
        return self._record(unit.id, Action.REPAIR, code)

    def transfer_energy(self, creep: Creep, target: Structure) -> ReturnCode:
        code = self._forced_or(creep, Action.TRANSFER)
        if code is None:
            if not target.has_store:
                code = ReturnCode.INVALID_TARGET
            elif creep.pos.range_to(target.pos) > constants.RANGE_TRANSFER:
                code = ReturnCode.NOT_IN_RANGE
            elif creep.is_empty:
                code = ReturnCode.NOT_ENOUGH_RESOURCES
            elif target.free_capacity == 0:
                code = ReturnCode.FULL
            else:
                amount = min(creep.energy, target.free_capacity)
                creep.energy -= amount
                target.energy = (target.energy or 0) + amount
                code = ReturnCode.OK
        return self._record(creep.id, Action.TRANSFER, code)

    def upgrade_controller(self, creep: Creep, controller: Controller) -> ReturnCode:
        code = self._forced_or(creep, Action.UPGRADE)
        if code is None:
            if not controller.my:
                code = ReturnCode.NOT_OWNER
            elif creep.pos.range_to(controller.pos) > constants.RANGE_UPGRADE_CONTROLLER:
                code = ReturnCode.NOT_IN_RANGE
            elif creep.is_empty:
                code = ReturnCode.NOT_ENOUGH_RESOURCES
            else:
                amount = min(constants.UPGRADE_POWER, creep.energy)
                creep.energy -= amount
                controller.progress += amount
                code = ReturnCode.OK
        return self._record(creep.id, Action.UPGRADE, code)

    def attack(self, unit: Creep | Structure, target: Creep) -> ReturnCode:
        code = self._forced_or(unit, Action.ATTACK)
        if code is None:
            if isinstance(unit, Structure):
                code = self._tower_spend(unit)
                power = constants.TOWER_ATTACK_POWER
            elif unit.pos.range_to(target.pos) > constants.RANGE_ATTACK:
                code = ReturnCode.NOT_IN_RANGE
            else:
                code = ReturnCode.OK
                power = constants.ATTACK_POWER
            if code == ReturnCode.OK:
                target.hits = max(0, target.hits - power)
                if target.hits == 0:
                    self.remove(target.id)
        return self._record(unit.id, Action.ATTACK, code)

    def heal(self, unit: Creep | Structure, target: Creep) -> ReturnCode:
        code = self._forced_or(unit, Action.HEAL)
        if code is None:
            if isinstance(unit, Structure):
                code = self._tower_spend(unit)
            elif unit.pos.range_to(target.pos) > constants.RANGE_HEAL:
                code = ReturnCode.NOT_IN_RANGE
            else:
                code = ReturnCode.OK
            if code == ReturnCode.OK:
                target.hits = min(target.hits_max, target.hits + constants.HEAL_POWER)
        return self._record(unit.id, Action.HEAL, code)

    def move_to(self, creep: Creep, target: Position) -> ReturnCode:
        code = self._forced_or(creep, Action.MOVE)
        if code is None:
            code = self._step(creep, target)
        return self._record(creep.id, Action.MOVE, code)

    def _step(self, creep: Creep, target: Position) -> ReturnCode:
        if creep.fatigue > 0:
            return ReturnCode.TIRED

        current = creep.pos.range_to(target)
        if current == 0:
            return ReturnCode.OK

        walls = self._walls[creep.room]
        for dx, dy in _STEPS:
            x, y = creep.pos.x + dx, creep.pos.y + dy
            if not (0 <= x < constants.ROOM_X and 0 <= y < constants.ROOM_Y):
                continue
            if (x, y) in walls:
                continue
            candidate = Position(x=x, y=y)
            if candidate.range_to(target) < current:
                creep.pos = candidate
                return ReturnCode.OK

        return ReturnCode.NO_PATH

    def _tower_spend(self, tower: Structure) -> ReturnCode:
        if (tower.energy or 0) < constants.TOWER_ENERGY_COST:
            return ReturnCode.NOT_ENOUGH_RESOURCES
        tower.energy -= constants.TOWER_ENERGY_COST
        return ReturnCode.OK

    def _forced_or(self, unit: Creep | Structure, action: Action) -> Optional[ReturnCode]:
        return self._forced.get((unit.id, action))

    def _record(self, unit_id: str, action: Action, code: ReturnCode) -> ReturnCode:
        self.command_log.append((unit_id, action, code))
        return code

    # ── Memory ────────────────────────────────────────────────────────

    def memory(self, name: str) -> dict:
        return self._memory.setdefault(name, {})

    def memory_names(self) -> list[str]:
        return list(self._memory)

    def delete_memory(self, name: str) -> None:
        self._memory.pop(name, None)

    # ── Time ──────────────────────────────────────────────────────────

    def advance(self) -> None:
        """End the tick: age creeps, regenerate sources, finish construction."""
        self._time += 1

        for obj in list(self._objects.values()):
            if isinstance(obj, Creep):
                obj.spawning = False
                obj.fatigue = 0
                if obj.ticks_to_live is not None:
                    obj.ticks_to_live -= 1
                if obj.hits == 0 or (obj.ticks_to_live is not None and obj.ticks_to_live <= 0):
                    self.remove(obj.id)
            elif isinstance(obj, Source):
                if self._time % constants.ENERGY_REGEN_TIME == 0:
                    obj.energy = obj.energy_capacity
            elif isinstance(obj, ConstructionSite) and obj.is_complete:
                self._finish(obj)

    def _finish(self, site: ConstructionSite) -> None:
        hits_max, capacity = STRUCTURE_STATS[site.structure_type]
        starts_damaged = site.structure_type in (StructureType.WALL, StructureType.RAMPART)
        self.remove(site.id)
        self.add(Structure(
            id=site.id,
            room=site.room,
            pos=site.pos,
            structure_type=site.structure_type,
            hits=1 if starts_damaged else hits_max,
            hits_max=hits_max,
            energy=0 if site.structure_type in ENERGY_STORES else None,
            energy_capacity=capacity,
        ))
