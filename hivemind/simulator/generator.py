"""Scenario generator — builds reproducible rooms for simulation."""

import random

from hivemind import constants
from hivemind.models.entities import (
    ConstructionSite,
    Controller,
    Creep,
    Position,
    Source,
    Structure,
    StructureType,
)
from hivemind.simulator.world import SimulatedWorld


class ScenarioGenerator:
    """Generates deterministic rooms using a seeded RNG."""

    def __init__(self, seed: int = 42):
        self.rng = random.Random(seed)
        self._object_counter = 0

    def generate_world(
        self,
        num_rooms: int = 1,
        num_creeps: int = 6,
        num_sources: int = 2,
        num_extensions: int = 3,
        num_sites: int = 3,
        num_damaged: int = 3,
        num_hostiles: int = 0,
        with_tower: bool = True,
        wall_density: float = 0.08,
    ) -> SimulatedWorld:
        """Generate a world with ``num_rooms`` populated rooms named W1N1, W2N1, ..."""
        world = SimulatedWorld()
        for i in range(num_rooms):
            self.populate_room(
                world,
                name=f"W{i + 1}N1",
                num_creeps=num_creeps,
                num_sources=num_sources,
                num_extensions=num_extensions,
                num_sites=num_sites,
                num_damaged=num_damaged,
                num_hostiles=num_hostiles,
                with_tower=with_tower,
                wall_density=wall_density,
            )
        return world

    def populate_room(
        self,
        world: SimulatedWorld,
        name: str,
        num_creeps: int = 6,
        num_sources: int = 2,
        num_extensions: int = 3,
        num_sites: int = 3,
        num_damaged: int = 3,
        num_hostiles: int = 0,
        with_tower: bool = True,
        wall_density: float = 0.08,
    ) -> None:
        """Scatter walls, then place structures and creeps on free, distinct tiles."""
        walls = {
            (x, y)
            for x in range(constants.ROOM_X)
            for y in range(constants.ROOM_Y)
            if x in (0, 49) or y in (0, 49) or self.rng.random() < wall_density
        }
        world.add_room(name, walls)
        taken: set[tuple[int, int]] = set()

        def free_tile() -> Position:
            while True:
                x, y = self.rng.randint(2, 47), self.rng.randint(2, 47)
                if (x, y) not in walls and (x, y) not in taken:
                    taken.add((x, y))
                    return Position(x=x, y=y)

        world.add(Structure(
            id=self._next_id("spawn"), room=name, pos=free_tile(),
            structure_type=StructureType.SPAWN, hits=5000, hits_max=5000,
            energy=self.rng.randint(0, 300), energy_capacity=300,
        ))
        world.add(Controller(id=self._next_id("controller"), room=name, pos=free_tile()))

        for _ in range(num_sources):
            world.add(Source(id=self._next_id("source"), room=name, pos=free_tile()))

        for _ in range(num_extensions):
            world.add(Structure(
                id=self._next_id("extension"), room=name, pos=free_tile(),
                structure_type=StructureType.EXTENSION, hits=1000, hits_max=1000,
                energy=self.rng.choice([0, 0, 50]), energy_capacity=50,
            ))

        for _ in range(num_sites):
            structure_type = self.rng.choice([StructureType.ROAD, StructureType.EXTENSION])
            world.add(ConstructionSite(
                id=self._next_id("site"), room=name, pos=free_tile(),
                structure_type=structure_type,
                progress_total=300 if structure_type == StructureType.ROAD else 3000,
            ))

        for _ in range(num_damaged):
            world.add(Structure(
                id=self._next_id("road"), room=name, pos=free_tile(),
                structure_type=StructureType.ROAD,
                hits=self.rng.randint(100, 2500), hits_max=5000,
            ))

        if with_tower:
            world.add(Structure(
                id=self._next_id("tower"), room=name, pos=free_tile(),
                structure_type=StructureType.TOWER, hits=3000, hits_max=3000,
                energy=self.rng.randint(200, 1000), energy_capacity=1000,
            ))

        for _ in range(num_creeps):
            creep_name = self._next_id("worker")
            world.add(Creep(
                id=creep_name, name=creep_name, room=name, pos=free_tile(),
                energy=self.rng.choice([0, 0, 25, 50]), energy_capacity=50,
                ticks_to_live=self.rng.randint(300, constants.CREEP_LIFE_TIME),
            ))

        for _ in range(num_hostiles):
            hostile_name = self._next_id("invader")
            world.add(Creep(
                id=hostile_name, name=hostile_name, room=name, pos=free_tile(),
                my=False, hits=self.rng.randint(300, 1500), hits_max=1500,
            ))

    def _next_id(self, prefix: str) -> str:
        self._object_counter += 1
        return f"{prefix}-{self._object_counter:03d}"
