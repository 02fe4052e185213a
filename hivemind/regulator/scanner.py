"""Offer scanner — discovers this tick's job offers in one room."""

from hivemind import constants
from hivemind.config import RegulatorConfig
from hivemind.errors import ScanError, WorldQueryError
from hivemind.models.entities import ENERGY_STORES, Position, Terrain
from hivemind.models.job import Job
from hivemind.models.job_offer import JobOffer
from hivemind.world.base import World


class OfferScanner:
    """Builds a fresh offer pool from world queries, one sub-scan per job kind."""

    def __init__(self, world: World, room: str, config: RegulatorConfig | None = None):
        self.world = world
        self.room = room
        self.config = config or RegulatorConfig()

    def scan(self) -> list[JobOffer]:
        """Return a complete pool, or raise ScanError if any world query fails."""
        offers: list[JobOffer] = []
        try:
            offers.extend(self.scan_attack_jobs())
            offers.extend(self.scan_build_jobs())
            offers.extend(self.scan_harvest_jobs())
            offers.extend(self.scan_heal_jobs())
            offers.extend(self.scan_maintain_jobs())
            offers.extend(self.scan_repair_jobs())
            offers.extend(self.scan_upgrade_jobs())
        except WorldQueryError as exc:
            raise ScanError(f"Couldn't scan {self.room}: {exc}") from exc
        return offers

    def get_free_spots(self, pos: Position, range_: int) -> int:
        """Count non-wall tiles within ``range_`` of ``pos``, clipped to the room."""
        y_min = max(pos.y - range_, 0)
        y_max = min(pos.y + range_, constants.ROOM_Y - 1)
        x_min = max(pos.x - range_, 0)
        x_max = min(pos.x + range_, constants.ROOM_X - 1)

        return sum(
            1
            for y in range(y_min, y_max + 1)
            for x in range(x_min, x_max + 1)
            if self.world.terrain(self.room, x, y) != Terrain.WALL
        )

    # ── Per-kind scans ────────────────────────────────────────────────

    def scan_attack_jobs(self) -> list[JobOffer]:
        return [
            JobOffer(job=Job.attack(c), available_places=self.config.attack_places)
            for c in self.world.hostile_creeps(self.room)
        ]

    def scan_build_jobs(self) -> list[JobOffer]:
        return [
            JobOffer(
                job=Job.build(site),
                available_places=self.get_free_spots(site.pos, constants.RANGE_BUILD),
            )
            for site in self.world.construction_sites(self.room)
        ]

    def scan_harvest_jobs(self) -> list[JobOffer]:
        return [
            JobOffer(
                job=Job.harvest(source),
                available_places=self.get_free_spots(source.pos, constants.RANGE_HARVEST),
            )
            for source in self.world.sources(self.room)
            if source.energy != 0
        ]

    def scan_heal_jobs(self) -> list[JobOffer]:
        return [
            JobOffer(job=Job.heal(c), available_places=self.config.heal_places)
            for c in self.world.my_creeps(self.room)
            if c.hits < c.hits_max
        ]

    def scan_maintain_jobs(self) -> list[JobOffer]:
        return [
            JobOffer(
                job=Job.maintain(s),
                available_places=self.get_free_spots(s.pos, constants.RANGE_TRANSFER),
            )
            for s in self.world.structures(self.room)
            if s.structure_type in ENERGY_STORES and s.has_store and s.free_capacity != 0
        ]

    def scan_repair_jobs(self) -> list[JobOffer]:
        # Strictly below room capacity × multiplier
        limit = self.world.energy_capacity_available(self.room) * self.config.repair_multiplier
        return [
            JobOffer(job=Job.repair(s), available_places=self.config.repair_places)
            for s in self.world.structures(self.room)
            if s.hits != 0 and s.hits < s.hits_max and s.hits < limit
        ]

    def scan_upgrade_jobs(self) -> list[JobOffer]:
        controller = self.world.controller(self.room)
        if controller is None:
            return []
        spots = self.get_free_spots(controller.pos, constants.RANGE_UPGRADE_CONTROLLER)
        return [JobOffer(job=Job.upgrade(controller), available_places=spots)]
