"""Regulator — one room's scan-and-distribute cycle."""

from dataclasses import dataclass, field
from typing import Optional

from hivemind.config import RegulatorConfig
from hivemind.errors import ScanError, UnitError
from hivemind.logger import get_logger
from hivemind.models.entities import Creep, Position, Structure
from hivemind.models.job_offer import JobOffer
from hivemind.models.unit import UnitKind, UnitState
from hivemind.regulator.scanner import OfferScanner
from hivemind.units.base import Turn, UnitController
from hivemind.units.creep import CreepController
from hivemind.units.tower import TowerController
from hivemind.world.base import World

log = get_logger()


@dataclass
class TickReport:
    """Everything a regulator did in one tick."""
    room: str
    tick: int
    scanned: bool = False
    scan_failed: bool = False
    offers: int = 0
    turns: list[Turn] = field(default_factory=list)
    errors: list[UnitError] = field(default_factory=list)


class Regulator:
    """Owns a room's unit states and offer pool and drives creeps, then towers.

    The pool is rebuilt every ``config.scan_interval`` ticks and reused in
    between; units keep or release their jobs against that snapshot.
    """

    def __init__(self, room: str, world: World, config: RegulatorConfig | None = None):
        self.room = room
        self.world = world
        self.config = config or RegulatorConfig()

        self.creeps: dict[str, UnitState] = {}
        self.towers: dict[str, UnitState] = {}
        self.offers: list[JobOffer] = []
        self.last_scan: Optional[int] = None

        self._scanner = OfferScanner(world, room, self.config)
        self._creep_controller = CreepController(world, self.config)
        self._tower_controller = TowerController(world, self.config)

    # ── Scan ──────────────────────────────────────────────────────────

    def scan(self) -> None:
        """Replace the offer pool. On ScanError the previous pool is kept."""
        self.offers = self._scanner.scan()
        self.last_scan = self.world.time
        log.info("%s: scanned %d offers", self.room, len(self.offers), tick=self.world.time)

    def get_free_spots(self, pos: Position, range_: int) -> int:
        return self._scanner.get_free_spots(pos, range_)

    def scan_due(self, tick: int) -> bool:
        return self.last_scan is None or tick - self.last_scan >= self.config.scan_interval

    # ── Distribute ────────────────────────────────────────────────────

    def run_tick(self) -> TickReport:
        """Scan if due, then give every unit its turn."""
        tick = self.world.time
        report = TickReport(room=self.room, tick=tick)

        if self.scan_due(tick):
            try:
                self.scan()
                report.scanned = True
            except ScanError as exc:
                log.warning("%s: %s; skipping distribution", self.room, exc, tick=tick)
                report.scan_failed = True
                return report

        report.offers = len(self.offers)
        self.distribute_jobs(report)
        return report

    def distribute_jobs(self, report: TickReport | None = None) -> TickReport:
        """Sync unit maps with the world and run each creep, then each tower."""
        report = report or TickReport(room=self.room, tick=self.world.time)

        creeps = self.world.my_creeps(self.room)
        self.creeps = self._sync(self.creeps, {c.name: c for c in creeps}, UnitKind.CREEP)
        for creep in creeps:
            if creep.spawning:
                continue
            self._turn(self._creep_controller, self.creeps[creep.name], creep, report)

        towers = self.world.towers(self.room)
        self.towers = self._sync(self.towers, {t.id: t for t in towers}, UnitKind.TOWER)
        for tower in towers:
            self._turn(self._tower_controller, self.towers[tower.id], tower, report)

        return report

    def _turn(
        self,
        controller: UnitController,
        state: UnitState,
        unit: Creep | Structure,
        report: TickReport,
    ) -> None:
        try:
            report.turns.append(controller.step(state, unit, self.offers))
        except UnitError as exc:
            log.warning("%s: %s", self.room, exc, tick=report.tick)
            report.errors.append(exc)

    def _sync(
        self,
        states: dict[str, UnitState],
        live: dict[str, Creep | Structure],
        kind: UnitKind,
    ) -> dict[str, UnitState]:
        """Drop states of vanished units and restore new ones from memory."""
        synced: dict[str, UnitState] = {}
        for name in live:
            state = states.get(name)
            if state is None:
                state = UnitState.restore(name, kind, self.world.memory(name))
                log.debug("%s: tracking %s %s", self.room, kind.value, state, tick=self.world.time)
            synced[name] = state
        return synced

    def __repr__(self) -> str:
        return (
            f"Regulator(room={self.room!r}, creeps={len(self.creeps)}, "
            f"towers={len(self.towers)}, offers={len(self.offers)})"
        )
