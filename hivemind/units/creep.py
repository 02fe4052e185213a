"""Creep controller — per-job execution contracts for mobile workers."""

from hivemind.config import RegulatorConfig
from hivemind.errors import CommandError, NoControllerError
from hivemind.logger import get_logger
from hivemind.models.entities import Action, Creep, Position, ReturnCode
from hivemind.models.job import Job, JobKind
from hivemind.schedulers.creep import CreepPolicy
from hivemind.units.base import Outcome, UnitController
from hivemind.world.base import World

log = get_logger()


class CreepController(UnitController):
    """Executes held jobs for creeps, moving toward targets that are out of range."""

    def __init__(self, world: World, config: RegulatorConfig | None = None):
        config = config or RegulatorConfig()
        super().__init__(world, CreepPolicy(world, config), config)

    def execute(self, job: Job, creep: Creep) -> Outcome:
        match job.kind:
            case JobKind.HARVEST:
                return self._harvest(job, creep)
            case JobKind.BUILD:
                return self._build(job, creep)
            case JobKind.MAINTAIN:
                return self._maintain(job, creep)
            case JobKind.REPAIR:
                return self._repair(job, creep)
            case JobKind.UPGRADE:
                return self._upgrade(job, creep)
            case JobKind.ATTACK:
                return self._attack(job, creep)
            case JobKind.HEAL:
                return self._heal(job, creep)

    # ── Jobs ──────────────────────────────────────────────────────────

    def _harvest(self, job: Job, creep: Creep) -> Outcome:
        if creep.is_full:
            log.debug("%s is full, done harvesting", creep.name)
            return Outcome.RELEASE

        source = job.source(self.world)
        if source is None:
            return Outcome.RELEASE

        code = self.world.harvest(creep, source)
        return self._handle(creep, Action.HARVEST, code, source.pos)

    def _build(self, job: Job, creep: Creep) -> Outcome:
        if creep.is_empty:
            log.debug("%s has no energy left to build", creep.name)
            return Outcome.RELEASE

        site = job.construction_site(self.world)
        if site is None or site.is_complete:
            return Outcome.RELEASE

        code = self.world.build(creep, site)
        return self._handle(creep, Action.BUILD, code, site.pos)

    def _maintain(self, job: Job, creep: Creep) -> Outcome:
        if creep.is_empty:
            return Outcome.RELEASE

        target = job.structure(self.world)
        if target is None or target.free_capacity == 0:
            return Outcome.RELEASE

        code = self.world.transfer_energy(creep, target)
        if code == ReturnCode.FULL:
            return Outcome.RELEASE
        return self._handle(creep, Action.TRANSFER, code, target.pos)

    def _repair(self, job: Job, creep: Creep) -> Outcome:
        if creep.is_empty:
            return Outcome.RELEASE

        target = job.structure(self.world)
        if target is None or target.hits >= target.hits_max:
            return Outcome.RELEASE

        code = self.world.repair(creep, target)
        return self._handle(creep, Action.REPAIR, code, target.pos)

    def _upgrade(self, job: Job, creep: Creep) -> Outcome:
        if creep.is_empty:
            return Outcome.RELEASE

        controller = job.controller(self.world)
        if controller is None:
            if self.world.controller(creep.room) is None:
                raise NoControllerError(creep.name)
            return Outcome.RELEASE

        code = self.world.upgrade_controller(creep, controller)
        return self._handle(creep, Action.UPGRADE, code, controller.pos)

    def _attack(self, job: Job, creep: Creep) -> Outcome:
        target = job.creep(self.world)
        if target is None or target.hits == 0:
            return Outcome.RELEASE

        code = self.world.attack(creep, target)
        return self._handle(creep, Action.ATTACK, code, target.pos)

    def _heal(self, job: Job, creep: Creep) -> Outcome:
        target = job.creep(self.world)
        if target is None or target.hits == 0 or target.hits >= target.hits_max:
            return Outcome.RELEASE

        code = self.world.heal(creep, target)
        return self._handle(creep, Action.HEAL, code, target.pos)

    # ── Command results ───────────────────────────────────────────────

    def _handle(self, creep: Creep, action: Action, code: ReturnCode, target: Position) -> Outcome:
        """Map a command result: out of range moves, exhausted resources release."""
        match code:
            case ReturnCode.OK:
                return Outcome.HOLD
            case ReturnCode.NOT_IN_RANGE:
                return self._move(creep, target)
            case ReturnCode.NOT_ENOUGH_RESOURCES:
                log.debug("%s: not enough resources to %s", creep.name, action.value)
                return Outcome.RELEASE
            case _:
                raise CommandError(creep.name, action, code)

    def _move(self, creep: Creep, target: Position) -> Outcome:
        code = self.world.move_to(creep, target)
        match code:
            case ReturnCode.OK:
                return Outcome.HOLD
            case ReturnCode.TIRED:
                log.debug("%s didn't move because tired", creep.name)
                return Outcome.HOLD
            case ReturnCode.NO_PATH:
                log.debug("%s has no path to %s", creep.name, target)
                return Outcome.RELEASE
            case _:
                raise CommandError(creep.name, Action.MOVE, code)
