"""Tower controller — attack and repair from a fixed position."""

from hivemind.config import RegulatorConfig
from hivemind.errors import CommandError, JobKindMismatch
from hivemind.logger import get_logger
from hivemind.models.entities import Action, ReturnCode, Structure
from hivemind.models.job import Job, JobKind
from hivemind.schedulers.tower import TowerPolicy
from hivemind.units.base import Outcome, UnitController
from hivemind.world.base import World

log = get_logger()


class TowerController(UnitController):
    """Towers never move, so an out-of-range result is a command error."""

    def __init__(self, world: World, config: RegulatorConfig | None = None):
        config = config or RegulatorConfig()
        super().__init__(world, TowerPolicy(world, config), config)

    def execute(self, job: Job, tower: Structure) -> Outcome:
        match job.kind:
            case JobKind.ATTACK:
                return self._attack(job, tower)
            case JobKind.REPAIR:
                return self._repair(job, tower)
            case _:
                raise JobKindMismatch(f"Towers can't {job.kind.value}")

    def _attack(self, job: Job, tower: Structure) -> Outcome:
        target = job.creep(self.world)
        if target is None or target.hits == 0:
            return Outcome.RELEASE

        code = self.world.attack(tower, target)
        if code != ReturnCode.OK:
            raise CommandError(tower.id, Action.ATTACK, code)

        target = job.creep(self.world)
        if target is None or target.hits == 0:
            log.info("Tower %s killed %s, abandoning job", tower.id, job.target_id)
            return Outcome.RELEASE
        return Outcome.HOLD

    def _repair(self, job: Job, tower: Structure) -> Outcome:
        target = job.structure(self.world)
        if target is None:
            return Outcome.RELEASE

        limit = (tower.energy_capacity or 0) * self.config.repair_multiplier
        if target.hits >= target.hits_max or target.hits >= limit:
            return Outcome.RELEASE

        code = self.world.repair(tower, target)
        match code:
            case ReturnCode.OK:
                return Outcome.HOLD
            case ReturnCode.NOT_ENOUGH_RESOURCES:
                return Outcome.RELEASE
            case _:
                raise CommandError(tower.id, Action.REPAIR, code)
