"""Unit controller — keep-or-reassign state machine shared by creeps and towers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from hivemind.config import RegulatorConfig
from hivemind.errors import MissingContextError
from hivemind.logger import get_logger
from hivemind.models.entities import Creep, Structure
from hivemind.models.job import Job
from hivemind.models.job_offer import JobOffer
from hivemind.models.unit import UnitState
from hivemind.schedulers.base import AssignmentPolicy
from hivemind.world.base import World

log = get_logger()


class Outcome(str, Enum):
    """Result of executing a job for one tick."""
    HOLD = "hold"
    RELEASE = "release"


@dataclass(frozen=True)
class Turn:
    """What one unit did this tick."""
    unit: str
    job: Optional[Job]
    assigned: bool = False
    released: bool = False

    @property
    def idle(self) -> bool:
        return self.job is None


class UnitController(ABC):
    """Runs one unit's turn: execute the held job, or win a new one and execute it.

    Command failures raise out of ``step``; the held job is kept so the unit
    retries next tick. A missing-context failure drops the job first, since
    retrying can't succeed.
    """

    def __init__(
        self,
        world: World,
        policy: AssignmentPolicy,
        config: RegulatorConfig | None = None,
    ):
        self.world = world
        self.policy = policy
        self.config = config or RegulatorConfig()

    @abstractmethod
    def execute(self, job: Job, unit: Creep | Structure) -> Outcome:
        """Perform one tick of ``job``."""
        ...

    def step(self, state: UnitState, unit: Creep | Structure, offers: list[JobOffer]) -> Turn:
        memory = self.world.memory(state.name)
        tick = self.world.time

        if state.current_job is not None:
            job = state.current_job
            log.debug("%s keeps %s", state.name, job, tick=tick)
            if self._run(state, job, unit, memory) is Outcome.RELEASE:
                log.debug("%s released %s", state.name, job, tick=tick)
                state.transition(None, memory)
                return Turn(unit=state.name, job=job, released=True)
            return Turn(unit=state.name, job=job)

        offer = self.policy.select(offers, unit)
        if offer is None:
            log.debug("No job available for %s", state.name, tick=tick)
            return Turn(unit=state.name, job=None)

        self.policy.claim(offer, unit)
        job = offer.job
        log.debug(
            "%s took %s (%d places left)", state.name, job, offer.available_places, tick=tick
        )
        state.transition(job, memory)

        if self._run(state, job, unit, memory) is Outcome.RELEASE:
            state.transition(None, memory)
            return Turn(unit=state.name, job=job, assigned=True, released=True)
        return Turn(unit=state.name, job=job, assigned=True)

    def _run(self, state: UnitState, job: Job, unit: Creep | Structure, memory: dict) -> Outcome:
        try:
            return self.execute(job, unit)
        except MissingContextError:
            state.transition(None, memory)
            raise
