"""Unit state — the one job a creep or tower holds across ticks."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, ValidationError

from hivemind.logger import get_logger
from hivemind.models.job import Job, JobKind

log = get_logger()

# Memory key under which a unit's current job is persisted
MEMORY_JOB_KEY = "job"


class UnitKind(str, Enum):
    CREEP = "creep"
    TOWER = "tower"


# Job kinds each unit kind can execute
ALLOWED_JOBS: dict[UnitKind, frozenset[JobKind]] = {
    UnitKind.CREEP: frozenset(JobKind),
    UnitKind.TOWER: frozenset({JobKind.ATTACK, JobKind.REPAIR}),
}


class UnitState(BaseModel):
    """A unit's identity and current job. ``transition`` is the only writer of the job."""

    name: str = Field(description="Creep name or tower id")
    kind: UnitKind
    current_job: Optional[Job] = Field(default=None, description="Held job, None when idle")

    @property
    def is_idle(self) -> bool:
        return self.current_job is None

    def transition(self, job: Optional[Job], memory: dict) -> None:
        """Hold ``job`` (or go idle with None) and mirror it into persistent memory."""
        self.current_job = job
        if job is None:
            memory.pop(MEMORY_JOB_KEY, None)
        else:
            memory[MEMORY_JOB_KEY] = job.model_dump(mode="json")

    @classmethod
    def restore(cls, name: str, kind: UnitKind, memory: dict) -> "UnitState":
        """Rebuild a unit from memory.

        Missing or corrupt entries, and jobs this kind of unit can't execute,
        give an idle unit.
        """
        raw = memory.get(MEMORY_JOB_KEY)
        if raw is None:
            return cls(name=name, kind=kind)

        try:
            job = Job.model_validate(raw)
        except ValidationError as exc:
            log.warning(
                "Discarding corrupt job memory for %s (%d errors)", name, exc.error_count()
            )
            memory.pop(MEMORY_JOB_KEY, None)
            return cls(name=name, kind=kind)

        if job.kind not in ALLOWED_JOBS[kind]:
            log.warning("Discarding %s job from memory of %s %s", job.kind.value, kind.value, name)
            memory.pop(MEMORY_JOB_KEY, None)
            return cls(name=name, kind=kind)

        return cls(name=name, kind=kind, current_job=job)

    def __repr__(self) -> str:
        job = self.current_job if self.current_job is not None else "idle"
        return f"UnitState(name={self.name!r}, kind={self.kind.value}, job={job})"
