"""Creep assignment policy — energy-aware eligibility for mobile workers."""

from hivemind.models.entities import Creep
from hivemind.models.job import JobKind
from hivemind.models.job_offer import JobOffer
from hivemind.schedulers.base import AssignmentPolicy

COMBAT_JOBS = frozenset({JobKind.ATTACK, JobKind.HEAL})


class CreepPolicy(AssignmentPolicy):
    """Eligibility rules for workers.

    - attack/heal are left to towers unless config.workers_take_combat_jobs
    - no harvesting with a full store or when about to expire
    - an empty store only qualifies for harvesting
    - repair only targets below energy capacity × repair multiplier
    """

    def eligible(self, offer: JobOffer, creep: Creep) -> bool:
        job = offer.job

        if job.kind in COMBAT_JOBS and not self.config.workers_take_combat_jobs:
            return False

        if job.kind == JobKind.HARVEST:
            return not (creep.is_full or self._expiring(creep))

        if creep.is_empty:
            return False

        if job.kind == JobKind.REPAIR:
            target = job.structure(self.world)
            return (
                target is not None
                and target.hits < creep.energy_capacity * self.config.repair_multiplier
            )

        return True

    def claim(self, offer: JobOffer, creep: Creep) -> None:
        """Take a place; close maintain offers this creep can satisfy on its own."""
        super().claim(offer, creep)

        if offer.job.kind == JobKind.MAINTAIN and offer.is_open:
            target = offer.job.structure(self.world)
            if target is not None and target.free_capacity <= creep.energy:
                offer.exhaust()

    def _expiring(self, creep: Creep) -> bool:
        return (
            creep.ticks_to_live is not None
            and creep.ticks_to_live < self.config.low_lifetime_threshold
        )
