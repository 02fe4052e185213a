"""Tower assignment policy — attack anything, repair what the tower can afford."""

from hivemind.models.entities import Structure
from hivemind.models.job import JobKind
from hivemind.models.job_offer import JobOffer
from hivemind.schedulers.base import AssignmentPolicy


class TowerPolicy(AssignmentPolicy):
    """Towers only take attack and repair offers."""

    def eligible(self, offer: JobOffer, tower: Structure) -> bool:
        job = offer.job

        if job.kind == JobKind.ATTACK:
            return True

        if job.kind == JobKind.REPAIR:
            target = job.structure(self.world)
            return (
                target is not None
                and target.hits < (tower.energy_capacity or 0) * self.config.repair_multiplier
            )

        return False
