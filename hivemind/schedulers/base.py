"""Base assignment policy — greedy pick of one offer for one unit."""

from abc import ABC, abstractmethod
from typing import Optional

from hivemind.config import RegulatorConfig
from hivemind.models.entities import Creep, Position, Structure
from hivemind.models.job_offer import JobOffer
from hivemind.world.base import World


class AssignmentPolicy(ABC):
    """Filters the shared offer pool for a unit and picks the cheapest offer.

    Assignment is sequential: each unit claims from the same mutable pool, so
    earlier units see more places than later ones.
    """

    def __init__(self, world: World, config: RegulatorConfig | None = None):
        self.world = world
        self.config = config or RegulatorConfig()

    @abstractmethod
    def eligible(self, offer: JobOffer, unit: Creep | Structure) -> bool:
        """True if this unit may take this offer."""
        ...

    def select(self, offers: list[JobOffer], unit: Creep | Structure) -> Optional[JobOffer]:
        """Return the open, eligible offer with the lowest score, or None.

        Ties go to the earliest offer in pool order.
        """
        candidates = [
            o for o in offers
            if o.is_open and self.eligible(o, unit)
        ]
        if not candidates:
            return None
        return min(candidates, key=lambda o: self.score(o, unit.pos))

    def claim(self, offer: JobOffer, unit: Creep | Structure) -> None:
        """Take one place on the winning offer."""
        offer.take()

    @staticmethod
    def score(offer: JobOffer, position: Position) -> int:
        """priority × range: lower is better."""
        return offer.job.priority() * offer.job.range_required_to(position)

    @property
    def name(self) -> str:
        return self.__class__.__name__
