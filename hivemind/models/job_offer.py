"""JobOffer — a job plus how many more units may still take it this cycle."""

from pydantic import BaseModel, Field

from hivemind.errors import OfferExhausted
from hivemind.models.job import Job


class JobOffer(BaseModel):
    """A slot-limited offer in the shared pool. Places only ever go down."""

    job: Job
    available_places: int = Field(ge=0, description="Units that may still be assigned")

    @property
    def is_open(self) -> bool:
        return self.available_places > 0

    def take(self) -> None:
        """Consume one place for a newly assigned unit."""
        if self.available_places == 0:
            raise OfferExhausted(f"No places left on {self.job}")
        self.available_places -= 1

    def exhaust(self) -> None:
        """Close the offer for the rest of the cycle."""
        self.available_places = 0

    def __repr__(self) -> str:
        return f"JobOffer(job={self.job}, places={self.available_places})"
