"""Base model for all domain entities."""

from pydantic import BaseModel, ConfigDict, Field

from hubcorner.domain.value import VoteCounts


class DomainModel(BaseModel):
    """Base class for all domain models.

    Provides common configuration for immutability and custom types.
    """

    model_config = ConfigDict(
        frozen=True,  # All domain models are immutable
        arbitrary_types_allowed=True,  # Allow custom value objects
    )


class VotableModel(DomainModel):
    """Base for entities carrying denormalized vote counters.

    The counters are a cache of the vote ledger and are only changed
    through the vote ledger.
    """

    upvotes: int = Field(default=0, ge=0)
    downvotes: int = Field(default=0, ge=0)

    @property
    def score(self) -> int:
        """Upvotes minus downvotes."""
        return self.upvotes - self.downvotes

    @property
    def counts(self) -> VoteCounts:
        """Counters as a value object."""
        return VoteCounts(upvotes=self.upvotes, downvotes=self.downvotes)
