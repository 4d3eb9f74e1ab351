"""Confidence feedback prompt models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Rating(str, Enum):
    """Answers to "Would you upload this as-is?"."""

    YES = "yes"
    MAYBE = "maybe"
    NO = "no"


class PromptPhase(str, Enum):
    """Lifecycle phase of the prompt.

    hidden -> entering -> visible -> fading -> hidden
    """

    HIDDEN = "hidden"
    ENTERING = "entering"
    VISIBLE = "visible"
    FADING = "fading"


class PromptState(BaseModel):
    """Inspectable snapshot of a prompt controller."""

    model_config = ConfigDict(frozen=True)

    phase: PromptPhase
    is_open: bool
    is_submitted: bool
    rating: Rating | None = None
    generation: int = 0

    @property
    def is_visible(self) -> bool:
        return self.phase == PromptPhase.VISIBLE
