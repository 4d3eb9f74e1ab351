"""Credit balance and plan entitlement models."""

import math
from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PlanId(str, Enum):
    """Plan identifiers stored on account records."""

    FREE = "free"
    CREATOR = "creator"
    PRO = "pro"
    AUTOMATION = "automation"


class PlanType(str, Enum):
    """Plan classes that drive entitlement policy."""

    FREE = "free"
    SUBSCRIPTION = "subscription"
    AUTOMATION = "automation"


class CreditTier(str, Enum):
    """Sources of credit balance, in breakdown order."""

    SUBSCRIPTION = "subscription"
    TOPPED_UP = "topped_up"
    TRIAL = "trial"


def _lenient_int(value: Any) -> int | None:
    """Best-effort integer coercion; anything unusable becomes None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return _lenient_int(float(text))
        except ValueError:
            return None
    return None


class AccountBalance(BaseModel):
    """Snapshot of an account's credit tiers, as read from the account store.

    Field values are kept as stored (including negatives); reads go through
    ``credit_amount`` which defaults and clamps.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    subscription_credits: int | None = Field(default=None, alias="subscriptionCredits")
    topped_up_balance: int | None = Field(default=None, alias="toppedUpBalance")
    trial_credits: int | None = Field(default=None, alias="trialCredits")
    plan_id: str | None = Field(default=None, alias="planId")

    @field_validator(
        "subscription_credits", "topped_up_balance", "trial_credits", mode="before"
    )
    @classmethod
    def _coerce_credits(cls, value: Any) -> int | None:
        return _lenient_int(value)

    @field_validator("plan_id", mode="before")
    @classmethod
    def _coerce_plan_id(cls, value: Any) -> str | None:
        if isinstance(value, Enum):
            value = value.value
        return value if isinstance(value, str) else None

    @classmethod
    def from_record(cls, record: Mapping[str, Any] | None) -> "AccountBalance":
        """Build a snapshot from a raw store document (camelCase or snake_case keys)."""
        if not record:
            return cls()
        return cls.model_validate(dict(record))


class PlanDescriptor(BaseModel):
    """Resolved plan classification for display and upgrade decisions."""

    model_config = ConfigDict(frozen=True)

    plan_id: PlanId
    type: PlanType
    name: str
    monthly_credits: int = 0

    @property
    def has_active_subscription(self) -> bool:
        return self.type != PlanType.FREE

    @property
    def can_upgrade(self) -> bool:
        # Automation is the highest tier
        return self.type != PlanType.AUTOMATION


class BreakdownRow(BaseModel):
    """One tier line in the credit breakdown."""

    model_config = ConfigDict(frozen=True)

    tier: CreditTier
    label: str
    amount: int = Field(ge=0)
    visible: bool


class DisplayBalance(BaseModel):
    """Credits shown to the user, with a per-tier breakdown."""

    model_config = ConfigDict(frozen=True)

    display_credits: int = Field(ge=0)
    trial_credits: int = Field(ge=0)
    total_credits: int = Field(ge=0)
    breakdown: list[BreakdownRow] = Field(default_factory=list)

    @property
    def visible_rows(self) -> list[BreakdownRow]:
        return [row for row in self.breakdown if row.visible]
