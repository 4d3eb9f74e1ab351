"""Credit balance and plan resolution.

Pure functions over an account snapshot. Nothing here mutates its input or
holds state, so callers may share them freely across views and tasks.
"""

from collections.abc import Mapping
from typing import Any

import structlog

from app.constants import FREE_PLAN, PLAN_TABLE, TIER_LABELS
from app.models.billing import (
    AccountBalance,
    BreakdownRow,
    CreditTier,
    DisplayBalance,
    PlanDescriptor,
    PlanId,
    PlanType,
)

logger = structlog.get_logger(__name__)

AccountInput = AccountBalance | Mapping[str, Any] | None

_TIER_FIELDS: dict[CreditTier, str] = {
    CreditTier.SUBSCRIPTION: "subscription_credits",
    CreditTier.TOPPED_UP: "topped_up_balance",
    CreditTier.TRIAL: "trial_credits",
}


def _as_account(account: AccountInput) -> AccountBalance:
    if isinstance(account, AccountBalance):
        return account
    if isinstance(account, Mapping):
        return AccountBalance.from_record(account)
    return AccountBalance()


def credit_amount(account: AccountInput, tier: CreditTier) -> int:
    """Read a tier balance, defaulting missing values to 0 and clamping negatives to 0."""
    value = getattr(_as_account(account), _TIER_FIELDS[tier])
    if value is None or value < 0:
        return 0
    return value


def resolve_plan(account: AccountInput) -> PlanDescriptor:
    """Map the account's plan id to its descriptor; unknown ids resolve to Free."""
    raw_plan_id = _as_account(account).plan_id
    if raw_plan_id is None:
        return FREE_PLAN

    try:
        plan_id = PlanId(raw_plan_id.strip().lower())
    except ValueError:
        logger.info("plan_id_unknown", plan_id=raw_plan_id)
        return FREE_PLAN

    return PLAN_TABLE.get(plan_id, FREE_PLAN)


def resolve_display_balance(account: AccountInput) -> DisplayBalance:
    """Aggregate tier balances into display totals and a breakdown.

    The total counts every tier, including those whose row is hidden:
    visibility is a display decision only.
    """
    snapshot = _as_account(account)
    plan = resolve_plan(snapshot)

    amounts = {tier: credit_amount(snapshot, tier) for tier in CreditTier}
    visibility = {
        CreditTier.SUBSCRIPTION: plan.type != PlanType.FREE,
        CreditTier.TOPPED_UP: amounts[CreditTier.TOPPED_UP] > 0,
        CreditTier.TRIAL: amounts[CreditTier.TRIAL] > 0,
    }

    breakdown = [
        BreakdownRow(
            tier=tier,
            label=TIER_LABELS[tier],
            amount=amounts[tier],
            visible=visibility[tier],
        )
        for tier in CreditTier
    ]

    display_credits = amounts[CreditTier.SUBSCRIPTION] + amounts[CreditTier.TOPPED_UP]
    trial_credits = amounts[CreditTier.TRIAL]

    return DisplayBalance(
        display_credits=display_credits,
        trial_credits=trial_credits,
        total_credits=display_credits + trial_credits,
        breakdown=breakdown,
    )
