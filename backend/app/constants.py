"""
Business logic constants for the Stumbnail backend.

These values are stable across environments (dev/staging/prod) and do not
need env-var overrides. For timings and limits that vary per environment,
see config.py.
"""

from app.models.billing import CreditTier, PlanDescriptor, PlanId, PlanType

# --- Plan lookup table ---
# Every PlanId has an entry; unknown ids resolve to FREE_PLAN.
PLAN_TABLE: dict[PlanId, PlanDescriptor] = {
    PlanId.FREE: PlanDescriptor(
        plan_id=PlanId.FREE, type=PlanType.FREE, name="Free", monthly_credits=0
    ),
    PlanId.CREATOR: PlanDescriptor(
        plan_id=PlanId.CREATOR, type=PlanType.SUBSCRIPTION, name="Creator", monthly_credits=1100
    ),
    PlanId.PRO: PlanDescriptor(
        plan_id=PlanId.PRO, type=PlanType.SUBSCRIPTION, name="Pro", monthly_credits=1100
    ),
    PlanId.AUTOMATION: PlanDescriptor(
        plan_id=PlanId.AUTOMATION,
        type=PlanType.AUTOMATION,
        name="Automation",
        monthly_credits=4500,
    ),
}

FREE_PLAN: PlanDescriptor = PLAN_TABLE[PlanId.FREE]

# --- Credit breakdown row labels (display order) ---
TIER_LABELS: dict[CreditTier, str] = {
    CreditTier.SUBSCRIPTION: "Monthly",
    CreditTier.TOPPED_UP: "Topped Up",
    CreditTier.TRIAL: "Trial",
}
