"""
Tests for Pydantic models in app.models.

Validates record parsing, defaults, and enum values.
"""

import pytest
from pydantic import ValidationError

from app.models.billing import (
    AccountBalance,
    BreakdownRow,
    CreditTier,
    PlanDescriptor,
    PlanId,
    PlanType,
)
from app.models.feedback import PromptPhase, PromptState, Rating


class TestEnums:
    def test_plan_ids(self):
        assert {p.value for p in PlanId} == {"free", "creator", "pro", "automation"}

    def test_plan_types(self):
        assert {p.value for p in PlanType} == {"free", "subscription", "automation"}

    def test_tiers_in_breakdown_order(self):
        assert [t.value for t in CreditTier] == ["subscription", "topped_up", "trial"]

    def test_ratings(self):
        assert [r.value for r in Rating] == ["yes", "maybe", "no"]


class TestAccountBalance:
    """Tests for AccountBalance record parsing."""

    def test_defaults_are_absent(self):
        account = AccountBalance()
        assert account.subscription_credits is None
        assert account.topped_up_balance is None
        assert account.trial_credits is None
        assert account.plan_id is None

    def test_from_store_document(self):
        account = AccountBalance.from_record(
            {
                "subscriptionCredits": 1100,
                "toppedUpBalance": 50,
                "trialCredits": 10,
                "planId": "creator",
                "email": "user@example.com",
                "hasTakenTour": True,
            }
        )
        assert account.subscription_credits == 1100
        assert account.topped_up_balance == 50
        assert account.trial_credits == 10
        assert account.plan_id == "creator"

    def test_from_snake_case_record(self):
        account = AccountBalance.from_record({"subscription_credits": 5, "plan_id": "pro"})
        assert account.subscription_credits == 5
        assert account.plan_id == "pro"

    def test_from_empty_or_none_record(self):
        assert AccountBalance.from_record(None) == AccountBalance()
        assert AccountBalance.from_record({}) == AccountBalance()

    def test_negative_values_are_kept_as_stored(self):
        account = AccountBalance(subscription_credits=-5)
        assert account.subscription_credits == -5

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (12, 12),
            ("12", 12),
            (" 7 ", 7),
            (3.9, 3),
            ("2.5", 2),
            (None, None),
            ("abc", None),
            (True, None),
            (float("inf"), None),
            ({"nested": 1}, None),
        ],
    )
    def test_lenient_credit_coercion(self, raw, expected):
        account = AccountBalance.from_record({"trialCredits": raw})
        assert account.trial_credits == expected

    def test_non_string_plan_id_is_dropped(self):
        assert AccountBalance.from_record({"planId": ["pro"]}).plan_id is None

    def test_is_immutable(self):
        account = AccountBalance(trial_credits=1)
        with pytest.raises(ValidationError):
            account.trial_credits = 2


class TestBreakdownRow:
    def test_amount_cannot_be_negative(self):
        with pytest.raises(ValidationError):
            BreakdownRow(tier=CreditTier.TRIAL, label="Trial", amount=-1, visible=True)


class TestPlanDescriptor:
    def test_flags(self):
        plan = PlanDescriptor(plan_id=PlanId.PRO, type=PlanType.SUBSCRIPTION, name="Pro")
        assert plan.has_active_subscription is True
        assert plan.can_upgrade is True
        assert plan.monthly_credits == 0


class TestPromptState:
    def test_visible_only_in_visible_phase(self):
        for phase in PromptPhase:
            state = PromptState(phase=phase, is_open=True, is_submitted=False)
            assert state.is_visible is (phase == PromptPhase.VISIBLE)
