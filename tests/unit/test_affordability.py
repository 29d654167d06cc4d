"""Unit tests for affordability evaluation"""

import pytest
from rto_engine.domain.affordability import determine_verdict, evaluate, max_affordable_price
from rto_engine.domain.amortization import compute_schedule
from rto_engine.domain.exceptions import InvalidIncomeError, InvalidTermsError
from rto_engine.domain.models import AffordabilityProfile, LoanTerms, Verdict
from rto_engine.domain.policy import AffordabilityPolicy

POLICY = AffordabilityPolicy()
STRICTNESS = [Verdict.QUALIFIES, Verdict.CONDITIONAL, Verdict.DOES_NOT_QUALIFY]


def test_evaluate_conditional_example():
    """KES 150k income, 10k debts, 45k payment -> 0.3667, conditional"""
    result = evaluate(
        AffordabilityProfile(
            monthly_income_cents=15_000_000,
            monthly_debt_cents=1_000_000,
            proposed_payment_cents=4_500_000,
        ),
        POLICY,
    )

    assert result.ratio == pytest.approx(0.3667, abs=1e-4)
    assert result.verdict == Verdict.CONDITIONAL
    assert result.headroom_cents == -100_000


def test_determine_verdict_boundaries():
    """Upper bounds are inclusive"""
    assert determine_verdict(0.36, POLICY) == Verdict.QUALIFIES
    assert determine_verdict(0.3601, POLICY) == Verdict.CONDITIONAL
    assert determine_verdict(0.45, POLICY) == Verdict.CONDITIONAL
    assert determine_verdict(0.4501, POLICY) == Verdict.DOES_NOT_QUALIFY


def test_evaluate_threshold_values():
    qualifies = evaluate(AffordabilityProfile(10_000_000, 0, 3_600_000), POLICY)
    conditional = evaluate(AffordabilityProfile(10_000_000, 0, 4_500_000), POLICY)
    declined = evaluate(AffordabilityProfile(10_000_000, 0, 4_500_001), POLICY)

    assert qualifies.verdict == Verdict.QUALIFIES
    assert conditional.verdict == Verdict.CONDITIONAL
    assert declined.verdict == Verdict.DOES_NOT_QUALIFY


def test_evaluate_thresholds_are_overridable():
    strict = AffordabilityPolicy(qualify_max_ratio=0.28, conditional_max_ratio=0.33)
    result = evaluate(AffordabilityProfile(10_000_000, 0, 3_000_000), strict)

    assert result.verdict == Verdict.CONDITIONAL


@pytest.mark.parametrize("income", [0, -1, -15_000_000])
def test_evaluate_non_positive_income(income):
    with pytest.raises(InvalidIncomeError):
        evaluate(AffordabilityProfile(income, 0, 4_500_000), POLICY)


def test_evaluate_verdict_monotonic_in_income():
    """Raising income never moves the verdict to a stricter tier"""
    previous = len(STRICTNESS)
    for income in range(5_000_000, 40_000_001, 500_000):
        result = evaluate(AffordabilityProfile(income, 1_000_000, 4_500_000), POLICY)
        strictness = STRICTNESS.index(result.verdict)
        assert strictness <= previous
        previous = strictness
    assert previous == 0


def test_max_affordable_price_round_trip():
    """Max price fed back through the schedule lands on the qualifying ratio"""
    income, debt = 40_000_000, 2_000_000
    price = max_affordable_price(income, debt, 0.10, 180, 12.5, POLICY)

    schedule = compute_schedule(LoanTerms(price, 0.10, 180, 12.5))
    result = evaluate(AffordabilityProfile(income, debt, schedule[0].total_payment_cents), POLICY)

    assert result.ratio == pytest.approx(0.36, abs=1e-4)


def test_max_affordable_price_zero_rate():
    """KES 100k income, no debts, 20% down, 100 months, 0% -> KES 4.5M"""
    price = max_affordable_price(10_000_000, 0, 0.20, 100, 0, POLICY)
    assert abs(price - 450_000_000) <= 1


def test_max_affordable_price_debt_exhausts_budget():
    assert max_affordable_price(10_000_000, 4_000_000, 0.10, 180, 12.5, POLICY) == 0


def test_max_affordable_price_invalid_inputs():
    with pytest.raises(InvalidIncomeError):
        max_affordable_price(0, 0, 0.10, 180, 12.5, POLICY)
    with pytest.raises(InvalidTermsError):
        max_affordable_price(10_000_000, 0, 1.0, 180, 12.5, POLICY)
    with pytest.raises(InvalidTermsError):
        max_affordable_price(10_000_000, 0, 0.10, 0, 12.5, POLICY)
    with pytest.raises(InvalidTermsError):
        max_affordable_price(10_000_000, 0, 0.10, 180, -2.0, POLICY)
