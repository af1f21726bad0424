"""
Tests for the tenth-hour rounding engine.

Covers:
- round_time half-up behavior and grid alignment
- reconcile deficit and surplus distribution
- Tie-breaking by input position
- Empty and inconsistent inputs
- charge
"""

import pytest
from decimal import Decimal

from invoice_kernel.domain.rounding import (
    TENTH_HOUR,
    charge,
    is_rounded,
    reconcile,
    round_time,
)
from invoice_kernel.domain.time_summary import Detail, ProjectTimeSummary
from invoice_kernel.domain.values import Duration
from invoice_kernel.exceptions import (
    InvalidRateError,
    ReconciliationInconsistencyError,
)
from tests.builders import hours


def details(*values: str) -> list[Detail]:
    return [Detail(activity=f"a{i}", time=hours(v)) for i, v in enumerate(values)]


def times(entries) -> list[Duration]:
    return [entry.time for entry in entries]


class TestRoundTime:
    """Tests for rounding a single duration to a tenth of an hour."""

    def test_rounds_down(self):
        assert round_time(hours("2.33")) == hours("2.3")

    def test_rounds_up(self):
        assert round_time(hours("1.38")) == hours("1.4")

    def test_half_rounds_up(self):
        """Exactly 3 minutes past a tenth rounds up, even when even would go down."""
        assert round_time(hours("0.25")) == hours("0.3")
        assert round_time(hours("0.05")) == hours("0.1")

    def test_just_below_half_rounds_down(self):
        assert round_time(Duration.of_seconds("179.999")) == Duration.zero()
        assert round_time(Duration.of_seconds(180)) == TENTH_HOUR

    def test_exact_multiple_unchanged(self):
        assert round_time(hours("4.7")) == hours("4.7")

    def test_zero(self):
        assert round_time(Duration.zero()) == Duration.zero()

    def test_result_on_grid(self):
        assert is_rounded(round_time(Duration.of_seconds("12345.678")))

    def test_tenth_hour_is_six_minutes(self):
        assert TENTH_HOUR == Duration.of_minutes(6)


class TestIsRounded:
    """Tests for the grid check."""

    def test_on_grid(self):
        assert is_rounded(hours("1.2"))
        assert is_rounded(Duration.zero())

    def test_off_grid(self):
        assert not is_rounded(hours("1.25"))


class TestReconcile:
    """Tests for largest-remainder reconciliation of siblings."""

    def test_deficit_goes_to_largest_loss(self):
        """2.33 + 1.38 + 0.94 = 4.65 -> 4.7; the 0.94 entry lost most and gets the tenth."""
        result = reconcile(details("2.33", "1.38", "0.94"), hours("4.7"))

        assert times(result) == [hours("2.3"), hours("1.4"), hours("1.0")]

    def test_surplus_taken_from_largest_gain(self):
        """0.26 + 0.26 + 0.18 -> naive 0.3 + 0.3 + 0.2 = 0.8 against 0.7."""
        result = reconcile(details("0.26", "0.26", "0.18"), hours("0.7"))

        # 0.18 gained 0.02, the 0.26 entries gained 0.04 each; first one pays
        assert times(result) == [hours("0.2"), hours("0.3"), hours("0.2")]

    def test_sum_matches_target(self):
        result = reconcile(details("0.33", "0.33", "0.34"), hours("1.0"))

        assert sum(times(result), Duration.zero()) == hours("1.0")

    def test_order_and_labels_preserved(self):
        children = details("0.04", "2.33", "0.94", "1.38")
        result = reconcile(children, hours("4.7"))

        assert [d.activity for d in result] == [d.activity for d in children]

    def test_inputs_not_modified(self):
        children = details("2.33", "1.38", "0.94")
        snapshot = list(children)

        reconcile(children, hours("4.7"))

        assert children == snapshot

    def test_exact_multiples_returned_unchanged(self):
        children = details("0.5", "0.3")

        assert reconcile(children, hours("0.8")) == children

    def test_deficit_tie_goes_to_first(self):
        result = reconcile(details("0.04", "0.04"), hours("0.1"))

        assert times(result) == [hours("0.1"), Duration.zero()]

    def test_surplus_tie_taken_from_first(self):
        result = reconcile(details("0.06", "0.06"), hours("0.1"))

        assert times(result) == [Duration.zero(), hours("0.1")]

    def test_surplus_skips_children_at_zero(self):
        """A child rounded to zero is never pushed negative."""
        result = reconcile(details("0.04", "0.15"), hours("0.1"))

        assert times(result) == [Duration.zero(), hours("0.1")]

    def test_works_on_projects(self):
        projects = [
            ProjectTimeSummary(name="A", time=hours("2.33")),
            ProjectTimeSummary(name="B", time=hours("1.38")),
            ProjectTimeSummary(name="C", time=hours("0.94")),
        ]

        result = reconcile(projects, hours("4.7"))

        assert [p.name for p in result] == ["A", "B", "C"]
        assert times(result) == [hours("2.3"), hours("1.4"), hours("1.0")]

    def test_each_child_moves_at_most_one_unit(self):
        children = details("0.149", "0.149", "0.149", "0.149")
        result = reconcile(children, hours("0.6"))

        for child, out in zip(children, result):
            naive = round_time(child.time)
            moved = out.time - naive if out.time >= naive else naive - out.time
            assert moved <= TENTH_HOUR


class TestReconcileEdgeCases:
    """Tests for empty and inconsistent reconciliation inputs."""

    def test_empty_with_zero_total(self):
        assert reconcile([], Duration.zero()) == []

    def test_empty_with_nonzero_total_raises(self):
        with pytest.raises(ReconciliationInconsistencyError) as exc_info:
            reconcile([], hours("0.1"))

        assert exc_info.value.reason == "no_children"
        assert exc_info.value.delta_units == 1
        assert exc_info.value.code == "RECONCILIATION_INCONSISTENCY"

    def test_unrounded_target_raises(self):
        with pytest.raises(ReconciliationInconsistencyError) as exc_info:
            reconcile(details("0.1"), hours("0.15"))

        assert exc_info.value.reason == "unrounded_total"

    def test_deficit_larger_than_children_raises(self):
        with pytest.raises(ReconciliationInconsistencyError) as exc_info:
            reconcile(details("0.1"), hours("0.5"))

        assert exc_info.value.reason == "delta_exceeds_children"
        assert exc_info.value.delta_units == 4
        assert exc_info.value.child_count == 1

    def test_surplus_larger_than_eligible_children_raises(self):
        with pytest.raises(ReconciliationInconsistencyError) as exc_info:
            reconcile(details("0.2", "0.0"), Duration.zero())

        assert exc_info.value.reason == "delta_exceeds_children"
        assert exc_info.value.delta_units == -2


class TestCharge:
    """Tests for charge computation."""

    def test_hours_times_rate(self):
        assert charge(hours("3.25"), 100) == Decimal("325")

    def test_decimal_rate(self):
        assert charge(hours("1.5"), Decimal("95.50")) == Decimal("143.25")

    def test_string_rate(self):
        assert charge(hours("2"), "80") == Decimal("160")

    def test_no_rounding_applied(self):
        assert charge(Duration.of_minutes(1), 1) == Decimal(1) / Decimal(60)

    def test_zero_duration(self):
        assert charge(Duration.zero(), 150) == 0

    def test_invalid_rate_raises(self):
        with pytest.raises(InvalidRateError) as exc_info:
            charge(hours("1"), "lots")
        assert exc_info.value.code == "INVALID_RATE"

    def test_non_finite_rate_raises(self):
        with pytest.raises(InvalidRateError):
            charge(hours("1"), Decimal("NaN"))

    def test_negative_rate_raises(self):
        with pytest.raises(InvalidRateError) as exc_info:
            charge(hours("1"), -10)
        assert exc_info.value.rate == "-10"
