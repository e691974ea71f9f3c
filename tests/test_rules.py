import pytest

from staycalc.domain.models import (
    MilestoneTrigger,
    MultiplierReward,
    PerNightTrigger,
    PerStayTrigger,
    PointsReward,
    Rule,
    SpendTrigger,
    VoucherReward,
)
from staycalc.engine.rules import build_rule, extra_points, normalize_rules, times_fired


def _no_vouchers(voucher_id: str) -> float:
    return 0.0


def test_per_night_fires_once_per_night() -> None:
    assert times_fired(PerNightTrigger(), nights=4, spend=0) == 4


def test_per_stay_fires_once() -> None:
    assert times_fired(PerStayTrigger(), nights=7, spend=0) == 1


@pytest.mark.parametrize(
    ("spend", "repeat", "expected"),
    [
        (999.99, False, 0),
        (1000.0, False, 1),
        (2500.0, False, 1),
        (2500.0, True, 2),
        (999.99, True, 0),
    ],
)
def test_spend_threshold(spend: float, repeat: bool, expected: int) -> None:
    trigger = SpendTrigger(amount=1000, repeat=repeat)
    assert times_fired(trigger, nights=1, spend=spend) == expected


def test_spend_with_non_positive_amount_never_fires() -> None:
    assert times_fired(SpendTrigger(amount=0, repeat=True), nights=1, spend=5000) == 0
    assert times_fired(SpendTrigger(amount=-10), nights=1, spend=5000) == 0


@pytest.mark.parametrize(("nights", "expected"), [(2, 0), (3, 1), (10, 1)])
def test_milestone_fires_at_most_once(nights: int, expected: int) -> None:
    assert times_fired(MilestoneTrigger(threshold=3), nights=nights, spend=0) == expected


def test_milestone_threshold_is_at_least_one() -> None:
    assert times_fired(MilestoneTrigger(threshold=0), nights=1, spend=0) == 1
    assert times_fired(MilestoneTrigger(threshold=2.7), nights=2, spend=0) == 1


def test_points_reward_scales_with_times() -> None:
    assert extra_points(PointsReward(points=500), 3, 4000, _no_vouchers) == 1500


def test_negative_points_reward_contributes_nothing() -> None:
    assert extra_points(PointsReward(points=-500), 3, 4000, _no_vouchers) == 0


def test_multiplier_ignores_times_fired() -> None:
    once = extra_points(MultiplierReward(z=2), 1, 4000, _no_vouchers)
    many = extra_points(MultiplierReward(z=2), 5, 4000, _no_vouchers)
    assert once == many == 4000


def test_multiplier_below_one_is_clamped() -> None:
    assert extra_points(MultiplierReward(z=0.5), 1, 4000, _no_vouchers) == 0


def test_voucher_reward_uses_point_value_lookup() -> None:
    values = {"35k": 35000.0}
    reward = VoucherReward(voucher_id="35k", count=1)
    assert extra_points(reward, 2, 4000, lambda vid: values.get(vid, 0.0)) == 70000
    missing = VoucherReward(voucher_id="gone", count=1)
    assert extra_points(missing, 2, 4000, lambda vid: values.get(vid, 0.0)) == 0


def test_normalize_rules_coerces_milestone_metric() -> None:
    rule = Rule(trigger=MilestoneTrigger(metric="stay", threshold=2), reward=PointsReward(points=10))
    normalized = normalize_rules([rule])
    assert normalized[0].trigger.metric == "nights"
    assert rule.trigger.metric == "stay"


def test_build_rule_defaults() -> None:
    assert isinstance(build_rule("per_night").trigger, PerNightTrigger)
    assert isinstance(build_rule("per_stay").trigger, PerStayTrigger)
    spend = build_rule("spend").trigger
    assert isinstance(spend, SpendTrigger) and spend.amount == 1000 and not spend.repeat
    milestone = build_rule("milestone").trigger
    assert isinstance(milestone, MilestoneTrigger) and milestone.threshold == 3
    assert build_rule("per_night").reward == PointsReward(points=1000)
