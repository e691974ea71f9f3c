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
from staycalc.formatting import (
    auto_rule_name,
    discount_label,
    fmt_int,
    fmt_money,
    fmt_pct,
    rule_display_name,
    rule_summary,
)


def test_money_and_numbers() -> None:
    assert fmt_money(1234.5, "USD") == "$1,234.50"
    assert fmt_money(-48, "EUR") == "-€48.00"
    assert fmt_money(float("inf"), "USD") == "n/a"
    assert fmt_int(6999.6) == "7,000"
    assert fmt_pct(0.1091) == "10.91%"


def test_discount_label() -> None:
    assert discount_label(392 / 440) == "8.91x"


def test_rule_summary() -> None:
    per_night = Rule(trigger=PerNightTrigger(), reward=PointsReward(points=500))
    spend = Rule(trigger=SpendTrigger(amount=1000, repeat=True), reward=MultiplierReward(z=2))
    milestone = Rule(trigger=MilestoneTrigger(threshold=3), reward=VoucherReward(voucher_id="v", count=1))

    assert rule_summary(per_night, "USD") == "Per night -> +500 pts"
    assert rule_summary(spend, "USD") == "Spend >= 1000 USD (each threshold) -> Base x2"
    assert rule_summary(milestone, "USD") == "At 3 nights -> +1 voucher"


def test_auto_rule_names() -> None:
    per_stay = Rule(trigger=PerStayTrigger(), reward=VoucherReward(voucher_id="v", count=1))
    assert auto_rule_name(per_stay, "35K") == "Per stay +1 35K"
    assert auto_rule_name(per_stay) == "Per stay +1 unknown voucher"
    multiplier = Rule(trigger=PerNightTrigger(), reward=MultiplierReward(z=2))
    assert auto_rule_name(multiplier) == "Per night 2x points"


def test_display_name_prefers_explicit_name() -> None:
    named = Rule(name="  Summer promo ", trigger=PerNightTrigger(), reward=PointsReward(points=500))
    unnamed = Rule(name="   ", trigger=MilestoneTrigger(threshold=4), reward=PointsReward(points=500))
    assert rule_display_name(named) == "Summer promo"
    assert rule_display_name(unnamed) == "Stay 4 nights bonus"
