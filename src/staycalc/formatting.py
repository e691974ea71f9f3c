from typing import assert_never

from staycalc.domain.models import (
    CurrencyCode,
    MilestoneTrigger,
    MultiplierReward,
    PerNightTrigger,
    PerStayTrigger,
    PointsReward,
    Rule,
    SpendTrigger,
    VoucherReward,
)

CURRENCY_SYMBOLS: dict[str, str] = {
    "USD": "$",
    "CNY": "¥",
    "HKD": "HK$",
    "GBP": "£",
    "EUR": "€",
    "SGD": "S$",
}

UNKNOWN_VOUCHER = "unknown voucher"


def _fmt_number(value: float) -> str:
    return f"{value:g}"


def fmt_money(amount: float, currency: CurrencyCode | None) -> str:
    if amount == float("inf"):
        return "n/a"
    symbol = CURRENCY_SYMBOLS.get(currency or "", "")
    sign = "-" if amount < 0 else ""
    if symbol:
        return f"{sign}{symbol}{abs(amount):,.2f}"
    return f"{sign}{abs(amount):,.2f} {currency or ''}".rstrip()


def fmt_int(value: float) -> str:
    return f"{value:,.0f}"


def fmt_pct(value: float) -> str:
    return f"{value:.2%}"


def discount_label(net_pay_ratio: float) -> str:
    """Net-pay ratio on a ten-point scale, 0.891 -> "8.91x"."""
    return f"{net_pay_ratio * 10:.2f}x"


def rule_summary(rule: Rule, currency: CurrencyCode | None) -> str:
    trigger = rule.trigger
    if isinstance(trigger, PerNightTrigger):
        trigger_text = "Per night"
    elif isinstance(trigger, PerStayTrigger):
        trigger_text = "Per stay"
    elif isinstance(trigger, SpendTrigger):
        trigger_text = f"Spend >= {_fmt_number(trigger.amount)} {currency or ''}".rstrip()
        if trigger.repeat:
            trigger_text += " (each threshold)"
    elif isinstance(trigger, MilestoneTrigger):
        trigger_text = f"At {_fmt_number(trigger.threshold)} nights"
    else:
        assert_never(trigger)

    reward = rule.reward
    if isinstance(reward, PointsReward):
        reward_text = f"+{_fmt_number(reward.points)} pts"
    elif isinstance(reward, MultiplierReward):
        reward_text = f"Base x{_fmt_number(reward.z)}"
    elif isinstance(reward, VoucherReward):
        reward_text = f"+{_fmt_number(reward.count)} voucher"
    else:
        assert_never(reward)

    return f"{trigger_text} -> {reward_text}"


def auto_rule_name(rule: Rule, voucher_name: str | None = None) -> str:
    trigger = rule.trigger
    reward = rule.reward
    if isinstance(trigger, MilestoneTrigger):
        return f"Stay {_fmt_number(trigger.threshold)} nights bonus"
    if isinstance(trigger, SpendTrigger):
        return "Spend bonus"

    prefix = "Per stay" if isinstance(trigger, PerStayTrigger) else "Per night"
    if isinstance(reward, PointsReward):
        return f"{prefix} +{_fmt_number(reward.points)} pts"
    if isinstance(reward, MultiplierReward):
        return f"{prefix} {_fmt_number(reward.z)}x points"
    return f"{prefix} +{_fmt_number(reward.count)} {voucher_name or UNKNOWN_VOUCHER}"


def rule_display_name(rule: Rule, voucher_name: str | None = None) -> str:
    name = rule.name.strip()
    return name if name else auto_rule_name(rule, voucher_name)
