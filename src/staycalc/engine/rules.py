import math
from typing import Callable, Literal, assert_never

from staycalc.domain.models import (
    MilestoneTrigger,
    MultiplierReward,
    PerNightTrigger,
    PerStayTrigger,
    PointsReward,
    Reward,
    Rule,
    SpendTrigger,
    Trigger,
    VoucherReward,
)

# Every evaluation models exactly one stay.
STAYS_PER_EVALUATION = 1

TriggerType = Literal["per_night", "per_stay", "spend", "milestone"]


def times_fired(trigger: Trigger, nights: int, spend: float) -> int:
    if isinstance(trigger, PerNightTrigger):
        return nights
    if isinstance(trigger, PerStayTrigger):
        return STAYS_PER_EVALUATION
    if isinstance(trigger, SpendTrigger):
        threshold = max(0.0, trigger.amount)
        if threshold <= 0 or spend < threshold:
            return 0
        return math.floor(spend / threshold) if trigger.repeat else 1
    if isinstance(trigger, MilestoneTrigger):
        threshold = max(1, math.floor(trigger.threshold))
        return 1 if nights >= threshold else 0
    assert_never(trigger)


def extra_points(
    reward: Reward,
    times: int,
    base_points: float,
    voucher_point_value: Callable[[str], float],
) -> float:
    if isinstance(reward, PointsReward):
        return max(0.0, reward.points) * times
    if isinstance(reward, MultiplierReward):
        # Applied once to the base points, however many times the trigger fired.
        return base_points * (max(1.0, reward.z) - 1)
    if isinstance(reward, VoucherReward):
        return max(0.0, reward.count) * times * voucher_point_value(reward.voucher_id)
    assert_never(reward)


def normalize_rule(rule: Rule) -> Rule:
    if isinstance(rule.trigger, MilestoneTrigger) and rule.trigger.metric != "nights":
        return rule.model_copy(update={"trigger": rule.trigger.model_copy(update={"metric": "nights"})})
    return rule


def normalize_rules(rules: list[Rule]) -> list[Rule]:
    return [normalize_rule(rule) for rule in rules]


def rule_template(name: str = "") -> Rule:
    return Rule(name=name, trigger=PerNightTrigger(), reward=PointsReward(points=1000))


def build_rule(trigger_type: TriggerType) -> Rule:
    base = rule_template()
    if trigger_type == "per_night":
        return base
    if trigger_type == "per_stay":
        return base.model_copy(update={"trigger": PerStayTrigger()})
    if trigger_type == "spend":
        return base.model_copy(update={"trigger": SpendTrigger(amount=1000, repeat=False)})
    return base.model_copy(update={"trigger": MilestoneTrigger(metric="nights", threshold=3)})
