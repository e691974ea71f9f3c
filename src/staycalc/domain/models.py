import math
import secrets
from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer

CurrencyCode = Literal["USD", "CNY", "HKD", "GBP", "EUR", "SGD"]
SUPPORTED_CURRENCIES: tuple[CurrencyCode, ...] = ("USD", "CNY", "HKD", "GBP", "EUR", "SGD")

TaxInputMode = Literal["PRE_TAX_PLUS_RATE", "POST_TAX_PLUS_RATE", "PRE_AND_POST"]
EarnBase = Literal["PRE_TAX", "POST_TAX"]
VoucherValueMode = Literal["CASH", "POINTS"]


def new_id() -> str:
    return secrets.token_hex(8)


class Record(BaseModel):
    model_config = ConfigDict(frozen=True)


class Money(Record):
    amount: float
    currency: CurrencyCode


class FxRates(Record):
    base: CurrencyCode = "USD"
    rates: dict[CurrencyCode, float] = Field(default_factory=dict)
    updated_at: datetime


class Country(Record):
    id: str
    name: str
    tax_rate: float = 0


class GlobalSettings(Record):
    preferred_currency: CurrencyCode | None = None
    nights: float = 2
    country_id: str = "us"
    tax_input_mode: TaxInputMode | None = None
    tax_rate: float = 0.1


class PerNightTrigger(Record):
    type: Literal["per_night"] = "per_night"


class PerStayTrigger(Record):
    type: Literal["per_stay"] = "per_stay"


class SpendTrigger(Record):
    type: Literal["spend"] = "spend"
    amount: float
    repeat: bool = False


class MilestoneTrigger(Record):
    type: Literal["milestone"] = "milestone"
    metric: Literal["nights", "stay"] = "nights"
    threshold: float = 1


Trigger = Annotated[
    Union[PerNightTrigger, PerStayTrigger, SpendTrigger, MilestoneTrigger],
    Field(discriminator="type"),
]


class PointsReward(Record):
    type: Literal["points"] = "points"
    points: float


class MultiplierReward(Record):
    type: Literal["multiplier"] = "multiplier"
    z: float = 1


class VoucherReward(Record):
    type: Literal["voucher"] = "voucher"
    voucher_id: str
    count: float = 1


Reward = Annotated[
    Union[PointsReward, MultiplierReward, VoucherReward],
    Field(discriminator="type"),
]


class Rule(Record):
    id: str = Field(default_factory=new_id)
    name: str = ""
    enabled: bool = True
    trigger: Trigger
    reward: Reward


class BrandTier(Record):
    id: str = Field(default_factory=new_id)
    label: str
    rate_per_usd: float


class EliteTier(Record):
    id: str = Field(default_factory=new_id)
    label: str
    bonus_rate: float = 0


class SubBrand(Record):
    id: str = Field(default_factory=new_id)
    name: str
    tier_id: str


class Voucher(Record):
    id: str = Field(default_factory=new_id)
    name: str
    value_mode: VoucherValueMode = "CASH"
    value_cash: Money = Money(amount=0, currency="USD")
    value_points: float = 0


class ProgramSettings(Record):
    elite_tier_id: str = ""
    point_value: Money = Money(amount=80, currency="USD")
    voucher_enabled: bool = False
    vouchers: list[Voucher] = Field(default_factory=list)
    earn_base: EarnBase = "PRE_TAX"
    rules: list[Rule] = Field(default_factory=list)


class Program(Record):
    id: str = Field(default_factory=new_id)
    name: str
    preset_id: str | None = None
    currency: CurrencyCode = "USD"
    brand_tiers: list[BrandTier] = Field(default_factory=list)
    elite_tiers: list[EliteTier] = Field(default_factory=list)
    sub_brands: list[SubBrand] = Field(default_factory=list)
    settings: ProgramSettings = ProgramSettings()


class HotelOption(Record):
    id: str = Field(default_factory=new_id)
    name: str
    program_id: str
    brand_tier_id: str = ""
    sub_brand_id: str | None = None
    rate_pre_tax: Money | None = None
    rate_post_tax: Money | None = None
    rules: list[Rule] = Field(default_factory=list)


class PromoOutcome(Record):
    rule_id: str
    rule_name: str
    times_fired: int
    extra_points: float


class Calc(Record):
    currency: CurrencyCode | None = None
    paid_pre_tax: float
    paid_post_tax: float
    base_points: float
    elite_bonus_points: float
    promo_extra_points: float
    total_points: float
    points_value: float
    net_cost: float
    rebate_rate: float
    net_pay_ratio: float
    promos: list[PromoOutcome] = Field(default_factory=list)

    @field_serializer("net_cost", when_used="json")
    def serialize_net_cost(self, value: float) -> float | str:
        # JSON has no infinity literal.
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        return value
