from staycalc.domain.models import (
    BrandTier,
    Calc,
    CurrencyCode,
    EliteTier,
    FxRates,
    GlobalSettings,
    HotelOption,
    Program,
    PromoOutcome,
)
from staycalc.engine.currency import convert
from staycalc.engine.rules import extra_points, times_fired

DEFAULT_RATE_PER_USD = 10.0
POINT_VALUE_UNIT = 10_000


def resolve_tier_or_default(program: Program, tier_id: str) -> BrandTier | None:
    for tier in program.brand_tiers:
        if tier.id == tier_id:
            return tier
    return program.brand_tiers[0] if program.brand_tiers else None


def resolve_elite_tier_or_default(program: Program, elite_tier_id: str) -> EliteTier | None:
    for elite in program.elite_tiers:
        if elite.id == elite_tier_id:
            return elite
    return program.elite_tiers[0] if program.elite_tiers else None


def point_value_per_point(program: Program) -> float:
    return max(0.0, program.settings.point_value.amount) / POINT_VALUE_UNIT


def resolve_voucher_value_or_zero(
    program: Program, voucher_id: str, fx_rates: FxRates | None = None
) -> float:
    voucher = next((item for item in program.settings.vouchers if item.id == voucher_id), None)
    if voucher is None:
        return 0.0
    if voucher.value_mode == "POINTS":
        return max(0.0, voucher.value_points)

    per_point = point_value_per_point(program)
    if per_point <= 0:
        return 0.0
    cash = convert(
        max(0.0, voucher.value_cash.amount),
        voucher.value_cash.currency,
        program.settings.point_value.currency,
        fx_rates,
    )
    return cash / per_point


def _price_totals(
    global_settings: GlobalSettings, hotel: HotelOption, nights: int, tax_rate: float
) -> tuple[float, float]:
    pre_rate = max(0.0, hotel.rate_pre_tax.amount) if hotel.rate_pre_tax else 0.0
    post_rate = max(0.0, hotel.rate_post_tax.amount) if hotel.rate_post_tax else 0.0

    if global_settings.tax_input_mode == "PRE_TAX_PLUS_RATE":
        pre_tax = pre_rate * nights
        return pre_tax, pre_tax * (1 + tax_rate)
    if global_settings.tax_input_mode == "POST_TAX_PLUS_RATE":
        post_tax = post_rate * nights
        return post_tax / (1 + tax_rate), post_tax
    # PRE_AND_POST, or not configured yet: both figures are taken as entered.
    return pre_rate * nights, post_rate * nights


def _hotel_currency(
    hotel: HotelOption, preferred: CurrencyCode | None, program: Program
) -> CurrencyCode:
    if hotel.rate_post_tax is not None:
        return hotel.rate_post_tax.currency
    if hotel.rate_pre_tax is not None:
        return hotel.rate_pre_tax.currency
    return preferred or program.currency


def compute_hotel(
    global_settings: GlobalSettings,
    program: Program,
    hotel: HotelOption,
    fx_rates: FxRates | None = None,
) -> Calc:
    nights = max(1, round(global_settings.nights))
    tax_rate = max(0.0, global_settings.tax_rate)

    pre_tax, post_tax = _price_totals(global_settings, hotel, nights, tax_rate)
    hotel_currency = _hotel_currency(hotel, global_settings.preferred_currency, program)
    preferred = global_settings.preferred_currency or hotel_currency

    earn_base = post_tax if program.settings.earn_base == "POST_TAX" else pre_tax
    earn_base_brand = convert(earn_base, hotel_currency, program.currency, fx_rates)

    tier = resolve_tier_or_default(program, hotel.brand_tier_id)
    base_rate = tier.rate_per_usd if tier else DEFAULT_RATE_PER_USD
    elite = resolve_elite_tier_or_default(program, program.settings.elite_tier_id)
    bonus_rate = max(0.0, elite.bonus_rate) if elite else 0.0

    base_points = earn_base_brand * base_rate
    elite_bonus_points = base_points * bonus_rate

    spend = convert(pre_tax, hotel_currency, preferred, fx_rates)
    voucher_values: dict[str, float] = {}

    def voucher_point_value(voucher_id: str) -> float:
        if voucher_id not in voucher_values:
            voucher_values[voucher_id] = resolve_voucher_value_or_zero(program, voucher_id, fx_rates)
        return voucher_values[voucher_id]

    promos: list[PromoOutcome] = []
    for rule in [*program.settings.rules, *hotel.rules]:
        if not rule.enabled:
            continue
        times = times_fired(rule.trigger, nights, spend)
        points = extra_points(rule.reward, times, base_points, voucher_point_value)
        promos.append(
            PromoOutcome(rule_id=rule.id, rule_name=rule.name, times_fired=times, extra_points=points)
        )
    promo_extra_points = sum((item.extra_points for item in promos), 0.0)

    total_points = base_points + elite_bonus_points + promo_extra_points
    per_point = convert(
        point_value_per_point(program),
        program.settings.point_value.currency,
        preferred,
        fx_rates,
    )
    points_value = total_points * per_point

    paid_pre_tax = convert(pre_tax, hotel_currency, preferred, fx_rates)
    paid_post_tax = convert(post_tax, hotel_currency, preferred, fx_rates)
    net_cost = paid_post_tax - points_value

    return Calc(
        currency=preferred,
        paid_pre_tax=paid_pre_tax,
        paid_post_tax=paid_post_tax,
        base_points=base_points,
        elite_bonus_points=elite_bonus_points,
        promo_extra_points=promo_extra_points,
        total_points=total_points,
        points_value=points_value,
        net_cost=net_cost,
        rebate_rate=points_value / paid_post_tax if paid_post_tax > 0 else 0.0,
        net_pay_ratio=net_cost / paid_post_tax if paid_post_tax > 0 else 1.0,
        promos=promos,
    )
