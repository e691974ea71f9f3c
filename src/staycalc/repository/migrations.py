"""Fold older persisted shapes into the current workspace layout.

All functions work on plain JSON dicts before model validation, so a file
written by an earlier release still loads.
"""

from typing import Any

from staycalc.domain.models import new_id

DEFAULT_VOUCHER_NAME = "Free night"


def normalize_point_value(amount: float) -> float:
    # Older files stored the value of a single point instead of 10,000 points.
    return amount * 10_000 if 0 < amount <= 1 else amount


def _legacy_voucher(settings: dict[str, Any], currency: str) -> dict[str, Any]:
    cash = settings.get("fn_value_cash")
    if not isinstance(cash, dict) or "amount" not in cash:
        cash = {"amount": settings.get("fn_value", 0) or 0, "currency": currency}
    return {
        "id": new_id(),
        "name": DEFAULT_VOUCHER_NAME,
        "value_mode": settings.get("fn_value_mode") or "CASH",
        "value_cash": cash,
        "value_points": settings.get("fn_value_points", 0) or 0,
    }


def _migrate_vouchers(settings: dict[str, Any], currency: str) -> tuple[bool, list[dict[str, Any]]]:
    legacy_enabled = bool(settings.get("voucher_enabled", settings.get("fn_voucher_enabled", False)))
    vouchers = settings.get("vouchers") or []
    if not vouchers and legacy_enabled:
        vouchers = [_legacy_voucher(settings, currency)]

    migrated = []
    for voucher in vouchers:
        cash = voucher.get("value_cash") or {"amount": 0}
        migrated.append(
            {
                "id": voucher.get("id") or new_id(),
                "name": voucher.get("name") or DEFAULT_VOUCHER_NAME,
                "value_mode": voucher.get("value_mode") or "CASH",
                "value_cash": {"amount": cash.get("amount", 0), "currency": cash.get("currency") or currency},
                "value_points": voucher.get("value_points", 0) or 0,
            }
        )
    return legacy_enabled, migrated


def migrate_rules(rules: list[dict[str, Any]], voucher_id: str | None) -> list[dict[str, Any]]:
    migrated = []
    for rule in rules or []:
        rule = dict(rule)
        trigger = dict(rule.get("trigger") or {"type": "per_night"})
        if trigger.get("type") == "milestone":
            trigger["metric"] = "nights"
        rule["trigger"] = trigger

        reward = dict(rule.get("reward") or {"type": "points", "points": 0})
        if reward.get("type") == "fn":
            reward = {"type": "voucher", "voucher_id": voucher_id or "", "count": max(0, reward.get("count", 0) or 0)}
        rule["reward"] = reward
        migrated.append(rule)
    return migrated


def migrate_program(program: dict[str, Any]) -> dict[str, Any]:
    program = dict(program)
    currency = program.get("currency") or "USD"
    program["currency"] = currency
    settings = dict(program.get("settings") or {})

    point_value = settings.get("point_value")
    if not isinstance(point_value, dict):
        point_value = {"amount": point_value or 0, "currency": currency}
    settings["point_value"] = {
        "amount": normalize_point_value(float(point_value.get("amount", 0) or 0)),
        "currency": point_value.get("currency") or currency,
    }

    voucher_enabled, vouchers = _migrate_vouchers(settings, currency)
    settings["voucher_enabled"] = voucher_enabled
    settings["vouchers"] = vouchers
    for key in ("fn_voucher_enabled", "fn_value_mode", "fn_value_cash", "fn_value", "fn_value_points"):
        settings.pop(key, None)

    settings["earn_base"] = settings.get("earn_base") or "PRE_TAX"
    settings["rules"] = migrate_rules(settings.get("rules") or [], vouchers[0]["id"] if vouchers else None)
    program["settings"] = settings

    tier_ids = [tier.get("id") for tier in program.get("brand_tiers") or []]
    first_tier_id = tier_ids[0] if tier_ids else ""
    sub_brands = []
    for sub_brand in program.get("sub_brands") or []:
        tier_id = sub_brand.get("tier_id")
        sub_brands.append(
            {
                **sub_brand,
                "id": sub_brand.get("id") or new_id(),
                "tier_id": tier_id if tier_id in tier_ids else first_tier_id,
            }
        )
    program["sub_brands"] = sub_brands
    return program


def migrate_hotel(
    hotel: dict[str, Any], program: dict[str, Any] | None, preferred_currency: str | None
) -> dict[str, Any]:
    hotel = dict(hotel)

    if not isinstance(hotel.get("rate_pre_tax"), dict):
        hotel["rate_pre_tax"] = None
    if not isinstance(hotel.get("rate_post_tax"), dict):
        legacy_rate = hotel.pop("room_rate_per_night", None)
        hotel["rate_post_tax"] = (
            {"amount": legacy_rate, "currency": preferred_currency or "USD"} if legacy_rate is not None else None
        )
    hotel.pop("room_rate_per_night", None)

    vouchers = (program or {}).get("settings", {}).get("vouchers") or []
    hotel["rules"] = migrate_rules(hotel.get("rules") or [], vouchers[0]["id"] if vouchers else None)

    if program is None:
        return hotel

    tier_ids = [tier.get("id") for tier in program.get("brand_tiers") or []]
    sub_brands = {item["id"]: item for item in program.get("sub_brands") or [] if "id" in item}
    sub_brand = sub_brands.get(hotel.get("sub_brand_id"))
    if sub_brand is not None:
        hotel["brand_tier_id"] = sub_brand["tier_id"]
    elif hotel.get("brand_tier_id") not in tier_ids:
        hotel["brand_tier_id"] = tier_ids[0] if tier_ids else ""
    hotel["sub_brand_id"] = sub_brand["id"] if sub_brand is not None else None
    return hotel


def migrate_global(global_settings: dict[str, Any]) -> dict[str, Any]:
    return {
        **global_settings,
        "preferred_currency": global_settings.get("preferred_currency"),
        "country_id": global_settings.get("country_id") or "us",
        "tax_input_mode": global_settings.get("tax_input_mode"),
        "tax_rate": global_settings.get("tax_rate", 0.1),
    }


def migrate_state(raw: dict[str, Any]) -> dict[str, Any]:
    global_settings = migrate_global(raw.get("global_settings") or {})
    programs = [migrate_program(program) for program in raw.get("programs") or []]
    programs_by_id = {program.get("id"): program for program in programs}
    hotels = [
        migrate_hotel(hotel, programs_by_id.get(hotel.get("program_id")), global_settings["preferred_currency"])
        for hotel in raw.get("hotels") or []
    ]
    return {
        **raw,
        "global_settings": global_settings,
        "programs": programs,
        "hotels": hotels,
    }
