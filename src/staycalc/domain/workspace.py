"""Immutable editing session for programs, stays and their promo rules.

Every operation takes a ``Workspace`` and returns a new one; nothing is
mutated in place, so a draft can be edited, compared and discarded freely.
"""

from typing import Literal

from pydantic import Field

from staycalc.domain.models import (
    Country,
    FxRates,
    GlobalSettings,
    HotelOption,
    Program,
    Record,
    Rule,
)
from staycalc.engine.rules import normalize_rule, normalize_rules

STATE_VERSION = 1


class WorkspaceError(ValueError):
    pass


class Workspace(Record):
    version: Literal[1] = STATE_VERSION
    global_settings: GlobalSettings = GlobalSettings()
    programs: list[Program] = Field(default_factory=list)
    hotels: list[HotelOption] = Field(default_factory=list)
    countries: list[Country] = Field(default_factory=list)
    fx_rates: FxRates | None = None

    def program(self, program_id: str) -> Program:
        for program in self.programs:
            if program.id == program_id:
                return program
        raise WorkspaceError(f"Unknown program: {program_id}")

    def hotel(self, hotel_id: str) -> HotelOption:
        for hotel in self.hotels:
            if hotel.id == hotel_id:
                return hotel
        raise WorkspaceError(f"Unknown hotel: {hotel_id}")


def _replace(items: list, item) -> list:
    replaced = [item if existing.id == item.id else existing for existing in items]
    if not any(existing.id == item.id for existing in items):
        replaced.append(item)
    return replaced


def normalize_hotel_tier(program: Program, hotel: HotelOption) -> HotelOption:
    """Point the hotel at a tier that belongs to its program.

    A selected sub-brand decides the tier; otherwise a stale tier id falls back
    to the program's first tier.
    """
    tier_ids = {tier.id for tier in program.brand_tiers}
    sub_brand = next((item for item in program.sub_brands if item.id == hotel.sub_brand_id), None)

    if sub_brand is not None and sub_brand.tier_id in tier_ids:
        tier_id = sub_brand.tier_id
    elif hotel.brand_tier_id in tier_ids:
        tier_id = hotel.brand_tier_id
    else:
        tier_id = program.brand_tiers[0].id if program.brand_tiers else ""

    return hotel.model_copy(
        update={
            "brand_tier_id": tier_id,
            "sub_brand_id": sub_brand.id if sub_brand is not None else None,
        }
    )


def update_global(workspace: Workspace, **changes) -> Workspace:
    global_settings = GlobalSettings.model_validate({**workspace.global_settings.model_dump(), **changes})
    return workspace.model_copy(update={"global_settings": global_settings})


def select_country(workspace: Workspace, country_id: str) -> Workspace:
    country = next((item for item in workspace.countries if item.id == country_id), None)
    if country is None:
        raise WorkspaceError(f"Unknown country: {country_id}")
    return update_global(workspace, country_id=country.id, tax_rate=country.tax_rate)


def upsert_program(workspace: Workspace, program: Program) -> Workspace:
    settings = program.settings.model_copy(update={"rules": normalize_rules(program.settings.rules)})
    program = program.model_copy(update={"settings": settings})
    hotels = [
        normalize_hotel_tier(program, hotel) if hotel.program_id == program.id else hotel
        for hotel in workspace.hotels
    ]
    return workspace.model_copy(update={"programs": _replace(workspace.programs, program), "hotels": hotels})


def delete_program(workspace: Workspace, program_id: str) -> Workspace:
    workspace.program(program_id)
    return workspace.model_copy(
        update={
            "programs": [program for program in workspace.programs if program.id != program_id],
            "hotels": [hotel for hotel in workspace.hotels if hotel.program_id != program_id],
        }
    )


def upsert_hotel(workspace: Workspace, hotel: HotelOption) -> Workspace:
    program = workspace.program(hotel.program_id)
    hotel = normalize_hotel_tier(program, hotel)
    hotel = hotel.model_copy(update={"rules": normalize_rules(hotel.rules)})
    return workspace.model_copy(update={"hotels": _replace(workspace.hotels, hotel)})


def delete_hotel(workspace: Workspace, hotel_id: str) -> Workspace:
    workspace.hotel(hotel_id)
    return workspace.model_copy(update={"hotels": [hotel for hotel in workspace.hotels if hotel.id != hotel_id]})


def upsert_rule(
    workspace: Workspace,
    rule: Rule,
    *,
    program_id: str | None = None,
    hotel_id: str | None = None,
) -> Workspace:
    if (program_id is None) == (hotel_id is None):
        raise WorkspaceError("A rule belongs to exactly one program or hotel.")
    rule = normalize_rule(rule)

    if program_id is not None:
        program = workspace.program(program_id)
        settings = program.settings.model_copy(update={"rules": _replace(program.settings.rules, rule)})
        return upsert_program(workspace, program.model_copy(update={"settings": settings}))

    hotel = workspace.hotel(hotel_id)
    return upsert_hotel(workspace, hotel.model_copy(update={"rules": _replace(hotel.rules, rule)}))


def delete_rule(
    workspace: Workspace,
    rule_id: str,
    *,
    program_id: str | None = None,
    hotel_id: str | None = None,
) -> Workspace:
    if (program_id is None) == (hotel_id is None):
        raise WorkspaceError("A rule belongs to exactly one program or hotel.")

    if program_id is not None:
        program = workspace.program(program_id)
        rules = [rule for rule in program.settings.rules if rule.id != rule_id]
        settings = program.settings.model_copy(update={"rules": rules})
        return upsert_program(workspace, program.model_copy(update={"settings": settings}))

    hotel = workspace.hotel(hotel_id)
    rules = [rule for rule in hotel.rules if rule.id != rule_id]
    return upsert_hotel(workspace, hotel.model_copy(update={"rules": rules}))


def dangling_hotels(workspace: Workspace) -> list[HotelOption]:
    program_ids = {program.id for program in workspace.programs}
    return [hotel for hotel in workspace.hotels if hotel.program_id not in program_ids]
