from pydantic import BaseModel

from staycalc.domain.models import Calc, CurrencyCode, FxRates, GlobalSettings, HotelOption, Program
from staycalc.engine.evaluator import compute_hotel


class RankedHotel(BaseModel):
    hotel: HotelOption
    program: Program | None
    calc: Calc

    @property
    def program_missing(self) -> bool:
        return self.program is None


def unresolved_calc(currency: CurrencyCode | None = None) -> Calc:
    return Calc(
        currency=currency,
        paid_pre_tax=0.0,
        paid_post_tax=0.0,
        base_points=0.0,
        elite_bonus_points=0.0,
        promo_extra_points=0.0,
        total_points=0.0,
        points_value=0.0,
        net_cost=float("inf"),
        rebate_rate=0.0,
        net_pay_ratio=1.0,
    )


def evaluate_hotel(
    global_settings: GlobalSettings,
    programs_by_id: dict[str, Program],
    hotel: HotelOption,
    fx_rates: FxRates | None = None,
) -> RankedHotel:
    program = programs_by_id.get(hotel.program_id)
    if program is None:
        return RankedHotel(
            hotel=hotel,
            program=None,
            calc=unresolved_calc(global_settings.preferred_currency),
        )
    return RankedHotel(
        hotel=hotel,
        program=program,
        calc=compute_hotel(global_settings, program, hotel, fx_rates),
    )


def rank_hotels(
    global_settings: GlobalSettings,
    programs: list[Program],
    hotels: list[HotelOption],
    fx_rates: FxRates | None = None,
) -> list[RankedHotel]:
    programs_by_id = {program.id: program for program in programs}
    evaluations = [evaluate_hotel(global_settings, programs_by_id, hotel, fx_rates) for hotel in hotels]
    evaluations.sort(key=lambda item: item.calc.net_cost)
    return evaluations
