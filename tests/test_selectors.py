import math

from staycalc.domain.models import HotelOption, Money
from staycalc.engine.selectors import rank_hotels, unresolved_calc
from staycalc.repository.state_store import StateStore


def test_rank_hotels_prefers_lowest_net_cost(sample_workspace_path) -> None:
    workspace = StateStore(str(sample_workspace_path)).load()

    ranked = rank_hotels(workspace.global_settings, workspace.programs, workspace.hotels, workspace.fx_rates)

    assert [item.hotel.id for item in ranked] == ["sheraton-downtown", "park-hyatt", "orphan-inn"]
    assert round(ranked[0].calc.net_cost, 2) == 392.0
    assert round(ranked[1].calc.net_cost, 2) == 601.5


def test_dangling_program_sorts_last(global_settings, marriott, hotel) -> None:
    orphan = HotelOption(id="orphan", name="Orphan", program_id="gone", rate_pre_tax=Money(amount=1, currency="USD"))

    ranked = rank_hotels(global_settings, [marriott], [orphan, hotel])

    assert ranked[-1].hotel.id == "orphan"
    assert ranked[-1].program_missing
    assert math.isinf(ranked[-1].calc.net_cost)
    assert not ranked[0].program_missing


def test_unresolved_calc_is_neutral() -> None:
    calc = unresolved_calc("USD")
    assert calc.net_cost == float("inf")
    assert calc.total_points == 0
    assert calc.net_pay_ratio == 1
    assert calc.rebate_rate == 0


def test_equal_costs_keep_input_order(global_settings, marriott, hotel) -> None:
    twin = hotel.model_copy(update={"id": "twin"})
    ranked = rank_hotels(global_settings, [marriott], [twin, hotel])
    assert [item.hotel.id for item in ranked] == ["twin", "sheraton"]


def test_unresolved_net_cost_serializes_as_infinity() -> None:
    calc = unresolved_calc("USD")
    assert calc.model_dump(mode="json")["net_cost"] == "Infinity"
    assert '"net_cost":"Infinity"' in calc.model_dump_json()
    assert math.isinf(calc.model_dump()["net_cost"])
