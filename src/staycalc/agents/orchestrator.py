import logging

from staycalc.domain.models import Calc, FxRates
from staycalc.domain.workspace import Workspace, dangling_hotels, delete_program
from staycalc.engine.evaluator import compute_hotel
from staycalc.engine.selectors import RankedHotel, rank_hotels
from staycalc.formatting import discount_label, fmt_int, fmt_money, fmt_pct
from staycalc.fx.provider import FxRateProvider
from staycalc.repository.presets import default_countries, default_global, default_programs
from staycalc.repository.state_store import StateStore
from staycalc.schemas.requests import CompareRequest, QuoteRequest
from staycalc.schemas.responses import CompareResponse, RankedHotelView

logger = logging.getLogger(__name__)


def summarize(calc: Calc) -> str:
    if calc.net_cost == float("inf"):
        return "program not found, reassign or delete this hotel"
    return (
        f"paid={fmt_money(calc.paid_post_tax, calc.currency)}, "
        f"points={fmt_int(calc.total_points)} worth {fmt_money(calc.points_value, calc.currency)}, "
        f"net={fmt_money(calc.net_cost, calc.currency)} "
        f"(rebate {fmt_pct(calc.rebate_rate)}, {discount_label(calc.net_pay_ratio)})"
    )


def _view(item: RankedHotel) -> RankedHotelView:
    return RankedHotelView(
        hotel_id=item.hotel.id,
        hotel_name=item.hotel.name,
        program_id=item.hotel.program_id,
        program_name=item.program.name if item.program else None,
        program_missing=item.program_missing,
        calc=item.calc,
        summary=summarize(item.calc),
    )


def build_response(ranked: list[RankedHotel]) -> CompareResponse:
    views = [_view(item) for item in ranked]
    best = next((view for view in views if not view.program_missing), None)
    return CompareResponse(
        best=best,
        ranked=views,
        dangling_hotel_ids=[view.hotel_id for view in views if view.program_missing],
    )


class ComparisonOrchestrator:
    def __init__(self, state_store: StateStore, fx_provider: FxRateProvider):
        self.state_store = state_store
        self.fx_provider = fx_provider

    def load_workspace(self) -> Workspace:
        workspace = self.state_store.load()
        if workspace is not None:
            return workspace

        logger.info("No stored workspace at %s, starting from presets", self.state_store.state_file)
        return Workspace(
            global_settings=default_global(),
            programs=default_programs(),
            countries=default_countries(),
        )

    def quote(self, request: QuoteRequest) -> Calc:
        return compute_hotel(request.global_settings, request.program, request.hotel, request.fx_rates)

    def compare(self, request: CompareRequest) -> CompareResponse:
        ranked = rank_hotels(request.global_settings, request.programs, request.hotels, request.fx_rates)
        return build_response(ranked)

    def refresh_rates(self, force: bool = False) -> FxRates | None:
        workspace = self.load_workspace()
        fx_rates = self.fx_provider.refresh(workspace.fx_rates, force=force)
        if fx_rates is not workspace.fx_rates:
            self.state_store.save(workspace.model_copy(update={"fx_rates": fx_rates}))
        return fx_rates

    def ranking(self) -> CompareResponse:
        workspace = self.load_workspace()
        fx_rates = self.fx_provider.refresh(workspace.fx_rates)
        if fx_rates is not workspace.fx_rates:
            workspace = workspace.model_copy(update={"fx_rates": fx_rates})
            self.state_store.save(workspace)

        for hotel in dangling_hotels(workspace):
            logger.warning("Hotel %s references missing program %s", hotel.id, hotel.program_id)

        ranked = rank_hotels(workspace.global_settings, workspace.programs, workspace.hotels, workspace.fx_rates)
        return build_response(ranked)

    def delete_program(self, program_id: str) -> Workspace:
        workspace = delete_program(self.load_workspace(), program_id)
        self.state_store.save(workspace)
        return workspace

    def save_workspace(self, workspace: Workspace) -> Workspace:
        self.state_store.save(workspace)
        return workspace
