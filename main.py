import argparse
import logging

from staycalc.api.app import run as run_api
from staycalc.api.dependencies import get_orchestrator
from staycalc.config import settings
from staycalc.domain.workspace import Workspace
from staycalc.formatting import fmt_money
from staycalc.repository.presets import default_countries, default_global, default_programs


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="StayCalc unified entrypoint")
    parser.add_argument(
        "mode",
        nargs="?",
        choices=["api", "rank", "init", "fx"],
        default="api",
        help="Run mode: api (default), rank, init, fx",
    )
    parser.add_argument("--extras", action="store_true", help="init: include the extra preset brands")
    parser.add_argument("--force", action="store_true", help="fx: refresh even if rates are fresh")
    return parser


def print_ranking() -> None:
    result = get_orchestrator().ranking()
    if not result.ranked:
        print("No hotels in the workspace.")
        return

    for position, item in enumerate(result.ranked, start=1):
        program = item.program_name or "(missing program)"
        print(f"{position}. {item.hotel_name} [{program}] net {fmt_money(item.calc.net_cost, item.calc.currency)}")
        print(f"   {item.summary}")


def init_workspace(include_extras: bool) -> None:
    workspace = Workspace(
        global_settings=default_global(),
        programs=default_programs(include_extras=include_extras),
        countries=default_countries(),
    )
    get_orchestrator().save_workspace(workspace)
    print(f"Wrote {len(workspace.programs)} preset program(s) to {settings.state_file}")


def refresh_fx(force: bool) -> None:
    fx_rates = get_orchestrator().refresh_rates(force=force)
    if fx_rates is None:
        print("No exchange rates available; amounts will not be converted.")
        return
    rates = ", ".join(f"{code}={rate:g}" for code, rate in sorted(fx_rates.rates.items()))
    print(f"Rates (base {fx_rates.base}, {fx_rates.updated_at:%Y-%m-%d %H:%M}): {rates}")


def main() -> None:
    args = build_parser().parse_args()
    configure_logging(settings.log_level)

    if args.mode == "api":
        run_api()
        return

    if args.mode == "rank":
        print_ranking()
        return

    if args.mode == "init":
        init_workspace(args.extras)
        return

    refresh_fx(args.force)


if __name__ == "__main__":
    main()
