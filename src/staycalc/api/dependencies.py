from functools import lru_cache

from staycalc.agents.orchestrator import ComparisonOrchestrator
from staycalc.config import settings
from staycalc.fx.provider import FxRateProvider
from staycalc.repository.state_store import StateStore


@lru_cache
def get_orchestrator() -> ComparisonOrchestrator:
    return ComparisonOrchestrator(
        StateStore(settings.state_file),
        FxRateProvider(
            settings.fx_api_url,
            refresh_hours=settings.fx_refresh_hours,
            timeout_s=settings.fx_timeout_seconds,
        ),
    )
