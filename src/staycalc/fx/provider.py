import logging
from datetime import datetime, timedelta, timezone

import httpx

from staycalc.domain.models import SUPPORTED_CURRENCIES, CurrencyCode, FxRates

logger = logging.getLogger(__name__)

FX_BASE: CurrencyCode = "USD"


class FxRateProvider:
    """Fetches the exchange-rate table at most once per refresh window.

    Any failure keeps the last good table; the valuation engine passes amounts
    through unchanged when no table exists at all.
    """

    def __init__(
        self,
        api_url: str,
        refresh_hours: int = 24,
        timeout_s: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        self.api_url = api_url
        self.refresh_window = timedelta(hours=refresh_hours)
        self.timeout_s = timeout_s
        self._client = client

    def is_stale(self, current: FxRates | None, now: datetime | None = None) -> bool:
        if current is None:
            return True
        now = now or datetime.now(timezone.utc)
        updated_at = current.updated_at
        if updated_at.tzinfo is None:
            updated_at = updated_at.replace(tzinfo=timezone.utc)
        return now - updated_at >= self.refresh_window

    def refresh(self, current: FxRates | None, force: bool = False) -> FxRates | None:
        if not force and not self.is_stale(current):
            return current

        try:
            fetched = self._fetch()
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as exc:
            logger.warning("Exchange-rate refresh failed, keeping last table: %s", exc)
            return current

        logger.info("Exchange rates refreshed (%d currencies)", len(fetched.rates))
        return fetched

    def _fetch(self) -> FxRates:
        symbols = ",".join(code for code in SUPPORTED_CURRENCIES if code != FX_BASE)
        params = {"base": FX_BASE, "symbols": symbols}

        if self._client is not None:
            response = self._client.get(self.api_url, params=params, timeout=self.timeout_s)
        else:
            with httpx.Client(timeout=self.timeout_s) as client:
                response = client.get(self.api_url, params=params)
        response.raise_for_status()
        payload = response.json()

        quoted = payload.get("rates") if isinstance(payload, dict) else None
        if not isinstance(quoted, dict):
            raise ValueError(f"Unexpected exchange-rate payload: {payload!r}")

        rates: dict[CurrencyCode, float] = {FX_BASE: 1.0}
        for code in SUPPORTED_CURRENCIES:
            value = quoted.get(code)
            if value is not None and float(value) > 0:
                rates[code] = float(value)

        return FxRates(base=FX_BASE, rates=rates, updated_at=datetime.now(timezone.utc))
