from staycalc.domain.models import CurrencyCode, FxRates


def _rate(fx_rates: FxRates, currency: CurrencyCode) -> float | None:
    rate = fx_rates.rates.get(currency)
    if rate is None or rate <= 0:
        return None
    return rate


def convert(
    amount: float,
    from_currency: CurrencyCode | None,
    to_currency: CurrencyCode | None,
    fx_rates: FxRates | None = None,
) -> float:
    """Convert through the table's base currency, passing the amount through unchanged
    whenever the rates needed for the conversion are not available."""
    if from_currency == to_currency:
        return amount
    if fx_rates is None or from_currency is None or to_currency is None:
        return amount

    from_rate = _rate(fx_rates, from_currency)
    to_rate = _rate(fx_rates, to_currency)

    if fx_rates.base == from_currency and to_rate is not None:
        return amount * to_rate
    if fx_rates.base == to_currency and from_rate is not None:
        return amount / from_rate
    if from_rate is None or to_rate is None:
        return amount
    return (amount / from_rate) * to_rate
