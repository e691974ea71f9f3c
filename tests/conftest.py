from datetime import datetime, timezone
from pathlib import Path

import pytest

from staycalc.domain.models import (
    BrandTier,
    EliteTier,
    FxRates,
    GlobalSettings,
    HotelOption,
    Money,
    Program,
    ProgramSettings,
    Voucher,
)

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SAMPLE_WORKSPACE = PROJECT_ROOT / "data" / "state" / "sample_workspace.json"


@pytest.fixture
def sample_workspace_path() -> Path:
    return SAMPLE_WORKSPACE


@pytest.fixture
def global_settings() -> GlobalSettings:
    return GlobalSettings(
        preferred_currency="USD",
        nights=2,
        country_id="us",
        tax_input_mode="PRE_TAX_PLUS_RATE",
        tax_rate=0.1,
    )


@pytest.fixture
def marriott() -> Program:
    return Program(
        id="marriott",
        name="Marriott Bonvoy",
        currency="USD",
        brand_tiers=[
            BrandTier(id="10x", label="10x", rate_per_usd=10),
            BrandTier(id="5x", label="5x", rate_per_usd=5),
        ],
        elite_tiers=[
            EliteTier(id="member", label="Member", bonus_rate=0),
            EliteTier(id="platinum", label="Platinum", bonus_rate=0.5),
        ],
        settings=ProgramSettings(
            elite_tier_id="platinum",
            point_value=Money(amount=80, currency="USD"),
            voucher_enabled=True,
            vouchers=[
                Voucher(id="35k", name="35K", value_mode="POINTS", value_points=35000),
                Voucher(id="cash-night", name="Cash night", value_mode="CASH", value_cash=Money(amount=200, currency="USD")),
            ],
            earn_base="PRE_TAX",
        ),
    )


@pytest.fixture
def hotel() -> HotelOption:
    return HotelOption(
        id="sheraton",
        name="Sheraton Downtown",
        program_id="marriott",
        brand_tier_id="10x",
        rate_pre_tax=Money(amount=200, currency="USD"),
    )


@pytest.fixture
def fx_rates() -> FxRates:
    return FxRates(
        base="USD",
        rates={"USD": 1.0, "EUR": 0.9, "CNY": 7.2, "GBP": 0.8},
        updated_at=datetime(2026, 10, 1, tzinfo=timezone.utc),
    )
