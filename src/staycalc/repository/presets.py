from staycalc.domain.models import (
    BrandTier,
    Country,
    CurrencyCode,
    EarnBase,
    EliteTier,
    GlobalSettings,
    HotelOption,
    Money,
    Program,
    ProgramSettings,
    SubBrand,
    Voucher,
)

DEFAULT_COUNTRIES: tuple[Country, ...] = (
    Country(id="us", name="United States", tax_rate=0.08),
    Country(id="cn", name="China", tax_rate=0.1),
    Country(id="jp", name="Japan", tax_rate=0.1),
    Country(id="sg", name="Singapore", tax_rate=0.09),
    Country(id="gb", name="United Kingdom", tax_rate=0.2),
    Country(id="eu", name="Eurozone", tax_rate=0.2),
    Country(id="hk", name="Hong Kong", tax_rate=0.0),
)


def default_countries() -> list[Country]:
    return list(DEFAULT_COUNTRIES)


def default_global() -> GlobalSettings:
    return GlobalSettings(preferred_currency=None, nights=2, country_id="us", tax_input_mode=None, tax_rate=0.1)


def _elite_label(name: str, bonus: float) -> str:
    return f"{name} (+{round(bonus * 100)}%)"


def _elites(*levels: tuple[str, float]) -> list[EliteTier]:
    return [EliteTier(label=_elite_label(name, bonus), bonus_rate=bonus) for name, bonus in levels]


def _sub_brands(tiers: list[BrandTier], *entries: tuple[str, int]) -> list[SubBrand]:
    return [SubBrand(name=name, tier_id=tiers[index].id) for name, index in entries]


def _points_voucher(name: str, points: float) -> Voucher:
    return Voucher(name=name, value_mode="POINTS", value_points=points)


def _cash_voucher(name: str) -> Voucher:
    return Voucher(name=name, value_mode="CASH", value_cash=Money(amount=0, currency="USD"))


def _program(
    preset_id: str,
    name: str,
    tiers: list[BrandTier],
    elites: list[EliteTier],
    point_value: float,
    sub_brands: list[SubBrand] | None = None,
    vouchers: list[Voucher] | None = None,
    currency: CurrencyCode = "USD",
    earn_base: EarnBase = "PRE_TAX",
) -> Program:
    return Program(
        name=name,
        preset_id=preset_id,
        currency=currency,
        brand_tiers=tiers,
        elite_tiers=elites,
        sub_brands=sub_brands or [],
        settings=ProgramSettings(
            elite_tier_id=elites[0].id,
            point_value=Money(amount=point_value, currency=currency),
            voucher_enabled=bool(vouchers),
            vouchers=vouchers or [],
            earn_base=earn_base,
        ),
    )


def _marriott() -> Program:
    tiers = [
        BrandTier(label="10x (most brands)", rate_per_usd=10),
        BrandTier(label="5x (Residence Inn/Element)", rate_per_usd=5),
        BrandTier(label="4x (StudioRes)", rate_per_usd=4),
        BrandTier(label="2.5x (Marriott Executive Apartments)", rate_per_usd=2.5),
    ]
    elites = _elites(
        ("Member", 0), ("Silver", 0.1), ("Gold", 0.25), ("Platinum", 0.5), ("Titanium", 0.75), ("Ambassador", 0.75)
    )
    sub_brands = _sub_brands(
        tiers,
        ("The Ritz-Carlton", 0),
        ("St. Regis", 0),
        ("JW Marriott", 0),
        ("Marriott", 0),
        ("Sheraton", 0),
        ("Westin", 0),
        ("W Hotels", 0),
        ("Le Meridien", 0),
        ("Renaissance", 0),
        ("Autograph Collection", 0),
        ("Delta Hotels", 0),
        ("Fairfield", 0),
        ("Courtyard", 0),
        ("Residence Inn", 1),
        ("Element", 1),
        ("StudioRes", 2),
        ("Marriott Executive Apartments", 3),
    )
    vouchers = [_points_voucher("35K", 35000), _points_voucher("50K", 50000), _points_voucher("85K", 85000)]
    return _program("marriott", "Marriott Bonvoy", tiers, elites, 80, sub_brands, vouchers)


def _ihg() -> Program:
    tiers = [
        BrandTier(label="10x (most brands)", rate_per_usd=10),
        BrandTier(label="5x (Staybridge/Candlewood)", rate_per_usd=5),
    ]
    elites = _elites(("Member", 0), ("Silver", 0.2), ("Gold", 0.4), ("Platinum", 0.6), ("Diamond", 1.0))
    sub_brands = _sub_brands(
        tiers,
        ("InterContinental", 0),
        ("Regent", 0),
        ("Kimpton", 0),
        ("Holiday Inn", 0),
        ("Crowne Plaza", 0),
        ("Holiday Inn Express", 0),
        ("Staybridge Suites", 1),
        ("Candlewood Suites", 1),
    )
    return _program("ihg", "IHG One Rewards", tiers, elites, 60, sub_brands, [_points_voucher("40K", 40000)])


def _hyatt() -> Program:
    tiers = [
        BrandTier(label="5x (most brands)", rate_per_usd=5),
        BrandTier(label="2.5x (Hyatt Studios)", rate_per_usd=2.5),
    ]
    elites = _elites(("Member", 0), ("Discoverist", 0.1), ("Explorist", 0.2), ("Globalist", 0.3))
    sub_brands = _sub_brands(
        tiers,
        ("Park Hyatt", 0),
        ("Grand Hyatt", 0),
        ("Hyatt Regency", 0),
        ("Andaz", 0),
        ("Alila", 0),
        ("Caption", 0),
        ("Hyatt House", 0),
        ("Hyatt Place", 0),
        ("Hyatt Studios", 1),
    )
    return _program("hyatt", "World of Hyatt", tiers, elites, 150, sub_brands, [_cash_voucher("C4"), _cash_voucher("C7")])


def _hilton() -> Program:
    tiers = [
        BrandTier(label="10x (most brands)", rate_per_usd=10),
        BrandTier(label="5x (Tru/Home2)", rate_per_usd=5),
        BrandTier(label="3x (select brands)", rate_per_usd=3),
    ]
    elites = _elites(("Member", 0), ("Silver", 0.2), ("Gold", 0.8), ("Diamond", 1.0))
    sub_brands = _sub_brands(
        tiers,
        ("Waldorf Astoria", 0),
        ("Conrad", 0),
        ("Hilton", 0),
        ("DoubleTree", 0),
        ("Embassy Suites", 0),
        ("Hampton", 0),
        ("Tru", 1),
        ("Home2 Suites", 1),
    )
    return _program("hilton", "Hilton Honors", tiers, elites, 50, sub_brands)


def _extras() -> list[Program]:
    ten_x = "10x (most brands)"
    return [
        _program(
            "accor",
            "ALL - Accor Live Limitless",
            [BrandTier(label=ten_x, rate_per_usd=10)],
            _elites(("Member", 0), ("Silver", 0.1), ("Gold", 0.25), ("Platinum", 0.5)),
            100,
        ),
        _program(
            "wyndham",
            "Wyndham Rewards",
            [BrandTier(label=ten_x, rate_per_usd=10)],
            _elites(("Member", 0), ("Gold", 0.1), ("Platinum", 0.15), ("Diamond", 0.2)),
            80,
        ),
        _program(
            "shangrila",
            "Shangri-La Circle",
            [BrandTier(label=ten_x, rate_per_usd=10)],
            _elites(("Member", 0), ("Jade", 0.25), ("Diamond", 0.5)),
            120,
        ),
        _program(
            "atour",
            "Atour",
            [BrandTier(label="1x (1 CNY = 1 pt)", rate_per_usd=1)],
            _elites(("Member", 0), ("Silver", 0), ("Gold", 0), ("Platinum", 0), ("Black", 1.0)),
            100,
            currency="CNY",
            earn_base="POST_TAX",
        ),
        _program(
            "huazhu",
            "H World",
            [BrandTier(label="1x (1 CNY = 1 pt)", rate_per_usd=1)],
            _elites(("Star", 0), ("Silver", 1.0), ("Gold", 1.5), ("Platinum", 1.5)),
            100,
            currency="CNY",
            earn_base="POST_TAX",
        ),
    ]


def default_programs(include_extras: bool = False) -> list[Program]:
    programs = [_marriott(), _ihg(), _hyatt(), _hilton()]
    if include_extras:
        programs.extend(_extras())
    return programs


def preset_program(preset_id: str) -> Program | None:
    return next((program for program in default_programs(include_extras=True) if program.preset_id == preset_id), None)


def blank_program(name: str = "New brand") -> Program:
    elites = [EliteTier(label="Member", bonus_rate=0)]
    return Program(
        name=name,
        currency="USD",
        brand_tiers=[BrandTier(label="Base", rate_per_usd=10)],
        elite_tiers=elites,
        settings=ProgramSettings(elite_tier_id=elites[0].id, point_value=Money(amount=80, currency="USD")),
    )


def default_hotel(programs: list[Program], preferred_currency: CurrencyCode) -> HotelOption:
    program = programs[0] if programs else None
    return HotelOption(
        name="Hotel",
        program_id=program.id if program else "",
        brand_tier_id=program.brand_tiers[0].id if program and program.brand_tiers else "",
        rate_post_tax=Money(amount=900, currency=preferred_currency),
    )
