from pydantic import BaseModel, Field

from staycalc.domain.models import FxRates, GlobalSettings, HotelOption, Program


class QuoteRequest(BaseModel):
    global_settings: GlobalSettings
    program: Program
    hotel: HotelOption
    fx_rates: FxRates | None = None


class CompareRequest(BaseModel):
    global_settings: GlobalSettings
    programs: list[Program] = Field(default_factory=list)
    hotels: list[HotelOption] = Field(default_factory=list)
    fx_rates: FxRates | None = None
