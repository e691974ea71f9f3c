from pydantic import BaseModel

from staycalc.domain.models import Calc


class RankedHotelView(BaseModel):
    hotel_id: str
    hotel_name: str
    program_id: str
    program_name: str | None
    program_missing: bool
    calc: Calc
    summary: str


class CompareResponse(BaseModel):
    best: RankedHotelView | None
    ranked: list[RankedHotelView]
    dangling_hotel_ids: list[str]
