from fastapi import APIRouter, Depends, HTTPException

from staycalc.agents.orchestrator import ComparisonOrchestrator
from staycalc.api.dependencies import get_orchestrator
from staycalc.domain.models import Calc
from staycalc.schemas.requests import CompareRequest, QuoteRequest
from staycalc.schemas.responses import CompareResponse

router = APIRouter(tags=["compare"])


@router.post("/quote", response_model=Calc)
def quote(request: QuoteRequest, orchestrator: ComparisonOrchestrator = Depends(get_orchestrator)) -> Calc:
    try:
        return orchestrator.quote(request)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("/compare", response_model=CompareResponse)
def compare(
    request: CompareRequest, orchestrator: ComparisonOrchestrator = Depends(get_orchestrator)
) -> CompareResponse:
    try:
        return orchestrator.compare(request)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
