from fastapi import APIRouter, Depends, HTTPException

from staycalc.agents.orchestrator import ComparisonOrchestrator
from staycalc.api.dependencies import get_orchestrator
from staycalc.domain.models import FxRates
from staycalc.domain.workspace import Workspace, WorkspaceError
from staycalc.repository.state_store import StateLoadError
from staycalc.schemas.responses import CompareResponse

router = APIRouter(tags=["workspace"])


@router.get("/workspace", response_model=Workspace)
def get_workspace(orchestrator: ComparisonOrchestrator = Depends(get_orchestrator)) -> Workspace:
    try:
        return orchestrator.load_workspace()
    except StateLoadError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@router.put("/workspace", response_model=Workspace)
def put_workspace(
    workspace: Workspace, orchestrator: ComparisonOrchestrator = Depends(get_orchestrator)
) -> Workspace:
    try:
        return orchestrator.save_workspace(workspace)
    except OSError as exc:
        raise HTTPException(status_code=500, detail=f"Could not save workspace: {exc}") from exc


@router.get("/workspace/ranking", response_model=CompareResponse)
def ranking(orchestrator: ComparisonOrchestrator = Depends(get_orchestrator)) -> CompareResponse:
    try:
        return orchestrator.ranking()
    except StateLoadError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@router.delete("/workspace/programs/{program_id}", response_model=Workspace)
def remove_program(
    program_id: str, orchestrator: ComparisonOrchestrator = Depends(get_orchestrator)
) -> Workspace:
    try:
        return orchestrator.delete_program(program_id)
    except WorkspaceError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except StateLoadError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@router.post("/fx/refresh", response_model=FxRates | None)
def refresh_fx(
    force: bool = False, orchestrator: ComparisonOrchestrator = Depends(get_orchestrator)
) -> FxRates | None:
    try:
        return orchestrator.refresh_rates(force=force)
    except StateLoadError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
