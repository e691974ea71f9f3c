import uvicorn
from fastapi import FastAPI

from staycalc.api.routes.compare import router as compare_router
from staycalc.api.routes.health import router as health_router
from staycalc.api.routes.workspace import router as workspace_router
from staycalc.config import settings

app = FastAPI(title="StayCalc API", version="0.1.0")
app.include_router(health_router)
app.include_router(compare_router)
app.include_router(workspace_router)


def run() -> None:
    uvicorn.run("staycalc.api.app:app", host=settings.app_host, port=settings.app_port, reload=False)
