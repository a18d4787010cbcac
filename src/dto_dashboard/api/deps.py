"""FastAPI dependencies resolving the dashboard and its collaborators."""

from fastapi import Depends, HTTPException, Request, status

from dto_dashboard.assistant import AssistantClient
from dto_dashboard.dashboard import Dashboard
from dto_dashboard.errors import ConfigurationError
from dto_dashboard.uploads import UploadTrigger


def get_dashboard(request: Request) -> Dashboard:
    return request.app.state.dashboard


def require_uploader(
    dashboard: Dashboard = Depends(get_dashboard),
) -> UploadTrigger:
    try:
        return dashboard.uploader()
    except ConfigurationError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc),
        )


def require_assistant(
    dashboard: Dashboard = Depends(get_dashboard),
) -> AssistantClient:
    try:
        return dashboard.assistant()
    except ConfigurationError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc),
        )
