"""
API dependencies - access to the service held by the application.
"""

from typing import Optional
import requests
from fastapi import HTTPException, Request
from fileqa.core.config import settings
from fileqa.service import FileQAService
from fileqa.storage.google_drive import GoogleDriveProvider


def get_service(request: Request) -> FileQAService:
    """FastAPI dependency returning the application's FileQAService."""
    return request.app.state.service


def get_drive_session(request: Request) -> requests.Session:
    """HTTP session shared by every per-request Drive provider."""
    return request.app.state.drive_session


def with_access_token(
    service: FileQAService,
    access_token: Optional[str],
    session: Optional[requests.Session] = None
) -> FileQAService:
    """
    Return a service that talks to Drive with a caller-supplied token while
    sharing the application's context store and generator. The provider
    reuses ``session`` so no connection pool is opened per request.
    """
    if not access_token:
        return service
    return FileQAService(
        provider=GoogleDriveProvider(access_token=access_token, session=session),
        generate=service.generate,
        store=service.store,
        settings=service.settings
    )


def resolve_folder_id(folder_id: Optional[str]) -> str:
    """Use the request's folder id, falling back to DRIVE_FOLDER_ID."""
    resolved = folder_id or settings.DRIVE_FOLDER_ID
    if not resolved:
        raise HTTPException(status_code=400, detail="No folder id provided.")
    return resolved
