from typing import Optional
import requests
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fileqa.api.routes import router as api_router
from fileqa.core.config import settings
from fileqa.core.errors import (
    EmptyContext,
    FileQAError,
    GenerationError,
    ReadError,
    TransportError,
    UnsupportedFormat
)
from fileqa.core.logging import setup_logger
from fileqa.service import FileQAService
from fileqa.utils.graceful_response import failure_for_error

# Initialize settings and logger
logger = setup_logger(settings.LOG_LEVEL)

# HTTP status per service error
ERROR_STATUS = {
    UnsupportedFormat: 415,
    ReadError: 422,
    EmptyContext: 400,
    GenerationError: 502,
    TransportError: 502
}


def build_default_service() -> FileQAService:
    """Service wired to Google Drive when an access token is configured."""
    provider = None
    if settings.DRIVE_ACCESS_TOKEN:
        from fileqa.storage.google_drive import GoogleDriveProvider
        provider = GoogleDriveProvider()
    return FileQAService(provider=provider)


def create_app(service: Optional[FileQAService] = None) -> FastAPI:
    """
    Build the FastAPI application around one FileQAService.
    
    Args:
        service: Service to expose (a default Drive-backed one if omitted)
    """
    app = FastAPI(title=settings.APP_NAME)
    app.state.service = service or build_default_service()
    app.state.drive_session = requests.Session()
    
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    app.include_router(api_router, prefix="/api/v1", tags=["File QA"])
    
    @app.exception_handler(FileQAError)
    async def fileqa_error_handler(request: Request, exc: FileQAError):
        status_code = ERROR_STATUS.get(type(exc), 500)
        logger.error(f"{request.method} {request.url.path} failed - {exc.error_kind}: {str(exc)}")
        
        content = failure_for_error(exc)
        content["detail"] = str(exc) if status_code < 500 else content["graceful_message"]
        if isinstance(exc, (EmptyContext, GenerationError)):
            content["answer"] = content["graceful_message"]
        return JSONResponse(status_code=status_code, content=content)
    
    @app.on_event("startup")
    async def startup_event():
        logger.info(f"{settings.APP_NAME} started in {settings.ENV} environment")
        if app.state.service.provider is None:
            logger.warning("No storage provider configured - folder operations need an access token per request")
    
    @app.on_event("shutdown")
    async def shutdown_event():
        app.state.drive_session.close()
    
    @app.get("/health")
    async def health_check():
        """Health check endpoint with loaded context size."""
        context = app.state.service.context
        return {
            "status": "ok",
            "datasets": len(context),
            "records": context.record_count
        }
    
    return app


app = create_app()
