from typing import Any, Dict, List, Optional
import requests
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from pydantic import BaseModel, Field
from fileqa.api.deps import get_drive_session, get_service, resolve_folder_id, with_access_token
from fileqa.core.logging import setup_logger
from fileqa.ingestion.dispatcher import get_supported_formats
from fileqa.service import FileQAService
from fileqa.utils.graceful_response import graceful_degraded, success_message

router = APIRouter()
logger = setup_logger()


class FolderRequest(BaseModel):
    """Request model for operations on a remote folder."""
    folder_id: Optional[str] = Field(None, description="Drive folder id (defaults to DRIVE_FOLDER_ID)")
    access_token: Optional[str] = Field(None, description="Drive access token (defaults to DRIVE_ACCESS_TOKEN)")


class DriveFileRequest(BaseModel):
    """Request model for ingesting one Drive file by id."""
    file_id: str = Field(..., min_length=1, description="Drive file id")
    access_token: Optional[str] = Field(None, description="Drive access token (defaults to DRIVE_ACCESS_TOKEN)")


class AnswerRequest(FolderRequest):
    """Request model for Q&A. When a folder is given, the context is rebuilt from it first."""
    question: str = Field(..., min_length=1, description="Question to answer")


class GeneratePromptRequest(BaseModel):
    """Request model for raw text generation."""
    data: str = Field(..., min_length=1, description="Text sent to the generator")


class DatasetResponse(BaseModel):
    """One ingested file."""
    provenance: str
    format: str
    source_id: Optional[str] = None
    record_count: int
    records: List[Dict[str, str]]


class UploadResponse(BaseModel):
    message: str
    data: DatasetResponse
    graceful_message: Optional[str] = None
    degradation_level: str = "none"
    user_action_hint: Optional[str] = None


class FailureResponse(BaseModel):
    file_id: str
    file_name: str
    error_kind: str
    message: str


class BatchResponse(BaseModel):
    message: str
    datasets: List[DatasetResponse]
    failures: List[FailureResponse]
    files_listed: int
    graceful_message: Optional[str] = None
    degradation_level: str = "none"
    user_action_hint: Optional[str] = None
    fallback_reason: Optional[str] = None


class RemoteFileResponse(BaseModel):
    id: str
    name: str
    mime_type: Optional[str] = None


class ListFilesResponse(BaseModel):
    message: str
    files: List[RemoteFileResponse]


class AnswerResponse(BaseModel):
    answer: str
    datasets_used: int
    batch: Optional[BatchResponse] = None


class GeneratePromptResponse(BaseModel):
    prompt: str


def _batch_payload(result: Dict[str, Any]) -> Dict[str, Any]:
    """Attach graceful fields describing skipped files."""
    failures = result["failures"]
    if not failures:
        graceful = success_message()
    elif not result["datasets"]:
        graceful = graceful_degraded("batch_all_failed", f"{len(failures)} of {result['files_listed']} files failed")
    else:
        graceful = graceful_degraded("batch_partial_failure", f"{len(failures)} of {result['files_listed']} files failed")
    return {"message": "Folder processed.", **result, **graceful}


@router.post("/upload", response_model=UploadResponse)
async def upload_file(
    file: UploadFile = File(...),
    folder_id: Optional[str] = Form(None),
    access_token: Optional[str] = Form(None),
    service: FileQAService = Depends(get_service),
    session: requests.Session = Depends(get_drive_session)
):
    """
    Ingest an uploaded file and append it to the current context.
    
    When a folder id is given, the file is first stored in that Drive folder
    and ingested under the name Drive assigned.
    """
    if not file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded.")
    
    content = await file.read()
    logger.info(f"Received upload: {file.filename} ({file.content_type}, {len(content)} bytes)")
    
    if folder_id:
        dataset = await with_access_token(service, access_token, session).upload_and_ingest(
            file.filename, content, file.content_type, folder_id
        )
        message = "File uploaded to Drive and processed successfully!"
    else:
        format_hint = file.filename if "." in file.filename else file.content_type
        dataset = await service.ingest_single(file.filename, content, format_hint)
        message = "File uploaded and processed successfully!"
    
    return {"message": message, "data": dataset.to_dict(), **success_message()}


@router.post("/upload-from-drive", response_model=UploadResponse)
async def upload_from_drive(
    request: DriveFileRequest,
    service: FileQAService = Depends(get_service),
    session: requests.Session = Depends(get_drive_session)
):
    """Download one Drive file and append it to the current context."""
    dataset = await with_access_token(service, request.access_token, session).ingest_remote(request.file_id)
    return {
        "message": "File fetched from Drive and processed successfully!",
        "data": dataset.to_dict(),
        **success_message()
    }


@router.post("/list-files", response_model=ListFilesResponse)
async def list_files(
    request: FolderRequest,
    service: FileQAService = Depends(get_service),
    session: requests.Session = Depends(get_drive_session)
):
    """List the files of a Drive folder."""
    folder_id = resolve_folder_id(request.folder_id)
    files = await with_access_token(service, request.access_token, session).list_remote_files(folder_id)
    return {
        "message": "Files listed successfully!",
        "files": [remote_file.to_dict() for remote_file in files]
    }


@router.post("/ingest-folder", response_model=BatchResponse)
async def ingest_folder(
    request: FolderRequest,
    service: FileQAService = Depends(get_service),
    session: requests.Session = Depends(get_drive_session)
):
    """Replace the context with every readable file of a Drive folder."""
    folder_id = resolve_folder_id(request.folder_id)
    result = await with_access_token(service, request.access_token, session).ingest_batch(folder_id)
    return _batch_payload(result.to_dict())


@router.post("/answer", response_model=AnswerResponse)
async def answer(
    request: AnswerRequest,
    service: FileQAService = Depends(get_service),
    session: requests.Session = Depends(get_drive_session)
):
    """
    Answer a question over the loaded files.
    If a folder id is given, the context is rebuilt from that folder first.
    """
    batch = None
    if request.folder_id:
        result = await with_access_token(service, request.access_token, session).ingest_batch(request.folder_id)
        batch = _batch_payload(result.to_dict())
    
    answer_text = await service.ask(request.question)
    return {
        "answer": answer_text,
        "datasets_used": len(service.context),
        "batch": batch
    }


@router.post("/generate-prompt", response_model=GeneratePromptResponse)
async def generate_prompt(
    request: GeneratePromptRequest,
    service: FileQAService = Depends(get_service)
):
    """Send text straight to the text generator."""
    return {"prompt": await service.generate_text(request.data)}


@router.get("/context")
async def get_context(service: FileQAService = Depends(get_service)):
    """Provenance and record counts of the loaded datasets."""
    return service.context.summary()


@router.get("/supported-formats")
async def supported_formats():
    """Formats accepted by upload and folder ingestion."""
    return {"formats": get_supported_formats()}
