"""
Google Drive provider over the Drive v3 REST API.
Authenticates with a bearer access token; obtaining the token is left to
the caller.
"""

import json
import uuid
from typing import Any, Dict, List, Optional
import requests
from fileqa.core.config import settings
from fileqa.core.errors import TransportError
from fileqa.core.logging import setup_logger
from .provider import DownloadedFile, RemoteFile

logger = setup_logger()


class GoogleDriveProvider:
    """
    Drive folder listing, download and upload.
    """
    
    def __init__(
        self,
        access_token: Optional[str] = None,
        api_base: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the Drive provider.
        
        Args:
            access_token: OAuth access token (defaults to DRIVE_ACCESS_TOKEN)
            api_base: API root (defaults to DRIVE_API_BASE)
            timeout_seconds: Per-request timeout (defaults to DRIVE_TIMEOUT_SECONDS)
            session: Optional requests session to reuse connections
        """
        self.access_token = access_token or settings.DRIVE_ACCESS_TOKEN
        if not self.access_token:
            raise ValueError("DRIVE_ACCESS_TOKEN not found in environment variables")
        self.api_base = (api_base or settings.DRIVE_API_BASE).rstrip("/")
        self.timeout_seconds = timeout_seconds or settings.DRIVE_TIMEOUT_SECONDS
        self.session = session or requests.Session()
    
    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.access_token}"}
    
    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        headers = {**self._headers(), **kwargs.pop("headers", {})}
        try:
            response = self.session.request(
                method,
                url,
                headers=headers,
                timeout=self.timeout_seconds,
                **kwargs
            )
            response.raise_for_status()
            return response
        except requests.RequestException as e:
            logger.error(f"Drive request failed: {method} {url} - {str(e)}")
            raise TransportError(f"Google Drive request failed: {str(e)}") from e
    
    def _request_json(self, method: str, url: str, **kwargs: Any) -> Dict[str, Any]:
        response = self._request(method, url, **kwargs)
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Drive returned invalid JSON: {method} {url} - {str(e)}")
            raise TransportError(f"Google Drive returned an invalid response: {str(e)}") from e
    
    def list_files(self, folder_id: str) -> List[RemoteFile]:
        """
        List the files of a folder, following pagination.
        
        Args:
            folder_id: Drive folder id
            
        Returns:
            Files in the order Drive lists them
        """
        files = []
        page_token = None
        
        while True:
            params = {
                "q": f"'{folder_id}' in parents and trashed = false",
                "fields": "nextPageToken, files(id, name, mimeType)",
            }
            if page_token:
                params["pageToken"] = page_token
            
            payload = self._request_json(
                "GET", f"{self.api_base}/drive/v3/files", params=params
            )
            
            for item in payload.get("files", []):
                files.append(RemoteFile(
                    id=item["id"],
                    name=item.get("name", item["id"]),
                    mime_type=item.get("mimeType")
                ))
            
            page_token = payload.get("nextPageToken")
            if not page_token:
                break
        
        logger.info(f"Listed {len(files)} files in Drive folder {folder_id}")
        return files
    
    def download(self, file_id: str) -> DownloadedFile:
        """
        Download one file with its name and MIME type.
        """
        url = f"{self.api_base}/drive/v3/files/{file_id}"
        metadata = self._request_json("GET", url, params={"fields": "name, mimeType"})
        content = self._request("GET", url, params={"alt": "media"}).content
        
        logger.info(f"Downloaded Drive file {file_id} ({len(content)} bytes)")
        return DownloadedFile(
            content=content,
            name=metadata.get("name", file_id),
            mime_type=metadata.get("mimeType")
        )
    
    def upload(
        self,
        name: str,
        content: bytes,
        mime_type: Optional[str],
        folder_id: str
    ) -> RemoteFile:
        """
        Upload a file into a folder with a multipart request.
        """
        boundary = f"fileqa-{uuid.uuid4().hex}"
        metadata = {"name": name, "parents": [folder_id]}
        media_type = mime_type or "application/octet-stream"
        
        body = b"".join([
            f"--{boundary}\r\n".encode(),
            b"Content-Type: application/json; charset=UTF-8\r\n\r\n",
            json.dumps(metadata).encode("utf-8"),
            f"\r\n--{boundary}\r\n".encode(),
            f"Content-Type: {media_type}\r\n\r\n".encode(),
            content,
            f"\r\n--{boundary}--\r\n".encode(),
        ])
        
        payload = self._request_json(
            "POST",
            f"{self.api_base}/upload/drive/v3/files",
            params={"uploadType": "multipart", "fields": "id, name, mimeType"},
            headers={"Content-Type": f"multipart/related; boundary={boundary}"},
            data=body
        )
        
        logger.info(f"File uploaded to Google Drive: {payload.get('id')} ({payload.get('name')})")
        return RemoteFile(
            id=payload["id"],
            name=payload.get("name", name),
            mime_type=payload.get("mimeType", mime_type)
        )
