"""
Storage provider interface consumed by the aggregator.
Implementations raise TransportError when the provider is unreachable.
"""

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import List, Optional, Protocol


@dataclass(frozen=True)
class RemoteFile:
    """A file listed in a remote folder."""
    id: str
    name: str
    mime_type: Optional[str] = None
    
    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "mime_type": self.mime_type}


@dataclass(frozen=True)
class DownloadedFile:
    """Content of a remote file plus what is known about its format."""
    content: bytes
    name: str
    mime_type: Optional[str] = None
    
    @property
    def format_hint(self) -> Optional[str]:
        """File name when it has an extension, otherwise the declared MIME type."""
        if PurePosixPath(self.name).suffix:
            return self.name
        return self.mime_type or self.name


class StorageProvider(Protocol):
    """Remote folder listing and file transfer."""
    
    def list_files(self, folder_id: str) -> List[RemoteFile]:
        """Return the files of a folder in provider listing order."""
        ...
    
    def download(self, file_id: str) -> DownloadedFile:
        """Return the content and name of one file."""
        ...
    
    def upload(
        self,
        name: str,
        content: bytes,
        mime_type: Optional[str],
        folder_id: str
    ) -> RemoteFile:
        """Store a file in a folder and return its listing entry."""
        ...
