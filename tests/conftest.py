"""
Shared fixtures: in-memory storage provider and canned generators.
"""

import time
from typing import Dict, List, Optional, Tuple
import pytest
from fileqa.core.errors import TransportError
from fileqa.service import FileQAService
from fileqa.storage.provider import DownloadedFile, RemoteFile

PEOPLE_CSV = b"name,age\nAnn,30\nBob,25\n"


class FakeProvider:
    """Storage provider backed by a dict, with injectable failures and delays."""
    
    def __init__(
        self,
        files: Optional[List[Tuple[str, str, bytes]]] = None,
        failing_ids: Tuple[str, ...] = (),
        delays: Optional[Dict[str, float]] = None,
        listing_error: bool = False
    ):
        self.files = list(files or [])
        self.failing_ids = set(failing_ids)
        self.delays = delays or {}
        self.listing_error = listing_error
        self.downloaded: List[str] = []
        self.uploaded: List[RemoteFile] = []
    
    def list_files(self, folder_id: str) -> List[RemoteFile]:
        if self.listing_error:
            raise TransportError(f"Folder {folder_id} unreachable")
        return [RemoteFile(id=file_id, name=name) for file_id, name, _ in self.files]
    
    def download(self, file_id: str) -> DownloadedFile:
        time.sleep(self.delays.get(file_id, 0))
        if file_id in self.failing_ids:
            raise TransportError(f"Download of {file_id} failed")
        for known_id, name, content in self.files:
            if known_id == file_id:
                self.downloaded.append(file_id)
                return DownloadedFile(content=content, name=name)
        raise TransportError(f"File {file_id} not found")
    
    def upload(self, name, content, mime_type, folder_id) -> RemoteFile:
        remote_file = RemoteFile(id=f"up-{len(self.uploaded) + 1}", name=name, mime_type=mime_type)
        self.files.append((remote_file.id, name, content))
        self.uploaded.append(remote_file)
        return remote_file


class RecordingGenerator:
    """Generator that records prompts and returns a fixed answer or raises."""
    
    def __init__(self, answer: str = "There are 2 people.", error: Optional[Exception] = None):
        self.answer = answer
        self.error = error
        self.prompts: List[str] = []
    
    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.answer


@pytest.fixture
def generator():
    return RecordingGenerator()


@pytest.fixture
def provider():
    return FakeProvider(files=[
        ("1", "a.csv", PEOPLE_CSV),
        ("2", "b.csv", b"city\nOslo\n"),
    ])


@pytest.fixture
def service(provider, generator):
    return FileQAService(provider=provider, generate=generator)


@pytest.fixture
def make_generator():
    return RecordingGenerator


@pytest.fixture
def make_provider():
    return FakeProvider
