"""
FileQAService - the outward interface of ingestion and answering.

Each service owns one ContextStore, so independent contexts (per session,
per test) are just independent service instances.
"""

import asyncio
from typing import BinaryIO, List, Optional, Union
from fileqa.context.aggregator import add_file, rebuild_from
from fileqa.context.store import AggregateContext, ContextStore
from fileqa.core.config import Settings, settings as default_settings
from fileqa.core.errors import GenerationError, TransportError
from fileqa.core.logging import setup_logger
from fileqa.ingestion.records import BatchResult, FileDataset
from fileqa.qa.answer import TextGenerator, answer_question
from fileqa.storage.provider import RemoteFile, StorageProvider

logger = setup_logger()

ByteSource = Union[bytes, bytearray, BinaryIO]


def read_byte_source(byte_source: ByteSource) -> bytes:
    """Return the full content of bytes or a binary file-like object."""
    if isinstance(byte_source, (bytes, bytearray)):
        return bytes(byte_source)
    return byte_source.read()


class FileQAService:
    """
    Ingest files into a context and answer questions over it.
    """
    
    def __init__(
        self,
        provider: Optional[StorageProvider] = None,
        generate: Optional[TextGenerator] = None,
        store: Optional[ContextStore] = None,
        settings: Optional[Settings] = None
    ):
        """
        Args:
            provider: Remote storage provider, needed for batch ingestion
            generate: Text generator (defaults to the configured LLM provider)
            store: Context store (a fresh empty one by default)
            settings: Settings for prompt construction
        """
        self.provider = provider
        self.generate = generate
        self.store = store or ContextStore()
        self.settings = settings or default_settings
    
    @property
    def context(self) -> AggregateContext:
        return self.store.snapshot()
    
    def _require_provider(self) -> StorageProvider:
        if self.provider is None:
            raise TransportError("No storage provider configured")
        return self.provider
    
    async def ingest_single(
        self,
        file_id: str,
        byte_source: ByteSource,
        format_hint: Optional[str],
        source_id: Optional[str] = None
    ) -> FileDataset:
        """
        Ingest one file and append it to the context.
        
        Raises:
            UnsupportedFormat: If the format hint matches no reader
            ReadError: If the content cannot be read
        """
        raw_bytes = await asyncio.to_thread(read_byte_source, byte_source)
        logger.info(f"Ingesting single file: {file_id} ({len(raw_bytes)} bytes)")
        return await asyncio.to_thread(
            add_file, self.store, file_id, raw_bytes, format_hint, source_id
        )
    
    async def ingest_remote(self, file_id: str) -> FileDataset:
        """
        Download one remote file by id and append it to the context.
        
        Raises:
            TransportError: If the provider is missing or the download fails
            UnsupportedFormat: If the file's name and type match no reader
            ReadError: If the content cannot be read
        """
        provider = self._require_provider()
        downloaded = await asyncio.to_thread(provider.download, file_id)
        return await self.ingest_single(
            downloaded.name,
            downloaded.content,
            downloaded.format_hint,
            source_id=file_id
        )
    
    async def list_remote_files(self, folder_id: str) -> List[RemoteFile]:
        """
        List a remote folder.
        
        Raises:
            TransportError: If the provider is missing or unreachable
        """
        provider = self._require_provider()
        return await asyncio.to_thread(provider.list_files, folder_id)
    
    async def ingest_batch(self, folder_id: str) -> BatchResult:
        """
        Replace the context with every readable file of a remote folder.
        
        Raises:
            TransportError: If the folder cannot be listed
        """
        provider = self._require_provider()
        remote_files = await self.list_remote_files(folder_id)
        return await rebuild_from(self.store, provider, remote_files)
    
    async def upload_and_ingest(
        self,
        name: str,
        content: bytes,
        mime_type: Optional[str],
        folder_id: str
    ) -> FileDataset:
        """
        Store an uploaded file in the remote folder, then ingest it under
        the name the provider assigned.
        """
        provider = self._require_provider()
        remote_file = await asyncio.to_thread(
            provider.upload, name, content, mime_type, folder_id
        )
        return await self.ingest_single(
            remote_file.name,
            content,
            remote_file.name if "." in remote_file.name else (name if "." in name else mime_type),
            source_id=remote_file.id
        )
    
    async def ask(self, question: str) -> str:
        """
        Answer a question over the current context.
        
        Raises:
            EmptyContext: If nothing has been ingested
            GenerationError: If text generation fails
        """
        return await asyncio.to_thread(
            answer_question, self.context, question, self.generate, self.settings
        )
    
    async def generate_text(self, data: str) -> str:
        """Send text straight to the generator, without any context."""
        if self.generate is not None:
            generate = self.generate
        else:
            from fileqa.llm.router import generate_text
            generate = generate_text
        try:
            return await asyncio.to_thread(generate, data)
        except GenerationError:
            raise
        except Exception as e:
            logger.error(f"Error generating response: {str(e)}")
            raise GenerationError(f"Error generating response: {str(e)}") from e
