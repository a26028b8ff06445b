"""
Source aggregator - turns files into FileDatasets and loads them into a
ContextStore, either one upload at a time or as a full rebuild from a
remote folder.
"""

import asyncio
from typing import Optional, Sequence, Union
from fileqa.core.errors import error_kind_of
from fileqa.core.logging import setup_logger
from fileqa.ingestion.dispatcher import detect_format, parse_bytes
from fileqa.ingestion.normalize import normalize_records
from fileqa.ingestion.records import BatchResult, FileDataset, FileFailure
from fileqa.storage.provider import RemoteFile, StorageProvider
from .store import ContextStore

logger = setup_logger()


def build_dataset(
    file_id: str,
    raw_bytes: bytes,
    format_hint: Optional[str],
    source_id: Optional[str] = None
) -> FileDataset:
    """
    Read and normalize one file.
    
    Args:
        file_id: Provenance label, usually the file name
        raw_bytes: File content
        format_hint: File name, extension or MIME type
        source_id: Remote id when the file came from a storage provider
        
    Returns:
        FileDataset with normalized records in source order
        
    Raises:
        UnsupportedFormat: If the hint matches no reader
        ReadError: If the content is malformed
    """
    file_format = detect_format(format_hint)
    records = normalize_records(parse_bytes(raw_bytes, file_format))
    
    logger.info(f"Dataset built - {file_id}: {len(records)} records ({file_format})")
    return FileDataset(
        provenance=file_id,
        records=tuple(records),
        format=file_format,
        source_id=source_id
    )


def add_file(
    store: ContextStore,
    file_id: str,
    raw_bytes: bytes,
    format_hint: Optional[str],
    source_id: Optional[str] = None
) -> FileDataset:
    """
    Build a dataset for one file and append it to the context.
    Datasets already loaded are kept. Nothing is appended on failure.
    """
    dataset = build_dataset(file_id, raw_bytes, format_hint, source_id)
    store.append(dataset)
    return dataset


async def _load_remote_file(
    provider: StorageProvider,
    remote_file: RemoteFile
) -> Union[FileDataset, FileFailure]:
    """
    Download and read one listed file. Failures are returned, not raised,
    so the rest of the batch carries on.
    """
    try:
        downloaded = await asyncio.to_thread(provider.download, remote_file.id)
        return await asyncio.to_thread(
            build_dataset,
            remote_file.name,
            downloaded.content,
            downloaded.format_hint,
            remote_file.id
        )
    except Exception as e:
        failure = FileFailure(
            file_id=remote_file.id,
            file_name=remote_file.name,
            error_kind=error_kind_of(e),
            message=str(e)
        )
        logger.error(
            f"Skipping file in batch - id: {failure.file_id}, name: {failure.file_name}, "
            f"kind: {failure.error_kind}, error: {failure.message}"
        )
        return failure


async def rebuild_from(
    store: ContextStore,
    provider: StorageProvider,
    remote_files: Sequence[RemoteFile]
) -> BatchResult:
    """
    Replace the context with datasets built from a list of remote files.
    
    Files are processed concurrently. A file that fails is logged, listed
    in ``failures`` and left out of ``datasets``; it never aborts the batch.
    Dataset order follows ``remote_files`` regardless of completion order.
    The store is swapped once, after every file has finished.
    
    Args:
        store: Context to replace
        provider: Storage provider used for downloads
        remote_files: Files in provider listing order
        
    Returns:
        BatchResult with successful datasets and per-file failures
    """
    logger.info(f"Rebuilding context from {len(remote_files)} remote files")
    
    outcomes = await asyncio.gather(
        *(_load_remote_file(provider, remote_file) for remote_file in remote_files)
    )
    
    datasets = tuple(o for o in outcomes if isinstance(o, FileDataset))
    failures = tuple(o for o in outcomes if isinstance(o, FileFailure))
    
    store.replace(datasets)
    
    logger.info(
        f"Context rebuilt - {len(datasets)} datasets loaded, "
        f"{len(failures)} files failed"
    )
    return BatchResult(datasets=datasets, failures=failures)
