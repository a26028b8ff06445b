"""
Remote file storage providers.
"""

from .provider import DownloadedFile, RemoteFile, StorageProvider

__all__ = ["DownloadedFile", "RemoteFile", "StorageProvider"]
