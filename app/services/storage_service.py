"""
File storage buckets for job descriptions and resumes.

Objects are written under ``STORAGE_DIR/<bucket>/<key>`` and served read-only
by the app at ``/storage/<bucket>/<key>``, which is their public URL.
"""
import logging
import time
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from app.core import config

logger = logging.getLogger(__name__)

JOB_DESCRIPTIONS_BUCKET = "job-descriptions"
RESUMES_BUCKET = "resumes"
BUCKETS = (JOB_DESCRIPTIONS_BUCKET, RESUMES_BUCKET)


@dataclass
class StoredObject:
    bucket: str
    key: str
    url: str


class StorageClient:
    """Local-filesystem object storage with public URLs."""

    def __init__(self, root: Optional[str] = None, public_base_url: Optional[str] = None):
        self.root = Path(root or config.STORAGE_DIR)
        self.public_base_url = (public_base_url or config.PUBLIC_BASE_URL).rstrip("/")

    def ensure_buckets(self) -> None:
        for bucket in BUCKETS:
            (self.root / bucket).mkdir(parents=True, exist_ok=True)

    def _path(self, bucket: str, key: str) -> Path:
        if bucket not in BUCKETS:
            raise ValueError(f"Unknown storage bucket: {bucket}")
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.root / bucket / key

    def public_url(self, bucket: str, key: str) -> str:
        return f"{self.public_base_url}/storage/{bucket}/{key}"

    def upload(self, bucket: str, filename: str, content: bytes) -> StoredObject:
        """Store content under a generated ``<epoch-ms>-<rand>.<ext>`` key."""
        ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else "bin"
        key = f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}.{ext}"
        path = self._path(bucket, key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        logger.info(f"Stored object: bucket={bucket}, key={key}, size={len(content)}")
        return StoredObject(bucket=bucket, key=key, url=self.public_url(bucket, key))

    def read(self, bucket: str, key: str) -> bytes:
        return self._path(bucket, key).read_bytes()

    def delete(self, bucket: str, key: str) -> bool:
        """Remove an object; returns False if it was already gone."""
        path = self._path(bucket, key)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        logger.info(f"Deleted object: bucket={bucket}, key={key}")
        return True


_storage: Optional[StorageClient] = None


def get_storage() -> StorageClient:
    """Storage dependency (one client per process)."""
    global _storage
    if _storage is None:
        _storage = StorageClient()
    return _storage
