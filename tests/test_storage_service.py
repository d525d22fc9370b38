"""
Tests for the local storage buckets.
"""
import pytest

from app.services.storage_service import RESUMES_BUCKET, StorageClient


def test_upload_read_delete(storage):
    stored = storage.upload(RESUMES_BUCKET, "Jane CV.PDF", b"%PDF-1.4")

    assert stored.key.endswith(".pdf")
    assert stored.url == f"http://testserver/storage/resumes/{stored.key}"
    assert storage.read(RESUMES_BUCKET, stored.key) == b"%PDF-1.4"

    assert storage.delete(RESUMES_BUCKET, stored.key) is True
    assert storage.delete(RESUMES_BUCKET, stored.key) is False


def test_keys_are_unique(storage):
    keys = {storage.upload(RESUMES_BUCKET, "cv.txt", b"x").key for _ in range(5)}
    assert len(keys) == 5


@pytest.mark.parametrize("bucket, key", [
    ("avatars", "a.txt"),
    (RESUMES_BUCKET, "../secrets.txt"),
    (RESUMES_BUCKET, ".env"),
    (RESUMES_BUCKET, ""),
])
def test_invalid_locations_rejected(storage, bucket, key):
    with pytest.raises(ValueError):
        storage.read(bucket, key)


def test_public_base_url_trailing_slash(tmp_path):
    client = StorageClient(root=str(tmp_path), public_base_url="https://jobs.example.com/")
    assert client.public_url("resumes", "1.pdf") == "https://jobs.example.com/storage/resumes/1.pdf"
