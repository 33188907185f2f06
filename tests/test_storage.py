"""Tests for resume storage backends."""

import io
import re

import pytest
from botocore.exceptions import ClientError

from portal.core.exceptions import NotFound, RemoteServiceFailure
from portal.services.storage_service import LocalResumeStorage, S3ResumeStorage


async def test_local_upload_and_read(tmp_path):
    storage = LocalResumeStorage(str(tmp_path))

    path = await storage.upload("My Resume (final).pdf", b"pdf-bytes")

    assert re.fullmatch(r"resumes/\d{13}-My_Resume_final\.pdf", path)
    assert await storage.read(path) == b"pdf-bytes"


async def test_local_read_missing(tmp_path):
    with pytest.raises(NotFound):
        await LocalResumeStorage(str(tmp_path)).read("resumes/123-nothing.pdf")


async def test_local_read_outside_root(tmp_path):
    (tmp_path / "secret.txt").write_text("nope")
    storage = LocalResumeStorage(str(tmp_path / "store"))
    with pytest.raises(NotFound):
        await storage.read("resumes/../../secret.txt")


class FakeS3:
    def __init__(self, fail=False):
        self.objects = {}
        self.fail = fail

    def put_object(self, Bucket, Key, Body):
        if self.fail:
            raise ClientError({"Error": {"Code": "AccessDenied", "Message": "denied"}}, "PutObject")
        self.objects[(Bucket, Key)] = Body

    def get_object(self, Bucket, Key):
        if (Bucket, Key) not in self.objects:
            raise ClientError({"Error": {"Code": "NoSuchKey", "Message": "missing"}}, "GetObject")
        return {"Body": io.BytesIO(self.objects[(Bucket, Key)])}


async def test_s3_upload_and_read():
    client = FakeS3()
    storage = S3ResumeStorage(bucket_name="portal-test", client=client)

    path = await storage.upload("cv.docx", b"docx-bytes")

    assert path.startswith("resumes/") and path.endswith("-cv.docx")
    assert await storage.read(path) == b"docx-bytes"


async def test_s3_missing_object_is_not_found():
    with pytest.raises(NotFound):
        await S3ResumeStorage(bucket_name="portal-test", client=FakeS3()).read("resumes/x.pdf")


async def test_s3_upload_failure_is_remote_failure():
    storage = S3ResumeStorage(bucket_name="portal-test", client=FakeS3(fail=True))
    with pytest.raises(RemoteServiceFailure):
        await storage.upload("cv.pdf", b"bytes")
