"""
Resumable upload core

Creates or updates a Filestore file with an initial metadata request and then
streams the buffered payload as ordered ``Content-Range`` PATCH requests.
"""

from filestore.upload.planner import plan_chunks
from filestore.upload.range_uploader import RangeUploader
from filestore.upload.session import ResumableUploadSession, SessionState

__all__ = [
    "plan_chunks",
    "RangeUploader",
    "ResumableUploadSession",
    "SessionState",
]
