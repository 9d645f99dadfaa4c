"""
Filestore actions

Each action module exposes ``process(msg, cfg, emitter, logger=None, http_client=None)``.
"""

from filestore.actions import (
    delete_file_by_id,
    get_file_data,
    lookup_file_by_id,
    raw_request,
    update_file,
    upload_file,
)

ACTIONS = {
    "uploadFile": upload_file.process,
    "updateFile": update_file.process,
    "deleteFileById": delete_file_by_id.process,
    "lookupFileById": lookup_file_by_id.process,
    "getFileData": get_file_data.process,
    "rawRequest": raw_request.process,
}

__all__ = ["ACTIONS"]
