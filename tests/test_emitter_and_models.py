"""Tests for the emitter and message models."""

import pytest
from pydantic import ValidationError

from filestore.emitter import CollectingEmitter, Emitter
from filestore.models.message import ActionConfig, Message, new_message_with_body
from filestore.models.upload import ChunkRange, UploadMetadata, UploadTarget


@pytest.mark.asyncio
async def test_collecting_emitter_keeps_order():
    emitter = CollectingEmitter()

    await emitter.emit("data", Message(id="m-1", body={"fileId": "f"}))
    await emitter.emit("end")

    assert [e.event for e in emitter.events] == ["data", "end"]
    assert emitter.events[0].to_dict() == {
        "event": "data",
        "payload": {"id": "m-1", "body": {"fileId": "f"}, "attachments": {}},
    }
    assert emitter.events[1].to_dict() == {"event": "end", "payload": None}


def test_emitter_is_abstract():
    with pytest.raises(TypeError):
        Emitter()


def test_new_message_wraps_non_dict_results():
    assert new_message_with_body({"a": 1}).body == {"a": 1}
    assert new_message_with_body("text").body == {"result": "text"}
    assert new_message_with_body([1]).body == {"result": [1]}


def test_message_attachment_content_type_alias():
    msg = Message(attachments={"a.txt": {"url": "https://x/a", "content-type": "text/plain", "size": 3}})

    assert msg.attachments["a.txt"].content_type == "text/plain"
    assert msg.attachments["a.txt"].size == 3


def test_action_config_aliases_and_extra():
    config = ActionConfig.from_raw({"apiKey": "k", "tenantId": "t", "resourceServerUrl": "u", "fileId": "f"})

    assert (config.api_key, config.tenant_id, config.resource_server_url) == ("k", "t", "u")
    assert config.model_extra == {"fileId": "f"}
    assert ActionConfig.from_raw(config) is config


def test_upload_target_urls():
    target = UploadTarget(resource_server_url="https://fs/", api_key="k", tenant_id="t")

    assert target.resource_server_url == "https://fs"
    assert target.collection_url == "https://fs/api/v2/file"
    assert target.file_url("abc") == "https://fs/api/v2/file/abc"
    assert target.auth_headers() == {"x-api-key": "k", "x-dxp-tenant": "t"}


def test_upload_metadata_rejects_unknown_access():
    with pytest.raises(ValidationError):
        UploadMetadata(access="internal", source_path="a.txt")


def test_chunk_range_header():
    chunk = ChunkRange(start=5242880, end=10485760)

    assert chunk.length == 5242880
    assert chunk.content_range(12_000_000) == "bytes 5242880-10485759/12000000"
