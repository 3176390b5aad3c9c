from __future__ import annotations

from conftest import FakeSession
from src.utils.result import ErrorKind
from src.utils.stream_api import StreamAPIClient
from src.utils.stream_urls import generate_stream_urls


def test_create_delete_then_list_excludes_input(config, backend):
    client = StreamAPIClient(config, session=FakeSession(backend))

    created = client.create_live_input({"name": "Test1"})
    assert created.success
    input_id = created.data["uid"]
    assert [i["uid"] for i in client.list_live_inputs().data] == [input_id]

    assert client.delete_live_input(input_id).success

    listed = client.list_live_inputs()
    assert listed.success
    assert input_id not in [i["uid"] for i in listed.data]


def test_deleting_twice_reports_remote_error(config, backend):
    client = StreamAPIClient(config, session=FakeSession(backend))
    input_id = client.create_live_input(name="Once").data["uid"]
    client.create_live_input(name="Kept")

    client.delete_live_input(input_id)
    second = client.delete_live_input(input_id)

    assert second.kind is ErrorKind.REMOTE_REQUEST
    assert second.error == "Live input not found"
    assert [i["meta"]["name"] for i in client.list_live_inputs().data] == ["Kept"]


def test_created_input_round_trip(config, backend):
    client = StreamAPIClient(config, session=FakeSession(backend))

    created = client.create_live_input({"name": "Demo", "deleteRecordingAfterDays": 45}).data
    fetched = client.get_live_input(created["uid"])
    videos = client.list_live_input_videos(created["uid"])
    urls = generate_stream_urls(created["uid"], config=config)

    assert fetched.data["deleteRecordingAfterDays"] == 45
    assert fetched.data["rtmps"]["streamKey"] == f"key-{created['uid']}"
    assert videos.data == []
    assert urls.player_url.endswith(f"/{created['uid']}/iframe")
