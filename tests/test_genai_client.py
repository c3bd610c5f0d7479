import asyncio

import httpx
import pytest

from conftest import make_operation
from veo_studio.services import genai_client
from veo_studio.services.errors import AssetFetchError, MalformedPromptError, OperationFailedError
from veo_studio.services.genai_client import VeoClient, raise_for_operation_error, to_generate_kwargs, video_uri


def test_generate_kwargs_maps_config_and_image():
    kwargs = to_generate_kwargs(
        {
            "model": "veo-test",
            "prompt": "a cat",
            "config": {"numberOfVideos": 1},
            "image": {"imageBytes": "YWJj", "mimeType": "image/png"},
        }
    )

    assert kwargs["model"] == "veo-test"
    assert kwargs["prompt"] == "a cat"
    assert kwargs["config"].number_of_videos == 1
    assert kwargs["image"].image_bytes == b"abc"
    assert kwargs["image"].mime_type == "image/png"


def test_generate_kwargs_drops_unknown_fields(caplog):
    kwargs = to_generate_kwargs({"model": "m", "prompt": "p", "seed": 3})

    assert set(kwargs) == {"model", "prompt"}
    assert "seed" in caplog.text


@pytest.mark.parametrize(
    "payload",
    [
        {"model": "m", "prompt": "p", "image": "not-an-object"},
        {"model": "m", "prompt": "p", "image": {"imageBytes": "%%%", "mimeType": "image/png"}},
        {"model": "m", "prompt": "p", "config": ["numberOfVideos"]},
    ],
)
def test_generate_kwargs_rejects_bad_shapes(payload):
    with pytest.raises(MalformedPromptError):
        to_generate_kwargs(payload)


def test_video_uri_reads_first_generated_video():
    assert video_uri(make_operation(True, uri="https://x/v")) == "https://x/v"
    assert video_uri(make_operation(True)) is None
    assert video_uri(make_operation(True, uri="")) is None


def test_operation_error_raises():
    raise_for_operation_error(make_operation(True))
    with pytest.raises(OperationFailedError, match="blocked"):
        raise_for_operation_error(make_operation(True, error={"message": "blocked"}))


@pytest.fixture
def mock_transport(monkeypatch):
    seen = []
    responses = {}
    real_client = httpx.AsyncClient

    def handler(request):
        seen.append(request)
        return responses["next"]

    def factory(**kwargs):
        return real_client(transport=httpx.MockTransport(handler), **kwargs)

    monkeypatch.setattr(genai_client.httpx, "AsyncClient", factory)
    return seen, responses


def test_fetch_asset_appends_key(mock_transport):
    seen, responses = mock_transport
    responses["next"] = httpx.Response(200, content=b"mp4-bytes", headers={"content-type": "video/mp4"})
    client = VeoClient("secret")

    data, content_type = asyncio.run(client.fetch_asset("https://files.example/v1/video?alt=media"))

    assert data == b"mp4-bytes"
    assert content_type == "video/mp4"
    assert seen[0].url.params["alt"] == "media"
    assert seen[0].url.params["key"] == "secret"


def test_fetch_asset_non_success(mock_transport):
    _, responses = mock_transport
    responses["next"] = httpx.Response(403)
    client = VeoClient("secret")

    with pytest.raises(AssetFetchError) as exc_info:
        asyncio.run(client.fetch_asset("https://files.example/video"))

    assert exc_info.value.status_code == 403
    assert str(exc_info.value) == "Failed to fetch video: Forbidden"


def test_client_creation_failure_is_wrapped_without_logging(monkeypatch, caplog):
    def broken_client(**kwargs):
        raise ValueError("bad key")

    monkeypatch.setattr(genai_client.genai, "Client", broken_client)

    with pytest.raises(genai_client.GenAIClientError):
        VeoClient("secret")

    assert [r for r in caplog.records if r.name == genai_client.logger.name] == []
