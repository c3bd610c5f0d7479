from types import SimpleNamespace

import pytest

from veo_studio.services import form_state, veo_service


@pytest.fixture(autouse=True)
def clean_state():
    veo_service.reset_job()
    form_state.reset_form_state()
    yield
    veo_service.reset_job()
    form_state.reset_form_state()


def make_operation(done, uri=None, error=None, name="operations/test-op"):
    videos = [SimpleNamespace(video=SimpleNamespace(uri=uri))] if uri is not None else []
    response = SimpleNamespace(generated_videos=videos) if done else None
    return SimpleNamespace(name=name, done=done, error=error, response=response)


class FakeVeoClient:
    """Records calls; ``script`` lists the operations returned by submit then each refresh."""

    instances = []

    def __init__(self, api_key, script=None, asset=(b"fake-mp4", "video/mp4"), fetch_error=None):
        self.api_key = api_key
        self.script = list(script or [make_operation(False), make_operation(True, uri="https://x/v?alt=media")])
        self.asset = asset
        self.fetch_error = fetch_error
        self.submitted = []
        self.refreshes = 0
        self.fetched = []
        FakeVeoClient.instances.append(self)

    async def submit(self, payload):
        self.submitted.append(payload)
        return self.script.pop(0)

    async def refresh(self, operation):
        self.refreshes += 1
        return self.script.pop(0)

    async def fetch_asset(self, uri):
        self.fetched.append(uri)
        if self.fetch_error is not None:
            raise self.fetch_error
        return self.asset


@pytest.fixture
def fake_client_cls():
    FakeVeoClient.instances = []
    return FakeVeoClient


class RecordingSleep:
    def __init__(self):
        self.calls = []

    async def __call__(self, seconds):
        self.calls.append(seconds)


@pytest.fixture
def recording_sleep():
    return RecordingSleep()
