from __future__ import annotations

import os

import pytest
from _environment import ENVKEY_TEST_APP_URI, TestApp, TestEnvironmentBase


class _RecordingEnvironment(TestEnvironmentBase):
    def __init__(self) -> None:
        super().__init__()
        self.events: list[str] = []

    def setup(self) -> None:
        self.events.append("setup")

    def tear_down(self) -> None:
        self.events.append("tear_down")

    def start(self, app: TestApp) -> None:
        self.events.append(f"start:{app.name}")
        os.environ[ENVKEY_TEST_APP_URI] = f"http://{app.name}.local"

    def stop(self, app: TestApp) -> None:
        self.events.append(f"stop:{app.name}")


@pytest.fixture
def _registry_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DAPR_TEST_APP_REGISTRY", "registry.example.com")
    monkeypatch.setenv("DAPR_TEST_APP_TAG", "dev")
    monkeypatch.setenv(ENVKEY_TEST_APP_URI, "")


@pytest.mark.parametrize("missing", ["DAPR_TEST_APP_REGISTRY", "DAPR_TEST_APP_TAG"])
def test_construction_fails_when_variable_unset(
    monkeypatch: pytest.MonkeyPatch, _registry_env: None, missing: str
) -> None:
    monkeypatch.delenv(missing)

    with pytest.raises(ValueError, match=missing):
        _RecordingEnvironment()


def test_lifecycle(_registry_env: None) -> None:
    env = _RecordingEnvironment()
    app = TestApp(name="state-app", image=env.image_for("state-app"))

    env.setup()
    env.start(app)
    env.stop(app)
    env.tear_down()

    assert app.image == "registry.example.com/state-app:dev"
    assert env.events == ["setup", "start:state-app", "stop:state-app", "tear_down"]
    assert os.environ[ENVKEY_TEST_APP_URI] == "http://state-app.local"
