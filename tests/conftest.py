import pytest

from raytracer.SDL_Scene.core.preferences import (
    DEFAULT_MAX_DEPTH, reset_preferences, set_preferences,
)


@pytest.fixture(autouse=True)
def sdl_preferences(tmp_path):
    """Keep the log file inside the test's temporary directory."""
    prefs = set_preferences(
        enable_logging=True,
        verbose_logging=False,
        log_dir=str(tmp_path / "logs"),
        max_depth=DEFAULT_MAX_DEPTH,
    )
    yield prefs
    reset_preferences()


class RecordingLoader:
    """Stands in for the mesh / image collaborator and records every call."""

    def __init__(self, result="loaded", error=None):
        self.result = result
        self.error = error
        self.calls = []

    def __call__(self, path):
        self.calls.append(path)
        if self.error is not None:
            raise self.error
        return f"{self.result}:{path}"


@pytest.fixture
def mesh_loader():
    return RecordingLoader("mesh")


@pytest.fixture
def image_loader():
    return RecordingLoader("image")


@pytest.fixture
def failing_mesh_loader():
    return RecordingLoader(error=OSError("disk on fire"))
