"""
Pytest fixtures and configuration for the test suite.

Strategy:
- Real filesystem (temporary directories) everywhere
- FakeRenderer replaces ffmpeg; every other component is the real one
- Small spectrogram dimensions keep records tiny; decoding at the default
  1024x1024 is covered separately
"""

import json
import sys
import tempfile
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

# Add project root to path so tests can import the neuralforge package,
# and the tests dir so helpers under fixtures/ import as `fixtures.*`
project_root = Path(__file__).parent.parent
tests_root = Path(__file__).parent
for _path in (project_root, tests_root):
    if str(_path) not in sys.path:
        sys.path.insert(0, str(_path))

from fixtures.fake_renderer import FakeRenderer  # noqa: E402
from fixtures.generate import create_wav_file, write_wav_frames  # noqa: E402
from neuralforge.helpers.dto.processing_dto import PipelineConfig  # noqa: E402
from neuralforge.helpers.dto.project_dto import ProjectPaths  # noqa: E402
from neuralforge.helpers.logging_helper import clear_log_context  # noqa: E402
from neuralforge.services.pipeline_svc import PipelineService  # noqa: E402

TEST_SPECTROGRAM_SIZE = 16


@pytest.fixture(autouse=True)
def _reset_log_context() -> Generator[None, None, None]:
    """Make sure no test leaks log context into the next one."""
    yield
    clear_log_context()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def projects_root(temp_dir: Path) -> Path:
    root = temp_dir / "projects"
    root.mkdir()
    return root


@pytest.fixture
def source_dir(temp_dir: Path) -> Path:
    """Directory standing in for the user's selected source folder."""
    src = temp_dir / "source"
    src.mkdir()
    return src


@pytest.fixture
def make_project(projects_root: Path, source_dir: Path) -> Callable[..., ProjectPaths]:
    """Factory: create a project directory with config.json and file_list.json.

    Usage:
        paths = make_project("birds", {".": ["a.wav"]})
    """

    def _make(name: str, file_list: dict[str, list[str]]) -> ProjectPaths:
        paths = ProjectPaths(name=name, project_root=projects_root / name)
        paths.project_root.mkdir(parents=True, exist_ok=True)
        paths.config_path.write_text(json.dumps({"selected_directory": str(source_dir)}), encoding="utf-8")
        paths.file_list_path.write_text(json.dumps(file_list), encoding="utf-8")
        return paths

    return _make


@pytest.fixture
def make_wav() -> Callable[..., Path]:
    """Factory: write a sine WAV; distinct frequencies give distinct bytes."""

    def _make(path: Path, frequency: float = 440.0, duration: float = 0.5) -> Path:
        return create_wav_file(path, duration=duration, frequency=frequency)

    return _make


@pytest.fixture
def make_raw_wav() -> Callable[..., Path]:
    """Factory: write a WAV from raw frame bytes."""

    def _make(path: Path, frames: bytes) -> Path:
        return write_wav_frames(path, frames)

    return _make


@pytest.fixture
def pipeline_config() -> PipelineConfig:
    return PipelineConfig(
        batch_normalize=2,
        pool_spectrogram=3,
        pool_loader=4,
        spectrogram_width=TEST_SPECTROGRAM_SIZE,
        spectrogram_height=TEST_SPECTROGRAM_SIZE,
        kmeans_seed=1234,
    )


@pytest.fixture
def fake_renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def pipeline_service(
    pipeline_config: PipelineConfig, projects_root: Path, fake_renderer: FakeRenderer
) -> PipelineService:
    return PipelineService(config=pipeline_config, projects_root=projects_root, renderer=fake_renderer)
