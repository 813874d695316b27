from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from tests._fixtures.repo_builder import RepoBuilder


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
    """Provide a reusable project builder rooted at the pytest tmp_path."""
    return RepoBuilder(tmp_path)


@pytest.fixture
def ngmap_logs(caplog: pytest.LogCaptureFixture) -> Iterator[pytest.LogCaptureFixture]:
    """Capture ngmap records even after a CLI run has disabled propagation."""
    logger = logging.getLogger("ngmap")
    logger.addHandler(caplog.handler)
    caplog.set_level(logging.DEBUG, logger="ngmap")
    try:
        yield caplog
    finally:
        logger.removeHandler(caplog.handler)
