"""Shared pytest fixtures for cloud-recording tests."""

from __future__ import annotations

import random

import pytest

from cloud_recording.config import LOG_LEVEL_ENV, ServiceConfig
from cloud_recording.service import CloudRecordingService


@pytest.fixture(autouse=True)
def _clear_log_level_env(monkeypatch: pytest.MonkeyPatch) -> None:
	monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)


@pytest.fixture()
def service() -> CloudRecordingService:
	"""Service with a seeded random source."""
	return CloudRecordingService(ServiceConfig(), rng=random.Random(1234))
