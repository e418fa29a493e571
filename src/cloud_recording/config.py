"""TOML configuration loader for cloud-recording."""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

MAX_UID = 4294967294
LOG_LEVEL_ENV = "CLOUD_RECORDING_LOG_LEVEL"


@dataclass
class ServiceConfig:
	"""Recording session helper settings."""

	recording_modes: tuple[str, ...] = ("individual", "mix", "web")
	timestamp_format: str = "%Y-%m-%dT%H:%M:%SZ"  # RFC 3339, UTC
	uid_max: int = MAX_UID


@dataclass
class LoggingConfig:
	level: str = "INFO"


@dataclass
class CloudRecordingConfig:
	"""Top-level cloud-recording configuration."""

	service: ServiceConfig = field(default_factory=ServiceConfig)
	logging: LoggingConfig = field(default_factory=LoggingConfig)


def _build_service(data: dict[str, Any]) -> ServiceConfig:
	sc = ServiceConfig()
	if "recording_modes" in data:
		sc.recording_modes = tuple(str(m) for m in data["recording_modes"])
	if "timestamp_format" in data:
		sc.timestamp_format = str(data["timestamp_format"])
	if "uid_max" in data:
		sc.uid_max = int(data["uid_max"])
	return sc


def _build_logging(data: dict[str, Any]) -> LoggingConfig:
	lc = LoggingConfig()
	if "level" in data:
		lc.level = str(data["level"]).upper()
	return lc


def load_config(path: str | Path) -> CloudRecordingConfig:
	"""Load a cloud-recording.toml config file.

	Raises:
		FileNotFoundError: If config file doesn't exist.
		tomllib.TOMLDecodeError: If config is invalid TOML.
	"""
	config_path = Path(path)
	if not config_path.exists():
		raise FileNotFoundError(f"Config file not found: {config_path}")

	with open(config_path, "rb") as f:
		data = tomllib.load(f)

	cfg = CloudRecordingConfig()
	if "service" in data:
		cfg.service = _build_service(data["service"])
	if "logging" in data:
		cfg.logging = _build_logging(data["logging"])
	apply_env_overrides(cfg)
	return cfg


def apply_env_overrides(cfg: CloudRecordingConfig) -> CloudRecordingConfig:
	level = os.environ.get(LOG_LEVEL_ENV, "")
	if level:
		cfg.logging.level = level.upper()
	return cfg


def validate_config(config: CloudRecordingConfig) -> list[tuple[str, str]]:
	"""Perform semantic validation of a loaded config.

	Returns a list of (level, message) tuples where level is 'error' or 'warning'.
	"""
	issues: list[tuple[str, str]] = []

	sc = config.service
	if not sc.recording_modes:
		issues.append(("error", "service.recording_modes must not be empty"))
	if sc.uid_max < 1:
		issues.append(("error", f"service.uid_max must be at least 1: {sc.uid_max}"))
	elif sc.uid_max > MAX_UID:
		issues.append(("error", f"service.uid_max exceeds {MAX_UID}: {sc.uid_max}"))
	elif sc.uid_max < 1000:
		issues.append(("warning", f"service.uid_max is very low: {sc.uid_max}"))

	try:
		datetime.now(timezone.utc).strftime(sc.timestamp_format)
	except ValueError as exc:
		issues.append(("error", f"service.timestamp_format is invalid: {exc}"))
	if "%" not in sc.timestamp_format:
		issues.append(("warning", "service.timestamp_format has no format directives"))

	if not isinstance(logging.getLevelName(config.logging.level), int):
		issues.append(("error", f"logging.level is not a known level: {config.logging.level}"))

	return issues
