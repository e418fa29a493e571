"""Small helpers used around recording sessions."""

from __future__ import annotations

import logging
import random
from datetime import datetime, timezone
from typing import Any, Protocol

from pydantic_core import PydanticSerializationError

from cloud_recording.config import ServiceConfig
from cloud_recording.errors import TimestampSerializationError

logger = logging.getLogger(__name__)


class Timestampable(Protocol):
	def set_timestamp(self, timestamp: str) -> None: ...

	def model_dump_json(self, **kwargs: Any) -> str: ...


class CloudRecordingService:
	"""Session-side utilities: UIDs, mode checks, response stamping.

	The random source is injected so UID generation can be seeded in tests.
	"""

	def __init__(
		self,
		config: ServiceConfig | None = None,
		rng: random.Random | None = None,
	) -> None:
		self._config = config or ServiceConfig()
		self._rng = rng or random.Random()

	def generate_uid(self) -> str:
		"""Return a random UID in [1, uid_max] as a string. 0 is reserved."""
		return str(self._rng.randint(1, self._config.uid_max))

	def validate_recording_mode(self, mode: str) -> bool:
		return mode in self._config.recording_modes

	def add_timestamp(self, response: Timestampable) -> str:
		"""Stamp response with the current UTC time and serialize it to JSON.

		Raises:
			TimestampSerializationError: If the stamped response can't be encoded.
		"""
		now = datetime.now(timezone.utc).strftime(self._config.timestamp_format)
		response.set_timestamp(now)
		try:
			return response.model_dump_json(by_alias=True, exclude_none=True)
		except PydanticSerializationError as exc:
			logger.warning("Failed to serialize %s after stamping: %s", type(response).__name__, exc)
			raise TimestampSerializationError(
				f"error marshaling final response with timestamp: {exc}"
			) from exc
