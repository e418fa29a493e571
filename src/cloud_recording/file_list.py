"""Decoding of the fileList field from a recording query response.

The field's shape depends on fileListMode. In "string" mode the service
sends a JSON string holding an array of file details, but the array is
sometimes followed by diagnostic text or replaced outright by a false-like
token meaning "no files". Those cases go through an ordered recovery chain
after the primary parse fails. "json" mode gets no such leniency.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from enum import Enum

from pydantic import TypeAdapter, ValidationError

from cloud_recording.errors import (
	MalformedEncodingError,
	MissingInputError,
	UnparsableFileListError,
	UnrecognizedModeError,
)
from cloud_recording.json_utils import extract_json_array, looks_like_false_literal
from cloud_recording.models import FileDetail, FileListEntry

logger = logging.getLogger(__name__)


class FileListMode(str, Enum):
	STRING = "string"
	JSON = "json"


_FILE_DETAILS = TypeAdapter(list[FileDetail])
_FILE_LIST_ENTRIES = TypeAdapter(list[FileListEntry])

RecoveryStrategy = Callable[[str], list[FileDetail] | None]


def _recover_extracted_array(text: str) -> list[FileDetail] | None:
	"""Parse the first balanced array embedded in text, if any."""
	candidate = extract_json_array(text)
	if candidate is None:
		return None
	try:
		return _FILE_DETAILS.validate_json(candidate)
	except ValidationError:
		return None


def _recover_false_literal(text: str) -> list[FileDetail] | None:
	if looks_like_false_literal(text):
		return []
	return None


# Tried in order after the primary parse fails; the first non-None wins.
RECOVERY_STRATEGIES: tuple[tuple[str, RecoveryStrategy], ...] = (
	("extracted_array", _recover_extracted_array),
	("false_literal", _recover_false_literal),
)


def _decode_string_mode(raw: bytes | str) -> list[FileDetail]:
	try:
		unwrapped = json.loads(raw)
	except (json.JSONDecodeError, UnicodeDecodeError) as exc:
		raise MalformedEncodingError(f"error parsing fileList into string: {exc}") from exc
	if not isinstance(unwrapped, str):
		raise MalformedEncodingError(
			f"error parsing fileList into string: got {type(unwrapped).__name__}"
		)

	trimmed = unwrapped.strip()
	try:
		return _FILE_DETAILS.validate_json(trimmed)
	except ValidationError as exc:
		primary_error = exc

	logger.debug("Primary fileList parse failed, trying recovery (%d chars)", len(trimmed))
	for name, strategy in RECOVERY_STRATEGIES:
		result = strategy(trimmed)
		if result is not None:
			logger.info("Recovered fileList via %s (%d files)", name, len(result))
			return result

	logger.warning("Could not recover fileList from %d chars of text", len(trimmed))
	raise UnparsableFileListError(
		f"error parsing fileList into file details: {primary_error}",
		cause=primary_error,
	) from primary_error


def _decode_json_mode(raw: bytes | str) -> list[FileListEntry]:
	try:
		return _FILE_LIST_ENTRIES.validate_json(raw)
	except ValidationError as exc:
		raise UnparsableFileListError(
			f"error parsing fileList into file list entries: {exc}",
			cause=exc,
		) from exc


def decode_file_list(
	mode: str | None,
	raw: bytes | str | None,
) -> list[FileDetail] | list[FileListEntry]:
	"""Decode a fileList payload according to its declared mode.

	Args:
		mode: The response's fileListMode value.
		raw: The still-encoded fileList value, as JSON text.

	Returns:
		FileDetail records for "string" mode, FileListEntry records for
		"json" mode. An empty list only comes back when a "string" payload
		is a false-like literal.

	Raises:
		MissingInputError: mode or raw is None.
		MalformedEncodingError: a "string" payload is not a JSON string.
		UnparsableFileListError: no decoding path produced a list.
		UnrecognizedModeError: mode is not "string" or "json".
	"""
	if mode is None or raw is None:
		raise MissingInputError("fileListMode or fileList is empty, cannot decode file list")

	try:
		file_list_mode = FileListMode(mode)
	except ValueError:
		raise UnrecognizedModeError(mode) from None

	if file_list_mode is FileListMode.STRING:
		return _decode_string_mode(raw)
	if file_list_mode is FileListMode.JSON:
		return _decode_json_mode(raw)
	raise UnrecognizedModeError(mode)
