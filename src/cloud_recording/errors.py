"""Exceptions raised while interpreting recording service responses."""

from __future__ import annotations


class FileListError(ValueError):
	"""Base class for file-list decoding failures."""


class MissingInputError(FileListError):
	"""fileListMode or fileList was absent from the response."""


class MalformedEncodingError(FileListError):
	"""A "string" mode payload was not a JSON-encoded string."""


class UnparsableFileListError(FileListError):
	"""No decoding path produced a file list.

	``cause`` holds the original parse failure.
	"""

	def __init__(self, message: str, cause: Exception | None = None) -> None:
		super().__init__(message)
		self.cause = cause


class UnrecognizedModeError(FileListError):
	def __init__(self, mode: str) -> None:
		super().__init__(f"unknown fileListMode: {mode}")
		self.mode = mode


class TimestampSerializationError(RuntimeError):
	"""Re-encoding a response after stamping it failed."""
