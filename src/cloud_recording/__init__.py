"""Decoding helpers for cloud recording service responses."""

from __future__ import annotations

from cloud_recording.errors import (
	FileListError,
	MalformedEncodingError,
	MissingInputError,
	UnparsableFileListError,
	UnrecognizedModeError,
)
from cloud_recording.file_list import FileListMode, decode_file_list
from cloud_recording.models import FileDetail, FileListEntry, ServerResponse

__all__ = [
	"FileDetail",
	"FileListEntry",
	"FileListError",
	"FileListMode",
	"MalformedEncodingError",
	"MissingInputError",
	"ServerResponse",
	"UnparsableFileListError",
	"UnrecognizedModeError",
	"decode_file_list",
]
