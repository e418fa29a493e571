"""Wire models for cloud recording REST responses."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

_WIRE_CONFIG = ConfigDict(extra="ignore", populate_by_name=True)
# File records are decoded without type coercion; a mistyped field is a parse failure.
_RECORD_CONFIG = ConfigDict(extra="ignore", populate_by_name=True, strict=True)


class FileDetail(BaseModel):
	"""One recorded file, as listed in "string" fileListMode."""

	model_config = _RECORD_CONFIG

	file_name: str = Field(default="", alias="fileName")
	track_type: str = Field(default="", alias="trackType")
	uid: str = ""
	mixed_all_user: bool = Field(default=False, alias="mixedAllUser")
	is_playable: bool = Field(default=False, alias="isPlayable")
	slice_start_time: int = Field(default=0, alias="sliceStartTime")


class FileListEntry(BaseModel):
	"""One recorded file, as listed in "json" fileListMode."""

	model_config = _RECORD_CONFIG

	filename: str = ""
	slice_start_time: int = Field(default=0, alias="sliceStartTime")


class ServerResponse(BaseModel):
	"""The serverResponse block of a query or stop response.

	``file_list`` keeps the fileList field as JSON text, undecoded, because
	its shape is only known once ``file_list_mode`` is read.
	"""

	model_config = _WIRE_CONFIG

	status: str | None = None
	file_list_mode: str | None = Field(default=None, alias="fileListMode")
	file_list: str | None = Field(default=None, alias="fileList")
	uploading_status: str | None = Field(default=None, alias="uploadingStatus")
	extension_service_state: list[dict[str, Any]] | None = Field(
		default=None, alias="extensionServiceState",
	)

	@field_validator("file_list", mode="before")
	@classmethod
	def _encode_file_list(cls, value: Any) -> str | None:
		if value is None:
			return None
		return json.dumps(value)

	@field_serializer("file_list")
	def _decode_file_list(self, value: str | None) -> Any:
		if value is None:
			return None
		return json.loads(value)

	@classmethod
	def from_json(cls, body: str | bytes) -> ServerResponse:
		return cls.model_validate(json.loads(body))

	def unmarshal_file_list(self) -> list[FileDetail] | list[FileListEntry]:
		"""Decode ``file_list`` according to ``file_list_mode``."""
		from cloud_recording.file_list import decode_file_list

		return decode_file_list(self.file_list_mode, self.file_list)


class TimestampedResponse(BaseModel):
	"""Base for responses handed back to callers with a stamp of when."""

	model_config = _WIRE_CONFIG

	timestamp: str | None = None

	def set_timestamp(self, timestamp: str) -> None:
		self.timestamp = timestamp


class StartRecordingResponse(TimestampedResponse):
	cname: str = ""
	uid: str = ""
	resource_id: str = Field(default="", alias="resourceId")
	sid: str = ""


class StopRecordingResponse(TimestampedResponse):
	resource_id: str = Field(default="", alias="resourceId")
	sid: str = ""
	server_response: ServerResponse | None = Field(default=None, alias="serverResponse")


class QueryRecordingResponse(TimestampedResponse):
	resource_id: str = Field(default="", alias="resourceId")
	sid: str = ""
	server_response: ServerResponse | None = Field(default=None, alias="serverResponse")
