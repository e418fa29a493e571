"""Tests for mode-dispatched fileList decoding."""

from __future__ import annotations

import json
import logging
from typing import Any
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from cloud_recording.errors import (
	FileListError,
	MalformedEncodingError,
	MissingInputError,
	UnparsableFileListError,
	UnrecognizedModeError,
)
from cloud_recording.file_list import RECOVERY_STRATEGIES, FileListMode, decode_file_list
from cloud_recording.models import FileDetail, FileListEntry


def string_payload(text: str) -> str:
	"""Encode text the way "string" fileListMode carries it: as a JSON string."""
	return json.dumps(text)


def make_file_detail(**overrides: Any) -> dict[str, Any]:
	"""Create a wire-format file detail dict, overridable via kwargs."""
	defaults: dict[str, Any] = {
		"fileName": "sid_channel.m3u8",
		"trackType": "audio_and_video",
		"uid": "0",
		"mixedAllUser": True,
		"isPlayable": True,
		"sliceStartTime": 1700000000000,
	}
	defaults.update(overrides)
	return defaults


class TestStringMode:
	def test_clean_array(self) -> None:
		result = decode_file_list("string", string_payload('[{"name":"a"}]'))
		assert len(result) == 1
		assert isinstance(result[0], FileDetail)

	def test_fields_decoded(self) -> None:
		detail = make_file_detail(fileName="abc.m3u8", uid="42")
		result = decode_file_list("string", string_payload(json.dumps([detail])))
		assert result[0].file_name == "abc.m3u8"
		assert result[0].uid == "42"
		assert result[0].is_playable is True
		assert result[0].slice_start_time == 1700000000000

	def test_surrounding_whitespace_trimmed(self) -> None:
		result = decode_file_list("string", string_payload('\n  [{"fileName":"a"}]  \t'))
		assert [f.file_name for f in result] == ["a"]

	def test_empty_array_is_not_recovery(self) -> None:
		assert decode_file_list("string", string_payload("[]")) == []

	def test_bytes_payload(self) -> None:
		raw = string_payload('[{"fileName":"a"}]').encode()
		assert len(decode_file_list("string", raw)) == 1

	def test_trailing_diagnostic_text_recovered(self) -> None:
		raw = string_payload('[{"name":"a"}] some trailing diagnostic text')
		result = decode_file_list("string", raw)
		assert len(result) == 1
		assert isinstance(result[0], FileDetail)

	def test_leading_text_recovered(self) -> None:
		raw = string_payload('warn: slow upload [{"fileName":"a.mp4"}]')
		assert [f.file_name for f in decode_file_list("string", raw)] == ["a.mp4"]

	def test_only_first_array_recovered(self) -> None:
		raw = string_payload('[{"fileName":"a"}] then [{"fileName":"b"}]')
		assert [f.file_name for f in decode_file_list("string", raw)] == ["a"]

	def test_false_literal_gives_empty_list(self) -> None:
		assert decode_file_list("string", string_payload("false")) == []

	def test_corrupted_false_literal_gives_empty_list(self) -> None:
		assert decode_file_list("string", string_payload("F4LSE")) == []
		assert decode_file_list("string", string_payload(" flse ")) == []

	def test_garbage_raises_unparsable(self) -> None:
		with pytest.raises(UnparsableFileListError) as exc_info:
			decode_file_list("string", string_payload("upload failed"))
		assert isinstance(exc_info.value.cause, ValidationError)
		assert exc_info.value.__cause__ is exc_info.value.cause

	def test_unbalanced_array_not_returned(self) -> None:
		with pytest.raises(UnparsableFileListError):
			decode_file_list("string", string_payload('[{"fileName":"a"}, {"fileN'))

	def test_extracted_array_of_wrong_shape_not_returned(self) -> None:
		with pytest.raises(UnparsableFileListError):
			decode_file_list("string", string_payload("[1, 2] trailing"))

	@pytest.mark.parametrize("record", [
		'{"isPlayable": "yes"}',
		'{"uid": 42}',
		'{"sliceStartTime": 1.0}',
		'{"sliceStartTime": "12"}',
		'{"fileName": 7}',
	])
	def test_mistyped_fields_not_coerced(self, record: str) -> None:
		with pytest.raises(UnparsableFileListError) as exc_info:
			decode_file_list("string", string_payload(f"[{record}]"))
		assert isinstance(exc_info.value.cause, ValidationError)

	def test_true_literal_not_treated_as_empty(self) -> None:
		with pytest.raises(UnparsableFileListError):
			decode_file_list("string", string_payload("true"))

	def test_payload_not_a_json_string(self) -> None:
		"""An already-decoded array is the wrong encoding for string mode."""
		with pytest.raises(MalformedEncodingError):
			decode_file_list("string", '[{"fileName":"a"}]')

	def test_payload_not_json_at_all(self) -> None:
		with pytest.raises(MalformedEncodingError):
			decode_file_list("string", "false trailing")

	def test_malformed_encoding_skips_recovery(self) -> None:
		with patch("cloud_recording.file_list.looks_like_false_literal") as recognizer:
			with pytest.raises(MalformedEncodingError):
				decode_file_list("string", "not json")
		recognizer.assert_not_called()

	def test_recovery_logged(self, caplog: pytest.LogCaptureFixture) -> None:
		caplog.set_level(logging.INFO, logger="cloud_recording.file_list")
		decode_file_list("string", string_payload('[{"fileName":"a"}] tail'))
		assert "extracted_array" in caplog.text


class TestJsonMode:
	def test_clean_array(self) -> None:
		raw = json.dumps([{"filename": "a.mp4", "sliceStartTime": 5}, {"filename": "b.mp4"}])
		result = decode_file_list("json", raw)
		assert all(isinstance(e, FileListEntry) for e in result)
		assert [e.filename for e in result] == ["a.mp4", "b.mp4"]
		assert result[0].slice_start_time == 5

	def test_malformed_fails_without_recovery(self) -> None:
		raw = '[{"filename": "a.mp4"}] trailing'
		with (
			patch("cloud_recording.file_list.extract_json_array") as extractor,
			patch("cloud_recording.file_list.looks_like_false_literal") as recognizer,
		):
			with pytest.raises(UnparsableFileListError) as exc_info:
				decode_file_list("json", raw)
		extractor.assert_not_called()
		recognizer.assert_not_called()
		assert isinstance(exc_info.value.cause, ValidationError)

	@pytest.mark.parametrize("record", [
		'{"filename": 7}',
		'{"sliceStartTime": "12"}',
		'{"sliceStartTime": 1.5}',
		'{"filename": null}',
	])
	def test_mistyped_fields_rejected(self, record: str) -> None:
		with pytest.raises(UnparsableFileListError):
			decode_file_list("json", f"[{record}]")

	def test_lone_surrogate_rejected(self) -> None:
		"""Valid JSON, but the record validator refuses unpaired surrogates."""
		raw = '[{"filename": "\\ud800"}]'
		assert json.loads(raw)[0]["filename"] == "\ud800"
		with pytest.raises(UnparsableFileListError):
			decode_file_list("json", raw)

	def test_false_literal_not_accepted(self) -> None:
		with pytest.raises(UnparsableFileListError):
			decode_file_list("json", "false")

	def test_string_encoded_array_rejected(self) -> None:
		with pytest.raises(UnparsableFileListError):
			decode_file_list("json", string_payload('[{"filename":"a"}]'))


class TestDispatch:
	def test_missing_mode(self) -> None:
		with pytest.raises(MissingInputError):
			decode_file_list(None, string_payload("[]"))

	def test_missing_payload(self) -> None:
		with pytest.raises(MissingInputError):
			decode_file_list("string", None)

	def test_missing_checked_before_mode(self) -> None:
		with pytest.raises(MissingInputError):
			decode_file_list("xml", None)

	def test_unrecognized_mode(self) -> None:
		with pytest.raises(UnrecognizedModeError) as exc_info:
			decode_file_list("xml", "[]")
		assert exc_info.value.mode == "xml"
		assert "xml" in str(exc_info.value)

	def test_mode_is_case_sensitive(self) -> None:
		with pytest.raises(UnrecognizedModeError):
			decode_file_list("STRING", string_payload("[]"))

	def test_errors_share_base(self) -> None:
		for cls in (MissingInputError, MalformedEncodingError, UnparsableFileListError, UnrecognizedModeError):
			assert issubclass(cls, FileListError)
			assert issubclass(cls, ValueError)

	def test_mode_enum_values(self) -> None:
		assert FileListMode("string") is FileListMode.STRING
		assert FileListMode("json") is FileListMode.JSON

	def test_recovery_order(self) -> None:
		assert [name for name, _ in RECOVERY_STRATEGIES] == ["extracted_array", "false_literal"]
