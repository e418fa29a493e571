"""CLI interface for cloud-recording."""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys
import tomllib
from pathlib import Path

from cloud_recording.config import (
	CloudRecordingConfig,
	apply_env_overrides,
	load_config,
	validate_config,
)
from cloud_recording.errors import FileListError
from cloud_recording.file_list import decode_file_list
from cloud_recording.models import ServerResponse
from cloud_recording.service import CloudRecordingService

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = "cloud-recording.toml"


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(
		prog="cloud-recording",
		description="Cloud recording response helpers",
	)
	parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
	sub = parser.add_subparsers(dest="command")

	# cloud-recording decode
	decode = sub.add_parser("decode", help="Decode a raw fileList value")
	decode.add_argument("--config", default=DEFAULT_CONFIG, help="Config file path")
	decode.add_argument("--mode", required=True, help="fileListMode of the payload (string or json)")
	decode.add_argument("--input", default="-", help="Payload file (default: stdin)")

	# cloud-recording decode-response
	decode_resp = sub.add_parser("decode-response", help="Decode the fileList of a serverResponse body")
	decode_resp.add_argument("--config", default=DEFAULT_CONFIG, help="Config file path")
	decode_resp.add_argument("--input", default="-", help="Response body file (default: stdin)")

	# cloud-recording uid
	uid = sub.add_parser("uid", help="Generate a recording UID")
	uid.add_argument("--config", default=DEFAULT_CONFIG, help="Config file path")
	uid.add_argument("--seed", type=int, default=None, help="Seed for reproducible output")

	# cloud-recording validate-mode
	vm = sub.add_parser("validate-mode", help="Check a recording mode name")
	vm.add_argument("--config", default=DEFAULT_CONFIG, help="Config file path")
	vm.add_argument("mode")

	# cloud-recording validate-config
	vc = sub.add_parser("validate-config", help="Validate config file")
	vc.add_argument("--config", default=DEFAULT_CONFIG, help="Config file path")

	return parser


def _load_config_or_default(path: str) -> CloudRecordingConfig:
	"""Load the config file if present, otherwise fall back to defaults."""
	if path == DEFAULT_CONFIG and not Path(path).exists():
		return apply_env_overrides(CloudRecordingConfig())
	return load_config(path)


def _read_input(path: str) -> str:
	if path == "-":
		return sys.stdin.read()
	return Path(path).read_text()


def _print_file_list(files: list) -> None:
	print(json.dumps([f.model_dump(by_alias=True) for f in files], indent=2))


def cmd_decode(args: argparse.Namespace, config: CloudRecordingConfig) -> int:
	"""Decode a raw fileList value read from --input."""
	raw = _read_input(args.input)
	files = decode_file_list(args.mode, raw)
	_print_file_list(files)
	return 0


def cmd_decode_response(args: argparse.Namespace, config: CloudRecordingConfig) -> int:
	"""Decode the fileList carried by a full serverResponse body."""
	body = _read_input(args.input)
	try:
		response = ServerResponse.from_json(body)
	except ValueError as e:
		print(f"Error: invalid response body: {e}")
		return 1
	files = response.unmarshal_file_list()
	_print_file_list(files)
	return 0


def cmd_uid(args: argparse.Namespace, config: CloudRecordingConfig) -> int:
	rng = random.Random(args.seed) if args.seed is not None else None
	service = CloudRecordingService(config.service, rng=rng)
	print(service.generate_uid())
	return 0


def cmd_validate_mode(args: argparse.Namespace, config: CloudRecordingConfig) -> int:
	service = CloudRecordingService(config.service)
	if service.validate_recording_mode(args.mode):
		print("valid")
		return 0
	print(f"invalid (expected one of: {', '.join(config.service.recording_modes)})")
	return 1


def cmd_validate_config(args: argparse.Namespace, config: CloudRecordingConfig) -> int:
	"""Validate config file semantically."""
	issues = validate_config(config)

	errors = [(lvl, msg) for lvl, msg in issues if lvl == "error"]
	warnings = [(lvl, msg) for lvl, msg in issues if lvl == "warning"]

	for level, msg in issues:
		print(f"[{level.upper()}] {msg}")

	if not issues:
		print("Config OK")

	print(f"\n{len(errors)} error(s), {len(warnings)} warning(s)")
	return 1 if errors else 0


COMMANDS = {
	"decode": cmd_decode,
	"decode-response": cmd_decode_response,
	"uid": cmd_uid,
	"validate-mode": cmd_validate_mode,
	"validate-config": cmd_validate_config,
}


def main(argv: list[str] | None = None) -> int:
	parser = build_parser()
	args = parser.parse_args(argv)

	if args.command is None:
		parser.print_help()
		return 0

	try:
		config = _load_config_or_default(args.config)
	except FileNotFoundError as e:
		print(f"Error: {e}")
		return 1
	except tomllib.TOMLDecodeError as e:
		print(f"Error: invalid config file {args.config}: {e}")
		return 1

	level = config.logging.level
	if not isinstance(logging.getLevelName(level), int):
		level = "INFO"
	logging.basicConfig(
		level=logging.DEBUG if args.verbose else level,
		format="%(asctime)s %(levelname)s %(name)s: %(message)s",
		datefmt="%H:%M:%S",
		force=True,
	)

	handler = COMMANDS.get(args.command)
	if handler is None:
		print(f"Unknown command: {args.command}")
		return 1

	try:
		return handler(args, config)
	except FileListError as e:
		print(f"Error: {e}")
		return 1
	except FileNotFoundError as e:
		print(f"Error: {e}")
		return 1


if __name__ == "__main__":
	sys.exit(main())
