"""
Command-line interface for telegram_types.

Decodes a Bot API payload saved to disk and reports how well it fits the
bundled schema. Handy for checking captured updates after Telegram ships a
new API version.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from telegram_types.api.response import decode_response
from telegram_types.core.exceptions import MalformedInput
from telegram_types.core.logger import configure_root_logger, get_logger, push_doc_id, reset_doc_id
from telegram_types.decoding.decoder import Decoded, Decoder
from telegram_types.decoding.encoder import encode
from telegram_types.drift import LoggingDriftObserver, notify
from telegram_types.models.decoder_config import DecoderConfig

logger = get_logger(__name__)


def _read_structured(path: Path) -> Any:
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        if path.suffix in (".yaml", ".yml"):
            try:
                import yaml
            except ImportError:
                raise ImportError(
                    "PyYAML required for YAML files. "
                    "Install with: pip install telegram-types[yaml]"
                )
            return yaml.safe_load(f)
        return json.load(f)


def load_config(config_path: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None) -> DecoderConfig:
    """
    Build a ``DecoderConfig`` from an optional JSON/YAML file plus overrides.

    Args:
        config_path: Path to a ``.json``, ``.yaml`` or ``.yml`` file.
        overrides: Keys that win over the file, e.g. from command-line flags.

    Raises:
        FileNotFoundError: If the config file doesn't exist
        pydantic.ValidationError: If the file holds unknown keys or values
    """
    data: Dict[str, Any] = {}
    if config_path:
        loaded = _read_structured(Path(config_path))
        if loaded is not None:
            data.update(loaded)
        logger.info(f"Loaded decoder config from {config_path}")
    data.update(overrides or {})
    return DecoderConfig.model_validate(data)


def decode_file(
    path: str,
    type_name: Optional[str] = None,
    *,
    config: DecoderConfig,
    response: bool = False,
    method: Optional[str] = None,
) -> Decoded:
    """
    Decode the document stored at ``path`` as ``type_name``.

    ``type_name`` is a registered entity or variant group name, optionally
    suffixed with ``[]`` for a list. With ``response`` set the document is
    a full Bot API response and only its ``result`` is decoded. ``method``
    names the Bot API method that produced the response and implies
    ``response``; the result type then comes from ``METHOD_RESULTS``.
    """
    document = _read_document(Path(path))
    decoder = Decoder(config=config)
    if method is not None:
        return decode_response(document, method=method, decoder=decoder)
    if response:
        return decode_response(document, type_name, decoder=decoder)
    return decoder.decode(document, type_name)


def _read_document(path: Path) -> Any:
    if path.suffix in (".yaml", ".yml"):
        return _read_structured(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    try:
        return json.loads(path.read_bytes())
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MalformedInput(str(exc)) from exc


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="telegram-types",
        description="Decode Telegram Bot API payloads against the typed schema",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Command to execute"
    )

    def add_common(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("file", help="Path to a JSON document")
        target = sub.add_mutually_exclusive_group(required=True)
        target.add_argument(
            "--type", "-t",
            dest="type_name",
            help="Entity or variant group name, e.g. Update or ChatMember; append [] for a list"
        )
        target.add_argument(
            "--method", "-m",
            help="Bot API method that produced the response, e.g. getMe; implies --response"
        )
        sub.add_argument(
            "--response",
            action="store_true",
            help="The file holds a full Bot API response; decode its result"
        )
        sub.add_argument("--config", help="Decoder config file (JSON or YAML)")
        policy = sub.add_mutually_exclusive_group()
        policy.add_argument(
            "--strict",
            action="store_true",
            help="Reject unknown fields and unknown enum values"
        )
        policy.add_argument(
            "--ignore-unknown",
            action="store_true",
            help="Drop unknown fields instead of preserving them"
        )
        sub.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Enable verbose logging"
        )

    add_common(subparsers.add_parser("decode", help="Decode and print the re-encoded value"))
    add_common(subparsers.add_parser("check", help="Only check that the document decodes"))
    return parser


def _overrides(args: argparse.Namespace) -> Dict[str, Any]:
    if args.strict:
        return DecoderConfig.strict().model_dump(include={"unknown_fields", "unknown_enum_values"})
    if args.ignore_unknown:
        return {"unknown_fields": "ignore"}
    return {}


def cli(argv: Optional[List[str]] = None) -> None:
    """
    Command-line interface for telegram_types.

    Supports subcommands:
    - decode: Decode a document and print it back as JSON
    - check: Decode a document and report only success or failure

    Usage:
        telegram-types decode update.json --type Update
        telegram-types check getUpdates.json --type Update[] --response --strict
        telegram-types decode getMe.json --method getMe
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    configure_root_logger("DEBUG" if args.verbose else "INFO")
    token = push_doc_id(Path(args.file).name)
    try:
        config = load_config(args.config, _overrides(args))
        decoded = decode_file(
            args.file,
            args.type_name,
            config=config,
            response=args.response,
            method=args.method,
        )
        notify([LoggingDriftObserver()], decoded)
    except Exception as e:
        logger.error(f"Decoding {args.file} as {args.type_name or args.method} failed: {e}")
        sys.exit(1)
    finally:
        reset_doc_id(token)

    if args.command == "decode":
        print(json.dumps(encode(decoded.value), indent=2, ensure_ascii=False))
    else:
        print(f"OK: {args.file} decodes as {decoded.target}")
    for path in decoded.unknown_fields:
        print(f"unknown field: {path}", file=sys.stderr)
    sys.exit(0)


if __name__ == "__main__":
    cli()
