"""telegram_types.

Schema-driven decoding of Telegram Bot API objects.

Turns parsed JSON documents (updates, messages, chat members, inline query
results, whole method responses) into immutable typed values, resolving
untagged variant groups by the shape of the document and keeping fields the
schema does not know about yet.

Public API for clients of this package.
"""

from telegram_types.api.methods import METHOD_RESULTS
from telegram_types.api.response import decode_response, decode_response_json
from telegram_types.bootstrap import build_registry, get_default_registry
from telegram_types.decoding.decoder import Decoded, Decoder, decode, decode_json
from telegram_types.decoding.encoder import encode
from telegram_types.models.decoder_config import DecoderConfig
from telegram_types.schema.entity import Entity, is_present

__version__ = "0.1.0"

__all__ = [
    "METHOD_RESULTS",
    "Decoded",
    "Decoder",
    "DecoderConfig",
    "Entity",
    "build_registry",
    "decode",
    "decode_json",
    "decode_response",
    "decode_response_json",
    "encode",
    "get_default_registry",
    "is_present",
]
