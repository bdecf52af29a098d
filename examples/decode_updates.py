"""
Example: Decoding a getUpdates response and watching for schema drift.

This shows:
- Unwrapping the response envelope by method name
- Dispatching on the kind of each update
- Counting fields the bundled schema does not know yet
"""

import json

from telegram_types import Decoder, DecoderConfig, decode_response, encode
from telegram_types.api.update import UpdateKind
from telegram_types.core.exceptions import ApiError, DecodeError
from telegram_types.drift import DriftCollector, notify

# A response body as returned by https://api.telegram.org/bot<token>/getUpdates
RAW_RESPONSE = json.dumps(
    {
        "ok": True,
        "result": [
            {
                "update_id": 845301001,
                "message": {
                    "message_id": 3141,
                    "from": {"id": 5000000001, "is_bot": False, "first_name": "Ada"},
                    "chat": {"id": 5000000001, "type": "private", "first_name": "Ada"},
                    "date": 1700000000,
                    "text": "/start",
                    "entities": [{"type": "bot_command", "offset": 0, "length": 6}],
                },
            },
            {
                "update_id": 845301002,
                "callback_query": {
                    "id": "4382bfdwdsb323b2d9",
                    "from": {"id": 5000000001, "is_bot": False, "first_name": "Ada"},
                    "chat_instance": "-2893480235",
                    "data": "like:1",
                },
            },
            {
                # Newer update type, kept as a raw read-only document
                "update_id": 845301003,
                "message_reaction": {
                    "chat": {"id": -1001234567890, "type": "supergroup", "title": "Engines"},
                    "new_reaction": [{"type": "emoji", "emoji": "+1"}],
                },
            },
        ],
    }
)


# =============================================================================
# Example 1: Decode the whole response by method name
# =============================================================================
drift = DriftCollector()
decoded = notify([drift], decode_response(json.loads(RAW_RESPONSE), method="getUpdates"))

print(f"Decoded {len(decoded.value)} updates as {decoded.target}")
for update in decoded.value:
    kind, payload = update.content
    if kind is UpdateKind.MESSAGE:
        print(f"   {update.update_id}: {payload.content_type} from {payload.from_user.full_name}")
    elif kind is UpdateKind.CALLBACK_QUERY:
        print(f"   {update.update_id}: button pressed with data {payload.data!r}")
    elif not kind.is_known:
        print(f"   {update.update_id}: unmodelled {kind.value} update, re-encoded as {encode(payload)}")


# =============================================================================
# Example 2: Drift report
# =============================================================================
print(f"\nDocuments seen: {drift.documents}")
for target, path, count in drift.report():
    print(f"   {target}: {path} x{count}")


# =============================================================================
# Example 3: Strict decoding and error handling
# =============================================================================
strict = Decoder(config=DecoderConfig.strict())
try:
    decode_response(json.loads(RAW_RESPONSE), method="getUpdates", decoder=strict)
except DecodeError as e:
    print(f"\nStrict decode failed at {e.path}: {e.message}")

try:
    decode_response({"ok": False, "error_code": 409, "description": "Conflict"}, method="getUpdates")
except ApiError as e:
    print(f"Telegram answered with error {e.error_code}: {e.description}")
