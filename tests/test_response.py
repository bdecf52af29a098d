import json
from typing import List

import pytest

from telegram_types import Decoder, DecoderConfig, decode_response, decode_response_json
from telegram_types.api.methods import METHOD_RESULTS
from telegram_types.api.types import ChatMemberAdministrator, ChatMemberOwner, MessageIdResult, User
from telegram_types.api.update import Update
from telegram_types.core.exceptions import (
    ApiError,
    MalformedInput,
    MissingRequiredField,
    RegistryError,
    TypeMismatch,
    UnknownField,
)


def test_ok_response_decodes_result():
    decoded = decode_response(
        {"ok": True, "result": {"id": 1, "is_bot": True, "first_name": "Bot", "username": "the_bot"}},
        User,
    )

    assert decoded.value.username == "the_bot"


def test_ok_response_with_list_result():
    decoded = decode_response(
        {"ok": True, "result": [{"update_id": 1}, {"update_id": 2}]},
        List[Update],
    )

    assert [u.update_id for u in decoded.value] == [1, 2]


def test_result_errors_are_prefixed_with_result():
    with pytest.raises(MissingRequiredField) as exc:
        decode_response({"ok": True, "result": [{"update_id": 1}, {}]}, "Update[]")

    assert exc.value.path == "result[1].update_id"


def test_result_unknown_fields_are_prefixed_with_result():
    decoded = decode_response({"ok": True, "result": {"message_id": 5, "thread": 1}}, MessageIdResult)

    assert decoded.unknown_fields == ("result.thread",)


def test_ok_without_result_raises_api_error():
    with pytest.raises(ApiError, match="not found `result` field") as exc:
        decode_response({"ok": True}, User)

    assert exc.value.error_code == 0


def test_error_response_raises_api_error():
    with pytest.raises(ApiError) as exc:
        decode_response(
            {"ok": False, "error_code": 400, "description": "Bad Request: chat not found"},
            User,
        )

    assert exc.value.error_code == 400
    assert exc.value.description == "Bad Request: chat not found"
    assert exc.value.parameters is None
    assert str(exc.value) == "[400] Bad Request: chat not found"


def test_error_response_carries_decoded_parameters():
    with pytest.raises(ApiError) as exc:
        decode_response(
            {
                "ok": False,
                "error_code": 429,
                "description": "Too Many Requests: retry after 5",
                "parameters": {"retry_after": 5},
            },
            User,
        )

    assert exc.value.parameters.retry_after == 5
    assert exc.value.parameters.migrate_to_chat_id is None


def test_error_response_without_code():
    with pytest.raises(ApiError, match="not found `error_code` field") as exc:
        decode_response({"ok": False, "description": "?"}, User)

    assert exc.value.error_code == 0


def test_envelope_shape_is_checked():
    with pytest.raises(TypeMismatch) as exc:
        decode_response({"ok": "yes", "result": {}}, User)
    assert exc.value.path == "ok"

    with pytest.raises(TypeMismatch) as exc:
        decode_response(["ok"], User)
    assert exc.value.path == "<root>"


def test_strict_decoder_applies_to_the_result():
    decoder = Decoder(config=DecoderConfig.strict())

    with pytest.raises(UnknownField) as exc:
        decode_response({"ok": True, "result": {"message_id": 5, "thread": 1}}, MessageIdResult, decoder=decoder)

    assert exc.value.path == "result.thread"


def test_decode_response_json():
    raw = json.dumps({"ok": True, "result": {"message_id": 9}})

    assert decode_response_json(raw, MessageIdResult).value.message_id == 9
    with pytest.raises(MalformedInput):
        decode_response_json("<html>502 Bad Gateway</html>", MessageIdResult)


def _admin(status="administrator", **overrides):
    doc = {"user": {"id": 1, "is_bot": False, "first_name": "Ada"}, "status": status, "is_anonymous": False}
    doc.update(overrides)
    return doc


def test_method_name_selects_the_result_type():
    owner = _admin("creator")
    admin = _admin(
        can_be_edited=False,
        can_manage_chat=True,
        can_delete_messages=True,
        can_manage_video_chats=False,
        can_restrict_members=True,
        can_promote_members=False,
        can_change_info=True,
        can_invite_users=True,
    )

    decoded = decode_response({"ok": True, "result": [owner, admin]}, method="getChatAdministrators")

    first, second = decoded.value
    assert isinstance(first, ChatMemberOwner)
    assert isinstance(second, ChatMemberAdministrator)
    assert decoded.target == "list of ChatMember"


def test_method_results_cover_scalar_results():
    assert decode_response({"ok": True, "result": 42}, method="getChatMembersCount").value == 42
    assert decode_response({"ok": True, "result": True}, method="deleteWebhook").value is True

    with pytest.raises(TypeMismatch) as exc:
        decode_response({"ok": True, "result": "42"}, method="getChatMembersCount")
    assert exc.value.path == "result"


def test_every_listed_method_resolves():
    decoder = Decoder()

    for method, target in METHOD_RESULTS.items():
        assert decoder.registry.resolve(target) is not None, method


def test_unknown_method_raises_registry_error():
    with pytest.raises(RegistryError, match="getMyCommands"):
        decode_response({"ok": True, "result": []}, method="getMyCommands")


def test_target_and_method_are_exclusive():
    with pytest.raises(ValueError):
        decode_response({"ok": True, "result": {}}, User, method="getMe")
    with pytest.raises(ValueError):
        decode_response({"ok": True, "result": {}})


def test_envelope_unknown_fields_are_reported():
    decoded = decode_response(
        {"ok": True, "warning": "deprecated", "result": {"message_id": 5, "thread": 1}},
        MessageIdResult,
    )

    assert decoded.value.message_id == 5
    assert decoded.unknown_fields == ("warning", "result.thread")
    assert decoded.target == "MessageIdResult"


def test_strict_decoder_rejects_unknown_envelope_fields():
    decoder = Decoder(config=DecoderConfig.strict())

    with pytest.raises(UnknownField) as exc:
        decode_response({"ok": True, "warning": "x", "result": {"message_id": 5}}, MessageIdResult, decoder=decoder)
    assert exc.value.path == "warning"


def test_decode_response_json_by_method():
    raw = json.dumps({"ok": True, "result": {"id": 1, "is_bot": True, "first_name": "Bot"}})

    assert isinstance(decode_response_json(raw, method="getMe").value, User)
