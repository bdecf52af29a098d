from telegram_types import decode
from telegram_types.api.types import Message, User
from telegram_types.api.update import Update, UpdateKind


def _chat():
    return {"id": 10, "type": "group", "title": "Team"}


def test_update_content_returns_the_populated_payload():
    update = decode(
        {
            "update_id": 1,
            "edited_message": {"message_id": 2, "date": 0, "edit_date": 5, "chat": _chat(), "text": "fixed"},
        },
        Update,
    ).value

    kind, payload = update.content
    assert kind is UpdateKind.EDITED_MESSAGE
    assert isinstance(payload, Message)
    assert payload.edit_date == 5


def test_update_content_for_unmodelled_update_types():
    update = decode(
        {"update_id": 1, "message_reaction": {"chat": _chat(), "new_reaction": []}},
        Update,
    ).value

    kind, payload = update.content
    assert not kind.is_known
    assert kind.value == "message_reaction"
    assert payload == {"chat": _chat(), "new_reaction": ()}


def test_update_without_payload_has_no_content():
    assert decode({"update_id": 1}, Update).value.content is None


def test_update_content_skips_explicit_nulls():
    callback = {"id": "cb1", "from": {"id": 1, "is_bot": False, "first_name": "Ada"}, "chat_instance": "ci"}
    update = decode(
        {"update_id": 1, "message": None, "message_reaction": None, "callback_query": callback},
        Update,
    ).value

    kind, payload = update.content
    assert kind is UpdateKind.CALLBACK_QUERY
    assert payload.id == "cb1"
    assert update.message is None


def test_update_with_only_null_payloads_has_no_content():
    assert decode({"update_id": 1, "message": None, "poll": None}, Update).value.content is None


def test_message_content_type():
    photo = [{"file_id": "a", "width": 1, "height": 1}]
    message = decode(
        {"message_id": 1, "date": 0, "chat": _chat(), "photo": photo, "caption": "look"},
        Message,
    ).value
    service = decode({"message_id": 2, "date": 0, "chat": _chat(), "group_chat_created": True}, Message).value
    bare = decode({"message_id": 3, "date": 0, "chat": _chat()}, Message).value

    assert message.content_type == "photo"
    assert service.content_type == "group_chat_created"
    assert bare.content_type is None


def test_user_full_name():
    assert decode({"id": 1, "is_bot": False, "first_name": "Ada"}, User).value.full_name == "Ada"
    assert (
        decode({"id": 1, "is_bot": False, "first_name": "Ada", "last_name": "Lovelace"}, User).value.full_name
        == "Ada Lovelace"
    )


def test_chat_member_updated_decodes_both_members():
    user = {"id": 5, "is_bot": False, "first_name": "Eve"}
    update = decode(
        {
            "update_id": 9,
            "chat_member": {
                "chat": _chat(),
                "from": user,
                "date": 100,
                "old_chat_member": {"user": user, "status": "member"},
                "new_chat_member": {"user": user, "status": "kicked", "until_date": 0},
            },
        },
        Update,
    ).value

    change = update.chat_member
    assert change.old_chat_member.status == "member"
    assert change.new_chat_member.status == "kicked"
    assert change.new_chat_member.until_date == 0
