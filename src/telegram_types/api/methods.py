"""
What each Bot API method returns.

``decode_response(document, method="getChat")`` looks the result type up
here instead of taking it from the caller.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, List

from telegram_types.api.types import Chat, ChatMember, Message, User, WebhookInfo
from telegram_types.api.update import Update
from telegram_types.core.exceptions import RegistryError
from telegram_types.schema.entity import Int32

METHOD_RESULTS = MappingProxyType(
    {
        "getUpdates": List[Update],
        "setWebhook": bool,
        "deleteWebhook": bool,
        "getWebhookInfo": WebhookInfo,
        "getMe": User,
        "sendMessage": Message,
        "forwardMessage": Message,
        "deleteMessage": bool,
        "editMessageText": Message,
        "editMessageCaption": bool,
        "sendSticker": Message,
        "sendPhoto": Message,
        "sendDocument": Message,
        "getChat": Chat,
        "getChatAdministrators": List[ChatMember],
        "getChatMembersCount": Int32,
        "getChatMember": ChatMember,
        "answerInlineQuery": bool,
    }
)


def result_type(method: str) -> Any:
    """Return the result type of ``method``; ``RegistryError`` when it is not listed."""
    try:
        return METHOD_RESULTS[method]
    except KeyError:
        raise RegistryError(
            f"Unknown method {method!r}. Known methods: {sorted(METHOD_RESULTS)}"
        ) from None
