from __future__ import annotations

from typing import Any, Optional, Tuple

from telegram_types.api.inline_mode import ChosenInlineResult, InlineQuery
from telegram_types.api.types import CallbackQuery, ChatJoinRequest, ChatMemberUpdated, Message
from telegram_types.schema.entity import Entity, Int64, TolerantEnum


class UpdateKind(TolerantEnum):
    MESSAGE = "message"
    EDITED_MESSAGE = "edited_message"
    CHANNEL_POST = "channel_post"
    EDITED_CHANNEL_POST = "edited_channel_post"
    INLINE_QUERY = "inline_query"
    CHOSEN_INLINE_RESULT = "chosen_inline_result"
    CALLBACK_QUERY = "callback_query"
    MY_CHAT_MEMBER = "my_chat_member"
    CHAT_MEMBER = "chat_member"
    CHAT_JOIN_REQUEST = "chat_join_request"


class Update(Entity):
    """An incoming update.

    ``update_id`` values increase sequentially, which makes them handy to
    ignore repeated updates or restore order. At most one of the optional
    fields is present in any given update.
    """

    update_id: Int64
    message: Optional[Message] = None
    edited_message: Optional[Message] = None
    channel_post: Optional[Message] = None
    edited_channel_post: Optional[Message] = None
    inline_query: Optional[InlineQuery] = None
    chosen_inline_result: Optional[ChosenInlineResult] = None
    callback_query: Optional[CallbackQuery] = None
    my_chat_member: Optional[ChatMemberUpdated] = None
    chat_member: Optional[ChatMemberUpdated] = None
    chat_join_request: Optional[ChatJoinRequest] = None

    @property
    def content(self) -> Optional[Tuple[UpdateKind, Any]]:
        """
        The populated payload as ``(kind, value)``.

        Update types not modelled here come back with ``kind.is_known`` false
        and the preserved raw document as value. ``None`` when the update
        carries no payload at all; explicit ``null`` payloads are skipped.
        """
        for kind in UpdateKind:
            payload = getattr(self, kind.value)
            if payload is not None:
                return kind, payload
        for key, raw in (self.model_extra or {}).items():
            if raw is not None:
                return UpdateKind(key), raw
        return None
