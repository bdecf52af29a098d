"""
Telegram Bot API object types.

See https://core.telegram.org/bots/api#available-types. Every class here is
an ``Entity``: required fields have no default, optional fields default to
``None`` and are only "present" when the document carried them.
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Tuple, Union

from pydantic import Field

from telegram_types.schema.entity import Entity, Int32, Int64, TolerantEnum, Variants


class ChatType(TolerantEnum):
    PRIVATE = "private"
    GROUP = "group"
    SUPERGROUP = "supergroup"
    CHANNEL = "channel"


class MessageEntityType(TolerantEnum):
    MENTION = "mention"
    HASHTAG = "hashtag"
    CASHTAG = "cashtag"
    BOT_COMMAND = "bot_command"
    URL = "url"
    EMAIL = "email"
    PHONE_NUMBER = "phone_number"
    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINE = "underline"
    STRIKETHROUGH = "strikethrough"
    SPOILER = "spoiler"
    CODE = "code"
    PRE = "pre"
    TEXT_LINK = "text_link"
    TEXT_MENTION = "text_mention"


class ParseMode(TolerantEnum):
    MARKDOWN = "Markdown"
    MARKDOWN_V2 = "MarkdownV2"
    HTML = "HTML"


# -----------------
# Users and chats
# -----------------


class User(Entity):
    """A Telegram user or bot."""

    id: Int64
    is_bot: bool
    first_name: str
    last_name: Optional[str] = None
    username: Optional[str] = None
    # IETF language tag of the user's language
    language_code: Optional[str] = None
    is_premium: Optional[bool] = None
    # Only returned in getMe
    can_join_groups: Optional[bool] = None
    can_read_all_group_messages: Optional[bool] = None
    supports_inline_queries: Optional[bool] = None

    @property
    def full_name(self) -> str:
        if self.last_name:
            return f"{self.first_name} {self.last_name}"
        return self.first_name


class ChatPhoto(Entity):
    small_file_id: str
    small_file_unique_id: Optional[str] = None
    big_file_id: str
    big_file_unique_id: Optional[str] = None


class Chat(Entity):
    """
    A chat. Fields marked "getChat" below are only returned by that method.
    """

    id: Int64
    kind: ChatType = Field(alias="type")
    title: Optional[str] = None
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    is_forum: Optional[bool] = None
    all_members_are_administrators: Optional[bool] = None

    # getChat
    photo: Optional[ChatPhoto] = None
    description: Optional[str] = None
    invite_link: Optional[str] = None
    pinned_message: Optional[Message] = None
    sticker_set_name: Optional[str] = None
    can_set_sticker_set: Optional[bool] = None


# -----------------
# Media
# -----------------


class PhotoSize(Entity):
    """One size of a photo or a file / sticker thumbnail."""

    file_id: str
    file_unique_id: Optional[str] = None
    width: Int32
    height: Int32
    file_size: Optional[Int64] = None


class Animation(Entity):
    file_id: str
    file_unique_id: Optional[str] = None
    width: Int32
    height: Int32
    duration: Int32
    thumb: Optional[PhotoSize] = None
    file_name: Optional[str] = None
    mime_type: Optional[str] = None
    file_size: Optional[Int64] = None


class Audio(Entity):
    file_id: str
    file_unique_id: Optional[str] = None
    duration: Int32
    performer: Optional[str] = None
    title: Optional[str] = None
    file_name: Optional[str] = None
    mime_type: Optional[str] = None
    file_size: Optional[Int64] = None
    thumb: Optional[PhotoSize] = None


class Document(Entity):
    """A general file (as opposed to photos, voice messages and audio files)."""

    file_id: str
    file_unique_id: Optional[str] = None
    thumb: Optional[PhotoSize] = None
    file_name: Optional[str] = None
    mime_type: Optional[str] = None
    file_size: Optional[Int64] = None


class Video(Entity):
    file_id: str
    file_unique_id: Optional[str] = None
    width: Int32
    height: Int32
    duration: Int32
    thumb: Optional[PhotoSize] = None
    file_name: Optional[str] = None
    mime_type: Optional[str] = None
    file_size: Optional[Int64] = None


class Voice(Entity):
    file_id: str
    file_unique_id: Optional[str] = None
    duration: Int32
    mime_type: Optional[str] = None
    file_size: Optional[Int64] = None


class VideoNote(Entity):
    file_id: str
    file_unique_id: Optional[str] = None
    # Video width and height (diameter of the video message)
    length: Int32
    duration: Int32
    thumb: Optional[PhotoSize] = None
    file_size: Optional[Int64] = None


class Contact(Entity):
    phone_number: str
    first_name: str
    last_name: Optional[str] = None
    user_id: Optional[Int64] = None
    vcard: Optional[str] = None


class Location(Entity):
    longitude: float
    latitude: float
    horizontal_accuracy: Optional[float] = None
    live_period: Optional[Int32] = None


class Venue(Entity):
    location: Location
    title: str
    address: str
    foursquare_id: Optional[str] = None
    foursquare_type: Optional[str] = None


class File(Entity):
    """A file ready to be downloaded via ``https://api.telegram.org/file/bot<token>/<file_path>``."""

    file_id: str
    file_unique_id: Optional[str] = None
    file_size: Optional[Int64] = None
    file_path: Optional[str] = None


class MaskPosition(Entity):
    # One of "forehead", "eyes", "mouth" or "chin"
    point: str
    x_shift: float
    y_shift: float
    scale: float


class Sticker(Entity):
    file_id: str
    file_unique_id: Optional[str] = None
    width: Int32
    height: Int32
    is_animated: Optional[bool] = None
    is_video: Optional[bool] = None
    thumb: Optional[PhotoSize] = None
    emoji: Optional[str] = None
    set_name: Optional[str] = None
    mask_position: Optional[MaskPosition] = None
    file_size: Optional[Int64] = None


class StickerSet(Entity):
    name: str
    title: str
    contains_masks: Optional[bool] = None
    stickers: Tuple[Sticker, ...]
    thumb: Optional[PhotoSize] = None


class UserProfilePhotos(Entity):
    total_count: Int32
    # Requested profile pictures, in up to 4 sizes each
    photos: Tuple[Tuple[PhotoSize, ...], ...]


# -----------------
# Keyboards
# -----------------


class KeyboardButton(Entity):
    text: str
    request_contact: Optional[bool] = None
    request_location: Optional[bool] = None


class ReplyKeyboardMarkup(Entity):
    keyboard: Tuple[Tuple[KeyboardButton, ...], ...]
    resize_keyboard: Optional[bool] = None
    one_time_keyboard: Optional[bool] = None
    input_field_placeholder: Optional[str] = None
    selective: Optional[bool] = None


class ReplyKeyboardRemove(Entity):
    remove_keyboard: bool
    selective: Optional[bool] = None


class ForceReply(Entity):
    force_reply: bool
    input_field_placeholder: Optional[str] = None
    selective: Optional[bool] = None


class LoginUrl(Entity):
    url: str
    forward_text: Optional[str] = None
    bot_username: Optional[str] = None
    request_write_access: Optional[bool] = None


class CallbackGame(Entity):
    """Placeholder; the Bot API currently defines no fields for it."""


# An inline keyboard button carries its text plus exactly one action field.


class InlineKeyboardUrlButton(Entity):
    text: str
    url: str


class InlineKeyboardCallbackButton(Entity):
    text: str
    callback_data: str


class InlineKeyboardSwitchInlineQueryButton(Entity):
    text: str
    switch_inline_query: str


class InlineKeyboardSwitchInlineQueryCurrentChatButton(Entity):
    text: str
    switch_inline_query_current_chat: str


class InlineKeyboardCallbackGameButton(Entity):
    text: str
    callback_game: CallbackGame


class InlineKeyboardPayButton(Entity):
    text: str
    pay: bool


class InlineKeyboardLoginButton(Entity):
    text: str
    login_url: LoginUrl


InlineKeyboardButton = Annotated[
    Union[
        InlineKeyboardUrlButton,
        InlineKeyboardCallbackButton,
        InlineKeyboardSwitchInlineQueryButton,
        InlineKeyboardSwitchInlineQueryCurrentChatButton,
        InlineKeyboardCallbackGameButton,
        InlineKeyboardPayButton,
        InlineKeyboardLoginButton,
    ],
    Variants("InlineKeyboardButton"),
]


class InlineKeyboardMarkup(Entity):
    inline_keyboard: Tuple[Tuple[InlineKeyboardButton, ...], ...]


# Any of the four keyboards a bot may attach when sending a message.
ReplyMarkup = Annotated[
    Union[InlineKeyboardMarkup, ReplyKeyboardMarkup, ReplyKeyboardRemove, ForceReply],
    Variants("ReplyMarkup"),
]


# -----------------
# Input media
# -----------------


class InputMediaPhoto(Entity):
    kind: Literal["photo"] = Field(alias="type")
    # file_id, HTTP URL or attach://<name>
    media: str
    caption: Optional[str] = None
    parse_mode: Optional[ParseMode] = None


class InputMediaVideo(Entity):
    kind: Literal["video"] = Field(alias="type")
    media: str
    caption: Optional[str] = None
    parse_mode: Optional[ParseMode] = None
    width: Optional[Int32] = None
    height: Optional[Int32] = None
    duration: Optional[Int32] = None
    supports_streaming: Optional[bool] = None


InputMedia = Annotated[Union[InputMediaPhoto, InputMediaVideo], Variants("InputMedia")]


# -----------------
# Messages
# -----------------


class MessageEntity(Entity):
    """One special entity in a text message: hashtags, usernames, URLs, etc."""

    kind: MessageEntityType = Field(alias="type")
    # Offset and length are in UTF-16 code units
    offset: Int32
    length: Int32
    # For "text_link" only
    url: Optional[str] = None
    # For "text_mention" only
    user: Optional[User] = None
    # For "pre" only
    language: Optional[str] = None


# Checked in this order by Message.content_type
_CONTENT_FIELDS = (
    "text",
    "animation",
    "audio",
    "document",
    "photo",
    "sticker",
    "video",
    "video_note",
    "voice",
    "contact",
    "venue",
    "location",
    "new_chat_members",
    "left_chat_member",
    "new_chat_title",
    "new_chat_photo",
    "delete_chat_photo",
    "group_chat_created",
    "supergroup_chat_created",
    "channel_chat_created",
    "migrate_to_chat_id",
    "migrate_from_chat_id",
    "pinned_message",
    "connected_website",
)


class Message(Entity):
    message_id: Int64
    # Empty for messages sent to channels
    from_user: Optional[User] = Field(default=None, alias="from")
    sender_chat: Optional[Chat] = None
    # Unix time
    date: Int64
    chat: Chat

    forward_from: Optional[User] = None
    forward_from_chat: Optional[Chat] = None
    forward_from_message_id: Optional[Int64] = None
    forward_signature: Optional[str] = None
    forward_sender_name: Optional[str] = None
    forward_date: Optional[Int64] = None

    # The nested message never carries a further reply_to_message
    reply_to_message: Optional[Message] = None
    edit_date: Optional[Int64] = None
    media_group_id: Optional[str] = None
    author_signature: Optional[str] = None

    text: Optional[str] = None
    entities: Optional[Tuple[MessageEntity, ...]] = None
    animation: Optional[Animation] = None
    audio: Optional[Audio] = None
    document: Optional[Document] = None
    photo: Optional[Tuple[PhotoSize, ...]] = None
    sticker: Optional[Sticker] = None
    video: Optional[Video] = None
    video_note: Optional[VideoNote] = None
    voice: Optional[Voice] = None
    caption: Optional[str] = None
    caption_entities: Optional[Tuple[MessageEntity, ...]] = None
    contact: Optional[Contact] = None
    venue: Optional[Venue] = None
    location: Optional[Location] = None

    # Service messages
    new_chat_members: Optional[Tuple[User, ...]] = None
    left_chat_member: Optional[User] = None
    new_chat_title: Optional[str] = None
    new_chat_photo: Optional[Tuple[PhotoSize, ...]] = None
    delete_chat_photo: Optional[bool] = None
    group_chat_created: Optional[bool] = None
    supergroup_chat_created: Optional[bool] = None
    channel_chat_created: Optional[bool] = None
    migrate_to_chat_id: Optional[Int64] = None
    migrate_from_chat_id: Optional[Int64] = None
    pinned_message: Optional[Message] = None
    connected_website: Optional[str] = None

    # login_url buttons come back as ordinary url buttons
    reply_markup: Optional[InlineKeyboardMarkup] = None

    @property
    def content_type(self) -> Optional[str]:
        """Name of the first content field present, e.g. ``"text"`` or ``"photo"``."""
        for name in _CONTENT_FIELDS:
            if name in self.model_fields_set:
                return name
        return None


class MessageIdResult(Entity):
    message_id: Int64


class CallbackQuery(Entity):
    id: str
    from_user: User = Field(alias="from")
    # Absent if the message is too old
    message: Optional[Message] = None
    inline_message_id: Optional[str] = None
    chat_instance: str
    data: Optional[str] = None
    game_short_name: Optional[str] = None


class ResponseParameters(Entity):
    """Why a request failed and how it may be retried."""

    migrate_to_chat_id: Optional[Int64] = None
    retry_after: Optional[Int32] = None


class WebhookInfo(Entity):
    # May be empty if the webhook is not set up
    url: str
    has_custom_certificate: bool
    pending_update_count: Int32
    ip_address: Optional[str] = None
    last_error_date: Optional[Int64] = None
    last_error_message: Optional[str] = None
    max_connections: Optional[Int32] = None
    allowed_updates: Optional[Tuple[str, ...]] = None


# -----------------
# Chat members
# -----------------


class ChatMemberOwner(Entity):
    user: User
    status: Literal["creator"]
    is_anonymous: bool
    custom_title: Optional[str] = None


class ChatMemberAdministrator(Entity):
    user: User
    status: Literal["administrator"]
    can_be_edited: bool
    is_anonymous: bool
    can_manage_chat: bool
    can_delete_messages: bool
    can_manage_video_chats: bool
    can_restrict_members: bool
    can_promote_members: bool
    can_change_info: bool
    can_invite_users: bool
    can_post_messages: Optional[bool] = None
    can_edit_messages: Optional[bool] = None
    can_pin_messages: Optional[bool] = None
    custom_title: Optional[str] = None


class ChatMemberMember(Entity):
    user: User
    status: Literal["member"]


class ChatMemberRestricted(Entity):
    user: User
    status: Literal["restricted"]
    is_member: bool
    can_change_info: bool
    can_invite_users: bool
    can_pin_messages: bool
    can_send_messages: bool
    can_send_polls: bool
    can_send_other_messages: bool
    can_add_web_page_previews: bool
    # 0 means restricted forever
    until_date: Int64


class ChatMemberLeft(Entity):
    user: User
    status: Literal["left"]


class ChatMemberBanned(Entity):
    user: User
    status: Literal["kicked"]
    # 0 means banned forever
    until_date: Int64


ChatMember = Annotated[
    Union[
        ChatMemberOwner,
        ChatMemberAdministrator,
        ChatMemberMember,
        ChatMemberRestricted,
        ChatMemberLeft,
        ChatMemberBanned,
    ],
    Variants("ChatMember"),
]


class ChatInviteLink(Entity):
    invite_link: str
    creator: User
    creates_join_request: bool
    is_primary: bool
    is_revoked: bool
    name: Optional[str] = None
    expire_date: Optional[Int64] = None
    member_limit: Optional[Int32] = None
    pending_join_request_count: Optional[Int32] = None


class ChatMemberUpdated(Entity):
    chat: Chat
    from_user: User = Field(alias="from")
    date: Int64
    old_chat_member: ChatMember
    new_chat_member: ChatMember
    invite_link: Optional[ChatInviteLink] = None


class ChatJoinRequest(Entity):
    chat: Chat
    from_user: User = Field(alias="from")
    date: Int64
    bio: Optional[str] = None
    invite_link: Optional[ChatInviteLink] = None


# Resolve forward references such as Chat.pinned_message -> Message.
for _model in list(globals().values()):
    if isinstance(_model, type) and issubclass(_model, Entity):
        _model.model_rebuild()
