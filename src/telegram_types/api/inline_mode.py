"""
Inline mode objects.

See https://core.telegram.org/bots/api#inline-mode. ``InputMessageContent``
has no type tag on the wire: text, location, venue and contact contents are
told apart by their fields alone, a venue being a location with a title and
an address.
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Tuple, Union

from pydantic import Field

from telegram_types.api.types import (
    InlineKeyboardMarkup,
    Location,
    MessageEntity,
    ParseMode,
    User,
)
from telegram_types.schema.entity import Entity, Int32, Variants


class InlineQuery(Entity):
    id: str
    from_user: User = Field(alias="from")
    query: str
    offset: str
    chat_type: Optional[str] = None
    location: Optional[Location] = None


class ChosenInlineResult(Entity):
    result_id: str
    from_user: User = Field(alias="from")
    location: Optional[Location] = None
    # Only set if the message has an inline keyboard attached
    inline_message_id: Optional[str] = None
    query: str


class InputTextMessageContent(Entity):
    message_text: str
    parse_mode: Optional[ParseMode] = None
    entities: Optional[Tuple[MessageEntity, ...]] = None
    disable_web_page_preview: Optional[bool] = None


class InputLocationMessageContent(Entity):
    latitude: float
    longitude: float
    horizontal_accuracy: Optional[float] = None
    live_period: Optional[Int32] = None


class InputVenueMessageContent(Entity):
    latitude: float
    longitude: float
    title: str
    address: str
    foursquare_id: Optional[str] = None
    foursquare_type: Optional[str] = None


class InputContactMessageContent(Entity):
    phone_number: str
    first_name: str
    last_name: Optional[str] = None
    vcard: Optional[str] = None


InputMessageContent = Annotated[
    Union[
        InputTextMessageContent,
        InputLocationMessageContent,
        InputVenueMessageContent,
        InputContactMessageContent,
    ],
    Variants("InputMessageContent"),
]


class InlineQueryResultArticle(Entity):
    kind: Literal["article"] = Field(alias="type")
    id: str
    title: str
    input_message_content: InputMessageContent
    reply_markup: Optional[InlineKeyboardMarkup] = None
    url: Optional[str] = None
    hide_url: Optional[bool] = None
    description: Optional[str] = None
    thumb_url: Optional[str] = None
    thumb_width: Optional[Int32] = None
    thumb_height: Optional[Int32] = None


class InlineQueryResultPhoto(Entity):
    kind: Literal["photo"] = Field(alias="type")
    id: str
    photo_url: str
    thumb_url: str
    photo_width: Optional[Int32] = None
    photo_height: Optional[Int32] = None
    title: Optional[str] = None
    description: Optional[str] = None
    caption: Optional[str] = None
    parse_mode: Optional[ParseMode] = None
    reply_markup: Optional[InlineKeyboardMarkup] = None
    input_message_content: Optional[InputMessageContent] = None


class InlineQueryResultLocation(Entity):
    kind: Literal["location"] = Field(alias="type")
    id: str
    latitude: float
    longitude: float
    title: str
    live_period: Optional[Int32] = None
    reply_markup: Optional[InlineKeyboardMarkup] = None
    input_message_content: Optional[InputMessageContent] = None


InlineQueryResult = Annotated[
    Union[
        InlineQueryResultArticle,
        InlineQueryResultPhoto,
        InlineQueryResultLocation,
    ],
    Variants("InlineQueryResult"),
]
