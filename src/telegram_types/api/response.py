"""
The Bot API response envelope.

Every method answers ``{"ok": true, "result": ...}`` or
``{"ok": false, "error_code": ..., "description": ..., "parameters": ...}``.
See https://core.telegram.org/bots/api#making-requests.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Optional, Union

from telegram_types.api.methods import result_type
from telegram_types.api.types import ResponseParameters
from telegram_types.core.exceptions import ApiError, MalformedInput, TypeMismatch
from telegram_types.decoding.decoder import Decoded, Decoder, json_kind
from telegram_types.schema.entity import Entity, Int32


class ResponseEnvelope(Entity):
    """Everything in a response except ``result``, which is decoded separately."""

    ok: bool
    description: Optional[str] = None
    error_code: Optional[Int32] = None
    parameters: Optional[ResponseParameters] = None


def decode_response(
    document: Any,
    target: Any = None,
    *,
    method: Optional[str] = None,
    decoder: Optional[Decoder] = None,
) -> Decoded:
    """
    Unwrap a Bot API response and decode its ``result`` as ``target``.

    Args:
        document: Parsed response body.
        target: What the called method returns, e.g. ``User`` for getMe or
                ``List[Update]`` for getUpdates.
        method: Name of the called method; its result type is taken from
                ``METHOD_RESULTS``. Give either ``target`` or ``method``.
        decoder: Decoder to use (defaults to the default registry and config).

    Returns:
        Decoded ``result``; error and unknown-field paths start with ``result``.
        Unknown fields of the envelope itself are reported too.

    Raises:
        ApiError: The response is ``ok: false``, or ``ok: true`` without a result.
        DecodeError: The envelope or the result does not fit the schema.
        RegistryError: ``method`` is not a known method.
    """
    if (target is None) == (method is None):
        raise ValueError("Pass exactly one of target or method")
    if method is not None:
        target = result_type(method)

    decoder = decoder or Decoder()
    if not isinstance(document, Mapping):
        raise TypeMismatch("", expected=ResponseEnvelope.__name__, actual=json_kind(document))

    envelope_doc = {key: value for key, value in document.items() if key != "result"}
    decoded_envelope = decoder.decode(envelope_doc, ResponseEnvelope)
    envelope = decoded_envelope.value

    if envelope.ok:
        if "result" not in document:
            raise ApiError(
                0,
                "In the response from telegram `ok: true`, but not found `result` field.",
            )
        result = decoder.decode(document["result"], target, path="result")
        if not decoded_envelope.unknown_fields:
            return result
        return Decoded(
            value=result.value,
            target=result.target,
            unknown_fields=decoded_envelope.unknown_fields + result.unknown_fields,
        )

    if envelope.error_code is None:
        raise ApiError(
            0,
            "In the response from telegram `ok: false`, but not found `error_code` field.",
            envelope.parameters,
        )
    raise ApiError(envelope.error_code, envelope.description or "", envelope.parameters)


def decode_response_json(
    raw: Union[str, bytes, bytearray],
    target: Any = None,
    *,
    method: Optional[str] = None,
    decoder: Optional[Decoder] = None,
) -> Decoded:
    try:
        document = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MalformedInput(str(exc)) from exc
    return decode_response(document, target, method=method, decoder=decoder)
