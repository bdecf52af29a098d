from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

UnknownFieldPolicy = Literal["preserve", "ignore", "forbid"]
UnknownEnumPolicy = Literal["preserve", "forbid"]


class DecoderConfig(BaseModel):
    """Decoding policies.

    The defaults favour resilience to upstream schema drift: unknown fields
    are kept on the decoded value, unseen enum strings become ``UNKNOWN``
    pseudo-members. ``strict()`` rejects both.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    unknown_fields: UnknownFieldPolicy = "preserve"
    unknown_enum_values: UnknownEnumPolicy = "preserve"
    # Objects and arrays count one level each; bounded so decoding stays
    # well inside the interpreter's recursion limit.
    max_depth: int = Field(default=100, ge=1, le=150)

    @classmethod
    def strict(cls) -> "DecoderConfig":
        return cls(unknown_fields="forbid", unknown_enum_values="forbid")

    @property
    def is_strict(self) -> bool:
        return self.unknown_fields == "forbid" and self.unknown_enum_values == "forbid"
