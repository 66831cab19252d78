"""Response Normalizer - JSON or XML settings payloads to Setting lists.

The upstream API answers either with JSON::

    {"settingDtoList": [{"settingUuid": ..., "key": ..., ...}, ...]}

or with XML::

    <settings><setting>...</setting><setting>...</setting></settings>

Both are detected once, at the parse boundary, and collapsed into the same
list of Setting objects. Nothing downstream knows which format was used.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

import xmltodict

from company_settings.core.errors import ParseError
from company_settings.schemas.setting import Setting

# Byte order marks that some upstream proxies leave in front of the document
BYTE_ORDER_MARKS = ("\ufeff", "\ufffe", "\uffff")

# Field coalescing: the first name holding a non-empty value wins.
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "uuid": ("settingUuid", "setting_uuid"),
}

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class PayloadFormat(str, Enum):
    """Where a raw payload came from."""

    JSON = "json"
    XML = "xml"
    STRUCTURED = "structured"  # Already parsed by the caller


@dataclass(frozen=True)
class RawPayload:
    """A decoded but not yet normalized response document."""

    format: PayloadFormat
    document: Any


def detect_payload(raw: str | bytes | dict | list) -> RawPayload:
    """Detect the payload format and decode it.

    Raises:
        ValueError: If a text payload is neither JSON nor XML.
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    if not isinstance(raw, str):
        return RawPayload(PayloadFormat.STRUCTURED, raw)

    text = raw.strip()
    if text.startswith(BYTE_ORDER_MARKS):
        text = text[1:].lstrip()

    if text.startswith(("{", "[")):
        return RawPayload(PayloadFormat.JSON, json.loads(text))
    if text.startswith("<"):
        # Element text is kept as sent; JSON values are never trimmed either
        return RawPayload(PayloadFormat.XML, xmltodict.parse(text, strip_whitespace=False))
    raise ValueError("Unknown response format")


def extract_records(payload: RawPayload) -> list[dict[str, Any]]:
    """Pull the raw setting records out of either document shape.

    Returns an empty list when neither shape is present.
    """
    document = payload.document
    if not isinstance(document, dict):
        return []

    dto_list = document.get("settingDtoList")
    if dto_list:
        return list(dto_list)

    container = document.get("settings")
    if isinstance(container, dict) and container.get("setting"):
        records = container["setting"]
        return records if isinstance(records, list) else [records]

    return []


def coalesce(record: dict[str, Any], field: str) -> Any:
    """Value of ``field`` under the first alias that holds a non-empty value."""
    for name in FIELD_ALIASES.get(field, (field,)):
        value = record.get(name)
        if value not in (None, ""):
            return value
    return None


def parse_int(value: Any) -> int:
    """Parse the leading decimal integer of ``str(value)``."""
    match = _LEADING_INT.match(str(value))
    if match is None:
        raise ValueError(f"invalid integer value: {value!r}")
    return int(match.group(1), 10)


def to_setting(record: dict[str, Any]) -> Setting:
    """Map one raw record onto a Setting."""
    if not isinstance(record, dict):
        raise ValueError(f"setting entry is not an object: {record!r}")
    return Setting(
        uuid=coalesce(record, "uuid"),
        type=record.get("type"),
        key=record.get("key"),
        value=record.get("value") or "",
        encoded=record.get("encoded") or False,
        encrypted=record.get("encrypted") or False,
        owner=parse_int(record.get("owner")),
        revision=parse_int(record.get("revision")),
        # Deliberately narrow: only the exact string "true" means deleted
        deleted=str(record.get("deleted")) == "true",
        created=record.get("created"),
        modified=record.get("modified"),
    )


def parse_settings_response(raw: str | bytes | dict | list) -> list[Setting]:
    """Parse a settings API response into Settings.

    Raises:
        ParseError: For any detection, decoding or mapping failure.
    """
    try:
        payload = detect_payload(raw)
        return [to_setting(record) for record in extract_records(payload)]
    except Exception as e:
        raise ParseError(f"Failed to parse API response: {e}") from e
