"""Value Codec - best-effort base64 decoding of setting values."""

import base64
import binascii
import logging

from company_settings.core.errors import DecodeError
from company_settings.schemas.setting import Setting

logger = logging.getLogger(__name__)


def decode_base64_text(text: str) -> str:
    """Decode base64 ``text`` to a UTF-8 string.

    Raises:
        DecodeError: If the text is not valid base64 or not UTF-8 once decoded.
    """
    try:
        return base64.b64decode(text).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError, ValueError) as e:
        raise DecodeError(f"Value is not base64-encoded UTF-8 text: {e}") from e


def is_base64(text: str) -> bool:
    """Whether ``text`` survives a decode/encode round trip unchanged.

    Diagnostic only; decode_setting does not consult it.
    """
    try:
        return base64.b64encode(base64.b64decode(text)).decode("ascii") == text
    except (binascii.Error, ValueError):
        return False


def decode_setting(setting: Setting) -> Setting:
    """Return the setting with its value decoded, when that is allowed.

    Encrypted settings and settings not flagged as encoded are returned as
    they are. A value that fails to decode is left untouched; this never
    raises.
    """
    if setting.encrypted or not setting.encoded:
        return setting

    try:
        decoded = decode_base64_text(setting.value)
    except DecodeError as e:
        logger.debug(f"Keeping raw value for setting '{setting.key}': {e}")
        return setting

    return setting.model_copy(update={"value": decoded})
