"""Pydantic schemas for upstream settings."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class SettingType(str, Enum):
    """Scope a setting applies to."""

    APPLICATION = "APPLICATION"
    COMPANY = "COMPANY"
    SCHEDULING_UNIT = "SCHEDULING_UNIT"
    USER = "USER"


class Setting(BaseModel):
    """One configuration key/value record from the settings API.

    NOTE: ``value`` may still be base64 when ``encoded`` is set. Encrypted
    values are never decoded.
    """

    model_config = ConfigDict(frozen=True)

    uuid: str
    type: SettingType
    key: str
    value: str = ""
    encoded: bool = False
    encrypted: bool = False
    owner: int
    revision: int
    deleted: bool = False
    # Opaque timestamps, passed through as sent (strings or epoch numbers)
    created: str | int | float | None = None
    modified: str | int | float | None = None
