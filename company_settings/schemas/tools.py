"""Pydantic schemas for MCP tool arguments.

Argument names arrive in camelCase (``companyId``, ``keyName``) as declared in
the tool input schemas; the models expose snake_case attributes.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from company_settings.core.environments import Environment
from company_settings.schemas.setting import SettingType


class _ToolArgs(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class ListSettingsArgs(_ToolArgs):
    """Arguments for list_company_settings."""

    company_id: int
    environment: Environment | None = None
    key_name: str | None = None
    type: SettingType | None = None
    owner: int | None = None
    child_object: int | None = None


class GetSettingArgs(_ToolArgs):
    """Arguments for get_company_setting."""

    company_id: int
    key_name: str
    environment: Environment | None = None
    type: SettingType | None = None
    owner: int | None = None
    child_object: int | None = None
    limit: int | None = Field(default=None, ge=1)
    offset: int | None = Field(default=None, ge=0)


class SearchInSettingArgs(_ToolArgs):
    """Arguments for search_in_setting."""

    company_id: int
    key_name: str
    search_term: str
    environment: Environment | None = None
    type: SettingType | None = None
    owner: int | None = None
    child_object: int | None = None
    context_lines: int = Field(default=3, ge=0)
