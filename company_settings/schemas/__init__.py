# Company Settings Schemas
from company_settings.schemas.request_result import RequestResult
from company_settings.schemas.setting import Setting, SettingType
from company_settings.schemas.tools import GetSettingArgs, ListSettingsArgs, SearchInSettingArgs

__all__ = [
    "GetSettingArgs",
    "ListSettingsArgs",
    "RequestResult",
    "SearchInSettingArgs",
    "Setting",
    "SettingType",
]
