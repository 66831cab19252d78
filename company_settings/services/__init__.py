# Company Settings Services
from company_settings.services.company_settings import CompanySettingsService
from company_settings.services.request_executor import RequestExecutor, RequestOptions
from company_settings.services.response_parser import parse_settings_response
from company_settings.services.text_window import paginate_value, search_value
from company_settings.services.token_verifier import TokenStatus, TokenVerifier
from company_settings.services.value_codec import decode_setting, is_base64

__all__ = [
    "CompanySettingsService",
    "RequestExecutor",
    "RequestOptions",
    "TokenStatus",
    "TokenVerifier",
    "decode_setting",
    "is_base64",
    "paginate_value",
    "parse_settings_response",
    "search_value",
]
