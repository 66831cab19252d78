"""Company Settings Service - the operations behind the MCP tools.

Each operation resolves the environment, fetches settings through the
request executor, normalizes and decodes them, and returns a JSON-ready
payload that always carries a ``success`` flag. Failures never escape as
exceptions apart from ConfigurationError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from company_settings.core.environments import Environment, EnvironmentResolver
from company_settings.core.errors import ParseError, RequestFailedError
from company_settings.schemas.setting import Setting, SettingType
from company_settings.schemas.tools import GetSettingArgs, ListSettingsArgs, SearchInSettingArgs
from company_settings.services.formatting import (
    format_paginated_setting,
    format_search_results,
    format_settings_markdown,
    format_single_setting,
    setting_base_info,
)
from company_settings.services.request_executor import RequestExecutor
from company_settings.services.response_parser import parse_settings_response
from company_settings.services.text_window import paginate_value, search_value
from company_settings.services.token_verifier import TokenVerifier
from company_settings.services.value_codec import decode_setting

logger = logging.getLogger(__name__)


def build_query_params(
    key_name: str | None = None,
    setting_type: SettingType | None = None,
    owner: int | None = None,
    child_object: int | None = None,
) -> dict[str, Any]:
    """Upstream query parameters, including only the filters given."""
    params: dict[str, Any] = {}
    if key_name:
        params["key-name"] = key_name
    if setting_type is not None:
        params["type"] = setting_type.value
    if owner is not None:
        params["owner"] = owner
    if child_object is not None:
        params["child-object"] = child_object
    return params


def _failure(error: str, status_code: int | None = None) -> dict[str, Any]:
    payload: dict[str, Any] = {"success": False, "error": error}
    if status_code is not None:
        payload["status_code"] = status_code
    return payload


@dataclass
class _FetchedSettings:
    """Decoded settings together with the upstream status code."""

    settings: list[Setting]
    status_code: int | None


class CompanySettingsService:
    """Service for reading company settings from the upstream API."""

    def __init__(
        self,
        resolver: EnvironmentResolver,
        executor: RequestExecutor,
        verifier: TokenVerifier,
    ):
        self._resolver = resolver
        self._executor = executor
        self._verifier = verifier

    def build_url(self, environment: Environment | str, company_id: int) -> str:
        """URL of the company settings endpoint in ``environment``."""
        target = self._resolver.resolve(environment)
        return f"{target.base_url}/setting/company/{company_id}"

    async def _fetch(
        self,
        company_id: int,
        environment: Environment | None,
        params: dict[str, Any],
    ) -> _FetchedSettings:
        """Fetch, parse and decode settings.

        Raises:
            RequestFailedError: If every attempt failed.
            ParseError: If the response body could not be normalized.
        """
        env = environment or self._resolver.default_environment
        url = self.build_url(env, company_id)

        result = await self._executor.execute(url, params, env)
        if not result.success:
            raise result.to_exception()

        try:
            settings = parse_settings_response(result.body or "")
        except ParseError as e:
            e.status_code = result.status_code
            raise
        return _FetchedSettings([decode_setting(s) for s in settings], result.status_code)

    async def _fetch_one(
        self,
        args: GetSettingArgs | SearchInSettingArgs,
    ) -> tuple[Setting | None, int | None]:
        params = build_query_params(args.key_name, args.type, args.owner, args.child_object)
        fetched = await self._fetch(args.company_id, args.environment, params)
        setting = next((s for s in fetched.settings if s.key == args.key_name), None)
        return setting, fetched.status_code

    async def list_settings(self, args: ListSettingsArgs) -> dict[str, Any]:
        """List settings of a company, optionally filtered."""
        params = build_query_params(args.key_name, args.type, args.owner, args.child_object)
        try:
            fetched = await self._fetch(args.company_id, args.environment, params)
        except RequestFailedError as e:
            return e.result.to_dict()
        except ParseError as e:
            return _failure(f"Failed to process settings: {e}", e.status_code)

        return {
            "success": True,
            "markdown": format_settings_markdown(fetched.settings),
            "settings_count": len(fetched.settings),
            "settings": [setting_base_info(s) for s in fetched.settings],
            "status_code": fetched.status_code,
        }

    async def get_setting(self, args: GetSettingArgs) -> dict[str, Any]:
        """Get one setting by exact key, optionally paginated by lines."""
        try:
            setting, status_code = await self._fetch_one(args)
        except RequestFailedError as e:
            return e.result.to_dict()
        except ParseError as e:
            return _failure(f"Failed to process setting: {e}", e.status_code)

        if setting is None:
            return _failure(f"Setting with key '{args.key_name}' not found", status_code)

        if args.limit is not None or args.offset is not None:
            page = paginate_value(setting.value, args.limit, args.offset)
            rendered = format_paginated_setting(setting, page, args.limit, args.offset)
        else:
            rendered = format_single_setting(setting)

        return {"success": True, "setting": rendered, "status_code": status_code}

    async def search_in_setting(self, args: SearchInSettingArgs) -> dict[str, Any]:
        """Search a setting's value for literal text."""
        try:
            setting, status_code = await self._fetch_one(args)
        except RequestFailedError as e:
            return e.result.to_dict()
        except ParseError as e:
            return _failure(f"Failed to search setting: {e}", e.status_code)

        if setting is None:
            return _failure(f"Setting with key '{args.key_name}' not found", status_code)
        if setting.encrypted:
            return _failure(f"Cannot search in encrypted setting '{args.key_name}'", status_code)

        results = search_value(setting.value, args.search_term, args.context_lines)
        if results.total_matches == 0:
            return {
                "success": True,
                "message": f"No matches found for '{args.search_term}' in setting '{args.key_name}'",
                "searchTerm": args.search_term,
                "setting_key": args.key_name,
                "status_code": status_code,
            }

        return {
            "success": True,
            "search_results": format_search_results(setting, results, args.search_term),
            "status_code": status_code,
        }

    async def verify_tokens(self) -> dict[str, Any]:
        """Verify the credential of every environment."""
        logger.info("Starting environment token verification")
        results = await self._verifier.verify_all()
        all_valid = all(status.valid for status in results.values())
        summary = {
            "success": True,
            "message": "Token verification completed",
            "environments": {env: status.to_dict() for env, status in results.items()},
            "overall_status": "All tokens valid" if all_valid else "Some tokens have issues",
        }
        logger.info(f"Token verification finished: {summary['overall_status']}")
        return summary
