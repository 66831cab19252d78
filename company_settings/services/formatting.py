"""Presentation helpers turning Settings into tool payloads."""

from typing import Any

from company_settings.schemas.setting import Setting
from company_settings.services.text_window import PaginationResult, SearchResult


def format_settings_markdown(settings: list[Setting]) -> str:
    """Markdown listing of settings grouped by type, in first-seen order."""
    if not settings:
        return "# Company Settings\n\nNo settings found."

    lines = ["# Company Settings", "", f"Found {len(settings)} setting(s)", ""]

    grouped: dict[str, list[Setting]] = {}
    for setting in settings:
        grouped.setdefault(setting.type.value, []).append(setting)

    for setting_type, group in grouped.items():
        lines.append(f"## {setting_type} Settings")
        lines.append("")
        for setting in group:
            if setting.deleted:
                status = " 🗑️ (deleted)"
            elif setting.encrypted:
                status = " 🔒 (encrypted)"
            else:
                status = ""
            lines.append(f"- **{setting.key}**{status}")
        lines.append("")

    return "\n".join(lines) + "\n"


def setting_base_info(setting: Setting) -> dict[str, Any]:
    """Fields shared by every rendering of a setting."""
    return {
        "uuid": setting.uuid,
        "key": setting.key,
        "type": setting.type.value,
        "owner": setting.owner,
        "revision": setting.revision,
        "deleted": setting.deleted,
        "encoded": setting.encoded,
        "encrypted": setting.encrypted,
        "created": setting.created,
        "modified": setting.modified,
    }


def format_single_setting(setting: Setting) -> dict[str, Any]:
    return {**setting_base_info(setting), "value": setting.value}


def format_paginated_setting(
    setting: Setting,
    page: PaginationResult,
    limit: int | None = None,
    offset: int | None = None,
) -> dict[str, Any]:
    return {
        **setting_base_info(setting),
        "value": "\n".join(page.lines),
        "pagination": {
            "totalLines": page.total_lines,
            "displayedLines": len(page.lines),
            "offset": offset or 0,
            "limit": limit,
            "hasMore": page.has_more,
        },
    }


def format_search_results(
    setting: Setting,
    results: SearchResult,
    search_term: str,
) -> dict[str, Any]:
    return {
        **setting_base_info(setting),
        "searchTerm": search_term,
        "totalMatches": results.total_matches,
        "matches": [
            {"lineNumber": m.line_number, "line": m.line, "context": m.context}
            for m in results.matches
        ],
    }
