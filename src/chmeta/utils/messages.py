"""
Localizable message catalogue for user-facing errors.

The active locale comes from ``CHMETA_LOCALE`` unless overridden with
:func:`set_locale`. Unknown locales and missing keys fall back to English.
"""

from __future__ import annotations

import os
from typing import Any, Final

DEFAULT_LOCALE: Final[str] = "en"
LOCALE_ENV_VAR: Final[str] = "CHMETA_LOCALE"

CATALOGUES: dict[str, dict[str, str]] = {
    "en": {
        "database_name_required": "A database name must be specified (database_name is blank).",
        "unsupported_access_type": "Unsupported database access type [{access_type}].",
        "index_check_failed": "Unable to determine if indexes exists on table [{table}]",
    },
    "zh": {
        "database_name_required": "必须指定数据库名称",
        "unsupported_access_type": "不支持的数据库连接方式[{access_type}]",
        "index_check_failed": "无法确定表 [{table}] 上的索引是否存在",
    },
}

_locale_override: str | None = None


def set_locale(locale: str | None) -> None:
    """Pin the message locale; ``None`` restores environment lookup."""
    global _locale_override
    _locale_override = locale


def current_locale() -> str:
    locale = _locale_override or os.getenv(LOCALE_ENV_VAR) or DEFAULT_LOCALE
    # Accept "zh_CN.UTF-8" style values.
    language = locale.split(".", 1)[0].split("_", 1)[0].lower()
    if language in CATALOGUES:
        return language
    return DEFAULT_LOCALE


def format_message(key: str, **params: Any) -> str:
    catalogue = CATALOGUES[current_locale()]
    template = catalogue.get(key) or CATALOGUES[DEFAULT_LOCALE][key]
    return template.format(**params)
