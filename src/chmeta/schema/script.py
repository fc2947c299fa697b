"""
Splitting of multi-statement SQL scripts.
"""

from __future__ import annotations

from typing import List

_QUOTES = "'\"`"


class SqlScriptParser:
    """
    Splits a script on ``;`` while respecting quotes and comments.

    Doubled quote characters always escape inside a literal; backslash
    escaping is only honoured when ``use_backslash_escape`` is set.
    """

    def __init__(self, use_backslash_escape: bool = False) -> None:
        self.use_backslash_escape = use_backslash_escape

    def split(self, script: str) -> List[str]:
        statements: List[str] = []
        current: List[str] = []
        has_content = False
        quote: str | None = None
        idx = 0
        length = len(script)

        while idx < length:
            ch = script[idx]
            if quote is not None:
                current.append(ch)
                if self.use_backslash_escape and ch == "\\" and idx + 1 < length:
                    current.append(script[idx + 1])
                    idx += 2
                    continue
                if ch == quote:
                    if idx + 1 < length and script[idx + 1] == quote:
                        current.append(quote)
                        idx += 2
                        continue
                    quote = None
                idx += 1
                continue

            if ch in _QUOTES:
                quote = ch
                has_content = True
                current.append(ch)
                idx += 1
                continue
            if script.startswith("--", idx):
                end = script.find("\n", idx)
                end = length if end == -1 else end
                current.append(script[idx:end])
                idx = end
                continue
            if script.startswith("/*", idx):
                end = script.find("*/", idx + 2)
                end = length if end == -1 else end + 2
                current.append(script[idx:end])
                idx = end
                continue
            if ch == ";":
                if has_content:
                    statements.append("".join(current).strip())
                current = []
                has_content = False
                idx += 1
                continue

            if not ch.isspace():
                has_content = True
            current.append(ch)
            idx += 1

        if has_content:
            statements.append("".join(current).strip())
        return statements
