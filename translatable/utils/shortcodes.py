"""
Shortcode parser

Expands shortcodes embedded in rich-text values:

    [name attr="value"]            → handler(attrs, None)
    [name attr="value"]body[/name] → handler(attrs, body)

Unregistered shortcodes are left untouched.
"""

import logging
import re
from collections.abc import Callable

logger = logging.getLogger(__name__)

ShortcodeHandler = Callable[[dict[str, str], str | None], str]

_SHORTCODE_PATTERN = re.compile(r"\[(\w+)((?:\s+[\w-]+=(?:\"[^\"]*\"|'[^']*'|[^\s\]]+))*)\s*\](?:(.*?)\[/\1\])?", re.S)
_ATTRIBUTE_PATTERN = re.compile(r"([\w-]+)=(?:\"([^\"]*)\"|'([^']*)'|([^\s\]]+))")


def parse_attributes(raw: str) -> dict[str, str]:
    attributes = {}
    for match in _ATTRIBUTE_PATTERN.finditer(raw or ""):
        name = match.group(1)
        attributes[name] = next(v for v in match.groups()[1:] if v is not None)
    return attributes


class ShortcodeParser:
    def __init__(self) -> None:
        self._handlers: dict[str, ShortcodeHandler] = {}

    def register(self, name: str, handler: ShortcodeHandler) -> None:
        self._handlers[name] = handler

    def unregister(self, name: str) -> None:
        self._handlers.pop(name, None)

    def is_registered(self, name: str) -> bool:
        return name in self._handlers

    def parse(self, text: str | None) -> str:
        if not text:
            return text or ""

        def _expand(match: re.Match) -> str:
            name, raw_attributes, content = match.groups()
            handler = self._handlers.get(name)
            if handler is None:
                return match.group(0)
            return handler(parse_attributes(raw_attributes), content)

        return _SHORTCODE_PATTERN.sub(_expand, text)


# ── Global singleton ──────────────────────────────────────────────────────────
_active_parser = ShortcodeParser()


def get_active_parser() -> ShortcodeParser:
    return _active_parser
