from __future__ import annotations

import math
import re

WORDS_PER_MINUTE = 200
EXCERPT_LENGTH = 150

_STRIP_RULES = (
    (re.compile(r"```[\s\S]*?```"), ""),
    (re.compile(r"^#{1,3} (.*?)$", re.MULTILINE), r"\1"),
    (re.compile(r"\*\*(.*?)\*\*"), r"\1"),
    (re.compile(r"\*(.*?)\*"), r"\1"),
    (re.compile(r"!\[(.*?)\]\((.*?)\)"), ""),
    (re.compile(r"\[(.*?)\]\((.*?)\)"), r"\1"),
    (re.compile(r"`(.*?)`"), r"\1"),
)


def slugify(title: str) -> str:
    """Lowercase, drop non-word chars except spaces and hyphens, spaces to '-', collapse '-'."""
    slug = title.lower()
    slug = re.sub(r"[^\w\s-]", "", slug, flags=re.ASCII)
    slug = re.sub(r"\s+", "-", slug)
    return re.sub(r"-+", "-", slug)


def reading_time(content: str) -> int:
    words = content.split()
    return math.ceil(max(len(words), 1) / WORDS_PER_MINUTE)


def strip_markdown(text: str) -> str:
    for pattern, repl in _STRIP_RULES:
        text = pattern.sub(repl, text)
    return text.strip()


def excerpt(content: str, length: int = EXCERPT_LENGTH) -> str:
    plain = strip_markdown(content)
    return plain[:length] + ("..." if len(plain) > length else "")
