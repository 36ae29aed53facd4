from __future__ import annotations

from datetime import datetime
from typing import Iterable, Mapping
from xml.sax.saxutils import escape

WORD_PRIORITY = "0.7"
USER_PRIORITY = "0.5"


def _url(loc: str, lastmod: datetime | None, changefreq: str, priority: str) -> str:
    parts = [f"<loc>{escape(loc)}</loc>"]
    if lastmod is not None:
        parts.append(f"<lastmod>{lastmod.strftime('%Y-%m-%dT%H:%M:%SZ')}</lastmod>")
    parts.append(f"<changefreq>{changefreq}</changefreq>")
    parts.append(f"<priority>{priority}</priority>")
    return "<url>" + "".join(parts) + "</url>"


def render_sitemap(
    base_url: str, words: Iterable[Mapping], users: Iterable[Mapping]
) -> str:
    base = base_url.rstrip("/")
    entries = [
        _url(f"{base}/words/{w['_id']}", w.get("updatedAt"), "weekly", WORD_PRIORITY) for w in words
    ]
    entries += [
        _url(f"{base}/users/{u['_id']}", u.get("updatedAt"), "monthly", USER_PRIORITY) for u in users
    ]
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
        + "\n".join(entries)
        + "\n</urlset>\n"
    )
