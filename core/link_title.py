from __future__ import annotations

import html
import re
from typing import Optional
from urllib import request
from urllib.parse import urlparse

__all__ = ["USER_AGENT", "extract_url", "extract_title", "fetch_page_title"]

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/141.0.0.0 Safari/537.36"
)

_TITLE_RE = re.compile(r"<title\b[^>]*>\s*(?P<title>[\s\S]*?)</title>", re.IGNORECASE)
_SPACE_RE = re.compile(r"\s+")


def extract_url(dropped_text: str) -> Optional[str]:
    """
    Browsers drop several lines (page title, URL, ...). Return the first line
    that looks like a link, or None.
    """
    for line in (dropped_text or "").splitlines():
        line = line.strip()
        if line.lower().startswith("http"):
            return line
    return None


def extract_title(source: str) -> str:
    """Text of the first <title> element, unescaped and whitespace-collapsed."""
    match = _TITLE_RE.search(source or "")
    if not match:
        return ""
    return _SPACE_RE.sub(" ", html.unescape(match.group("title"))).strip()


def fetch_page_title(url: str, timeout: float = 15.0) -> str:
    """
    GET url and return its page title. Blocking; run on the IO worker.
    Raises urllib / OSError exceptions on network failure.
    """
    parsed = urlparse(url)
    if not parsed.scheme:
        url = f"https://{url}"
    req = request.Request(
        url,
        headers={
            "User-Agent": USER_AGENT,
            "Accept": "text/html, text/plain;q=0.9",
        },
    )
    with request.urlopen(req, timeout=timeout) as response:
        charset = response.headers.get_content_charset() or "utf-8"
        body = response.read().decode(charset, errors="replace")
    return extract_title(body)
