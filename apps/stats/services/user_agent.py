"""User-Agent classification: raw header -> canonical (browser family, version, mobile).

Parsing is done by `user_agents` (ua-parser regexes); the rules below correct the
families and versions we know it gets wrong or that are too noisy to chart:

  - Mobile builds ("Chrome Mobile", "Mobile Safari", ...) count under their desktop family;
    the mobile flag already carries that distinction.
  - "Android" is dropped entirely (empty family); the stock-browser data is mostly wrong.
  - "Chromium" is counted as "Chrome".
  - "Safari" with a four-part version (three dots) is really Chrome; relabel it.
  - Chrome and Opera keep only the major version; build/patch are noise and minor has been 0 for years.
  - Safari keeps major.minor and drops the patch.
"""

from typing import NamedTuple

import user_agents
from ua_parser import user_agent_parser


class ClassifiedBrowser(NamedTuple):
    """Derived, never persisted. Empty family means: discard this record."""

    family: str
    version: str
    mobile: bool


DISCARD = ClassifiedBrowser("", "", False)

BASE_FAMILIES = {
    "Chrome Mobile": "Chrome",
    "Chrome Mobile iOS": "Chrome",
    "Chrome Mobile WebView": "Chrome",
    "Mobile Safari": "Safari",
    "Mobile Safari UI/WKWebView": "Safari",
    "Opera Mobile": "Opera",
}


def normalize(family: str, version: str, mobile: bool) -> ClassifiedBrowser:
    """Apply the correction rules to a parser's (family, version, mobile)."""
    family = BASE_FAMILIES.get(family, family)

    if family == "Android":
        return DISCARD

    if family == "Chromium":
        family = "Chrome"

    if family == "Safari" and version.count(".") == 3:
        family = "Chrome"

    if family in ("Chrome", "Opera"):
        version = version.split(".", 1)[0]

    if family == "Safari":
        parts = version.split(".")
        if len(parts) > 2:
            version = f"{parts[0]}.{parts[1]}"

    return ClassifiedBrowser(family, version, mobile)


def _full_version(ua_header: str) -> str:
    """major.minor.patch[.patch_minor]; `user_agents` drops the fourth component."""
    parsed = user_agent_parser.Parse(ua_header)["user_agent"]
    parts = []
    for key in ("major", "minor", "patch", "patch_minor"):
        value = parsed.get(key)
        if not value:
            break
        parts.append(str(value))
    return ".".join(parts)


def classify(ua_header: str | None) -> ClassifiedBrowser:
    """Parse a User-Agent header. Never raises; empty/garbage input gives a best-effort result."""
    ua_header = ua_header or ""
    ua = user_agents.parse(ua_header)
    return normalize(ua.browser.family or "", _full_version(ua_header), bool(ua.is_mobile))


def get_browser(ua_header: str | None) -> tuple[str, str, bool]:
    """Tuple form of classify: (family, version, mobile)."""
    return tuple(classify(ua_header))
