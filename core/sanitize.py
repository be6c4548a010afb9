"""Neutralize gemspec boilerplate that can't be evaluated outside a checkout."""

import re

DEFAULT_PLACEHOLDER_VERSION = "0.0.1"

REQUIRE_LINE = re.compile(r"^[ \t]*require(?:_relative)?\b[^\r\n]*", re.MULTILINE)
VERSION_ASSIGNMENT = re.compile(r"=[^\r\n]*VERSION[^\r\n]*", re.MULTILINE)


def sanitize_specification(content: str, placeholder_version: str = DEFAULT_PLACEHOLDER_VERSION) -> str:
    """Blank out file requires and replace VERSION constants.

    We only need the gemspec to evaluate for an update check, nothing here is
    persisted, so the version doesn't need to be right.

    Args:
        content: The gemspec content
        placeholder_version: Version literal substituted for VERSION references

    Returns:
        Sanitized gemspec content
    """
    content = REQUIRE_LINE.sub("", content)
    return VERSION_ASSIGNMENT.sub(lambda _: f"= '{placeholder_version}'", content)
