import re
from typing import Optional

_CONTROL_CHARS = re.compile(r"[\x01-\x08\x0b\x0c\x0e-\x1f\x7f]")
_LINE_ENDINGS = re.compile(r"\r\n?")
_INLINE_SPACE = re.compile(r"[ \t]+")
_LEADING_SPACE = re.compile(r"\n[ \t]+")
_TRAILING_SPACE = re.compile(r"[ \t]+\n")
_BLANK_RUNS = re.compile(r"\n{3,}")


def sanitize_text(content: Optional[str]) -> str:
    """
    Normalize extracted document text so it is safe to store and parse.

    Removes NUL and other control characters (tab, LF and CR are kept),
    converts CRLF/CR to LF, collapses runs of spaces/tabs, strips each line,
    caps blank-line runs at one empty line and trims the result.
    """
    if not content:
        return ""

    content = content.replace("\x00", "")
    content = _CONTROL_CHARS.sub("", content)
    content = _LINE_ENDINGS.sub("\n", content)
    content = _INLINE_SPACE.sub(" ", content)
    content = _LEADING_SPACE.sub("\n", content)
    content = _TRAILING_SPACE.sub("\n", content)
    content = _BLANK_RUNS.sub("\n\n", content)

    return content.strip()


def truncate_text(text: str, max_length: int, suffix: str = "") -> str:
    return text[:max_length] + suffix if len(text) > max_length else text


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()
