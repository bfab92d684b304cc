"""
Gitignore-style glob matching for CODEOWNERS patterns.

Patterns are translated once into a compiled regex; matching a path is then a
single regex call. Semantics follow gitignore:

- a pattern without a slash matches a name at any depth
- a leading or inner slash anchors the pattern to the root
- a trailing slash only matches directories (paths beneath it)
- ``*`` and ``?`` never cross ``/``, ``**`` does
- a backslash makes the next character literal
"""

import re
from re import Pattern

from cachetools import LRUCache

from file_codeowners.core.config import config

# A non-positive size disables caching
_PATTERN_CACHE: LRUCache[str, Pattern[str]] | None = (
    LRUCache(maxsize=config.patterns.cache_size) if config.patterns.cache_size > 0 else None
)


def normalize_path(path: str) -> str:
    """Normalize a candidate path for matching.

    - Strips leading './' and '/'
    - Collapses repeated slashes
    - Keeps a trailing slash, which marks a directory
    """
    p = path
    while "//" in p:
        p = p.replace("//", "/")
    while p.startswith("./"):
        p = p[2:]
    return p.lstrip("/")


def _class_end(pattern: str, start: int) -> int | None:
    j = start + 1
    if j < len(pattern) and pattern[j] in "!^":
        j += 1
    if j < len(pattern) and pattern[j] == "]":
        j += 1
    while j < len(pattern) and pattern[j] != "]":
        j += 1
    return j if j < len(pattern) else None


def _translate_class(body: str) -> str:
    body = body.replace("\\", "\\\\")
    if body[0] == "!":
        body = "^" + body[1:]
    elif body[0] == "^":
        body = "\\" + body
    return f"[{body}]"


def translate(pattern: str) -> str:
    """Translate a gitignore-style pattern into a regex string.

    Args:
        pattern: The CODEOWNERS pattern.

    Returns:
        A regex anchored at both ends, matching normalized paths.
    """
    p = pattern
    dir_only = p.endswith("/") and not p.endswith("\\/")
    if dir_only:
        p = p[:-1]

    anchored = "/" in p
    if p.startswith("/"):
        p = p[1:]

    regex_parts: list[str] = []
    i = 0
    length = len(p)
    while i < length:
        char = p[i]
        if char == "*":
            j = i
            while j < length and p[j] == "*":
                j += 1
            whole_segment = (i == 0 or p[i - 1] == "/") and (j == length or p[j] == "/")
            if j - i >= 2 and whole_segment:
                if j == length:
                    regex_parts.append(".*")
                else:
                    # "**/" spans zero or more directories
                    regex_parts.append("(?:.*/)?")
                    j += 1
            else:
                regex_parts.append("[^/]*")
            i = j
            continue
        if char == "?":
            regex_parts.append("[^/]")
        elif char == "[":
            end = _class_end(p, i)
            if end is not None:
                regex_parts.append(_translate_class(p[i + 1 : end]))
                i = end + 1
                continue
            regex_parts.append(re.escape(char))
        elif char == "\\" and i + 1 < length:
            regex_parts.append(re.escape(p[i + 1]))
            i += 2
            continue
        else:
            regex_parts.append(re.escape(char))
        i += 1

    prefix = "^" if anchored else "^(?:.*/)?"
    suffix = "/.*$" if dir_only else "(?:/.*)?$"
    if not regex_parts:
        # A bare "/" owns the whole tree
        return "^.*$"
    return prefix + "".join(regex_parts) + suffix


def compile_pattern(pattern: str) -> Pattern[str]:
    """Compile a CODEOWNERS pattern, reusing previously compiled ones.

    Args:
        pattern: The CODEOWNERS pattern.

    Returns:
        A compiled regex pattern object.
    """
    if _PATTERN_CACHE is None:
        return re.compile(translate(pattern))

    cached = _PATTERN_CACHE.get(pattern)
    if cached is not None:
        return cached

    compiled = re.compile(translate(pattern))
    _PATTERN_CACHE[pattern] = compiled
    return compiled


class PatternMatcher:
    """Decides whether paths match one CODEOWNERS pattern.

    Build it once per pattern and call it for as many paths as needed.
    """

    def __init__(self, pattern: str):
        self.pattern = pattern
        self.regex = compile_pattern(pattern)

    def matches(self, path: str) -> bool:
        """Check whether ``path`` is matched by this pattern."""
        normalized = normalize_path(path)
        if not normalized:
            return False
        return self.regex.match(normalized) is not None

    __call__ = matches

    def __repr__(self) -> str:
        return f"PatternMatcher({self.pattern!r})"
