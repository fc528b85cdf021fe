"""Regular-expression matching that yields text pieces and match records."""

from __future__ import annotations

import itertools
import re
from dataclasses import dataclass
from typing import Any, Iterator, Optional

from .errors import InvalidArgTypeError, QueryExecutionError


@dataclass(frozen=True)
class _Matcher:
    pattern: re.Pattern
    longest: bool = False
    not_empty: bool = False

    def _find(self, s: str, pos: int) -> Optional[re.Match]:
        found = self.pattern.search(s, pos)
        if found is None or not self.longest:
            return found
        start = found.start()
        for end in range(len(s), found.end(), -1):
            longer = self.pattern.fullmatch(s, start, end)
            if longer is not None:
                return longer
        return found

    def finditer(self, s: str) -> Iterator[re.Match]:
        pos = 0
        while pos <= len(s):
            found = self._find(s, pos)
            if found is None:
                return
            start, end = found.span()
            if start == end:
                pos = end + 1
                if self.not_empty:
                    continue
            else:
                pos = end
            yield found


def _translate(pattern: str) -> str:
    """Rewrite ``(?<name>...)`` groups into the ``(?P<name>...)`` form."""
    out = []
    i, n = 0, len(pattern)
    in_class = False
    while i < n:
        ch = pattern[i]
        if ch == "\\":
            out.append(pattern[i : i + 2])
            i += 2
            continue
        if in_class:
            if ch == "]":
                in_class = False
        elif ch == "[":
            in_class = True
            out.append(ch)
            i += 1
            if i < n and pattern[i] == "^":
                out.append("^")
                i += 1
            if i < n and pattern[i] == "]":
                out.append("]")
                i += 1
            continue
        elif (
            pattern.startswith("(?<", i)
            and i + 3 < n
            and (pattern[i + 3].isalpha() or pattern[i + 3] == "_")
        ):
            out.append("(?P<")
            i += 3
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def compile_regex(pattern: str, flags: str) -> tuple:
    """Compile ``pattern`` with jq flag letters; return the matcher and whether ``g`` was set."""
    re_flags = 0
    single_line = False
    is_global = longest = not_empty = False
    for flag in flags:
        if flag == "g":
            is_global = True
        elif flag == "i":
            re_flags |= re.IGNORECASE
        elif flag == "m":
            re_flags |= re.DOTALL
        elif flag == "n":
            not_empty = True
        elif flag == "p":
            re_flags |= re.DOTALL
            single_line = True
        elif flag == "s":
            single_line = True
        elif flag == "l":
            longest = True
        elif flag == "x":
            re_flags |= re.VERBOSE
        else:
            raise QueryExecutionError(f"Invalid regex flag `{flag}`")
    if not single_line:
        re_flags |= re.MULTILINE
    try:
        compiled = re.compile(_translate(pattern), re_flags)
    except re.error as exc:
        raise QueryExecutionError(f"Invalid regex: {exc}") from None
    return _Matcher(compiled, longest=longest, not_empty=not_empty), is_global


def _require_string(value: Any) -> str:
    if not isinstance(value, str):
        raise InvalidArgTypeError("match", value)
    return value


def _capture(found: re.Match, group: int, name: Optional[str]) -> dict:
    start, end = found.span(group)
    if start < 0:
        return {"offset": -1.0, "length": 0.0, "string": None, "name": name}
    return {
        "offset": float(start),
        "length": float(end - start),
        "string": found.group(group),
        "name": name,
    }


def split_match(context: Any, pattern: Any, flags: Any) -> list:
    """Return the text between matches interleaved with a record for each match."""
    s = _require_string(context)
    pattern_text = _require_string(pattern)
    flag_text = "" if flags is None else _require_string(flags)
    matcher, is_global = compile_regex(pattern_text, flag_text)
    names = {number: name for name, number in matcher.pattern.groupindex.items()}
    group_count = matcher.pattern.groups

    matches: Iterator[re.Match] = matcher.finditer(s)
    if not is_global:
        matches = itertools.islice(matches, 1)

    pieces: list = []
    last_end = 0
    for found in matches:
        start, end = found.span()
        pieces.append(s[last_end:start])
        last_end = end
        pieces.append(
            {
                "offset": float(start),
                "length": float(end - start),
                "string": found.group(0),
                "captures": [
                    _capture(found, group, names.get(group))
                    for group in range(1, group_count + 1)
                ],
            }
        )
    pieces.append(s[last_end:])
    return pieces