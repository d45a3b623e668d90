# -------------------------------------
# bracket group expansion
# -------------------------------------
"""
One enumerated option list per prompt unit:

    "A [red, blue, green] car" -> "A red car", "A blue car", "A green car"

Only a single, well-formed group is supported; anything else is a syntax
error. More options than the configured ceiling is an overflow, never a
truncation.
"""
from __future__ import annotations

import re
from dataclasses import dataclass

from .config import DEFAULT_CONFIG, ExpansionConfig
from .errors import ExpansionError, OptionOverflowError, PromptSyntaxError
from .syntax import validate_brackets

_GROUP_RE = re.compile(r"\[([^\[\]]+)\]")
_WS_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class BracketGroup:
    before: str
    after: str
    options: tuple[str, ...]
    raw: str  # text between the brackets, untouched


def split_options(inner: str) -> list[str]:
    """Split on commas, trim, drop empty items."""
    return [x.strip() for x in inner.split(",") if x.strip()]


def find_bracket_group(text: str) -> BracketGroup:
    """Extract the single [ ... ] group of `text`; raise PromptSyntaxError if malformed."""
    check = validate_brackets(text)
    if not check:
        raise PromptSyntaxError(check.error, check.suggestion)
    m = _GROUP_RE.search(text)
    if m is None:
        raise PromptSyntaxError("No bracket group found", "Use [option1, option2]")
    return BracketGroup(
        before=text[: m.start()],
        after=text[m.end():],
        options=tuple(split_options(m.group(1))),
        raw=m.group(1),
    )


def expand_group(group: BracketGroup, config: ExpansionConfig = DEFAULT_CONFIG) -> list[str]:
    """
    before + option + after, once per option.

    Raises PromptSyntaxError when no option survives trimming and
    OptionOverflowError above config.max_bracket_options.
    """
    n = len(group.options)
    if n == 0:
        raise PromptSyntaxError(
            "Brackets contain no usable options",
            "Add options inside brackets: [option1, option2]",
        )
    if n > config.max_bracket_options:
        raise OptionOverflowError(
            f"Too many bracket options: {n} (max {config.max_bracket_options})",
            "Remove options or split the prompt",
        )

    out = []
    for option in group.options:
        s = group.before + option + group.after
        if config.trim_whitespace:
            s = _WS_RE.sub(" ", s).strip()
        out.append(s)
    return out


def expand_brackets(text: str, config: ExpansionConfig = DEFAULT_CONFIG) -> list[str]:
    """
    Expand the bracket group of `text`.

    A text without brackets comes back unchanged as a single item; any
    failure yields an empty list.
    """
    if "[" not in text and "]" not in text:
        return [text]
    try:
        return expand_group(find_bracket_group(text), config)
    except ExpansionError:
        return []
