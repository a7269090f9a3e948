"""Request parameter helpers: alias folding and route templating."""

import re
from collections.abc import Mapping, Sequence
from typing import Any

PER_PAGE_ALIASES = ("perPage",)
ALBUM_ALIASES = ("album_id", "album_shortcut")
ASSET_ALIASES = ("asset", "shortcut")

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def fold_aliases(params: dict[str, Any], canonical: str, aliases: Sequence[str]) -> dict[str, Any]:
    """Collapse alternative spellings of ``canonical`` into one key, in place.

    An existing canonical value wins; otherwise the first alias (in the order
    given) carrying a value is used. Alias keys are always dropped.
    """

    for alias in aliases:
        value = params.pop(alias, None)
        if params.get(canonical) is None and value is not None:
            params[canonical] = value
    return params


def normalize_params(params: Mapping[str, Any] | None, *rules: tuple[str, Sequence[str]]) -> dict[str, Any]:
    """Return a copy of ``params`` with every ``(canonical, aliases)`` rule applied."""

    normalized = dict(params or {})
    fold_aliases(normalized, "per_page", PER_PAGE_ALIASES)
    for canonical, aliases in rules:
        fold_aliases(normalized, canonical, aliases)
    return normalized


def expand_route(template: str, params: Mapping[str, Any]) -> tuple[str, dict[str, Any]]:
    """Fill ``{name}`` placeholders from ``params``.

    Placeholders without a value collapse together with their slash. Returns
    the path and the parameters left over for the query string.
    """

    remaining = {key: value for key, value in params.items() if value is not None}

    def substitute(match: re.Match) -> str:
        value = remaining.pop(match.group(1), None)
        return "" if value is None else str(value)

    path = _PLACEHOLDER.sub(substitute, template)
    path = re.sub(r"/{2,}", "/", path)
    if len(path) > 1:
        path = path.rstrip("/")
    return path, remaining
