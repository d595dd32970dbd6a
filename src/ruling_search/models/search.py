"""Search request model and parsing of raw request parameters."""

from dataclasses import dataclass

from ruling_search.models.document import SearchScope

# Values meaning "no filter" for category and collection scope.
_ALL_SENTINELS = frozenset({"", "全部", "all"})

_SCOPE_ALIASES = {"both": SearchScope.ALL}


@dataclass(frozen=True)
class SearchRequest:
    """A keyword search across one or all collections.

    Every keyword in ``keywords`` must match; any keyword in ``exclude``
    rejects the row. ``category`` and ``source`` are ``None`` when unfiltered.
    """

    keywords: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()
    scope: SearchScope = SearchScope.CONTENT
    category: str | None = None
    source: str | None = None


def _parse_scope(scope: str | None) -> SearchScope:
    if not scope:
        return SearchScope.CONTENT
    scope = scope.strip().lower()
    if scope in _SCOPE_ALIASES:
        return _SCOPE_ALIASES[scope]
    try:
        return SearchScope(scope)
    except ValueError:
        msg = f"Invalid search scope {scope!r}, expected title, content or all"
        raise ValueError(msg) from None


def _parse_filter(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return None if value in _ALL_SENTINELS else value


def parse_search_request(
    query: str = "",
    *,
    exclude: str = "",
    scope: str | None = None,
    category: str | None = None,
    source: str | None = None,
) -> SearchRequest:
    """Build a SearchRequest from raw, whitespace-separated keyword strings.

    Raises:
        ValueError: If ``scope`` is not a known search scope.
    """
    return SearchRequest(
        keywords=tuple(query.split()),
        exclude=tuple(exclude.split()),
        scope=_parse_scope(scope),
        category=_parse_filter(category),
        source=_parse_filter(source),
    )
