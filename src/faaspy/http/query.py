"""Query string parameters."""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qsl


class QueryParams(Mapping[str, str]):
    """Multi-value query parameters, first value wins on plain lookup.

    Blank values (``?flag=``) are kept as empty strings. :attr:`raw` keeps
    the undecoded query string for handlers that parse it themselves.
    """

    __slots__ = ("_pairs", "_raw")

    def __init__(self, query_string: bytes | str = b"") -> None:
        raw = query_string.encode("latin-1") if isinstance(query_string, str) else query_string
        self._raw = raw
        self._pairs = parse_qsl(raw.decode("latin-1"), keep_blank_values=True)

    def __getitem__(self, key: str) -> str:
        for name, value in self._pairs:
            if name == key:
                return value
        raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        return iter(dict.fromkeys(name for name, _ in self._pairs))

    def __len__(self) -> int:
        return len({name for name, _ in self._pairs})

    def __repr__(self) -> str:
        return f"QueryParams({self._raw.decode('latin-1')!r})"

    def get_list(self, key: str) -> list[str]:
        """All values for *key* in query-string order."""
        return [value for name, value in self._pairs if name == key]

    @property
    def raw(self) -> bytes:
        """The query string as received, without the leading ``?``."""
        return self._raw
