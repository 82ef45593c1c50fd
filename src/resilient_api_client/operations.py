"""Typed operation table: operation name -> verb, path template, arguments."""

from __future__ import annotations

import string
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from urllib.parse import quote

from .core.errors import ApiConfigurationError
from .core.models import ApiRequest
from .serialization import SerializerSettings

HTTP_METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"})


def _path_placeholders(path: str) -> tuple[str, ...]:
    names: list[str] = []
    try:
        parsed = list(string.Formatter().parse(path))
    except ValueError as exc:
        raise ApiConfigurationError(f"malformed path template: {path!r}") from exc
    for _, name, format_spec, conversion in parsed:
        if name is None:
            continue
        if not name.isidentifier() or format_spec or conversion:
            raise ApiConfigurationError(f"unsupported placeholder {name!r} in path {path!r}")
        names.append(name)
    return tuple(names)


@dataclass(slots=True, frozen=True)
class ApiOperation:
    """One remote operation.

    Arguments are bound in order: path placeholders, then ``query`` names,
    then the ``body`` name.
    """

    name: str
    method: str
    path: str
    query: Sequence[str] = ()
    body: str | None = None
    returns: object = str
    path_params: tuple[str, ...] = field(init=False, repr=False)
    arguments: tuple[str, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.name.isidentifier() or self.name.startswith("_"):
            raise ApiConfigurationError(f"invalid operation name: {self.name!r}")
        method = self.method.upper()
        if method not in HTTP_METHODS:
            raise ApiConfigurationError(f"{self.name}: unsupported HTTP method {self.method!r}")
        if isinstance(self.query, str):
            raise ApiConfigurationError(f"{self.name}: query must be a sequence of names, not str")
        path_params = _path_placeholders(self.path)
        arguments = [*path_params, *self.query]
        if self.body is not None:
            arguments.append(self.body)
        if len(set(arguments)) != len(arguments):
            raise ApiConfigurationError(f"{self.name}: duplicate argument names {arguments}")
        object.__setattr__(self, "method", method)
        object.__setattr__(self, "query", tuple(self.query))
        object.__setattr__(self, "path_params", path_params)
        object.__setattr__(self, "arguments", tuple(arguments))

    def bind(self, args: Sequence[object], kwargs: Mapping[str, object]) -> dict[str, object]:
        if len(args) > len(self.arguments):
            raise TypeError(
                f"{self.name}() takes {len(self.arguments)} arguments but {len(args)} were given"
            )
        bound = dict(zip(self.arguments, args))
        for key, value in kwargs.items():
            if key not in self.arguments:
                raise TypeError(f"{self.name}() got an unexpected argument {key!r}")
            if key in bound:
                raise TypeError(f"{self.name}() got multiple values for argument {key!r}")
            bound[key] = value
        missing = [name for name in self.arguments if name not in bound]
        if missing:
            raise TypeError(f"{self.name}() missing arguments: {', '.join(missing)}")
        return bound

    def build_request(
        self,
        bound: Mapping[str, object],
        serializer: SerializerSettings,
    ) -> ApiRequest:
        path = self.path.format(
            **{name: quote(str(bound[name]), safe="") for name in self.path_params}
        )
        params = {
            name: _query_value(bound[name]) for name in self.query if bound[name] is not None
        }
        content: bytes | None = None
        headers: dict[str, str] = {}
        if self.body is not None and bound[self.body] is not None:
            content = serializer.encode(bound[self.body])
            if not isinstance(bound[self.body], bytes | str):
                headers["Content-Type"] = serializer.content_type
        return ApiRequest(
            operation=self.name,
            method=self.method,
            path=path,
            params=params,
            content=content,
            headers=headers,
        )


def _query_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ApiDefinition:
    """Operation table resolved once at construction."""

    def __init__(self, name: str, operations: Iterable[ApiOperation]) -> None:
        self.name = name
        table: dict[str, ApiOperation] = {}
        for operation in operations:
            if not isinstance(operation, ApiOperation):
                raise ApiConfigurationError(f"{name}: entries must be ApiOperation")
            if operation.name in table:
                raise ApiConfigurationError(f"{name}: duplicate operation {operation.name!r}")
            table[operation.name] = operation
        self._operations = table

    @property
    def operations(self) -> Mapping[str, ApiOperation]:
        return dict(self._operations)

    def get(self, name: str) -> ApiOperation | None:
        return self._operations.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._operations

    def __iter__(self):
        return iter(self._operations.values())

    def __len__(self) -> int:
        return len(self._operations)


__all__ = [
    "HTTP_METHODS",
    "ApiOperation",
    "ApiDefinition",
]
