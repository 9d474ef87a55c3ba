import re
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Type

from pydantic import BaseModel, ValidationError

from backoffice.errors import BackofficeError, ContractValidationError, UnknownEndpoint

PATH_PARAM = re.compile(r":(\w+)")


@dataclass(frozen=True)
class Endpoint:
    method: str
    path: str
    query: Optional[Type[BaseModel]] = None
    body: Optional[Type[BaseModel]] = None
    responses: Dict[int, Any] = field(default_factory=dict)
    name: str = ""

    def build_path(self, params: Optional[Mapping[str, Any]] = None) -> str:
        params = params or {}

        def substitute(match):
            key = match.group(1)
            if key not in params:
                raise BackofficeError(f"{self.name}: missing path parameter '{key}'")
            return str(params[key])

        return PATH_PARAM.sub(substitute, self.path)

    def build_query(self, query: Any = None) -> Dict[str, Any]:
        if self.query is None:
            return {}
        return self._dump("query", self.query, query if query is not None else {})

    def build_body(self, body: Any = None) -> Optional[Dict[str, Any]]:
        if self.body is None:
            return None
        return self._dump("body", self.body, body if body is not None else {})

    def _dump(self, part, model, value):
        if isinstance(value, BaseModel):
            value = value.model_dump()
        try:
            parsed = model.model_validate(value)
        except ValidationError as e:
            raise ContractValidationError(self.name, part, e) from e
        return parsed.model_dump(mode="json", exclude_none=True)


class Contract:
    """Named set of endpoints for one API resource."""

    def __init__(self, name: str, **endpoints: Endpoint):
        self.name = name
        self.endpoints: Dict[str, Endpoint] = {}
        for key, endpoint in endpoints.items():
            self.endpoints[key] = Endpoint(
                method=endpoint.method.upper(),
                path=endpoint.path,
                query=endpoint.query,
                body=endpoint.body,
                responses=endpoint.responses,
                name=f"{name}.{key}",
            )

    def __getitem__(self, key: str) -> Endpoint:
        try:
            return self.endpoints[key]
        except KeyError:
            raise UnknownEndpoint(f"{self.name} has no endpoint '{key}'") from None

    def __contains__(self, key):
        return key in self.endpoints

    def __iter__(self):
        return iter(self.endpoints)

    def __repr__(self):
        return f"Contract({self.name!r}, {sorted(self.endpoints)})"
