import functools
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import httpx

from backoffice import config
from backoffice.contracts.base import Contract

logger = logging.getLogger(__name__)


@dataclass
class ApiResponse:
    status: int
    body: Any
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self):
        return self.status == 200


def _decode(response: httpx.Response):
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class ContractClient:
    """
    Callable view of a contract.

    Every endpoint becomes a method taking ``query``, ``body`` and ``params``
    (path parameters). HTTP error statuses come back as ``ApiResponse``;
    only transport failures raise.
    """

    def __init__(
        self,
        contract: Contract,
        token: Optional[str] = None,
        http: Optional[httpx.Client] = None,
        base_url: Optional[str] = None,
    ):
        self.contract = contract
        self.base_url = config.API_BASE_URL if base_url is None else base_url
        self.headers = {"Content-Type": "application/json"}
        if token:
            self.headers["Authorization"] = f"Bearer {token}"
        self._http = http

    def call(
        self,
        name: str,
        query: Any = None,
        body: Any = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> ApiResponse:
        endpoint = self.contract[name]
        # Validation happens here, before anything touches the network.
        path = endpoint.build_path(params)
        query_params = endpoint.build_query(query)
        payload = endpoint.build_body(body)

        url = f"{self.base_url.rstrip('/')}{path}"
        request_kwargs = {"headers": self.headers, "params": query_params or None}
        if payload is not None:
            request_kwargs["json"] = payload

        logger.debug("%s %s", endpoint.method, url)
        if self._http is not None:
            response = self._http.request(endpoint.method, url, **request_kwargs)
        else:
            with httpx.Client(timeout=config.HTTP_TIMEOUT) as client:
                response = client.request(endpoint.method, url, **request_kwargs)

        if response.status_code >= 400:
            logger.info("%s %s -> %s", endpoint.method, path, response.status_code)
        return ApiResponse(
            status=response.status_code,
            body=_decode(response),
            headers=dict(response.headers),
        )

    def __getattr__(self, name):
        contract = self.__dict__.get("contract")
        if name.startswith("_") or contract is None or name not in contract:
            raise AttributeError(name)
        return functools.partial(self.call, name)


def api_client(contract: Contract, token: Optional[str] = None, http: Optional[httpx.Client] = None,
               base_url: Optional[str] = None) -> ContractClient:
    return ContractClient(contract, token=token, http=http, base_url=base_url)
