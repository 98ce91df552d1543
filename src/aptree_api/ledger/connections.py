"""Connection helpers for the Aptos fullnode REST API."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

import requests

from ..config import AptreeClientConfig
from ..exceptions import NetworkError, ResourceNotFoundError, ValidationError
from ..utils import parse_u64, parse_uint

logger = logging.getLogger(__name__)

_NODE_ERROR_FIELDS = ("message", "error_code", "vm_error_code")


class LedgerConnections:
    """Manage the HTTP session and ledger metadata for one fullnode."""

    def __init__(self, config: AptreeClientConfig, session: requests.Session | None = None):
        self.config = config.with_defaulted_urls()
        self._session = session or requests.Session()
        self._chain_id: int | None = None
        self._connected = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def connect(self) -> None:
        """Fetch ledger info and remember the chain id of the fullnode."""

        info = self.ledger_info()
        chain_id = parse_uint(info.get("chain_id"), 8, "chain_id")

        if self.config.chain_id is not None and self.config.chain_id != chain_id:
            raise ValidationError(
                "Fullnode reports a different chain id than configured",
                field="chain_id",
                value=chain_id,
                details={"configured": self.config.chain_id, "node_url": self.node_url},
            )

        self._chain_id = chain_id
        self._connected = True
        logger.info("Connected to Aptos fullnode at %s (chain id %s)", self.node_url, chain_id)

    def disconnect(self) -> None:
        self._chain_id = None
        self._connected = False

    def is_connected(self) -> bool:
        return self._connected and self._chain_id is not None

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def node_url(self) -> str:
        return str(self.config.node_url)

    @property
    def session(self) -> requests.Session:
        return self._session

    @property
    def chain_id(self) -> int:
        if self._chain_id is not None:
            return self._chain_id
        if self.config.chain_id is not None:
            return self.config.chain_id
        raise NetworkError("Ledger not connected; call connect() first", endpoint=self.node_url)

    # ------------------------------------------------------------------
    # Fullnode endpoints
    # ------------------------------------------------------------------
    def ledger_info(self) -> Mapping[str, Any]:
        info = self._request_json("GET", "/")
        if not isinstance(info, Mapping):
            raise NetworkError(
                "Unexpected response format for ledger info",
                endpoint=self.node_url,
                details={"response": info},
            )
        return info

    def get_account_sequence_number(self, address: str) -> int:
        account = self._request_json("GET", f"/accounts/{address}")
        if not isinstance(account, Mapping):
            raise NetworkError(
                "Unexpected response format for account",
                endpoint=self._url(f"/accounts/{address}"),
                details={"response": account},
            )
        return parse_u64(account.get("sequence_number"), "sequence_number")

    def view(self, payload: Mapping[str, Any]) -> list[Any]:
        """Execute a view function and return its raw result list."""

        result = self._request_json("POST", "/view", payload)
        if not isinstance(result, list):
            raise NetworkError(
                "Unexpected response format for view function",
                endpoint=self._url("/view"),
                details={"function": payload.get("function"), "response": result},
            )
        return result

    def get_resource(self, owner: str, resource_type: str) -> Mapping[str, Any]:
        """Return the ``data`` of one resource stored at ``owner``."""

        path = f"/accounts/{owner}/resource/{quote(resource_type, safe='')}"
        resource = self._request_json("GET", path, resource_type=resource_type)
        if not isinstance(resource, Mapping) or not isinstance(resource.get("data"), Mapping):
            raise NetworkError(
                "Unexpected response format for account resource",
                endpoint=self._url(path),
                details={"resource_type": resource_type, "response": resource},
            )
        return resource["data"]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _url(self, path: str) -> str:
        return f"{self.node_url}{path}" if path != "/" else self.node_url

    def _request_json(
        self,
        method: str,
        path: str,
        payload: Mapping[str, Any] | None = None,
        *,
        resource_type: str | None = None,
    ) -> Any:
        url = self._url(path)
        logger.debug("%s %s", method, url)

        try:
            response = self._session.request(
                method,
                url,
                json=payload,
                timeout=self.config.request_timeout,
            )
        except requests.RequestException as exc:
            raise NetworkError(
                f"Request to fullnode failed: {exc}", endpoint=url, details={"error": str(exc)}
            ) from exc

        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            status_code = getattr(response, "status_code", None)
            details = self._error_details(response)
            message = details.get("message") or f"Fullnode returned HTTP {status_code}"
            if status_code == 404 and resource_type is not None:
                raise ResourceNotFoundError(
                    message,
                    resource_type=resource_type,
                    endpoint=url,
                    details=details,
                ) from exc
            raise NetworkError(
                message, endpoint=url, status_code=status_code, details=details
            ) from exc

        try:
            return response.json()
        except ValueError as exc:
            raise NetworkError(
                "Fullnode returned a non-JSON response", endpoint=url, details={"error": str(exc)}
            ) from exc

    @staticmethod
    def _error_details(response: Any) -> dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {"body": getattr(response, "text", "")}

        if not isinstance(body, Mapping):
            return {"body": body}

        return {key: body[key] for key in _NODE_ERROR_FIELDS if key in body}
