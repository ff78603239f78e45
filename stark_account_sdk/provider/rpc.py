"""
JSON-RPC 2.0 provider.

Talks to a StarkNet node over HTTP. Retries on connection errors and 5xx
responses are handled by the session's urllib3 Retry policy; nothing above
this module retries.
"""
import itertools
import logging
import urllib.parse
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..chain_id import chain_id_to_name
from ..exceptions import ProviderConnectionError, ProviderError
from ..models import AddInvokeTransactionResponse, InvokeTransaction
from ..utils import short_hex
from ._rate_limited_log import rate_limited_log
from .base import Provider
from .errors import classify_submission_error


def _validate_url(rpc_url: str) -> None:
    parsed = urllib.parse.urlparse(rpc_url)
    host = parsed.hostname or ''
    is_local = host in ('localhost', '127.0.0.1')
    if parsed.scheme != 'https' and not is_local:
        raise ValueError(f"rpc_url must use https:// for security (got: {parsed.scheme}://)")


class RpcProvider(Provider):
    """
    Provider backed by a node's JSON-RPC endpoint.
    """

    def __init__(
        self,
        rpc_url: str,
        retry_count: int = 3,
        timeout: int = 30,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the provider.

        Args:
            rpc_url: Node endpoint, e.g. "https://starknet-mainnet.public.blastapi.io"
            retry_count: Number of retries for failed HTTP requests
            timeout: Request timeout in seconds
            logger: Optional logger instance

        Raises:
            ValueError: If the URL doesn't use https (unless it's localhost/127.0.0.1)
        """
        _validate_url(rpc_url)
        self.rpc_url = rpc_url
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)
        self._ids = itertools.count(1)

        # Setup HTTP session with retries
        self.session = requests.Session()
        retries = Retry(
            total=retry_count,
            backoff_factor=0.5,
            status_forcelist=[500, 502, 503, 504],
            allowed_methods=["POST"],
            raise_on_status=False,
            connect=retry_count,
            read=retry_count,
            other=retry_count,
        )
        self.session.mount("http://", HTTPAdapter(max_retries=retries))
        self.session.mount("https://", HTTPAdapter(max_retries=retries))

    def _call(self, method: str, params: List[Any]) -> Any:
        """
        Perform one JSON-RPC call.

        Returns:
            The "result" member of the response

        Raises:
            ProviderConnectionError: On transport failures or non-JSON answers
            ProviderError: If the node answers with a JSON-RPC error object,
                carrying the rendered "<code>: <message>" text
        """
        payload = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params}
        self.logger.debug("JSON-RPC request %s (id=%s)", method, payload["id"])

        try:
            response = self.session.post(self.rpc_url, json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            rate_limited_log(f"RPC endpoint {self.rpc_url} failed: {e}", logger_instance=self.logger)
            raise ProviderConnectionError(f"{method} request failed: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise ProviderConnectionError(
                f"Invalid JSON response for {method} (HTTP {response.status_code}): {e}"
            ) from e

        # Some nodes answer JSON-RPC errors with a 4xx status; keep the error object
        if response.status_code >= 400 and not (isinstance(body, dict) and "error" in body):
            raise ProviderConnectionError(f"{method} request failed with HTTP {response.status_code}")
        if not isinstance(body, dict):
            raise ProviderConnectionError(f"Unexpected JSON-RPC response for {method}: {body!r}")

        error = body.get("error")
        if error is not None:
            raise ProviderError(self._render_error(error))
        if "result" not in body:
            raise ProviderConnectionError(f"JSON-RPC response for {method} has no result")
        return body["result"]

    @staticmethod
    def _render_error(error: Any) -> str:
        if not isinstance(error, dict):
            return str(error)
        message = str(error.get("message", "Unknown error"))
        data = error.get("data")
        if isinstance(data, str) and data:
            message = f"{message}: {data}"
        elif isinstance(data, dict) and isinstance(data.get("revert_error"), str):
            message = f"{message}: {data['revert_error']}"
        code = error.get("code")
        return f"{code}: {message}" if code is not None else message

    def chain_id(self) -> str:
        result = self._call("starknet_chainId", [])
        if not isinstance(result, str):
            raise ProviderError(f"starknet_chainId returned a non-string value: {result!r}")
        return chain_id_to_name(result)

    def add_invoke_transaction(self, transaction: InvokeTransaction) -> AddInvokeTransactionResponse:
        wire: Dict[str, Any] = transaction.to_wire()
        try:
            result = self._call("starknet_addInvokeTransaction", [wire])
        except ProviderConnectionError:
            raise
        except ProviderError as e:
            rejection = classify_submission_error(str(e))
            self.logger.warning("Invoke transaction rejected (%s): %s",
                                rejection.category.value, rejection.raw_message)
            raise rejection from e

        try:
            response = AddInvokeTransactionResponse.model_validate(result)
        except ValidationError as e:
            raise ProviderError(f"Malformed starknet_addInvokeTransaction result: {result!r}") from e
        self.logger.info("Submitted invoke transaction %s", short_hex(response.transaction_hash))
        return response

    def close(self) -> None:
        self.session.close()
