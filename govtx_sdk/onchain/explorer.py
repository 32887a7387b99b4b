"""
Block-explorer log API client (Etherscan-compatible ``getLogs``).
"""
import logging
from typing import Any, Dict, List, Optional, Union

import requests
from pydantic import ValidationError
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..config import ChainConfig
from ..exceptions import ProviderError, TransportError
from ..models import LogEntry
from ..utils import validate_endpoint_url

# Messages sent with status "0" when a query simply has no results
EMPTY_RESULT_MESSAGES = ("no records found", "no logs found")


class ExplorerClient:
    """
    Queries an explorer log API for events emitted by a contract.

    By default one HTTP request is made per query; ``retry_count`` enables
    transport-level retries on 5xx responses for callers that want them.
    """

    def __init__(
        self,
        config: ChainConfig,
        session: Optional[requests.Session] = None,
        retry_count: int = 0,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the ExplorerClient

        Args:
            config: Chain settings holding the explorer URL and API key
            session: Optional pre-configured requests session
            retry_count: Number of transport-level retries on 5xx
            logger: Optional logger instance

        Raises:
            MisconfiguredError: If the explorer URL is missing or insecure
        """
        self.api_url = validate_endpoint_url(
            "explorer API URL", config.explorer_api_url, config.allow_insecure_http
        )
        self.api_key = config.explorer_api_key
        self.timeout = config.timeout
        self.logger = logger or logging.getLogger(__name__)

        if session is None:
            session = requests.Session()
            retries = Retry(
                total=retry_count,
                backoff_factor=0.5,
                status_forcelist=[500, 502, 503, 504],
                allowed_methods=["GET"],
                raise_on_status=False,
            )
            session.mount("http://", HTTPAdapter(max_retries=retries))
            session.mount("https://", HTTPAdapter(max_retries=retries))
        self.session = session

    def get_logs(
        self,
        address: str,
        from_block: int,
        topic0: str,
        to_block: Union[int, str] = "latest"
    ) -> List[LogEntry]:
        """
        Fetch logs emitted by ``address`` with the given topic0.

        Args:
            address: Emitting contract address
            from_block: First block to search
            topic0: Event signature hash
            to_block: Last block to search (default "latest")

        Returns:
            Log entries in the order returned by the API (possibly empty)

        Raises:
            ProviderError: If the API reports an error
            TransportError: If no usable response is received
        """
        params: Dict[str, Any] = {
            "module": "logs",
            "action": "getLogs",
            "address": address,
            "fromBlock": from_block,
            "toBlock": to_block,
            "topic0": topic0,
        }
        self.logger.debug(f"Querying explorer logs: {params}")
        if self.api_key:
            params["apikey"] = self.api_key

        try:
            response = self.session.get(self.api_url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            self.logger.error(f"Explorer log query failed: {e}")
            raise TransportError(f"Explorer log query failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise ProviderError(
                f"Explorer API error: {response.reason or response.status_code}",
                status=response.status_code,
                details=response.text,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise TransportError(f"Invalid JSON from explorer API: {e}") from e

        entries = self._extract_result_list(payload, response.status_code)
        if not all(isinstance(entry, dict) for entry in entries):
            raise TransportError(f"Malformed log list from explorer API: {str(entries)[:200]}")
        try:
            logs = [LogEntry.model_validate(entry) for entry in entries]
        except ValidationError as e:
            raise TransportError(f"Malformed log entry from explorer API: {e}") from e

        self.logger.debug(f"Explorer returned {len(logs)} log(s) for {address}")
        return logs

    def _extract_result_list(self, payload: Any, http_status: int) -> List[Any]:
        """
        Unwrap the ``result`` list of an explorer response.

        The API answers status "0" with a "No records found" message for an
        empty result set; that is not an error.
        """
        if not isinstance(payload, dict):
            raise TransportError("Unexpected response from explorer API")

        status = str(payload.get("status", "")).strip()
        message = payload.get("message", "")
        result = payload.get("result")

        if status in ("1", "") and isinstance(result, list):
            return result
        # "NOTOK" is used for every real error, so only exact empty-set messages count
        if (
            status == "0"
            and isinstance(message, str)
            and message.strip().lower() in EMPTY_RESULT_MESSAGES
            and result in (None, [])
        ):
            return []

        detail = result if isinstance(result, str) else ""
        raise ProviderError(
            f"Explorer API error: {detail or message or 'unknown error'}",
            status=http_status,
            details=payload,
        )
