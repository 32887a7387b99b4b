"""
SimulationClient - sends governance transactions to the simulation provider.
"""
import logging
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..config import SimulationConfig
from ..exceptions import ProviderError, TransportError
from ..models import SimulationOutcome, TransactionIntent
from ..utils import validate_endpoint_url
from .builder import build_simulation_request, sanitize_for_logging


class SimulationClient:
    """
    Client for the transaction simulation provider.

    Each call to ``simulate`` sends exactly one request. Simulations are
    saved (and may be billed) by the provider, so nothing is retried: not
    by this class and not by the HTTP adapter.
    """

    def __init__(
        self,
        config: SimulationConfig,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the SimulationClient

        Args:
            config: Simulation provider settings
            session: Optional pre-configured requests session
            logger: Optional logger instance to use for debug/info logging

        Raises:
            MisconfiguredError: If credentials are missing or the API URL is invalid
        """
        config.require_credentials()
        validate_endpoint_url("simulation API URL", config.api_base, config.allow_insecure_http)

        self.config = config
        self.endpoint = config.endpoint
        self.timeout = config.timeout
        self.logger = logger or logging.getLogger(__name__)
        self.session = session or self._create_session()

    @staticmethod
    def _create_session() -> requests.Session:
        session = requests.Session()
        no_retries = Retry(total=0, connect=0, read=0, redirect=0, status=0, raise_on_status=False)
        session.mount("http://", HTTPAdapter(max_retries=no_retries))
        session.mount("https://", HTTPAdapter(max_retries=no_retries))
        return session

    def simulate(self, intent: TransactionIntent) -> SimulationOutcome:
        """
        Simulate a transaction intent.

        Args:
            intent: Transaction to simulate

        Returns:
            SimulationOutcome with success flag, id and dashboard URL

        Raises:
            InvalidInputError: If the intent is invalid (nothing is sent)
            ProviderError: If the provider answers with a non-2xx status
            TransportError: If no usable response is received
        """
        payload = build_simulation_request(intent, self.config)
        return self.submit(payload)

    def submit(self, payload: Dict[str, Any]) -> SimulationOutcome:
        """
        Send an already built payload to the provider.

        Raises:
            ProviderError: If the provider answers with a non-2xx status
            TransportError: If no usable response is received
        """
        self.logger.debug(f"Sending simulation request to {self.endpoint}: {sanitize_for_logging(payload)}")
        headers = {
            "Content-Type": "application/json",
            "X-Access-Key": self.config.access_key,
        }

        try:
            response = self.session.post(
                self.endpoint,
                json=payload,
                headers=headers,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            self.logger.error(f"Simulation request failed: {e}")
            raise TransportError(f"Simulation request failed: {e}") from e

        if not 200 <= response.status_code < 300:
            details = _decode_error_body(response)
            message = _error_message(details) or response.reason or f"HTTP {response.status_code}"
            self.logger.error(f"Simulation provider error {response.status_code}: {details}")
            raise ProviderError(message, status=response.status_code, details=details)

        try:
            data = response.json()
        except ValueError as e:
            self.logger.error(f"Invalid JSON in simulation response: {e}")
            raise TransportError(f"Invalid JSON in simulation response: {e}") from e

        outcome = interpret_simulation_response(data, self.config)
        self.logger.info(f"{outcome.message} (id: {outcome.simulation_id}): {outcome.dashboard_url}")
        return outcome


def interpret_simulation_response(data: Any, config: SimulationConfig) -> SimulationOutcome:
    """
    Turn a decoded 2xx provider response into a SimulationOutcome.

    Only ``simulation.status is True`` counts as success.

    Raises:
        TransportError: If the response has no ``simulation`` object
    """
    simulation = data.get("simulation") if isinstance(data, dict) else None
    if not isinstance(simulation, dict):
        raise TransportError(f"Missing 'simulation' in provider response: {str(data)[:200]}")

    simulation_id = simulation.get("id")
    return SimulationOutcome(
        succeeded=simulation.get("status") is True,
        simulation_id=str(simulation_id) if simulation_id is not None else None,
        account_slug=config.account_slug,
        project_slug=config.project_slug,
        dashboard_base=config.dashboard_base,
        raw=data,
    )


def _decode_error_body(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def _error_message(details: Any) -> Optional[str]:
    """Pull a human-readable message out of a provider error body."""
    if isinstance(details, dict):
        error = details.get("error")
        if isinstance(error, str) and error:
            return error
        if isinstance(error, dict):
            return error.get("message") or error.get("slug")
        message = details.get("message")
        return message if isinstance(message, str) and message else None
    if isinstance(details, str):
        return details.strip() or None
    return None
