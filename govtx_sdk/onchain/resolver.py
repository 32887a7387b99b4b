"""
Resolves the on-chain transaction that executed a proposal.

A resolution moves through SEARCHING -> FOUND -> RECEIPT_FETCHED, or ends in
FAILED. Each call to ``ExecutionResolver.resolve`` makes at most one log
query and, only after a match, one receipt fetch. Polling until the
execution is mined is left to the caller (see ``wait_for_execution``).
"""
import logging
import time
from typing import Iterable, NoReturn, Optional

from .._rate_limited_log import rate_limited_log
from ..exceptions import GovTxError, InvalidInputError, MatchResolutionError
from ..models import (
    ExecutionResolution, LogEntry, MatchedTransaction, MatchQuery, ResolutionState, TxReceipt
)
from ..utils import hex_words, normalize_tx_hash
from .explorer import ExplorerClient
from .node import NodeClient

logger = logging.getLogger(__name__)


class ExecutionResolver:
    """
    Finds the transaction matching a MatchQuery and fetches its receipt.

    ``created_contract_log_index`` names the receipt log whose emitting
    address is taken as the contract created by the execution. The default
    (0) matches drop deployments, where the new contract emits first; this
    ordering is a property of the deploying contract, not of the chain.
    """

    def __init__(
        self,
        explorer: ExplorerClient,
        node: NodeClient,
        created_contract_log_index: int = 0,
        logger: Optional[logging.Logger] = None
    ):
        self.explorer = explorer
        self.node = node
        self.created_contract_log_index = created_contract_log_index
        self.logger = logger or logging.getLogger(__name__)

    def resolve(self, query: MatchQuery) -> ExecutionResolution:
        """
        Run one resolution attempt.

        Args:
            query: What to look for

        Returns:
            ExecutionResolution. With no match yet its state is SEARCHING and
            ``found`` is False; no receipt is fetched in that case.

        Raises:
            InvalidInputError: If the query is malformed (nothing is sent)
            MatchResolutionError: If the log query or the receipt fetch fails
        """
        query = query.normalized()
        resolution = ExecutionResolution(query=query)

        try:
            logs = self.explorer.get_logs(query.contract_address, query.from_block, query.event_topic)
            matched = self.select_match(logs, query)
        except GovTxError as e:
            self._fail(resolution, f"Log query for {query.contract_address} failed: {e}", e)

        if matched is None:
            self.logger.debug(
                f"No matching log for {query.contract_address} from block {query.from_block}"
            )
            return resolution

        resolution.matched = matched
        resolution.state = ResolutionState.FOUND
        self.logger.info(f"Matched execution {matched.hash} in block {matched.block_number}")

        try:
            receipt = self.node.get_transaction_receipt(matched.hash)
        except GovTxError as e:
            self._fail(resolution, f"Receipt fetch for {matched.hash} failed: {e}", e)

        resolution.receipt = receipt
        resolution.state = ResolutionState.RECEIPT_FETCHED
        resolution.created_contract = self.extract_created_contract(receipt)
        if resolution.created_contract:
            self.logger.info(f"Execution {matched.hash} created {resolution.created_contract}")
        return resolution

    def _fail(self, resolution: ExecutionResolution, message: str, cause: BaseException) -> NoReturn:
        resolution.state = ResolutionState.FAILED
        self.logger.error(message)
        raise MatchResolutionError(message, cause=cause, resolution=resolution) from cause

    @staticmethod
    def select_match(logs: Iterable[LogEntry], query: MatchQuery) -> Optional[MatchedTransaction]:
        """
        Pick the first chronological log satisfying the query.

        Logs without a transaction hash or block number cannot be ordered
        and are skipped.

        When ``query.content_hash`` is set, only logs whose data words or
        indexed topics contain it are accepted.

        Raises:
            InvalidInputError: If the chosen log carries a malformed hash
        """
        candidates = [
            log for log in logs
            if log.transaction_hash
            and log.block_number is not None
            and log.block_number >= query.from_block
        ]
        candidates.sort(key=lambda log: (log.block_number, log.log_index or 0))

        for log in candidates:
            if query.content_hash and not log_contains_hash(log, query.content_hash):
                continue
            return MatchedTransaction(
                hash=normalize_tx_hash(log.transaction_hash),
                block_number=log.block_number,
                log_index=log.log_index,
            )
        return None

    def extract_created_contract(self, receipt: TxReceipt) -> Optional[str]:
        """Return the address of the configured receipt log, if it exists."""
        index = self.created_contract_log_index
        if -len(receipt.logs) <= index < len(receipt.logs):
            return receipt.logs[index].address
        return None


def log_contains_hash(log: LogEntry, content_hash: str) -> bool:
    """Check whether a 0x-prefixed 32-byte hash appears in a log's data or indexed topics."""
    body = content_hash.lower().removeprefix("0x")
    if body in hex_words(log.data):
        return True
    return any(topic.lower().removeprefix("0x") == body for topic in log.topics[1:])


def wait_for_execution(
    resolver: ExecutionResolver,
    query: MatchQuery,
    attempts: int = 10,
    interval: float = 5.0,
    backoff: float = 1.0
) -> ExecutionResolution:
    """
    Re-invoke ``resolver.resolve`` until a match is found or attempts run out.

    Args:
        resolver: Resolver to invoke
        query: What to look for
        attempts: Maximum number of resolution attempts
        interval: Delay before the second attempt, in seconds
        backoff: Multiplier applied to the delay after each attempt

    Returns:
        The first resolution with a match, or the last empty one

    Raises:
        InvalidInputError: If attempts is less than 1
        MatchResolutionError: As soon as any attempt fails
    """
    if attempts < 1:
        raise InvalidInputError(f"attempts must be at least 1, got {attempts}")

    delay = interval
    for attempt in range(1, attempts + 1):
        resolution = resolver.resolve(query)
        if resolution.found:
            return resolution
        if attempt < attempts:
            rate_limited_log(
                f"Execution not found yet for {query.contract_address} from block {query.from_block}",
                level="info",
                interval=60,
                logger_instance=logger,
            )
            time.sleep(delay)
            delay *= backoff

    logger.warning(f"No execution found for {query.contract_address} after {attempts} attempt(s)")
    return resolution
