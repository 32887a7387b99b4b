"""
Tests for rate-limited logging.
"""
import threading
from unittest.mock import MagicMock, patch

from govtx_sdk import _rate_limited_log
from govtx_sdk._rate_limited_log import rate_limited_log, reset_rate_limits


class TestRateLimitedLog:
    """Tests for the rate-limited logging implementation."""

    def test_repeated_message_is_suppressed(self):
        mock_logger = MagicMock()

        assert rate_limited_log("Still waiting", level="info", logger_instance=mock_logger)
        assert not rate_limited_log("Still waiting", level="info", logger_instance=mock_logger)

        mock_logger.info.assert_called_once_with("Still waiting")

    def test_level_and_message_form_the_key(self):
        mock_logger = MagicMock()

        rate_limited_log("Test message", level="warning", logger_instance=mock_logger)
        rate_limited_log("Test message", level="error", logger_instance=mock_logger)
        rate_limited_log("Different message", level="warning", logger_instance=mock_logger)

        mock_logger.error.assert_called_once_with("Test message")
        assert mock_logger.warning.call_count == 2

    def test_intervals_are_tracked_separately(self):
        mock_logger = MagicMock()

        rate_limited_log("msg", interval=60, logger_instance=mock_logger)
        rate_limited_log("msg", interval=5, logger_instance=mock_logger)

        assert mock_logger.warning.call_count == 2
        assert set(_rate_limited_log._log_caches) == {60, 5}

    def test_message_logged_again_after_expiry(self):
        mock_logger = MagicMock()
        clock = [1000.0]

        with patch("govtx_sdk._rate_limited_log.TTLCache") as cache_cls:
            from cachetools import TTLCache
            cache_cls.side_effect = lambda maxsize, ttl: TTLCache(maxsize=maxsize, ttl=ttl, timer=lambda: clock[0])

            rate_limited_log("msg", interval=60, logger_instance=mock_logger)
            clock[0] += 30
            rate_limited_log("msg", interval=60, logger_instance=mock_logger)
            clock[0] += 31
            rate_limited_log("msg", interval=60, logger_instance=mock_logger)

        assert mock_logger.warning.call_count == 2

    def test_unknown_level_falls_back_to_warning(self):
        mock_logger = MagicMock(spec=["warning"])

        rate_limited_log("msg", level="verbose", logger_instance=mock_logger)

        mock_logger.warning.assert_called_once_with("msg")

    def test_reset_rate_limits(self):
        mock_logger = MagicMock()

        rate_limited_log("msg", logger_instance=mock_logger)
        reset_rate_limits()
        rate_limited_log("msg", logger_instance=mock_logger)

        assert mock_logger.warning.call_count == 2

    def test_concurrent_callers_log_once(self):
        mock_logger = MagicMock()
        results = []

        def worker():
            results.append(rate_limited_log("shared", logger_instance=mock_logger))

        threads = [threading.Thread(target=worker) for _ in range(20)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert results.count(True) == 1
        mock_logger.warning.assert_called_once_with("shared")
