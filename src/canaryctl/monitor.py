# Copyright (c) Syntropy Systems
"""Submit an ad-hoc execution and wait for it to finish."""
from __future__ import annotations

import logging
import time
from enum import Enum
from typing import TYPE_CHECKING

from canaryctl.errors import PollTransportError
from canaryctl.models.api import CanaryExecutionStatusResponse

if TYPE_CHECKING:
    from collections.abc import Callable

    from canaryctl.client import CanaryClient
    from canaryctl.models.canary import CanaryAdhocExecutionRequest

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 1.0
DEFAULT_WAIT_TIMEOUT = 300
DEFAULT_PROGRESS_INTERVAL = 5


class MonitorState(str, Enum):
    """Lifecycle of a monitored execution."""

    SUBMITTING = "submitting"
    POLLING = "polling"
    COMPLETED = "completed"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


class ExecutionMonitor:
    """Submits an execution request and polls it to a terminal status.

    Polling is bounded by ``wait_timeout`` ticks. A tick is one status request
    followed, when the execution is not complete, by a ``poll_interval``
    sleep. Transport failures and running out of ticks both end the loop with
    a synthesized incomplete status instead of raising.
    """

    client: CanaryClient
    poll_interval: float
    wait_timeout: int
    progress_interval: int
    state: MonitorState
    execution_id: str | None
    status: CanaryExecutionStatusResponse | None

    def __init__(  # noqa: PLR0913
        self,
        client: CanaryClient,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        wait_timeout: int = DEFAULT_WAIT_TIMEOUT,
        progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
        sleep: Callable[[float], None] = time.sleep,
        on_progress: Callable[[], None] | None = None,
    ) -> None:
        """Initialize the monitor.

        Args:
            client: Canary service client
            poll_interval: Seconds to sleep between status requests
            wait_timeout: Maximum number of status requests
            progress_interval: Ticks between ``on_progress`` calls
            sleep: Sleep function (replaceable in tests)
            on_progress: Called periodically while waiting, for user feedback

        """
        self.client = client
        self.poll_interval = poll_interval
        self.wait_timeout = wait_timeout
        self.progress_interval = progress_interval
        self._sleep = sleep
        self._on_progress = on_progress
        self.state = MonitorState.SUBMITTING
        self.execution_id = None
        self.status = None

    def submit(
        self,
        request: CanaryAdhocExecutionRequest,
        metrics_account: str | None = None,
        storage_account: str | None = None,
    ) -> str:
        """Submit the request once and return the canary execution ID.

        Raises:
            SubmissionError: If the request could not be submitted

        """
        self.state = MonitorState.SUBMITTING
        response = self.client.start_execution(
            request,
            metrics_account=metrics_account,
            storage_account=storage_account,
        )
        self.execution_id = response.canary_execution_id
        logger.info("Started canary execution %s", self.execution_id)
        return self.execution_id

    def await_completion(
        self,
        execution_id: str,
        storage_account: str | None = None,
    ) -> CanaryExecutionStatusResponse:
        """Poll an execution until it completes, fails or times out.

        Args:
            execution_id: Canary execution ID
            storage_account: Storage account holding the results

        Returns:
            The final status. ``complete`` is false when the execution could
            not be tracked or did not finish in time; ``status`` then holds
            the reason.

        """
        self.execution_id = execution_id
        self.state = MonitorState.POLLING
        countdown = self.wait_timeout
        progress_timer = self.progress_interval

        while countdown > 0:
            try:
                self.status = self.client.get_execution_status(
                    execution_id,
                    storage_account=storage_account,
                )
            except PollTransportError as e:
                logger.warning("Polling execution %s failed: %s", execution_id, e)
                self.status = CanaryExecutionStatusResponse.failed(str(e))
                self.state = MonitorState.FAILED
                return self.status

            if self.status.complete:
                logger.info("Canary execution %s completed", execution_id)
                self.state = MonitorState.COMPLETED
                return self.status

            self._sleep(self.poll_interval)
            progress_timer -= 1
            if progress_timer <= 0:
                if self._on_progress is not None:
                    self._on_progress()
                progress_timer = self.progress_interval
            countdown -= 1

        logger.warning(
            "Gave up waiting for execution %s after %d polls",
            execution_id,
            self.wait_timeout,
        )
        self.status = CanaryExecutionStatusResponse.timed_out()
        self.state = MonitorState.TIMED_OUT
        return self.status

    def run(
        self,
        request: CanaryAdhocExecutionRequest,
        metrics_account: str | None = None,
        storage_account: str | None = None,
    ) -> CanaryExecutionStatusResponse:
        """Submit a request and wait for its terminal status.

        Convenience method that combines submit() and await_completion().
        """
        execution_id = self.submit(
            request,
            metrics_account=metrics_account,
            storage_account=storage_account,
        )
        return self.await_completion(execution_id, storage_account=storage_account)
