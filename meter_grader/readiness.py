"""
Readiness polling for the containers started by Docker Compose.

The poller is a three-state machine (POLLING, READY, EXHAUSTED). Each tick
waits a fixed interval, runs the status command once and parses its output.
"""

import time
from enum import Enum
from typing import Callable

from .config import MAX_POLL_ATTEMPTS, POLL_INTERVAL_SECONDS, SETTLE_DELAY_SECONDS
from .errors import ReadinessTimeout
from .models import ReadinessSnapshot
from .output_parser import extract_readiness


class PollState(Enum):
    POLLING = "polling"
    READY = "ready"
    EXHAUSTED = "exhausted"


class ReadinessPoller:
    """
    Waits until every container reports a running or healthy state.

    The status check and the sleep function are injected so the machine can
    be driven without a Docker daemon or real delays.
    """

    def __init__(
        self,
        status_check: Callable[[], str],
        max_attempts: int = MAX_POLL_ATTEMPTS,
        poll_interval_seconds: float = POLL_INTERVAL_SECONDS,
        settle_delay_seconds: float = SETTLE_DELAY_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
        verbose: bool = False,
    ) -> None:
        """
        Initialize the poller.

        Args:
            status_check: Returns the raw output of the status listing command.
            max_attempts: Not-ready polls tolerated before giving up.
            poll_interval_seconds: Delay before each poll.
            settle_delay_seconds: Grace period after readiness is first seen.
            sleep: Function used to wait.
            verbose: Print unhealthy containers on every tick.
        """
        self.status_check = status_check
        self.max_attempts = max_attempts
        self.poll_interval_seconds = poll_interval_seconds
        self.settle_delay_seconds = settle_delay_seconds
        self.sleep = sleep
        self.verbose = verbose

        self.state = PollState.POLLING
        self.attempts = 0
        self.polls = 0

    def tick(self) -> ReadinessSnapshot:
        """
        Run a single poll and advance the state machine.

        Returns:
            The snapshot observed on this tick.

        Raises:
            RuntimeError: If the poller already reached a terminal state.
        """
        if self.state is not PollState.POLLING:
            raise RuntimeError(f"Poller is already {self.state.value}")

        self.sleep(self.poll_interval_seconds)
        snapshot = extract_readiness(self.status_check())
        self.polls += 1

        if snapshot.all_healthy:
            self.state = PollState.READY
            return snapshot

        self.attempts += 1
        if self.attempts > self.max_attempts:
            self.state = PollState.EXHAUSTED
        elif self.verbose:
            pending = ", ".join(s.name or "?" for s in snapshot.unhealthy_services) or "no containers listed"
            print(f"    Not ready: {pending}")

        return snapshot

    def wait_until_ready(self) -> ReadinessSnapshot:
        """
        Poll until ready, then wait the settle delay.

        Returns:
            The first snapshot in which every container was healthy.

        Raises:
            ReadinessTimeout: If the retry budget runs out first.
        """
        while True:
            print(f"  Waiting for containers (poll {self.polls + 1})...")
            snapshot = self.tick()

            if self.state is PollState.READY:
                print(f"  {len(snapshot.services)} container(s) up and healthy")
                print(f"  Waiting {self.settle_delay_seconds:g} seconds for services to settle...")
                self.sleep(self.settle_delay_seconds)
                return snapshot

            if self.state is PollState.EXHAUSTED:
                raise ReadinessTimeout(self.attempts)
