# htmx_sse/services/job_runner.py
import logging
import random
import time
from typing import Callable, Iterator, Optional

from htmx_sse.core.models import (
    PROGRESS_MAX,
    ClientId,
    Completed,
    Progress,
    ProgressEvent,
    ProgressListener,
)

logger = logging.getLogger("htmx_sse.job")


class JobRunner:
    """
    Simulated PDF generation.

    Progress starts at 0 and is reported immediately; after every pause it
    grows by ``rng.randrange(max_increment)`` (so 0 is a possible draw) and is
    clamped to 100. A 100 report is followed by exactly one completion.
    There is no cancellation: once started a job always runs to the end.
    """

    def __init__(
        self,
        interval: float = 0.5,
        max_increment: int = 10,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if interval < 0:
            raise ValueError("interval must be >= 0")
        if max_increment < 2:
            # randrange(1) only ever draws 0 and the job would never finish
            raise ValueError("max_increment must be >= 2")
        self.interval = interval
        self.max_increment = max_increment
        self._rng = rng or random.Random()
        self._sleep = sleep

    def _pause(self, client_id: ClientId) -> None:
        try:
            self._sleep(self.interval)
        except InterruptedError:
            logger.debug("Pause interrupted for user %s; continuing", client_id)

    def events(self, client_id: ClientId) -> Iterator[ProgressEvent]:
        logger.info("Generating PDF for user %s...", client_id)
        progress = 0
        yield Progress(progress)
        while progress < PROGRESS_MAX:
            self._pause(client_id)
            progress = min(progress + self._rng.randrange(self.max_increment), PROGRESS_MAX)
            logger.info("Progress for user %s: %s", client_id, progress)
            yield Progress(progress)
        logger.info("Done for user %s!", client_id)
        yield Completed()

    def run(
        self,
        client_id: ClientId,
        on_progress: Callable[[int], object],
        on_complete: Callable[[], object],
    ) -> None:
        for event in self.events(client_id):
            if isinstance(event, Completed):
                on_complete()
            else:
                on_progress(event.value)

    def run_listener(self, client_id: ClientId, listener: ProgressListener) -> None:
        self.run(client_id, listener.on_progress, listener.on_completion)
