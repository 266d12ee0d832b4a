# htmx_sse/services/notifier.py
import logging
import re
from typing import Optional

from jinja2 import Environment

from htmx_sse.core.models import (
    Channel,
    ClientId,
    Completed,
    Progress,
    ProgressEvent,
)
from htmx_sse.core.registry import ChannelRegistry
from htmx_sse.templating import templates

logger = logging.getLogger("htmx_sse.notifier")

_LINE_BREAKS = re.compile(r"[\r\n]+")


def flatten(fragment: str) -> str:
    """SSE treats every line as its own ``data:`` field; the page expects one swap per update."""
    return _LINE_BREAKS.sub("", fragment)


class FragmentRenderer:
    PROGRESS_TEMPLATE = "fragments/progress.html"
    COMPLETED_TEMPLATE = "fragments/completed.html"

    def __init__(self, env: Optional[Environment] = None):
        self.env = env or templates.env

    def render(self, event: ProgressEvent) -> str:
        if isinstance(event, Progress):
            return self.env.get_template(self.PROGRESS_TEMPLATE).render(value=event.value)
        if isinstance(event, Completed):
            return self.env.get_template(self.COMPLETED_TEMPLATE).render()
        raise TypeError(f"unsupported event: {event!r}")


class Notifier:
    """Progress listener that broadcasts one flattened fragment per event to a client's channels."""

    def __init__(self, client_id: ClientId, registry: ChannelRegistry, renderer: FragmentRenderer):
        self.client_id = client_id
        self._registry = registry
        self._renderer = renderer

    def on_progress(self, value: int) -> int:
        return self.notify(Progress(value))

    def on_completion(self) -> int:
        return self.notify(Completed())

    def notify(self, event: ProgressEvent) -> int:
        """Returns how many channels accepted the fragment."""
        fragment = flatten(self._renderer.render(event))
        delivered = 0
        for channel in self._registry.channels_for(self.client_id):
            try:
                channel.send(fragment)
            except Exception:
                logger.warning(
                    "Dropping channel for user %s after failed write", self.client_id, exc_info=True
                )
                self._registry.discard(self.client_id, channel)
            else:
                delivered += 1
        return delivered


class SseRepository:
    def __init__(self, registry: ChannelRegistry, renderer: Optional[FragmentRenderer] = None):
        self.registry = registry
        self.renderer = renderer or FragmentRenderer()

    def subscribe(self, client_id: ClientId, channel: Channel) -> None:
        self.registry.register(client_id, channel)
        logger.info(
            "Subscribed channel for user %s (%d open)",
            client_id, len(self.registry.channels_for(client_id)),
        )

    def create_progress_listener(self, client_id: ClientId) -> Notifier:
        return Notifier(client_id, self.registry, self.renderer)
