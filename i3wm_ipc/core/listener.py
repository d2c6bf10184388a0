"""i3 IPC event listener.

A listener owns its own connection: once subscribed, the socket only carries
events, which are pulled one envelope at a time.
"""

import json
import logging
from typing import Iterable, Union

from ..models.event import EventInfo, Subscription
from ..models.reply import SubscribeReply
from . import decoder
from .connection import IpcSocket
from .framing import Channel, MessageType, event_category, is_event, read_message


logger = logging.getLogger(__name__)


class EventIterator:
    """Endless, non-restartable stream of events from one subscribed channel.

    ``next()`` blocks until the next event arrives. A decode error is raised
    for the event that caused it only; since the whole envelope was consumed,
    pulling again continues with the following event. Channel errors
    (ReceiveError) mean the connection is gone.
    """

    def __init__(self, channel: Channel):
        self._channel = channel

    def __iter__(self) -> "EventIterator":
        return self

    def __next__(self) -> EventInfo:
        message_type, payload = read_message(self._channel)
        if not is_event(message_type):
            logger.warning(f"Expected an event, got message type {message_type}")

        category = event_category(message_type)
        return decoder.decode_event(category, payload)


class I3EventListener(IpcSocket):
    """Event connection to i3.

    Usage:
        listener = I3EventListener.connect(socket_path)
        listener.subscribe([Subscription.WINDOW])
        for event in listener.listen():
            ...
    """

    def __init__(self, channel: Channel):
        super().__init__(channel)
        self._subscribed = False

    def subscribe(self, events: Iterable[Union[Subscription, str]]) -> SubscribeReply:
        """Subscribe this connection to event categories.

        Args:
            events: Subscriptions (or their wire names)

        Returns:
            Reply with the success flag reported by i3

        Raises:
            ValueError: If an event name is not a known subscription
        """
        names = [Subscription(e).value for e in events]
        reply = self.request(MessageType.SUBSCRIBE, json.dumps(names))
        result = decoder.decode_subscribe(decoder.decode_json(reply))

        if result.success:
            logger.info(f"Subscribed to i3 events: {', '.join(names)}")
            self._subscribed = True
        else:
            logger.warning(f"i3 rejected subscription to: {', '.join(names)}")
        return result

    def listen(self) -> EventIterator:
        """Iterate over subscribed events forever.

        Raises:
            RuntimeError: If no subscription has succeeded yet
        """
        if not self._subscribed:
            raise RuntimeError("subscribe() must succeed before listen()")
        return EventIterator(self._channel)
