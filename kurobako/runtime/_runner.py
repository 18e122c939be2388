"""
Shared read-dispatch-reply loop for the problem and solver runners.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, Mapping, Optional, TextIO, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

from kurobako.core.errors import ProtocolError
from kurobako.runtime.channel import DEFAULT_MAX_LINE_LENGTH, LineChannel

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseRunner(ABC):
    """
    Owns the channel and the handler table of one protocol role.

    Subclasses map each inbound ``type`` to a payload model and the name of
    the method that handles it.
    """

    handlers: ClassVar[Mapping[str, Tuple[Type[BaseModel], str]]] = {}

    def __init__(
        self,
        *,
        input_stream: Optional[TextIO] = None,
        output_stream: Optional[TextIO] = None,
        max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
        channel: Optional[LineChannel] = None,
    ):
        self._channel = channel or LineChannel(input_stream, output_stream, max_line_length)

    @abstractmethod
    def _reset(self) -> None:
        """Clear the registries before a run."""
        pass

    @abstractmethod
    def _cast_spec(self) -> None:
        """Send the unsolicited specification message."""
        pass

    def run(self) -> None:
        """
        Serve messages until end of input.

        Raises:
            ProtocolError: on any malformed or unexpected message.
            Exception: whatever the wrapped problem or solver raised.
        """
        self._reset()
        self._cast_spec()

        while self.run_once():
            pass

        logger.info("Input closed; %s finished", type(self).__name__)

    def run_once(self) -> bool:
        """
        Handle a single inbound message.

        Returns:
            False at end of input, True otherwise.
        """
        message = self._channel.read_message()
        if message is None:
            return False

        message_type = message.get("type")
        entry = self.handlers.get(message_type) if isinstance(message_type, str) else None
        if entry is None:
            raise ProtocolError(f"unknown message type: {message_type!r}")

        model_cls, method_name = entry
        try:
            payload = model_cls.model_validate(message)
        except ValidationError as exc:
            raise ProtocolError(f"invalid {message_type} message: {exc}") from exc

        logger.debug("Received %s", message_type)
        getattr(self, method_name)(payload)
        return True

    def _send(self, message: Dict[str, Any]) -> None:
        self._channel.write_message(message)

    @staticmethod
    def _lookup(registry: Dict[int, T], key: int, what: str) -> T:
        try:
            return registry[key]
        except KeyError:
            raise ProtocolError(f"unknown {what}: {key}") from None
