"""Base agent class."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

logger = logging.getLogger(__name__)

_HANDLER_PREFIX = "_handle_"


class BaseAgent(ABC):
    """Abstract base class for the rotation agents.

    Each public operation has a ``_handle_<action>`` twin taking a payload
    dict, so callers can drive any agent through :meth:`process`.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Agent identifier."""

    @property
    def actions(self) -> list[str]:
        """Actions accepted by :meth:`process`."""
        return sorted(
            attr[len(_HANDLER_PREFIX):] for attr in dir(self) if attr.startswith(_HANDLER_PREFIX)
        )

    def process(self, action: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Dispatch ``action`` to its handler.

        Raises:
            ValueError: If action is not supported.
        """
        handler = getattr(self, f"{_HANDLER_PREFIX}{action}", None)
        if handler is None:
            available = ", ".join(self.actions)
            raise ValueError(
                f"Agent '{self.name}' does not support action '{action}'. Available: {available}"
            )
        logger.debug("%s: %s", self.name, action)
        return handler(payload)
