# Copyright (c) Syntropy Systems
"""Exceptions raised by canaryctl."""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class CanaryctlError(Exception):
    """Base class for canaryctl errors."""


class AssemblyError(CanaryctlError):
    """The ad-hoc request could not be assembled."""

    reason: str

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class ConfigReadError(AssemblyError):
    """The ad-hoc request configuration could not be read or parsed."""


class UnknownServiceType(CanaryctlError):
    """No metric query schema is registered for a service type."""

    service_type: str

    def __init__(self, service_type: str, known: Iterable[str] = ()) -> None:
        known_list = ", ".join(sorted(known)) or "none"
        msg = (
            f"No metric set query config is registered for service type "
            f"'{service_type}' (known: {known_list})"
        )
        super().__init__(msg)
        self.service_type = service_type


class InvalidSubtypeConfiguration(CanaryctlError):
    """A metric query schema variant does not declare a usable type key."""


class CanaryClientError(CanaryctlError):
    """Error from canary service communication."""


class SubmissionError(CanaryClientError):
    """The ad-hoc execution request could not be submitted."""


class PollTransportError(CanaryClientError):
    """An execution status request failed."""
