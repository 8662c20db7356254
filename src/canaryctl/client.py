# Copyright (c) Syntropy Systems
"""HTTP client for the canary analysis service."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, TypeVar, cast

import httpx
from pydantic import BaseModel, ValidationError
from typing_extensions import Self

from canaryctl.errors import CanaryClientError, PollTransportError, SubmissionError
from canaryctl.models.api import (
    CanaryExecutionResponse,
    CanaryExecutionStatusResponse,
    ErrorResponse,
)

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType

    from canaryctl.models.canary import CanaryAdhocExecutionRequest

logger = logging.getLogger(__name__)

ResponseModel = TypeVar("ResponseModel", bound=BaseModel)

DEFAULT_SERVICE_URL = "http://localhost:8090/canary"


class _HttpxResponse(Protocol):
    def raise_for_status(self) -> _HttpxResponse:
        ...

    def json(self) -> object:
        ...


class _HttpxClient(Protocol):
    def request(
        self,
        *,
        method: str,
        url: str,
        json: Mapping[str, object] | None = None,
        params: Mapping[str, object] | None = None,
    ) -> _HttpxResponse:
        ...

    def close(self) -> None:
        ...


class CanaryClient:
    """HTTP client for starting and tracking ad-hoc canary executions."""

    service_url: str
    timeout: float
    _client: _HttpxClient

    def __init__(self, service_url: str = DEFAULT_SERVICE_URL, timeout: float = 30.0) -> None:
        """Initialize the client.

        Args:
            service_url: Canary endpoint of the analysis service
                (e.g., "http://localhost:8090/canary")
            timeout: Request timeout in seconds

        """
        self.service_url = service_url.rstrip("/")
        self.timeout = timeout
        client = cast("object", httpx.Client(timeout=timeout))
        self._client = cast("_HttpxClient", client)

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> Self:
        """Enter the client context and return self."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the client context and close the HTTP client."""
        self.close()

    def _request(
        self,
        method: str,
        url: str,
        json: Mapping[str, object] | None = None,
        params: Mapping[str, object] | None = None,
        *,
        response_model: type[ResponseModel],
    ) -> ResponseModel:
        """Make an HTTP request and validate the JSON response."""
        try:
            response = self._client.request(
                method=method,
                url=url,
                json=json,
                params=params,
            )
            _ = response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            # Try to get error detail from response
            try:
                detail = ErrorResponse.model_validate(e.response.json()).detail
            except (ValidationError, ValueError):
                detail = None
            msg = f"Server error: {detail or e}"
            raise CanaryClientError(msg) from e
        except httpx.RequestError as e:
            msg = f"Connection error: {e}"
            raise CanaryClientError(msg) from e
        except ValueError as e:
            msg = f"Invalid JSON response: {e}"
            raise CanaryClientError(msg) from e

        try:
            return response_model.model_validate(data)
        except ValidationError as e:
            msg = f"Unexpected response: {e}"
            raise CanaryClientError(msg) from e

    def status_url(self, execution_id: str) -> str:
        """URL of an execution's status endpoint."""
        return f"{self.service_url}/{execution_id}"

    def start_execution(
        self,
        request: CanaryAdhocExecutionRequest,
        metrics_account: str | None = None,
        storage_account: str | None = None,
    ) -> CanaryExecutionResponse:
        """Start an ad-hoc canary execution.

        Args:
            request: Assembled ad-hoc execution request
            metrics_account: Metrics account to query (service default if empty)
            storage_account: Storage account for results (service default if empty)

        Returns:
            Response holding the canary execution ID

        Raises:
            SubmissionError: If the request fails or the response has no ID

        """
        params: dict[str, str] = {}
        if metrics_account:
            params["metricsAccountName"] = metrics_account
        if storage_account:
            params["storageAccountName"] = storage_account

        logger.debug("POST %s params=%s", self.service_url, params)
        try:
            return self._request(
                "POST",
                self.service_url,
                json=request.to_wire(),
                params=params,
                response_model=CanaryExecutionResponse,
            )
        except CanaryClientError as e:
            msg = f"Unable to complete POST request, reason: {e}"
            raise SubmissionError(msg) from e

    def get_execution_status(
        self,
        execution_id: str,
        storage_account: str | None = None,
    ) -> CanaryExecutionStatusResponse:
        """Fetch the current status of an execution.

        Args:
            execution_id: Canary execution ID
            storage_account: Storage account holding the results

        Returns:
            Execution status snapshot

        Raises:
            PollTransportError: If the request fails or the response is invalid

        """
        params: dict[str, str] = {}
        if storage_account:
            params["storageAccountName"] = storage_account
        params["canaryExecutionId"] = execution_id

        try:
            return self._request(
                "GET",
                self.status_url(execution_id),
                params=params,
                response_model=CanaryExecutionStatusResponse,
            )
        except CanaryClientError as e:
            raise PollTransportError(str(e)) from e
