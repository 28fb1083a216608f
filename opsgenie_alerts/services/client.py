"""Opsgenie alert API wrapper."""
from __future__ import annotations

from types import TracebackType
from typing import Any, Callable, TypeVar

import httpx
from pydantic import ValidationError

from opsgenie_alerts.config import Settings, get_settings
from opsgenie_alerts.core.logging import get_logger
from opsgenie_alerts.schemas.actions import BaseAction, UpdateTarget, build_action
from opsgenie_alerts.schemas.alert import AlertClose, AlertCreate, AlertListQuery, AlertQuery
from opsgenie_alerts.services.request_builder import RequestDescriptor, build_request
from opsgenie_alerts.utils.errors import AlertAPIError, AlertValidationError
from opsgenie_alerts.utils.masking import mask_request_data

logger = get_logger(__name__)

T = TypeVar("T")


def _validated(factory: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Run a schema constructor, turning pydantic errors into ``AlertValidationError``."""

    try:
        return factory(*args, **kwargs)
    except ValidationError as exc:
        raise AlertValidationError.from_pydantic(exc) from exc


class AlertClient:
    """Wrapper around the Opsgenie alert API.

    The client only holds the API key, the base URL and an ``httpx.Client``.
    Every operation validates its arguments, builds a ``RequestDescriptor``
    and returns the decoded JSON response untouched. Nothing is retried.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        timeout: float | httpx.Timeout | None = None,
        transport: httpx.BaseTransport | None = None,
        http_client: httpx.Client | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialise the client, falling back to settings for unset values."""

        if settings is None:
            settings = get_settings()
        self._api_key = api_key or settings.OPSGENIE_API_KEY
        base = base_url or settings.OPSGENIE_BASE_URL
        self.base_url = base if base.endswith("/") else f"{base}/"

        if http_client is not None:
            self._client = http_client
            self._owns_client = False
        else:
            self._client = httpx.Client(
                timeout=timeout if timeout is not None else settings.OPSGENIE_TIMEOUT_SECONDS,
                transport=transport,
            )
            self._owns_client = True

    @classmethod
    def from_env(cls) -> "AlertClient":
        """Instantiate a client using the cached settings."""

        return cls(settings=get_settings())

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "AlertClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Request plumbing
    # ------------------------------------------------------------------

    def _resolve_key(self, api_key: str | None) -> str:
        key = api_key or self._api_key
        if not key:
            raise AlertValidationError("An Opsgenie API key is required; pass api_key or set OPSGENIE_API_KEY.")
        return key

    def _request(
        self,
        method: str,
        path: str,
        api_key: str | None,
        fields: dict[str, Any],
        *,
        files: dict[str, tuple] | None = None,
    ) -> RequestDescriptor:
        return build_request(method, self.base_url, path, self._resolve_key(api_key), fields, files=files)

    def send(self, descriptor: RequestDescriptor) -> Any:
        """Send a built request and return the decoded JSON body.

        ``httpx`` transport errors propagate unchanged; error statuses and
        unreadable bodies raise ``AlertAPIError``.
        """

        logger.debug(
            "Sending Opsgenie request",
            extra={
                "method": descriptor.method,
                "path": descriptor.path,
                "params": mask_request_data(descriptor.params),
                "body": mask_request_data(descriptor.json or descriptor.data),
                "files": sorted(descriptor.files) if descriptor.files else None,
            },
        )
        response = self._client.request(
            descriptor.method,
            descriptor.url,
            params=descriptor.params,
            json=descriptor.json,
            data=descriptor.data,
            files=descriptor.files,
        )

        if response.is_error:
            error = AlertAPIError.from_response(response)
            logger.warning(
                "Opsgenie request failed",
                extra={
                    "method": descriptor.method,
                    "path": descriptor.path,
                    "status_code": response.status_code,
                    "error": error.message,
                },
            )
            raise error

        logger.info(
            "Opsgenie request completed",
            extra={"method": descriptor.method, "path": descriptor.path, "status_code": response.status_code},
        )
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise AlertAPIError.from_response(response, "Malformed JSON in Opsgenie response") from exc

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def create_alert(self, message: str, *, api_key: str | None = None, **attributes: Any) -> Any:
        """Create an alert.

        ``attributes`` are the optional alert fields: teams, alias,
        description, recipients, actions, source, tags, details, entity, user
        and note. Unset ones are left out of the body.
        """

        alert = _validated(AlertCreate, message=message, **attributes)
        descriptor = self._request("POST", "alert", api_key, alert.wire_fields())
        return self.send(descriptor)

    def get_alert(
        self,
        *,
        id: str | None = None,
        alias: str | None = None,
        tiny_id: str | None = None,
        list_notes: bool = False,
        list_logs: bool = False,
        list_recipients: bool = False,
        limit: int = 100,
        order: str = "desc",
        last_key: str | None = None,
        api_key: str | None = None,
    ) -> Any:
        """Fetch an alert, or its notes, logs or recipients."""

        query = _validated(
            AlertQuery,
            id=id,
            alias=alias,
            tiny_id=tiny_id,
            list_notes=list_notes,
            list_logs=list_logs,
            list_recipients=list_recipients,
            limit=limit,
            order=order,
            last_key=last_key,
        )
        descriptor = self._request("GET", query.mode.value, api_key, query.query_params())
        return self.send(descriptor)

    def list_alerts(self, *, count: bool = False, api_key: str | None = None, **filters: Any) -> Any:
        """List alerts, or count them when ``count`` is true.

        Accepted filters: created_after, created_before, updated_after,
        updated_before, status, teams, tags, tags_operator, sort_by, order
        and limit. ``teams`` is ignored when counting.
        """

        query = _validated(AlertListQuery, count=count, **filters)
        if count and query.teams:
            logger.debug("Dropping teams filter for alert count", extra={"teams": query.teams})
        descriptor = self._request("GET", query.path, api_key, query.query_params())
        return self.send(descriptor)

    def count_alerts(self, *, api_key: str | None = None, **filters: Any) -> Any:
        return self.list_alerts(count=True, api_key=api_key, **filters)

    def update_alert(
        self,
        action: BaseAction | str,
        /,
        *,
        id: str | None = None,
        alias: str | None = None,
        tiny_id: str | None = None,
        user: str | None = None,
        note: str | None = None,
        source: str | None = None,
        api_key: str | None = None,
        **action_fields: Any,
    ) -> Any:
        """Apply one action to an existing alert.

        ``action`` is either an action model (``Snooze(end_date=...)``) or its
        kind name (``"snooze"``) with the companion fields passed as keywords.
        """

        if isinstance(action, str):
            if action == "add_note" and note is not None:
                action_fields.setdefault("note", note)
            action = _validated(build_action, action, **action_fields)
        elif action_fields:
            raise AlertValidationError(
                f"Unexpected fields for {type(action).__name__}: {', '.join(sorted(action_fields))}"
            )

        target = _validated(UpdateTarget, id=id, alias=alias, tiny_id=tiny_id, user=user, note=note, source=source)
        fields = target.request_fields()
        fields.update(action.payload())
        descriptor = self._request(action.method, action.path, api_key, fields, files=action.files())
        return self.send(descriptor)

    def close_alert(
        self,
        *,
        id: str | None = None,
        alias: str | None = None,
        user: str | None = None,
        note: str | None = None,
        source: str | None = None,
        delete: bool = False,
        api_key: str | None = None,
    ) -> Any:
        """Close an alert, or delete it when ``delete`` is true."""

        request = _validated(AlertClose, id=id, alias=alias, user=user, note=note, source=source, delete=delete)
        if delete and note:
            logger.warning("Note is not sent when deleting an alert", extra={"alert_id": id, "alias": alias})
        descriptor = self._request(request.method, request.path, api_key, request.request_fields())
        return self.send(descriptor)

    def delete_alert(
        self,
        *,
        id: str | None = None,
        alias: str | None = None,
        user: str | None = None,
        source: str | None = None,
        api_key: str | None = None,
    ) -> Any:
        return self.close_alert(id=id, alias=alias, user=user, source=source, delete=True, api_key=api_key)


__all__ = ["AlertClient"]
