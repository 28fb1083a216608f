"""Alert request schemas."""
from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Annotated, Dict, List, Literal, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

MAX_MESSAGE_LENGTH = 130
MAX_DESCRIPTION_LENGTH = 15000
MAX_TEAMS = 50
MAX_RECIPIENTS = 50

LIST_DEFAULT_LIMIT = 20
COUNT_DEFAULT_LIMIT = 100000
PAGED_DEFAULT_LIMIT = 100


def _split_csv(value: Any) -> Any:
    """Accept ``"a,b"`` as well as ``["a", "b"]`` for list-valued fields."""

    if value is None:
        return None
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    return value


def _stringify_details(value: Any) -> Any:
    if isinstance(value, dict):
        # Keys without a value are not sent.
        return {str(key): str(item) for key, item in value.items() if item is not None}
    return value


def to_epoch_nanos(value: Any) -> Any:
    """Convert datetimes to the epoch-nanosecond integers the list endpoint expects."""

    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp() * 1_000_000) * 1000
    return value


CommaList = Annotated[List[str], BeforeValidator(_split_csv)]
Details = Annotated[Dict[str, str], BeforeValidator(_stringify_details)]
Timestamp = Annotated[int, BeforeValidator(to_epoch_nanos)]

AlertStatus = Literal["open", "acked", "unacked", "seen", "notseen", "closed"]
SortOrder = Literal["asc", "desc"]


class RequestModel(BaseModel):
    """Base for every request model: camelCase on the wire, unknown fields rejected."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    def wire_fields(self, *, exclude: set[str] | None = None) -> dict[str, Any]:
        """Dump the supplied fields under their API names, dropping unset ones."""

        return self.model_dump(by_alias=True, exclude_none=True, exclude=exclude)


class AlertCreate(RequestModel):
    message: str = Field(..., min_length=1, max_length=MAX_MESSAGE_LENGTH)
    teams: Optional[CommaList] = None
    alias: Optional[str] = None
    description: Optional[str] = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)
    recipients: Optional[CommaList] = None
    actions: Optional[CommaList] = None
    source: Optional[str] = None
    tags: Optional[CommaList] = None
    details: Optional[Details] = None
    entity: Optional[str] = None
    user: Optional[str] = None
    note: Optional[str] = None

    @field_validator("teams")
    @classmethod
    def _limit_teams(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        if value is not None and len(value) > MAX_TEAMS:
            raise ValueError(f"at most {MAX_TEAMS} teams are allowed")
        return value

    @field_validator("recipients")
    @classmethod
    def _limit_recipients(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        if value is not None and len(value) > MAX_RECIPIENTS:
            raise ValueError(f"at most {MAX_RECIPIENTS} recipients are allowed")
        return value


class AlertIdentifier(RequestModel):
    id: Optional[str] = None
    alias: Optional[str] = None
    tiny_id: Optional[str] = None

    def supplied_identifiers(self) -> dict[str, str]:
        dumped = self.model_dump(by_alias=True, include={"id", "alias", "tiny_id"})
        return {key: value for key, value in dumped.items() if value}


class AlertQueryMode(str, Enum):
    DETAIL = "alert"
    NOTES = "alert/note"
    LOGS = "alert/log"
    RECIPIENTS = "alert/recipient"

    @property
    def paged(self) -> bool:
        return self in (AlertQueryMode.NOTES, AlertQueryMode.LOGS)


class AlertQuery(AlertIdentifier):
    list_notes: bool = False
    list_logs: bool = False
    list_recipients: bool = False
    limit: int = Field(default=PAGED_DEFAULT_LIMIT, ge=1)
    order: SortOrder = "desc"
    last_key: Optional[str] = None

    @model_validator(mode="after")
    def _check_identifier_and_mode(self) -> "AlertQuery":
        if not self.supplied_identifiers():
            raise ValueError("one of id, alias or tiny_id is required")
        switches = [self.list_notes, self.list_logs, self.list_recipients]
        if sum(switches) > 1:
            raise ValueError("only one of list_notes, list_logs or list_recipients may be set")
        return self

    @property
    def mode(self) -> AlertQueryMode:
        if self.list_notes:
            return AlertQueryMode.NOTES
        if self.list_logs:
            return AlertQueryMode.LOGS
        if self.list_recipients:
            return AlertQueryMode.RECIPIENTS
        return AlertQueryMode.DETAIL

    def query_params(self) -> dict[str, Any]:
        params: dict[str, Any] = self.supplied_identifiers()
        if self.mode.paged:
            params["limit"] = self.limit
            params["order"] = self.order
            if self.last_key:
                params["lastKey"] = self.last_key
        return params


class AlertListQuery(RequestModel):
    created_after: Optional[Timestamp] = None
    created_before: Optional[Timestamp] = None
    updated_after: Optional[Timestamp] = None
    updated_before: Optional[Timestamp] = None
    status: Optional[AlertStatus] = None
    teams: Optional[CommaList] = None
    tags: Optional[CommaList] = None
    tags_operator: Optional[Literal["and", "or"]] = "and"
    sort_by: Optional[Literal["createdAt", "updatedAt"]] = "createdAt"
    order: Optional[SortOrder] = "asc"
    limit: Optional[int] = Field(default=None, ge=1)
    count: bool = False

    @field_validator("status", "tags_operator", "sort_by", "order", mode="before")
    @classmethod
    def _empty_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def path(self) -> str:
        return "alert/count" if self.count else "alert"

    @property
    def effective_limit(self) -> int:
        if self.limit is not None:
            return self.limit
        return COUNT_DEFAULT_LIMIT if self.count else LIST_DEFAULT_LIMIT

    def query_params(self) -> dict[str, Any]:
        exclude = {"count", "limit"}
        if self.count:
            # The count endpoint does not filter by team.
            exclude.add("teams")
        params = {key: value for key, value in self.wire_fields(exclude=exclude).items() if value != []}
        params["limit"] = self.effective_limit
        return params


class AlertClose(RequestModel):
    id: Optional[str] = None
    alias: Optional[str] = None
    user: Optional[str] = None
    note: Optional[str] = None
    source: Optional[str] = None
    delete: bool = False

    @model_validator(mode="after")
    def _exactly_one_identifier(self) -> "AlertClose":
        if bool(self.id) == bool(self.alias):
            raise ValueError("exactly one of id or alias is required")
        return self

    @property
    def method(self) -> str:
        return "DELETE" if self.delete else "POST"

    @property
    def path(self) -> str:
        return "alert" if self.delete else "alert/close"

    def request_fields(self) -> dict[str, Any]:
        exclude = {"delete"}
        if self.delete:
            exclude.add("note")
        return self.wire_fields(exclude=exclude)


__all__ = [
    "MAX_MESSAGE_LENGTH",
    "MAX_DESCRIPTION_LENGTH",
    "MAX_TEAMS",
    "MAX_RECIPIENTS",
    "LIST_DEFAULT_LIMIT",
    "COUNT_DEFAULT_LIMIT",
    "PAGED_DEFAULT_LIMIT",
    "CommaList",
    "Details",
    "AlertStatus",
    "RequestModel",
    "AlertCreate",
    "AlertIdentifier",
    "AlertQueryMode",
    "AlertQuery",
    "AlertListQuery",
    "AlertClose",
    "to_epoch_nanos",
]
