"""Update actions that can be applied to an existing alert.

Each action is its own model carrying the HTTP method, the endpoint path and
the companion fields it requires. ``AlertAction`` is the discriminated union
of all of them, keyed on ``kind``.
"""
from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Annotated, Any, ClassVar, Literal, Optional, Union

from pydantic import Field, TypeAdapter, field_validator, model_validator

from .alert import AlertIdentifier, CommaList, Details, RequestModel

SNOOZE_DATE_FORMAT = "%Y-%m-%d %H:%M"


class UpdateTarget(AlertIdentifier):
    """The alert an action applies to, plus the audit fields every action accepts."""

    user: Optional[str] = None
    note: Optional[str] = None
    source: Optional[str] = None

    @model_validator(mode="after")
    def _exactly_one_identifier(self) -> "UpdateTarget":
        if len(self.supplied_identifiers()) != 1:
            raise ValueError("exactly one of id, alias or tiny_id is required")
        return self

    def request_fields(self) -> dict[str, Any]:
        fields = self.supplied_identifiers()
        fields.update(self.wire_fields(exclude={"id", "alias", "tiny_id"}))
        return fields


class BaseAction(RequestModel):
    method: ClassVar[str] = "POST"
    path: ClassVar[str]

    def payload(self) -> dict[str, Any]:
        """Action-specific fields, keyed by their API names."""

        return self.wire_fields(exclude={"kind"})

    def files(self) -> dict[str, tuple[str, bytes]] | None:
        return None


class Acknowledge(BaseAction):
    path: ClassVar[str] = "alert/acknowledge"
    kind: Literal["acknowledge"] = "acknowledge"


class TakeOwnership(BaseAction):
    path: ClassVar[str] = "alert/takeOwnership"
    kind: Literal["take_ownership"] = "take_ownership"


class AddNote(BaseAction):
    path: ClassVar[str] = "alert/note"
    kind: Literal["add_note"] = "add_note"
    note: str = Field(..., min_length=1)


class Snooze(BaseAction):
    path: ClassVar[str] = "alert/snooze"
    kind: Literal["snooze"] = "snooze"
    end_date: str = Field(..., min_length=1)
    timezone: Optional[str] = None

    @field_validator("end_date", mode="before")
    @classmethod
    def _format_end_date(cls, value: Any) -> Any:
        if isinstance(value, datetime):
            return value.strftime(SNOOZE_DATE_FORMAT)
        return value


class Renotify(BaseAction):
    path: ClassVar[str] = "alert/renotify"
    kind: Literal["renotify"] = "renotify"
    recipients: Optional[CommaList] = None


class Assign(BaseAction):
    path: ClassVar[str] = "alert/assign"
    kind: Literal["assign"] = "assign"
    owner: str = Field(..., min_length=1)


class AddTeam(BaseAction):
    path: ClassVar[str] = "alert/team"
    kind: Literal["add_team"] = "add_team"
    team: str = Field(..., min_length=1)


class AddRecipient(BaseAction):
    path: ClassVar[str] = "alert/recipient"
    kind: Literal["add_recipient"] = "add_recipient"
    recipient: str = Field(..., min_length=1)


class AddTags(BaseAction):
    path: ClassVar[str] = "alert/tags"
    kind: Literal["add_tags"] = "add_tags"
    tags: CommaList = Field(..., min_length=1)


class RemoveTags(BaseAction):
    method: ClassVar[str] = "DELETE"
    path: ClassVar[str] = "alert/tags"
    kind: Literal["remove_tags"] = "remove_tags"
    tags: CommaList = Field(..., min_length=1)


class AddDetails(BaseAction):
    path: ClassVar[str] = "alert/details"
    kind: Literal["add_details"] = "add_details"
    details: Details = Field(..., min_length=1)


class RemoveDetails(BaseAction):
    method: ClassVar[str] = "DELETE"
    path: ClassVar[str] = "alert/details"
    kind: Literal["remove_details"] = "remove_details"
    keys: CommaList = Field(..., min_length=1)


class ExecuteAction(BaseAction):
    path: ClassVar[str] = "alert/executeAction"
    kind: Literal["execute_action"] = "execute_action"
    action: str = Field(..., min_length=1)


class AttachFile(BaseAction):
    """Upload a file to the alert, either from disk or from in-memory bytes."""

    path: ClassVar[str] = "alert/attach"
    kind: Literal["attach_file"] = "attach_file"
    attachment: Optional[Path] = None
    content: Optional[bytes] = None
    filename: Optional[str] = None
    index_file: Optional[str] = None

    @model_validator(mode="after")
    def _check_source(self) -> "AttachFile":
        if (self.attachment is None) == (self.content is None):
            raise ValueError("exactly one of attachment or content is required")
        if self.attachment is not None and not self.attachment.is_file():
            raise ValueError(f"attachment {self.attachment} is not a readable file")
        if self.content is not None and not self.filename:
            raise ValueError("filename is required when sending raw content")
        return self

    def payload(self) -> dict[str, Any]:
        return self.wire_fields(exclude={"kind", "attachment", "content", "filename"})

    def files(self) -> dict[str, tuple[str, bytes]]:
        if self.attachment is not None:
            name = self.filename or self.attachment.name
            return {"attachment": (name, self.attachment.read_bytes())}
        return {"attachment": (self.filename, self.content)}


AlertAction = Annotated[
    Union[
        Acknowledge,
        TakeOwnership,
        AddNote,
        Snooze,
        Renotify,
        Assign,
        AddTeam,
        AddRecipient,
        AddTags,
        RemoveTags,
        AddDetails,
        RemoveDetails,
        ExecuteAction,
        AttachFile,
    ],
    Field(discriminator="kind"),
]

_ACTION_ADAPTER: TypeAdapter[Any] = TypeAdapter(AlertAction)


def build_action(kind: str, **fields: Any) -> BaseAction:
    """Build the action named ``kind`` from keyword fields.

    Raises ``pydantic.ValidationError`` for unknown kinds or missing companion
    fields.
    """

    return _ACTION_ADAPTER.validate_python({"kind": kind, **fields})


__all__ = [
    "SNOOZE_DATE_FORMAT",
    "UpdateTarget",
    "BaseAction",
    "Acknowledge",
    "TakeOwnership",
    "AddNote",
    "Snooze",
    "Renotify",
    "Assign",
    "AddTeam",
    "AddRecipient",
    "AddTags",
    "RemoveTags",
    "AddDetails",
    "RemoveDetails",
    "ExecuteAction",
    "AttachFile",
    "AlertAction",
    "build_action",
]
