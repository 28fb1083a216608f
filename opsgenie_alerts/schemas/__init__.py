"""Schema package exports."""
from .actions import (
    Acknowledge,
    AddDetails,
    AddNote,
    AddRecipient,
    AddTags,
    AddTeam,
    AlertAction,
    Assign,
    AttachFile,
    BaseAction,
    ExecuteAction,
    RemoveDetails,
    RemoveTags,
    Renotify,
    Snooze,
    TakeOwnership,
    UpdateTarget,
    build_action,
)
from .alert import (
    COUNT_DEFAULT_LIMIT,
    LIST_DEFAULT_LIMIT,
    MAX_MESSAGE_LENGTH,
    AlertClose,
    AlertCreate,
    AlertIdentifier,
    AlertListQuery,
    AlertQuery,
    AlertQueryMode,
)

__all__ = [
    "Acknowledge",
    "AddDetails",
    "AddNote",
    "AddRecipient",
    "AddTags",
    "AddTeam",
    "AlertAction",
    "Assign",
    "AttachFile",
    "BaseAction",
    "ExecuteAction",
    "RemoveDetails",
    "RemoveTags",
    "Renotify",
    "Snooze",
    "TakeOwnership",
    "UpdateTarget",
    "build_action",
    "COUNT_DEFAULT_LIMIT",
    "LIST_DEFAULT_LIMIT",
    "MAX_MESSAGE_LENGTH",
    "AlertClose",
    "AlertCreate",
    "AlertIdentifier",
    "AlertListQuery",
    "AlertQuery",
    "AlertQueryMode",
]
