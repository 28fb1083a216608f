"""Client for the Opsgenie v1 alert API."""
from opsgenie_alerts.config import Settings, get_settings
from opsgenie_alerts.core.logging import get_logger, setup_logging
from opsgenie_alerts.schemas import (
    Acknowledge,
    AddDetails,
    AddNote,
    AddRecipient,
    AddTags,
    AddTeam,
    Assign,
    AttachFile,
    ExecuteAction,
    RemoveDetails,
    RemoveTags,
    Renotify,
    Snooze,
    TakeOwnership,
)
from opsgenie_alerts.services.client import AlertClient
from opsgenie_alerts.services.request_builder import RequestDescriptor, build_request
from opsgenie_alerts.utils.errors import AlertAPIError, AlertValidationError, OpsgenieError

__version__ = "0.1.0"

__all__ = [
    "AlertClient",
    "RequestDescriptor",
    "build_request",
    "Settings",
    "get_settings",
    "setup_logging",
    "get_logger",
    "OpsgenieError",
    "AlertValidationError",
    "AlertAPIError",
    "Acknowledge",
    "AddDetails",
    "AddNote",
    "AddRecipient",
    "AddTags",
    "AddTeam",
    "Assign",
    "AttachFile",
    "ExecuteAction",
    "RemoveDetails",
    "RemoveTags",
    "Renotify",
    "Snooze",
    "TakeOwnership",
]
