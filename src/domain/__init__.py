"""Domain layer: errors and schemas."""

from .errors import BuilderError, ErrorCodes
from .schemas import (
    Attachment,
    GeneratedApplication,
    GeneratedFile,
    GenerationRequest,
    Project,
    RunLog,
    StackSelection,
    User,
)

__all__ = [
    "BuilderError",
    "ErrorCodes",
    "GeneratedFile",
    "GeneratedApplication",
    "GenerationRequest",
    "StackSelection",
    "Attachment",
    "User",
    "Project",
    "RunLog",
]
