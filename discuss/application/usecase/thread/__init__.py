"""Thread use cases."""

from .create_thread import CreateThreadRequest, CreateThreadResponse, CreateThreadUseCase
from .delete_thread import DeleteThreadRequest, DeleteThreadUseCase
from .get_thread import GetThreadRequest, GetThreadResponse, GetThreadUseCase
from .list_threads import ListThreadsRequest, ListThreadsResponse, ListThreadsUseCase
from .moderate_thread import (
    ModerateThreadRequest,
    ToggleLockResponse,
    ToggleLockUseCase,
    TogglePinResponse,
    TogglePinUseCase,
)
from .update_thread import UpdateThreadRequest, UpdateThreadResponse, UpdateThreadUseCase

__all__ = [
    "CreateThreadRequest",
    "CreateThreadResponse",
    "CreateThreadUseCase",
    "DeleteThreadRequest",
    "DeleteThreadUseCase",
    "GetThreadRequest",
    "GetThreadResponse",
    "GetThreadUseCase",
    "ListThreadsRequest",
    "ListThreadsResponse",
    "ListThreadsUseCase",
    "ModerateThreadRequest",
    "ToggleLockResponse",
    "ToggleLockUseCase",
    "TogglePinResponse",
    "TogglePinUseCase",
    "UpdateThreadRequest",
    "UpdateThreadResponse",
    "UpdateThreadUseCase",
]
