"""Maintenance use cases."""

from .reconcile_reply_counts import (
    ReconcileReplyCountsRequest,
    ReconcileReplyCountsResponse,
    ReconcileReplyCountsUseCase,
)

__all__ = [
    "ReconcileReplyCountsRequest",
    "ReconcileReplyCountsResponse",
    "ReconcileReplyCountsUseCase",
]
