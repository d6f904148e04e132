"""Engagement maintenance use cases."""

from .reconcile_counters import (
    ReconcileCountersRequest,
    ReconcileCountersResponse,
    ReconcileCountersUseCase,
    RepairedPost,
)

__all__ = [
    "ReconcileCountersRequest",
    "ReconcileCountersResponse",
    "ReconcileCountersUseCase",
    "RepairedPost",
]
