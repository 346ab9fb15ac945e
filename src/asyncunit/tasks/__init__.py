"""Asynchronous task scheduling."""

from asyncunit.tasks.adapters import (
    AsyncMethodRunner,
    AsyncMethodTask,
    SyncMethodRunner,
    SyncMethodTask,
)
from asyncunit.tasks.base import AsyncTask, FailureKind, TaskFailure, TaskRunner, TaskState
from asyncunit.tasks.runner import AsyncTaskRunner

__all__ = [
    "AsyncTask",
    "AsyncTaskRunner",
    "AsyncMethodRunner",
    "AsyncMethodTask",
    "FailureKind",
    "SyncMethodRunner",
    "SyncMethodTask",
    "TaskFailure",
    "TaskRunner",
    "TaskState",
]
