"""Persistence for the tab tree and parking lot."""

from tabnest.core.state_store.abc import StateStore
from tabnest.core.state_store.dry_run import DryRunStateStore
from tabnest.core.state_store.fake import FakeStateStore
from tabnest.core.state_store.real import JsonFileStateStore

__all__ = [
    "DryRunStateStore",
    "FakeStateStore",
    "JsonFileStateStore",
    "StateStore",
]
