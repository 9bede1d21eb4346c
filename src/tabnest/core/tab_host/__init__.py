"""Tab host integration: the browser side of tabnest."""

from tabnest.core.tab_host.abc import TabHost
from tabnest.core.tab_host.dry_run import DryRunTabHost
from tabnest.core.tab_host.fake import FakeTabHost
from tabnest.core.tab_host.real import FileTabHost
from tabnest.core.tab_host.retrying import RetryingTabHost
from tabnest.core.tab_host.strip import TabStrip

__all__ = [
    "DryRunTabHost",
    "FakeTabHost",
    "FileTabHost",
    "RetryingTabHost",
    "TabHost",
    "TabStrip",
]
