"""Application context with dependency injection."""

from dataclasses import dataclass
from pathlib import Path

from tabnest.core.events import EventBus
from tabnest.core.global_config import GlobalConfig, load_global_config
from tabnest.core.services.subgroup_service import SubGroupService
from tabnest.core.state_store import DryRunStateStore, JsonFileStateStore, StateStore
from tabnest.core.tab_host import DryRunTabHost, FileTabHost, RetryingTabHost, TabHost
from tabnest.core.time.abc import Time
from tabnest.core.time.real import RealTime


@dataclass(frozen=True)
class TabNestContext:
    """Immutable context holding all dependencies for tabnest operations.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime.

    The service is subscribed to the bus on construction, so publishing a
    notification on ctx.bus runs it through the service.
    """

    host: TabHost
    store: StateStore
    time: Time
    global_config: GlobalConfig
    bus: EventBus
    service: SubGroupService
    dry_run: bool

    @staticmethod
    def for_test(
        host: TabHost | None = None,
        store: StateStore | None = None,
        time: Time | None = None,
        global_config: GlobalConfig | None = None,
        dry_run: bool = False,
    ) -> "TabNestContext":
        """Create test context with optional pre-configured integration classes.

        Args:
            host: Optional TabHost. If None, creates an empty FakeTabHost.
            store: Optional StateStore. If None, creates an empty FakeStateStore.
            time: Optional Time. If None, creates FakeTime.
            global_config: Optional GlobalConfig. If None, uses test defaults.
            dry_run: Whether to enable dry-run mode (default False).

        Returns:
            TabNestContext configured with provided values and test defaults
        """
        from tabnest.core.state_store.fake import FakeStateStore
        from tabnest.core.tab_host.fake import FakeTabHost
        from tabnest.core.time.fake import FakeTime

        if global_config is None:
            global_config = GlobalConfig(
                state_path=Path("/test/tabnest/state.json"),
                strip_path=Path("/test/tabnest/strip.json"),
                holding_color="grey",
                host_retry_attempts=1,
                host_retry_delay=0.0,
            )

        if time is None:
            time = FakeTime()
        if host is None:
            host = FakeTabHost()

        return _assemble(
            host=_with_retries(host, time, global_config),
            store=store if store is not None else FakeStateStore(),
            time=time,
            global_config=global_config,
            dry_run=dry_run,
        )


def create_context(*, dry_run: bool, config_path: Path | None = None) -> TabNestContext:
    """Create production context with real implementations.

    Called at CLI entry point to create the context for the entire
    command execution.

    Args:
        dry_run: If True, wrap host and store with dry-run implementations
        config_path: Config file to load instead of the default location

    Returns:
        TabNestContext with real implementations, wrapped in dry-run
        wrappers if dry_run=True

    Raises:
        ValueError: If the config file is malformed
    """
    global_config = load_global_config(config_path)
    time: Time = RealTime()

    host = _with_retries(FileTabHost(global_config.strip_path), time, global_config)
    store: StateStore = JsonFileStateStore(global_config.state_path)

    if dry_run:
        host = DryRunTabHost(host)
        store = DryRunStateStore(store)

    return _assemble(
        host=host, store=store, time=time, global_config=global_config, dry_run=dry_run
    )


def _with_retries(host: TabHost, time: Time, global_config: GlobalConfig) -> TabHost:
    """Wrap host in bounded retries when the config asks for more than one attempt."""
    if global_config.host_retry_attempts > 1:
        return RetryingTabHost(
            host,
            time,
            max_attempts=global_config.host_retry_attempts,
            base_delay=global_config.host_retry_delay,
        )
    return host


def _assemble(
    *,
    host: TabHost,
    store: StateStore,
    time: Time,
    global_config: GlobalConfig,
    dry_run: bool,
) -> TabNestContext:
    bus = EventBus()
    service = SubGroupService(host, store, holding_color=global_config.holding_color)
    service.start(bus)
    return TabNestContext(
        host=host,
        store=store,
        time=time,
        global_config=global_config,
        bus=bus,
        service=service,
        dry_run=dry_run,
    )
