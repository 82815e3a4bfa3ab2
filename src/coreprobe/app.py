"""coreprobe - Textual front-end."""

from queue import Empty, Queue

from textual.app import App, ComposeResult
from textual.containers import Container
from textual.widgets import DataTable, Footer, Static

from coreprobe.config import ProbeConfig
from coreprobe.models import CoreFrequencySample, ProbeSnapshot, ProcessSnapshot
from coreprobe.monitor import ProbeMonitor
from coreprobe.render import format_mhz, trim_name
from coreprobe.sampler import FrequencySampler, ProcessEnumerator
from coreprobe.sources import PlatformSources, get_platform_sources


class FrequencyPanel(Static):
    """Header widget listing the current clock of every logical core."""

    DEFAULT_CSS = """
    FrequencyPanel {
        height: auto;
        min-height: 3;
        padding: 1;
        background: $surface;
    }
    """

    def __init__(self, *args, **kwargs) -> None:
        """Initialize FrequencyPanel."""
        super().__init__(*args, **kwargs)
        self._frequencies: CoreFrequencySample | None = None

    def on_mount(self) -> None:
        self.update(self._get_frequency_info())

    def update_frequencies(self, frequencies: CoreFrequencySample) -> None:
        """Show a new frequency sample."""
        self._frequencies = frequencies
        self.update(self._get_frequency_info())

    def _get_frequency_info(self) -> str:
        if self._frequencies is None:
            return "Sampling CPU frequencies..."
        if not self._frequencies:
            return "Per-core frequency is not available on this system."

        # Four cores per row keeps many-core hosts readable
        cells = [f"CPU{core_id:<3} {format_mhz(mhz):>9}" for core_id, mhz in enumerate(self._frequencies)]
        rows = ["    ".join(cells[i : i + 4]) for i in range(0, len(cells), 4)]
        return "\n".join(rows)


class ProcessTable(Container):
    """Container for the process data table, kept in ascending pid order."""

    DEFAULT_CSS = """
    ProcessTable {
        height: 1fr;
        border: solid $primary;
    }
    """

    def __init__(self, *args, **kwargs) -> None:
        """Initialize ProcessTable."""
        super().__init__(*args, **kwargs)
        self._current_pids: list[int] = []

    def compose(self) -> ComposeResult:
        """Compose the process table."""
        yield DataTable(id="process-table")

    def on_mount(self) -> None:
        """Initialize the data table when mounted."""
        table = self.query_one("#process-table", DataTable)
        table.cursor_type = "row"
        table.add_column("PID", key="pid", width=8)
        table.add_column("Name", key="name")

    @property
    def row_count(self) -> int:
        """Number of processes currently shown."""
        return len(self._current_pids)

    def update_processes(self, processes: ProcessSnapshot) -> None:
        """
        Update the table with a new snapshot.

        When the set of pids is unchanged only the names are updated;
        otherwise the rows are rebuilt so they stay in pid order.
        """
        table = self.query_one("#process-table", DataTable)
        new_pids = [proc.pid for proc in processes]

        if new_pids == self._current_pids:
            for proc in processes:
                table.update_cell(str(proc.pid), "name", trim_name(proc.name))
            return

        table.clear()
        for proc in processes:
            table.add_row(str(proc.pid), trim_name(proc.name), key=str(proc.pid))
        self._current_pids = new_pids


class ProbeApp(App):
    """Main coreprobe application."""

    TITLE = "coreprobe"
    SUB_TITLE = "Per-core frequency and process probe"

    CSS = """
    Screen {
        layout: vertical;
    }

    #frequency-panel {
        dock: top;
        height: auto;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("p", "toggle_pause", "Pause"),
    ]

    def __init__(
        self,
        config: ProbeConfig | None = None,
        sources: PlatformSources | None = None,
    ) -> None:
        """
        Initialize the ProbeApp.

        Args:
            config: Probe configuration. Defaults to ProbeConfig().
            sources: Data sources. Defaults to the platform's sources.
        """
        super().__init__()
        self._config = config if config is not None else ProbeConfig()
        sources = sources if sources is not None else get_platform_sources(self._config)
        self._update_queue: Queue[ProbeSnapshot] = Queue()
        self._monitor = ProbeMonitor(
            self._update_queue,
            FrequencySampler.from_sources(sources),
            ProcessEnumerator.from_sources(sources),
            interval=self._config.interval,
        )
        self._paused = False

    @property
    def paused(self) -> bool:
        """Whether incoming snapshots are being ignored."""
        return self._paused

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield FrequencyPanel(id="frequency-panel")
        yield ProcessTable()
        yield Footer()

    def on_mount(self) -> None:
        """Start the monitor when the app is mounted."""
        self._monitor.start()
        self.set_interval(0.25, self._check_for_updates)

    def _check_for_updates(self) -> None:
        """Drain the queue and show the most recent snapshot."""
        snapshot = None
        while True:
            try:
                snapshot = self._update_queue.get_nowait()
            except Empty:
                break

        if snapshot is not None and not self._paused:
            self._update_ui(snapshot)

    def _update_ui(self, snapshot: ProbeSnapshot) -> None:
        """Update the UI with a new snapshot."""
        self.query_one(FrequencyPanel).update_frequencies(snapshot.frequencies)
        self.query_one(ProcessTable).update_processes(snapshot.processes)

    def action_toggle_pause(self) -> None:
        """Freeze or resume the display."""
        self._paused = not self._paused
        self.notify("Paused" if self._paused else "Resumed")

    def action_quit(self) -> None:
        """Stop the monitor and exit."""
        self._monitor.stop()
        self.exit()

    def on_unmount(self) -> None:
        self._monitor.stop()
