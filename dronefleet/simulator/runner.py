"""Realtime driver and terminal dashboard for a ``FleetSimulator``.

``run_realtime`` calls ``tick`` once per period with the wall-clock time that
really elapsed since the previous tick, so a slow tick lengthens the next
interval instead of being skipped. Ticks run one after the other on the
calling thread and never overlap.

The dashboard is a rich ``Live`` view holding a table of drones (power and
speed bars) and the status line ``duration: <d> steps=<n>``.
"""

from collections.abc import Callable, Iterable, Sequence
import time

from rich.console import Console, Group
from rich.live import Live
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from dronefleet.console import CONSOLE
from dronefleet.geometry import Vector2D
from dronefleet.unit import Millisecond, Second, Time, Unit
from dronefleet.vehicles import Drone, DroneState, DroneStatus

from .analyze import TelemetryRecorder
from .simulator import Clock, FleetSimulator, TickReport, wall_clock_ms

BAR_WIDTH = 20
SPEED_BAR_TOTAL = Drone.MAX_SPEED

_STATE_STYLES = {
    DroneState.LANDED: "green",
    DroneState.TAKEOFF: "cyan",
    DroneState.LANDING: "yellow",
}


def _bar(value: float, total: float) -> ProgressBar:
    return ProgressBar(total=total, completed=min(max(value, 0.0), total), width=BAR_WIDTH)


def render_fleet_table(snapshots: Iterable[DroneStatus]) -> Table:
    """Build a table with one row per drone snapshot."""
    table = Table(title="Fleet", expand=False)
    table.add_column("Drone", style="bold")
    table.add_column("State")
    table.add_column("Position", justify="right")
    table.add_column("Azimuth", justify="right")
    table.add_column("Power")
    table.add_column("Speed")
    table.add_column("Server")
    table.add_column("Collision", justify="center")

    for status in snapshots:
        style = _STATE_STYLES.get(status.state, "magenta")
        table.add_row(
            status.name,
            Text(status.state.name, style=style),
            f"{status.position.x:.1f}, {status.position.y:.1f}",
            f"{status.azimuth:.0f}°",
            Group(_bar(status.power, 100.0), Text(f"{status.power:.1f}%")),
            Group(_bar(status.speed, SPEED_BAR_TOTAL), Text(f"{status.speed:.1f}")),
            status.target_server or "-",
            Text("!", style="bold red") if status.collision else "",
        )
    return table


def status_line(report: TickReport | None, steps: int) -> Text:
    """Status text of the last tick: its measured cost and the next step count."""
    duration = report.duration.to(Millisecond) if report is not None else 0.0
    return Text(f"duration: {duration:.0f} steps={steps}")


def render_dashboard(simulator: FleetSimulator) -> Group:
    return Group(
        render_fleet_table(simulator.snapshots()),
        status_line(simulator.last_report, simulator.steps),
    )


def _milliseconds(value: Time | float, bare: type[Unit]) -> float:
    if isinstance(value, Unit):
        return value.to(Millisecond)
    return bare(value).to(Millisecond)


def run_realtime(
    simulator: FleetSimulator,
    duration: Time | float,
    period: Time | float | None = None,
    launch: Sequence[Vector2D] = (),
    recorder: TelemetryRecorder | None = None,
    clock: Clock | None = None,
    sleep: Callable[[float], None] = time.sleep,
    console: Console | None = None,
) -> list[TickReport]:
    """Tick ``simulator`` at a fixed period until ``duration`` has elapsed.

    Args:
        simulator: The simulator to drive.
        duration: Wall-clock run length; a bare number is read as seconds.
        period: Interval between ticks; a bare number is read as milliseconds.
            Defaults to the simulator's ``config.tick_period``.
        launch: Points issued as ``launch_to`` commands before the first tick.
        recorder: Receives a snapshot of the fleet after every tick.
        clock: Millisecond clock; ``sleep`` must advance it. Both are
            injectable for deterministic runs.
        sleep: Blocks for a number of seconds.
        console: Console for the live dashboard, ``CONSOLE`` by default.

    Returns:
        list[TickReport]: One report per tick, in order.

    Raises:
        ValueError: If ``period`` is not positive.
    """
    clock = clock or wall_clock_ms
    total_ms = _milliseconds(duration, Second)
    period_ms = _milliseconds(simulator.config.tick_period if period is None else period, Millisecond)
    if period_ms <= 0:
        msg = f"Tick period must be positive: {period}"
        raise ValueError(msg)

    for point in launch:
        drone = simulator.launch_to(point)
        if drone is None:
            CONSOLE.log(f"[yellow]No landed drone available for {point}")
        else:
            CONSOLE.log(f"Launched {drone.name} to {point}")

    reports: list[TickReport] = []
    start = last = clock()
    with Live(
        render_dashboard(simulator),
        console=console or CONSOLE,
        auto_refresh=False,
    ) as live:
        while last - start < total_ms:
            wait = last + period_ms - clock()
            if wait > 0:
                sleep(wait / 1000.0)
            now = clock()
            reports.append(simulator.tick(Millisecond(now - last)))
            last = now
            if recorder is not None:
                recorder.record(simulator)
            live.update(render_dashboard(simulator), refresh=True)
    return reports
