"""Fleet simulation, realtime driver, rendering and telemetry.

Components:
    FleetSimulator: Adaptive sub-stepping tick over a fleet of drones
    TickReport: Outcome of one tick (sub-step size and count, measured cost)
    run_realtime: Fixed-period driver with a rich live dashboard
    render_fleet_table: rich table of drone snapshots
    plot_coverage: matplotlib rendering of the coverage map, servers and drones
    TelemetryRecorder: Per-tick snapshots exported as a pandas DataFrame
"""

from .analyze import TelemetryRecorder, analyze_power_consumption, plot_coverage
from .runner import render_dashboard, render_fleet_table, run_realtime, status_line
from .simulator import Clock, FleetSimulator, TickReport, wall_clock_ms

__all__ = [
    "Clock",
    "FleetSimulator",
    "TickReport",
    "TelemetryRecorder",
    "analyze_power_consumption",
    "plot_coverage",
    "render_dashboard",
    "render_fleet_table",
    "run_realtime",
    "status_line",
    "wall_clock_ms",
]
