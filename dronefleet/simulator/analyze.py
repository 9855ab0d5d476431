"""Coverage rendering and telemetry analysis for fleet simulations.

``plot_coverage`` draws the nearest-server coverage map together with servers
and drones. ``TelemetryRecorder`` keeps one row per drone per tick and turns
the history into a pandas DataFrame; ``analyze_power_consumption`` summarises
and plots it.
"""

import math

import matplotlib.pyplot as plt
from matplotlib.patches import Circle
import pandas as pd

from dronefleet.config import CANVAS_HEIGHT, CANVAS_WIDTH, DRONE_ICON_SIZE
from dronefleet.console import CONSOLE
from dronefleet.vehicles import DroneState, DroneStatus
from dronefleet.world import to_hex

from .simulator import FleetSimulator

TELEMETRY_COLUMNS = [
    "time",
    "name",
    "state",
    "x",
    "y",
    "azimuth",
    "power",
    "speed",
    "height",
    "collision",
    "target_server",
]

_STATE_MARKERS = {
    DroneState.LANDED: "s",
    DroneState.TAKEOFF: "^",
    DroneState.LANDING: "v",
}


class TelemetryRecorder:
    """Collects drone snapshots tick after tick.

    Example:
        >>> recorder = TelemetryRecorder()
        >>> simulator.tick(Millisecond(100))
        >>> recorder.record(simulator)
        >>> frame = recorder.to_frame()
    """

    _rows: list[dict]

    def __init__(self):
        self._rows = []

    def record(self, simulator: FleetSimulator) -> None:
        """Append the current snapshot of every drone, stamped with the simulated time."""
        now = float(simulator.now)
        for status in simulator.snapshots():
            self._rows.append(self._row(now, status))

    @staticmethod
    def _row(now: float, status: DroneStatus) -> dict:
        return {
            "time": now,
            "name": status.name,
            "state": status.state.name,
            "x": status.position.x,
            "y": status.position.y,
            "azimuth": status.azimuth,
            "power": status.power,
            "speed": status.speed,
            "height": status.height,
            "collision": status.collision,
            "target_server": status.target_server,
        }

    def __len__(self) -> int:
        return len(self._rows)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self._rows, columns=TELEMETRY_COLUMNS)

    def to_csv(self, path: str) -> None:
        self.to_frame().to_csv(path, index=False)


def analyze_power_consumption(frame: pd.DataFrame, title: str = "Fleet Power", show: bool = False):
    """Summarise power and collisions per drone and plot power over time.

    Args:
        frame: Telemetry as produced by ``TelemetryRecorder.to_frame``.
        title: Title of the plot.
        show: Call ``plt.show()`` once the figure is drawn.

    Returns:
        tuple[pandas.DataFrame, matplotlib.figure.Figure] | None: Per-drone
        statistics (initial, final and minimum power, peak speed, ticks in
        collision) and the figure, or None when the frame is empty.
    """
    CONSOLE.print("=== Fleet Power Analysis ===")
    CONSOLE.print(f"Telemetry rows: {len(frame)}")
    if frame.empty:
        CONSOLE.print("No data provided.")
        return None

    grouped = frame.sort_values("time").groupby("name")
    stats = grouped.agg(
        initial_power=("power", "first"),
        final_power=("power", "last"),
        min_power=("power", "min"),
        max_speed=("speed", "max"),
        collision_ticks=("collision", "sum"),
    )
    stats["consumed"] = stats["initial_power"] - stats["final_power"]

    fig, ax = plt.subplots(1, 1, figsize=(12, 6))
    for name, rows in grouped:
        ax.plot(rows["time"], rows["power"], label=name)
    ax.set_title(title, fontsize=14)
    ax.set_xlabel("Simulated time (s)", fontsize=12)
    ax.set_ylabel("Power (%)", fontsize=12)
    ax.set_ylim(0, 100)
    ax.grid(True, alpha=0.3)
    ax.legend(loc="best")
    fig.tight_layout()
    if show:
        plt.show()
    return stats, fig


def plot_coverage(
    simulator: FleetSimulator,
    width: int = CANVAS_WIDTH,
    height: int = CANVAS_HEIGHT,
    ax=None,
    shaded: bool = True,
    icon_size: float = DRONE_ICON_SIZE,
):
    """Draw the coverage map, servers and drones of ``simulator``.

    The coverage map is computed pixel by pixel with the simulator's
    classifier, so large canvases take a while. Image rows follow screen
    coordinates (``y`` grows downwards). Drones are drawn with an arrow along
    their azimuth while cruising; drones in collision get a dashed circle of
    the collision distance.

    Returns:
        matplotlib.axes.Axes: The axes drawn on.
    """
    if ax is None:
        _, ax = plt.subplots(1, 1, figsize=(width / 100, height / 100))

    image = simulator.classifier.coverage_map(width, height, shaded=shaded)
    ax.imshow(image, origin="upper", extent=(0, width, height, 0))

    for server in simulator.servers:
        ax.scatter(
            [server.position.x],
            [server.position.y],
            s=80,
            c=to_hex(server.color),
            edgecolors="black",
            zorder=3,
        )
        ax.annotate(
            server.name,
            (server.position.x, server.position.y),
            xytext=(8, 8),
            textcoords="offset points",
            fontweight="bold",
        )

    radius = simulator.config.collision_distance / 2
    for status in simulator.snapshots():
        x, y = status.position
        marker = _STATE_MARKERS.get(status.state, "o")
        ax.scatter([x], [y], s=icon_size, marker=marker, c="black", zorder=4)
        if status.state.is_cruising:
            ax.annotate(
                "",
                xy=(x, y),
                xytext=_arrow_tail(x, y, status.azimuth, icon_size / 2),
                arrowprops={"arrowstyle": "->", "color": "black"},
                zorder=4,
            )
        if status.collision:
            ax.add_patch(Circle((x, y), radius, fill=False, linestyle="--", color="lightgray", lw=2))
        ax.annotate(status.name, (x, y), xytext=(6, -12), textcoords="offset points", fontsize=8)

    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)
    ax.set_title(f"Coverage - {len(simulator.servers)} servers, {len(simulator.drones)} drones")
    return ax


def _arrow_tail(x: float, y: float, azimuth: float, length: float) -> tuple[float, float]:
    """Point behind (x, y) along the heading so that the arrow ends at the drone."""
    # heading of azimuth a is (-sin a, -cos a) in screen coordinates
    rad = math.radians(azimuth)
    return x + length * math.sin(rad), y + length * math.cos(rad)
