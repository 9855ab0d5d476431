"""Command line entry point: load a scenario and run it in real time.

Run:
    python -m dronefleet SCENARIO.json [--duration S] [--launch X,Y ...]
                                       [--plot FILE] [--telemetry FILE]
"""

import argparse
import sys

from dronefleet.console import CONSOLE
from dronefleet.geometry import Vector2D
from dronefleet.loader import ScenarioError, load_scenario
from dronefleet.simulator import (
    FleetSimulator,
    TelemetryRecorder,
    TickReport,
    plot_coverage,
    run_realtime,
)
from dronefleet.unit import ClockTime, Millisecond, Second


def _point(text: str) -> Vector2D:
    try:
        return Vector2D.from_str(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def run_summary(reports: list[TickReport], simulator: FleetSimulator) -> str:
    """One-line recap: tick count, over-budget ticks and the simulated clock."""
    late = sum(report.over_budget for report in reports)
    return (
        f"Ran {len(reports)} ticks ({late} over budget), "
        f"simulated time {ClockTime(float(simulator.now))}"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dronefleet",
        description="Simulate a drone fleet over nearest-server coverage",
    )
    parser.add_argument("scenario", help="JSON scenario file with servers and drones")
    parser.add_argument(
        "--duration",
        type=float,
        default=10.0,
        help="Wall-clock run length in seconds (default: 10)",
    )
    parser.add_argument(
        "--period",
        type=float,
        default=None,
        help="Tick period in milliseconds (default: 100)",
    )
    parser.add_argument(
        "--launch",
        type=_point,
        action="append",
        default=[],
        metavar="X,Y",
        help="Send the next landed drone to X,Y before the first tick (repeatable)",
    )
    parser.add_argument("--plot", metavar="FILE", help="Save the final coverage plot to FILE")
    parser.add_argument("--telemetry", metavar="FILE", help="Write per-tick telemetry CSV to FILE")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        scenario = load_scenario(args.scenario)
    except (OSError, ScenarioError) as e:
        CONSOLE.print(f"[red]Cannot load scenario: {e}")
        return 1

    simulator = FleetSimulator()
    simulator.load(scenario.servers, scenario.drones)
    recorder = TelemetryRecorder() if args.telemetry else None

    period = Millisecond(args.period) if args.period is not None else None
    try:
        reports = run_realtime(
            simulator,
            Second(args.duration),
            period=period,
            launch=args.launch,
            recorder=recorder,
        )
    except KeyboardInterrupt:
        CONSOLE.print("[yellow]Interrupted")
        reports = []

    CONSOLE.print(run_summary(reports, simulator))

    if recorder is not None:
        recorder.to_csv(args.telemetry)
        CONSOLE.print(f"Telemetry written to {args.telemetry} ({len(recorder)} rows)")
    if args.plot:
        ax = plot_coverage(simulator)
        ax.figure.savefig(args.plot, dpi=100)
        CONSOLE.print(f"Coverage plot saved to {args.plot}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
