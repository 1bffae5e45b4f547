# eventsim/cli.py

from __future__ import annotations
import argparse
import json
import logging
import signal
import sys
from pathlib import Path
from typing import Any, List

from eventsim.engine.scenario_runner import ScenarioRunner
from eventsim.engine.trace_bus import TraceBus, TraceRecord
from eventsim.output.trace_adapter import TraceAdapter


def _time_value(text: str) -> int | float:
    """Parse a logical time, keeping whole numbers as ints."""
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid time value: {text!r}") from None


def main(argv: list[str] | None = None) -> int | None:
    parser = argparse.ArgumentParser(
        prog="eventsim.cli",
        description="Run a single-runway airport scenario on the eventsim engine",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "scenario",
        type=Path,
        help="Path to the scenario YAML file",
    )
    parser.add_argument(
        "--output",
        choices=["cli", "json"],
        default="cli",
        help="Output mode: 'cli' prints trace lines to stdout; 'json' dumps trace records to a JSON file",
    )
    parser.add_argument(
        "--json-file",
        type=Path,
        default=Path("trace_output.json"),
        help="Path to JSON output file if --output=json",
    )
    parser.add_argument(
        "--until",
        type=_time_value,
        default=None,
        help="Leave events later than this time unhandled",
    )
    parser.add_argument(
        "--max-events",
        type=int,
        default=None,
        help="Stop after handling this many events",
    )
    parser.add_argument(
        "--show-pending",
        action="store_true",
        help="Print events still pending when the run stops",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level for engine diagnostics (written to stderr)",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if not args.scenario.exists():
        print(f"Scenario file not found: {args.scenario}", file=sys.stderr)
        return 1

    trace_bus = TraceBus()
    adapter = TraceAdapter()

    trace_records: List[dict[str, Any]] = []

    def handle_record(record: TraceRecord) -> None:
        if args.output == "json":
            trace_records.append(adapter.to_json(record))
            return

        for line in adapter.transform(record):
            print(line)

    trace_bus.subscribe(handle_record)

    runner = ScenarioRunner(scenario_path=args.scenario, trace_bus=trace_bus)

    try:
        runner.load()
    except Exception as exc:
        print(f"Failed to load scenario: {exc}", file=sys.stderr)
        return 2

    try:
        final_state = runner.run(until=args.until, max_events=args.max_events)
    except Exception as exc:
        print(f"Simulation failed: {exc}", file=sys.stderr)
        return 3

    if args.output == "cli":
        print(f"final {' '.join(f'{k}={v}' for k, v in final_state.as_dict().items())}")

    if args.show_pending and runner.simulation is not None:
        print(runner.simulation.pending.dump())

    if args.output == "json":
        try:
            args.json_file.parent.mkdir(parents=True, exist_ok=True)
            with args.json_file.open("w", encoding="utf-8") as f:
                json.dump(
                    {
                        "scenario_id": runner.scenario.get("id"),
                        "trace": trace_records,
                        "final_state": final_state.as_dict(),
                    },
                    f,
                    indent=2,
                )
            print(f"Trace JSON dumped to {args.json_file}")
        except Exception as exc:
            print(f"Failed to write JSON file: {exc}", file=sys.stderr)
            return 4

    return 0  # success


if __name__ == "__main__":

    signal.signal(signal.SIGPIPE, signal.SIG_DFL)  # Ignore broken pipe
    sys.exit(main())
