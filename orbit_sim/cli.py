"""
Orbit Simulation - CLI

Single entry point for headless runs, transfer planning and maneuver
sequence handling:

    orbit-sim run --preset hohmann-leo-geo --plot-dir plots
    orbit-sim run --file mission.json --dt 0.5
    orbit-sim transfer hohmann 200 35786
    orbit-sim transfer bielliptic 200 150000 35786
    orbit-sim validate mission.json
    orbit-sim preset hohmann-leo-geo -o mission.json

Altitudes on the command line are in km above the mean surface.
"""

import argparse
import logging
import os
import sys
from dataclasses import replace

from . import constants as C
from .config import create_default_config
from .maneuver import bielliptic_transfer, hohmann_transfer
from .presets import PRESET_NAMES, get_preset
from .sequence import load_sequence_file, save_sequence_file, sequence_to_json
from .simulation import compute_telemetry, run_simulation

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="orbit-sim",
        description="Two-body orbital simulation",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # run
    run = subparsers.add_parser("run", help="Run a headless simulation")
    source = run.add_mutually_exclusive_group()
    source.add_argument("--preset", choices=PRESET_NAMES,
                        help="Built-in maneuver sequence")
    source.add_argument("--file", "-f", type=str,
                        help="Maneuver sequence JSON file")
    run.add_argument("--dt", type=float, default=None, help="Physics step (s)")
    run.add_argument("--max-time", type=float, default=None,
                     help="Simulation end time (s); default is the sequence duration")
    run.add_argument("--drag", action="store_true",
                     help="Integrate atmospheric drag into the dynamics")
    run.add_argument("--plot-dir", type=str, default=None,
                     help="Directory to save output plots")
    run.add_argument("--quiet", "-q", action="store_true",
                     help="Suppress the progress table")

    # transfer
    transfer = subparsers.add_parser("transfer", help="Plan an impulsive transfer")
    kinds = transfer.add_subparsers(dest="kind", required=True)
    hohmann = kinds.add_parser("hohmann", help="Hohmann transfer")
    hohmann.add_argument("alt1", type=float, help="Departure altitude (km)")
    hohmann.add_argument("alt2", type=float, help="Arrival altitude (km)")
    bielliptic = kinds.add_parser("bielliptic", help="Bi-elliptic transfer")
    bielliptic.add_argument("alt1", type=float, help="Departure altitude (km)")
    bielliptic.add_argument("alt_b", type=float, help="Intermediate altitude (km)")
    bielliptic.add_argument("alt2", type=float, help="Arrival altitude (km)")

    # validate
    validate = subparsers.add_parser("validate", help="Validate a sequence file")
    validate.add_argument("file", type=str, help="Maneuver sequence JSON file")

    # preset
    preset = subparsers.add_parser("preset", help="Export a built-in sequence")
    preset.add_argument("name", choices=PRESET_NAMES, help="Preset name")
    preset.add_argument("--output", "-o", type=str, default=None,
                        help="Write to this file instead of stdout")

    return parser


def _altitude_to_radius(altitude_km: float) -> float:
    return C.R_EARTH + altitude_km * 1000.0


def cmd_run(args) -> int:
    config = create_default_config()
    if args.drag:
        config = replace(config, enable_drag=True)

    sequence = None
    if args.preset:
        sequence = get_preset(args.preset)
    elif args.file:
        sequence = load_sequence_file(args.file)
        if sequence is None:
            print(f"[ERROR] Rejected maneuver sequence: {args.file}")
            return 1

    final_state, log, reason = run_simulation(
        sequence=sequence, dt=args.dt, max_time=args.max_time,
        verbose=not args.quiet, config=config
    )

    telemetry = compute_telemetry(final_state, config)
    print("\n" + "=" * 60)
    print("SIMULATION SUMMARY")
    print("=" * 60)
    print(f"Termination reason: {reason}")
    print(f"Final time:         {final_state.t:.2f} s")
    print(f"Final altitude:     {telemetry['altitude']/1000:.2f} km")
    print(f"Final speed:        {telemetry['speed']:.2f} m/s")
    print(f"Periapsis altitude: {telemetry['periapsis_altitude']/1000:.2f} km")
    print(f"Apoapsis altitude:  {telemetry['apoapsis_altitude']/1000:.2f} km")
    print(f"Eccentricity:       {telemetry['eccentricity']:.6f}")
    print("=" * 60 + "\n")

    if args.plot_dir and len(log) > 0:
        from .plotting import generate_all_plots

        plot_dir = os.path.abspath(args.plot_dir)
        logger.info(f"Generating plots in {plot_dir}")
        paths = generate_all_plots(log, final_state, plot_dir, config)
        for path in paths:
            print(f"  saved {path}")

    return 0 if not reason.startswith("Validation failure") else 1


def cmd_transfer(args) -> int:
    try:
        if args.kind == "hohmann":
            result = hohmann_transfer(_altitude_to_radius(args.alt1),
                                      _altitude_to_radius(args.alt2))
            print(f"Hohmann transfer {args.alt1:.1f} km -> {args.alt2:.1f} km")
            print(f"  dv1:           {result.dv1:10.2f} m/s")
            print(f"  dv2:           {result.dv2:10.2f} m/s")
            print(f"  total dv:      {result.total_delta_v:10.2f} m/s")
            print(f"  transfer time: {result.transfer_time/3600:10.3f} h")
        else:
            result = bielliptic_transfer(_altitude_to_radius(args.alt1),
                                         _altitude_to_radius(args.alt_b),
                                         _altitude_to_radius(args.alt2))
            t1, t2 = result.transfer_times
            print(f"Bi-elliptic transfer {args.alt1:.1f} km -> {args.alt2:.1f} km "
                  f"via {args.alt_b:.1f} km")
            print(f"  dv1:           {result.dv1:10.2f} m/s")
            print(f"  dv2:           {result.dv2:10.2f} m/s")
            print(f"  dv3:           {result.dv3:10.2f} m/s")
            print(f"  total dv:      {result.total_delta_v:10.2f} m/s")
            print(f"  transfer time: {(t1 + t2)/3600:10.3f} h")
    except ValueError as e:
        print(f"[ERROR] {e}")
        return 1
    return 0


def cmd_validate(args) -> int:
    sequence = load_sequence_file(args.file)
    if sequence is None:
        print(f"INVALID: {args.file}")
        return 1
    print(f"VALID: '{sequence.name}' with {len(sequence.maneuvers)} maneuvers, "
          f"total duration {sequence.total_duration:.1f} s")
    return 0


def cmd_preset(args) -> int:
    sequence = get_preset(args.name)
    if args.output:
        path = save_sequence_file(sequence, args.output)
        print(f"Wrote {path}")
    else:
        print(sequence_to_json(sequence))
    return 0


COMMANDS = {
    "run": cmd_run,
    "transfer": cmd_transfer,
    "validate": cmd_validate,
    "preset": cmd_preset,
}


def main(argv=None) -> int:
    """Main execution flow."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        return COMMANDS[args.command](args)
    except OSError as e:
        logger.error(f"File error: {e}")
        print(f"[ERROR] {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
