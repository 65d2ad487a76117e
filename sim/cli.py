"""Unified CLI entrypoint.

Two commands:
  1) replay: run a synthetic flight through the decoder and print a summary
  2) decode: decode hex-encoded frames in order and print the resulting state
"""

from __future__ import annotations

import argparse
from dataclasses import asdict
from enum import Enum

from rocket_locator.models import GeoPoint
from rocket_locator.protocol.readers import DecodeError
from rocket_locator.runtime import LocatorEngine
from rocket_locator.utils.logging import get_logger


def _cmd_replay(args: argparse.Namespace) -> None:
    from sim.flight_profile import FlightProfileConfig, run_replay

    cfg = FlightProfileConfig(
        rng_seed=args.seed,
        apogee_m=args.apogee,
        drift_east_mps=args.drift,
        foreign_frame_rate=args.foreign_rate,
        truncated_frame_rate=args.truncated_rate,
    )
    observer = None
    if args.observer is not None:
        observer = GeoPoint(*args.observer)
    summary = run_replay(cfg, observer=observer)

    print(f"device:     {summary.device_name}")
    print(
        f"frames:     {summary.frames_total} total, {summary.frames_decoded} decoded, "
        f"{summary.frames_ignored} ignored, {summary.frames_dropped} dropped"
    )
    print(f"max AGL:    {summary.max_agl_m:.1f} m")
    phase = summary.final_phase.name if summary.final_phase is not None else "unknown"
    print(f"phase:      {phase}")
    print(
        f"locator:    {summary.distance_to_locator_m} m at "
        f"{summary.bearing_to_locator_deg:.1f} deg"
    )


def _format_field(value: object) -> str:
    return value.name if isinstance(value, Enum) else str(value)


def _cmd_decode(args: argparse.Namespace) -> None:
    engine = LocatorEngine()
    for text in args.frame:
        try:
            frame = bytes.fromhex(text)
        except ValueError as exc:
            raise SystemExit(f"Invalid hex frame {text!r}: {exc}") from exc
        try:
            kind = engine.handle_message(frame)
        except DecodeError as exc:
            print(f"dropped: {exc}")
            continue
        print(f"{kind.value if kind is not None else 'ignored'}")

    state = engine.flight_state.value
    for key, value in asdict(state).items():
        if key != "agl_samples":
            print(f"  {key}: {_format_field(value)}")
    print(f"  agl_samples: {[round(v, 1) for v in state.agl_samples]}")
    for key, value in asdict(engine.deploy_config.value).items():
        print(f"  {key}: {_format_field(value)}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rocket-locator", description="Rocket locator decoder tools")
    parser.add_argument(
        "--log-level",
        default="warning",
        choices=["debug", "info", "warning", "error"],
        help="Log level for the rocket_locator logger (debug shows ignored frames)",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    replay = sub.add_parser("replay", help="Decode a synthetic flight and print a summary")
    replay.add_argument("--seed", type=int, default=42, help="RNG seed")
    replay.add_argument("--apogee", type=float, default=450.0, help="Apogee above the pad (m)")
    replay.add_argument("--drift", type=float, default=3.0, help="Eastward wind drift (m/s)")
    replay.add_argument("--foreign-rate", type=float, default=0.0, help="Probability of a foreign frame per second")
    replay.add_argument("--truncated-rate", type=float, default=0.0, help="Probability of a truncated frame")
    replay.add_argument(
        "--observer",
        type=float,
        nargs=2,
        metavar=("LAT", "LON"),
        help="Observer position (defaults to the launch site)",
    )
    replay.set_defaults(func=_cmd_replay)

    decode = sub.add_parser("decode", help="Decode hex-encoded frames in order")
    decode.add_argument("frame", nargs="+", help="Frame bytes as hex")
    decode.set_defaults(func=_cmd_decode)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    get_logger("rocket_locator", args.log_level)
    args.func(args)


if __name__ == "__main__":
    main()
