"""CLI entrypoint for vizanim."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from vizanim.adapter import DictAdapter, state_key
from vizanim.config import configure_logging, load_settings
from vizanim.evaluate import sample
from vizanim.player import Player
from vizanim.resolve import resolve_from_values
from vizanim.scheduler import TimerFrameScheduler
from vizanim.spec import AnimationSpec, loads
from vizanim.tracks import compile_tracks


def main(argv: list[str] | None = None) -> None:
    settings = load_settings()

    parser = argparse.ArgumentParser(
        prog="vizanim",
        description="vizanim - diagram animation timelines",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    inspect_parser = subparsers.add_parser("inspect", help="Summarize a spec file")
    inspect_parser.add_argument("spec", type=str, help="Path to a viz-anim/1 JSON file")

    sample_parser = subparsers.add_parser("sample", help="Evaluate a spec at given times")
    sample_parser.add_argument("spec", type=str, help="Path to a viz-anim/1 JSON file")
    sample_parser.add_argument(
        "--at",
        type=float,
        action="append",
        required=True,
        help="Time in ms (repeatable)",
    )
    sample_parser.add_argument(
        "--set",
        type=str,
        action="append",
        default=[],
        metavar="TARGET.PROP=VALUE",
        help="Base value reported by the host (repeatable)",
    )

    play_parser = subparsers.add_parser("play", help="Play a spec in real time")
    play_parser.add_argument("spec", type=str, help="Path to a viz-anim/1 JSON file")
    play_parser.add_argument(
        "--fps",
        type=float,
        default=settings.fps,
        help=f"Frames per second (default: {settings.fps:g})",
    )

    demo_parser = subparsers.add_parser("demo-basic", help="Play the basic demo show")
    demo_parser.add_argument(
        "--fps",
        type=float,
        default=settings.fps,
        help=f"Frames per second (default: {settings.fps:g})",
    )

    args = parser.parse_args(argv)
    configure_logging(settings)

    if args.command == "inspect":
        run_inspect(args.spec)
    elif args.command == "sample":
        run_sample(args.spec, args.at, args.set)
    elif args.command == "play":
        run_play(args.spec, args.fps)
    elif args.command == "demo-basic":
        run_demo_basic(args.fps)
    else:
        parser.print_help()
        sys.exit(1)


def load_spec_file(path: str) -> AnimationSpec:
    """Read a spec file, exiting with status 1 on any error."""
    try:
        return loads(Path(path).read_text())
    except OSError as e:
        print(f"ERROR: Could not read {path}: {e}", file=sys.stderr)
    except ValueError as e:
        print(f"ERROR: Invalid animation spec {path}: {e}", file=sys.stderr)
    sys.exit(1)


def parse_base_values(items: list[str]) -> dict[str, float]:
    """Parse ``node:a.x=120`` items into adapter state keys."""
    values: dict[str, float] = {}
    for item in items:
        lhs, sep, rhs = item.partition("=")
        target, dot, prop = lhs.rpartition(".")
        if not sep or not dot or not target or not prop:
            raise ValueError(f"Expected TARGET.PROP=VALUE, got {item!r}")
        values[state_key(target, prop)] = float(rhs)
    return values


def run_inspect(path: str) -> None:
    spec = load_spec_file(path)
    timeline = compile_tracks(spec.tweens)
    print(f"Version:  {spec.version}")
    print(f"Tweens:   {len(spec.tweens)}")
    print(f"Duration: {timeline.total_duration:g}ms")
    for track in timeline.tracks:
        spans = ", ".join(f"{t.start:g}-{t.end:g}" for t in track.tweens)
        print(f"  {track.key}: {spans}")


def run_sample(path: str, times: list[float], base: list[str]) -> None:
    spec = load_spec_file(path)
    try:
        values = parse_base_values(base)
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    timeline = compile_tracks(spec.tweens)
    resolve_from_values(timeline, DictAdapter(values))
    result = {f"{t:g}": sample(timeline, t) for t in times}
    print(json.dumps(result, indent=2))


def _print_frame(values: dict[str, float]) -> None:
    print("  ".join(f"{k}={v:.3f}" for k, v in values.items()))


def run_play(path: str, fps: float) -> None:
    spec = load_spec_file(path)
    play_spec(spec, fps)


def play_spec(spec: AnimationSpec, fps: float) -> None:
    adapter = DictAdapter(on_flush=_print_frame)
    player = Player(adapter, scheduler=TimerFrameScheduler(fps=fps))
    player.load(spec)
    print(f"Playing {player.duration():g}ms at {fps:g} fps. Press Ctrl+C to stop.")
    player.play()
    try:
        player.wait()
    except KeyboardInterrupt:
        player.stop()


def run_demo_basic(fps: float) -> None:
    """Run the basic demo show."""
    try:
        from shows.basic_show import run
    except ImportError:
        sys.path.insert(0, ".")
        try:
            from shows.basic_show import run
        except ImportError:
            print("ERROR: shows/basic_show.py is not importable.", file=sys.stderr)
            print("Run `vizanim demo-basic` from the vizanim checkout, next to shows/.", file=sys.stderr)
            sys.exit(1)

    run(fps=fps)


if __name__ == "__main__":
    main()
