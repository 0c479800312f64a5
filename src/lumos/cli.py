from __future__ import annotations

import argparse
import logging
import math
import sys

from lumos import __version__
from lumos.config import ConfigError, load
from lumos.errors import LumosError
from lumos.nightlight import NightLight
from lumos.policy import RefreshPolicy, apply_strength
from lumos.store import store_from_config

log = logging.getLogger(__name__)

NIGHT_STATES = ("on", "off", "toggle", "status")


def setup_logging(level: str) -> None:
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    # Avoid duplicate handlers when main() runs more than once in a process.
    if logger.handlers:
        return

    console = logging.StreamHandler()
    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
    )
    console.setFormatter(formatter)
    logger.addHandler(console)


def _night_state(value: str) -> str | float:
    v = value.strip().lower()
    if v in NIGHT_STATES:
        return v
    try:
        pct = float(v)
    except ValueError:
        pct = math.nan
    if not math.isfinite(pct):
        raise argparse.ArgumentTypeError(
            f"invalid night light state: {value} "
            "(must be 'on', 'off', 'toggle', 'status', or a percentage like '50')"
        )
    return pct


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="lumos", description="Control Windows night light")
    ap.add_argument("--version", action="version", version=__version__)
    ap.add_argument("-c", "--config", help="YAML config file")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log debug output")

    sub = ap.add_subparsers(dest="cmd", required=True)

    night = sub.add_parser("night", help="Set night light state or strength")
    night.add_argument("state", type=_night_state, metavar="on|off|toggle|status|<0-100>")

    sub.add_parser("dump", help="Print the raw night light blobs as hex")

    return ap


def _handle_night(nl: NightLight, target: str | float, policy: RefreshPolicy) -> None:
    if target == "on":
        nl.enable()
        print("Night light enabled")
    elif target == "off":
        nl.disable()
        print("Night light disabled")
    elif target == "toggle":
        nl.toggle()
        print("Night light toggled")
    elif target == "status":
        state = "ENABLED" if nl.enabled() else "DISABLED"
        print(f"Night light is {state}, strength {nl.get_strength():.1f}%")
    else:
        apply_strength(nl, float(target), policy)
        print(f"Night light strength set to {float(target):g}%")


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        cfg = load(args.config)
    except (ConfigError, OSError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    setup_logging("DEBUG" if args.verbose else cfg["logging"]["level"])

    nl = NightLight(store_from_config(cfg))
    policy = RefreshPolicy(settle_seconds=float(cfg["night"]["settle_seconds"]))

    try:
        if args.cmd == "night":
            _handle_night(nl, args.state, policy)
        elif args.cmd == "dump":
            for key, data in nl.dump().items():
                print(f"{key}: {data.hex()}")
    except (LumosError, OSError) as e:
        log.debug("night light command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
