"""CLI entrypoint for namesmith."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import yaml

from namesmith.src.errors import NamesmithError
from namesmith.src.service import NameService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

DEFAULT_CONFIG = Path(__file__).parent / "config" / "default.yaml"


def load_config(config_path: Path) -> dict:
    """Load YAML config with inheritance support."""
    with open(config_path) as f:
        config = yaml.safe_load(f) or {}

    # Handle inherits
    if "inherits" in config:
        base_name = config.pop("inherits")
        base_path = config_path.parent.parent / f"{base_name}.yaml"
        base = load_config(base_path)
        config = _deep_merge(base, config)

    return config


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def build_request(args: argparse.Namespace) -> dict:
    """Translate CLI flags into the request surface. Unset flags use config defaults."""
    request = {
        "count": args.count,
        "seed": args.seed,
        "separator": args.separator,
        "casing": args.casing,
        "mode": args.mode,
        "uniquenessScope": args.unique,
        "fixedWord": args.fixed_word,
    }
    if args.blacklist:
        request["blacklistText"] = args.blacklist.read_text()
    return {key: value for key, value in request.items() if value is not None}


async def _generate(service: NameService, request: dict) -> int:
    try:
        result = await service.generate(request)
    except NamesmithError as e:
        logger.error("%s: %s", type(e).__name__, e)
        return 1

    for name in result.names:
        print(name)
    if result.shortfall_message:
        print(f"// {result.shortfall_message}")
    return 0


async def _run_live(service: NameService, config: dict, port: int | None) -> None:
    """Serve the browser UI until interrupted."""
    from namesmith.src.live_server import LiveServer

    server_config = config.get("server", {})
    port = port or server_config.get("port", 8765)
    server = LiveServer(service, host=server_config.get("host", "localhost"), port=port)

    print(f"\n  Open http://{server.host}:{port} to generate names\n")
    await server.serve_forever()


def _show_history(service: NameService) -> None:
    names = sorted(service.history.names)
    for name in names:
        print(name)
    print(f"// {len(names)} used names in {service.history.path}")


def _clear_history(service: NameService, assume_yes: bool) -> int:
    if not assume_yes:
        answer = input("Clear persisted used names? This cannot be undone. [y/N] ")
        if answer.strip().lower() not in ("y", "yes"):
            print("Aborted.")
            return 1
    outcome = service.clear_history()
    if not outcome.ok:
        logger.error("Could not clear history: %s", outcome.error)
        return 1
    print("Persisted used names cleared.")
    return 0


def _export_history(service: NameService, output: Path) -> None:
    payload = service.history.export()
    if output.is_dir():
        output = output / payload.filename
    output.write_text(payload.content + "\n")
    logger.info("Exported %d used names to %s", len(service.history), output)


def main():
    parser = argparse.ArgumentParser(description="namesmith: random adjective + noun names")
    parser.add_argument(
        "--config", type=Path, default=None,
        help="Path to config YAML (default: namesmith/config/default.yaml)",
    )
    parser.add_argument("-n", "--count", type=str, help="How many names (1-1000)")
    parser.add_argument("--seed", type=str, help="Seed string for reproducible output")
    parser.add_argument("--separator", type=str, help="Text placed between words")
    parser.add_argument("--casing", choices=["upper", "lower", "title", "none"], help="Output casing")
    parser.add_argument("--mode", choices=["adj-noun", "adj-fixed"], help="Name composition")
    parser.add_argument("--fixed-word", type=str, help="Second word in adj-fixed mode")
    parser.add_argument(
        "--unique", choices=["none", "session", "global"],
        help="Uniqueness scope: none, this process, or persisted across runs",
    )
    parser.add_argument("--blacklist", type=Path, help="File of names to never emit, one per line")
    parser.add_argument("--history", action="store_true", help="Print persisted used names")
    parser.add_argument("--export", type=Path, help="Write persisted used names as JSON")
    parser.add_argument("--clear-history", action="store_true", help="Forget persisted used names")
    parser.add_argument("--yes", action="store_true", help="Don't ask for confirmation")
    parser.add_argument("--live", action="store_true", help="Serve the browser UI")
    parser.add_argument("--port", type=int, help="Port for --live server (default from config)")

    args = parser.parse_args()

    config = load_config(args.config or DEFAULT_CONFIG)
    service = NameService(config)

    if args.history:
        _show_history(service)
        sys.exit(0)

    if args.export:
        _export_history(service, args.export)
        sys.exit(0)

    if args.clear_history:
        sys.exit(_clear_history(service, args.yes))

    if args.live:
        try:
            asyncio.run(_run_live(service, config, args.port))
        except KeyboardInterrupt:
            logger.info("Live server interrupted")
        sys.exit(0)

    sys.exit(asyncio.run(_generate(service, build_request(args))))


if __name__ == "__main__":
    main()
