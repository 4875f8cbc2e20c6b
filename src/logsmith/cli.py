from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from logsmith.core.appenders import DefaultConsoleAppender, DefaultMemoryAppender
from logsmith.core.config import (
    LoggerRoot,
    RotationRoot,
    SaveFormat,
    load_document,
    save_document,
)
from logsmith.core.errors import LogsmithError
from logsmith.core.logger import Logger
from logsmith.core.manager import LogManager

_KINDS: dict[str, type[BaseModel]] = {"loggers": LoggerRoot, "rotation": RotationRoot}


def _configure_logging() -> None:
    level = os.getenv("LOGSMITH_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _config_path(value: Optional[str]) -> Path:
    path = value or os.getenv("LOGSMITH_CONFIG")
    if not path:
        raise ValueError("no configuration path given and LOGSMITH_CONFIG is not set")
    return Path(path)


def _cmd_demo(args: argparse.Namespace) -> None:
    memory = DefaultMemoryAppender(args.keep)
    manager = LogManager(appenders=[DefaultConsoleAppender(stream=sys.stdout), memory])
    demo = Logger(args.name, manager)

    demo.trace("entering demo", "demo")
    demo.debug("building sample entries", "demo")
    demo.info("service started", "startup")
    demo.warn("disk usage above 80%", "health")
    try:
        raise RuntimeError("upstream timeout")
    except RuntimeError as exc:
        demo.error(exc, "requests")

    print(f"\nStored {len(manager)} entries; memory appender kept {len(memory)}.")
    manager.close()


def _cmd_convert(args: argparse.Namespace) -> None:
    model = _KINDS[args.kind]
    root = load_document(args.source, model)
    save_document(args.destination, root, SaveFormat(args.format))
    print(f"Wrote {args.destination} ({args.format}).")


def _cmd_rotate(args: argparse.Namespace) -> None:
    root = load_document(args.config, RotationRoot)
    total = 0
    for configuration in root.build():
        acted = configuration.invoke(args.files)
        for file in acted:
            print(f"{type(configuration).__name__}: {file}")
        total += len(acted)
    print(f"\nRotated {total} file(s).")


def _cmd_show(args: argparse.Namespace) -> None:
    root = load_document(_config_path(args.config), LoggerRoot)
    for definition in root.loggers:
        manager = definition.log_manager
        state = "enabled" if definition.enabled else "disabled"
        print(f"{definition.name} [{state}] max_in_memory={manager.max_in_memory}")
        for appender in manager.log_appenders:
            levels = ",".join(level.value for level in appender.log_levels)
            print(f"  - {appender.type} levels={levels}")
    print(f"\nFound {len(root.loggers)} logger(s).")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="logsmith", description="Structured logging toolkit.")
    sub = p.add_subparsers(dest="command", required=True)

    demo = sub.add_parser("demo", help="Log sample entries to the console")
    demo.add_argument("--name", default="demo")
    demo.add_argument("--keep", type=int, default=3, help="Entries kept by the memory appender")
    demo.set_defaults(handler=_cmd_demo)

    convert = sub.add_parser("convert", help="Convert a configuration between JSON and XML")
    convert.add_argument("source")
    convert.add_argument("destination")
    convert.add_argument("--format", choices=[f.value for f in SaveFormat], default="json")
    convert.add_argument("--kind", choices=sorted(_KINDS), default="loggers")
    convert.set_defaults(handler=_cmd_convert)

    rotate = sub.add_parser("rotate", help="Apply a rotation configuration to files")
    rotate.add_argument("config")
    rotate.add_argument("files", nargs="+")
    rotate.set_defaults(handler=_cmd_rotate)

    show = sub.add_parser("show", help="Summarize a logger configuration")
    show.add_argument("config", nargs="?", default=None, help="Defaults to $LOGSMITH_CONFIG")
    show.set_defaults(handler=_cmd_show)
    return p


def main(argv: Optional[list[str]] = None) -> None:
    """CLI entrypoint."""
    _configure_logging()
    args = build_parser().parse_args(argv)

    try:
        args.handler(args)
    except FileNotFoundError as e:
        print(str(e), file=sys.stderr)
        raise SystemExit(2)
    except (LogsmithError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)


if __name__ == "__main__":
    main()
