from __future__ import annotations

import logging
import os
import sys
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path
from typing import TextIO

from botocore.exceptions import BotoCoreError, ClientError

from .arg_parser import parse_args, usage
from .aws_api import Ec2InventoryService, build_filters
from .config import ListConfig, load_config
from .models import FilterSpec
from .projector import project_instances
from .report import print_report
from .terminal import detect_terminal

logger = logging.getLogger(__name__)

PROG = "ec2-list"
EXIT_SERVICE_ERROR = 254
EXIT_FAILURE = 255
EXIT_INTERRUPTED = 130


def apply_config(spec: FilterSpec, config: ListConfig) -> FilterSpec:
    """Merge file defaults under the command line; flags only ever turn output off."""
    display = replace(
        spec.display,
        color=spec.display.color and config.color,
        headers=spec.display.headers and config.headers and not spec.display.ip_only,
    )
    return replace(spec, display=display)


def run(
    spec: FilterSpec,
    service: Ec2InventoryService,
    stream: TextIO | None = None,
) -> None:
    stream = stream or sys.stdout
    reservations = service.describe_instances(build_filters(spec))
    records = project_instances(reservations, spec.tag_names)
    terminal = detect_terminal(spec.display.color, stream)
    print_report(records, spec.extra_tag_names, spec.display, terminal, stream)


def main(argv: Sequence[str] | None = None, config_path: str | Path | None = None) -> int:
    spec = parse_args(sys.argv[1:] if argv is None else argv)
    if spec.help_requested:
        sys.stdout.write(usage(PROG))
        return 0

    config = load_config(config_path)
    logging.basicConfig(
        level=config.log_level_number,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    spec = apply_config(spec, config)
    logger.debug("Listing instances for %s", spec)
    service = Ec2InventoryService(profile=config.profile, region=config.region)

    try:
        run(spec, service)
    except ClientError as error:
        print(error, file=sys.stderr)
        return EXIT_SERVICE_ERROR
    except BotoCoreError as error:
        print(error, file=sys.stderr)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        return EXIT_INTERRUPTED
    except BrokenPipeError:
        _silence_stdout()
    return 0


def _silence_stdout() -> None:
    # Reader closed the pipe; flushing at exit must not raise again.
    try:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
    except (OSError, ValueError):
        pass


def entry_point() -> None:
    sys.exit(main())


if __name__ == "__main__":
    entry_point()
