"""Command line scanning for ``ec2-list``.

The ``-TAG [VALUE]`` grammar treats any unknown dash token as a tag
declaration, which argparse cannot express, so tokens are scanned by hand.
"""

from __future__ import annotations

from collections.abc import Sequence

from .models import DEFAULT_TAG, DisplayOptions, FilterSpec, TagFilter

HELP_FLAGS = ("-h", "--help")
NO_COLOR_FLAGS = ("--no-color",)
NO_HEADERS_FLAGS = ("-H", "--no-headers")
IP_ONLY_FLAGS = ("-I", "--ip-only")
STATE_FLAG = "--state"

USAGE = """\
Usage: {prog} [OPTION | -TAG [VALUE]]...

List EC2 instances whose tags partially match the given values.
A bare VALUE before any -TAG searches the Name tag.

Options:
  -h, --help          show this help and exit
  --no-color          disable ANSI color
  -H, --no-headers    suppress the header row
  -I, --ip-only       print only private IP addresses (implies --no-headers)
  --state STATE       filter by partial match on the instance state
  -TAG [VALUE]        filter by tag TAG, optional partial value match

Examples:
  {prog} web
  {prog} -env prod -role api --state run
"""


def usage(prog: str = "ec2-list") -> str:
    return USAGE.format(prog=prog)


def parse_args(argv: Sequence[str]) -> FilterSpec:
    """Scan ``argv`` (without the program name) into a :class:`FilterSpec`.

    Unknown values are absorbed rather than rejected: a trailing ``--state``
    yields an empty state filter and later values overwrite earlier ones.
    """
    color = True
    headers = True
    ip_only = False
    state = ""
    leading_value = ""
    tags: list[list[str]] = []

    tokens = iter(argv)
    for token in tokens:
        if token in HELP_FLAGS:
            return FilterSpec(help_requested=True)
        if token in NO_COLOR_FLAGS:
            color = False
        elif token in IP_ONLY_FLAGS:
            ip_only = True
            headers = False
        elif token in NO_HEADERS_FLAGS:
            headers = False
        elif token == STATE_FLAG:
            state = next(tokens, "")
        elif token.startswith("-"):
            name = token.lstrip("-")
            # A lone "-" or "--" names no tag.
            if name:
                tags.append([name, ""])
        elif tags:
            tags[-1][1] = token
        else:
            leading_value = token

    filters = [TagFilter(name, pattern) for name, pattern in tags]
    if not filters or leading_value:
        filters.insert(0, TagFilter(DEFAULT_TAG, leading_value))

    return FilterSpec(
        tags=tuple(filters),
        state=state,
        display=DisplayOptions(color=color, headers=headers, ip_only=ip_only),
    )
