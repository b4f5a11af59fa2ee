"""
Argument Parsing

The command line is `<program> <command> [--<option> [<value>]]...`.

DESIGN DECISION: This is a hand-written scanner, not argparse.
Options are not declared up front: any `--name` is accepted and the
command handler decides which ones it cares about. A flag with no value
gets the sentinel string "none", which handlers can check for.
"""

from typing import Optional, Sequence


OPTION_PREFIX = "--"
OPTION_WITHOUT_VALUE = "none"


def parse_command(argv: Sequence[str]) -> Optional[str]:
    """The command token (position 1), or None if there is none."""
    if len(argv) < 2:
        return None
    return argv[1]


def parse_arguments(argv: Sequence[str]) -> dict[str, str]:
    """
    Collect `--name value` pairs from argv.

    Scanning starts at position 2 (0 is the program, 1 the command).
    A token starting with `--` names an option. The next token is taken
    as its value unless it is missing or starts with `-`, in which case
    the value is OPTION_WITHOUT_VALUE. Stray tokens are ignored and a
    repeated option keeps its last value.

    >>> parse_arguments(["prog", "add", "--description", "Coffee", "--amount", "3.5"])
    {'description': 'Coffee', 'amount': '3.5'}
    >>> parse_arguments(["prog", "delete", "--id"])
    {'id': 'none'}
    """
    options: dict[str, str] = {}
    i = 2
    while i < len(argv):
        token = argv[i]
        if token.startswith(OPTION_PREFIX):
            name = token[len(OPTION_PREFIX):]
            if i + 1 < len(argv) and not argv[i + 1].startswith("-"):
                options[name] = argv[i + 1]
                i += 1
            else:
                options[name] = OPTION_WITHOUT_VALUE
        i += 1
    return options
