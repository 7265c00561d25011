"""CLI entry point for the loxi interpreter.

Usage:
    python -m loxi [-v|-vv|-vvv|-vvvv] [--debug-file PATH] [script]

Options:
  -v            Increase debug verbosity (can be repeated)
  --debug-file  Write debug output to PATH instead of `debug.txt`

With a script argument the file is run once; without one an interactive
prompt is started. Debug information is written to `debug.txt` in the
current directory when verbosity is greater than zero. Setting the
environment variable LOG=DEBUG raises verbosity to at least 1.

Exit codes: 65 when the script fails with a Lox error, 66 when the script
file cannot be read.
"""

import argparse
import os
import sys

from .errors import LoxError
from .runner import Runner

EXIT_LOX_ERROR = 65
EXIT_NO_INPUT = 66


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='loxi', description="Lox language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--debug-file', metavar='PATH', default='debug.txt',
                        help='file that receives debug output (default: debug.txt)')
    parser.add_argument('script', nargs='?', help='Lox script to execute; omit for a prompt')
    args = parser.parse_args(argv)

    debug_level = args.v
    if os.environ.get('LOG', '').lower() == 'debug':
        debug_level = max(debug_level, 1)

    debug_fp = open(args.debug_file, 'w', encoding='utf-8') if debug_level > 0 else None
    try:
        runner = Runner(debug_level=debug_level, debug_fp=debug_fp)
        if args.script is None:
            runner.run_prompt()
            return
        try:
            runner.run_file(args.script)
        except OSError as e:
            print(f"Error: cannot read {args.script}: {e.strerror}", file=sys.stderr)
            sys.exit(EXIT_NO_INPUT)
        except LoxError as e:
            print(e, file=sys.stderr)
            sys.exit(EXIT_LOX_ERROR)
    finally:
        if debug_fp:
            debug_fp.close()


if __name__ == '__main__':
    main()
