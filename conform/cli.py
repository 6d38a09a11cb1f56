from typing import Dict, Iterator, List
from contextlib import contextmanager
from pathlib import Path
import argparse
import logging
import os
import sys

from conform.config import DEFAULT_CONFIG_PATH

EXIT_OK = 0
EXIT_POLICY_FAILED = 1
EXIT_CONFIG_ERROR = 2


class Commands:
    """
    Registry of (possibly nested) subcommands, addressed by slash-separated
    names: `commands('config/check')` yields the parser for `config check`.
    The chosen names land in `args.command`, `args.subcommand`, ...
    """
    def __init__(self, parser: argparse.ArgumentParser) -> None:
        self.parsers: Dict[str, argparse.ArgumentParser] = {'': parser}
        self.groups: Dict[str, argparse._SubParsersAction] = {}

    def _group(self, prefix: str, depth: int) -> argparse._SubParsersAction:
        if prefix not in self.groups:
            dest = ('sub' * depth) + 'command'
            self.groups[prefix] = self.parsers[prefix].add_subparsers(dest=dest)
        return self.groups[prefix]

    def parser(self, name: str) -> argparse.ArgumentParser:
        parts: List[str] = name.split('/')
        prefix = ''
        for depth, part in enumerate(parts):
            key = f"{prefix}/{part}" if prefix else part
            if key not in self.parsers:
                self.parsers[key] = self._group(prefix, depth).add_parser(part)
            prefix = key
        return self.parsers[prefix]

    @contextmanager
    def __call__(self, name: str) -> Iterator[argparse.ArgumentParser]:
        yield self.parser(name)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='conform', description="Enforce source tree policies.")
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging.')
    commands = Commands(parser)

    with commands('enforce') as cmd:
        cmd.add_argument('--config', type=Path, default=DEFAULT_CONFIG_PATH, help='Path to the policy configuration.')
        cmd.add_argument('--root', type=Path, default=Path('.'), help='Directory to check.')

    with commands('config/check') as cmd:
        cmd.add_argument('--config', type=Path, default=DEFAULT_CONFIG_PATH)

    return parser


def main(argv: List[str] | None = None) -> int:
    if sys.platform.lower() == "win32":
        os.system('color')
        sys.stdout.reconfigure(encoding='utf-8') # type: ignore
        sys.stderr.reconfigure(encoding='utf-8') # type: ignore

    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format='%(message)s')

    if args.command is None:
        parser.print_help()
        return EXIT_OK

    from conform.messages import error, success

    match args.command:
        case 'enforce':
            from conform.tasks.enforce import enforce_main
            try:
                valid = enforce_main(args.config, args.root)
            except (OSError, ValueError) as e:
                error(f"Failed to load {args.config}: {e}")
                return EXIT_CONFIG_ERROR
            return EXIT_OK if valid else EXIT_POLICY_FAILED

        case 'config':
            match args.subcommand:
                case 'check':
                    from conform.config import load_config
                    try:
                        config = load_config(args.config)
                    except (OSError, ValueError) as e:
                        error(f"Invalid configuration {args.config}: {e}")
                        return EXIT_CONFIG_ERROR
                    success(f"{args.config}: {len(config.policies)} policies configured")
                    return EXIT_OK
                case _:
                    error("Missing subcommand for 'config' (expected: check)")
                    return EXIT_CONFIG_ERROR

        case _:
            raise ValueError(f"Unknown command: {args.command}")
