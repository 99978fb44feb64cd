"""CLI app entrypoint and error mapping."""

from __future__ import annotations

import sys

from reposync import ConfigError, StorageError, UnknownOwnerError, UrlValidationError


def main(argv: list[str] | None = None) -> int:
    import reposync.cli as cli

    parser = cli.build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        cli.logging.basicConfig(level=cli.logging.DEBUG, format="%(name)s %(message)s", stream=sys.stderr)

    try:
        if args.command == "update":
            result = cli.asyncio.run(cli._run_update(args))
            if not result.succeeded:
                return 5
        elif args.command == "validate":
            cli.asyncio.run(cli._run_validate(args))
        elif args.command == "help-text":
            cli.asyncio.run(cli._run_help_text(args))
        return 0
    except (ConfigError, StorageError, UnknownOwnerError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 3
    except UrlValidationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 4
    except Exception as exc:  # pragma: no cover
        print(f"error: {exc}", file=sys.stderr)
        return 1


__all__ = ["main"]
