"""Validate command: check repository URLs for an owner without declaring them."""

from __future__ import annotations

import argparse

from reposync import UrlValidationError
from reposync.notify import LoggingMessenger


def format_validate_summary(urls: list[str], message: str) -> str:
    if message:
        return f"\nreposync - {len(urls)} url(s) checked\n\n  {message}\n"
    return f"\nreposync - {len(urls)} url(s) checked\n\n  All repository URLs are valid.\n"


async def run_validate(args: argparse.Namespace) -> str:
    """Print the validation outcome; raise when any URL was rejected."""
    import reposync.cli as cli

    config = cli.load_config(args.config)
    async with cli.RepoSync.from_config(config, messenger=LoggingMessenger()) as rs:
        message = await rs.validate_urls(args.urls, args.owner)

    print(cli._format_validate_summary(args.urls, message))
    if message:
        raise UrlValidationError(message)
    return message


__all__ = ["format_validate_summary", "run_validate"]
