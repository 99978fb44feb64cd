"""Help-text command: list the URL formats enabled providers accept."""

from __future__ import annotations

import argparse


async def run_help_text(args: argparse.Namespace) -> str:
    import reposync.cli as cli

    config = cli.load_config(args.config)
    async with cli.RepoSync.from_config(config) as rs:
        text = rs.validate_help_text()
    print(text)
    return text


__all__ = ["run_help_text"]
