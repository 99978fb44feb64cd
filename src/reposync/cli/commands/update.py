"""Update command: reconcile one owner or every owner."""

from __future__ import annotations

import argparse

from reposync import BatchResult, ChangeAction, RepoSyncConfig, UnknownOwnerError
from reposync.cli.common import format_change_breakdown
from reposync.cli.progress.rich import RichReconcileProgress
from reposync.engine.progress import ReconcileProgress
from reposync.notify import ConsoleMessenger


def format_update_summary(result: BatchResult, config: RepoSyncConfig) -> str:
    mode = "dry-run" if result.dry_run else "apply"
    owners = len(result.results) + len(result.failures)
    lines = [
        "",
        f"reposync - update complete ({mode})",
        "",
        f"  Owners:    {owners}",
        f"  Providers: {', '.join(config.providers) or 'none'}",
        f"  Store:     {config.store_path}",
        "",
    ]

    for owner_id, owner_result in result.results.items():
        lines.append(f"  {owner_id}: {format_change_breakdown(owner_result)}")
        for error in owner_result.errors:
            lines.append(f"    error: {error}")
    for owner_id, failure in result.failures.items():
        lines.append(f"  {owner_id}: failed ({failure})")

    totals = [f"{result.total(action)} {action.value}" for action in ChangeAction]
    lines.append("")
    lines.append(f"  Totals:    {', '.join(totals)}")

    if result.dry_run:
        lines.append("")
        lines.append("  [dry-run] No changes were made")

    lines.append("")
    return "\n".join(lines)


async def _update(args: argparse.Namespace, config: RepoSyncConfig, progress: ReconcileProgress | None) -> BatchResult:
    import reposync.cli as cli

    async with cli.RepoSync.from_config(config, messenger=ConsoleMessenger(), progress=progress) as rs:
        if args.owner is None:
            return await rs.reconcile_all(dry_run=args.dry_run)
        if not await rs.has_owner(args.owner) and not await rs.has_records(args.owner):
            raise UnknownOwnerError(args.owner)
        owner_result = await rs.reconcile_one(args.owner, dry_run=args.dry_run)
        if not args.dry_run:
            rs.invalidate_cache()
        return BatchResult(results={args.owner: owner_result}, failures={}, dry_run=args.dry_run)


async def run_update(args: argparse.Namespace) -> BatchResult:
    import reposync.cli as cli

    config = cli.load_config(args.config)

    if not args.verbose and args.owner is None:
        with RichReconcileProgress() as progress:
            result = await _update(args, config, progress)
    else:
        result = await _update(args, config, None)

    print(cli._format_update_summary(result, config))
    return result


__all__ = ["format_update_summary", "run_update"]
