"""Shared CLI formatting helpers."""

from __future__ import annotations

from reposync.contracts.sync import ChangeAction, ReconcileResult


def format_change_breakdown(result: ReconcileResult) -> str:
    parts: list[str] = []
    for action in ChangeAction:
        count = result.count(action)
        if count:
            parts.append(f"{count} {action.value}")
    return ", ".join(parts) if parts else "up to date"
