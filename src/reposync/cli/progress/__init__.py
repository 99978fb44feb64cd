"""CLI progress renderers."""

from reposync.cli.progress.rich import RichReconcileProgress

__all__ = ["RichReconcileProgress"]
