"""Reconciliation engine exports."""

from reposync.engine.batch import BatchDriver
from reposync.engine.hasher import ContentHasher, compute_content_hash
from reposync.engine.progress import NullReconcileProgress, ReconcileProgress
from reposync.engine.queue import QueueWorker, enqueue_all_owners
from reposync.engine.reconciler import Reconciler

__all__ = [
    "BatchDriver",
    "ContentHasher",
    "NullReconcileProgress",
    "QueueWorker",
    "ReconcileProgress",
    "Reconciler",
    "compute_content_hash",
    "enqueue_all_owners",
]
