"""Rich progress bar for ``reposync update``."""

from __future__ import annotations

from types import TracebackType

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.progress import TaskID as RichTaskID

from reposync.engine.progress import ReconcileProgress


class RichReconcileProgress(ReconcileProgress):
    """Shows how many owners are done, which owner finished last, and how many failed.

    Owners that failed are collected per phase and listed once the phase ends::

        with RichReconcileProgress() as progress:
            result = await driver.reconcile_all()
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(stderr=True)
        self._progress = Progress(
            SpinnerColumn(finished_text="[green]✓[/green]"),
            TextColumn("{task.description}"),
            BarColumn(bar_width=30),
            MofNCompleteColumn(),
            TextColumn("{task.fields[owner]}", style="dim"),
            TimeElapsedColumn(),
            console=self._console,
            transient=False,
        )
        self._task_ids: dict[str, RichTaskID] = {}
        self.failed_owners: dict[str, list[str]] = {}

    def __enter__(self) -> RichReconcileProgress:
        self._progress.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self._progress.stop()

    def phase_start(self, phase: str, total: int | None = None) -> None:
        self.failed_owners[phase] = []
        self._task_ids[phase] = self._progress.add_task(_describe(phase, 0), total=total, owner="")

    def item_done(self, phase: str, *, owner_id: str | None = None, failed: bool = False) -> None:
        task_id = self._task_ids.get(phase)
        if task_id is None:
            return
        failed_here = self.failed_owners.setdefault(phase, [])
        if failed and owner_id is not None:
            failed_here.append(owner_id)
        label = ""
        if owner_id is not None:
            label = f"[red]{owner_id} failed[/red]" if failed else owner_id
        self._progress.update(task_id, advance=1, description=_describe(phase, len(failed_here)), owner=label)

    def phase_done(self, phase: str) -> None:
        task_id = self._task_ids.get(phase)
        if task_id is None:
            return
        task = self._progress.tasks[task_id]
        self._progress.update(task_id, completed=task.total if task.total is not None else 1, owner="")
        failed_here = self.failed_owners.get(phase) or []
        if failed_here:
            self._progress.console.print(f"[red]{phase}: failed owners: {', '.join(failed_here)}[/red]")

    def phase_error(self, phase: str, error: BaseException) -> None:
        task_id = self._task_ids.get(phase)
        if task_id is None:
            return
        self._progress.update(task_id, description=f"[red]✗ {phase}[/red]", owner=type(error).__name__)


def _describe(phase: str, failed: int) -> str:
    if not failed:
        return f"[cyan]{phase}[/cyan]"
    return f"[cyan]{phase}[/cyan] [red]({failed} failed)[/red]"
