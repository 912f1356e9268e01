"""`brander handlers` command implementation."""
from __future__ import annotations

from rich.console import Console
from rich.table import Table

from ...doc.document_service import DocumentService
from ...task.task_service import TaskService

console = Console()


def handlers() -> None:
    """List the built-in tasks and document providers in dispatch order."""
    task_table = Table(title="Tasks", show_header=True, header_style="bold green")
    task_table.add_column("Type")
    task_table.add_column("Task")
    for task in TaskService().get_all():
        task_table.add_row(str(task.get_type()), type(task).__name__)
    console.print(task_table)

    provider_table = Table(title="Document providers", show_header=True, header_style="bold blue")
    provider_table.add_column("Type")
    provider_table.add_column("Provider")
    for provider in DocumentService().get_all():
        provider_table.add_row(provider.get_type(), type(provider).__name__)
    console.print(provider_table)
