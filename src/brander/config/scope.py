"""Registry of every context created during a single generation run."""
from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..doc.document_context import DocumentContext
    from ..task.task_context import TaskContext


class Scope:
    """Tasks and documents created so far, plus free-form attributes shared between stages.

    Documents are registered along with all of their descendants so that any node of any tree can
    be looked up later, e.g. by a table of contents rendered from a different tree.
    """

    def __init__(self) -> None:
        self.attributes: dict[str, Any] = {}
        self._docs: dict[int, DocumentContext] = {}
        self._tasks: dict[int, TaskContext] = {}

    def add_doc(self, doc: DocumentContext | None) -> None:
        if doc is not None:
            self._docs[id(doc)] = doc
            self.add_all_docs(doc.children)

    def add_all_docs(self, docs: Iterable[DocumentContext]) -> None:
        for doc in docs:
            self.add_doc(doc)

    def remove_doc(self, doc: DocumentContext | None) -> None:
        if doc is not None:
            self._docs.pop(id(doc), None)
            self.remove_all_docs(doc.children)

    def remove_all_docs(self, docs: Iterable[DocumentContext]) -> None:
        for doc in docs:
            self.remove_doc(doc)

    def add_task(self, task: TaskContext | None) -> None:
        if task is not None:
            self._tasks[id(task)] = task

    def add_all_tasks(self, tasks: Iterable[TaskContext]) -> None:
        for task in tasks:
            self.add_task(task)

    def remove_task(self, task: TaskContext | None) -> None:
        if task is not None:
            self._tasks.pop(id(task), None)

    def remove_all_tasks(self, tasks: Iterable[TaskContext]) -> None:
        for task in tasks:
            self.remove_task(task)

    def clear(self) -> None:
        self.attributes.clear()
        self._docs.clear()
        self._tasks.clear()

    @property
    def docs(self) -> Iterator[DocumentContext]:
        return iter(list(self._docs.values()))

    @property
    def tasks(self) -> Iterator[TaskContext]:
        return iter(list(self._tasks.values()))
