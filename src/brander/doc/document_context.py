"""Tree-shaped contexts describing the fragments of generated documentation."""
from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from ..config.context import Context
from ..utils import get_path, trim

if TYPE_CHECKING:
    from ..config.config import Config
    from ..file import File


class DocumentContext(Context):
    """One renderable fragment of a document.

    The parent link is fixed when the node is created and children can only be attached through
    :meth:`adopt`, which only accepts nodes created with this node as their parent. Together this
    keeps every tree acyclic.
    """

    __slots__ = ("_type", "_data", "_parent", "_children")

    def __init__(self, type: str, data: dict[str, Any], parent: DocumentContext | None, config: Config) -> None:
        super().__init__(config)
        self._type = type
        self._data = data
        self._parent = parent
        self._children: list[DocumentContext] = []

    def adopt(self, children: Iterable[DocumentContext]) -> None:
        children = list(children)
        for child in children:
            if child.parent is not self:
                raise ValueError(f"{child!r} was not created as a child of {self!r}")
        self._children.extend(children)

    def get(self, name: str, default: Any = None) -> Any:
        return get_path(self._data, name, default)

    def is_root(self) -> bool:
        return False

    @property
    def children(self) -> tuple[DocumentContext, ...]:
        return tuple(self._children)

    @property
    def data(self) -> dict[str, Any]:
        return self._data

    @property
    def depth(self) -> int:
        depth = 0
        parent = self._parent
        while parent is not None:
            depth += 1
            parent = parent.parent
        return depth

    @property
    def parent(self) -> DocumentContext | None:
        return self._parent

    @property
    def root(self) -> RootDocumentContext | None:
        """The nearest node, starting with this one, marked as a root."""
        context: DocumentContext | None = self
        while context is not None:
            if context.is_root():
                return context  # type: ignore[return-value]
            context = context.parent
        return None

    @property
    def title(self) -> str | None:
        return trim(self._data.get("title")) or None

    @property
    def type(self) -> str:
        return self._type

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._type}, title={self.title!r}, depth={self.depth})"


class RootDocumentContext(DocumentContext):
    """The top of a tree, bound to the Markdown file it is written to."""

    __slots__ = ("_file",)

    def __init__(self, type: str, file: File, data: dict[str, Any], config: Config) -> None:
        super().__init__(type, data, None, config)
        self._file = file

    def is_root(self) -> bool:
        return True

    @property
    def file(self) -> File:
        return self._file


class AssetFeatureDocumentContext(DocumentContext):
    """A single asset directory: its optional preview image and its groups of files."""

    __slots__ = ("_dir", "_file_groups", "_preview_file")

    def __init__(
        self,
        type: str,
        dir: str,
        file_groups: list[dict[str, Any]],
        preview_file: File | None,
        data: dict[str, Any],
        parent: DocumentContext | None,
        config: Config,
    ) -> None:
        super().__init__(type, data, parent, config)
        self._dir = dir
        self._file_groups = file_groups
        self._preview_file = preview_file

    @property
    def dir(self) -> str:
        return self._dir

    @property
    def file_groups(self) -> list[dict[str, Any]]:
        return list(self._file_groups)

    @property
    def preview_file(self) -> File | None:
        return self._preview_file

    @property
    def title(self) -> str | None:
        if self._preview_file is None:
            return super().title
        base = self._preview_file.base()
        titles = self.get("titles") or {}
        return titles.get(base) or base
