from __future__ import annotations
from contextlib import contextmanager
from typing import Iterator, List, Optional, TYPE_CHECKING

from lispi.errors import LispiCircularLoadError, LispiCircularRequireError
from lispi.modules.registry import Module, ModuleRegistry

if TYPE_CHECKING:
    from lispi.modules.loader import SourceLoader


class RuntimeContext:
    """State shared by one evaluation: module registry, loader, require stack.

    Passed explicitly through the evaluator so independent interpreters never
    share registry state.
    """

    __slots__ = ("registry", "loader", "requiring", "loading", "_declared")

    def __init__(
        self,
        registry: Optional[ModuleRegistry] = None,
        loader: Optional["SourceLoader"] = None,
    ):
        self.registry: ModuleRegistry = registry if registry is not None else ModuleRegistry()
        self.loader = loader
        # Canonical names of files currently being required, outermost first
        self.requiring: List[str] = []
        # Canonical names of files currently being loaded, outermost first
        self.loading: List[str] = []
        # One collector per file being required; module forms append to the top
        self._declared: List[List[Module]] = []

    @contextmanager
    def requiring_file(self, key: str) -> Iterator[List[Module]]:
        """Track `key` as in progress and collect the modules it declares."""
        if key in self.requiring:
            chain = " -> ".join(self.requiring + [key])
            raise LispiCircularRequireError(f"Circular require: {chain}")
        declared: List[Module] = []
        self.requiring.append(key)
        self._declared.append(declared)
        try:
            yield declared
        finally:
            self._declared.pop()
            self.requiring.pop()

    @contextmanager
    def loading_file(self, key: str) -> Iterator[None]:
        """Track `key` as in progress while its forms are evaluated."""
        if key in self.loading:
            chain = " -> ".join(self.loading + [key])
            raise LispiCircularLoadError(f"Circular load: {chain}")
        self.loading.append(key)
        try:
            yield
        finally:
            self.loading.pop()

    def declare(self, module: Module) -> None:
        self.registry.register(module)
        if self._declared:
            self._declared[-1].append(module)
