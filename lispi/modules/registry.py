from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from lispi.errors import LispiModuleNotFound
from lispi.types.environment import Environment
from lispi.types.values import Value


@dataclass
class Module:
    name: str
    env: Environment
    exports: Tuple[str, ...] = ()

    def exported_bindings(self) -> Dict[str, Value]:
        return {name: self.env.vars[name] for name in self.exports}


@dataclass
class ModuleRegistry:
    """Named modules plus the modules declared by each required file."""

    _modules: Dict[str, Module] = field(default_factory=dict)
    _files: Dict[str, Tuple[Module, ...]] = field(default_factory=dict)

    def register(self, module: Module) -> None:
        self._modules[module.name] = module

    def require(self, name: str) -> Module:
        module = self._modules.get(name)
        if module is None:
            raise LispiModuleNotFound(f"Module '{name}' not found")
        return module

    def file_modules(self, key: str) -> Optional[Tuple[Module, ...]]:
        return self._files.get(key)

    def cache_file(self, key: str, modules: Tuple[Module, ...]) -> None:
        self._files[key] = modules

    def __contains__(self, name: str) -> bool:
        return name in self._modules
