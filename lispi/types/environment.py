"""Runtime environment for lispi.

The Environment stores bindings of names to evaluated values and supports
nested scopes via an `outer` link. Closures keep a reference to the scope they
were created in, so a scope lives as long as any closure or child refers to it.
Qualified names like `alias.member` resolve through a Namespace value bound to
`alias`.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from lispi.errors import LispiExportNotFound, LispiInvalidSymbol, LispiUnboundSymbol
from lispi.types.values import Namespace, Value


class Environment:
    """Hierarchical mapping from names to values."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[str, Value] = {}
        self.outer: Environment | None = outer

    def child(self) -> Environment:
        """Create a new scope whose parent is this one."""
        return Environment(outer=self)

    def root(self) -> Environment:
        env = self
        while env.outer is not None:
            env = env.outer
        return env

    def define(self, name: str, value: Value) -> None:
        """Bind `name` to `value` in this (innermost) scope, replacing any binding.

        Raises LispiInvalidSymbol if `name` is not a non-empty string.
        """
        if not isinstance(name, str) or not name:
            raise LispiInvalidSymbol(f"Cannot define {name!r} as a symbol")
        self.vars[name] = value

    def find(self, name: str) -> Optional[Environment]:
        """Find the nearest environment in the chain that binds `name`."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.vars:
                return env
            env = env.outer
        return None

    def set(self, name: str, value: Value) -> None:
        """Update an existing binding for `name` in the environment chain.

        Raises LispiUnboundSymbol if the name is not bound anywhere.
        """
        env = self.find(name)
        if env is None:
            raise LispiUnboundSymbol(f"Cannot set unbound symbol {name}")
        env.vars[name] = value

    def lookup(self, name: str) -> Value:
        """Look up the value bound to `name`.

        Order of resolution:
        1) Lexical chain (locals, closures, globals)
        2) Qualified `alias.member` through a Namespace bound to `alias`
        Raises LispiUnboundSymbol if not found.
        """
        env = self.find(name)
        if env is not None:
            return env.vars[name]

        prefix, dot, member = name.partition(".")
        if dot and prefix and member:
            ns_env = self.find(prefix)
            if ns_env is not None and isinstance(ns_env.vars[prefix], Namespace):
                ns = ns_env.vars[prefix]
                if member not in ns.members:
                    raise LispiExportNotFound(
                        f"Module '{ns.name}' does not export '{member}'"
                    )
                return ns.members[member]

        raise LispiUnboundSymbol(f"Cannot lookup unbound symbol {name}")

    def update(self, mapping: dict[str, Value]) -> None:
        """Bulk-define a mapping of name -> value in the current frame."""
        for k, v in mapping.items():
            self.define(k, v)

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        first = True
        for k, v in self.vars.items():
            if not first:
                buffer.write(", ")
            buffer.write(f"{k}: {v}")
            first = False
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")  # indicate parent exists
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Chain representation for debugging purposes."""
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            env = self
            chain = []
            while env is not None:
                env_buf = StringIO()
                env._write_vars(env_buf)
                chain.append(env_buf.getvalue())
                env = env.outer
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()
