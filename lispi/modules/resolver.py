"""Evaluation of module, import, require and load declarations.

The parser has already validated the shape of each declaration; this module
gives them meaning:

    (module name (export a b) body...)  evaluate body in a child scope,
                                        register the exported subset
    (import name)                       copy a registered module's exports in
    (require "file")                    load a file's modules, then import them
    (require "file" :as m)              ... reachable only as m.name
    (require "file" :only (a b))        ... only a and b, unqualified
    (load "file")                       evaluate a file's forms in place

File access is delegated to the SourceLoader held by the runtime context.
"""

from __future__ import annotations

import logging
from typing import Dict, List

from lispi import EvaluatorFn, LispValue
from lispi.errors import LispiExportNotFound, LispiLoaderError, LispiModuleError
from lispi.modules.loader import SourceLoader
from lispi.modules.registry import Module
from lispi.runtime_context import RuntimeContext
from lispi.types.environment import Environment
from lispi.types.expr import Expr, ImportExpr, LoadExpr, ModuleExpr, RequireExpr
from lispi.types.values import Namespace, Nil

logger = logging.getLogger(__name__)


def _bind_all(env: Environment, bindings: Dict[str, LispValue]) -> None:
    for name, value in bindings.items():
        env.define(name, value)


def _loader(context: RuntimeContext, filename: str) -> SourceLoader:
    if context.loader is None:
        raise LispiLoaderError(f"No source loader configured to load '{filename}'")
    return context.loader


def _read_forms(loader: SourceLoader, filename: str) -> List[Expr]:
    try:
        return loader.load_forms(filename)
    except OSError as err:
        raise LispiLoaderError(f"Cannot load '{filename}': {err}") from err


def _canonical_name(loader: SourceLoader, filename: str) -> str:
    try:
        return loader.canonical_name(filename)
    except OSError as err:
        raise LispiLoaderError(f"Cannot load '{filename}': {err}") from err


def module_form(
    node: ModuleExpr, env: Environment, context: RuntimeContext, evaluate_fn: EvaluatorFn
) -> LispValue:
    scope = env.child()
    for form in node.body:
        evaluate_fn(form, scope, context)

    missing = [name for name in node.exports if name not in scope.vars]
    if missing:
        raise LispiExportNotFound(
            f"Module '{node.name}' exports undefined symbol(s): {', '.join(missing)}"
        )

    module = Module(node.name, scope, node.exports)
    if node.name in context.registry:
        logger.debug("Redefining module %s", node.name)
    context.declare(module)
    logger.debug("Registered module %s exporting %s", node.name, ", ".join(node.exports))

    # Qualified access as name.member from the defining scope
    env.define(node.name, Namespace(node.name, module.exported_bindings()))
    return Nil


def import_form(
    node: ImportExpr, env: Environment, context: RuntimeContext, evaluate_fn: EvaluatorFn
) -> LispValue:
    module = context.registry.require(node.module_name)
    _bind_all(env, module.exported_bindings())
    return Nil


def _required_modules(
    node: RequireExpr, env: Environment, context: RuntimeContext, evaluate_fn: EvaluatorFn
) -> tuple[Module, ...]:
    loader = _loader(context, node.filename)
    key = _canonical_name(loader, node.filename)

    cached = context.registry.file_modules(key)
    if cached is not None:
        logger.debug("Require %s: already loaded", key)
        return cached

    with context.requiring_file(key) as declared:
        forms = _read_forms(loader, node.filename)
        # Files get their own scope under the root, so their private helpers
        # and module namespaces stay out of the requiring scope
        scope = env.root().child()
        for form in forms:
            evaluate_fn(form, scope, context)

    if not declared:
        raise LispiModuleError(f"'{node.filename}' does not declare a module")
    modules = tuple(declared)
    context.registry.cache_file(key, modules)
    logger.debug("Require %s: modules %s", key, ", ".join(m.name for m in modules))
    return modules


def require_form(
    node: RequireExpr, env: Environment, context: RuntimeContext, evaluate_fn: EvaluatorFn
) -> LispValue:
    exports: Dict[str, LispValue] = {}
    for module in _required_modules(node, env, context, evaluate_fn):
        exports.update(module.exported_bindings())

    if node.as_alias is not None:
        env.define(node.as_alias, Namespace(node.as_alias, exports))
    elif node.only is not None:
        for name in node.only:
            if name not in exports:
                raise LispiExportNotFound(f"'{node.filename}' does not export '{name}'")
        _bind_all(env, {name: exports[name] for name in node.only})
    else:
        _bind_all(env, exports)
    return Nil


def load_form(
    node: LoadExpr, env: Environment, context: RuntimeContext, evaluate_fn: EvaluatorFn
) -> LispValue:
    loader = _loader(context, node.filename)
    key = _canonical_name(loader, node.filename)
    result: LispValue = Nil
    with context.loading_file(key):
        forms = _read_forms(loader, node.filename)
        logger.debug("Load %s: %d form(s)", key, len(forms))
        for form in forms:
            result = evaluate_fn(form, env, context)
    return result
