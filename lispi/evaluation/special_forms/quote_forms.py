from lispi import EvaluatorFn, LispValue, SExpression
from lispi.errors import LispiArityError, LispiTypeError
from lispi.types.expr import (
    BigNumberExpr,
    BooleanExpr,
    BracketExpr,
    ImportExpr,
    KeywordExpr,
    ListExpr,
    LoadExpr,
    ModuleExpr,
    NumberExpr,
    RequireExpr,
    StringExpr,
    SymbolExpr,
)
from lispi.types.values import (
    FALSE,
    TRUE,
    BigNumber,
    Keyword,
    ListValue,
    Number,
    String,
    SymbolValue,
)


def _symbols(*names: str) -> tuple:
    return tuple(SymbolValue(n) for n in names)


def to_datum(expr: SExpression) -> LispValue:
    """Convert syntax into the value it denotes when quoted.

    Declaration nodes were reclassified by the parser; quoting them rebuilds
    the list they were read from.
    """
    match expr:
        case NumberExpr(value=value):
            return Number(value)
        case BigNumberExpr(value=text):
            return BigNumber.from_text(text)
        case StringExpr(value=value):
            return String(value)
        case BooleanExpr(value=value):
            return TRUE if value else FALSE
        case KeywordExpr(value=value):
            return Keyword(value)
        case SymbolExpr(name=name):
            return SymbolValue(name)
        case ListExpr(elements=elements) | BracketExpr(elements=elements):
            return ListValue(tuple(to_datum(e) for e in elements))
        case ModuleExpr(name=name, exports=exports, body=body):
            export_list = ListValue(_symbols("export", *exports))
            return ListValue(
                _symbols("module", name) + (export_list,) + tuple(to_datum(e) for e in body)
            )
        case ImportExpr(module_name=name):
            return ListValue(_symbols("import", name))
        case LoadExpr(filename=filename):
            return ListValue((SymbolValue("load"), String(filename)))
        case RequireExpr(filename=filename, as_alias=alias, only=only):
            items: tuple = (SymbolValue("require"), String(filename))
            if alias is not None:
                items += (Keyword("as"), SymbolValue(alias))
            elif only is not None:
                items += (Keyword("only"), ListValue(_symbols(*only)))
            return ListValue(items)
    raise LispiTypeError(f"Cannot quote {expr!r}")


def quote_form(
    tail: list[SExpression], env, context, evaluate_fn: EvaluatorFn
) -> LispValue:
    if len(tail) != 1:
        raise LispiArityError("quote expects exactly 1 argument")
    return to_datum(tail[0])
