

class LispiError(Exception):
    """ Base class for all lispi errors"""
    pass

# ---------------------------------------------------------------------------
# Reader errors
# ---------------------------------------------------------------------------

class LispiParseError(LispiError):
    """ Raised when source text or a token stream cannot be turned into an Expr"""

class LispiSyntaxError(LispiParseError):
    """ Raised by the lexer on text it cannot tokenize"""

class LispiEmptyInputError(LispiParseError):
    """ Raised when the parser is given no tokens"""

class LispiInvalidNumberError(LispiParseError):
    """ Raised when a number token is not a valid numeric literal"""

class LispiInvalidBooleanError(LispiParseError):
    """ Raised when a boolean token is neither `true` nor `false`"""

class LispiUnexpectedTokenError(LispiParseError):
    """ Raised when a token cannot start an expression"""

class LispiUnexpectedClosingDelimiterError(LispiParseError):
    """ Raised when `)` or `]` appears where an expression is expected"""

class LispiUnmatchedDelimiterError(LispiParseError):
    """ Raised when input ends before a list or bracket is closed"""

class LispiTrailingTokenError(LispiParseError):
    """ Raised when tokens remain after a complete expression"""

class LispiMalformedFormError(LispiParseError):
    """ Raised when module, import, load or require has the wrong shape"""

# ---------------------------------------------------------------------------
# Evaluation errors
# ---------------------------------------------------------------------------

class LispiEvalError(LispiError):
    """ Base class for errors raised while evaluating an Expr"""

class LispiInvalidSymbol(LispiEvalError):
    """ Raised when an invalid symbol is used"""

class LispiUnboundSymbol(LispiEvalError):
    """ Raised when a symbol is used before it is bound"""

class LispiArityError(LispiEvalError):
    """ Raised when the number of arguments passed to a function is incorrect"""

class LispiTypeError(LispiEvalError):
    """ Raised when the types of arguments passed to a function are incorrect"""

class LispiEmptyListError(LispiEvalError):
    """ Raised when first or rest is applied to an empty list"""

class LispiModuleError(LispiEvalError):
    """ Base class for module, import, require and load failures"""

class LispiModuleNotFound(LispiModuleError):
    """ Raised when importing a module that was never registered"""

class LispiExportNotFound(LispiModuleError):
    """ Raised when a module does not export a requested name"""

class LispiLoaderError(LispiModuleError):
    """ Raised when a source file cannot be located or read"""

class LispiCircularRequireError(LispiModuleError):
    """ Raised when a file is required while it is still being required"""

class LispiCircularLoadError(LispiModuleError):
    """ Raised when a file is loaded while it is still being loaded"""
