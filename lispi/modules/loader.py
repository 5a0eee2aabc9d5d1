from __future__ import annotations
import logging
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Protocol

from lispi.config import get_source_roots
from lispi.errors import LispiLoaderError
from lispi.reader.lexer import tokenize
from lispi.reader.parser import Parser
from lispi.types.expr import Expr

logger = logging.getLogger(__name__)


class SourceLoader(Protocol):
    """Interface used by `load` and `require` to obtain top-level forms."""

    def canonical_name(self, filename: str) -> str:
        """
        Stable identity of `filename`, used to cache required files and to
        detect circular requires.

        Raises:
            LispiLoaderError: If the source cannot be located
        """
        ...

    def load_forms(self, filename: str) -> List[Expr]:
        """
        Read and parse every top-level form of `filename`.

        Raises:
            LispiLoaderError: If the source cannot be located or read
            LispiParseError: If the source does not parse
        """
        ...


def parse_source(source: str) -> List[Expr]:
    return Parser(tokenize(source)).parse_all()


class FileSourceLoader:
    """Loads source files from disk, searching relative names under `roots`."""

    def __init__(self, roots: Optional[Iterable[Path]] = None):
        self._roots = [Path(r) for r in roots] if roots is not None else None

    @property
    def roots(self) -> List[Path]:
        # Without explicit roots, read LISPI_PATH on every resolution
        return self._roots if self._roots is not None else get_source_roots()

    def resolve(self, filename: str) -> Path:
        path = Path(filename)
        if path.is_absolute():
            if path.is_file():
                return path
        else:
            for root in self.roots:
                candidate = root / path
                if candidate.is_file():
                    return candidate
        searched = ", ".join(str(r) for r in self.roots)
        raise LispiLoaderError(f"Cannot find '{filename}' (searched: {searched})")

    def canonical_name(self, filename: str) -> str:
        return str(self.resolve(filename).resolve())

    def load_forms(self, filename: str) -> List[Expr]:
        path = self.resolve(filename)
        try:
            code = path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as err:
            raise LispiLoaderError(f"Cannot read '{filename}': {err}") from err
        logger.debug("Loaded %s (%d bytes)", path, len(code))
        return parse_source(code)


class MemorySourceLoader:
    """Serves sources from an in-memory mapping of filename -> source text."""

    def __init__(self, sources: Mapping[str, str]):
        self.sources = dict(sources)

    def canonical_name(self, filename: str) -> str:
        if filename not in self.sources:
            raise LispiLoaderError(f"Cannot find '{filename}'")
        return filename

    def load_forms(self, filename: str) -> List[Expr]:
        return parse_source(self.sources[self.canonical_name(filename)])
