"""
Rendered symbol library.

Each symbol is a one-page drawio file stored as ``{dir}/{lib}/{cell}.drawio``.
The library keeps the file text in memory, keyed by ``(lib, cell)``, and
parses it on demand.

Example::

    library = Renderer(schematic, styles).render_symbols()
    library.write_to_dir("symbols")

    library = SymbolLibrary.load_from_dir("symbols")
    pages = library.pages()
    pages[("analogLib", "res")].objects
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterator, Tuple

from ..drawio.parser import SymbolPage, parse_drawio
from ..exceptions import ExportError, FileFormatError, FileNotFoundError

logger = logging.getLogger(__name__)

SymbolKey = Tuple[str, str]

SYMBOL_SUFFIX = ".drawio"


def _read_symbol(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileFormatError(
            f"Cannot read symbol file: {e}",
            context={"file": str(path)},
        ) from e


class SymbolLibrary:
    """Ordered mapping ``(lib, cell) -> drawio text``."""

    def __init__(self, symbols: Dict[SymbolKey, str] | None = None):
        self._symbols: Dict[SymbolKey, str] = dict(symbols or {})

    def __len__(self) -> int:
        return len(self._symbols)

    def __contains__(self, key: object) -> bool:
        return key in self._symbols

    def __iter__(self) -> Iterator[SymbolKey]:
        return iter(self._symbols)

    def __getitem__(self, key: SymbolKey) -> str:
        return self._symbols[key]

    def __setitem__(self, key: SymbolKey, content: str) -> None:
        self._symbols[key] = content

    def items(self):
        return self._symbols.items()

    def pages(self) -> Dict[SymbolKey, SymbolPage]:
        """Parse every symbol file once.

        Raises:
            FileFormatError: If a file is malformed or has no page.
        """
        pages: Dict[SymbolKey, SymbolPage] = {}
        for (lib, cell), content in self._symbols.items():
            parsed = parse_drawio(content)
            if not parsed:
                raise FileFormatError(
                    f"Symbol file has no page: {lib}/{cell}",
                    context={"symbol": f"{lib}/{cell}"},
                )
            # One page per symbol file; the last one wins
            pages[(lib, cell)] = list(parsed.values())[-1]
        return pages

    def write_to_dir(self, directory: Path | str) -> list[Path]:
        """Write ``{directory}/{lib}/{cell}.drawio`` for every symbol.

        Raises:
            ExportError: If a directory or file cannot be written.
        """
        directory = Path(directory)
        written = []
        for (lib, cell), content in self._symbols.items():
            path = directory / lib / f"{cell}{SYMBOL_SUFFIX}"
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(content, encoding="utf-8")
            except OSError as e:
                raise ExportError(
                    f"Cannot write symbol file: {e}",
                    context={"file": str(path), "symbol": f"{lib}/{cell}"},
                ) from e
            logger.info("Symbol rendered to: %s", path)
            written.append(path)
        return written

    @classmethod
    def load_from_dir(cls, directory: Path | str) -> SymbolLibrary:
        """Read every ``{lib}/{cell}.drawio`` below *directory*.

        Libraries and cells are read in sorted order.

        Raises:
            FileNotFoundError: If *directory* does not exist.
            FileFormatError: If a symbol file cannot be read as UTF-8 text.
        """
        directory = Path(directory)
        if not directory.is_dir():
            raise FileNotFoundError(
                f"Symbols directory not found: {directory}",
                context={"directory": str(directory)},
                suggestions=["Render the symbol library first with 'sch2drawio symbols'"],
            )

        library = cls()
        for lib_dir in sorted(p for p in directory.iterdir() if p.is_dir()):
            for cell_file in sorted(lib_dir.glob(f"*{SYMBOL_SUFFIX}")):
                if cell_file.is_file():
                    library[(lib_dir.name, cell_file.stem)] = _read_symbol(cell_file)
        logger.debug("Loaded %d symbols from %s", len(library), directory)
        return library
