"""Binding table loader for ST control-program sources."""

import logging
from pathlib import Path

from ..core.errors import FileAccessError
from ..core.types import BindingTable
from .parser import DeclarationParser


logger = logging.getLogger(__name__)

BLOCK_START = "VAR"
BLOCK_END = "END_VAR"


class BindingTableLoader:
    """Collects located variables declared in ``VAR ... END_VAR`` blocks."""

    def __init__(self):
        self.parser = DeclarationParser()

    def load_string(self, content: str) -> BindingTable:
        """Build a binding table from ST source text. Never fails on content."""
        table = BindingTable()
        in_block = False

        for lineno, raw in enumerate(content.splitlines(), start=1):
            line = raw.strip()

            if not in_block:
                if line == BLOCK_START:
                    in_block = True
                continue

            if line == BLOCK_END:
                in_block = False
                continue

            binding = self.parser.parse_line(line)
            if binding is None:
                if line:
                    logger.debug("Line %d is not a located declaration: %r", lineno, line)
                continue

            if binding.name in table:
                logger.debug("Variable %s redeclared on line %d, overriding", binding.name, lineno)
            table.add(binding)

        return table

    def load_file(self, path: Path) -> BindingTable:
        """Read and load an ST file."""
        logger.info("Parsing ST file %s", path)
        try:
            content = Path(path).read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise FileAccessError(f"Failed to open ST file {path}: {e.strerror or e}", path) from e

        table = self.load_string(content)
        logger.info("Loaded %d located variables from %s", len(table), path)
        return table
