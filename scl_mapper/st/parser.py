"""Declaration parser for located ST variables using a Lark grammar."""

from pathlib import Path
from lark import Lark, Transformer
from lark.exceptions import LarkError

from ..core.types import VariableBinding


GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"


class DeclarationTransformer(Transformer):
    """Transform a declaration parse tree into a VariableBinding."""

    def start(self, items):
        name, address, type_name = items
        return VariableBinding(
            name=str(name),
            address=str(address),
            type_name=str(type_name),
        )


class DeclarationParser:
    """Parser for single ``<name> AT <address> : <type>;`` lines."""

    def __init__(self):
        with open(GRAMMAR_PATH) as f:
            grammar = f.read()
        self.parser = Lark(grammar, parser="lalr", transformer=DeclarationTransformer())

    def parse(self, line: str) -> VariableBinding:
        """Parse one declaration line, raising on anything else."""
        return self.parser.parse(line)

    def parse_line(self, line: str) -> VariableBinding | None:
        """Parse one declaration line, returning None when it does not match."""
        try:
            return self.parse(line)
        except LarkError:
            return None
