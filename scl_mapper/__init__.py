"""
SCL mapper
==========

Maps IEC 61850 data attributes described in SCL files to the located
variables (``name AT %address : TYPE;``) of an IEC 61131-3 ST program.

The output table is consumed either by a protocol server, which exposes
local variables under SCL object references, or by a protocol client,
which polls remote IED reports under the same references.
"""

from .core.assembler import OutputAssembler
from .core.pipeline import MappingPipeline
from .core.types import BindingTable, MappingResult, Role
from .st.loader import BindingTableLoader

__version__ = "0.1.0"
__all__ = [
    "BindingTable",
    "BindingTableLoader",
    "MappingPipeline",
    "MappingResult",
    "OutputAssembler",
    "Role",
]
