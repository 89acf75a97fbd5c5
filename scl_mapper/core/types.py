"""Core type definitions for the SCL mapper."""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


SENTINEL = "X"
DEVICE_DELIMITER = "/"
PATH_DELIMITER = "."


class Role(str, Enum):
    SERVER = "server"
    CLIENT = "client"


class BindingKind(str, Enum):
    MONITOR = "MONITOR"
    CONTROL = "CONTROL"


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


class VariableBinding(BaseModel):
    """A located variable declared in the control program."""
    model_config = ConfigDict(frozen=True)

    name: str
    address: str
    type_name: str = ""


class BindingTable(BaseModel):
    """Variable name to protocol address lookup, last declaration wins."""
    bindings: dict[str, VariableBinding] = Field(default_factory=dict)

    def add(self, binding: VariableBinding) -> None:
        self.bindings[binding.name] = binding

    def resolve(self, name: str) -> str | None:
        binding = self.bindings.get(name)
        if binding is None:
            return None
        return binding.address

    def __len__(self) -> int:
        return len(self.bindings)

    def __contains__(self, name: object) -> bool:
        return name in self.bindings

    def values(self) -> list[VariableBinding]:
        return list(self.bindings.values())


class LogicalNodeIndex(BaseModel):
    """LN type id to LN label (lnClass + inst)."""
    labels: dict[str, str] = Field(default_factory=dict)

    def label_for(self, ln_type: str) -> str | None:
        return self.labels.get(ln_type)


class DataObjectIndex(BaseModel):
    """DO type id to full object reference of the owning data object."""
    paths: dict[str, str] = Field(default_factory=dict)

    def path_for(self, do_type: str) -> str | None:
        return self.paths.get(do_type)


class AttributeBindingRecord(BaseModel):
    """A data attribute annotated with a program variable."""
    model_config = ConfigDict(frozen=True)

    kind: BindingKind
    path: str
    variable: str
    address: str | None = None

    @property
    def resolved(self) -> bool:
        return self.address is not None

    @property
    def rendered_address(self) -> str:
        return self.address if self.address is not None else SENTINEL


class ReportInstance(BaseModel):
    """One enumerated instance of a report control block."""
    model_config = ConfigDict(frozen=True)

    path: str
    dataset_path: str | None = None

    @property
    def rendered_dataset(self) -> str:
        return self.dataset_path if self.dataset_path is not None else SENTINEL


class Endpoint(BaseModel):
    """A network address published for a device."""
    model_config = ConfigDict(frozen=True)

    address: str


class DocumentResult(BaseModel):
    """Everything resolved from a single structural document."""
    source: str
    device_name: str = ""
    records: list[AttributeBindingRecord] = Field(default_factory=list)
    report_instances: list[ReportInstance] = Field(default_factory=list)
    endpoints: list[Endpoint] = Field(default_factory=list)
    control_variables: list[AttributeBindingRecord] = Field(default_factory=list)

    @property
    def endpoint(self) -> str:
        if not self.endpoints:
            return SENTINEL
        return self.endpoints[0].address


class MappingResult(BaseModel):
    """Merged results of one run, documents in processing order."""
    role: Role
    documents: list[DocumentResult] = Field(default_factory=list)

    @property
    def records(self) -> list[AttributeBindingRecord]:
        return [r for doc in self.documents for r in doc.records]

    def unresolved_bindings(self) -> list[AttributeBindingRecord]:
        return [r for r in self.records if not r.resolved]

    def unresolved_datasets(self) -> list[ReportInstance]:
        return [
            ri for doc in self.documents
            for ri in doc.report_instances
            if ri.dataset_path is None
        ]
