"""Run configuration for a single mapper invocation."""

from pathlib import Path
from pydantic import BaseModel, Field, ValidationError, model_validator

from .errors import ArgumentError
from .types import OutputFormat, Role


class MapperConfig(BaseModel):
    """Everything one run needs, validated before any file is touched."""
    role: Role
    st_file: Path
    scl_files: list[Path] = Field(default_factory=list)
    output: Path | None = None
    output_format: OutputFormat = OutputFormat.TEXT
    verbose: bool = False

    @model_validator(mode="after")
    def check_document_count(self) -> "MapperConfig":
        if not self.scl_files:
            raise ValueError("At least one SCL file is required")
        if self.role == Role.SERVER and len(self.scl_files) > 1:
            raise ValueError("Only 1 SCL file allowed for server target")
        return self

    @classmethod
    def from_options(cls, **options) -> "MapperConfig":
        """Build a config from command-line values, raising ArgumentError on misuse."""
        try:
            return cls(**options)
        except ValidationError as e:
            messages = [err["msg"].removeprefix("Value error, ") for err in e.errors()]
            raise ArgumentError("; ".join(messages)) from e
