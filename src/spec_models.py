import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Iterator, List, Optional, Dict, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Canonical specification model for an X12 transaction set.
# Python attributes are snake_case, the JSON form is camelCase.

DEFAULT_EDI_VERSION = "005010"
# Stands in for "no declared maximum" on repeatable loops and segments.
UNBOUNDED_MAX_USE = 999999


def new_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class UsageType(str, Enum):
    MANDATORY = "M"
    OPTIONAL = "O"
    CONDITIONAL = "C"


class DataType(str, Enum):
    ALPHANUMERIC = "AN"
    IDENTIFIER = "ID"
    NUMERIC_N0 = "N0"
    NUMERIC_N2 = "N2"
    REAL = "R"
    DATE = "DT"
    TIME = "TM"

    @classmethod
    def from_tag(cls, tag: Optional[str]) -> "DataType":
        """Returns the matching data type, or AN for absent/unknown tags."""
        if not tag:
            return cls.ALPHANUMERIC
        try:
            return cls(tag.strip().upper())
        except ValueError:
            return cls.ALPHANUMERIC


class SpecModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CodeValue(SpecModel):
    code: str
    description: str
    is_custom_description: Optional[bool] = None
    included: bool = True


class DiscriminatorRule(SpecModel):
    element_id: str
    operator: Literal["equals", "one-of"]
    values: List[str] = Field(default_factory=list)


class Variant(SpecModel):
    id: str = Field(default_factory=new_id)
    label: str
    discriminators: List[DiscriminatorRule] = Field(default_factory=list)
    usage_override: Optional[UsageType] = None
    condition_description: Optional[str] = None
    code_overrides: Optional[Dict[str, List[CodeValue]]] = None
    comments: Optional[str] = None


class InlineExample(SpecModel):
    value: str
    description: Optional[str] = None


class Element(SpecModel):
    """A single data element within a segment."""
    id: str = Field(default_factory=new_id)
    position: int
    name: str
    data_type: DataType = DataType.ALPHANUMERIC
    min_length: int = 0
    max_length: int = 0
    usage: UsageType = UsageType.OPTIONAL
    condition_description: Optional[str] = None
    comments: Optional[str] = None
    code_values: Optional[List[CodeValue]] = None
    example: Optional[InlineExample] = None
    base_usage: Optional[UsageType] = None
    base_codes: Optional[List[CodeValue]] = None

    def is_usage_overridden(self) -> bool:
        return self.base_usage is not None and self.usage != self.base_usage

    def are_codes_overridden(self) -> bool:
        if self.base_codes is None:
            return False
        return (self.code_values or []) != self.base_codes


class _Repeatable(SpecModel):
    """Usage and cardinality shared by loops and segments."""
    id: str = Field(default_factory=new_id)
    name: str
    usage: UsageType = UsageType.OPTIONAL
    condition_description: Optional[str] = None
    min_use: int = 0
    max_use: int = 1
    comments: Optional[str] = None
    variants: Optional[List[Variant]] = None
    # Position in the parent, for interleaving segments with nested loops.
    order: Optional[int] = None
    base_usage: Optional[UsageType] = None
    base_min_use: Optional[int] = None
    base_max_use: Optional[int] = None

    @property
    def is_unbounded(self) -> bool:
        return self.max_use >= UNBOUNDED_MAX_USE

    def is_usage_overridden(self) -> bool:
        return self.base_usage is not None and self.usage != self.base_usage

    def is_min_use_overridden(self) -> bool:
        return self.base_min_use is not None and self.min_use != self.base_min_use

    def is_max_use_overridden(self) -> bool:
        return self.base_max_use is not None and self.max_use != self.base_max_use


class Segment(_Repeatable):
    """A fixed-shape record made of ordered elements."""
    description: str = ""
    elements: List[Element] = Field(default_factory=list)
    example: Optional[InlineExample] = None


class Loop(_Repeatable):
    """
    A repeatable grouping of segments and nested loops (e.g. N1, HL, 2000A).
    """
    description: Optional[str] = None
    segments: List[Segment] = Field(default_factory=list)
    loops: List['Loop'] = Field(default_factory=list)

    def ordered_children(self) -> List[Union[Segment, 'Loop']]:
        """
        Segments and nested loops merged into document order.

        Children carrying an `order` come first, sorted by it; the rest keep
        their list position (segments before loops).
        """
        children: List[Union[Segment, Loop]] = [*self.segments, *self.loops]
        ordered = [c for c in children if c.order is not None]
        unordered = [c for c in children if c.order is None]
        return sorted(ordered, key=lambda c: c.order) + unordered

    def iter_loops(self) -> Iterator['Loop']:
        yield self
        for loop in self.loops:
            yield from loop.iter_loops()


class ExampleEDI(SpecModel):
    id: str = Field(default_factory=new_id)
    title: str
    description: Optional[str] = None
    content: str


class SpecificationMetadata(SpecModel):
    name: str
    version: str = "1.0"
    transaction_set: str
    transaction_set_name: str
    edi_version: str = DEFAULT_EDI_VERSION
    partner: Optional[str] = None
    description: Optional[str] = None
    created_date: datetime
    modified_date: datetime
    base_spec_reference: Optional[str] = None


class Specification(SpecModel):
    id: str = Field(default_factory=new_id)
    metadata: SpecificationMetadata
    loops: List[Loop] = Field(default_factory=list)
    examples: List[ExampleEDI] = Field(default_factory=list)

    def iter_loops(self) -> Iterator[Loop]:
        for loop in self.loops:
            yield from loop.iter_loops()

    def iter_segments(self) -> Iterator[Segment]:
        for loop in self.iter_loops():
            yield from loop.segments

    def iter_elements(self) -> Iterator[Element]:
        for segment in self.iter_segments():
            yield from segment.elements


Loop.model_rebuild()
