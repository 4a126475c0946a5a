from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from typing import Annotated, List, Optional, Dict, Any

# Source documents are loosely typed. Scalar tokens that do not fit are
# normalized here so the converters can fall back to their defaults.

def _to_token(value: Any) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return None

def _to_count(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(str(value).strip())
    except ValueError:
        return None

Token = Annotated[Optional[str], BeforeValidator(_to_token)]
Count = Annotated[Optional[int], BeforeValidator(_to_count)]

# --- Legacy OpenEDI format: loops, segments and elements nested directly ---

class OpenEDIModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

class OpenEDICode(OpenEDIModel):
    code: Token = Field(None, alias="Code")
    description: Token = Field(None, alias="Description")

class OpenEDIElement(OpenEDIModel):
    id: Token = Field(None, alias="Id")
    name: Token = Field(None, alias="Name")
    data_type: Token = Field(None, alias="DataType")
    min_length: Count = Field(None, alias="MinLength")
    max_length: Count = Field(None, alias="MaxLength")
    req: Token = Field(None, alias="Req")
    codes: Optional[List[OpenEDICode]] = Field(None, alias="Codes")

class OpenEDISegment(OpenEDIModel):
    id: Token = Field(None, alias="Id")
    name: Token = Field(None, alias="Name")
    req: Token = Field(None, alias="Req")
    max: Count = Field(None, alias="Max")
    elements: Optional[List[OpenEDIElement]] = Field(None, alias="Elements")

class OpenEDILoop(OpenEDIModel):
    id: Token = Field(None, alias="Id")
    name: Token = Field(None, alias="Name")
    req: Token = Field(None, alias="Req")
    max: Count = Field(None, alias="Max")
    segments: Optional[List[OpenEDISegment]] = Field(None, alias="Segments")
    loops: Optional[List['OpenEDILoop']] = Field(None, alias="Loops")

class OpenEDITransactionSet(OpenEDIModel):
    transaction_set_id: Token = Field("", alias="TransactionSetId")
    name: Token = Field(None, alias="Name")
    version: Token = Field(None, alias="Version")
    loops: List[OpenEDILoop] = Field(default_factory=list, alias="Loops")

# --- EdiNation OpenAPI format: flat named definitions linked by $ref ---

class SchemaRef(OpenEDIModel):
    ref: Optional[str] = Field(None, alias="$ref")

class SchemaProperty(OpenEDIModel):
    type: Token = None
    format: Token = None
    min_length: Count = Field(None, alias="minLength")
    max_length: Count = Field(None, alias="maxLength")
    max_items: Count = Field(None, alias="maxItems")
    enum: Optional[List[Any]] = None
    all_of: Optional[List[SchemaRef]] = Field(None, alias="allOf")
    ref: Optional[str] = Field(None, alias="$ref")
    items: Optional[SchemaRef] = None
    element_id: Token = Field(None, alias="x-openedi-element-id")

    @property
    def is_array(self) -> bool:
        return self.type == "array"

class SchemaDefinition(OpenEDIModel):
    type: Token = None
    required: List[str] = Field(default_factory=list)
    properties: Dict[str, SchemaProperty] = Field(default_factory=dict)
    enum: Optional[List[Any]] = None
    all_of: Optional[List[SchemaRef]] = Field(None, alias="allOf")
    segment_id: Token = Field(None, alias="x-openedi-segment-id")
    message_id: Token = Field(None, alias="x-openedi-message-id")
    message_standard: Token = Field(None, alias="x-openedi-message-standard")
    loop_id: Token = Field(None, alias="x-openedi-loop-id")

class OpenAPIComponents(OpenEDIModel):
    schemas: Dict[str, SchemaDefinition] = Field(default_factory=dict)

class OpenAPIDocument(OpenEDIModel):
    openapi: Token = None
    info: Optional[Dict[str, Any]] = None
    components: OpenAPIComponents = Field(default_factory=OpenAPIComponents)

# Rebuild models to resolve forward references.
OpenEDILoop.model_rebuild()
