import logging
from enum import Enum
from typing import Dict, Optional, NamedTuple

from openedi_models import SchemaDefinition

logger = logging.getLogger(__name__)

SCHEMA_REF_PREFIX = "#/components/schemas/"


class DefinitionKind(str, Enum):
    LOOP = "loop"
    SEGMENT = "segment"
    OPAQUE = "opaque"  # plain data shapes, e.g. code enumerations


class ResolvedDefinition(NamedTuple):
    name: str
    definition: SchemaDefinition
    kind: DefinitionKind


def ref_to_name(ref: str) -> str:
    if ref.startswith(SCHEMA_REF_PREFIX):
        return ref[len(SCHEMA_REF_PREFIX):]
    return ref


def classify_definition(definition: SchemaDefinition) -> DefinitionKind:
    # The loop marker wins if a definition ever carries both.
    if definition.loop_id:
        return DefinitionKind.LOOP
    if definition.segment_id:
        return DefinitionKind.SEGMENT
    return DefinitionKind.OPAQUE


class SchemaResolver:
    """
    Resolves `$ref` pointers against the flat definition mapping of one
    OpenAPI document.
    """

    def __init__(self, schemas: Dict[str, SchemaDefinition]):
        self.schemas = schemas

    def resolve(self, ref: Optional[str]) -> Optional[ResolvedDefinition]:
        """
        Returns the referenced definition and its kind, or None when the
        reference is empty or names no known definition.
        """
        if not ref:
            return None
        name = ref_to_name(ref)
        definition = self.schemas.get(name)
        if definition is None:
            logger.debug(f"Unresolvable reference '{ref}', skipping.")
            return None
        return ResolvedDefinition(name, definition, classify_definition(definition))

    def find_message_root(self) -> Optional[ResolvedDefinition]:
        """Returns the first definition marked with `x-openedi-message-id`."""
        for name, definition in self.schemas.items():
            if definition.message_id:
                return ResolvedDefinition(name, definition, classify_definition(definition))
        return None
