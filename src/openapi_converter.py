import logging
import re
from typing import Any, FrozenSet, List, Optional, Tuple

from import_errors import MissingTransactionSetError
from openedi_models import OpenAPIDocument, SchemaDefinition, SchemaProperty
from schema_resolver import SchemaResolver, DefinitionKind
from spec_models import (
    Specification, SpecificationMetadata, Loop, Segment, Element, CodeValue,
    DataType, UsageType, DEFAULT_EDI_VERSION, UNBOUNDED_MAX_USE, utc_now,
)
from transaction_sets import get_transaction_set_template, fallback_name
from usage import min_use_for

logger = logging.getLogger(__name__)

# Bookkeeping property present on generated models, never a segment or element.
BOOKKEEPING_PROPERTY = "Model"

# Checked in order; the first substring found in the upper-cased format wins.
_FORMAT_DATA_TYPES = (
    ('_ID', DataType.IDENTIFIER),
    ('_N0', DataType.NUMERIC_N0),
    ('_N2', DataType.NUMERIC_N2),
    ('_R', DataType.REAL),
    ('_DT', DataType.DATE),
    ('_TM', DataType.TIME),
)

_POSITION_SUFFIX = re.compile(r'_(\d+)$')

def parse_data_type_from_format(data_format: Optional[str]) -> DataType:
    if not data_format:
        return DataType.ALPHANUMERIC
    format_upper = data_format.upper()
    for token, data_type in _FORMAT_DATA_TYPES:
        if token in format_upper:
            return data_type
    return DataType.ALPHANUMERIC

def parse_element_name_from_key(key: str) -> str:
    """'TransactionSetIdentifierCode_01' -> 'Transaction Set Identifier Code'"""
    without_suffix = _POSITION_SUFFIX.sub('', key)
    return re.sub(r'([A-Z])', r' \1', without_suffix).strip()

def get_element_position(key: str) -> int:
    match = _POSITION_SUFFIX.search(key)
    return int(match.group(1)) if match else 1

def _to_code_values(values: List[Any]) -> List[CodeValue]:
    return [CodeValue(code=str(value), description=str(value), included=True) for value in values]

def _usage_for(required: bool) -> UsageType:
    return UsageType.MANDATORY if required else UsageType.OPTIONAL

class OpenAPIConverter:
    """
    Rebuilds the loop/segment/element tree from an EdiNation OpenAPI document.

    One converter instance handles one document; the resolver holds that
    document's definitions only.
    """

    def __init__(self, document: OpenAPIDocument):
        self.resolver = SchemaResolver(document.components.schemas)

    def convert(self) -> Specification:
        root = self.resolver.find_message_root()
        if root is None:
            raise MissingTransactionSetError()

        transaction_set_id = root.definition.message_id.strip()
        logger.info(f"Importing OpenAPI transaction set {transaction_set_id} from definition '{root.name}'")

        segments, loops = self._build_children(root.definition, frozenset({root.name}))
        main_loop = Loop(
            name=f"TS{transaction_set_id}",
            description=fallback_name(transaction_set_id),
            usage=UsageType.MANDATORY,
            base_usage=UsageType.MANDATORY,
            min_use=1,
            max_use=1,
            base_min_use=1,
            base_max_use=1,
            segments=segments,
            loops=loops,
        )

        template = get_transaction_set_template(transaction_set_id)
        if template is None:
            logger.warning(f"Transaction set {transaction_set_id} has no built-in template, using a generic name.")
        now = utc_now()
        metadata = SpecificationMetadata(
            name=template.name if template else fallback_name(transaction_set_id),
            transaction_set=transaction_set_id,
            transaction_set_name=template.name if template else transaction_set_id,
            description=template.description if template else None,
            edi_version=DEFAULT_EDI_VERSION,
            created_date=now,
            modified_date=now,
            base_spec_reference=f"EdiNation/OpenAPI/{transaction_set_id}",
        )
        return Specification(metadata=metadata, loops=[main_loop], examples=[])

    def _build_children(self, definition: SchemaDefinition, path: FrozenSet[str]) -> Tuple[List[Segment], List[Loop]]:
        """
        Walks the properties of a transaction set or loop definition in
        declared order. Every segment or loop produced takes the next `order`
        value so the original interleaving can be rebuilt.
        """
        segments: List[Segment] = []
        loops: List[Loop] = []
        required = definition.required
        item_order = 0

        for prop_key, prop in definition.properties.items():
            if prop_key == BOOKKEEPING_PROPERTY:
                continue

            max_use = (prop.max_items or UNBOUNDED_MAX_USE) if prop.is_array else 1
            ref = prop.ref or (prop.items.ref if prop.is_array and prop.items else None)
            resolved = self.resolver.resolve(ref)
            if resolved is None:
                continue

            if resolved.kind == DefinitionKind.LOOP:
                if resolved.name in path:
                    logger.warning(f"Cyclic reference to loop definition '{resolved.name}' from property '{prop_key}', skipping.")
                    continue
                loop = self._build_loop(resolved.definition, path | {resolved.name}, max_use, prop_key in required, item_order)
                loops.append(loop)
            elif resolved.kind == DefinitionKind.SEGMENT:
                segment = self._build_segment(resolved.definition, max_use, prop_key in required, item_order)
                segments.append(segment)
            else:
                logger.debug(f"  Property '{prop_key}' references non-structural definition '{resolved.name}', ignoring.")
                continue
            item_order += 1

        return segments, loops

    def _build_loop(self, definition: SchemaDefinition, path: FrozenSet[str], max_use: int, is_required: bool, order: int) -> Loop:
        loop_id = definition.loop_id or "LOOP"
        usage = _usage_for(is_required)
        min_use = min_use_for(usage)
        logger.debug(f"  Loop '{loop_id}' (Usage: {usage.value}, {min_use}..{max_use}, order {order})")

        segments, loops = self._build_children(definition, path)
        return Loop(
            name=loop_id,
            description=loop_id,
            usage=usage,
            base_usage=usage,
            min_use=min_use,
            max_use=max_use,
            base_min_use=min_use,
            base_max_use=max_use,
            segments=segments,
            loops=loops,
            order=order,
        )

    def _build_segment(self, definition: SchemaDefinition, max_use: int, is_required: bool, order: int) -> Segment:
        segment_id = definition.segment_id or ""
        usage = _usage_for(is_required)
        min_use = min_use_for(usage)
        logger.debug(f"    Segment '{segment_id}' (Usage: {usage.value}, {min_use}..{max_use}, order {order})")

        elements = [
            self._build_element(prop_key, prop, prop_key in definition.required)
            for prop_key, prop in definition.properties.items()
            if prop_key != BOOKKEEPING_PROPERTY
        ]
        # Declaration order does not guarantee positional order; sorted() is stable.
        elements = sorted(elements, key=lambda el: el.position)

        return Segment(
            name=segment_id,
            description=segment_id,
            usage=usage,
            base_usage=usage,
            min_use=min_use,
            max_use=max_use,
            base_min_use=min_use,
            base_max_use=max_use,
            elements=elements,
            order=order,
        )

    def _build_element(self, prop_key: str, prop: SchemaProperty, is_required: bool) -> Element:
        usage = _usage_for(is_required)
        code_values = self._code_values_for(prop)
        return Element(
            position=get_element_position(prop_key),
            name=parse_element_name_from_key(prop_key),
            data_type=parse_data_type_from_format(prop.format),
            min_length=prop.min_length or 0,
            max_length=prop.max_length or 0,
            usage=usage,
            base_usage=usage,
            code_values=code_values,
            base_codes=[code.model_copy() for code in code_values] if code_values else None,
        )

    def _code_values_for(self, prop: SchemaProperty) -> Optional[List[CodeValue]]:
        """
        Inline `enum` values win. Otherwise codes come from the referenced
        enumeration definitions; when several combinators resolve to one, the
        last match wins.
        """
        if prop.enum:
            return _to_code_values(prop.enum)

        code_values: Optional[List[CodeValue]] = None
        refs = [prop.ref] + [combinator.ref for combinator in (prop.all_of or [])]
        for ref in refs:
            resolved = self.resolver.resolve(ref)
            if resolved and resolved.definition.enum:
                code_values = _to_code_values(resolved.definition.enum)
        return code_values

def import_openapi_spec(document: OpenAPIDocument) -> Specification:
    return OpenAPIConverter(document).convert()
