import logging
from typing import List

from openedi_models import OpenEDITransactionSet, OpenEDILoop, OpenEDISegment, OpenEDIElement
from spec_models import (
    Specification, SpecificationMetadata, Loop, Segment, Element, CodeValue,
    DataType, DEFAULT_EDI_VERSION, utc_now,
)
from usage import parse_usage, min_use_for

logger = logging.getLogger(__name__)

def convert_element(source: OpenEDIElement, position: int) -> Element:
    usage = parse_usage(source.req)
    code_values: List[CodeValue] = [
        CodeValue(code=str(code.code), description=code.description or str(code.code), included=True)
        for code in (source.codes or []) if code.code is not None
    ]
    data_type = DataType.from_tag(source.data_type)
    if source.data_type and data_type.value != source.data_type.strip().upper():
        logger.debug(f"      Element '{source.id}': unknown data type '{source.data_type}', using {data_type.value}")

    return Element(
        position=position,
        name=source.name or source.id or "",
        data_type=data_type,
        min_length=source.min_length or 0,
        max_length=source.max_length or 0,
        usage=usage,
        base_usage=usage,
        code_values=code_values or None,
        base_codes=[code.model_copy() for code in code_values] or None,
    )

def convert_segment(source: OpenEDISegment) -> Segment:
    usage = parse_usage(source.req)
    min_use = min_use_for(usage)
    max_use = source.max or 1
    segment_id = source.id or source.name or ""
    logger.debug(f"    Segment '{segment_id}' (Usage: {usage.value}, {min_use}..{max_use})")

    return Segment(
        name=segment_id,
        description=source.name or segment_id,
        usage=usage,
        base_usage=usage,
        min_use=min_use,
        max_use=max_use,
        base_min_use=min_use,
        base_max_use=max_use,
        elements=[convert_element(el, idx + 1) for idx, el in enumerate(source.elements or [])],
    )

def convert_loop(source: OpenEDILoop) -> Loop:
    usage = parse_usage(source.req)
    min_use = min_use_for(usage)
    max_use = source.max or 1
    logger.debug(f"  Loop '{source.id or source.name}' (Usage: {usage.value}, {min_use}..{max_use})")

    return Loop(
        name=source.id or source.name or "",
        description=source.name,
        usage=usage,
        base_usage=usage,
        min_use=min_use,
        max_use=max_use,
        base_min_use=min_use,
        base_max_use=max_use,
        segments=[convert_segment(seg) for seg in (source.segments or [])],
        loops=[convert_loop(loop) for loop in (source.loops or [])],
    )

def import_openedi_spec(source: OpenEDITransactionSet) -> Specification:
    """
    Converts a legacy OpenEDI transaction set into a Specification.

    Base usage, cardinality and code lists are captured alongside the current
    values so later edits can be compared against the imported baseline.
    """
    transaction_set_id = (source.transaction_set_id or "").strip()
    edi_version = source.version or DEFAULT_EDI_VERSION
    now = utc_now()
    logger.info(f"Importing OpenEDI transaction set {transaction_set_id} ({edi_version}) with {len(source.loops)} top-level loops")

    metadata = SpecificationMetadata(
        name=" - ".join(part for part in (transaction_set_id, source.name) if part),
        transaction_set=transaction_set_id,
        transaction_set_name=source.name or transaction_set_id,
        edi_version=edi_version,
        created_date=now,
        modified_date=now,
        base_spec_reference=f"OpenEDI/{edi_version}/{transaction_set_id}",
    )
    return Specification(
        metadata=metadata,
        loops=[convert_loop(loop) for loop in source.loops],
        examples=[],
    )
