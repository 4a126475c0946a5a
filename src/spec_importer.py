import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import ValidationError

from import_errors import SpecImportError, MalformedInputError, EmptySpecificationArrayError
from legacy_converter import import_openedi_spec
from openapi_converter import import_openapi_spec
from openedi_models import OpenAPIDocument, OpenEDITransactionSet
from spec_models import Specification, SpecificationMetadata, DEFAULT_EDI_VERSION, utc_now
from transaction_sets import get_transaction_set_template, fallback_name

logger = logging.getLogger(__name__)

def is_openapi_format(parsed: Any) -> bool:
    return isinstance(parsed, dict) and 'openapi' in parsed and 'components' in parsed

def parse_openedi_json(json_content: str) -> Union[OpenAPIDocument, OpenEDITransactionSet]:
    """
    Parses raw JSON into one of the two supported source documents.

    An array is accepted for the legacy format; only its first entry is used.
    """
    try:
        parsed = json.loads(json_content)
    except json.JSONDecodeError as e:
        raise MalformedInputError(f"Invalid JSON: {e}") from e

    try:
        if is_openapi_format(parsed):
            logger.debug("Detected OpenAPI schema format.")
            return OpenAPIDocument.model_validate(parsed)

        if isinstance(parsed, list):
            if not parsed:
                raise EmptySpecificationArrayError()
            if len(parsed) > 1:
                logger.info(f"Specification array holds {len(parsed)} entries, importing the first.")
            parsed = parsed[0]

        if not isinstance(parsed, dict):
            raise MalformedInputError(f"Expected a JSON object, got {type(parsed).__name__}")

        logger.debug("Detected legacy OpenEDI format.")
        return OpenEDITransactionSet.model_validate(parsed)
    except ValidationError as e:
        raise MalformedInputError(f"Unrecognized specification document: {e}") from e

def parse_and_import_spec(json_content: str) -> Specification:
    """Imports either source format and returns the normalized Specification."""
    document = parse_openedi_json(json_content)
    if isinstance(document, OpenAPIDocument):
        return import_openapi_spec(document)
    return import_openedi_spec(document)

def create_empty_specification(
    transaction_set_id: str,
    name: Optional[str] = None,
    edi_version: str = DEFAULT_EDI_VERSION
) -> Specification:
    template = get_transaction_set_template(transaction_set_id)
    now = utc_now()
    metadata = SpecificationMetadata(
        name=name or (template.name if template else fallback_name(transaction_set_id)),
        transaction_set=transaction_set_id,
        transaction_set_name=template.name if template else transaction_set_id,
        description=template.description if template else None,
        edi_version=edi_version,
        created_date=now,
        modified_date=now,
    )
    return Specification(metadata=metadata, loops=[], examples=[])

class SpecImportService:
    """Service for importing transaction set specifications."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def import_text(self, json_content: str) -> Specification:
        try:
            spec = parse_and_import_spec(json_content)
        except SpecImportError as e:
            logger.error(f"Specification import failed: {e}", exc_info=True)
            raise

        segment_count = sum(1 for _ in spec.iter_segments())
        logger.info(
            f"Imported {spec.metadata.transaction_set} ({spec.metadata.base_spec_reference}): "
            f"{len(spec.loops)} top-level loops, {segment_count} segments"
        )
        return spec

    def import_file(self, file_path: Union[str, Path]) -> Specification:
        path = Path(file_path)
        logger.info(f"Loading specification source: {path}")
        return self.import_text(path.read_text(encoding=self.encoding))

    def create_empty(
        self,
        transaction_set_id: str,
        name: Optional[str] = None,
        edi_version: str = DEFAULT_EDI_VERSION
    ) -> Specification:
        logger.info(f"Creating empty specification for transaction set {transaction_set_id}")
        return create_empty_specification(transaction_set_id, name, edi_version)
