# FILE: tests/conftest.py

import pytest
import sys
import os
import logging
from typing import Any, Dict

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

# ==============================================================================
# PYTEST CONFIGURATION & HOOKS
# ==============================================================================

def pytest_configure(config):
    """Configure pytest settings and markers."""
    config.addinivalue_line("markers", "unit: Pure unit tests with no external dependencies.")
    config.addinivalue_line("markers", "integration: Tests requiring external services or complex setups.")

@pytest.fixture(scope="session", autouse=True)
def setup_test_environment(pytestconfig):
    """Set up test environment with logging configuration."""
    log_level = pytestconfig.getoption("log_cli_level") or "INFO"
    logging.basicConfig(
        level=log_level.upper(),
        format="[%(asctime)s] [%(levelname)s] [%(name)s:%(lineno)d] - %(message)s",
        stream=sys.stdout,
        force=True,
    )
    logging.info(f"Test logging configured with level: {log_level.upper()}")
    yield

# ==============================================================================
# SOURCE DOCUMENT FIXTURES
# ==============================================================================

SCHEMA_PREFIX = "#/components/schemas/"

def ref(name: str) -> Dict[str, str]:
    return {"$ref": f"{SCHEMA_PREFIX}{name}"}

@pytest.fixture
def legacy_810_document() -> Dict[str, Any]:
    """A minimal legacy OpenEDI 810 with one header loop."""
    return {
        "TransactionSetId": "810",
        "Name": "Invoice",
        "Version": "005010",
        "Loops": [
            {
                "Id": "ST_LOOP",
                "Name": "Transaction Set Header",
                "Req": "M",
                "Max": 1,
                "Segments": [
                    {
                        "Id": "ST",
                        "Name": "Transaction Set Header",
                        "Req": "M",
                        "Max": 1,
                        "Elements": [
                            {
                                "Id": "ST01",
                                "Name": "Transaction Set Identifier Code",
                                "DataType": "ID",
                                "MinLength": 3,
                                "MaxLength": 3,
                                "Req": "M",
                                "Codes": [{"Code": "810", "Description": "Invoice"}],
                            }
                        ],
                    }
                ],
                "Loops": [],
            }
        ],
    }

@pytest.fixture
def legacy_850_document() -> Dict[str, Any]:
    """A legacy 850 with nested loops and mixed requirement designators."""
    return {
        "TransactionSetId": "850",
        "Name": "Purchase Order",
        "Version": "004010",
        "Loops": [
            {
                "Id": "HEADER",
                "Name": "Header",
                "Req": "M",
                "Max": 1,
                "Segments": [
                    {
                        "Id": "BEG",
                        "Name": "Beginning Segment for Purchase Order",
                        "Req": "M",
                        "Max": 1,
                        "Elements": [
                            {"Id": "BEG01", "Name": "Transaction Set Purpose Code", "DataType": "ID",
                             "MinLength": 2, "MaxLength": 2, "Req": "M",
                             "Codes": [{"Code": "00", "Description": "Original"},
                                       {"Code": "05", "Description": "Replace"}]},
                            {"Id": "BEG03", "Name": "Purchase Order Number", "DataType": "AN",
                             "MinLength": 1, "MaxLength": 22, "Req": "M"},
                            {"Id": "BEG05", "Name": "Date", "DataType": "DT",
                             "MinLength": 8, "MaxLength": 8, "Req": "M"},
                        ],
                    },
                    {"Id": "REF", "Name": "Reference Identification", "Req": "O", "Max": 12},
                ],
                "Loops": [
                    {
                        "Id": "N1_LOOP",
                        "Name": "Party Identification",
                        "Req": "O",
                        "Max": 200,
                        "Segments": [
                            {"Id": "N1", "Name": "Party Identification", "Req": "M", "Max": 1},
                            {"Id": "N3", "Req": "X", "Max": 2},
                        ],
                        "Loops": [
                            {"Id": "PER_LOOP", "Name": "Contacts", "Req": "c", "Max": 3},
                        ],
                    }
                ],
            }
        ],
    }

@pytest.fixture
def openapi_810_document() -> Dict[str, Any]:
    """The smallest OpenAPI document: a root referencing one ST segment."""
    return {
        "openapi": "3.0.0",
        "components": {
            "schemas": {
                "X12_00501_810": {
                    "x-openedi-message-id": "810",
                    "properties": {
                        "ST": ref("ST"),
                    },
                },
                "ST": {
                    "x-openedi-segment-id": "ST",
                    "properties": {
                        "TransactionSetIdentifierCode_01": {
                            "type": "string",
                            "format": "X12_ID",
                            "minLength": 3,
                            "maxLength": 3,
                        },
                    },
                    "required": ["TransactionSetIdentifierCode_01"],
                },
            }
        },
    }

@pytest.fixture
def openapi_850_document() -> Dict[str, Any]:
    """
    An OpenAPI 850 with interleaved segments and loops, a nested loop, code
    enumerations and element properties declared out of positional order.
    """
    return {
        "openapi": "3.0.1",
        "info": {"title": "X12 850", "version": "005010"},
        "components": {
            "schemas": {
                "X12_005010_850": {
                    "type": "object",
                    "x-openedi-message-id": "850",
                    "x-openedi-message-standard": "X12",
                    "required": ["ST", "BEG", "SE"],
                    "properties": {
                        "Model": {"type": "string"},
                        "ST": ref("ST"),
                        "BEG": ref("BEG"),
                        "REF": {"type": "array", "maxItems": 12, "items": ref("REF")},
                        "N1Loop": {"type": "array", "maxItems": 200, "items": ref("Loop_N1_850")},
                        "DTM": {"type": "array", "items": ref("DTM")},
                        "Extension": ref("DoesNotExist"),
                        "Notes": ref("X12_ID_353"),
                        "SE": ref("SE"),
                    },
                },
                "Loop_N1_850": {
                    "x-openedi-loop-id": "N1",
                    "required": ["N1"],
                    "properties": {
                        "N1": ref("N1"),
                        "N3": {"type": "array", "maxItems": 2, "items": ref("N3")},
                        "PERLoop": {"type": "array", "items": ref("Loop_PER_850")},
                    },
                },
                "Loop_PER_850": {
                    "x-openedi-loop-id": "PER",
                    "properties": {"PER": ref("PER")},
                },
                "ST": {
                    "x-openedi-segment-id": "ST",
                    "required": ["TransactionSetIdentifierCode_01", "TransactionSetControlNumber_02"],
                    "properties": {
                        "Model": {"type": "string"},
                        "TransactionSetControlNumber_02": {"type": "string", "format": "X12_AN",
                                                           "minLength": 4, "maxLength": 9},
                        "TransactionSetIdentifierCode_01": {"type": "string", "format": "X12_ID",
                                                            "minLength": 3, "maxLength": 3,
                                                            "enum": ["850"]},
                    },
                },
                "BEG": {
                    "x-openedi-segment-id": "BEG",
                    "required": ["TransactionSetPurposeCode_01"],
                    "properties": {
                        "Date_05": {"type": "string", "format": "X12_DT", "minLength": 8, "maxLength": 8},
                        "TransactionSetPurposeCode_01": {"allOf": [ref("X12_ID_353")]},
                        "PurchaseOrderNumber_03": {"type": "string", "format": "X12_AN",
                                                   "minLength": 1, "maxLength": 22},
                    },
                },
                "REF": {
                    "x-openedi-segment-id": "REF",
                    "properties": {
                        "ReferenceIdentificationQualifier_01": {"allOf": [ref("X12_ID_128")]},
                        "ReferenceIdentification_02": {"type": "string", "format": "X12_AN"},
                    },
                },
                "DTM": {
                    "x-openedi-segment-id": "DTM",
                    "properties": {
                        "Time_03": {"type": "string", "format": "X12_TM"},
                        "Date_02": {"type": "string", "format": "X12_DT"},
                    },
                },
                "N1": {
                    "x-openedi-segment-id": "N1",
                    "properties": {
                        "EntityIdentifierCode_01": {"allOf": [ref("X12_ID_98")]},
                    },
                },
                "N3": {
                    "x-openedi-segment-id": "N3",
                    "properties": {"AddressInformation_01": {"type": "string", "format": "X12_AN"}},
                },
                "PER": {
                    "x-openedi-segment-id": "PER",
                    "properties": {"ContactFunctionCode_01": {"type": "string", "format": "X12_ID"}},
                },
                "SE": {
                    "x-openedi-segment-id": "SE",
                    "properties": {
                        "NumberOfIncludedSegments_01": {"type": "string", "format": "X12_N0"},
                    },
                },
                "X12_ID_353": {"type": "string", "enum": ["00", "01", "05"]},
                "X12_ID_128": {"type": "string", "enum": ["IA", "VR"]},
                "X12_ID_98": {"type": "string", "enum": ["BT", "ST", "SU"]},
            }
        },
    }
