#!/usr/bin/env python3
"""
X12 Specification Import Command Line Tool

Normalizes OpenEDI (legacy) and EdiNation OpenAPI transaction set descriptions
into the canonical specification JSON format.

Usage:
    python main.py spec.json                      # Import spec.json -> spec.spec.json
    python main.py spec.json output.json          # Import to specific output file
    python main.py --new 850 output.json          # Create an empty 850 specification
"""

import argparse
import logging
import sys
from pathlib import Path

# Try importing from installed package first, fallback to src path
try:
    from import_errors import SpecImportError
    from spec_importer import SpecImportService
    from spec_models import Specification
except ImportError:
    # Add src to path for imports when not installed
    sys.path.insert(0, str(Path(__file__).parent / "src"))
    from import_errors import SpecImportError
    from spec_importer import SpecImportService
    from spec_models import Specification

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s:%(lineno)d] - %(message)s"


def write_specification(spec: Specification, output_file: str, indent: int = 2) -> int:
    json_output = spec.model_dump_json(by_alias=True, indent=indent, exclude_none=True)
    with open(output_file, 'w', encoding='utf-8') as f:
        f.write(json_output)
    print(f"Specification saved to: {output_file}")
    print(f"Output size: {len(json_output):,} characters")
    return len(json_output)


def import_spec_file(input_file: str, output_file: str, indent: int = 2) -> int:
    """Import a specification source file and save the normalized result."""

    print(f"Specification Import - Processing {input_file}")
    print("=" * 50)

    service = SpecImportService()
    try:
        spec = service.import_file(input_file)
    except FileNotFoundError as e:
        print(f"Error: File not found: {e}")
        return 1
    except SpecImportError as e:
        print(f"Error: {e}")
        return 1

    print("\nImport Results:")
    print(f"  Transaction Set: {spec.metadata.transaction_set} ({spec.metadata.transaction_set_name})")
    print(f"  EDI Version: {spec.metadata.edi_version}")
    print(f"  Base Reference: {spec.metadata.base_spec_reference}")
    print(f"  Loops: {sum(1 for _ in spec.iter_loops())}")
    print(f"  Segments: {sum(1 for _ in spec.iter_segments())}")
    print(f"  Elements: {sum(1 for _ in spec.iter_elements())}")

    write_specification(spec, output_file, indent)
    return 0


def create_empty_spec_file(transaction_set_id: str, output_file: str, name: str = None,
                           edi_version: str = "005010", indent: int = 2) -> int:
    service = SpecImportService()
    spec = service.create_empty(transaction_set_id, name=name, edi_version=edi_version)
    print(f"Created empty specification: {spec.metadata.name}")
    write_specification(spec, output_file, indent)
    return 0


def main(argv=None):
    """Main entry point with command line argument parsing."""

    parser = argparse.ArgumentParser(
        description="Import X12 transaction set specifications",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py X12_005010_810.json                 # -> X12_005010_810.spec.json
  python main.py openedi_850.json my850.json         # Import to specific output
  python main.py --new 856 asn.json                  # Empty 856 specification
        """
    )

    parser.add_argument('input_file', nargs='?',
                        help='OpenEDI or OpenAPI JSON file to import (or output file with --new)')
    parser.add_argument('output_file', nargs='?',
                        help='Output JSON file (default: input_file with .spec.json suffix)')
    parser.add_argument('--new', metavar='CODE', dest='new_code',
                        help='Create an empty specification for a transaction set code')
    parser.add_argument('--name', help='Specification name for --new')
    parser.add_argument('--edi-version', default='005010', help='EDI version for --new (default: 005010)')
    parser.add_argument('--indent', type=int, default=2, help='JSON indentation (default: 2)')
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level (default: WARNING)')

    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format=LOG_FORMAT, stream=sys.stderr)

    if args.new_code:
        output_file = args.output_file or args.input_file or f"{args.new_code}.spec.json"
        return create_empty_spec_file(args.new_code, output_file, args.name, args.edi_version, args.indent)

    if not args.input_file:
        parser.print_usage()
        print("Error: an input file is required unless --new is given.")
        return 1

    # Set default output file if not provided
    if not args.output_file:
        input_path = Path(args.input_file)
        args.output_file = str(input_path.with_suffix('.spec.json'))

    if not Path(args.input_file).exists():
        print(f"Error: Input file not found: {args.input_file}")
        return 1

    return import_spec_file(args.input_file, args.output_file, args.indent)


if __name__ == "__main__":
    sys.exit(main())
