#!/usr/bin/env python3
"""
Invoice Intake - Main Entry Point.

Command-line interface and programmatic access to the intake pipeline.

Usage:
    Command Line:
        python main.py --input invoice.pdf
        python main.py --input ./invoices/ --output results.json
        python main.py --list

    Python:
        from main import run_intake
        results = run_intake("invoice.pdf")
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import ConfigurationManager
from invoice_intake.utils.logger import setup_logger_from_config, get_logger
from invoice_intake.utils.helpers import ensure_directory
from invoice_intake.utils.exceptions import InvoiceIntakeError


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="Invoice Intake: extract invoice fields from PDFs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    Parse a single invoice:
        python main.py --input invoice.pdf

    Parse a directory and write the results:
        python main.py --input ./invoices/ --output results.json

    Show stored invoices:
        python main.py --list
        """
    )

    parser.add_argument(
        "--input", "-i",
        type=str,
        default=None,
        help="Invoice file (PDF or TXT) or directory of invoices"
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Write results as JSON to this file"
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to custom configuration file"
    )

    parser.add_argument(
        "--no-store",
        action="store_true",
        help="Do not append parsed invoices to the local store"
    )

    parser.add_argument(
        "--store-path",
        type=str,
        default=None,
        help="Path to the local invoice store (default from settings)"
    )

    parser.add_argument(
        "--list",
        action="store_true",
        help="Print the stored invoices, newest first"
    )

    parser.add_argument(
        "--clear",
        action="store_true",
        help="Remove every stored invoice"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log warnings and errors"
    )

    args = parser.parse_args(argv)

    if not (args.input or args.list or args.clear):
        parser.error("one of --input, --list or --clear is required")

    return args


def initialize_system(args: argparse.Namespace) -> ConfigurationManager:
    """
    Initialize configuration and logging.

    Returns:
        Initialized configuration manager.
    """
    config = ConfigurationManager(args.config)
    logger = setup_logger_from_config()

    if args.debug:
        logger.setLevel(logging.DEBUG)
        for handler in logger.handlers:
            handler.setLevel(logging.DEBUG)
    elif args.quiet:
        logger.setLevel(logging.WARNING)

    logger.debug(f"Version: {config.get('project.version', '1.0.0')}")
    return config


def run_intake(
    input_path: str,
    output_path: Optional[str] = None,
    config_path: Optional[str] = None,
    store: Optional[bool] = None,
    store_path: Optional[str] = None
) -> List[Dict[str, Any]]:
    """
    Run the intake pipeline over a file or directory.

    Args:
        input_path: Path to input file or directory.
        output_path: Optional JSON file for the results.
        config_path: Optional custom configuration file path.
        store: Whether to append parsed invoices to the local store.
            Defaults to output.store.enabled.
        store_path: Optional path of the local store.

    Returns:
        One result dictionary per processed document.

    Example:
        >>> results = run_intake("invoices/", store=False)
        >>> for r in results:
        ...     print(r['invoice']['invoice_number'])
    """
    logger = get_logger(__name__)

    config = ConfigurationManager(config_path)
    if store is None:
        store = config.get("output.store.enabled", True)

    from invoice_intake.pipeline import IntakePipeline
    from invoice_intake.output_handler import InvoiceStore

    pipeline = IntakePipeline(store=InvoiceStore(store_path) if store else None)

    outcomes = pipeline.process(input_path)
    results = [outcome.to_dict() for outcome in outcomes]

    failed = sum(1 for r in results if not r['success'])
    if failed:
        logger.warning(f"{failed} of {len(results)} document(s) could not be read")

    if output_path:
        output_file = Path(output_path)
        ensure_directory(output_file.parent)
        output_file.write_text(
            json.dumps(results, indent=2, ensure_ascii=False),
            encoding='utf-8'
        )
        logger.info(f"Results written to {output_file}")

    return results


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point for command-line execution.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    args = parse_arguments(argv)

    try:
        initialize_system(args)
        logger = get_logger(__name__)

        from invoice_intake.output_handler import InvoiceStore

        if args.clear:
            InvoiceStore(args.store_path).clear()

        if args.input:
            results = run_intake(
                input_path=args.input,
                output_path=args.output,
                config_path=args.config,
                store=False if args.no_store else None,
                store_path=args.store_path
            )
            if not args.output:
                print(json.dumps([r['invoice'] for r in results], indent=2, ensure_ascii=False))
            logger.info(f"Intake complete. Processed {len(results)} document(s).")

        if args.list:
            print(json.dumps(InvoiceStore(args.store_path).all(), indent=2, ensure_ascii=False))

        return 0

    except InvoiceIntakeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
