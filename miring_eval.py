"""
MIRING Validator - HML Compliance Validation

This script validates HML files for MIRING compliance and writes MIRING reports.

Usage:
    python miring_eval.py --xml-dir <path> --output-dir <path> [options]
    python miring_eval.py --xml-file <path>
"""

import argparse
import logging
import sys
import traceback
from pathlib import Path
from typing import Optional

# Add the parent directory to Python path so we can import miring_validator
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from config import ValidatorConfig, get_path_config
from miring_validator import MiringValidator
from miring_validator.reporting import BatchReporter, generate_report
from miring_validator.utils.logging_config import setup_logger

__version__ = "1.0.0"


def build_validator(config: ValidatorConfig, quiet: bool = False) -> MiringValidator:
    """Create a validator from a validated configuration"""
    config.validate()
    return MiringValidator(
        schema_path=config.resolved_schema_path(),
        schematron_path=config.resolved_schematron_path(),
        catalog_path=config.resolved_catalog_path(),
        run_schematron=config.run_schematron,
        quiet=quiet
    )


def run_validation(
    xml_directory: str,
    output_directory: str,
    pattern: str = "*.xml",
    config: Optional[ValidatorConfig] = None,
    quiet: bool = False
) -> bool:
    """
    Run MIRING validation over a directory of HML files.

    Args:
        xml_directory: Directory containing HML files to validate
        output_directory: Directory to save MIRING reports
        pattern: Glob pattern for HML files (default: "*.xml")
        config: Validator configuration (default configuration if not provided)
        quiet: If True, suppress console output except errors

    Returns:
        True if validation completed successfully, False otherwise
    """
    logger = logging.getLogger(__name__)
    config = config or ValidatorConfig.default()

    try:
        if not quiet:
            print("\n=== MIRING COMPLIANCE VALIDATION ===\n")
            print(f"XML Directory: {xml_directory}")
            print(f"Output Directory: {output_directory}")
            print(f"Schematron Pass: {'Enabled' if config.run_schematron else 'Disabled'}")
            print(f"File Pattern: {pattern}")
            print("-" * 60)

        if not Path(xml_directory).exists():
            logger.error("XML directory not found: %s", xml_directory)
            print(f"[ERROR] XML directory not found: {xml_directory}")
            return False

        validator = build_validator(config, quiet)
        reporter = BatchReporter()

        logger.info("Starting MIRING validation of %s", xml_directory)
        reports = validator.validate_directory(xml_directory, pattern)

        if not quiet:
            validator.print_batch_summary(reports)

        if reports:
            base_output_dir = Path(output_directory)
            base_output_dir.mkdir(parents=True, exist_ok=True)

            reporter.save_detailed_report(reports, str(base_output_dir), config.output_formats)
            logger.info("Reports saved to: %s", base_output_dir)
        else:
            logger.warning("No results to save")
            if not quiet:
                print("[INFO] No results to save")

        return True

    except (IOError, OSError, RuntimeError, ValueError) as e:
        logger.error("Error during batch validation: %s", str(e), exc_info=True)
        print(f"[ERROR] Error during batch validation: {str(e)}")
        traceback.print_exc()
        return False


def run_single_file(xml_file: str, config: Optional[ValidatorConfig] = None) -> bool:
    """
    Validate one HML file and print its MIRING report to stdout.

    Returns:
        True if the file is MIRING compliant, False otherwise
    """
    logger = logging.getLogger(__name__)
    config = config or ValidatorConfig.default()

    try:
        validator = build_validator(config, quiet=True)
        report = validator.validate_file(xml_file)
    except (IOError, OSError, RuntimeError, ValueError) as e:
        logger.error("Error validating %s: %s", xml_file, str(e), exc_info=True)
        print(f"[ERROR] Error validating {xml_file}: {str(e)}", file=sys.stderr)
        return False

    sys.stdout.write(generate_report(report))
    return report.compliant


def main():
    """Main entry point with argument parsing."""
    parser = argparse.ArgumentParser(
        description="MIRING Validator - HML Compliance Validation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Validate a directory of HML files
  python miring_eval.py --xml-dir data/input --output-dir results/miring

  # Schema pass only
  python miring_eval.py --xml-dir data/input --output-dir results/miring --no-schematron

  # Print the MIRING report of a single file
  python miring_eval.py --xml-file data/input/sample.xml

  # Verbose logging
  python miring_eval.py --xml-dir data/input --output-dir results/miring --verbose

  # Quiet mode (suppress console output)
  python miring_eval.py --xml-dir data/input --output-dir results/miring --quiet
        """
    )

    parser.add_argument(
        '--xml-dir',
        type=str,
        help='Directory containing HML files to validate'
    )
    parser.add_argument(
        '--output-dir',
        type=str,
        help='Directory to save MIRING reports'
    )
    parser.add_argument(
        '--xml-file',
        type=str,
        help='Validate a single HML file and print its MIRING report'
    )
    parser.add_argument(
        '--pattern',
        type=str,
        default='*.xml',
        help='Glob pattern for HML files (default: *.xml)'
    )
    parser.add_argument(
        '--schema',
        type=str,
        help='XML Schema file (default: data/schemas/*.xsd or the bundled HML schema)'
    )
    parser.add_argument(
        '--schematron',
        type=str,
        help='Schematron rules (default: data/schemas/*.sch or the bundled rules)'
    )
    parser.add_argument(
        '--catalog',
        type=str,
        help='MIRING rule catalog JSON (default: the bundled catalog)'
    )
    parser.add_argument(
        '--formats',
        nargs='+',
        choices=['xml', 'json', 'excel'],
        default=['xml', 'json', 'excel'],
        help='Report formats to write (default: xml json excel)'
    )
    parser.add_argument(
        '--no-schematron',
        action='store_true',
        help='Skip the schematron pass'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose (DEBUG level) logging'
    )
    parser.add_argument(
        '-q', '--quiet',
        action='store_true',
        help='Suppress console output except errors'
    )
    parser.add_argument(
        '--log-level',
        type=str,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Set log level explicitly'
    )

    args = parser.parse_args()

    # Determine log level
    if args.log_level:
        log_level = getattr(logging, args.log_level)
    elif args.verbose:
        log_level = logging.DEBUG
    else:
        log_level = logging.INFO

    paths = get_path_config()
    config = ValidatorConfig(
        paths=paths,
        schema_path=args.schema,
        schematron_path=args.schematron,
        catalog_path=args.catalog,
        run_schematron=not args.no_schematron,
        output_formats=args.formats
    )

    # Single file reports go to stdout, so console logging stays off
    if args.xml_file:
        setup_logger(
            'miring_validator',
            log_file=str(paths.logs_dir / "miring_validation.log"),
            level=log_level,
            console_output=False
        )
        sys.exit(0 if run_single_file(args.xml_file, config) else 1)

    if args.xml_dir and args.output_dir:
        setup_logger(
            'miring_validator',
            log_file=str(paths.logs_dir / "miring_validation.log"),
            level=log_level,
            console_output=not args.quiet
        )

        logger = logging.getLogger(__name__)
        logger.info("Starting MIRING validation (version %s)", __version__)

        success = run_validation(
            args.xml_dir,
            args.output_dir,
            args.pattern,
            config,
            args.quiet
        )

        if not args.quiet:
            print("\nValidation complete.")

        sys.exit(0 if success else 1)

    parser.print_help()
    sys.exit(1)


if __name__ == "__main__":
    main()
