"""
Extension Verifier CLI
Checks a packaged extension (.zip / .crx) against Chrome Web Store policy
"""

import argparse
import sys
from pathlib import Path

from models import CheckStatus
from settings import load_config
from utils import log, save_json
from verifier import ExtensionVerifier

EXIT_OK = 0
EXIT_WARNINGS = 1
EXIT_ERRORS = 2
EXIT_INPUT_MISSING = 4

_STATUS_LEVELS = {
    CheckStatus.SUCCESS.value: 'ok',
    CheckStatus.WARNING.value: 'warning',
    CheckStatus.ERROR.value: 'error',
    CheckStatus.PENDING.value: 'info',
}


def parse_cli_args(argv=None):
    parser = argparse.ArgumentParser(
        description='Chrome Web Store compliance verifier for extension packages',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Verify a zipped extension
  python src/analyzer.py my-extension.zip

  # Verify a .crx and save the JSON report
  python src/analyzer.py my-extension.crx --json --output-dir reports

Exit codes:
  0  all checks passed
  1  warnings found
  2  verification aborted (bad archive or manifest)
  4  input file not found
        """
    )

    parser.add_argument('archive', help='Path to the extension .zip or .crx file')
    parser.add_argument('--output-dir', default=None,
                        help='Directory for the JSON report (default: from config, reports/)')
    parser.add_argument('--json', action='store_true', help='Save the result as JSON')
    parser.add_argument('--config', default=None, help='Path to config.json')
    parser.add_argument('--quiet', action='store_true', help='Only print the summary')

    return parser.parse_args(argv)


def exit_code_for(result):
    if result.has_errors:
        return EXIT_ERRORS
    if result.has_warnings:
        return EXIT_WARNINGS
    return EXIT_OK


def print_summary(result):
    """Print checks, warnings and errors"""
    print("\n" + "=" * 80)
    print("VERIFICATION SUMMARY")
    print("=" * 80)
    print(f"Total files: {result.total_files}")
    print(f"Manifest version: {result.manifest_version}")
    print(f"Description: {result.description}")

    print("\nChecks:")
    for entry in result.checks:
        suffix = f" ({entry.files_with_issues} with issues)" if entry.files_with_issues else ""
        log(f"{entry.name}: {entry.status}{suffix}", _STATUS_LEVELS.get(entry.status, 'info'))

    if result.warnings:
        print(f"\nWarnings ({len(result.warnings)}):")
        for warning in result.warnings:
            log(warning, 'warning')

    if result.errors:
        print(f"\nErrors ({len(result.errors)}):")
        for error in result.errors:
            log(error, 'error')

    print("=" * 80 + "\n")


def main(argv=None):
    """CLI entry point"""
    args = parse_cli_args(argv)
    archive_path = Path(args.archive)

    if not archive_path.is_file():
        log(f"File not found: {archive_path}", 'error')
        return EXIT_INPUT_MISSING

    config = load_config(args.config)
    verifier = ExtensionVerifier(config=config, verbose=not args.quiet)
    result = verifier.verify_file(archive_path)

    print_summary(result)

    if args.json:
        output_dir = Path(args.output_dir or config.get('report_dir', 'reports'))
        report_path = save_json(result.to_dict(), output_dir / f"{archive_path.stem}_verification.json")
        log(f"JSON report: {report_path}", 'info')

    return exit_code_for(result)


if __name__ == "__main__":
    sys.exit(main())
