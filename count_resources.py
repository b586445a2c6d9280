#!/usr/bin/env python3
"""Cloud Resource Counter - Main entry point."""
import os
import sys
import argparse
import logging
from contextlib import ExitStack
from typing import List, Optional, TextIO, Tuple

from botocore.exceptions import BotoCoreError
from rich.console import Console

from resource_counter import __version__
from resource_counter.account import ACCOUNT_ID_COLUMN, get_account_id
from resource_counter.aggregation import AggregationDriver
from resource_counter.config import CounterConfig, DEFAULT_OUTPUT_FILE, load_config
from resource_counter.counters import ALL_COUNTERS
from resource_counter.logger import enable_trace, setup_logging
from resource_counter.provider import AWSServiceProvider, ServiceProvider
from resource_counter.reporter import ActivityReporter, TerminalReporter
from resource_counter.results import ResultTable, save_results
from resource_counter.utils import is_valid_region_name

logger = logging.getLogger(__name__)

TOOL_NAME = 'Cloud Resource Counter'


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Count the resources of an AWS account and save them as one CSV row',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                           # Count resources in all regions
  %(prog)s --region us-east-1        # Count only us-east-1
  %(prog)s --profile prod            # Use the credentials of profile "prod"
  %(prog)s --no-output               # Only show the counts
        """
    )

    parser.add_argument(
        '--output-file',
        help=f'CSV output file; appended to if it already exists (default: {DEFAULT_OUTPUT_FILE})'
    )
    parser.add_argument(
        '--no-output',
        action='store_true',
        help='Do not save the results to any file'
    )
    parser.add_argument(
        '--profile',
        default=os.environ.get('AWS_PROFILE'),
        help='AWS profile to use (default: $AWS_PROFILE or the default profile)'
    )
    parser.add_argument(
        '--region',
        help='AWS region to count (default: all regions enabled for the account)'
    )
    parser.add_argument(
        '--trace-file',
        help='Record every AWS call to this file; overwritten on each run'
    )
    parser.add_argument(
        '--config',
        help='Path to configuration file'
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: WARNING)'
    )
    parser.add_argument(
        '--version',
        action='store_true',
        help='Show the version number and exit'
    )

    return parser.parse_args(argv)


def validate_arguments(args: argparse.Namespace, reporter: ActivityReporter) -> bool:
    """Check flag combinations that argparse cannot express."""
    if args.output_file and args.no_output:
        reporter.fail("Error: Cannot specify both --output-file and --no-output!")
        return False

    return True


def validate_config(config: CounterConfig, reporter: ActivityReporter) -> bool:
    """Check the merged configuration, whichever layer each value came from."""
    if config.region and not is_valid_region_name(config.region):
        reporter.fail(f"Error: '{config.region}' is not a valid AWS Region name.")
        return False

    return True


def build_config(args: argparse.Namespace) -> CounterConfig:
    """Layer command line arguments over the file and environment configuration."""
    return load_config(args.config).with_overrides(
        profile=args.profile,
        region=args.region,
        output_file=args.output_file,
        no_output=True if args.no_output else None,
        trace_file=args.trace_file,
        log_level=args.log_level,
    )


def display_settings(config: CounterConfig, provider: AWSServiceProvider, console: Console) -> None:
    """Show what this run is about to do."""
    region = config.region or '(All regions supported by this account)'
    output_file = config.effective_output_file or '(none)'

    console.print(f"[bold]{TOOL_NAME}[/bold] (v{__version__}) running with:")
    console.print(f" o [italic]AWS Profile[/italic]: {provider.profile_name}")
    console.print(f" o [italic]AWS Region[/italic]:  {region}")
    console.print(f" o [italic]Output file[/italic]: {output_file}")

    if config.trace_file:
        console.print(f" o [italic]Trace file[/italic]:  {config.trace_file}")


def open_output(path: Optional[str], stack: ExitStack) -> Tuple[Optional[TextIO], bool]:
    """
    Open the CSV output file.

    Returns:
        The stream (None when output is disabled) and whether an existing
        file is being appended to
    """
    if path is None:
        return None, False

    appending = os.path.exists(path)
    stream = stack.enter_context(open(path, 'a' if appending else 'w', newline=''))
    return stream, appending


def collect_results(
    provider: ServiceProvider,
    reporter: ActivityReporter,
    config: CounterConfig
) -> ResultTable:
    """
    Run every counter and collect the report row.

    Args:
        provider: Capability provider for the run
        reporter: Progress and error reporter
        config: Run configuration (decides single or all regions)

    Returns:
        The filled result table, in report column order
    """
    driver = AggregationDriver.from_config(provider, reporter, config)

    table = ResultTable()
    table.append(ACCOUNT_ID_COLUMN, get_account_id(provider, reporter))

    for counter_class in ALL_COUNTERS:
        counter = counter_class()
        table.append(counter.column, driver.run(counter))

    return table


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)

    console = Console(stderr=True, highlight=False)
    reporter = TerminalReporter(console)

    if not validate_arguments(args, reporter):
        return 1

    config = build_config(args)
    if not validate_config(config, reporter):
        return 1

    if args.version:
        console.print(f"{TOOL_NAME}, version {__version__}")
        return 0

    setup_logging(config.log_level, config.log_format)
    logger.debug(f"Running with {config}")

    with ExitStack() as stack:
        if config.trace_file:
            try:
                trace_handler = enable_trace(config.trace_file)
            except OSError as e:
                reporter.fail(f"Unable to open trace file for writing => {e}")
                return 1
            stack.callback(trace_handler.close)

        try:
            output, appending = open_output(config.effective_output_file, stack)
        except OSError as e:
            reporter.fail(f"Unable to open CSV file for writing => {e}")
            return 1

        try:
            provider = AWSServiceProvider.from_config(config)
        except BotoCoreError as e:
            reporter.check_error(e)
            return 1

        display_settings(config, provider, console)
        console.print("\nActivity")

        try:
            table = collect_results(provider, reporter, config)
            save_results(table, output, reporter, include_headers=not appending)
        except KeyboardInterrupt:
            console.print("\n[yellow]Interrupted by user[/yellow]")
            return 130

    console.print("\nSuccess.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
