"""Main entry point for the city port and highway planner."""

import argparse
import sys
from pathlib import Path

from portplanner.core.models import CityPlan
from portplanner.core.plan_io import parse_plan_input, write_plan
from portplanner.core.planner import CityPlanner, PlanMismatchError
from portplanner.utils.colors import (
    Colors, colored, create_section_header, error, format_config, format_stat, info, success, warning
)
from portplanner.utils.config import AppConfig, ConfigManager
from portplanner.utils.constants import SUPPORTED_STRATEGIES, VERSION
from portplanner.utils.logger import setup_logging
from portplanner.utils.validation import ValidationError


def create_parser():
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        prog="portplanner",
        description="Minimum cost plan of ports and highways connecting every city",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        epilog="Reads the city count, port records and highway records as integers from INPUT or stdin."
    )

    parser.add_argument('input', nargs='?', default='-', help="Input file ('-' for stdin)")
    parser.add_argument('-c', '--config', help='Configuration file path')
    parser.add_argument('--strategy', choices=SUPPORTED_STRATEGIES, help='Spanning tree strategy')
    parser.add_argument('--cross-check', dest='cross_check', action='store_true', default=None,
                        help='Verify the plan against the other strategy')
    parser.add_argument('--summary', action='store_true', help='Print a plan summary to stderr')
    parser.add_argument('--show-highways', action='store_true', help='List built highways on stderr')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='Log INFO (-v) or DEBUG (-vv) messages to stderr')
    parser.add_argument('--version', action='version', version=f'portplanner {VERSION}')

    return parser


def build_config(args) -> AppConfig:
    """Load configuration and apply command line overrides."""
    config = ConfigManager(args.config).load_config()

    if args.strategy:
        config.planner.strategy = args.strategy
    if args.cross_check is not None:
        config.planner.cross_check = args.cross_check
    if args.verbose >= 2:
        config.logging.level = "DEBUG"
    elif args.verbose == 1:
        config.logging.level = "INFO"

    return config


def read_input(source: str) -> str:
    if source == '-':
        return sys.stdin.read()
    return Path(source).read_text()


def show_summary(plan: CityPlan, config: AppConfig, show_highways: bool) -> None:
    """Print a colored plan summary to stderr."""
    out = sys.stderr
    print(create_section_header("Plan"), file=out)
    print(format_config("Strategy", config.planner.strategy), file=out)

    if plan.feasible:
        print(success("All cities connected"), file=out)
    else:
        print(warning("Cities cannot all be connected"), file=out)

    print(format_stat("Total cost", plan.total_cost), file=out)
    print(format_stat("Ports built", plan.ports_built), file=out)
    print(format_stat("Highways used", plan.highways_used), file=out)
    if plan.stats is not None:
        print(format_stat("Highways scanned", plan.stats.highways_scanned), file=out)
        print(format_stat("Components after ports", plan.stats.initial_components), file=out)
        print(format_stat("Elapsed", f"{plan.stats.elapsed_time * 1000:.2f}", unit=" ms"), file=out)

    if show_highways:
        print(create_section_header("Built highways"), file=out)
        for index in plan.built_highways():
            print(colored(f"  - highway {index}", Colors.BRIGHT_MAGENTA), file=out)


def main(argv=None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = build_config(args)
    except ValueError as e:
        print(error(f"Invalid configuration: {e}"), file=sys.stderr)
        return 1

    setup_logging(config.logging)

    try:
        text = read_input(args.input)
    except OSError as e:
        print(error(f"Cannot read input '{args.input}': {e}"), file=sys.stderr)
        return 1

    try:
        network = parse_plan_input(text).to_network()
        plan = CityPlanner(config.planner).plan(network)
    except ValidationError as e:
        print(error(str(e)), file=sys.stderr)
        print(info("Input is: cities, port count + (city cost) pairs, highway count + (a b cost) triples"),
              file=sys.stderr)
        return 1
    except PlanMismatchError as e:
        print(error(f"Cross-check failed: {e}"), file=sys.stderr)
        return 1

    write_plan(plan, sys.stdout)

    if args.summary or args.show_highways:
        show_summary(plan, config, args.show_highways)

    return 0


if __name__ == '__main__':
    sys.exit(main())
