#!/usr/bin/env python3
"""Run the container intake scenario and print the routing results.

Configuration comes from environment variables (see ``ParcelRouterConfig``);
command-line flags override them.

Examples
--------
    python scripts/run_intake.py --containers 5 --parcels 20 --seed 42
    LOG_FORMAT=json python scripts/run_intake.py --compact --max-records 3
"""

import argparse
import logging
import sys
import time
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from parcel_router.config import GeneratorConfig, ParcelRouterConfig
from parcel_router.exceptions import ConfigurationError
from parcel_router.logging import configure_logging
from parcel_router.scenarios import ContainerIntakeScenario
from parcel_router.sinks import ConsoleSink

logger = logging.getLogger("run_intake")


def build_config(args: argparse.Namespace) -> ParcelRouterConfig:
    """Merge command-line overrides into the environment config."""
    config = ParcelRouterConfig.from_env()
    config.generator = GeneratorConfig(
        locale=config.generator.locale,
        seed=args.seed if args.seed is not None else config.generator.seed,
        parcels_per_container=args.parcels or config.generator.parcels_per_container,
        num_containers=args.containers or config.generator.num_containers,
    )
    if args.permissive:
        config.routing.strict_transitions = False
    if args.compact:
        config.output.pretty = False
    if args.max_records is not None:
        config.output.max_records = args.max_records
    if args.log_level:
        config.log_level = args.log_level
    return config


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Import synthetic container manifests and route their parcels"
    )
    parser.add_argument(
        "--containers",
        type=int,
        default=None,
        help="Number of containers to generate (default: NUM_CONTAINERS or 3)",
    )
    parser.add_argument(
        "--parcels",
        type=int,
        default=None,
        help="Parcels per container (default: PARCELS_PER_CONTAINER or 10)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducibility",
    )
    parser.add_argument(
        "--high-value-rate",
        type=float,
        default=0.1,
        help="Share of parcels valued above the insurance threshold (default: 0.1)",
    )
    parser.add_argument(
        "--approval-rate",
        type=float,
        default=0.8,
        help="Share of insurance checks that approve (default: 0.8)",
    )
    parser.add_argument(
        "--permissive",
        action="store_true",
        help="Accept any status change instead of enforcing the lifecycle",
    )
    parser.add_argument(
        "--compact",
        action="store_true",
        help="Print one JSON record per line",
    )
    parser.add_argument(
        "--max-records",
        type=int,
        default=None,
        help="Maximum records to print per entity type",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )

    args = parser.parse_args()

    try:
        config = build_config(args)
    except ConfigurationError as exc:
        parser.error(str(exc))

    configure_logging(config)

    logger.info("=" * 60)
    logger.info("Parcel Router - Container Intake")
    logger.info("=" * 60)
    logger.info("Containers: %d", config.generator.num_containers)
    logger.info("Parcels per container: %d", config.generator.parcels_per_container)
    logger.info("Seed: %s", config.generator.seed)
    logger.info("Transitions: %s", "strict" if config.routing.strict_transitions else "permissive")

    start = time.perf_counter()
    scenario = ContainerIntakeScenario(
        config=config,
        high_value_rate=args.high_value_rate,
        approval_rate=args.approval_rate,
    )
    store = scenario.generate()
    elapsed = time.perf_counter() - start

    sink = ConsoleSink(pretty=config.output.pretty, max_records=config.output.max_records)
    sink.write_store(store)

    logger.info("Finished in %.2fs: %s", elapsed, store.summary())
    if scenario.failed_containers:
        logger.error("Failed containers: %s", ", ".join(scenario.failed_containers))
        sys.exit(1)


if __name__ == "__main__":
    main()
