#!/usr/bin/env python3
"""
Runs the agent service samples.

Usage:
    ai-samples                  # basic, streaming and connection samples in order
    ai-samples streaming --cleanup
"""

import argparse
import asyncio
import logging
import sys

from aisamples.core.config import Config
from aisamples.flows import SAMPLES

LOGGER = logging.getLogger(__name__)


def build_parser(default_log_level: str = "INFO") -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ai-samples", description="Run the AI agent service samples")
    parser.add_argument("sample", nargs="?", default="all", choices=["all", *SAMPLES.keys()],
                        help="Which sample to run (default: all)")
    parser.add_argument("--cleanup", action="store_true",
                        help="Delete the agents and threads the samples create")
    parser.add_argument("--log-level", default=default_log_level,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], type=str.upper)
    return parser


async def run_samples(names, config: Config, cleanup: bool = False, out=None) -> None:
    provider = config.get_provider()
    try:
        for name in names:
            LOGGER.info(f"Running {name} sample")
            await SAMPLES[name](provider, config, out=out, cleanup=cleanup)
    finally:
        await provider.close()
        config.reset_provider()


def main(argv=None) -> int:
    config = Config.config()
    args = build_parser(config.get_log_level()).parse_args(argv)
    logging.basicConfig(level=args.log_level, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    names = list(SAMPLES.keys()) if args.sample == "all" else [args.sample]
    try:
        asyncio.run(run_samples(names, config, cleanup=args.cleanup))
    except KeyboardInterrupt:
        LOGGER.warning("Interrupted")
        return 130
    except Exception as e:
        LOGGER.error(f"Sample failed: {e}", exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
