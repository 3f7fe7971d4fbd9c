#!/usr/bin/env python3
"""
ipmimon client

Flow:
- Load config.yml (or --config), then apply command line overrides
- Build the enabled exporters once
- Every --interval seconds (or once with --once):
    * run one collection tick across all exporters
    * write every measurement to stdout as one JSON object per line
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import TextIO

from .config import ClientConfig
from .exporters import MetricsCollectorManager

logger = logging.getLogger(__name__)


def write_batch(batch, out: TextIO = sys.stdout) -> None:
    for metric in batch:
        out.write(json.dumps(metric, sort_keys=True) + "\n")
    out.flush()


async def metrics_loop(config: ClientConfig, metrics_collector: MetricsCollectorManager,
                       out: TextIO = sys.stdout) -> None:
    """Main metrics collection loop."""
    logger.info("metrics loop starting; collecting every %ss", config.interval)

    while True:
        batch = await metrics_collector.collect_metrics()
        if not batch:
            logger.warning("no metrics collected")
        write_batch(batch, out)

        if config.once:
            break
        await asyncio.sleep(max(1, config.interval))


async def run_client(config: ClientConfig) -> None:
    """Main client orchestration."""
    metrics_collector = MetricsCollectorManager(config=config.__dict__)
    if not metrics_collector.exporters:
        raise SystemExit("ERROR: no metrics exporters available.")
    await metrics_loop(config, metrics_collector)


def main():
    parser = argparse.ArgumentParser(description="ipmimon client")
    parser.add_argument("--config", "-c", type=Path, default=Path("config.yml"),
                        help="YAML configuration file (default: config.yml)")
    parser.add_argument("--interval", type=int,
                        help="seconds between collection ticks")
    parser.add_argument("--once", action="store_true",
                        help="collect one batch and exit")
    parser.add_argument("--log-level",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="logging level")
    args = parser.parse_args()

    # Load config: YAML first, then CLI overrides
    config = ClientConfig.from_file(args.config).override_with_args(args)

    # Logs go to stderr, stdout carries the measurements
    logging.basicConfig(level=getattr(logging, config.log_level.upper(), logging.INFO), stream=sys.stderr)
    logger.info(f"ipmimon client starting with config: interval={config.interval}s")

    try:
        asyncio.run(run_client(config))
    except KeyboardInterrupt:
        print("\nInterrupted. Bye!", file=sys.stderr)


if __name__ == "__main__":
    main()
