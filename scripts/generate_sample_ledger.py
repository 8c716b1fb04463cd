#!/usr/bin/env python3
"""Generate a sample miles ledger and export it as JSON.

Replays random compra/bonus/venda sequences through the ledger service
and writes accounts, transactions, programs and lots to the output
directory. Transaction events are appended to a ``.jsonl`` file as they
happen.
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from milhas_ledger.config import LedgerConfig
from milhas_ledger.exceptions import MilhasLedgerError
from milhas_ledger.logging import setup_logging
from milhas_ledger.scenarios import CarteiraScenario
from milhas_ledger.sinks import ConsoleSink, JsonFileSink
from milhas_ledger.store import LedgerDataStore

logger = logging.getLogger("generate_sample_ledger")


def parse_args(config: LedgerConfig) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a sample miles ledger")
    parser.add_argument(
        "--tenants",
        type=int,
        default=2,
        help="Number of tenants to generate (default: 2)",
    )
    parser.add_argument(
        "--owners",
        type=int,
        default=3,
        help="Account owners per tenant (default: 3)",
    )
    parser.add_argument(
        "--operations",
        type=int,
        default=10,
        help="Operations per account (default: 10)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=config.seed if config.seed is not None else 42,
        help="Random seed for reproducibility (default: 42)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=config.output.json_output_dir,
        help="Directory for the JSON files",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        default=config.output.pretty_json,
        help="Pretty-print JSON output",
    )
    parser.add_argument(
        "--preview",
        type=int,
        default=0,
        help="Print the first N accounts to stdout",
    )
    return parser.parse_args()


def export(store: LedgerDataStore, sink: JsonFileSink, topic_prefix: str) -> None:
    """Write every entity collection of the store as one batch."""
    sink.write_batch(f"{topic_prefix}.contas", list(store.contas.values()))
    sink.write_batch(f"{topic_prefix}.historico", store.transacoes)
    sink.write_batch(f"{topic_prefix}.programas", store.list_programas())
    sink.write_batch(f"{topic_prefix}.lotes", list(store.lotes.values()))


def main() -> int:
    try:
        config = LedgerConfig.from_env()
    except MilhasLedgerError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2

    args = parse_args(config)
    setup_logging(config.log_level, config.log_format)

    topic_prefix = config.output.topic_prefix
    sink = JsonFileSink(args.output_dir, pretty=args.pretty)

    scenario = CarteiraScenario(
        num_tenants=args.tenants,
        owners_per_tenant=args.owners,
        operations_per_account=args.operations,
        seed=args.seed,
        sinks=[sink],
        topic_prefix=topic_prefix,
        arredondamento=config.arredondamento.to_config(),
    )
    store = scenario.generate()
    export(store, sink, topic_prefix)

    if args.preview:
        ConsoleSink(max_records=args.preview).write_batch(
            f"{topic_prefix}.contas", list(store.contas.values())
        )

    sink.close()
    logger.info("Summary: %s", store.summary())
    return 0


if __name__ == "__main__":
    sys.exit(main())
