#!/usr/bin/env python3
"""Print a synthesized options chain and, optionally, an order ticket.

Usage:
    python3 show_chain.py --spot 1.15
    python3 show_chain.py --live --view calls
    python3 show_chain.py --spot 1.15 --change-24h 20 --expiry 2026-12-18
    python3 show_chain.py --spot 1.15 --strike 1.22 --side call --order-side buy --quantity 2
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict

import yaml

from chain_synth.chain.assembler import (
    ChainConfig,
    get_options_chain_with_spot,
    select_contract,
)
from chain_synth.data.spot_feed import fetch_spot_quote
from chain_synth.models.order import OrderSpec
from chain_synth.output.console import (
    print_chain,
    print_expirations,
    print_header,
    print_order_ticket,
)
from chain_synth.output.frames import chain_to_dataframe
from chain_synth.risk.contract_units import encode_contract_order
from chain_synth.risk.order_risk import FeeSchedule, calculate_order_risk
from chain_synth.utils.error_handling import ConfigurationError, validate_quote
from chain_synth.utils.logging_config import DEFAULT_LOG_LEVEL, get_logger, setup_logging

DEFAULT_CONFIG = Path(__file__).parent / "chain_synth" / "config" / "default_params.yaml"

logger = get_logger("cli")


def load_params(path: Path) -> Dict[str, Any]:
    """Read a YAML parameter file; an empty file gives an empty dict."""
    try:
        with open(path) as f:
            params = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Cannot read config {path}: {e}") from e

    if not isinstance(params, dict):
        raise ConfigurationError(f"Config {path} must be a mapping, got {type(params).__name__}")
    return params


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Show a synthesized options chain around a spot price',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Chain around a fixed spot
  python3 show_chain.py --spot 1.15

  # Live MON price from CoinGecko (COINGECKO_API_KEY optional)
  python3 show_chain.py --live

  # Estimate a limit order on one contract
  python3 show_chain.py --spot 1.15 --strike 1.22 --side put \\
      --order-side sell --order-type limit --limit-price 0.08 --quantity 3
        """
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument('--spot', type=float, help='Spot price of the underlying')
    source.add_argument('--live', action='store_true', help='Fetch spot price from CoinGecko')
    parser.add_argument('--change-24h', type=float, default=None,
                        help='24h %% change of the underlying (nudges IV up)')

    parser.add_argument('--expiry', help='Expiration to show (default: nearest)')
    parser.add_argument('--view', choices=['all', 'calls', 'puts'], default='all',
                        help='Columns to show (default: all)')

    parser.add_argument('--strike', type=float, help='Strike of the contract to trade')
    parser.add_argument('--side', choices=['call', 'put'], default='call',
                        help='Contract side (default: call)')
    parser.add_argument('--order-side', choices=['buy', 'sell'], default='buy',
                        help='Buy or sell (default: buy)')
    parser.add_argument('--order-type', choices=['limit', 'market'], default='limit',
                        help='Order type (default: limit)')
    parser.add_argument('--quantity', type=float, default=1,
                        help='Number of contracts (default: 1)')
    parser.add_argument('--limit-price', type=float, default=None,
                        help='Limit price per share (default: ask to buy, bid to sell)')
    parser.add_argument('--contract-units', action='store_true',
                        help='Also print the order in on-chain contract units')

    parser.add_argument('--config', type=Path, default=DEFAULT_CONFIG,
                        help='YAML parameter file')
    parser.add_argument('--csv', help='Also write the chain to this CSV file')
    parser.add_argument('--json', action='store_true', help='Print the snapshot as JSON instead of tables')
    parser.add_argument('--log-level', default=DEFAULT_LOG_LEVEL,
                        help=f'Logging level (default: {DEFAULT_LOG_LEVEL})')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        setup_logging(log_level=args.log_level)
        params = load_params(args.config)
        chain_config = ChainConfig.from_dict(params.get('chain', {}))
        fees = FeeSchedule.from_dict(params.get('fees', {}))
    except ConfigurationError as e:
        print(f"❌ Error: {e}")
        return 1

    change_24h = args.change_24h
    fallback = False
    if args.live:
        feed = params.get('feed', {})
        quote = fetch_spot_quote(
            coin_id=feed.get('coin_id', 'monad'),
            timeout=feed.get('timeout', 8.0),
            symbol=chain_config.symbol,
        )
        spot = quote.price
        fallback = quote.fallback
        if change_24h is None:
            change_24h = quote.change_24h
    else:
        spot = args.spot

    snapshot = get_options_chain_with_spot(spot, change_24h=change_24h, config=chain_config)

    if args.csv:
        chain_to_dataframe(snapshot).to_csv(args.csv, index=False)
        logger.info("Wrote %s", args.csv)

    if args.json:
        print(json.dumps(snapshot.to_dict(), indent=2))
        return 0

    expiry = args.expiry or snapshot.default_expiry
    if expiry not in snapshot.chains_by_expiry:
        print(f"❌ Expiration {expiry} not listed. Choose one of: {', '.join(snapshot.expirations)}")
        return 1

    for row in snapshot.rows(expiry):
        for side in ('call', 'put'):
            is_valid, error = validate_quote(row.quote(side))
            if not is_valid:
                logger.error("Invalid %s quote at strike %s: %s", side, row.strike, error)

    print_header(snapshot.symbol, snapshot.spot, change_24h, fallback=fallback)
    print_expirations(snapshot)
    print_chain(snapshot, expiry, view=args.view)

    if args.strike is not None:
        order = OrderSpec(
            strike=args.strike,
            side=args.side,
            order_side=args.order_side,
            order_type=args.order_type,
            quantity=args.quantity,
            limit_price=args.limit_price,
        )
        quote = select_contract(snapshot, expiry, args.strike, args.side)
        if quote is None:
            print(f"\n❌ Strike {args.strike} not listed for {expiry}. "
                  f"Strikes: {', '.join(f'{s:g}' for s in snapshot.strikes)}")
            return 1
        risk = calculate_order_risk(quote, order, fees)
        print_order_ticket(order, expiry, risk)
        if args.contract_units and risk is not None:
            params = encode_contract_order(order, expiry, risk)
            print(f"\nContract call: optionType={params.option_type} strikePrice={params.strike_price} "
                  f"expiry={params.expiry_ts} premium={params.premium}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
