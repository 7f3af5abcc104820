"""
swapfeed - Market sentiment, exchange ticker and DEX router clients

Command-line entry point.

Usage:
    python -m main [command] [options]

Commands:
    fear-index   Fetch the crypto Fear & Greed index
    price        Fetch the current ask price of a Kraken pair
    health       Check the 1inch router healthcheck
    spender      Show the 1inch spender contract address
    tokens       List tokens supported by the 1inch router
    allowance    Show the spender allowance for a token and wallet
    approve-tx   Build an approval transaction
    quote        Fetch a swap quote
    swap-tx      Build a swap transaction
    broadcast    Broadcast a signed raw transaction
    watch        Poll a Kraken pair and report buy/sell triggers

Examples:
    # Current sentiment
    python -m main fear-index

    # SOL price in USD
    python -m main price SOLUSD

    # Tokens on Polygon
    python -m main --chain-id 137 tokens

    # Quote 1 WETH -> USDC
    python -m main quote --param fromTokenAddress=0xC02a... \\
        --param toTokenAddress=0xA0b8... --param amount=1000000000000000000

    # Watch a pair with verbose logging
    python -m main --verbose watch SOLUSD --iterations 30
"""

import argparse
import json
import logging
import sys
import time
from pathlib import Path
from typing import Any

from analysis.monitor import OrderType, PriceMonitor
from api.alternative import AlternativeClient
from api.errors import ClientError, UpstreamError
from api.kraken import KrakenClient
from api.oneinch import OneInchRouter
from config import (
    CHAIN_IDS,
    DEFAULT_CHAIN_ID,
    DEFAULT_LIMIT_PERCENT,
    DEFAULT_STOP_LOSS_PERCENT,
    UNLIMITED_APPROVAL_AMOUNT,
    WATCH_INTERVAL_SECONDS,
)
from utils.logging import get_logger, setup_logging

# Module logger
logger = get_logger(__name__)


def _print_json(value: Any) -> None:
    """Write a command result to stdout as JSON."""
    print(json.dumps(value, indent=2, default=str))


def _parse_params(pairs: list[str] | None) -> dict[str, str]:
    """Turn repeated KEY=VALUE arguments into a query parameter dict."""
    params: dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"Expected KEY=VALUE, got {pair!r}")
        params[key] = value
    return params


def _parse_chain_id(value: str) -> int:
    """Accept a numeric chain id or a known network name."""
    if value.lower() in CHAIN_IDS:
        return CHAIN_IDS[value.lower()]
    try:
        return int(value)
    except ValueError:
        known = ", ".join(sorted(CHAIN_IDS))
        raise argparse.ArgumentTypeError(
            f"Unknown chain {value!r} (use an integer or one of: {known})"
        ) from None


def _router(args: argparse.Namespace) -> OneInchRouter:
    return OneInchRouter(chain_id=args.chain_id)


def _log_client_error(error: ClientError) -> None:
    if isinstance(error, UpstreamError):
        logger.error("Upstream error (%s): %s", error.status_code, error.body)
    else:
        logger.error("%s", error)


# =============================================================================
# Commands
# =============================================================================


def cmd_fear_index(args: argparse.Namespace) -> int:
    """Fetch the crypto Fear & Greed index."""
    with AlternativeClient() as client:
        reading = client.get_crypto_fear_index()

    logger.info(
        "Fear & Greed index: %s (%s)",
        reading.fear_greed_index,
        reading.fear_greed_index_classification,
    )
    _print_json(reading.to_dict())
    return 0


def cmd_price(args: argparse.Namespace) -> int:
    """Fetch the current ask price for a Kraken pair."""
    with KrakenClient() as client:
        price = client.get_coin_price(args.pair)

    logger.info("%s ask: %s", args.pair.upper(), price)
    _print_json({"pair": args.pair.upper(), "ask": price})
    return 0


def cmd_health(args: argparse.Namespace) -> int:
    """Check the 1inch router healthcheck."""
    with _router(args) as router:
        healthy = router.get_health_status()

    logger.info("1inch router on chain %d is healthy", args.chain_id)
    _print_json({"chain_id": args.chain_id, "healthy": healthy})
    return 0


def cmd_spender(args: argparse.Namespace) -> int:
    """Show the spender contract address."""
    with _router(args) as router:
        address = router.get_contract_address()

    _print_json({"chain_id": args.chain_id, "address": address})
    return 0


def cmd_tokens(args: argparse.Namespace) -> int:
    """List tokens supported by the router."""
    with _router(args) as router:
        tokens = router.get_supported_tokens()

    if args.symbol:
        wanted = {s.upper() for s in args.symbol}
        tokens = [t for t in tokens if t.symbol.upper() in wanted]

    logger.info("%d tokens on chain %d", len(tokens), args.chain_id)
    _print_json([t.to_dict() for t in tokens])
    return 0


def cmd_allowance(args: argparse.Namespace) -> int:
    """Show the spender allowance for a token and wallet."""
    with _router(args) as router:
        allowance = router.get_approved_allowance(args.token, args.wallet)

    # Allowances routinely exceed 2**53, keep them as strings in JSON
    _print_json({
        "token": args.token,
        "wallet": args.wallet,
        "allowance": str(allowance),
    })
    return 0


def cmd_approve_tx(args: argparse.Namespace) -> int:
    """Build an approval transaction."""
    with _router(args) as router:
        tx = router.get_approve_transaction_data(args.token, args.amount)

    _print_json(tx)
    return 0


def cmd_quote(args: argparse.Namespace) -> int:
    """Fetch a swap quote."""
    with _router(args) as router:
        quote = router.get_quote(_parse_params(args.param))

    _print_json(quote)
    return 0


def cmd_swap_tx(args: argparse.Namespace) -> int:
    """Build a swap transaction."""
    with _router(args) as router:
        tx = router.get_swap_transaction_data(_parse_params(args.param))

    _print_json(tx)
    return 0


def cmd_broadcast(args: argparse.Namespace) -> int:
    """Broadcast a signed raw transaction."""
    with _router(args) as router:
        tx_hash = router.broadcast_raw_transaction(args.raw_transaction)

    if not tx_hash:
        logger.warning("Gateway accepted the transaction but returned no hash")
    _print_json({"transaction_hash": tx_hash})
    return 0


def cmd_watch(args: argparse.Namespace) -> int:
    """Poll a Kraken pair and report buy/sell triggers."""
    logger.info("=" * 60)
    logger.info("SWAPFEED - Watching %s", args.pair.upper())
    logger.info("=" * 60)

    order_type = OrderType(args.side.upper())

    with KrakenClient() as client:
        reference = args.reference_price
        if reference is None:
            reference = client.get_coin_price(args.pair)
            logger.info("Reference price: %s", reference)

        monitor = PriceMonitor(
            initial_order_type=order_type,
            initial_price=reference,
            last_buy_price=reference,
            limit_percent=args.limit_percent,
            stop_loss_percent=args.stop_loss_percent,
        )

        for iteration in range(args.iterations):
            if iteration:
                time.sleep(args.interval)

            price = client.get_coin_price(args.pair)
            side = monitor.current_order_type
            triggered = monitor.update(price)

            logger.info(
                "Waiting to %s, price %s, up %.8f, down %.8f",
                side,
                price,
                monitor.trigger_price_up,
                monitor.trigger_price_down,
            )

            if triggered:
                logger.info("%s triggered at %s", side, price)
                _print_json({
                    "pair": args.pair.upper(),
                    "order_type": str(side),
                    "price": price,
                })

    return 0


# =============================================================================
# Argument parsing
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="swapfeed",
        description="Market sentiment, exchange ticker and DEX router clients",
    )

    # Global arguments
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging (DEBUG level)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Log to file (in addition to console)",
    )
    parser.add_argument(
        "--chain-id",
        type=_parse_chain_id,
        default=DEFAULT_CHAIN_ID,
        help=f"1inch chain id or network name (default: {DEFAULT_CHAIN_ID})",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("fear-index", help="Fetch the crypto Fear & Greed index")

    price_parser = subparsers.add_parser(
        "price",
        help="Fetch the current ask price of a Kraken pair",
    )
    price_parser.add_argument("pair", help="Kraken pair (e.g., SOLUSD)")

    subparsers.add_parser("health", help="Check the 1inch router healthcheck")
    subparsers.add_parser("spender", help="Show the 1inch spender contract address")

    tokens_parser = subparsers.add_parser(
        "tokens",
        help="List tokens supported by the 1inch router",
    )
    tokens_parser.add_argument(
        "--symbol",
        "-s",
        action="append",
        help="Only show tokens with this symbol (repeatable)",
    )

    allowance_parser = subparsers.add_parser(
        "allowance",
        help="Show the spender allowance for a token and wallet",
    )
    allowance_parser.add_argument("token", help="Token contract address")
    allowance_parser.add_argument("wallet", help="Wallet address")

    approve_parser = subparsers.add_parser(
        "approve-tx",
        help="Build an approval transaction",
    )
    approve_parser.add_argument("token", help="Token contract address")
    approve_parser.add_argument(
        "--amount",
        default=UNLIMITED_APPROVAL_AMOUNT,
        help="Amount in the token's smallest unit (default: unlimited)",
    )

    for name, help_text in (
        ("quote", "Fetch a swap quote"),
        ("swap-tx", "Build a swap transaction"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument(
            "--param",
            "-p",
            action="append",
            metavar="KEY=VALUE",
            help="Query parameter passed to the API (repeatable)",
        )

    broadcast_parser = subparsers.add_parser(
        "broadcast",
        help="Broadcast a signed raw transaction",
    )
    broadcast_parser.add_argument("raw_transaction", help="Signed transaction (hex)")

    watch_parser = subparsers.add_parser(
        "watch",
        help="Poll a Kraken pair and report buy/sell triggers",
    )
    watch_parser.add_argument("pair", help="Kraken pair (e.g., SOLUSD)")
    watch_parser.add_argument(
        "--side",
        choices=["buy", "sell"],
        default="buy",
        help="Order side to wait for first (default: buy)",
    )
    watch_parser.add_argument(
        "--reference-price",
        type=float,
        default=None,
        help="Reference (or last buy) price (default: current ask)",
    )
    watch_parser.add_argument(
        "--limit-percent",
        type=float,
        default=DEFAULT_LIMIT_PERCENT,
        help=f"Take-profit distance in percent (default: {DEFAULT_LIMIT_PERCENT})",
    )
    watch_parser.add_argument(
        "--stop-loss-percent",
        type=float,
        default=DEFAULT_STOP_LOSS_PERCENT,
        help=f"Stop-loss distance in percent (default: {DEFAULT_STOP_LOSS_PERCENT})",
    )
    watch_parser.add_argument(
        "--interval",
        type=float,
        default=WATCH_INTERVAL_SECONDS,
        help=f"Seconds between polls (default: {WATCH_INTERVAL_SECONDS})",
    )
    watch_parser.add_argument(
        "--iterations",
        "-n",
        type=int,
        default=60,
        help="Number of polls before exiting (default: 60)",
    )

    return parser


COMMANDS = {
    "fear-index": cmd_fear_index,
    "price": cmd_price,
    "health": cmd_health,
    "spender": cmd_spender,
    "tokens": cmd_tokens,
    "allowance": cmd_allowance,
    "approve-tx": cmd_approve_tx,
    "quote": cmd_quote,
    "swap-tx": cmd_swap_tx,
    "broadcast": cmd_broadcast,
    "watch": cmd_watch,
}


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Setup logging based on global args
    log_level = logging.DEBUG if args.verbose else logging.INFO
    setup_logging(level=log_level, log_file=args.log_file, verbose=args.verbose)

    if args.command is None:
        parser.print_help()
        return 0

    handler = COMMANDS.get(args.command)
    if handler:
        try:
            return handler(args)
        except ClientError as e:
            _log_client_error(e)
            return 1
        except argparse.ArgumentTypeError as e:
            logger.error("%s", e)
            return 2
        except KeyboardInterrupt:
            logger.info("Interrupted by user")
            return 130
        except Exception as e:
            logger.exception("Unexpected error: %s", e)
            return 1

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
