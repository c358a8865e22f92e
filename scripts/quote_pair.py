#!/usr/bin/env python3
"""CLI script for quoting a Powerswap pair from chain state.

Usage:
    # Quote 1 WETH into DAI on mainnet
    python scripts/quote_pair.py \\
        --rpc-url https://eth.llamarpc.com \\
        0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2 \\
        0x6B175474E89094C44Da98b954EedeAC495271d0F \\
        --amount 1000000000000000000

    # RPC endpoint from the environment (POWERSWAP_RPC_URL or RPC_URL)
    RPC_URL=https://eth.llamarpc.com python scripts/quote_pair.py <token_in> <token_out>
"""

import argparse
import logging
import sys
from pathlib import Path

import structlog

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from powerswap.config import get_rpc_url, load_deployment_from_env  # noqa: E402
from powerswap.constants import ChainId  # noqa: E402
from powerswap.entities import TokenAmount  # noqa: E402
from powerswap.errors import ChainReadError, PowerswapError  # noqa: E402
from powerswap.fetcher import Fetcher, Web3ChainReader  # noqa: E402

logger = structlog.get_logger()


def main() -> int:
    """Main entry point for the pair quoter."""
    parser = argparse.ArgumentParser(
        description="Print mid prices and an exact-input quote for a Powerswap pair",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("token_in", help="Address of the token to sell")
    parser.add_argument("token_out", help="Address of the token to buy")
    parser.add_argument(
        "--amount",
        type=int,
        default=None,
        help="Raw input amount to quote (default: one whole token_in)",
    )
    parser.add_argument(
        "--chain-id",
        type=int,
        default=int(ChainId.MAINNET),
        help="Chain id of the tokens (default: 1)",
    )
    parser.add_argument(
        "--rpc-url",
        type=str,
        default=None,
        help="HTTP RPC endpoint (default: POWERSWAP_RPC_URL or RPC_URL)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    log_level = logging.DEBUG if args.verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )

    rpc_url = args.rpc_url or get_rpc_url()
    if not rpc_url:
        logger.error("rpc_url_missing")
        print("Error: pass --rpc-url or set POWERSWAP_RPC_URL / RPC_URL")
        return 1

    fetcher = Fetcher(Web3ChainReader(rpc_url), deployment=load_deployment_from_env())

    try:
        token_in = fetcher.fetch_token_data(args.chain_id, args.token_in)
        token_out = fetcher.fetch_token_data(args.chain_id, args.token_out)
        pair = fetcher.fetch_pair_data(token_in, token_out)
    except ChainReadError as e:
        logger.error("chain_read_failed", error=str(e))
        print(f"Error: {e}")
        return 1

    amount = args.amount if args.amount is not None else 10**token_in.decimals

    print(f"Pair:    {pair.address}")
    print(f"Blend R: {pair.blend}")
    print(f"Reserves: {pair.reserve0.to_significant()} / {pair.reserve1.to_significant()}")
    try:
        print(f"Price token_in:  {pair.price_of(token_in).to_significant(6)} per unit")
        print(f"Price token_out: {pair.price_of(token_out).to_significant(6)} per unit")

        amount_out, after = pair.get_output_amount(TokenAmount(token_in, amount))
    except PowerswapError as e:
        logger.error("quote_failed", error=str(e), error_type=type(e).__name__)
        print(f"Error: {e}")
        return 1

    print(f"Sell {TokenAmount(token_in, amount).to_exact()} -> buy {amount_out.to_exact()}")
    print(f"Price after swap: {after.price_of(token_in).to_significant(6)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
