"""Tokens, amounts, prices and the pair itself."""

from powerswap.entities.fractions import Fraction, Price, TokenAmount
from powerswap.entities.pair import Pair, get_input_amount, get_output_amount
from powerswap.entities.token import WETH, Token, sort_tokens

__all__ = [
    "Token",
    "WETH",
    "sort_tokens",
    "Fraction",
    "TokenAmount",
    "Price",
    "Pair",
    "get_output_amount",
    "get_input_amount",
]
