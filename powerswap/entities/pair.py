"""Powerswap pair: pricing and liquidity accounting.

The pair prices swaps on a blend of two curves, weighted by R in
[0, WEIGHT_SCALE]:
- a constant-product curve over virtual balances (R = 0)
- a fixed reference-price curve, price in UQ112x112 (R = WEIGHT_SCALE)

Buying token1 moves the "buy" virtual balances; buying token0 moves the
"sell" virtual balances. Real reserves settle both directions.

All formulas reproduce the contract's uint256 arithmetic: same operation
order, truncating division, no floats. Reordering a multiplication and a
division changes results.

A Pair is an immutable snapshot. Swap quotes return the amount together
with a new Pair holding the post-swap state.
"""

from __future__ import annotations

from typing import Any

from powerswap.config import DEFAULT_DEPLOYMENT, Deployment
from powerswap.constants import (
    FEE_DENOMINATOR,
    FEE_NUMERATOR,
    LIQUIDITY_AMOUNT_FACTOR,
    LIQUIDITY_DENOMINATOR,
    LIQUIDITY_NUMERATOR,
    LIQUIDITY_TOKEN_DECIMALS,
    MINIMUM_LIQUIDITY,
    PRICE_SCALE,
    PROTOCOL_FEE_DIVISOR,
    WEIGHT_SCALE,
)
from powerswap.entities.fractions import Price, TokenAmount
from powerswap.entities.token import Token, sort_tokens
from powerswap.errors import (
    InsufficientInputAmount,
    InsufficientOutputAmount,
    InsufficientReserves,
    InvalidLiquidityAmount,
    MissingKLast,
    TokenMismatch,
    UnrelatedToken,
    WrongLiquidityToken,
)
from powerswap.models.state import PairState
from powerswap.models.types import parse_bigint_ish
from powerswap.pair_address import PairAddressCache, compute_pair_address
from powerswap.safe_int import S

AmountPair = tuple[TokenAmount, TokenAmount]


def get_output_amount(amount_in: int, reserve_in: int, reserve_out: int, price: int, blend: int) -> int:
    """Exact-input swap on the blended curve.

    Formula:
        in_fee   = amount_in * 997 // 1000
        adjusted = in_fee * reserve_in * WS // (in_fee * (WS - R) + reserve_in * WS)
        out      = adjusted * reserve_out * WS // (reserve_in * (WS - R) + reserve_out * price * R // Q112)

    Args:
        amount_in: Input token amount
        reserve_in: Virtual balance of the input token
        reserve_out: Virtual balance of the output token
        price: Reference price of the input token (UQ112x112)
        blend: Blend parameter R

    Returns:
        Output token amount (rounded down)

    Raises:
        InsufficientInputAmount: If amount_in is zero or the output rounds to zero
        InsufficientReserves: If the curve denominator is zero
    """
    if amount_in <= 0:
        raise InsufficientInputAmount(f"Input amount must be positive, got {amount_in}")

    weight = S(WEIGHT_SCALE) - S(blend)
    scaled_reserve_in = S(reserve_in) * WEIGHT_SCALE

    amount_in_with_fee = S(amount_in) * FEE_NUMERATOR // FEE_DENOMINATOR
    adjusted = amount_in_with_fee * scaled_reserve_in // (amount_in_with_fee * weight + scaled_reserve_in)

    numerator = adjusted * (S(reserve_out) * WEIGHT_SCALE)
    denominator = S(reserve_in) * weight + S(reserve_out) * (S(price) * blend) // PRICE_SCALE
    if denominator == 0:
        raise InsufficientReserves("Zero reference price at full blend")

    amount_out = (numerator // denominator).value
    if amount_out == 0:
        raise InsufficientInputAmount(f"Input amount {amount_in} yields zero output")
    return amount_out


def get_input_amount(amount_out: int, reserve_in: int, reserve_out: int, price: int, blend: int) -> int:
    """Exact-output swap on the blended curve (inverse of get_output_amount).

    Both divisions round up (floor + 1), so the returned input never
    under-pays for the requested output.

    Formula:
        t         = amount_out * (reserve_in * (WS - R) + reserve_out * price * R // Q112)
                    // (reserve_out * WS) + 1
        amount_in = reserve_in * t * WS * 1000 // ((reserve_in * WS - t * (WS - R)) * 997) + 1

    Raises:
        InsufficientOutputAmount: If amount_out is zero
        InsufficientReserves: If the output cannot be bought at any input
    """
    if amount_out <= 0:
        raise InsufficientOutputAmount(f"Output amount must be positive, got {amount_out}")

    weight = S(WEIGHT_SCALE) - S(blend)
    scaled_reserve_in = S(reserve_in) * WEIGHT_SCALE

    numerator = S(amount_out) * (S(reserve_in) * weight + S(reserve_out) * (S(price) * blend) // PRICE_SCALE)
    adjusted = numerator // (S(reserve_out) * WEIGHT_SCALE) + 1

    if scaled_reserve_in <= adjusted * weight:
        raise InsufficientReserves(f"Output {amount_out} exceeds what the curve can pay")
    denominator = (scaled_reserve_in - adjusted * weight) * FEE_NUMERATOR

    return (S(reserve_in) * (adjusted * (WEIGHT_SCALE * FEE_DENOMINATOR)) // denominator + 1).value


class Pair:
    """Snapshot of a Powerswap pair.

    Construct with the full chain state, or with `Pair.from_reserves` for a
    pair whose virtual balances and prices mirror its reserves. Amount
    tuples are given in the order of (amount_a, amount_b) and re-aligned to
    (token0, token1) here. "Buy" virtual balances are the ones used when
    buying the caller's second token, so when the caller's tokens arrive
    in reverse order the buy and sell tuples trade places.
    """

    __slots__ = (
        "liquidity_token",
        "_reserves",
        "_buy_virtual_balances",
        "_sell_virtual_balances",
        "_base_prices",
        "_blend",
    )

    liquidity_token: Token
    _reserves: AmountPair
    _buy_virtual_balances: AmountPair
    _sell_virtual_balances: AmountPair
    _base_prices: AmountPair
    _blend: int

    @staticmethod
    def get_address(token_a: Token, token_b: Token, deployment: Deployment = DEFAULT_DEPLOYMENT) -> str:
        """Address of the pair contract for two tokens."""
        return compute_pair_address(deployment.factory_address, deployment.init_code_hash, token_a, token_b)

    def __init__(
        self,
        amount_a: TokenAmount,
        amount_b: TokenAmount,
        buy_virtual_balances: AmountPair,
        sell_virtual_balances: AmountPair,
        base_prices: AmountPair,
        blend: int,
        *,
        deployment: Deployment = DEFAULT_DEPLOYMENT,
        address_cache: PairAddressCache | None = None,
    ) -> None:
        for index, amount in enumerate((amount_a, amount_b)):
            for name, values in (
                ("buy_virtual_balances", buy_virtual_balances),
                ("sell_virtual_balances", sell_virtual_balances),
                ("base_prices", base_prices),
            ):
                if values[index].token != amount.token:
                    raise TokenMismatch(f"{name}[{index}] is {values[index].token!r}, expected {amount.token!r}")

        if amount_a.token.sorts_before(amount_b.token):
            reserves = (amount_a, amount_b)
            buy = (buy_virtual_balances[0], buy_virtual_balances[1])
            sell = (sell_virtual_balances[0], sell_virtual_balances[1])
            prices = (base_prices[0], base_prices[1])
        else:
            reserves = (amount_b, amount_a)
            buy = (sell_virtual_balances[1], sell_virtual_balances[0])
            sell = (buy_virtual_balances[1], buy_virtual_balances[0])
            prices = (base_prices[1], base_prices[0])

        token0, token1 = reserves[0].token, reserves[1].token
        if address_cache is not None:
            deployment = address_cache.deployment
            address = address_cache.get_address(token0, token1)
        else:
            address = compute_pair_address(deployment.factory_address, deployment.init_code_hash, token0, token1)

        liquidity_token = Token(
            token0.chain_id,
            address,
            LIQUIDITY_TOKEN_DECIMALS,
            deployment.liquidity_token_symbol,
            deployment.liquidity_token_name,
        )
        self._init_state(liquidity_token, reserves, buy, sell, prices, blend)

    @classmethod
    def from_reserves(
        cls,
        amount_a: TokenAmount,
        amount_b: TokenAmount,
        *,
        deployment: Deployment = DEFAULT_DEPLOYMENT,
        address_cache: PairAddressCache | None = None,
    ) -> Pair:
        """Pair whose virtual balances and base prices are its reserves, with R = 0."""
        amounts = (amount_a, amount_b)
        return cls(
            amount_a,
            amount_b,
            amounts,
            amounts,
            amounts,
            0,
            deployment=deployment,
            address_cache=address_cache,
        )

    @classmethod
    def from_state(
        cls,
        token_a: Token,
        token_b: Token,
        state: PairState,
        *,
        deployment: Deployment = DEFAULT_DEPLOYMENT,
        address_cache: PairAddressCache | None = None,
    ) -> Pair:
        """Pair from raw contract state, which is always in (token0, token1) order."""
        token0, token1 = sort_tokens(token_a, token_b)
        return cls(
            TokenAmount(token0, state.reserve0),
            TokenAmount(token1, state.reserve1),
            (TokenAmount(token0, state.buy_virtual0), TokenAmount(token1, state.buy_virtual1)),
            (TokenAmount(token0, state.sell_virtual0), TokenAmount(token1, state.sell_virtual1)),
            (TokenAmount(token0, state.base_price0), TokenAmount(token1, state.base_price1)),
            state.blend,
            deployment=deployment,
            address_cache=address_cache,
        )

    def _init_state(
        self,
        liquidity_token: Token,
        reserves: AmountPair,
        buy: AmountPair,
        sell: AmountPair,
        prices: AmountPair,
        blend: int,
    ) -> None:
        if isinstance(blend, bool) or not isinstance(blend, int) or not 0 <= blend <= WEIGHT_SCALE:
            raise ValueError(f"Blend must be an int in [0, {WEIGHT_SCALE}], got {blend!r}")
        object.__setattr__(self, "liquidity_token", liquidity_token)
        object.__setattr__(self, "_reserves", reserves)
        object.__setattr__(self, "_buy_virtual_balances", buy)
        object.__setattr__(self, "_sell_virtual_balances", sell)
        object.__setattr__(self, "_base_prices", prices)
        object.__setattr__(self, "_blend", blend)

    def _evolve(
        self,
        reserves: AmountPair,
        buy: AmountPair | None = None,
        sell: AmountPair | None = None,
    ) -> Pair:
        """New snapshot in canonical order, sharing this pair's liquidity token."""
        pair = object.__new__(Pair)
        pair._init_state(
            self.liquidity_token,
            reserves,
            buy if buy is not None else self._buy_virtual_balances,
            sell if sell is not None else self._sell_virtual_balances,
            self._base_prices,
            self._blend,
        )
        return pair

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Pair is immutable, cannot set {name}")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"Pair is immutable, cannot delete {name}")

    def _state(self) -> tuple:
        return (
            self.liquidity_token,
            self._reserves,
            self._buy_virtual_balances,
            self._sell_virtual_balances,
            self._base_prices,
            self._blend,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pair):
            return NotImplemented
        return self._state() == other._state()

    def __hash__(self) -> int:
        return hash(self._state())

    def __repr__(self) -> str:
        return (
            f"Pair({self.token0!r}/{self.token1!r}, reserves=({self.reserve0.raw}, {self.reserve1.raw}), "
            f"R={self._blend})"
        )

    # --- State ---

    @property
    def chain_id(self) -> int:
        return self.token0.chain_id

    @property
    def address(self) -> str:
        return self.liquidity_token.address

    @property
    def token0(self) -> Token:
        return self._reserves[0].token

    @property
    def token1(self) -> Token:
        return self._reserves[1].token

    @property
    def reserve0(self) -> TokenAmount:
        return self._reserves[0]

    @property
    def reserve1(self) -> TokenAmount:
        return self._reserves[1]

    @property
    def buy_virtual_balances(self) -> AmountPair:
        """Virtual balances used when buying token1, as (token0, token1)."""
        return self._buy_virtual_balances

    @property
    def sell_virtual_balances(self) -> AmountPair:
        """Virtual balances used when buying token0, as (token0, token1)."""
        return self._sell_virtual_balances

    @property
    def base_prices(self) -> AmountPair:
        """UQ112x112 reference prices for selling token0 and selling token1."""
        return self._base_prices

    @property
    def blend(self) -> int:
        return self._blend

    def involves_token(self, token: Token) -> bool:
        """True if the token is either token0 or token1."""
        return token == self.token0 or token == self.token1

    def _check_involved(self, token: Token) -> None:
        if not self.involves_token(token):
            raise UnrelatedToken(f"{token!r} is not in pair {self.token0!r}/{self.token1!r}")

    def reserve_of(self, token: Token) -> TokenAmount:
        self._check_involved(token)
        return self.reserve0 if token == self.token0 else self.reserve1

    # --- Prices ---

    @property
    def token0_price(self) -> Price:
        """Current price of token0 in token1, from the buy virtual balances.

        numerator   = bv1 * Q112 * WS
        denominator = bp0 * bv1 * R + bv0 * Q112 * (WS - R)
        """
        buy0, buy1 = (amount.raw for amount in self._buy_virtual_balances)
        return self._curve_price(self.token0, self.token1, buy0, buy1, self._base_prices[0].raw)

    @property
    def token1_price(self) -> Price:
        """Current price of token1 in token0, from the sell virtual balances."""
        sell0, sell1 = (amount.raw for amount in self._sell_virtual_balances)
        return self._curve_price(self.token1, self.token0, sell1, sell0, self._base_prices[1].raw)

    def _curve_price(self, base: Token, quote: Token, balance_base: int, balance_quote: int, price: int) -> Price:
        numerator = balance_quote * PRICE_SCALE * WEIGHT_SCALE
        denominator = price * balance_quote * self._blend + balance_base * PRICE_SCALE * (WEIGHT_SCALE - self._blend)
        if denominator == 0:
            raise InsufficientReserves(f"No price for {base!r}: empty virtual balances")
        return Price(base, quote, denominator, numerator)

    def price_of(self, token: Token) -> Price:
        """Price of the given token in terms of the other token of the pair."""
        self._check_involved(token)
        return self.token0_price if token == self.token0 else self.token1_price

    def reference_price(self, token: Token) -> Price:
        """Price of token the curve converges to at R = WEIGHT_SCALE (Q112 / base price)."""
        self._check_involved(token)
        if token == self.token0:
            base_price, other = self._base_prices[0].raw, self.token1
        else:
            base_price, other = self._base_prices[1].raw, self.token0
        if base_price == 0:
            raise InsufficientReserves(f"No reference price for {token!r}")
        return Price(token, other, base_price, PRICE_SCALE)

    # --- Swaps ---

    def _check_swappable(self) -> None:
        balances = (*self._reserves, *self._buy_virtual_balances, *self._sell_virtual_balances)
        if any(amount.raw == 0 for amount in balances):
            raise InsufficientReserves("Pair has an empty reserve or virtual balance")

    @staticmethod
    def _check_drawable(output: TokenAmount, reserve: TokenAmount, virtual: TokenAmount) -> None:
        if output.raw >= reserve.raw or output.raw >= virtual.raw:
            raise InsufficientReserves(
                f"Output {output.raw} drains reserve {reserve.raw} or virtual balance {virtual.raw}"
            )

    def _swap_state(self, input_amount: TokenAmount, output_amount: TokenAmount) -> Pair:
        if input_amount.token == self.token0:
            buy0, buy1 = self._buy_virtual_balances
            return self._evolve(
                (self.reserve0.add(input_amount), self.reserve1.subtract(output_amount)),
                buy=(buy0.add(input_amount), buy1.subtract(output_amount)),
            )
        sell0, sell1 = self._sell_virtual_balances
        return self._evolve(
            (self.reserve0.subtract(output_amount), self.reserve1.add(input_amount)),
            sell=(sell0.subtract(output_amount), sell1.add(input_amount)),
        )

    def get_output_amount(self, input_amount: TokenAmount) -> tuple[TokenAmount, Pair]:
        """Quote an exact-input swap.

        Selling token0 runs on the buy virtual balances and base price 0;
        selling token1 on the sell virtual balances and base price 1.

        Args:
            input_amount: Amount of token0 or token1 to sell

        Returns:
            Tuple of (output amount, pair after the swap)

        Raises:
            UnrelatedToken: If the input token is not in the pair
            InsufficientReserves: If a balance is zero or the output drains a reserve
            InsufficientInputAmount: If the input is zero or too small to buy anything
        """
        self._check_involved(input_amount.token)
        self._check_swappable()

        if input_amount.token == self.token0:
            reserve_in, reserve_out = self._buy_virtual_balances
            price, token_out = self._base_prices[0].raw, self.token1
        else:
            reserve_out, reserve_in = self._sell_virtual_balances
            price, token_out = self._base_prices[1].raw, self.token0

        amount_out = get_output_amount(input_amount.raw, reserve_in.raw, reserve_out.raw, price, self._blend)
        output_amount = TokenAmount(token_out, amount_out)
        self._check_drawable(output_amount, self.reserve_of(token_out), reserve_out)

        return output_amount, self._swap_state(input_amount, output_amount)

    def get_input_amount(self, output_amount: TokenAmount) -> tuple[TokenAmount, Pair]:
        """Quote an exact-output swap.

        Buying token0 runs on the sell virtual balances and base price 1;
        buying token1 on the buy virtual balances and base price 0.

        Args:
            output_amount: Amount of token0 or token1 to buy

        Returns:
            Tuple of (required input amount, pair after the swap)

        Raises:
            UnrelatedToken: If the output token is not in the pair
            InsufficientReserves: If a balance is zero or the output meets the reserve
            InsufficientOutputAmount: If the requested output is zero
        """
        self._check_involved(output_amount.token)
        self._check_swappable()

        if output_amount.token == self.token0:
            reserve_out, reserve_in = self._sell_virtual_balances
            price, token_in = self._base_prices[1].raw, self.token1
        else:
            reserve_in, reserve_out = self._buy_virtual_balances
            price, token_in = self._base_prices[0].raw, self.token0

        self._check_drawable(output_amount, self.reserve_of(output_amount.token), reserve_out)

        amount_in = get_input_amount(output_amount.raw, reserve_in.raw, reserve_out.raw, price, self._blend)
        input_amount = TokenAmount(token_in, amount_in)

        return input_amount, self._swap_state(input_amount, output_amount)

    # --- Liquidity ---

    def _check_liquidity_token(self, amount: TokenAmount, name: str) -> None:
        if amount.token != self.liquidity_token:
            raise WrongLiquidityToken(f"{name} is in {amount.token!r}, expected {self.liquidity_token!r}")

    def get_liquidity_minted(
        self,
        total_supply: TokenAmount,
        amount_a: TokenAmount,
        amount_b: TokenAmount,
    ) -> TokenAmount:
        """Liquidity tokens minted for a deposit.

        First deposit: sqrt(amount0 * amount1) - MINIMUM_LIQUIDITY.
        Otherwise the smaller of, for each token:
            amount * total_supply * 98 // (reserve * 100 + amount * 2)

        Raises:
            WrongLiquidityToken: If total_supply is not in the liquidity token
            UnrelatedToken: If the deposits are not exactly token0 and token1
            InsufficientInputAmount: If no liquidity would be minted
        """
        self._check_liquidity_token(total_supply, "total_supply")
        if (
            not self.involves_token(amount_a.token)
            or not self.involves_token(amount_b.token)
            or amount_a.token == amount_b.token
        ):
            raise UnrelatedToken(f"Deposit {amount_a.token!r}/{amount_b.token!r} does not match the pair")
        amount0, amount1 = (amount_a, amount_b) if amount_a.token == self.token0 else (amount_b, amount_a)

        if total_supply.raw == 0:
            liquidity = (S(amount0.raw) * S(amount1.raw)).sqrt().value - MINIMUM_LIQUIDITY
        else:
            supply = S(total_supply.raw)
            candidates = [
                S(amount.raw)
                * (supply * LIQUIDITY_NUMERATOR)
                // (S(reserve.raw) * LIQUIDITY_DENOMINATOR + S(amount.raw) * LIQUIDITY_AMOUNT_FACTOR)
                for amount, reserve in ((amount0, self.reserve0), (amount1, self.reserve1))
            ]
            liquidity = candidates[0].min(candidates[1]).value

        if liquidity <= 0:
            raise InsufficientInputAmount(f"Deposit mints no liquidity ({liquidity})")
        return TokenAmount(self.liquidity_token, liquidity)

    def get_liquidity_value(
        self,
        token: Token,
        total_supply: TokenAmount,
        liquidity: TokenAmount,
        fee_on: bool = False,
        k_last: int | str | None = None,
    ) -> TokenAmount:
        """Amount of token redeemable for liquidity.

        With the protocol fee on, supply is first grown by the liquidity the
        protocol would mint for the growth of sqrt(k) since k_last:
            extra = total_supply * (rootK - rootKLast) // (rootK * 5 + rootKLast)

        Then:
            value = (supply * 100 - liquidity * 2) * reserve
                    // (supply * supply * 98 // liquidity + 1)

        Args:
            token: Token to value the liquidity in
            total_supply: Total supply of the liquidity token
            liquidity: Liquidity being redeemed
            fee_on: Whether the protocol fee is switched on
            k_last: reserve0 * reserve1 at the last fee checkpoint (int or numeric string)

        Raises:
            UnrelatedToken: If token is not in the pair
            WrongLiquidityToken: If supply or liquidity is not in the liquidity token
            InvalidLiquidityAmount: If liquidity is zero or exceeds total supply
            MissingKLast: If fee_on is set without k_last
        """
        self._check_involved(token)
        self._check_liquidity_token(total_supply, "total_supply")
        self._check_liquidity_token(liquidity, "liquidity")
        if liquidity.raw > total_supply.raw:
            raise InvalidLiquidityAmount(f"Liquidity {liquidity.raw} exceeds total supply {total_supply.raw}")
        if liquidity.raw == 0:
            raise InvalidLiquidityAmount("Liquidity must be positive")

        supply = S(total_supply.raw)
        if fee_on:
            if k_last is None:
                raise MissingKLast("k_last is required when the protocol fee is on")
            k_last_value = parse_bigint_ish(k_last)
            if k_last_value != 0:
                root_k = (S(self.reserve0.raw) * S(self.reserve1.raw)).sqrt()
                root_k_last = S(k_last_value).sqrt()
                if root_k > root_k_last:
                    fee_liquidity = (
                        supply * (root_k - root_k_last) // (root_k * PROTOCOL_FEE_DIVISOR + root_k_last)
                    )
                    supply = supply + fee_liquidity

        numerator = supply * LIQUIDITY_DENOMINATOR - S(liquidity.raw) * LIQUIDITY_AMOUNT_FACTOR
        denominator = supply * (supply * LIQUIDITY_NUMERATOR) // liquidity.raw + 1

        return TokenAmount(token, (numerator * self.reserve_of(token).raw // denominator).value)
