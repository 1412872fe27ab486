"""Refund engine: reads on-chain state through the ports and applies the refund formulas."""

from cauldron_refund import calculations
from cauldron_refund.contracts import BlockId, ContractPorts
from cauldron_refund.models import (
    BorrowPosition,
    BribePool,
    GaugeTotals,
    RefundConfig,
    RefundPolicy,
    RefundQuote,
    TokenPrice,
    VotingPower,
)


class RefundEngine:
    """
    Computes the weekly refund owed to a cauldron borrower.

    The refund is the lesser (or, under the floor-first policy, the rate-capped) of two
    dollar amounts: the borrower's interest above the 11% floor for one week, and the
    value of the SPELL bribes the voter collects for voting on the MIM gauge.

    Every read of one engine uses the same `block_identifier`, so a computation sees a
    single consistent chain state. Nothing is cached; each call reads again.
    """

    def __init__(self, config: RefundConfig, ports: ContractPorts, *, block_identifier: BlockId = "latest"):
        self._config = config
        self._ports = ports
        self._block = block_identifier

    @property
    def config(self) -> RefundConfig:
        return self._config

    @property
    def ports(self) -> ContractPorts:
        return self._ports

    @property
    def policy(self) -> RefundPolicy:
        return self._config.policy

    @property
    def price_decimals(self) -> int:
        return self._config.price_decimals

    @property
    def block_identifier(self) -> BlockId:
        return self._block

    def at_block(self, block_identifier: BlockId) -> "RefundEngine":
        """Same configuration, pinned to another block."""
        return RefundEngine(self._config, self._ports, block_identifier=block_identifier)

    def _price(self, price: TokenPrice | int) -> TokenPrice:
        if isinstance(price, TokenPrice):
            return price
        return TokenPrice(int(price), self._config.price_decimals)

    # Raw reads

    def get_borrow_position(self) -> BorrowPosition:
        pool = self._ports.lending_pool
        elastic, base = pool.total_borrow(block_identifier=self._block)
        part = pool.user_borrow_part(self._config.borrower, block_identifier=self._block)
        return BorrowPosition(elastic_total=elastic, base_total=base, user_base_part=part)

    def get_voting_power(self) -> VotingPower:
        balance = self._ports.vote_escrow.balance_of(self._config.voter, block_identifier=self._block)
        power = self._ports.gauge_controller.vote_user_power(
            self._config.voter, self._config.gauge, block_identifier=self._block
        )
        return VotingPower(ve_balance=balance, gauge_share_bps=power)

    def get_gauge_totals(self) -> GaugeTotals:
        weight = self._ports.gauge_controller.gauge_weight(self._config.gauge, block_identifier=self._block)
        return GaugeTotals(total_votes_for_gauge=weight)

    def get_bribe_pool(self) -> BribePool:
        """Bribe pool used for the refund: the fixed weekly bribe if configured, else the contract."""
        cfg = self._config
        if cfg.weekly_bribe_override is not None:
            return BribePool(rewards_accrued=cfg.weekly_bribe_override, rewards_claimed=0)
        return self.get_onchain_bribe_pool()

    def get_onchain_bribe_pool(self) -> BribePool:
        """Running bribe totals read from the bribe contract, ignoring any fixed weekly bribe."""
        cfg = self._config
        bribes = self._ports.bribe_distributor
        accrued = bribes.reward_per_gauge(cfg.gauge, cfg.reward_token, block_identifier=self._block)
        claimed = bribes.claims_per_gauge(cfg.gauge, cfg.reward_token, block_identifier=self._block)
        return BribePool(rewards_accrued=accrued, rewards_claimed=claimed)

    # Borrower side

    def get_borrow_amount(self) -> int:
        return calculations.borrow_amount(self.get_borrow_position())

    def max_weekly_refund(self) -> int:
        """Weekly refund cap in dollars (18dp): interest between 18% and 11% APR for one week."""
        return calculations.max_weekly_refund(self.get_borrow_amount())

    # Voter side

    def get_voter_weighted_votes(self) -> int:
        return calculations.voter_weighted_votes(self.get_voting_power())

    def get_total_gauge_votes(self) -> int:
        return self.get_gauge_totals().total_votes_for_gauge

    def get_weekly_bribe_pool(self) -> int:
        return calculations.weekly_bribe_pool(self.get_bribe_pool())

    def get_voter_bribe_share(self) -> int:
        """Reward tokens (18dp) the voter receives from this week's pool."""
        pool = self.get_weekly_bribe_pool()
        votes = self.get_voter_weighted_votes()
        total = self.get_total_gauge_votes()
        return calculations.voter_bribe_share(pool, votes, total)

    def get_voter_bribe_dollar_value(self, token_price: TokenPrice | int) -> int:
        return calculations.bribe_dollar_value(self.get_voter_bribe_share(), self._price(token_price))

    # Refund

    def get_refund_amount(self, token_price: TokenPrice | int) -> int:
        """Final refund in dollars (18dp), chosen by the configured policy."""
        max_refund = self.max_weekly_refund()
        bribe_value = self.get_voter_bribe_dollar_value(token_price)
        return calculations.select_refund(self.policy, max_refund, bribe_value)

    def token_amount_to_return(self, token_price: TokenPrice | int) -> int:
        """Reward tokens (18dp) to send back to the treasury."""
        price = self._price(token_price)
        return calculations.token_amount_for(self.get_refund_amount(price), price)

    def get_token_price_from_oracle(self) -> TokenPrice:
        """USD price (18dp) from the oracle's inverted spot rate."""
        oracle = self._ports.oracle
        if oracle is None:
            raise ValueError("no price oracle configured")
        spot = oracle.peek_spot(self._config.oracle_data, block_identifier=self._block)
        return calculations.invert_oracle_spot(spot)

    def quote(self, token_price: TokenPrice | int) -> RefundQuote:
        """Read everything once and compute the full refund."""
        price = self._price(token_price)

        position = self.get_borrow_position()
        power = self.get_voting_power()
        totals = self.get_gauge_totals()
        pool = self.get_bribe_pool()

        borrowed = calculations.borrow_amount(position)
        max_refund = calculations.max_weekly_refund(borrowed)
        share = calculations.voter_bribe_share(
            calculations.weekly_bribe_pool(pool),
            calculations.voter_weighted_votes(power),
            totals.total_votes_for_gauge,
        )
        bribe_value = calculations.bribe_dollar_value(share, price)
        refund = calculations.select_refund(self.policy, max_refund, bribe_value)

        return RefundQuote(
            token_price=price,
            policy=self.policy,
            block_identifier=self._block,
            borrow_amount=borrowed,
            max_weekly_refund=max_refund,
            voter_bribe_share=share,
            voter_bribe_dollar_value=bribe_value,
            refund_amount=refund,
            token_to_return=calculations.token_amount_for(refund, price),
        )
