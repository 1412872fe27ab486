"""Contract read ports and their web3.py implementations."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from cauldron_refund.constants import (
    CAULDRON_MIN_ABI,
    GAUGE_CONTROLLER_MIN_ABI,
    ORACLE_MIN_ABI,
    VE_CRV_MIN_ABI,
    YBRIBE_MIN_ABI,
)
from cauldron_refund.errors import ReadFailure
from cauldron_refund.formatters import as_int
from cauldron_refund.models import RefundConfig

if TYPE_CHECKING:
    from web3 import Web3  # pragma: no cover


BlockId = int | str


class LendingPoolPort(Protocol):
    def total_borrow(self, *, block_identifier: BlockId = "latest") -> tuple[int, int]: ...
    def user_borrow_part(self, user: str, *, block_identifier: BlockId = "latest") -> int: ...


class VoteEscrowPort(Protocol):
    def balance_of(self, user: str, *, block_identifier: BlockId = "latest") -> int: ...


class GaugeControllerPort(Protocol):
    def vote_user_power(self, user: str, gauge: str, *, block_identifier: BlockId = "latest") -> int: ...
    def gauge_weight(self, gauge: str, *, block_identifier: BlockId = "latest") -> int: ...


class BribeDistributorPort(Protocol):
    def reward_per_gauge(self, gauge: str, token: str, *, block_identifier: BlockId = "latest") -> int: ...
    def claims_per_gauge(self, gauge: str, token: str, *, block_identifier: BlockId = "latest") -> int: ...


class PriceOraclePort(Protocol):
    def peek_spot(self, data: bytes, *, block_identifier: BlockId = "latest") -> int: ...


@dataclass(frozen=True)
class ContractPorts:
    """The set of read ports a RefundEngine needs."""

    lending_pool: LendingPoolPort
    vote_escrow: VoteEscrowPort
    gauge_controller: GaugeControllerPort
    bribe_distributor: BribeDistributorPort
    oracle: PriceOraclePort | None = None


class _Web3Reader:
    """Shared plumbing: bind a contract and wrap call failures in ReadFailure."""

    abi: list[dict] = []

    def __init__(self, w3: "Web3", address: str):
        self.address = w3.to_checksum_address(address)
        self._w3 = w3
        self._contract = w3.eth.contract(address=self.address, abi=self.abi)

    def _call(self, fn_name: str, *args: Any, block_identifier: BlockId) -> Any:
        fn = getattr(self._contract.functions, fn_name)
        try:
            return fn(*args).call(block_identifier=block_identifier)
        except Exception as ex:  # pylint: disable=broad-exception-caught
            raise ReadFailure(fn_name, self.address, block_identifier, cause=ex) from ex

    def _checksum(self, address: str) -> str:
        return self._w3.to_checksum_address(address)


class Web3Cauldron(_Web3Reader):
    abi = CAULDRON_MIN_ABI

    def total_borrow(self, *, block_identifier: BlockId = "latest") -> tuple[int, int]:
        elastic, base = self._call("totalBorrow", block_identifier=block_identifier)
        return as_int(elastic), as_int(base)

    def user_borrow_part(self, user: str, *, block_identifier: BlockId = "latest") -> int:
        return as_int(self._call("userBorrowPart", self._checksum(user), block_identifier=block_identifier))


class Web3VotingEscrow(_Web3Reader):
    abi = VE_CRV_MIN_ABI

    def balance_of(self, user: str, *, block_identifier: BlockId = "latest") -> int:
        return as_int(self._call("balanceOf", self._checksum(user), block_identifier=block_identifier))


class Web3GaugeController(_Web3Reader):
    abi = GAUGE_CONTROLLER_MIN_ABI

    def vote_user_power(self, user: str, gauge: str, *, block_identifier: BlockId = "latest") -> int:
        """Basis points of the user's veCRV voted for the gauge (vote_user_slopes().power)."""
        _slope, power, _end = self._call(
            "vote_user_slopes", self._checksum(user), self._checksum(gauge), block_identifier=block_identifier
        )
        return as_int(power)

    def gauge_weight(self, gauge: str, *, block_identifier: BlockId = "latest") -> int:
        return as_int(self._call("get_gauge_weight", self._checksum(gauge), block_identifier=block_identifier))


class Web3YBribe(_Web3Reader):
    abi = YBRIBE_MIN_ABI

    def reward_per_gauge(self, gauge: str, token: str, *, block_identifier: BlockId = "latest") -> int:
        return as_int(
            self._call(
                "reward_per_gauge", self._checksum(gauge), self._checksum(token), block_identifier=block_identifier
            )
        )

    def claims_per_gauge(self, gauge: str, token: str, *, block_identifier: BlockId = "latest") -> int:
        return as_int(
            self._call(
                "claims_per_gauge", self._checksum(gauge), self._checksum(token), block_identifier=block_identifier
            )
        )


class Web3Oracle(_Web3Reader):
    abi = ORACLE_MIN_ABI

    def peek_spot(self, data: bytes, *, block_identifier: BlockId = "latest") -> int:
        return as_int(self._call("peekSpot", data, block_identifier=block_identifier))


def bind_ports(w3: "Web3", config: RefundConfig) -> ContractPorts:
    """Bind every contract named in `config` to a web3 read port."""
    return ContractPorts(
        lending_pool=Web3Cauldron(w3, config.cauldron),
        vote_escrow=Web3VotingEscrow(w3, config.ve_token),
        gauge_controller=Web3GaugeController(w3, config.gauge_controller),
        bribe_distributor=Web3YBribe(w3, config.bribe_contract),
        oracle=Web3Oracle(w3, config.oracle) if config.oracle else None,
    )
