"""Constants and configuration for the cauldron refund calculator."""

# Abracadabra CRV cauldron (v4) whose borrowers are refunded part of their interest.
MIM_CAULDRON_ADDR = "0x207763511da879a900973A5E092382117C3c1588"
# Curve MIM-3CRV gauge that voters are bribed to vote for.
CURVE_MIM_GAUGE_ADDR = "0xd8b712d29381748db89c36bca0138d7c75866ddf"
CURVE_GAUGE_CONTROLLER_ADDR = "0x2F50D538606Fa9EDD2B11E2446BEb18C9D5846bB"
VE_CRV_ADDR = "0x5f3b5DfEb7B28CDbD7FAba78963EE202a494e2A2"
SPELL_ADDR = "0x090185f2135308bad17527004364ebcc2d37e5f6"
YBRIBE_V2_ADDR = "0x7893bbb46613d7a4FbcC31Dab4C9b823FfeE1026"
YBRIBE_V3_ADDR = "0x03dFdBcD4056E2F92251c7B07423E1a33a7D3F6d"

YBRIBE_ADDRS = {
    2: YBRIBE_V2_ADDR,
    3: YBRIBE_V3_ADDR,
}

# Borrower/voter pair the refund agreement was written for.
DEFAULT_BORROWER_ADDR = "0x7a16ff8270133f063aab6c9977183d9e72835428"
DEFAULT_VOTER_ADDR = "0x9B44473E223f8a3c047AD86f387B80402536B029"

# Minimal ABI for CauldronV4 - only the debt accounting getters.
CAULDRON_MIN_ABI: list[dict] = [
    {
        "type": "function",
        "name": "totalBorrow",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [
            {"name": "elastic", "type": "uint128", "internalType": "uint128"},
            {"name": "base", "type": "uint128", "internalType": "uint128"},
        ],
    },
    {
        "type": "function",
        "name": "userBorrowPart",
        "stateMutability": "view",
        "inputs": [{"name": "", "type": "address", "internalType": "address"}],
        "outputs": [{"name": "", "type": "uint256", "internalType": "uint256"}],
    },
]

# Minimal ABI for veCRV. The contract also exposes balanceOf(addr, _t); only the
# single-argument form is listed so web3 does not have to resolve the overload.
VE_CRV_MIN_ABI: list[dict] = [
    {
        "type": "function",
        "name": "balanceOf",
        "stateMutability": "view",
        "inputs": [{"name": "addr", "type": "address"}],
        "outputs": [{"name": "", "type": "uint256"}],
    },
]

GAUGE_CONTROLLER_MIN_ABI: list[dict] = [
    {
        "type": "function",
        "name": "vote_user_slopes",
        "stateMutability": "view",
        "inputs": [
            {"name": "arg0", "type": "address"},
            {"name": "arg1", "type": "address"},
        ],
        "outputs": [
            {"name": "slope", "type": "uint256"},
            {"name": "power", "type": "uint256"},
            {"name": "end", "type": "uint256"},
        ],
    },
    {
        "type": "function",
        "name": "get_gauge_weight",
        "stateMutability": "view",
        "inputs": [{"name": "addr", "type": "address"}],
        "outputs": [{"name": "", "type": "uint256"}],
    },
]

# yBribe keeps running totals per (gauge, reward token): everything ever deposited and
# everything ever claimed. The difference is what is left to distribute, rollover included.
YBRIBE_MIN_ABI: list[dict] = [
    {
        "type": "function",
        "name": "reward_per_gauge",
        "stateMutability": "view",
        "inputs": [
            {"name": "arg0", "type": "address"},
            {"name": "arg1", "type": "address"},
        ],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "type": "function",
        "name": "claims_per_gauge",
        "stateMutability": "view",
        "inputs": [
            {"name": "arg0", "type": "address"},
            {"name": "arg1", "type": "address"},
        ],
        "outputs": [{"name": "", "type": "uint256"}],
    },
]

# Abracadabra IOracle. peekSpot returns the inverted rate (token amount per 1 USD, 18dp).
ORACLE_MIN_ABI: list[dict] = [
    {
        "type": "function",
        "name": "peekSpot",
        "stateMutability": "view",
        "inputs": [{"name": "data", "type": "bytes"}],
        "outputs": [{"name": "rate", "type": "uint256"}],
    },
]

# Used only when neither --rpc-url nor ETH_RPC_URL are provided.
DEFAULT_PUBLIC_ETH_RPC_URLS = (
    "https://eth.llamarpc.com",
    "https://ethereum.publicnode.com",
)

TOTAL_BASIS_POINTS = 100_00
# Refund cap: starting interest rate (18%) minus the minimum rate (11%).
MAX_REFUND_RATE_BPS = 700
WEEKS_IN_YEAR = 52

TOKEN_DECIMALS = 18
# Supported USD price scales: 8dp for the manual price feed, 18dp for the oracle path.
PRICE_DECIMALS_CHOICES = (8, 18)
ORACLE_PRICE_DECIMALS = 18
# peekSpot returns (token per USD) at 18dp; 1e36 / spot gives USD per token at 18dp.
ORACLE_INVERSION_NUMERATOR = 10**36

# Constant weekly SPELL bribe used before the yBribe balance was read on-chain.
LEGACY_WEEKLY_SPELL_BRIBE = 134_193_798 * 10**18

DEFAULT_DISPLAY_DECIMALS = 2
