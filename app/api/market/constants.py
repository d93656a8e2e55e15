# CoinGecko API constants
COINGECKO_MARKETS_PAGE_SIZE = 250
COINGECKO_PRICE_CHANGE_WINDOW = "30d"
ETHEREUM_COINGECKO_ID = "ethereum"

# Sort key for coins without a reported 30-day change
MISSING_PRICE_CHANGE = -100.0

# CoinGecko ids of base-layer assets eligible for the comparison
NATIVE_COIN_IDS = frozenset(
    {
        "bitcoin",
        "ethereum",
        "solana",
        "avalanche-2",
        "binancecoin",
        "polkadot",
        "near",
        "fantom",
        "arbitrum",
        "optimism",
        "kaspa",
        "hedera",
        "stacks",
        "cardano",  # ADA
        "ripple",  # XRP
        "dogecoin",  # DOGE
        "litecoin",  # LTC
        "chainlink",  # LINK
        "tron",  # TRX
        "cosmos",  # ATOM
        "monero",  # XMR
        "stellar",  # XLM
        "uniswap",  # UNI
        "internet-computer",  # ICP
        "okb",  # OKB
        "crypto-com-chain",  # CRO
        "vechain",  # VET
        "algorand",  # ALGO
        "the-graph",  # GRT
        "mantle",  # MNT
        "lido-dao",  # LDO
        "immutable-x",  # IMX
        "injective",  # INJ
        "toncoin",  # TON
        "aptos",  # APT
        "sui",  # SUI
        "sei-network",  # SEI
        "celestia",  # TIA
    }
)
