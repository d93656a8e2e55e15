WALLET_ADDRESS_DESCRIPTION = (
    "0x-prefixed, 20-byte hex encoded Ethereum account address. "
    "Mixed-case addresses must carry a valid EIP-55 checksum."
)
ETH_AMOUNT_DESCRIPTION = "Amount of ETH held one month ago, used instead of a wallet"
TOP_COINS_LIMIT_DESCRIPTION = (
    "Number of native coins to return, ranked by 30-day price change"
)
