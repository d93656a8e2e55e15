import eth_utils


def is_evm_address(address: str | None) -> bool:
    """
    Check for a 0x-prefixed 20-byte hex address.

    All-lowercase and all-uppercase addresses are accepted as is, mixed-case
    addresses must pass the EIP-55 checksum.
    """
    if not address or not address.startswith("0x"):
        return False
    return eth_utils.is_address(address)


def is_address_equal(a: str | None, b: str | None) -> bool:
    """Case-insensitive address comparison."""
    return (a or "").lower() == (b or "").lower()
