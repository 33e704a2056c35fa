import binascii

from cctp_client.errors import InvalidInputError

MINT_RECIPIENT_LEN = 32


def encode_mint_recipient(address: str) -> bytes:
    """Decode a 32-byte destination-chain address ("0x..." hex) into raw bytes.

    Runs before any network access so malformed input fails fast.
    """
    if not isinstance(address, str):
        raise InvalidInputError(f"Recipient must be a hex string, got {type(address)}")
    hex_str = address.strip()
    if hex_str[:2] in ("0x", "0X"):
        hex_str = hex_str[2:]
    hex_str = hex_str.lower()
    if len(hex_str) != 2 * MINT_RECIPIENT_LEN:
        raise InvalidInputError(
            f"Recipient address must be {MINT_RECIPIENT_LEN} bytes "
            f"({2 * MINT_RECIPIENT_LEN} hex chars), got {len(hex_str)} chars"
        )
    try:
        return binascii.unhexlify(hex_str)
    except ValueError as e:
        raise InvalidInputError(f"Recipient address is not hex: {address!r}") from e
