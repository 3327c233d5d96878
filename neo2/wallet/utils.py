"""
NEO 2 address utilities.
"""
from typing import Optional
import base58
from neo2 import settings as neo2settings

#: version byte followed by a 20 byte script hash
ADDRESS_DATA_LEN = 21


def is_valid_address(address: str, address_version: Optional[int] = None) -> bool:
    """
    Test if the provided address is a valid address.

    Args:
        address: an address.
        address_version: see `validate_address`.
    """
    try:
        validate_address(address, address_version)
    except ValueError:
        return False
    return True


def validate_address(address: str, address_version: Optional[int] = None) -> None:
    """
    Validate a given address without contacting a node. If address is not valid an exception will be raised.

    Args:
        address: an address.
        address_version: network protocol address version. Defaults to `settings.network.address_version`, which
         is `0x17` for MainNet and TestNet.

    Raises:
        ValueError: if the base58 checksum is not valid.
        ValueError: if the length of data (address value in bytes) is not valid.
        ValueError: if the account version is not valid.
    """
    if address_version is None:
        address_version = neo2settings.settings.network.address_version
    data: bytes = base58.b58decode_check(address)
    if len(data) != ADDRESS_DATA_LEN:
        raise ValueError(
            f"The address is wrong, because data (address value in bytes) length should be "
            f"{ADDRESS_DATA_LEN}"
        )
    elif data[0] != address_version:
        raise ValueError(f"The account version is not {address_version}")
