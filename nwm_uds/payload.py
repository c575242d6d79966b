from typing import NamedTuple

from nwm_uds.headers import (
    LLCHeader,
    SecureDataHeader,
    build_llc_header,
    build_secure_data_header,
    parse_llc_header,
    parse_secure_data_header,
)
from nwm_uds.proto import EtherType, LLC_HEADER_BYTES, SECURE_DATA_HEADER_BYTES


class DataPayload(NamedTuple):
    llc: LLCHeader
    secure_data: SecureDataHeader
    data: bytes


def generate_data_payload(data: bytes, channel: int, dest_node: int, src_node: int,
                          sequence_number: int) -> bytes:
    """Cleartext body of a UDS data frame: LLC header, SecureData header, data."""
    return (
        build_llc_header(EtherType.SECURE_DATA)
        + build_secure_data_header(len(data), channel, dest_node, src_node, sequence_number)
        + bytes(data)
    )


def parse_data_payload(frame: bytes) -> DataPayload:
    llc = parse_llc_header(frame)
    if llc.protocol != EtherType.SECURE_DATA:
        raise ValueError(f"Unexpected EtherType 0x{llc.protocol:04x}")
    secure_data = parse_secure_data_header(frame, LLC_HEADER_BYTES)
    start = LLC_HEADER_BYTES + SECURE_DATA_HEADER_BYTES
    data = bytes(frame[start:])
    if len(data) != secure_data.data_size:
        raise ValueError(f"SecureData size mismatch: header says {secure_data.data_size}, got {len(data)}")
    return DataPayload(llc, secure_data, data)
