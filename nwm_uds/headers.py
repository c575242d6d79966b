import struct
from typing import NamedTuple

from nwm_uds.proto import (
    EtherType,
    LLC_HEADER_BYTES,
    MAX_SECURE_DATA_SIZE,
    PDU_CONTROL_UNNUMBERED_INFORMATION,
    SAP_SNAP_EXTENSION_USED,
    SECURE_DATA_HEADER_BYTES,
    SECURE_DATA_PREAMBLE_BYTES,
    SNAP_OUI,
)
from nwm_uds.utils import check_uint

# dsap, ssap, control, OUI, protocol
LLC_HEADER = struct.Struct("!BBB3sH")
# protocol_size, padding, securedata_size, is_management, data_channel,
# sequence_number, dest_node_id, src_node_id
SECURE_DATA_HEADER = struct.Struct("!H2xHBBHHH")


class LLCHeader(NamedTuple):
    dsap: int
    ssap: int
    control: int
    oui: bytes
    protocol: int


class SecureDataHeader(NamedTuple):
    protocol_size: int
    securedata_size: int
    is_management: int
    data_channel: int
    sequence_number: int
    dest_node_id: int
    src_node_id: int

    @property
    def data_size(self) -> int:
        return self.protocol_size - SECURE_DATA_HEADER_BYTES


def build_llc_header(protocol: int = EtherType.SECURE_DATA) -> bytes:
    """SNAP-enabled 802.2 LLC header for the given EtherType."""
    check_uint("protocol", protocol, 16)
    return LLC_HEADER.pack(
        SAP_SNAP_EXTENSION_USED,
        SAP_SNAP_EXTENSION_USED,
        PDU_CONTROL_UNNUMBERED_INFORMATION,
        SNAP_OUI,
        protocol,
    )


def build_secure_data_header(data_size: int, channel: int, dest_node_id: int, src_node_id: int,
                             sequence_number: int) -> bytes:
    """
    SecureData header for an application frame carrying data_size bytes.
    securedata_size counts everything except the first 4 bytes of the header,
    which look like the header of an outer container protocol.
    """
    if not 0 <= data_size <= MAX_SECURE_DATA_SIZE:
        raise ValueError(f"Data size {data_size} exceeds maximum {MAX_SECURE_DATA_SIZE}")
    check_uint("channel", channel, 8)
    check_uint("dest_node_id", dest_node_id, 16)
    check_uint("src_node_id", src_node_id, 16)
    check_uint("sequence_number", sequence_number, 16)

    protocol_size = data_size + SECURE_DATA_HEADER_BYTES
    return SECURE_DATA_HEADER.pack(
        protocol_size,
        protocol_size - SECURE_DATA_PREAMBLE_BYTES,
        0,  # frames sent by applications are never management frames
        channel,
        sequence_number,
        dest_node_id,
        src_node_id,
    )


def parse_llc_header(buf: bytes, offset: int = 0) -> LLCHeader:
    if len(buf) - offset < LLC_HEADER_BYTES:
        raise ValueError(f"Buffer too short for LLC header: need {LLC_HEADER_BYTES}, got {len(buf) - offset}")
    header = LLCHeader(*LLC_HEADER.unpack_from(buf, offset))
    if (header.dsap != SAP_SNAP_EXTENSION_USED or header.ssap != SAP_SNAP_EXTENSION_USED
            or header.control != PDU_CONTROL_UNNUMBERED_INFORMATION or header.oui != SNAP_OUI):
        raise ValueError("Not a SNAP LLC header")
    return header


def parse_secure_data_header(buf: bytes, offset: int = 0) -> SecureDataHeader:
    if len(buf) - offset < SECURE_DATA_HEADER_BYTES:
        raise ValueError(
            f"Buffer too short for SecureData header: need {SECURE_DATA_HEADER_BYTES}, got {len(buf) - offset}"
        )
    header = SecureDataHeader(*SECURE_DATA_HEADER.unpack_from(buf, offset))
    if header.protocol_size < SECURE_DATA_HEADER_BYTES:
        raise ValueError(f"Invalid protocol_size {header.protocol_size}")
    return header
