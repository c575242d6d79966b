import re
from dataclasses import dataclass
from typing import Union

from nwm_uds.proto import MAC_ADDRESS_BYTES

_MAC_RE = re.compile(r"[0-9a-fA-F]{2}([:-][0-9a-fA-F]{2}){5}")


def parse_mac(value: Union[str, bytes, bytearray]) -> bytes:
    """Return a 6-byte MAC address from raw bytes or 'aa:bb:cc:dd:ee:ff' text."""
    if isinstance(value, (bytes, bytearray)):
        if len(value) != MAC_ADDRESS_BYTES:
            raise ValueError(f"Invalid MAC address length: {len(value)}")
        return bytes(value)
    if not _MAC_RE.fullmatch(value):
        raise ValueError(f"Invalid MAC address: {value!r}")
    return bytes.fromhex(value.replace(":", "").replace("-", ""))


def format_mac(mac: bytes) -> str:
    return ":".join(f"{b:02x}" for b in mac)


def check_uint(name: str, value: int, bits: int):
    if not 0 <= value < (1 << bits):
        raise ValueError(f"{name} {value} does not fit in {bits} bits")


@dataclass(frozen=True)
class NetworkInfo:
    """Parameters of the joined network that feed the data key derivation."""
    host_mac: bytes
    wlan_comm_id: int
    id: int
    network_id: int

    def __post_init__(self):
        object.__setattr__(self, "host_mac", parse_mac(self.host_mac))
        check_uint("wlan_comm_id", self.wlan_comm_id, 32)
        check_uint("id", self.id, 8)
        check_uint("network_id", self.network_id, 32)
