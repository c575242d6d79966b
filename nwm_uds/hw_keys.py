from typing import Dict, Mapping, Optional, Protocol

from nwm_uds.config import Config, load_key, parse_key
from nwm_uds.proto import CCMP_KEY_BYTES, UDS_DATA_CRYPTO_KEY_SLOT


class KeySlotUnavailableError(RuntimeError):
    """The requested hardware key slot has no key provisioned."""


class KeySlots(Protocol):
    def get_normal_key(self, slot_id: int) -> bytes:
        ...


class StaticKeySlots:
    """
    In-memory table of console normal keys, indexed by AES keyslot.
    Keys are provisioned by whoever owns the console key material; this
    package only reads them.
    """

    def __init__(self, keys: Optional[Mapping[int, bytes]] = None):
        self._keys: Dict[int, bytes] = {}
        for slot_id, key in (keys or {}).items():
            if len(key) != CCMP_KEY_BYTES:
                raise ValueError(f"Key for slot 0x{slot_id:02X} must be {CCMP_KEY_BYTES} bytes")
            self._keys[slot_id] = bytes(key)

    @classmethod
    def from_file(cls, path: str, slot_id: int = UDS_DATA_CRYPTO_KEY_SLOT) -> "StaticKeySlots":
        return cls({slot_id: load_key(path)})

    @classmethod
    def from_hex(cls, key_hex: str, slot_id: int = UDS_DATA_CRYPTO_KEY_SLOT) -> "StaticKeySlots":
        return cls({slot_id: parse_key(key_hex.encode())})

    def get_normal_key(self, slot_id: int) -> bytes:
        try:
            return self._keys[slot_id]
        except KeyError:
            raise KeySlotUnavailableError(f"Normal key for slot 0x{slot_id:02X} is not available") from None

    def __contains__(self, slot_id: int) -> bool:
        return slot_id in self._keys


def default_key_slots() -> StaticKeySlots:
    if Config.HW_KEY_FILE:
        return StaticKeySlots.from_file(Config.HW_KEY_FILE)
    if Config.HW_KEY_HEX:
        return StaticKeySlots.from_hex(Config.HW_KEY_HEX)
    return StaticKeySlots()
