import struct
from dataclasses import dataclass
from typing import Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESCCM

from nwm_uds.logger import get_logger
from nwm_uds.proto import CCMP_KEY_BYTES, CCMP_MIC_BYTES, DEFAULT_FRAME_CONTROL, MAX_CCMP_DATA_BYTES
from nwm_uds.utils import check_uint, parse_mac

log = get_logger("nwm_uds.crypto")

# Reference: IEEE 802.11-2007, 8.3.3.3.2 and 8.3.3.3.3
# FC, A1 (receiver), A2 (transmitter), A3 (destination), SC
CCMP_AAD = struct.Struct("!H6s6s6sH")
# priority, A2, PN
CCMP_NONCE = struct.Struct("!B6s4xH")


class DecryptionError(ValueError):
    pass


@dataclass(frozen=True)
class DecryptResult:
    """Outcome of decrypting a data frame; an empty plaintext is still a success."""
    ok: bool
    plaintext: bytes = b""
    reason: Optional[str] = None

    @classmethod
    def success(cls, plaintext: bytes) -> "DecryptResult":
        return cls(True, bytes(plaintext))

    @classmethod
    def failure(cls, reason: str) -> "DecryptResult":
        return cls(False, b"", reason)

    def __bool__(self) -> bool:
        return self.ok

    def unwrap(self) -> bytes:
        if not self.ok:
            raise DecryptionError(self.reason or "decryption failed")
        return self.plaintext


def build_aad(sender: bytes, receiver: bytes) -> bytes:
    """
    AAD for an encrypted data frame. The Duration field is left out and the
    Frame Control and Sequence Control fields are fixed, since they can change
    on retransmission.
    """
    receiver = parse_mac(receiver)
    return CCMP_AAD.pack(DEFAULT_FRAME_CONTROL, receiver, parse_mac(sender), receiver, 0)


def build_nonce(sender: bytes, sequence_number: int) -> bytes:
    check_uint("sequence_number", sequence_number, 16)
    return CCMP_NONCE.pack(0, parse_mac(sender), sequence_number)


def _ccm(key: bytes) -> AESCCM:
    if len(key) != CCMP_KEY_BYTES:
        raise ValueError(f"CCMP key must be {CCMP_KEY_BYTES} bytes")
    return AESCCM(bytes(key), tag_length=CCMP_MIC_BYTES)


def _seal(aead: AESCCM, payload: bytes, sender: bytes, receiver: bytes, sequence_number: int) -> bytes:
    if len(payload) > MAX_CCMP_DATA_BYTES:
        raise ValueError(f"Payload of {len(payload)} bytes exceeds maximum {MAX_CCMP_DATA_BYTES}")
    aad = build_aad(sender, receiver)
    nonce = build_nonce(sender, sequence_number)
    return aead.encrypt(nonce, bytes(payload), aad)


def _open(aead: AESCCM, encrypted: bytes, sender: bytes, receiver: bytes, sequence_number: int) -> DecryptResult:
    if len(encrypted) < CCMP_MIC_BYTES:
        log.error("failed to decrypt: frame of %d bytes is shorter than the MIC", len(encrypted))
        return DecryptResult.failure("frame shorter than MIC")
    if len(encrypted) - CCMP_MIC_BYTES > MAX_CCMP_DATA_BYTES:
        log.error("failed to decrypt: frame of %d bytes is too long", len(encrypted))
        return DecryptResult.failure("frame too long")

    aad = build_aad(sender, receiver)
    nonce = build_nonce(sender, sequence_number)
    try:
        plaintext = aead.decrypt(nonce, bytes(encrypted), aad)
    except InvalidTag:
        log.error("failed to decrypt: MIC mismatch (len=%d, seq=%d)", len(encrypted), sequence_number)
        return DecryptResult.failure("MIC mismatch")
    return DecryptResult.success(plaintext)


def encrypt_data_frame(payload: bytes, key: bytes, sender: bytes, receiver: bytes,
                       sequence_number: int) -> bytes:
    """
    Encrypt a data frame body. Returns ciphertext followed by the 8-byte MIC.
    Payloads longer than 0xFFFF bytes raise ValueError.
    """
    return _seal(_ccm(key), payload, sender, receiver, sequence_number)


def decrypt_data_frame(encrypted: bytes, key: bytes, sender: bytes, receiver: bytes,
                       sequence_number: int) -> DecryptResult:
    return _open(_ccm(key), encrypted, sender, receiver, sequence_number)


class CCMPCipher:
    """
    Data frame crypto for one joined network. Sequence numbers are owned by
    the caller and must not repeat under the same key.
    """

    def __init__(self, key: bytes):
        self.aead = _ccm(key)

    def encrypt(self, payload: bytes, sender: bytes, receiver: bytes, sequence_number: int) -> bytes:
        return _seal(self.aead, payload, sender, receiver, sequence_number)

    def decrypt(self, encrypted: bytes, sender: bytes, receiver: bytes, sequence_number: int) -> DecryptResult:
        return _open(self.aead, encrypted, sender, receiver, sequence_number)
