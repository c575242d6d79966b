import dataclasses
import hashlib

import pytest
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from nwm_uds.hw_keys import KeySlotUnavailableError, StaticKeySlots
from nwm_uds.keys import DATA_CRYPTO_CTR, data_crypto_ctr, derive_ccmp_key, pack_ctr_seed
from nwm_uds.utils import NetworkInfo, parse_mac

SEED_1234 = bytes.fromhex(
    "001122334455"  # host_mac
    "00000001"  # wlan_comm_id
    "01"  # id
    "00"
    "00000001"  # network_id
)


def _reference_key(passphrase: bytes, seed: bytes, hw_key: bytes) -> bytes:
    # a 16 byte CTR pass only uses the first counter block
    encryptor = Cipher(algorithms.AES(hw_key), modes.ECB()).encryptor()
    keystream = encryptor.update(hashlib.md5(seed).digest()) + encryptor.finalize()
    return bytes(a ^ b for a, b in zip(keystream, hashlib.md5(passphrase).digest()))


def test_pack_ctr_seed_layout(network_info):
    assert pack_ctr_seed(network_info) == SEED_1234


def test_data_crypto_ctr_is_md5_of_seed(network_info):
    assert data_crypto_ctr(network_info) == hashlib.md5(SEED_1234).digest()
    assert data_crypto_ctr(network_info) == bytes.fromhex("c55a7b4008539cd3c6c889137d7b11ac")


def test_ctr_seed_struct_has_no_implicit_padding():
    assert DATA_CRYPTO_CTR.size == 16


def test_derive_known_network(network_info, key_slots):
    key = derive_ccmp_key(b"1234", network_info, key_slots)
    assert key == bytes.fromhex("a9e8ce816bcc0f47883196387c7e6664")


def test_derive_matches_single_block_reference(network_info, key_slots, hw_key):
    key = derive_ccmp_key(b"1234", network_info, key_slots)
    assert key == _reference_key(b"1234", SEED_1234, hw_key)


def test_derive_is_stable(network_info, key_slots):
    first = derive_ccmp_key("1234", network_info, key_slots)
    for _ in range(3):
        assert derive_ccmp_key("1234", network_info, key_slots) == first


def test_str_and_bytes_passphrase_match(network_info, key_slots):
    assert derive_ccmp_key("1234", network_info, key_slots) == derive_ccmp_key(b"1234", network_info, key_slots)


@pytest.mark.parametrize(
    "change",
    [
        {"host_mac": parse_mac("00:11:22:33:44:56")},
        {"wlan_comm_id": 2},
        {"id": 2},
        {"network_id": 2},
    ],
)
def test_derive_depends_on_every_network_field(network_info, key_slots, change):
    other = dataclasses.replace(network_info, **change)
    assert derive_ccmp_key("1234", other, key_slots) != derive_ccmp_key("1234", network_info, key_slots)


def test_derive_depends_on_passphrase(network_info, key_slots):
    assert derive_ccmp_key("1234", network_info, key_slots) != derive_ccmp_key("12345", network_info, key_slots)


def test_derive_depends_on_hw_key(network_info, key_slots):
    other_slots = StaticKeySlots({0x2D: bytes(16)})
    assert derive_ccmp_key("1234", network_info, other_slots) != derive_ccmp_key("1234", network_info, key_slots)


def test_derive_without_key_slot(network_info):
    with pytest.raises(KeySlotUnavailableError):
        derive_ccmp_key("1234", network_info, StaticKeySlots())


def test_network_info_rejects_bad_fields():
    with pytest.raises(ValueError):
        NetworkInfo(host_mac=b"\x00" * 5, wlan_comm_id=1, id=1, network_id=1)
    with pytest.raises(ValueError):
        NetworkInfo(host_mac=b"\x00" * 6, wlan_comm_id=1 << 32, id=1, network_id=1)
    with pytest.raises(ValueError):
        NetworkInfo(host_mac=b"\x00" * 6, wlan_comm_id=1, id=256, network_id=1)
