import struct
from typing import Optional, Union

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from nwm_uds.hw_keys import KeySlots, default_key_slots
from nwm_uds.logger import get_logger
from nwm_uds.proto import UDS_DATA_CRYPTO_KEY_SLOT
from nwm_uds.utils import NetworkInfo

log = get_logger("nwm_uds.keys")

# host_mac, wlan_comm_id, id, padding, network_id
DATA_CRYPTO_CTR = struct.Struct("!6sIBxI")


def _md5(data: bytes) -> bytes:
    digest = hashes.Hash(hashes.MD5())
    digest.update(data)
    return digest.finalize()


def pack_ctr_seed(network_info: NetworkInfo) -> bytes:
    return DATA_CRYPTO_CTR.pack(
        network_info.host_mac,
        network_info.wlan_comm_id,
        network_info.id,
        network_info.network_id,
    )


def data_crypto_ctr(network_info: NetworkInfo) -> bytes:
    """Initial counter block of the AES-CTR pass that produces the data frame key."""
    return _md5(pack_ctr_seed(network_info))


def derive_ccmp_key(passphrase: Union[bytes, str], network_info: NetworkInfo,
                    key_slots: Optional[KeySlots] = None) -> bytes:
    """
    Generate the CCMP key used for the 802.11 data frames of a network.

    The key is the MD5 hash of the passphrase encrypted with AES-CTR, keyed
    with the normal key of keyslot 0x2D and using the MD5 hash of the network
    parameters as the initial counter. KeySlotUnavailableError from the key
    slots is not handled here.
    """
    if isinstance(passphrase, str):
        passphrase = passphrase.encode("utf-8")
    if key_slots is None:
        key_slots = default_key_slots()

    passphrase_hash = _md5(bytes(passphrase))
    counter = data_crypto_ctr(network_info)
    hw_key = key_slots.get_normal_key(UDS_DATA_CRYPTO_KEY_SLOT)

    encryptor = Cipher(algorithms.AES(hw_key), modes.CTR(counter)).encryptor()
    ccmp_key = encryptor.update(passphrase_hash) + encryptor.finalize()
    log.debug("Derived data frame key for network_id=0x%08x id=%d", network_info.network_id, network_info.id)
    return ccmp_key
