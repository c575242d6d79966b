import pytest

from nwm_uds.hw_keys import StaticKeySlots
from nwm_uds.proto import UDS_DATA_CRYPTO_KEY_SLOT
from nwm_uds.utils import NetworkInfo, parse_mac


@pytest.fixture
def hw_key():
    return bytes.fromhex("101112131415161718191a1b1c1d1e1f")


@pytest.fixture
def key_slots(hw_key):
    return StaticKeySlots({UDS_DATA_CRYPTO_KEY_SLOT: hw_key})


@pytest.fixture
def network_info():
    return NetworkInfo(
        host_mac=parse_mac("00:11:22:33:44:55"),
        wlan_comm_id=0x00000001,
        id=1,
        network_id=1,
    )


@pytest.fixture
def sender():
    return parse_mac("00:11:22:33:44:55")


@pytest.fixture
def receiver():
    return parse_mac("66:77:88:99:aa:bb")


@pytest.fixture
def ccmp_key():
    return bytes.fromhex("000102030405060708090a0b0c0d0e0f")
