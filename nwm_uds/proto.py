from enum import IntEnum


class EtherType(IntEnum):
    SECURE_DATA = 0x876D
    EAPOL = 0x888E


# 802.2 LLC with SNAP extension
SAP_SNAP_EXTENSION_USED = 0xAA
PDU_CONTROL_UNNUMBERED_INFORMATION = 0x03
SNAP_OUI = b"\x00\x00\x00"

MAC_ADDRESS_BYTES = 6
LLC_HEADER_BYTES = 8
SECURE_DATA_HEADER_BYTES = 14
# protocol_size does not count the leading size field and its padding
SECURE_DATA_PREAMBLE_BYTES = 4
# CCM with a 13-byte nonce leaves a 2-byte length field
MAX_CCMP_DATA_BYTES = 0xFFFF
# the assembled frame (LLC + SecureData + data) must stay encryptable
MAX_SECURE_DATA_SIZE = MAX_CCMP_DATA_BYTES - LLC_HEADER_BYTES - SECURE_DATA_HEADER_BYTES

# AES keyslot used to generate the data frame CCMP key
UDS_DATA_CRYPTO_KEY_SLOT = 0x2D

CCMP_KEY_BYTES = 16
CCMP_MIC_BYTES = 8
CCMP_NONCE_BYTES = 13
CCMP_AAD_BYTES = 22

# Data | Protected | ToDS
DEFAULT_FRAME_CONTROL = 0x0841
