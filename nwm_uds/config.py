import os


class Config:
    LOG_LEVEL = os.getenv("UDS_LOG_LEVEL", "INFO")
    HW_KEY_FILE = os.getenv("UDS_HW_KEY_FILE")
    HW_KEY_HEX = os.getenv("UDS_HW_KEY_HEX")


def parse_key(raw: bytes) -> bytes:
    """Accept either 16 raw bytes or 32 hex characters."""
    if len(raw) == 16:
        return raw
    text = raw.strip()
    if len(text) == 32:
        try:
            return bytes.fromhex(text.decode("ascii"))
        except (UnicodeDecodeError, ValueError):
            pass
    if len(text) != 16:
        raise ValueError("Key must be 16 bytes")
    return text


def load_key(path: str) -> bytes:
    with open(path, "rb") as f:
        key = f.read()
    return parse_key(key)
