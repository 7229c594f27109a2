"""Steam Guard mobile authenticator codes (time-based, 30s window)."""

import base64
import hashlib
import hmac
import struct
import time
from typing import Optional

CODE_CHARS = "23456789BCDFGHJKMNPQRTVWXY"
CODE_LENGTH = 5
PERIOD_SEC = 30


def generate_auth_code(
    shared_secret: str, time_offset: int = 0, timestamp: Optional[float] = None
) -> str:
    """Return the current 5-character Steam Guard code for a base64 shared secret."""
    if timestamp is None:
        timestamp = time.time()
    counter = int(timestamp + time_offset) // PERIOD_SEC
    key = base64.b64decode(shared_secret)
    digest = hmac.new(key, struct.pack(">Q", counter), hashlib.sha1).digest()

    start = digest[19] & 0x0F
    full = struct.unpack(">I", digest[start:start + 4])[0] & 0x7FFFFFFF

    chars = []
    for _ in range(CODE_LENGTH):
        full, idx = divmod(full, len(CODE_CHARS))
        chars.append(CODE_CHARS[idx])
    return "".join(chars)
