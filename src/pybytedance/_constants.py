"""Internal constants shared across the library."""

BASE_URL = "https://open.microapp.bytedance.com/openapi/"
USER_AGENT = "pybytedance"
DEFAULT_REQUEST_TIMEOUT: float = 30.0

#: ``errno`` value the open platform uses for a successful call.
ERRNO_OK = 0

#: AES block size in bytes (also the IV length).
AES_BLOCK_SIZE = 16

# Framing of decrypted callback messages: 16 random bytes, a big-endian
# uint32 length, then the JSON body.
MESSAGE_LENGTH_OFFSET = 16
MESSAGE_BODY_OFFSET = 20
