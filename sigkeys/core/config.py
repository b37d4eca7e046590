# Parameters for key material and the textual key format

# Algorithm tags
KEY_TYPE_ED25519 = "ed25519"
KEY_TYPE_X25519 = "x25519"

# Encoding tags
KEY_ENCODING_BASE58 = "base58"

# Ed25519 sizes (bytes)
SEED_LENGTH = 32
PUBLIC_KEY_LENGTH = 32
SECRET_KEY_LENGTH = SEED_LENGTH + PUBLIC_KEY_LENGTH
SIGNATURE_LENGTH = 64

# Length every verification key must have to pass validation
VERKEY_LENGTH = PUBLIC_KEY_LENGTH

# Textual format: <key>[:<algorithm>], short keys start with "~"
QUALIFIER_SEPARATOR = ":"
SHORT_KEY_PREFIX = "~"

# Rendered in place of a key that cannot be encoded
ENCODING_ERROR_MARKER = "<Error encoding key: {}>"
