from .misc import freeze_data
from .pow import (
    encode_payload,
    get_digest,
    get_raw_hash,
    get_target,
    is_valid_hash,
    pow,
)
