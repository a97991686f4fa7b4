import time
import random
import string

_ALPHABET = string.ascii_lowercase + string.digits


def create_id_with_prefix(prefix: str, suffix_len: int = 9) -> str:
    # millisecond timestamp + random base36 suffix, e.g. exp_1700000000000_k3j9x0a1b
    stamp = int(time.time() * 1000)
    rand = ''.join(random.choices(_ALPHABET, k=suffix_len))
    return f"{prefix}_{stamp}_{rand}"
