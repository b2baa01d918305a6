"""Hold token generation shared by stock holds and seller funding locks."""

import uuid


def generate_hold_token() -> str:
    """
    Return a fresh opaque hold token.

    Derived from a random UUID4 and reformatted to the short
    ``xxxxxxxx-xxxxxxxx`` shape printed on POS receipts.
    """
    raw = str(uuid.uuid4())
    return f"{raw[:8]}-{raw[9:13]}{raw[14:18]}"
