"""Clock utilities. Ledger and collector timestamps are unix seconds."""

import time


def unix_now() -> int:
    """Current unix time in whole seconds."""
    return int(time.time())
