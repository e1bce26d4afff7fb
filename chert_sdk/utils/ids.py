from __future__ import annotations

import uuid


def generate_tx_id() -> str:
    """
    Random unique identifier (UUID4). Only a filler value for client-side
    bookkeeping; callers must not depend on its content.
    """
    return str(uuid.uuid4())


__all__ = ["generate_tx_id"]
