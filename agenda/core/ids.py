import time
from uuid import uuid4


def new_id() -> str:
    """Millisecond wall-clock prefix plus a random suffix.

    Collisions are not formally excluded, only made unlikely.
    """
    return f"{time.time_ns() // 1_000_000}-{uuid4().hex[:12]}"
