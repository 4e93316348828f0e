from __future__ import annotations

import uuid

UUID_HEX_WIDTH = 32
UUID_CAPACITY = 1 << 128


def discord_id_to_uuid(discord_id: int | str) -> str:
    """
    Map a Discord snowflake onto the backend's UUID layout.

    The snowflake is read as an integer, rendered as 32 zero-padded hex digits
    and regrouped 8-4-4-4-12. Same input, same output; distinct inputs below
    2**128 never collide.
    """
    raw = str(discord_id).strip()
    if not raw.isdigit():
        raise ValueError(f"not a numeric user id: {discord_id!r}")
    value = int(raw)
    if value >= UUID_CAPACITY:
        raise ValueError("user id does not fit in 128 bits")

    hex_id = format(value, "x").zfill(UUID_HEX_WIDTH)
    return f"{hex_id[0:8]}-{hex_id[8:12]}-{hex_id[12:16]}-{hex_id[16:20]}-{hex_id[20:32]}"


def anonymous_user_id() -> str:
    # single-use; not reproducible
    return str(uuid.uuid4())
