"""Bluetooth LE Heart Rate Measurement decoding (GATT characteristic 0x2A37)."""

HEART_RATE_UINT16_FLAG = 0x01


def decode_heart_rate_measurement(data: bytes) -> int:
    """Decode the bpm value from a Heart Rate Measurement payload.

    Bit 0 of the flags byte selects the value format: uint8 when clear,
    little-endian uint16 when set.

    Args:
        data: Raw characteristic value

    Returns:
        Heart rate in bpm

    Raises:
        ValueError: If the payload is too short for its declared format
    """
    if len(data) < 2:
        raise ValueError(f"Heart rate payload too short: {len(data)} byte(s)")

    flags = data[0]
    if flags & HEART_RATE_UINT16_FLAG:
        if len(data) < 3:
            raise ValueError("Heart rate payload declares uint16 but has only 2 bytes")
        return int.from_bytes(data[1:3], "little")
    return data[1]
