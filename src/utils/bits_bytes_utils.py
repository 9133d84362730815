def bytes_to_bitstring(data: bytes) -> str:
    """Convert bytes -> bitstring (8 bits per byte, MSB first)."""
    return "".join(f"{byte:08b}" for byte in data)


def bitstring_to_bytes(bits: str, pad: bool = False) -> bytes:
    """
    Convert bitstring -> bytes.

    Length must be a multiple of 8 unless `pad` is set, in which case the
    last byte is filled with zero bits the same way BitWriter.close() does.
    """
    if len(bits) % 8 != 0:
        if not pad:
            raise ValueError(
                f"Bitstring length must be multiple of 8, got {len(bits)}"
            )
        bits = bits + "0" * (8 - len(bits) % 8)
    return bytes(int(bits[i:i + 8], 2) for i in range(0, len(bits), 8))


def int_to_bitstring(value: int, width: int) -> str:
    """
    Render the low `width` bits of `value` as a '0'/'1' string.

    A width of zero gives the empty string (the code of a lone root leaf).
    """
    if width <= 0:
        return ""
    return f"{value & ((1 << width) - 1):0{width}b}"
