from pathlib import Path


def pad_left(s: str, width: int, fill: str = "0") -> str:
    return s.rjust(width, fill)


def bits_to_byte(bits: str) -> int:
    """Reads a group of at most 8 bits as a binary numeral, first bit most significant."""
    if not bits or len(bits) > 8:
        raise ValueError(f"expected 1 to 8 bits, got {len(bits)}")
    if bits.strip("01"):
        raise ValueError(f"not a bit string: {bits!r}")
    return int(bits, 2)


def byte_to_bits(value: int, width: int) -> str:
    """Writes value as exactly width binary digits, zero padded on the left."""
    if not 0 <= value < (1 << width):
        raise ValueError(f"{value} does not fit in {width} bits")
    return pad_left(format(value, "b"), width)


def load_file(path) -> str:
    return Path(path).read_text(encoding="utf-8", errors="replace")
