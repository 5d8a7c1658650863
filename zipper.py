"""
A Zipper encodes and decodes text with a code book, and packs a bit string
into bytes (and back).

Packed layout: one header byte holding how many bits of the last data byte
are significant (1 to byte_width), followed by one byte per group of
byte_width bits. The last group may be short; it is stored as its own
binary numeral and read back with exactly that many digits.
"""

import constants
from errors import DecodeError, EncodeError
from util import bits_to_byte, byte_to_bits


class Zipper:
    def __init__(self, book, byte_width=constants.BITE_SIZE):
        if not 1 <= byte_width <= 8:
            raise ValueError(f"byte_width must be between 1 and 8, got {byte_width}")
        self.book = book                    # used for encoding
        self.ht = book.get_huffman_tree()   # used for decoding
        self.byte_width = byte_width

    def encode(self, plain_text: str) -> str:
        """Returns the bit string encoding of plain_text."""
        encode_char = self.book.encode_char
        return "".join([encode_char(ch) for ch in plain_text])

    def decode(self, bits: str) -> str:
        """Returns the text whose encoding is bits. Every bit must be used."""
        walk = self.ht.walk
        chars = []
        i = 0
        n = len(bits)
        while i < n:
            ch, i = walk(bits, i)
            chars.append(ch)
        return "".join(chars)

    def compress(self, bits: str) -> bytes:
        n = len(bits)
        width = self.byte_width
        # The header records the size of the last group so decompress knows
        # how many of its bits to keep.
        last_bite_size = n % width or width
        packed = bytearray([last_bite_size])
        for i in range(0, n, width):
            block = bits[i:i + width]
            try:
                packed.append(bits_to_byte(block))
            except ValueError:
                raise EncodeError(block, "not a bit string") from None
        return bytes(packed)

    def decompress(self, packed) -> str:
        """
        Expands the output of compress back into a bit string. A str of
        characters below 256 is accepted in place of bytes.
        """
        if isinstance(packed, str):
            try:
                packed = packed.encode("latin-1")
            except UnicodeEncodeError:
                raise DecodeError(packed, "characters above 255 cannot be packed bytes") from None
        if not packed:
            raise DecodeError(packed, "missing header byte")

        width = self.byte_width
        last_bite_size = packed[0]
        if not 1 <= last_bite_size <= width:
            raise DecodeError(packed[:1], f"header must be between 1 and {width}, got {last_bite_size}")

        data = packed[1:]
        if not data:
            if last_bite_size != width:
                raise DecodeError(packed, "header announces bits but there is no data")
            return ""

        try:
            bits = [byte_to_bits(b, width) for b in data[:-1]]
            bits.append(byte_to_bits(data[-1], last_bite_size))
        except ValueError as e:
            raise DecodeError(packed, str(e)) from None
        return "".join(bits)
