class HuffmanError(Exception):
    pass


class InvalidAlphabetError(HuffmanError):
    pass


class EncodeError(HuffmanError):
    def __init__(self, symbol, reason=None):
        message = f"Cannot encode {symbol!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.symbol = symbol


class DecodeError(HuffmanError):
    def __init__(self, bits, reason=None):
        message = f"Cannot decode {bits!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.bits = bits
