from collections import Counter

from errors import DecodeError, EncodeError, InvalidAlphabetError
from heap import Heap


class FrequencyTable(Counter):
    """
    Counts of each character in a text. Built from a string (one count per
    character) or from a mapping of symbol -> count. Looking up a symbol that
    never appeared gives 0.
    """

    def total_count(self):
        return sum(self.values())


class HuffmanLeaf:  # leaf of the Huffman tree
    __slots__ = ("symbol", "weight")

    def __init__(self, symbol, weight):
        self.symbol = symbol    # character, or None for the sentinel leaf
        self.weight = weight

    def __repr__(self):
        return f"HuffmanLeaf({self.symbol!r}, {self.weight})"


class HuffmanInternal:  # internal node, owns both children
    __slots__ = ("weight", "left", "right")

    def __init__(self, weight, left, right):
        self.weight = weight
        self.left = left
        self.right = right

    def __repr__(self):
        return f"HuffmanInternal({self.weight}, {self.left!r}, {self.right!r})"


def compare_weights(x, y):  # lighter nodes come out of the heap first
    return x.weight - y.weight


class HuffmanTree:
    """
    A variable-length prefix code: the more often a character appears in the
    text, the shorter the bit pattern it gets. A left turn is a 0, a right
    turn is a 1.

    An alphabet with a single character gets a synthetic root whose right
    child is a sentinel leaf, so that character is coded as "0".
    """

    def __init__(self, frequencies):
        symbols = sorted(frequencies)
        if not symbols:
            raise InvalidAlphabetError("cannot build a Huffman tree from an empty alphabet")

        forest = Heap(compare_weights)
        for symbol in symbols:
            weight = frequencies[symbol]
            if weight < 0:
                raise InvalidAlphabetError(f"negative frequency {weight} for {symbol!r}")
            forest.insert(HuffmanLeaf(symbol, weight))

        # Merge the two lightest trees until a single tree is left
        while forest.size() > 1:
            left = forest.delete()
            right = forest.delete()
            forest.insert(HuffmanInternal(left.weight + right.weight, left, right))

        root = forest.delete()
        if isinstance(root, HuffmanLeaf):
            root = HuffmanInternal(root.weight, root, HuffmanLeaf(None, 0))
        self.root = root

    def walk(self, bits, start=0):
        """
        Follow bits from position start down to a leaf.
        Returns the leaf's character and the index just past the last bit used.
        """
        node = self.root
        i = start
        n = len(bits)
        while isinstance(node, HuffmanInternal):
            if i >= n:
                raise DecodeError(bits[start:], "ran out of bits before reaching a leaf")
            bit = bits[i]
            if bit == "0":
                node = node.left
            elif bit == "1":
                node = node.right
            else:
                raise DecodeError(bits[start:i + 1], f"{bit!r} is not a bit")
            i += 1

        if node.symbol is None:
            raise DecodeError(bits[start:i], "path does not lead to a character")
        return node.symbol, i

    def decode_char(self, bits):
        """Returns the character whose code is a prefix of bits."""
        symbol, _ = self.walk(bits)
        return symbol

    def lookup(self, symbol):
        """
        Returns the bit string for symbol by searching the tree for its leaf.
        Only meant to be used while a CodeBook reads the code; encoding goes
        through the book.
        """
        path = []

        def search(node):
            if isinstance(node, HuffmanLeaf):
                return node.symbol is not None and node.symbol == symbol
            path.append("0")
            if search(node.left):
                return True
            path[-1] = "1"
            if search(node.right):
                return True
            path.pop()
            return False

        if symbol is None or not search(self.root):
            raise EncodeError(symbol, "not in the tree")
        return "".join(path)

    def codes(self):
        """Reads every code in one traversal. Returns a dict of character -> bit string."""
        codes = {}

        def traverse(node, prefix):
            if isinstance(node, HuffmanLeaf):
                if node.symbol is not None:  # skip the sentinel
                    codes[node.symbol] = "".join(prefix)
                return
            prefix.append("0")
            traverse(node.left, prefix)
            prefix[-1] = "1"
            traverse(node.right, prefix)
            prefix.pop()

        traverse(self.root, [])
        return codes

    def alphabet(self):
        return list(self.codes())

    @property
    def weight(self):
        return self.root.weight
