"""
A CodeBook maps characters to bit strings.

The book reads every code out of its HuffmanTree once, so encoding a character
is a dict lookup instead of a tree search. Decoding still needs the tree,
which the book exposes through get_huffman_tree().
"""

import constants
from errors import EncodeError
from huffman import FrequencyTable, HuffmanTree


class CodeBook:
    def __init__(self, text=None, frequencies=None):
        """
        CodeBook() uses the frequencies of English letters.
        CodeBook(text) builds a code optimized for text.
        """
        if frequencies is None:
            if text is None:
                frequencies = constants.ENGLISH_LETTER_FREQUENCIES
            else:
                frequencies = FrequencyTable(text)
        self.freqs = FrequencyTable(frequencies)
        self.total = self.freqs.total_count()
        self.ht = HuffmanTree(self.freqs)
        self.book = {}
        self.read_code_from_tree()

    @classmethod
    def from_frequencies(cls, frequencies):
        return cls(frequencies=frequencies)

    def read_code_from_tree(self):
        self.book = self.ht.codes()

    def get_huffman_tree(self):
        return self.ht

    def frequencies(self):
        return self.freqs

    def size(self):
        """Size of the alphabet covered by this book."""
        return len(self.book)

    def get_weighted_average(self):
        """Average code length in bits, weighted by how often each character occurs."""
        if self.total == 0:
            return 0.0
        return sum(len(self.book[ch]) * self.freqs[ch] for ch in self.book) / self.total

    def encode_char(self, ch):
        try:
            return self.book[ch]
        except KeyError:
            raise EncodeError(ch, "not in the code book") from None

    def __len__(self):
        return len(self.book)

    def __contains__(self, ch):
        return ch in self.book

    def __str__(self):
        return str(self.book)
