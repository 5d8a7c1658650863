BITE_SIZE = 8  # bits per packed byte

TITLE = "Huffman Zipper"

# Plain text books from gutenberg.org, looked up relative to the working directory
ALICE = "books/alice.txt"
MOBY_DICK = "books/moby_dick.txt"
BOOKS = (ALICE, MOBY_DICK)

ALPHABET = "abcdefghijklmnopqrstuvwxyz"

# Relative frequency (percent) of the first letter of English words.
# Source: Wikipedia.
ENGLISH_LETTER_PERCENTS = (
    11.602, 4.702, 3.511, 2.670, 2.007, 3.779, 1.950,
    7.232, 6.286, 0.597, 0.590, 2.705, 4.383, 2.365,
    6.264, 2.545, 0.173, 1.653, 7.755, 16.671, 1.487,
    0.649, 6.753, 0.017, 1.620, 0.034,
)

# Integer counts used to build the reference code book
ENGLISH_LETTER_FREQUENCIES = {
    letter: round(percent * 1000) for letter, percent in zip(ALPHABET, ENGLISH_LETTER_PERCENTS)
}

SAMPLE_TEXT = (
    "a" * 49
    + "b" * 14
    + "c" * 12
    + "d" * 21
    + "e" * 9
    + "f" * 5
)
