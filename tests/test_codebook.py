import pytest

import constants
from codebook import CodeBook
from errors import EncodeError, InvalidAlphabetError
from huffman import HuffmanTree
from zipper import Zipper


ABCD = {'a': 5, 'b': 2, 'c': 1, 'd': 1}


def test_reference_book_covers_lowercase_letters():
	book = CodeBook()
	assert book.size() == 26
	for ch in constants.ALPHABET:
		assert ch in book
		assert set(book.encode_char(ch)) <= {'0', '1'}
	assert 3.0 < book.get_weighted_average() < 5.0


def test_reference_book_uses_scaled_percentages():
	book = CodeBook()
	assert book.frequencies()['e'] == 2007
	assert book.frequencies()['t'] == 16671


def test_reference_book_gives_frequent_letters_short_codes():
	book = CodeBook()
	assert len(book.encode_char('t')) < len(book.encode_char('z'))


def test_book_from_frequencies():
	book = CodeBook.from_frequencies(ABCD)
	assert book.size() == 4
	assert book.encode_char('a') == '1'
	assert book.encode_char('b') == '00'
	assert book.encode_char('c') == '010'
	assert book.encode_char('d') == '011'
	assert book.get_weighted_average() == pytest.approx(15 / 9)


def test_encode_char_unknown_raises():
	book = CodeBook("abracadabra")
	with pytest.raises(EncodeError):
		book.encode_char('z')
	with pytest.raises(EncodeError):
		CodeBook().encode_char('A')


def test_book_matches_tree_lookup():
	book = CodeBook(constants.SAMPLE_TEXT)
	ht = book.get_huffman_tree()
	assert isinstance(ht, HuffmanTree)
	for ch in set(constants.SAMPLE_TEXT):
		assert book.encode_char(ch) == ht.lookup(ch)


def test_weighted_average_equals_bits_per_character():
	text = "she sells sea shells by the sea shore"
	book = CodeBook(text)
	bits = Zipper(book).encode(text)
	assert book.get_weighted_average() == pytest.approx(len(bits) / len(text))


def test_single_character_text_book():
	book = CodeBook("zzzzzz")
	assert book.size() == 1
	assert book.encode_char('z') == '0'
	assert book.get_weighted_average() == pytest.approx(1.0)


def test_empty_text_book_raises():
	with pytest.raises(InvalidAlphabetError):
		CodeBook("")


def test_str_shows_codes():
	book = CodeBook.from_frequencies(ABCD)
	assert "'a': '1'" in str(book)
	assert len(book) == 4
