import random

import pytest

import constants
from errors import DecodeError, EncodeError, HuffmanError, InvalidAlphabetError
from huffman import FrequencyTable, HuffmanInternal, HuffmanLeaf, HuffmanTree


ABCD = {'a': 5, 'b': 2, 'c': 1, 'd': 1}


def test_frequency_table_counts_characters():
	ft = FrequencyTable("hello world")
	assert ft['l'] == 3
	assert ft['o'] == 2
	assert ft[' '] == 1
	assert ft.total_count() == 11


def test_frequency_table_absent_symbol_is_zero():
	ft = FrequencyTable("abc")
	assert ft['z'] == 0
	assert 'z' not in ft
	assert len(ft) == 3


def test_frequency_table_from_mapping():
	ft = FrequencyTable(ABCD)
	assert ft['a'] == 5
	assert ft.total_count() == 9


def test_empty_alphabet_raises():
	with pytest.raises(InvalidAlphabetError):
		HuffmanTree(FrequencyTable(""))
	with pytest.raises(InvalidAlphabetError):
		HuffmanTree({})


def test_negative_frequency_raises():
	with pytest.raises(InvalidAlphabetError):
		HuffmanTree({'a': 3, 'b': -1})


def test_errors_share_a_base_class():
	for cls in (DecodeError, EncodeError, InvalidAlphabetError):
		assert issubclass(cls, HuffmanError)


def test_abcd_tree_shape_and_codes():
	ht = HuffmanTree(FrequencyTable(ABCD))
	assert ht.weight == 9
	assert isinstance(ht.root, HuffmanInternal)
	assert isinstance(ht.root.right, HuffmanLeaf)
	assert ht.root.right.symbol == 'a'
	assert ht.codes() == {'a': '1', 'b': '00', 'c': '010', 'd': '011'}


def test_lookup_matches_codes():
	ht = HuffmanTree(FrequencyTable(constants.SAMPLE_TEXT))
	for ch, code in ht.codes().items():
		assert ht.lookup(ch) == code


def test_lookup_unknown_symbol_raises():
	ht = HuffmanTree(FrequencyTable(ABCD))
	with pytest.raises(EncodeError):
		ht.lookup('z')
	with pytest.raises(EncodeError):
		ht.lookup(None)


def test_decode_char_reads_prefix():
	ht = HuffmanTree(FrequencyTable(ABCD))
	assert ht.decode_char('1') == 'a'
	assert ht.decode_char('00') == 'b'
	assert ht.decode_char('010') == 'c'
	assert ht.decode_char('011') == 'd'
	assert ht.decode_char('00111') == 'b'


def test_decode_char_incomplete_path_raises():
	ht = HuffmanTree(FrequencyTable(ABCD))
	for bits in ('', '0', '01'):
		with pytest.raises(DecodeError):
			ht.decode_char(bits)


def test_decode_char_rejects_non_bits():
	ht = HuffmanTree(FrequencyTable(ABCD))
	with pytest.raises(DecodeError):
		ht.decode_char('0x1')


def test_walk_reports_next_index():
	ht = HuffmanTree(FrequencyTable(ABCD))
	assert ht.walk('1011', 0) == ('a', 1)
	assert ht.walk('1011', 1) == ('d', 4)


def test_single_symbol_gets_one_bit_code():
	ht = HuffmanTree(FrequencyTable("aaaa"))
	assert ht.codes() == {'a': '0'}
	assert ht.lookup('a') == '0'
	assert ht.decode_char('0') == 'a'
	assert ht.alphabet() == ['a']


def test_single_symbol_sentinel_path_raises():
	ht = HuffmanTree(FrequencyTable("aaaa"))
	with pytest.raises(DecodeError):
		ht.decode_char('1')


def test_codes_are_prefix_free():
	rng = random.Random(11)
	text = "".join(rng.choice("abcdefghijklmnop ") for _ in range(2000))
	codes = HuffmanTree(FrequencyTable(text)).codes()
	assert len(codes) == len(set(text))
	for x, cx in codes.items():
		for y, cy in codes.items():
			if x != y:
				assert not cy.startswith(cx)


def test_rarer_symbols_never_get_shorter_codes():
	rng = random.Random(5)
	weights = [rng.randrange(1, 500) for _ in range(40)]
	table = FrequencyTable({chr(48 + i): w for i, w in enumerate(weights)})
	codes = HuffmanTree(table).codes()
	for x in table:
		for y in table:
			if table[x] < table[y]:
				assert len(codes[x]) >= len(codes[y])


def test_same_table_gives_same_tree():
	text = constants.SAMPLE_TEXT + "the quick brown fox"
	assert HuffmanTree(FrequencyTable(text)).codes() == HuffmanTree(FrequencyTable(text)).codes()


def test_tree_shape_does_not_depend_on_table_order():
	forward = {ch: 1 for ch in "abcdefgh"}
	backward = {ch: 1 for ch in reversed("abcdefgh")}
	assert HuffmanTree(forward).codes() == HuffmanTree(backward).codes()
