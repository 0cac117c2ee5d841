import pytest

from gifframes import color_table_size, read_bits


def test_single_flags_count_from_the_most_significant_bit():
    assert read_bits(0b10000000, 0, 1) == 1
    assert read_bits(0b01000000, 1, 1) == 1
    assert read_bits(0b00000001, 7, 1) == 1
    assert read_bits(0b01111111, 0, 1) == 0


def test_multi_bit_fields():
    #Disposal lives in bits 3-5 of the graphic control packed byte
    assert read_bits(0b00001000, 3, 3) == 2
    assert read_bits(0b00011100, 3, 3) == 7
    #Color table size exponent is the low three bits
    assert read_bits(0xF5, 5, 3) == 5
    assert read_bits(0xF5, 1, 3) == 7
    assert read_bits(0xAB, 0, 8) == 0xAB


def test_field_must_fit_in_a_byte():
    with pytest.raises(ValueError):
        read_bits(0, 6, 3)
    with pytest.raises(ValueError):
        read_bits(0, 0, 0)


def test_color_table_size():
    assert color_table_size(0x80) == 6
    assert color_table_size(0x81) == 12
    assert color_table_size(0x87) == 768
