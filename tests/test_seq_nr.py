import pytest

from utpcore.seq_nr import SeqNr


def test_add_wraps():
    assert SeqNr(65535) + 1 == SeqNr(0)


def test_sub_int_wraps():
    assert SeqNr(0) - 1 == SeqNr(65535)


def test_offset_across_wrap():
    assert SeqNr(0) - SeqNr(65535) == 1


@pytest.mark.parametrize("start", [0, 100, 65000, 65535])
@pytest.mark.parametrize("step", [0, 1, 10, 500])
def test_add_then_offset_round_trip(start, step):
    a = SeqNr(start)
    assert (a + step) - a == step
    assert a - (a + step) == -step


@pytest.mark.parametrize("start", [0, 1, 65530, 65535])
def test_ordering_across_wrap(start):
    a = SeqNr(start)
    b = a + 5
    assert a < b
    assert b > a
    assert a <= a
    assert b >= b
    assert not b < a


def test_equality_and_hash():
    assert SeqNr(42) == SeqNr(42)
    assert len({SeqNr(42), SeqNr(42), SeqNr(43)}) == 2


def test_to_bytes_is_big_endian():
    assert SeqNr(0x1234).to_bytes() == b"\x12\x34"


@pytest.mark.parametrize("value", [0, 1, 255, 256, 65535])
def test_bytes_round_trip(value):
    assert SeqNr.from_bytes(SeqNr(value).to_bytes()) == SeqNr(value)


@pytest.mark.parametrize("value", [-1, 65536])
def test_out_of_range_rejected(value):
    with pytest.raises(ValueError):
        SeqNr(value)


def test_str_and_int():
    s = SeqNr(777)
    assert str(s) == "777"
    assert int(s) == 777