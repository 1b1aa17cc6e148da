from utpcore.constants import SACK_DEPTH
from utpcore.selective_ack import SelectiveAck


def test_holes():
    sack = SelectiveAck.from_unacked([7, 0, 1, 63])
    assert sack.to_bytes() == bytes([0b1000_0011, 0, 0, 0, 0, 0, 0, 0b1000_0000])
    assert sack == SelectiveAck.from_bytes(sack.to_bytes())


def test_empty_has_no_bits():
    sack = SelectiveAck.from_unacked([])
    assert sack.count_ones() == 0
    assert not any(sack)


def test_stops_at_first_index_past_depth():
    sack = SelectiveAck.from_unacked([3, SACK_DEPTH + 6, 5])
    assert [idx for idx, bit in enumerate(sack) if bit] == [3]


def test_iter_matches_indices():
    indices = [2, 9, 40]
    sack = SelectiveAck.from_unacked(indices)
    flags = list(sack)
    assert len(flags) == SACK_DEPTH
    assert [idx for idx, bit in enumerate(flags) if bit] == indices
    assert sack.count_ones() == len(indices)


def test_len_from_unacked_is_depth():
    assert len(SelectiveAck.from_unacked([1])) == SACK_DEPTH


def test_from_short_bytes():
    sack = SelectiveAck.from_bytes(b"\x05")
    assert len(sack) == 8
    assert [idx for idx, bit in enumerate(sack) if bit] == [0, 2]
    assert sack.to_bytes() == b"\x05" + bytes(7)


def test_from_long_bytes_truncates():
    data = bytes(8) + b"\xff\xff"
    sack = SelectiveAck.from_bytes(data)
    assert len(sack) == 80
    assert sack.count_ones() == 0
    assert sack.to_bytes() == bytes(8)