import pytest

from ofituner.memreg import (
    CACHE_PAGE_SIZE,
    CacheKey,
    CacheKeyType,
    make_dmabuf_key,
    make_iovec_key,
    round_to_alignment,
)


@pytest.mark.parametrize(
    "length,base",
    [(100, 4100), (1, 0), (8191, 1), (4096, 4095), (0, 12345), (10000, 0x7F0000001234)],
)
def test_round_covers_original_range(length, base):
    new_length, new_base = round_to_alignment(length, base, CACHE_PAGE_SIZE)
    assert new_base % CACHE_PAGE_SIZE == 0
    assert (new_base + new_length) % CACHE_PAGE_SIZE == 0
    assert new_base <= base
    assert new_base + new_length >= base + length
    assert base - new_base < CACHE_PAGE_SIZE


def test_round_keeps_aligned_range():
    assert round_to_alignment(8192, 4096, 4096) == (8192, 4096)


def test_round_unaligned_worked_example():
    assert round_to_alignment(100, 4100, 4096) == (4096, 4096)


def test_round_is_idempotent():
    once = round_to_alignment(5000, 300, 256)
    assert round_to_alignment(*once, 256) == once


def test_round_rejects_bad_alignment():
    with pytest.raises(ValueError):
        round_to_alignment(10, 10, 0)


def test_iovec_key():
    key = make_iovec_key(8192, 4096)
    assert key.type is CacheKeyType.IOVEC
    assert key.type_str() == "iovec"
    assert key.baseaddr() == 8192
    assert key.length() == 4096


def test_iovec_key_is_rounded():
    key = make_iovec_key(4100, 100, alignment=CACHE_PAGE_SIZE)
    assert (key.length(), key.baseaddr()) == round_to_alignment(100, 4100, CACHE_PAGE_SIZE)


def test_dmabuf_key_not_rounded():
    key = make_dmabuf_key(fd=3, offset=0, length=100, base_addr=4100)
    assert key.type_str() == "dmabuf"
    assert key.baseaddr() == 4100
    assert key.length() == 100
    assert key.fd == 3


def test_dmabuf_key_adds_offset():
    key = make_dmabuf_key(fd=5, offset=64, length=10, base_addr=4096)
    assert key.baseaddr() == 4160


def test_keys_are_hashable_and_equal():
    assert make_iovec_key(4096, 10) == make_iovec_key(4096, 10)
    assert len({make_iovec_key(4096, 10), make_iovec_key(4097, 1)}) == 1


def test_invalid_key_type_str_raises():
    key = CacheKey(CacheKeyType.INVALID, 0, 0)
    with pytest.raises(ValueError):
        key.type_str()


def test_invalid_key_baseaddr_raises():
    key = CacheKey(CacheKeyType.INVALID, 0, 0)
    with pytest.raises(ValueError):
        key.baseaddr()


def test_invalid_key_length_raises():
    key = CacheKey(CacheKeyType.INVALID, 0, 0)
    with pytest.raises(ValueError):
        key.length()