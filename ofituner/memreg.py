"""Memory registration cache keys and page-alignment helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

CACHE_PAGE_SIZE = 4096
"""Default alignment of registration cache keys, in bytes."""


class CacheKeyType(IntEnum):
    """Kind of memory a cache key describes."""

    INVALID = 0
    IOVEC = 1
    DMABUF = 2


@dataclass(frozen=True)
class CacheKey:
    """Key of a memory-registration cache entry."""

    type: CacheKeyType
    base_addr: int
    size: int
    fd: int = -1
    offset: int = 0

    def type_str(self) -> str:
        """Name of the key type."""
        if self.type is CacheKeyType.IOVEC:
            return "iovec"
        if self.type is CacheKeyType.DMABUF:
            return "dmabuf"
        raise ValueError(f"invalid cache key type {self.type!r}")

    def baseaddr(self) -> int:
        """Start address of the registered memory."""
        if self.type is CacheKeyType.IOVEC:
            return self.base_addr
        if self.type is CacheKeyType.DMABUF:
            return self.base_addr + self.offset
        raise ValueError(f"invalid cache key type {self.type!r}")

    def length(self) -> int:
        """Length in bytes of the registered memory."""
        if self.type in (CacheKeyType.IOVEC, CacheKeyType.DMABUF):
            return self.size
        raise ValueError(f"invalid cache key type {self.type!r}")


def round_to_alignment(length: int, base_addr: int, alignment: int) -> tuple[int, int]:
    """Widen [base_addr, base_addr + length) to whole alignment units.

    Returns ``(length, base_addr)`` of the widened range.
    """
    if alignment <= 0:
        raise ValueError("alignment must be positive")
    if length < 0 or base_addr < 0:
        raise ValueError("length and base address must not be negative")
    page_base = base_addr - base_addr % alignment
    end = base_addr + length
    aligned_end = -(-end // alignment) * alignment
    return aligned_end - page_base, page_base


def make_iovec_key(base_addr: int, length: int, alignment: int = CACHE_PAGE_SIZE) -> CacheKey:
    """Build an iovec key covering the given range, rounded to the alignment."""
    aligned_length, aligned_base = round_to_alignment(length, base_addr, alignment)
    return CacheKey(CacheKeyType.IOVEC, aligned_base, aligned_length)


def make_dmabuf_key(fd: int, offset: int, length: int, base_addr: int) -> CacheKey:
    """Build a dmabuf key; dmabuf ranges are not rounded."""
    return CacheKey(CacheKeyType.DMABUF, base_addr, length, fd=fd, offset=offset)