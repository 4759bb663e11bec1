"""Enumerations and fixed parameters shared by the tuners."""

from __future__ import annotations

from enum import IntEnum


class Algorithm(IntEnum):
    """Collective algorithms, numbered as in the collective library's tuner API."""

    UNDEF = -1
    TREE = 0
    RING = 1
    COLLNET_DIRECT = 2
    COLLNET_CHAIN = 3
    NVLS = 4
    NVLS_TREE = 5
    PAT = 6


class Protocol(IntEnum):
    """Wire protocols, numbered as in the collective library's tuner API."""

    UNDEF = -1
    LL = 0
    LL128 = 1
    SIMPLE = 2


class CollFunc(IntEnum):
    """Collective operations, numbered as in the collective library's tuner API."""

    BROADCAST = 0
    REDUCE = 1
    ALL_GATHER = 2
    REDUCE_SCATTER = 3
    ALL_REDUCE = 4
    SEND_RECV = 5
    SEND = 6
    RECV = 7


class TunerType(IntEnum):
    """Region based versus model based tuning."""

    REGION = 0
    MODEL = 1


class Platform(IntEnum):
    """Platforms the tuners know about."""

    P5_P5E = 0
    P5EN = 1
    UNKNOWN = 2
    PLATFORM_MAX = 2


NUM_ALGORITHMS = 7
NUM_PROTOCOLS = 3
NUM_FUNCTIONS = 8

# Cost-table entry marking a combination the caller will not consider.
ALGO_PROTO_IGNORE = -1.0

# Defaults of the collective library that the cost models depend on.
NCCL_STEPS = 8
NCCL_SIZEOF_NCCL_LL_FIFOLINE = 16
NCCL_WARP_SIZE = 32
NCCL_MAXCHANNELS = 32
NCCL_MAX_NTHREADS = 640
NCCL_SIMPLE_MAX_NTHREADS = 512
NCCL_LL_MAX_NTHREADS = 512
NCCL_LL_LINES_PER_THREAD = 8
NCCL_LL128_MAX_NTHREADS = 640
NCCL_LL128_ELEMS_PER_THREAD = 120
EXPECTED_DTYPE_SIZE = 4
NCCL_BUFFSIZE = 1 << 22