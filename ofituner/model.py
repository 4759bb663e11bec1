"""Model based tuner: picks an algorithm/protocol from an analytic cost model."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator, MutableSequence
from dataclasses import dataclass

from .constants import Algorithm, CollFunc, Platform, Protocol

log = logging.getLogger(__name__)

Choice = tuple[Algorithm, Protocol]

_GIB = 1024 * 1024 * 1024


@dataclass(frozen=True)
class ModelParams:
    """Platform parameters of the cost model.

    ``net_lat`` is the two-node small-message RDMA latency, bandwidths are
    per rail, and ``nvlink_lat[algo][proto]`` holds the intra-node hop
    latencies in microseconds.
    """

    net_lat: float
    internode_bw: float
    intranode_bw: float
    num_rails: int
    nvlink_lat: tuple[tuple[float, ...], ...]


_NVLINK_LAT = (
    (0.6, 1.25, 28.0),  # Tree (LL, LL128, Simple)
    (0.6, 1.9, 3.4),  # Ring
    (0.0, 0.0, 3.7),  # CollNet Direct, unused
    (0.0, 0.0, 2.8),  # CollNet Chain, unused
    (0.0, 0.0, 23.0),  # NVLS, Simple only
    (0.0, 0.0, 23.0),  # NVLS Tree, Simple only
    (0.0, 0.0, 0.0),  # PAT
)

MODEL_PLATFORM_PARAMS: dict[Platform, ModelParams] = {
    Platform.P5_P5E: ModelParams(
        net_lat=20.0,
        internode_bw=12.5 * _GIB * 1e-6,
        intranode_bw=20.0 * _GIB * 1e-6,
        num_rails=4,
        nvlink_lat=_NVLINK_LAT,
    ),
    Platform.P5EN: ModelParams(
        net_lat=18.0,
        internode_bw=25.0 * _GIB * 1e-6,
        intranode_bw=20.0 * _GIB * 1e-6,
        num_rails=2,
        nvlink_lat=_NVLINK_LAT,
    ),
}


def is_model_supported(platform: Platform, num_ranks: int, num_nodes: int) -> bool:
    """Whether the model tuner knows the given platform."""
    return platform in (Platform.P5_P5E, Platform.P5EN)


def compute_cost(
    params: ModelParams,
    num_ranks: int,
    num_nodes: int,
    func: int,
    algo: int,
    proto: int,
    pipe_ops: int,
    size: int,
    net_comp_overhead: float,
    num_channels: int,
) -> float | None:
    """Hockney-style cost ``latency * pipe_ops + size / bandwidth`` in microseconds.

    Returns None when there is no model for the collective or algorithm.
    """
    # The simple protocol pays extra completion-processing overhead.
    net_lat = params.net_lat + net_comp_overhead if proto == Protocol.SIMPLE else params.net_lat
    p2p_lat = params.nvlink_lat[algo][proto]

    if func != CollFunc.ALL_REDUCE:
        log.debug("Unsupported collective %d, fallback to NCCL's selection.", func)
        return None

    if algo == Algorithm.RING:
        num_steps = 2 * (num_ranks - 1)
        num_internode_steps = 2 * num_nodes
        latency = num_internode_steps * net_lat + (num_steps - num_internode_steps) * p2p_lat
        bw = params.internode_bw * params.num_rails * num_channels
    elif algo == Algorithm.NVLS_TREE:
        latency = 2 * (p2p_lat + math.log2(num_nodes) * net_lat)
        bw = min(params.intranode_bw, params.internode_bw * params.num_rails / 2) * num_channels
    elif algo == Algorithm.TREE:
        latency = (
            2 * ((num_ranks // num_nodes) - 1) * p2p_lat
            + 2 * math.log2(num_nodes) * net_lat
        )
        bw = params.internode_bw * params.num_rails * num_channels / 2
    else:
        log.debug("Algorithm %d for collective %d without a model.", algo, func)
        return None

    if proto == Protocol.LL:
        # 8 bytes per line, half of them flags.
        bw *= 0.5
    elif proto == Protocol.LL128:
        # 120 bytes of data per 128-byte line.
        bw *= 0.9375

    return latency * pipe_ops + size / bw


def _candidates(nvls_support: bool) -> Iterator[tuple[Algorithm, Protocol]]:
    for algo in Algorithm:
        if algo in (Algorithm.UNDEF, Algorithm.COLLNET_DIRECT, Algorithm.COLLNET_CHAIN):
            continue
        # NVLS alone is used only for single-node jobs.
        if algo == Algorithm.NVLS:
            continue
        if algo == Algorithm.NVLS_TREE and not nvls_support:
            continue
        for proto in Protocol:
            if proto == Protocol.UNDEF:
                continue
            if algo == Algorithm.NVLS_TREE and proto != Protocol.SIMPLE:
                continue
            yield algo, proto


class ModelTuner:
    """Chooses the algorithm/protocol pair with the lowest modelled cost.

    A return value of None leaves the choice to the caller's own tuning.
    """

    def __init__(
        self,
        platform: Platform,
        num_ranks: int,
        num_nodes: int,
        net_comp_overhead: float,
        num_channels: int,
    ) -> None:
        try:
            self.params = MODEL_PLATFORM_PARAMS[Platform(platform)]
        except (KeyError, ValueError):
            raise ValueError(f"model is not supported for platform {platform!r}") from None
        self.platform = Platform(platform)
        self.num_ranks = num_ranks
        self.num_nodes = num_nodes
        self.net_comp_overhead = net_comp_overhead
        self.num_channels = num_channels
        log.info(
            "Model Tuner init (platform %d): comm with %d ranks and %d nodes.",
            self.platform, num_ranks, num_nodes,
        )

    def _quirk_applies(self, coll_type: int, num_bytes: int) -> bool:
        return (
            self.platform == Platform.P5_P5E
            and coll_type == CollFunc.ALL_REDUCE
            and self.num_nodes == 16
            and self.num_ranks == 128
            and 3 * _GIB < num_bytes <= 5 * _GIB
        )

    def _choose(
        self, coll_type: int, num_bytes: int, num_pipe_ops: int, nvls_support: bool
    ) -> tuple[Choice, float] | None:
        best: tuple[Choice, float] | None = None
        for algo, proto in _candidates(nvls_support):
            cost = compute_cost(
                self.params, self.num_ranks, self.num_nodes, coll_type, algo, proto,
                num_pipe_ops, num_bytes, self.net_comp_overhead, self.num_channels,
            )
            if cost is None or cost < 0:
                continue
            log.debug(
                "Model Tuner Computed cost for algo %d proto %d pipe %d: cost %.8f usecs.",
                algo, proto, num_pipe_ops, cost,
            )
            if best is None or cost < best[1]:
                best = (algo, proto), cost
        return best

    def get_coll_info_v3(
        self,
        coll_type: int,
        num_bytes: int,
        num_pipe_ops: int,
        cost_table: MutableSequence[MutableSequence[float]],
        num_algo: int,
        num_proto: int,
    ) -> Choice | None:
        """Mark the cheapest combination with cost 0.0 in ``cost_table``.

        Returns the chosen (algorithm, protocol), or None to fall back.
        """
        # Runs of two nodes or fewer keep the caller's own tuning.
        if self.num_nodes <= 2:
            return None

        if self._quirk_applies(coll_type, num_bytes):
            choice: Choice = (Algorithm.NVLS_TREE, Protocol.SIMPLE)
        else:
            best = self._choose(coll_type, num_bytes, num_pipe_ops, nvls_support=True)
            if best is None:
                return None
            choice = best[0]

        algo, proto = choice
        cost_table[algo][proto] = 0.0
        log.info(
            "Model Tuner Choosing algo %d proto %d with cost %.8f usecs for coll %d size %d.",
            algo, proto, 0.0, coll_type, num_bytes,
        )
        return choice

    def get_coll_info_v2(
        self,
        coll_type: int,
        num_bytes: int,
        coll_net_support: int,
        nvls_support: int,
        num_pipe_ops: int,
    ) -> Choice | None:
        """Return the cheapest (algorithm, protocol), or None to fall back."""
        if self.num_nodes <= 2:
            return None

        if nvls_support and self._quirk_applies(coll_type, num_bytes):
            choice: Choice = (Algorithm.NVLS_TREE, Protocol.SIMPLE)
            lowest = 0.0
        else:
            best = self._choose(coll_type, num_bytes, num_pipe_ops, bool(nvls_support))
            if best is None:
                return None
            choice, lowest = best

        log.info(
            "Model Tuner Choosing algo %d proto %d with cost %.8f usecs for coll %d size %d.",
            choice[0], choice[1], lowest, coll_type, num_bytes,
        )
        return choice