# ofituner

`ofituner` chooses an algorithm and a protocol for a collective operation
from the size of the message and the shape of the communicator, using a
simple latency + bandwidth cost model (`t = latency · pipe_ops + size / bandwidth`).
It also provides the planar geometry needed to test whether a
*(message size, number of ranks)* point lies inside a polygon, and helpers
for building page-aligned memory-registration cache keys.

The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Modules

| Module               | Contents                                                                                      |
|----------------------|-----------------------------------------------------------------------------------------------|
| `ofituner.constants` | Enumerations `Algorithm`, `Protocol`, `CollFunc`, `TunerType`, `Platform`, and fixed defaults such as `NUM_ALGORITHMS`, `NUM_PROTOCOLS`, `ALGO_PROTO_IGNORE` |
| `ofituner.model`     | `ModelParams`, `MODEL_PLATFORM_PARAMS`, `compute_cost`, `is_model_supported`, `ModelTuner`    |
| `ofituner.geometry`  | `Point`, `Region`, `intersect`, `distance`, `extend_region`, `is_inside_region`               |
| `ofituner.memreg`    | `CacheKeyType`, `CacheKey`, `round_to_alignment`, `make_iovec_key`, `make_dmabuf_key`         |

## The model tuner

`is_model_supported(platform, num_ranks, num_nodes)` is true for
`Platform.P5_P5E` and `Platform.P5EN`. Constructing a `ModelTuner` for any
other platform raises `ValueError`.

```python
from ofituner.constants import NUM_ALGORITHMS, NUM_PROTOCOLS, CollFunc, Platform
from ofituner.model import ModelTuner

tuner = ModelTuner(Platform.P5_P5E, num_ranks=128, num_nodes=16,
                   net_comp_overhead=0.0, num_channels=8)

table = [[1.0] * NUM_PROTOCOLS for _ in range(NUM_ALGORITHMS)]
choice = tuner.get_coll_info_v3(CollFunc.ALL_REDUCE, 1 << 20, 1, table,
                                NUM_ALGORITHMS, NUM_PROTOCOLS)
```

* `get_coll_info_v3(coll_type, num_bytes, num_pipe_ops, cost_table, num_algo, num_proto)`
  evaluates every usable algorithm/protocol pair and sets
  `cost_table[algorithm][protocol]` to `0.0` for the cheapest one, returning
  that `(Algorithm, Protocol)` pair.
* `get_coll_info_v2(coll_type, num_bytes, coll_net_support, nvls_support, num_pipe_ops)`
  returns the cheapest pair without touching any table; NVLS-tree is only
  considered when `nvls_support` is true.

Both return `None`, leaving the choice to the caller, when the communicator
spans two nodes or fewer, or when no modelled pair applies. Only all-reduce is
modelled, with the tree, ring and NVLS-tree algorithms; CollNet and plain NVLS
are never chosen, and NVLS-tree is only paired with the simple protocol. On
`P5_P5E`, an all-reduce over 16 nodes and 128 ranks of more than 3 GiB and at
most 5 GiB always selects NVLS-tree with the simple protocol.

`compute_cost(params, num_ranks, num_nodes, func, algo, proto, pipe_ops, size, net_comp_overhead, num_channels)`
returns the modelled cost in microseconds, or `None` when there is no model
for the collective or algorithm. The per-platform parameters live in
`MODEL_PLATFORM_PARAMS`, keyed by `Platform`.

## Geometry helpers

* `Point(x, y)` supports subtraction, `dot`, `cross` and `madd`.
* `Region(algorithm, protocol, vertices)` is a polygon of at most 20 vertices
  (`ValueError` otherwise); vertices may be given as `Point`s or pairs.
* `intersect(x0, x1, y0, y1, eps)` returns `(result, point)`: `1` for a
  crossing, `-1` for none, `0` for parallel edges or a crossing too close to
  an end of `y0->y1`.
* `distance(x, y0, y1, eps)` is the distance from `x` to the segment, or
  infinity if `x` projects outside it.
* `is_inside_region(point, region)` returns `1` inside, `-1` outside and `0`
  on an edge; a region with fewer than two vertices raises `ValueError`.
* `extend_region(a, b, z)` extends the line through `a` and `b` until it meets
  the horizontal or vertical line through `z`.

`TUNER_MAX_SIZE` and `TUNER_MAX_RANKS` give the largest message size and rank
count the geometry is meant for.

## Registration cache keys

`round_to_alignment(length, base_addr, alignment)` widens a range to whole
alignment units and returns `(length, base_addr)`. `make_iovec_key` builds an
iovec `CacheKey` rounded to the alignment (4096 bytes by default);
`make_dmabuf_key(fd, offset, length, base_addr)` builds a dmabuf key without
rounding. `CacheKey.type_str()`, `baseaddr()` and `length()` describe the key;
for a dmabuf key the base address includes the offset.

## What the package does not do

It carries no measured region tables and no region-based tuner: the geometry
helpers are there, but no polygons for any platform. There is also no front
end that picks a tuner from a product name or the environment, and no
process-wide tuner context; callers construct a `ModelTuner` themselves. The
memory-registration helpers build keys only; there is no registration cache.