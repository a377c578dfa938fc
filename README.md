# voxelworld

Building blocks for a voxel game world: height limits and section
coordinates, 16x16x16 chunk sections of block states and biomes,
heightmaps, sky light storage, scheduled ticks with priorities, chunk
upgrade data, and world chunks that hold block entities.

The package is pure Python and has no dependencies.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `voxelworld.view`: `BlockPos`, `HeightLimit`, `StateOption` (with
  `StateOption.some`, `StateOption.VOID`, `StateOption.NONE` and `map`),
  `state_option`, `section_coord` and the abstract `BlockView` interface.
- `voxelworld.tick`: `Priority`, `priority_from_int`, `Tick` and
  `OrderedTick`. A `Tick` converts to and from a plain dictionary with
  `to_dict` / `from_dict`; ticks compare equal by type and position.
  `OrderedTick`s sort by priority, then sub-tick order, and
  `trigger_tick_cmp` compares by trigger tick first.
- `voxelworld.heightmap`: `HeightmapType` and `Heightmap`, which store the
  Y level above the highest matching block of each column and update it
  through `track_update`.
- `voxelworld.light`: `ChunkSkyLight`, per-column sky light level storage.
- `voxelworld.section`: `Settings`, `Block`, `BlockState`, `Fluid`,
  `FluidState`, `compute_index`, `ChunkSection` and `new_section`. A
  section keeps counts of non-empty blocks, randomly ticking blocks and
  ticking fluids.
- `voxelworld.upgrade`: `EightWayDirection`, `UpgradeData`,
  `UpgradeDataError` and `load_upgrade_data`, which reads upgrade
  information from an already decoded NBT-like mapping.
- `voxelworld.chunk`: `ChunkPos`, `BlockEntity` and `BaseChunk`.
- `voxelworld.world_chunk`: `WorldChunk` and `CreationType`.

## Examples

Height limits and section indices:

```python
from voxelworld.view import HeightLimit

limit = HeightLimit(height=384, bottom=-64)
limit.top()                      # 320
limit.count_vertical_sections()  # 24
limit.section_index(0)           # 4
```

Ticks:

```python
from voxelworld.tick import Priority, Tick, priority_from_int
from voxelworld.view import BlockPos

tick = Tick("stone", BlockPos(1, 2, 3))
assert Tick.from_dict(tick.to_dict()) == tick
assert priority_from_int(-10) is Priority.EXTREMELY_HIGH
```

Sections:

```python
from voxelworld.section import Block, BlockState, Settings, new_section

air = BlockState(Block("air", Settings(is_empty=True)))
stone = BlockState(Block("stone"))

section = new_section(air, "plains")
section.is_empty()                       # True
section.set_block_state(0, 0, 0, stone)  # returns the old state, air
section.non_empty_block_count            # 1
```

A world chunk with a heightmap:

```python
from voxelworld.chunk import BaseChunk, ChunkPos
from voxelworld.heightmap import HeightmapType
from voxelworld.view import BlockPos, HeightLimit, StateOption
from voxelworld.world_chunk import WorldChunk

solid = HeightmapType("solid", lambda s: s is not None and not s.block.settings.is_empty)

base = BaseChunk(ChunkPos(0, 0), HeightLimit(height=32, bottom=0), air, "plains")
heightmap = base.add_heightmap(solid)
chunk = WorldChunk(base)

chunk.set_block_state(BlockPos(1, 1, 1), stone)  # returns air
chunk.block_state(BlockPos(1, 1, 1))             # stone
heightmap.get(1, 1)                              # 2
assert chunk.luminance(BlockPos(0, 100, 0)) is StateOption.VOID
```

Upgrade data:

```python
from voxelworld.upgrade import EightWayDirection, load_upgrade_data

data = load_upgrade_data(
    {"Sides": 0b101, "Indices": {"0": [1, 2]}},
    HeightLimit(height=32, bottom=0),
    blocks={},
    fluids={},
)
data.sides_to_upgrade        # (EightWayDirection.NORTH, EightWayDirection.EAST)
data.center_indices_upgrade  # ((1, 2), ())
```

## What it does not do

- It generates no terrain and runs no game loop; ticks are data only and
  nothing schedules or executes them.
- Light is not computed or propagated: `ChunkSkyLight` only stores levels,
  and `WorldChunk.set_block_state` does not update lighting.
- It reads and writes no files. Upgrade data and block entity data must be
  handed over already decoded; `WorldChunk` turns saved block entity data
  into entities only through a `block_entity_loader` you supply.
- Biomes and registries are whatever objects and mappings you pass in.