# terrainroute

Building blocks for terrain-sensitive route planning: splitting an area
into geographic tiles and downloading them, interpolating heights on
terrain triangles, and combining cost features into a dependency graph
that yields one traversal cost per step. It uses only the standard library.

## Modules

- `terrainroute.geometry`: `Point2` and `Point3` named tuples, and
  `interpolate_z(p1, p2, p3, x, y)`, the height at `(x, y)` on the plane
  through three points. It raises `ValueError` for a vertical or
  degenerate triangle.
- `terrainroute.chunks`: `ChunkInfo` (tile bounds in degrees) and
  `ChunkManager(url, tile_size, position_order=(0, 1, 2, 3), api_key="")`.
  - `get_chunk_info(lat, lng)` returns the tile that holds a coordinate.
  - `get_required_chunks(min_lat, min_lng, max_lat, max_lng)` lists the
    tiles that cover an area, row by row.
  - `format_url(chunk)` fills the `{}` placeholders of the template. It
    first uses the bounds chosen by `position_order` (0 = min lat,
    1 = min lng, 2 = max lat, 3 = max lng) and then the API key.
  - `fetch_chunk(chunk, filepath)` downloads a tile into a file.

  `set_cache_enabled(is_enabled)` and `is_cache_enabled()` set and read a
  process-wide cache flag.
- `terrainroute.api`: `APICaller().fetch_data_from_api(url, filepath)`
  writes the response body to a file whatever the HTTP status, and returns
  the number of bytes written. It raises `APIError` when the request or the
  write fails. `dataset_center(geotransform, x_size, y_size)` returns the
  `(latitude, longitude)` centre of a raster from its six-coefficient
  affine geotransform.
- `terrainroute.feature`: `Feature` (abstract, equal by `feature_id`),
  `FeatureState` and `FeatureManager`.
  - A feature's `add_warning` attaches a warning to the current face. It
    does not replace a warning of higher priority that is already there.
  - `FeatureManager.set_output_feature` raises `DependencyCycleError` when
    the dependency graph has a cycle.
  - `FeatureManager.calculate(state)` evaluates the output feature.
- `terrainroute.basic_features`:
  - `GradientFeature`: rise over horizontal run between the current vertex
    and the next vertex.
  - `GradientSpeedFeature`: a polynomial of the gradient, floored at 0. It
    warns on slight, steep and untraversable gradients.
  - `MultiplierFeature`: the product of its dependencies, each added with a
    `DependencyType` of `INT`, `DOUBLE` or `BOOL`. A false `BOOL`
    dependency gives 0.
- `terrainroute.terrain_features`:
  - `CEHTerrainFeature`: a speed factor per land-cover class
    (`CEHTerrainType`) read from its `terrain_map`. `interpret_colour`
    maps an RGB pixel to its land-cover class.
  - `BoolWaterFeature`: true for faces marked `WaterStatus.WATER` and for
    faces with no data.
  - `PathFeature`: true when the step runs along a segment recorded with
    `add_segments`, in either direction.

## Example

    from terrainroute.basic_features import (
        DependencyType, GradientFeature, GradientSpeedFeature, MultiplierFeature,
    )
    from terrainroute.chunks import ChunkManager
    from terrainroute.feature import FeatureManager, FeatureState
    from terrainroute.geometry import Point3

    manager = ChunkManager(
        "https://tiles.example.com/dem?south={}&west={}&north={}&east={}&key={}",
        0.1,
        api_key="placeholder",
    )
    chunk = manager.get_chunk_info(56.33, -2.79)
    print(manager.format_url(chunk))

    print(GradientFeature.calculate_gradient(Point3(0, 0, 0), Point3(3, 4, 5)))  # 1.0

    speed = GradientSpeedFeature("speed", upwards_coefficients=(1.0, -1.0))
    speed.add_dependency(GradientFeature("gradient"))
    cost = MultiplierFeature("cost")
    cost.add_dependency(speed, DependencyType.DOUBLE)

    features = FeatureManager()
    features.set_output_feature(cost)
    state = FeatureState(current_face="f1",
                         current_vertex=Point3(0, 0, 0),
                         next_vertex=Point3(10, 0, 2))
    print(features.calculate(state), state.warning_messages)

## What it does not do

- It does not build or simplify triangulated terrain meshes.
- It does not read raster or vector tiles, reproject them or extract
  contours from them.
- It does not tag mesh faces with land cover or water. The terrain
  features work on face maps that you fill in yourself.
- It does not compute routes and has no command-line program.
- It keeps no chunk cache on disk. The cache flag is only a setting.