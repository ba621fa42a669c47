"""Mapbox Vector Tile payloads for tests.

Well-formed tiles are encoded with mapbox_vector_tile. The byte-level
writer below produces the protobuf wire format directly, for payloads
the encoder refuses to write: unknown commands, zero-area rings and
broken framing.
"""

import struct
from typing import Any

import mapbox_vector_tile

LINESTRING = 2
POLYGON = 3

MOVE_TO = 1
LINE_TO = 2
CLOSE_PATH = 7


def varint(value: int) -> bytes:
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def zigzag(n: int) -> int:
    return (n << 1) ^ (n >> 63)


def command(cmd_id: int, count: int) -> int:
    return (cmd_id & 0x7) | (count << 3)


def _key(field: int, wire_type: int) -> bytes:
    return varint((field << 3) | wire_type)


def _varint_field(field: int, value: int) -> bytes:
    return _key(field, 0) + varint(value)


def _bytes_field(field: int, data: bytes) -> bytes:
    return _key(field, 2) + varint(len(data)) + data


def _packed(field: int, values: list[int]) -> bytes:
    return _bytes_field(field, b"".join(varint(v) for v in values))


def polygon_geometry(*rings: list[tuple[int, int]]) -> list[int]:
    """Command stream for rings given without their closing position."""
    out: list[int] = []
    cx = cy = 0
    for ring in rings:
        x, y = ring[0]
        out += [command(MOVE_TO, 1), zigzag(x - cx), zigzag(y - cy)]
        cx, cy = x, y
        out.append(command(LINE_TO, len(ring) - 1))
        for x, y in ring[1:]:
            out += [zigzag(x - cx), zigzag(y - cy)]
            cx, cy = x, y
        out.append(command(CLOSE_PATH, 1))
    return out


def line_geometry(points: list[tuple[int, int]]) -> list[int]:
    x, y = points[0]
    out = [command(MOVE_TO, 1), zigzag(x), zigzag(y), command(LINE_TO, len(points) - 1)]
    cx, cy = x, y
    for x, y in points[1:]:
        out += [zigzag(x - cx), zigzag(y - cy)]
        cx, cy = x, y
    return out


def _value(value: Any) -> bytes:
    if isinstance(value, bool):
        return _varint_field(7, int(value))
    if isinstance(value, int):
        if value < 0:
            return _varint_field(6, zigzag(value))
        return _varint_field(5, value)
    if isinstance(value, float):
        return _key(3, 1) + struct.pack("<d", value)
    return _bytes_field(1, str(value).encode("utf-8"))


def feature(geom_type: int, geometry: list[int], properties: dict[str, Any] | None = None) -> dict:
    return {"type": geom_type, "geometry": geometry, "properties": properties or {}}


def layer(name: str, features: list[dict], extent: int = 4096) -> bytes:
    """Encode a layer, interning property keys and values."""
    keys: list[str] = []
    values: list[Any] = []
    encoded_features = b""

    for feat in features:
        tags: list[int] = []
        for key, value in feat["properties"].items():
            if key not in keys:
                keys.append(key)
            # Compare with type so True and 1 get separate entries
            matches = [i for i, v in enumerate(values) if type(v) is type(value) and v == value]
            if matches:
                value_index = matches[0]
            else:
                values.append(value)
                value_index = len(values) - 1
            tags += [keys.index(key), value_index]

        body = b""
        if tags:
            body += _packed(2, tags)
        body += _varint_field(3, feat["type"])
        body += _packed(4, feat["geometry"])
        encoded_features += _bytes_field(2, body)

    out = _varint_field(15, 2) + _bytes_field(1, name.encode("utf-8"))
    out += encoded_features
    for key in keys:
        out += _bytes_field(3, key.encode("utf-8"))
    for value in values:
        out += _bytes_field(4, _value(value))
    out += _varint_field(5, extent)
    return out


def tile(*layers: bytes) -> bytes:
    return b"".join(_bytes_field(3, encoded) for encoded in layers)


def encoded_tile(layers: dict[str, list[dict]], extent: int = 4096) -> bytes:
    """Encode ``{layer name: [{"geometry": wkt, "properties": {...}}]}`` in tile-local units."""
    return mapbox_vector_tile.encode(
        [{"name": name, "features": features} for name, features in layers.items()],
        default_options={"y_coord_down": True, "extents": extent},
    )


def ring_wkt(ring: list[tuple[int, int]]) -> str:
    """WKT ring body for an unclosed list of positions."""
    closed = ring + ring[:1]
    return "(" + ", ".join(f"{x} {y}" for x, y in closed) + ")"


# A 2048 x 2048 unit square in the middle of a 4096 extent tile
BUILDING_RING = [(1024, 1024), (3072, 1024), (3072, 3072), (1024, 3072)]


def building_tile(properties: dict[str, Any] | None = None) -> bytes:
    """Tile with one building polygon and one road, like a Streets tile."""
    return encoded_tile(
        {
            "building": [{"geometry": f"POLYGON ({ring_wkt(BUILDING_RING)})", "properties": properties or {}}],
            "road": [{"geometry": "LINESTRING (0 2048, 4096 2048)", "properties": {}}],
        }
    )
