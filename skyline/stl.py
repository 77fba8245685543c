"""
STL Serializer - Binary STL writing and reading

Layout: 80-byte header, little-endian uint32 triangle count, then one
50-byte record per triangle (normal, three vertices as float32, and a
zero uint16 attribute). Vertices are never shared between records.
"""
import logging
import os
import struct
import tempfile
from pathlib import Path
from typing import Iterable, Tuple, Union

import numpy as np
import trimesh

from .errors import SkylineIOError
from .geometry.mesh import Mesh
from .models import Triangle

logger = logging.getLogger(__name__)

HEADER_SIZE = 80
DEFAULT_HEADER = b"Binary STL generated by skyline"

STL_RECORD = np.dtype([
    ("normal", "<f4", (3,)),
    ("vertices", "<f4", (3, 3)),
    ("attr", "<u2"),
])


def _as_mesh(triangles: Union[Mesh, Iterable[Triangle]]) -> Mesh:
    if isinstance(triangles, Mesh):
        return triangles
    return Mesh.from_triangles(triangles)


def encode_stl_binary(triangles: Union[Mesh, Iterable[Triangle]], header: bytes = DEFAULT_HEADER) -> bytes:
    """Serialize triangles to the binary STL byte layout"""
    mesh = _as_mesh(triangles)
    count = len(mesh)

    records = np.zeros(count, dtype=STL_RECORD)
    if count:
        records["normal"] = mesh.normals
        records["vertices"] = mesh.vertices

    return (
        header[:HEADER_SIZE].ljust(HEADER_SIZE, b"\0")
        + struct.pack("<I", count)
        + records.tobytes()
    )


def write_stl_binary(
    path: Union[str, Path],
    triangles: Union[Mesh, Iterable[Triangle]],
    header: bytes = DEFAULT_HEADER,
) -> Path:
    """
    Write triangles to a binary STL file.

    The file is written next to its destination under a temporary name and
    moved into place only once complete, so a failed write never leaves a
    partial model behind.

    Raises:
        SkylineIOError: the file could not be written
    """
    path = Path(path)
    mesh = _as_mesh(triangles)
    payload = encode_stl_binary(mesh, header)

    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False) as f:
            tmp_name = f.name
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.remove(tmp_name)
        raise SkylineIOError(f"failed to write STL file {path}", e) from e

    logger.info("Wrote %d triangles to %s", len(mesh), path)
    return path


def read_stl_binary(path: Union[str, Path]) -> Tuple[bytes, np.ndarray, np.ndarray]:
    """
    Read a binary STL file.

    Returns:
        (header, normals (N, 3), vertices (N, 3, 3)) as float32 arrays
    """
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise SkylineIOError(f"failed to read STL file {path}", e) from e

    if len(data) < HEADER_SIZE + 4:
        raise SkylineIOError(f"{path} is too short to be a binary STL file")

    (count,) = struct.unpack_from("<I", data, HEADER_SIZE)
    expected = HEADER_SIZE + 4 + count * STL_RECORD.itemsize
    if len(data) < expected:
        raise SkylineIOError(f"{path} is truncated: expected {expected} bytes, found {len(data)}")

    records = np.frombuffer(data, dtype=STL_RECORD, count=count, offset=HEADER_SIZE + 4)
    return data[:HEADER_SIZE], records["normal"].copy(), records["vertices"].copy()


def load_stl(path: Union[str, Path]) -> trimesh.Trimesh:
    """Load a written model with trimesh for inspection"""
    try:
        return trimesh.load(str(path), file_type="stl", force="mesh")
    except (OSError, ValueError) as e:
        raise SkylineIOError(f"failed to load STL file {path}", e) from e
