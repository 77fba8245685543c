"""
Mesh - Append-only container of triangles stored as numpy blocks
"""
from typing import Iterable, Iterator, List, Tuple

import numpy as np
import trimesh

from ..models import Triangle


class Mesh:
    """
    Ordered triangle soup.

    Fragments are appended as whole numpy blocks and concatenated lazily.
    Triangles are never merged or deduplicated; each keeps its own vertex
    copies, matching the STL record layout.
    """

    def __init__(self):
        self._normals: List[np.ndarray] = []
        self._vertices: List[np.ndarray] = []
        self._count = 0

    @classmethod
    def from_triangles(cls, triangles: Iterable[Triangle]) -> "Mesh":
        mesh = cls()
        mesh.extend(triangles)
        return mesh

    @classmethod
    def from_arrays(cls, normals: np.ndarray, vertices: np.ndarray) -> "Mesh":
        mesh = cls()
        mesh.add_block(normals, vertices)
        return mesh

    def add_block(self, normals: np.ndarray, vertices: np.ndarray) -> None:
        """Append (N, 3) normals and (N, 3, 3) vertices"""
        normals = np.asarray(normals, dtype=np.float64).reshape(-1, 3)
        vertices = np.asarray(vertices, dtype=np.float64).reshape(-1, 3, 3)
        if normals.shape[0] != vertices.shape[0]:
            raise ValueError(f"normals ({normals.shape[0]}) and vertices ({vertices.shape[0]}) differ in length")
        if normals.shape[0] == 0:
            return
        self._normals.append(normals)
        self._vertices.append(vertices)
        self._count += normals.shape[0]

    def append(self, triangle: Triangle) -> None:
        self.add_block(np.array([triangle.normal]), np.array([triangle.vertices]))

    def extend(self, triangles: Iterable[Triangle]) -> None:
        triangles = list(triangles)
        if not triangles:
            return
        self.add_block(
            np.array([t.normal for t in triangles]),
            np.array([t.vertices for t in triangles]),
        )

    def merge(self, other: "Mesh") -> None:
        """Append all triangles of another mesh, keeping their order"""
        for normals, vertices in list(zip(other._normals, other._vertices)):
            self.add_block(normals, vertices)

    def translated(self, dx: float = 0.0, dy: float = 0.0, dz: float = 0.0) -> "Mesh":
        """Copy of this mesh shifted by (dx, dy, dz)"""
        offset = np.array([dx, dy, dz], dtype=np.float64)
        moved = Mesh()
        for normals, vertices in zip(self._normals, self._vertices):
            moved.add_block(normals.copy(), vertices + offset)
        return moved

    def _compact(self) -> None:
        if len(self._normals) > 1:
            self._normals = [np.concatenate(self._normals)]
            self._vertices = [np.concatenate(self._vertices)]

    @property
    def normals(self) -> np.ndarray:
        self._compact()
        return self._normals[0] if self._normals else np.zeros((0, 3))

    @property
    def vertices(self) -> np.ndarray:
        self._compact()
        return self._vertices[0] if self._vertices else np.zeros((0, 3, 3))

    @property
    def bounds(self) -> Tuple[np.ndarray, np.ndarray]:
        """Return (min, max) corners of all vertices"""
        if self._count == 0:
            return np.zeros(3), np.zeros(3)
        points = self.vertices.reshape(-1, 3)
        return points.min(axis=0), points.max(axis=0)

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[Triangle]:
        for n, v in zip(self.normals, self.vertices):
            yield Triangle(
                normal=tuple(float(c) for c in n),
                v1=tuple(float(c) for c in v[0]),
                v2=tuple(float(c) for c in v[1]),
                v3=tuple(float(c) for c in v[2]),
            )

    def to_trimesh(self) -> trimesh.Trimesh:
        """Triangle soup as a trimesh object (vertices merged by trimesh)"""
        vertices = self.vertices.reshape(-1, 3)
        faces = np.arange(vertices.shape[0]).reshape(-1, 3)
        return trimesh.Trimesh(vertices=vertices, faces=faces, process=True)
