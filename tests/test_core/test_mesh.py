"""Tests for the mesh arena, brightness grid and typed errors."""

from pathlib import Path

import numpy as np
import pytest

from lithogen.core.errors import InvalidGridError, LithogenError
from lithogen.core.mesh import BrightnessGrid, Mesh


class TestBrightnessGrid:
    def test_dimensions(self):
        grid = BrightnessGrid.from_array(np.zeros((3, 5)))
        assert grid.width == 5
        assert grid.height == 3

    def test_samples_are_read_only(self):
        grid = BrightnessGrid.from_array(np.zeros((2, 2)))
        with pytest.raises(ValueError):
            grid.samples[0, 0] = 10

    def test_from_flat_row_major(self):
        grid = BrightnessGrid.from_flat(3, 2, [0, 1, 2, 3, 4, 5])
        assert grid.samples[1, 0] == 3
        assert grid.samples[0, 2] == 2

    @pytest.mark.parametrize("shape", [(1, 5), (5, 1), (1, 1)])
    def test_too_small(self, shape):
        with pytest.raises(InvalidGridError):
            BrightnessGrid.from_array(np.zeros(shape))

    def test_not_2d(self):
        with pytest.raises(InvalidGridError):
            BrightnessGrid.from_array(np.zeros((2, 2, 3)))

    def test_mismatched_sample_count(self):
        with pytest.raises(InvalidGridError):
            BrightnessGrid.from_flat(3, 3, [0] * 8)

    def test_out_of_range(self):
        with pytest.raises(InvalidGridError):
            BrightnessGrid.from_array(np.array([[0, 300], [0, 0]]))
        with pytest.raises(InvalidGridError):
            BrightnessGrid.from_array(np.array([[0, -1], [0, 0]]))

    def test_error_carries_stage(self):
        with pytest.raises(LithogenError) as exc_info:
            BrightnessGrid.from_array(np.zeros((1, 4)))
        assert exc_info.value.stage == "grid"
        assert "[grid]" in str(exc_info.value)


class TestMesh:
    def test_empty(self):
        mesh = Mesh()
        assert mesh.vertex_count == 0
        assert mesh.triangle_count == 0
        assert mesh.vertices.shape == (0, 3)
        assert mesh.faces.shape == (0, 3)

    def test_handles_are_sequential(self):
        mesh = Mesh()
        a = mesh.add_vertex(0, 0, 0)
        handles = mesh.add_vertices([[1, 0, 0], [0, 1, 0]])
        assert a == 0
        assert handles.tolist() == [1, 2]
        assert mesh.vertex_count == 3

    def test_triangle_before_vertex_rejected(self):
        mesh = Mesh()
        mesh.add_vertices([[0, 0, 0], [1, 0, 0]])
        with pytest.raises(ValueError):
            mesh.add_triangle(0, 1, 2)
        assert mesh.triangle_count == 0

    def test_indices_flat_order(self):
        mesh = Mesh()
        mesh.add_vertices(np.zeros((4, 3)))
        mesh.add_triangle(0, 1, 2)
        mesh.add_triangles([[2, 1, 3]])
        assert mesh.indices.tolist() == [0, 1, 2, 2, 1, 3]

    def test_scale_in_place(self):
        mesh = Mesh()
        mesh.add_vertex(1.0, 2.0, 3.0)
        mesh.add_vertex(-1.0, 0.5, 0.0)
        mesh.scale(2.0)
        np.testing.assert_allclose(mesh.vertices, [[2, 4, 6], [-2, 1, 0]])

    def test_exposed_arrays_are_read_only(self):
        mesh = Mesh()
        mesh.add_vertices([[0, 0, 0], [1, 0, 0], [0, 1, 0]])
        mesh.add_triangle(0, 1, 2)
        with pytest.raises(ValueError):
            mesh.vertices[0, 0] = 99.0
        with pytest.raises(ValueError):
            mesh.faces[0, 0] = 7
        with pytest.raises(ValueError):
            mesh.indices[0] = 7
        assert mesh.vertices[0, 0] == 0.0
        assert mesh.faces.max() < mesh.vertex_count

    def test_scale_still_mutates_after_read(self):
        mesh = Mesh()
        mesh.add_vertex(1.0, 1.0, 1.0)
        _ = mesh.vertices
        mesh.scale(3.0)
        np.testing.assert_allclose(mesh.vertices, [[3, 3, 3]])

    def test_save_load(self, tmp_path: Path):
        mesh = Mesh()
        mesh.add_vertices([[0, 0, 0], [1, 0, 0], [0, 1, 0]])
        mesh.add_triangle(0, 1, 2)
        path = mesh.save(tmp_path / "m.npz")

        loaded = Mesh.load(path)
        assert loaded.vertex_count == 3
        assert loaded.faces.tolist() == [[0, 1, 2]]
        np.testing.assert_array_equal(loaded.vertices, mesh.vertices)
