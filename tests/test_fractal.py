# Sierpinski vertex generation: counts, ordering, colors and edge depths

import logging

import pytest

from sierpinski import fractal
from sierpinski.buffers import to_float_list, to_vertex_buffer
from sierpinski.datatypes import Point
from sierpinski.fractal import depth_color, generate, midpoint, vertex_count

A = Point(-0.5, -0.5, 0.0)
B = Point(0.0, 0.5, 0.0)
C = Point(0.5, -0.5, 0.0)


def triangles(stream):
    return [stream[i:i + 3] for i in range(0, len(stream), 3)]


def corners(triangle):
    return [record.position for record in triangle]


@pytest.mark.parametrize("max_depth", [0, 1, 2, 3, 4, 5])
def test_vertex_count_matches_closed_form(max_depth: int) -> None:
    stream = generate(A, B, C, max_depth)
    expected = 3 * (3 ** (max_depth + 1) - 1) // 2
    assert len(stream) == expected
    assert vertex_count(max_depth) == expected
    assert len(to_float_list(stream)) == 6 * expected


def test_reference_depth_sizes() -> None:
    stream = generate(A, B, C, 8)
    assert len(stream) == 29523
    assert to_vertex_buffer(stream).shape == (177138,)


def test_depth_zero_emits_the_corners() -> None:
    stream = generate(A, B, C, 0)
    assert corners(stream) == [A, B, C]
    for record in stream:
        assert record.depth == 0
        assert (record.color.r, record.color.g, record.color.b) == (0.25, 0.0, 0.75)


def test_depth_one_scenario() -> None:
    stream = generate(A, B, C, 1)
    assert len(stream) == 12
    assert len(to_float_list(stream)) == 72

    root, *children = triangles(stream)
    assert corners(root) == [A, B, C]
    assert all(record.color.g == 0.0 for record in root)

    ab, ac, bc = midpoint(A, B), midpoint(A, C), midpoint(B, C)
    assert [corners(child) for child in children] == [
        [A, ab, ac],
        [B, ab, bc],
        [C, ac, bc],
    ]
    for child in children:
        assert all(record.color.g == 1.0 for record in child)
        assert all(record.depth == 1 for record in child)


def test_last_triangle_is_deepest_c_branch() -> None:
    stream = generate(A, B, C, 2)
    ac, bc = midpoint(A, C), midpoint(B, C)
    # depth 1 triangle (C, ac, bc), then its own third child
    expected = [bc, midpoint(C, bc), midpoint(ac, bc)]
    assert corners(stream[-3:]) == expected
    assert stream[-1].depth == 2


@pytest.mark.parametrize("max_depth", [-1, -5])
def test_negative_depth_emits_nothing(max_depth: int) -> None:
    stream = generate(A, B, C, max_depth)
    assert stream == []
    assert vertex_count(max_depth) == 0
    assert to_vertex_buffer(stream).shape == (0,)


def test_generation_is_deterministic() -> None:
    first = to_vertex_buffer(generate(A, B, C, 4))
    second = to_vertex_buffer(generate(A, B, C, 4))
    assert first.tobytes() == second.tobytes()
    assert to_float_list(generate(A, B, C, 3)) == to_float_list(generate(A, B, C, 3))


def test_green_channel_encodes_depth() -> None:
    max_depth = 4
    for record in generate(A, B, C, max_depth):
        assert record.color.r == 0.25
        assert record.color.b == 0.75
        assert record.color.g == record.depth / max_depth


def test_triangles_are_flat_shaded() -> None:
    for triangle in triangles(generate(A, B, C, 3)):
        assert len({record.color for record in triangle}) == 1
        assert len({record.depth for record in triangle}) == 1


def test_pre_order_depth_sequence() -> None:
    depths = [triangle[0].depth for triangle in triangles(generate(A, B, C, 3))]
    assert depths[0] == 0
    # descending by one level at a time, jumping back up only when a subtree is done
    for previous, current in zip(depths, depths[1:]):
        assert current <= previous + 1
    assert depths.count(0) == 1
    assert depths.count(3) == 27


def test_green_non_decreasing_along_root_to_leaf_path() -> None:
    stream = generate(A, B, C, 3)
    # first child of every triangle follows it directly: the a-corner path
    path = [triangle for triangle in triangles(stream)[:4]]
    greens = [triangle[0].color.g for triangle in path]
    assert greens == sorted(greens)
    assert [triangle[0].position for triangle in path] == [A, A, A, A]


def test_midpoint_is_exact_mean() -> None:
    p = Point(0.1, 0.2, 0.3)
    q = Point(0.7, -0.4, 1e-300)
    assert midpoint(p, q) == Point((0.1 + 0.7) / 2, (0.2 + -0.4) / 2, (0.3 + 1e-300) / 2)
    assert midpoint(p, p) == p


def test_degenerate_corners_still_generate() -> None:
    a, b, c = Point(-1.0, 0.0, 0.0), Point(0.0, 0.0, 0.0), Point(1.0, 0.0, 0.0)
    stream = generate(a, b, c, 3)
    assert len(stream) == vertex_count(3)
    assert all(record.position.y == 0.0 for record in stream)


def test_depth_color_zero_max_depth() -> None:
    assert depth_color(0, 0).g == 0.0
    assert depth_color(3, 4).g == 0.75
    assert depth_color(2, 2).g == 1.0


def test_large_depth_logs_warning(monkeypatch, caplog) -> None:
    monkeypatch.setattr(fractal, "LARGE_DEPTH_WARNING", 1)
    with caplog.at_level(logging.WARNING):
        stream = generate(A, B, C, 2)
    assert len(stream) == 39
    assert "39 vertices" in caplog.text

