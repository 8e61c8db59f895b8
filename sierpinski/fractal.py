import logging
from time import time

from sierpinski.datatypes import Color, Point, VertexRecord

RED = 0.25
BLUE = 0.75
LARGE_DEPTH_WARNING = 12


def midpoint(p, q):
    """Componentwise mean of two points."""
    return Point((p.x + q.x) / 2.0, (p.y + q.y) / 2.0, (p.z + q.z) / 2.0)


def depth_color(depth, max_depth):
    """
    Flat color of a triangle at the given recursion depth.
    Green carries the depth; a zero maximum depth has nothing to scale by and maps to 0.
    """
    green = depth / max_depth if max_depth > 0 else 0.0
    return Color(RED, green, BLUE)


def vertex_count(max_depth):
    """Number of vertices `generate` emits: 3 per triangle, 3^k triangles at depth k."""
    if max_depth < 0:
        return 0
    return 3 * (3 ** (max_depth + 1) - 1) // 2


def generate(a, b, c, max_depth):
    """
    Generate the vertex stream of a Sierpinski triangle with corners a, b, c.

    Triangles are emitted depth-first in pre-order: a triangle's three vertices come
    before any of its children, and children follow in the order of the corner they
    keep (a, then b, then c). Every level is emitted, not just the leaves, so smaller
    triangles are layered on top of their parents when drawn in order.
    """
    if max_depth > LARGE_DEPTH_WARNING:
        logging.warning(
            f"Depth {max_depth} will emit {vertex_count(max_depth)} vertices, memory use grows as 3^depth."
        )
    start_time = time()
    stream = []

    def subdivide(a, b, c, depth):
        if depth > max_depth:
            return
        color = depth_color(depth, max_depth)
        stream.append(VertexRecord(a, color, depth))
        stream.append(VertexRecord(b, color, depth))
        stream.append(VertexRecord(c, color, depth))

        ab = midpoint(a, b)
        ac = midpoint(a, c)
        bc = midpoint(b, c)
        subdivide(a, ab, ac, depth + 1)
        subdivide(b, ab, bc, depth + 1)
        subdivide(c, ac, bc, depth + 1)

    subdivide(a, b, c, 0)
    logging.info(
        f"Generated {len(stream)} vertices to depth {max_depth} in {time() - start_time:.3f} seconds."
    )
    return stream
