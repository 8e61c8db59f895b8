from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    x: float
    y: float
    z: float


@dataclass(frozen=True)
class Color:
    r: float
    g: float
    b: float


@dataclass(frozen=True)
class VertexRecord:
    position: Point
    color: Color
    depth: int  # recursion level the vertex was emitted at

    def attributes(self):
        """Position followed by color, the order the vertex buffer expects."""
        p, c = self.position, self.color
        return (p.x, p.y, p.z, c.r, c.g, c.b)


@dataclass
class ViewerSettings:
    a: Point = Point(-0.5, -0.5, 0.0)  # bottom left corner
    b: Point = Point(0.0, 0.5, 0.0)  # top corner
    c: Point = Point(0.5, -0.5, 0.0)  # bottom right corner
    max_depth: int = 8
    resolution: tuple = (800, 800)
    clear_color: tuple = (0.2, 0.3, 0.3, 1.0)
    wireframe: bool = False
    background: bool = True
    title: str = "Sierpinski Triangle"
