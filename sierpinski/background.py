import numpy as np

# position              color
BACKGROUND_VERTICES = np.array([
    -1.0, -1.0,  0.5,    0.0, 0.0, 0.5,      # bottom left
    -1.0,  1.0,  1.0,    1.0, 1.0, 0.125,    # top left
     1.0,  1.0, -1.0,    1.0, 1.0, 0.125,    # top right
     1.0, -1.0,  0.5,    1.0, 1.0, 0.5,      # bottom right
], dtype=np.float32)

BACKGROUND_INDICES = np.array([
    0, 1, 2,  # top left triangle
    0, 2, 3,  # bottom right triangle
], dtype=np.uint32)


def background_quad():
    """Copies of the background rectangle's vertex and index data."""
    return BACKGROUND_VERTICES.copy(), BACKGROUND_INDICES.copy()
