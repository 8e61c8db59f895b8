import numpy as np

FLOATS_PER_VERTEX = 6
POSITION_OFFSET = 0  # in floats
COLOR_OFFSET = 3  # in floats
POSITION_LOCATION = 0
COLOR_LOCATION = 1
STRIDE_BYTES = FLOATS_PER_VERTEX * np.dtype(np.float32).itemsize


def to_float_list(stream):
    """Interleave a vertex stream into x, y, z, r, g, b floats per vertex."""
    return [value for record in stream for value in record.attributes()]


def to_vertex_buffer(stream, dtype=np.float32):
    """
    Interleave a vertex stream into a flat, contiguous array ready for upload.
    The result has 6 values per vertex, position first, in stream order.
    """
    buffer = np.empty(len(stream) * FLOATS_PER_VERTEX, dtype=dtype)
    for i, record in enumerate(stream):
        buffer[i * FLOATS_PER_VERTEX:(i + 1) * FLOATS_PER_VERTEX] = record.attributes()
    return buffer


def records_view(buffer):
    """Reshape a flat vertex buffer to one row per vertex."""
    return buffer.reshape(-1, FLOATS_PER_VERTEX)
