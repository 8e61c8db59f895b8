import sys
import ctypes
import logging
from dataclasses import astuple

from OpenGL import GL
from OpenGL.GL.shaders import compileProgram, compileShader
from OpenGL.error import GLError
from PyQt5.QtWidgets import QApplication, QMainWindow, QOpenGLWidget, QLabel
from PyQt5.QtCore import Qt, QTimer, pyqtSignal
from PyQt5.QtGui import QSurfaceFormat

from sierpinski.background import background_quad
from sierpinski.buffers import (
    COLOR_LOCATION, COLOR_OFFSET, POSITION_LOCATION, POSITION_OFFSET, STRIDE_BYTES, records_view, to_vertex_buffer
)
from sierpinski.cli import parse_args, resolve_settings
from sierpinski.fractal import depth_color, generate
from sierpinski.shaders import FRAGMENT_SHADER, VERTEX_SHADER
from sierpinski.styles import get_font, get_stylesheet, get_stylesheet_variables

FLOAT_SIZE = ctypes.sizeof(ctypes.c_float)


def setup_logging(log_file=None):
    """Log to stdout, and to log_file as well when one is given."""
    logger = logging.getLogger()
    logger.setLevel(logging.INFO)
    formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)


def set_default_surface_format():
    """Request an OpenGL 3.3 core context for every GL widget. Must run before QApplication exists."""
    surface_format = QSurfaceFormat()
    surface_format.setVersion(3, 3)
    surface_format.setProfile(QSurfaceFormat.CoreProfile)
    if sys.platform == "darwin":
        surface_format.setOption(QSurfaceFormat.DeprecatedFunctions, False)  # forward compatible
    QSurfaceFormat.setDefaultFormat(surface_format)


def bind_vertex_attributes():
    """Describe the interleaved position + color layout of the bound array buffer."""
    GL.glVertexAttribPointer(
        POSITION_LOCATION, 3, GL.GL_FLOAT, GL.GL_FALSE, STRIDE_BYTES, ctypes.c_void_p(POSITION_OFFSET * FLOAT_SIZE)
    )
    GL.glEnableVertexAttribArray(POSITION_LOCATION)
    GL.glVertexAttribPointer(
        COLOR_LOCATION, 3, GL.GL_FLOAT, GL.GL_FALSE, STRIDE_BYTES, ctypes.c_void_p(COLOR_OFFSET * FLOAT_SIZE)
    )
    GL.glEnableVertexAttribArray(COLOR_LOCATION)


class SierpinskiWidget(QOpenGLWidget):
    failed = pyqtSignal(str)

    def __init__(self, vertices, settings, parent=None):
        super().__init__(parent)
        self.vertices = vertices
        self.vertex_count = len(records_view(vertices))
        self.settings = settings
        self.program = None
        self.tri_vao = self.tri_vbo = None
        self.bg_vao = self.bg_vbo = self.bg_ebo = None
        self.bg_index_count = 0

    def initializeGL(self):
        """Compile shaders and upload the fractal and background buffers."""
        if not self.context().isValid():
            self.failed.emit("Failed to create an OpenGL context.")
            return
        self.context().aboutToBeDestroyed.connect(self.cleanup)
        try:
            self.setup_sierpinski()
            self.setup_background()
            # validated against the bound fractal VAO, core profiles reject validation without one
            GL.glBindVertexArray(self.tri_vao)
            self.program = compileProgram(
                compileShader(VERTEX_SHADER, GL.GL_VERTEX_SHADER),
                compileShader(FRAGMENT_SHADER, GL.GL_FRAGMENT_SHADER),
            )
            GL.glBindVertexArray(0)
        except (RuntimeError, GLError) as e:
            self.program = None
            self.failed.emit(f"OpenGL setup failed: {e}")
            return
        logging.info(f"OpenGL {GL.glGetString(GL.GL_VERSION).decode()} initialized.")

    def setup_sierpinski(self):
        self.tri_vao = GL.glGenVertexArrays(1)
        self.tri_vbo = GL.glGenBuffers(1)

        GL.glBindVertexArray(self.tri_vao)
        GL.glBindBuffer(GL.GL_ARRAY_BUFFER, self.tri_vbo)
        # an empty stream (negative depth) still gets a valid, zero sized buffer
        data = self.vertices if self.vertices.size else None
        GL.glBufferData(GL.GL_ARRAY_BUFFER, self.vertices.nbytes, data, GL.GL_STATIC_DRAW)
        bind_vertex_attributes()

        GL.glBindVertexArray(0)
        GL.glBindBuffer(GL.GL_ARRAY_BUFFER, 0)  # the VAO keeps the attribute binding
        logging.info(f"Uploaded {self.vertex_count} fractal vertices ({self.vertices.nbytes} bytes).")

    def setup_background(self):
        vertices, indices = background_quad()
        self.bg_index_count = len(indices)
        self.bg_vao = GL.glGenVertexArrays(1)
        self.bg_vbo = GL.glGenBuffers(1)
        self.bg_ebo = GL.glGenBuffers(1)

        GL.glBindVertexArray(self.bg_vao)
        GL.glBindBuffer(GL.GL_ARRAY_BUFFER, self.bg_vbo)
        GL.glBufferData(GL.GL_ARRAY_BUFFER, vertices.nbytes, vertices, GL.GL_STATIC_DRAW)
        GL.glBindBuffer(GL.GL_ELEMENT_ARRAY_BUFFER, self.bg_ebo)
        GL.glBufferData(GL.GL_ELEMENT_ARRAY_BUFFER, indices.nbytes, indices, GL.GL_STATIC_DRAW)
        bind_vertex_attributes()

        # VAO first, otherwise unbinding the element buffer detaches it
        GL.glBindVertexArray(0)
        GL.glBindBuffer(GL.GL_ARRAY_BUFFER, 0)
        GL.glBindBuffer(GL.GL_ELEMENT_ARRAY_BUFFER, 0)

    def resizeGL(self, width, height):
        ratio = self.devicePixelRatioF()
        GL.glViewport(0, 0, int(width * ratio), int(height * ratio))

    def paintGL(self):
        GL.glClearColor(*self.settings.clear_color)
        GL.glClear(GL.GL_COLOR_BUFFER_BIT)
        if self.program is None:
            return

        GL.glUseProgram(self.program)
        GL.glPolygonMode(GL.GL_FRONT_AND_BACK, GL.GL_LINE if self.settings.wireframe else GL.GL_FILL)

        if self.settings.background:
            GL.glBindVertexArray(self.bg_vao)
            GL.glDrawElements(GL.GL_TRIANGLES, self.bg_index_count, GL.GL_UNSIGNED_INT, None)

        GL.glBindVertexArray(self.tri_vao)
        GL.glDrawArrays(GL.GL_TRIANGLES, 0, self.vertex_count)
        GL.glBindVertexArray(0)

    def cleanup(self):
        """Release the GL objects while the context is still current."""
        self.makeCurrent()
        for vao in (self.tri_vao, self.bg_vao):
            if vao is not None:
                GL.glDeleteVertexArrays(1, [vao])
        for buffer in (self.tri_vbo, self.bg_vbo, self.bg_ebo):
            if buffer is not None:
                GL.glDeleteBuffers(1, [buffer])
        if self.program is not None:
            GL.glDeleteProgram(self.program)
        self.tri_vao = self.tri_vbo = None
        self.bg_vao = self.bg_vbo = self.bg_ebo = None
        self.program = None
        self.doneCurrent()
        logging.info("Released OpenGL resources.")


class SierpinskiApp(QMainWindow):
    def __init__(self, settings):
        super().__init__()
        self.settings = settings

        stream = generate(settings.a, settings.b, settings.c, settings.max_depth)
        self.vertices = to_vertex_buffer(stream)
        self.vertex_count = len(stream)

        self.init_ui()

    def init_ui(self):
        self.setWindowTitle(self.settings.title)
        self.resize(*self.settings.resolution)

        self.gl_widget = SierpinskiWidget(self.vertices, self.settings)
        self.gl_widget.failed.connect(self.on_gl_failure)
        self.setCentralWidget(self.gl_widget)

        status_label = QLabel(
            f"Depth {self.settings.max_depth}  |  {self.vertex_count} vertices  |  {len(self.vertices)} floats"
        )
        status_label.setFont(get_font())
        self.statusBar().addPermanentWidget(status_label)
        self.update_interface_color()

    def update_interface_color(self):
        """Color the window chrome from the clear color and the deepest triangle color."""
        deepest = depth_color(self.settings.max_depth, self.settings.max_depth)
        variables = get_stylesheet_variables(
            self.settings.clear_color,
            astuple(deepest),
            astuple(depth_color(0, self.settings.max_depth)),
        )
        self.setStyleSheet(get_stylesheet().format(**variables))

    def on_gl_failure(self, message):
        logging.error(message)
        QTimer.singleShot(0, lambda: QApplication.instance().exit(1))

    def keyPressEvent(self, event):
        """Handle key press events."""
        if event.key() == Qt.Key_Escape:
            logging.info("Escape pressed, closing window.")
            self.close()
        else:
            super().keyPressEvent(event)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_file)
    settings = resolve_settings(args)
    logging.info(f"Starting viewer with {settings}")

    set_default_surface_format()
    # options were consumed above, Qt only gets the program name
    app = QApplication(sys.argv[:1])
    main_window = SierpinskiApp(settings)
    main_window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
