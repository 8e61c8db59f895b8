from PyQt5.QtGui import QFont


def get_font():
    return QFont("FreeSans", 10)


def get_stylesheet():
    return """
    QMainWindow {{
        background-color: rgb({r_bg}, {g_bg}, {b_bg});
    }}
    QStatusBar {{
        color: rgb({r_text}, {g_text}, {b_text});
        background-color: rgb({r_bg}, {g_bg}, {b_bg});
        border-top: 1px solid rgb({r_border}, {g_border}, {b_border});
    }}
    QStatusBar QLabel {{
        border: none;
    }}
    """


def to_rgb(color):
    return [int(round(c * 255)) for c in color[:3]]


def get_stylesheet_variables(clear_color, text_color, border_color):
    """Map float colors to the 0-255 channel variables the stylesheet template uses."""
    r_bg, g_bg, b_bg = to_rgb(clear_color)
    r_text, g_text, b_text = to_rgb(text_color)
    r_border, g_border, b_border = to_rgb(border_color)
    return {
        "r_bg": r_bg, "g_bg": g_bg, "b_bg": b_bg,
        "r_text": r_text, "g_text": g_text, "b_text": b_text,
        "r_border": r_border, "g_border": g_border, "b_border": b_border,
    }
