import logging

import yaml

from sierpinski.datatypes import Point, ViewerSettings

default_settings = ViewerSettings()


def settings_to_dict(settings):
    """Convert ViewerSettings to a dictionary for YAML serialization."""
    return {
        "geometry": {
            "corners": {
                "a": [settings.a.x, settings.a.y, settings.a.z],
                "b": [settings.b.x, settings.b.y, settings.b.z],
                "c": [settings.c.x, settings.c.y, settings.c.z],
            },
            "max_depth": settings.max_depth,
        },
        "window": {
            "title": settings.title,
            "resolution": {
                "width": settings.resolution[0],
                "height": settings.resolution[1],
            },
        },
        "presentation": {
            "clear_color": list(settings.clear_color),
            "wireframe": settings.wireframe,
            "background": settings.background,
        },
    }


def _section(parent, key):
    section = parent.get(key) or {}
    if not isinstance(section, dict):
        raise ValueError(f"Section '{key}' must be a mapping, got {section!r}.")
    return section


def _to_point(name, values):
    if not isinstance(values, (list, tuple)) or len(values) != 3:
        raise ValueError(f"Corner '{name}' must be a list of three numbers, got {values!r}.")
    try:
        return Point(*(float(v) for v in values))
    except (TypeError, ValueError):
        raise ValueError(f"Corner '{name}' must be a list of three numbers, got {values!r}.") from None


def _to_depth(value):
    # bool is an int subclass but never a meaningful depth
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"max_depth must be an integer, got {value!r}.")
    return value


def _to_flag(name, value):
    if not isinstance(value, bool):
        raise ValueError(f"{name} must be true or false, got {value!r}.")
    return value


def _to_resolution(width, height):
    for value in (width, height):
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ValueError(f"Resolution must be two positive integers, got {(width, height)!r}.")
    return (width, height)


def _to_clear_color(values):
    if not isinstance(values, (list, tuple)) or len(values) != 4:
        raise ValueError(f"clear_color must be a list of four numbers, got {values!r}.")
    try:
        return tuple(float(v) for v in values)
    except (TypeError, ValueError):
        raise ValueError(f"clear_color must be a list of four numbers, got {values!r}.") from None


def dict_to_settings(settings_dict):
    """
    Convert a dictionary to a ViewerSettings object.
    Missing sections and keys fall back to the defaults; malformed values raise ValueError.
    """
    settings_dict = settings_dict or {}
    geometry = _section(settings_dict, "geometry")
    corners = _section(geometry, "corners")
    window = _section(settings_dict, "window")
    resolution = _section(window, "resolution")
    presentation = _section(settings_dict, "presentation")

    default = ViewerSettings()
    return ViewerSettings(
        a=_to_point("a", corners["a"]) if "a" in corners else default.a,
        b=_to_point("b", corners["b"]) if "b" in corners else default.b,
        c=_to_point("c", corners["c"]) if "c" in corners else default.c,
        max_depth=_to_depth(geometry.get("max_depth", default.max_depth)),
        resolution=_to_resolution(
            resolution.get("width", default.resolution[0]),
            resolution.get("height", default.resolution[1]),
        ),
        clear_color=_to_clear_color(presentation.get("clear_color", default.clear_color)),
        wireframe=_to_flag("wireframe", presentation.get("wireframe", default.wireframe)),
        background=_to_flag("background", presentation.get("background", default.background)),
        title=str(window.get("title", default.title)),
    )


def load_settings(path):
    """Load viewer settings from a YAML file."""
    with open(path, "r") as file:
        try:
            settings_dict = yaml.safe_load(file)
        except yaml.YAMLError as e:
            raise ValueError(f"Settings file {path} is not valid YAML: {e}") from e
    if settings_dict is not None and not isinstance(settings_dict, dict):
        raise ValueError(f"Settings file {path} must contain a mapping.")
    settings = dict_to_settings(settings_dict)
    logging.info(f"Settings loaded from {path}")
    return settings
