"""
Operation registry for pixtone.

Maps operation names, as used in recipes and on the command line, to the
functions that implement them.

To add a new operation:
1. Write a function with signature: func(image: RasterImage, **params, progress=None) -> None
2. Register it with the @register_operation decorator

Every operation receives:
- image: RasterImage, modified in place
- progress: ProgressReporter or None
- **params: Operation parameters from the recipe step
"""

import inspect
from typing import Any, Callable, Dict

from pixtone.core.base import ProgressReporter
from pixtone.core.image import RasterImage
from pixtone.processing import adjust, color, geometry

# Registry of available operations
_OPERATIONS: Dict[str, Dict[str, Any]] = {}


def register_operation(name: str, description: str = ""):
    """Decorator to register an image operation."""
    def decorator(func: Callable):
        _OPERATIONS[name] = {
            'func': func,
            'description': description,
        }
        return func
    return decorator


def get_operations() -> list:
    """Return list of available operation names."""
    return list(_OPERATIONS.keys())


def describe_operations() -> dict[str, str]:
    """Return a mapping of operation name to description."""
    return {name: entry['description'] for name, entry in _OPERATIONS.items()}


def get_operation(name: str) -> Callable:
    """Get an operation function by name."""
    if name not in _OPERATIONS:
        raise ValueError(f"Unknown operation: {name}. Available: {get_operations()}")
    return _OPERATIONS[name]['func']


def check_params(name: str, params: dict[str, Any]) -> None:
    """
    Check that `params` match the keyword arguments of an operation.

    Raises:
        ValueError: If the operation is unknown, or a parameter is
            missing or not accepted by it
    """
    func = get_operation(name)
    try:
        inspect.signature(func).bind(None, progress=None, **params)
    except TypeError as e:
        raise ValueError(f"Invalid parameters for operation '{name}': {e}") from e


def apply_operation(
    name: str,
    image: RasterImage,
    progress: ProgressReporter | None = None,
    **params,
) -> None:
    """Apply a named operation to an image."""
    func = get_operation(name)
    check_params(name, params)
    func(image, progress=progress, **params)


# =============================================================================
# Built-in Operations
# =============================================================================

_BUILTINS = (
    ("hue", adjust.hue_shift, "Rotate hue by `degrees`"),
    ("saturation", adjust.adjust_saturation, "Saturate or desaturate by `amount` (-100 ~ 100)"),
    ("decolorize", adjust.decolorize,
     "Grayscale with per-color weights `red`, `yellow`, `green`, `cyan`, `blue`, `magenta`"),
    ("brightness_to_alpha", adjust.brightness_to_alpha,
     "Turn opaque pixels into black with brightness-derived transparency"),
    ("brightness", color.brightness, "Brighten or darken by `amount` (-100 ~ 100)"),
    ("contrast", color.contrast, "Raise or lower contrast by `amount` (-100 ~ 100)"),
    ("colorize", color.colorize, "Add `red`, `green`, `blue` (0 ~ 255) to every pixel"),
    ("flip_horizontal", geometry.flip_horizontal, "Mirror left to right"),
    ("flip_vertical", geometry.flip_vertical, "Mirror top to bottom"),
    ("rotate_left", geometry.rotate_left, "Rotate 90 degrees counter-clockwise"),
    ("rotate_right", geometry.rotate_right, "Rotate 90 degrees clockwise"),
    ("resize", geometry.resize, "Bicubic resample to `width` x `height`"),
    ("tile", geometry.tile, "Repeat the image to fill `width` x `height`"),
)

for _name, _func, _description in _BUILTINS:
    register_operation(_name, _description)(_func)
