"""
Pipeline module - Named operations, recipes, and the chainable editor.

This module provides:
- Operations registry: Name-to-function lookup used by recipes and the CLI
- ImageEditor: Chainable wrapper around a single image
- Runner: Execute a JSON recipe against an image file
"""

from pixtone.pipeline.operations import (
    register_operation,
    get_operations,
    get_operation,
    check_params,
    describe_operations,
    apply_operation,
)
from pixtone.pipeline.editor import ImageEditor
from pixtone.pipeline.runner import RecipeResult, apply_recipe, run_recipe

__all__ = [
    "register_operation",
    "get_operations",
    "get_operation",
    "check_params",
    "describe_operations",
    "apply_operation",
    "ImageEditor",
    "RecipeResult",
    "apply_recipe",
    "run_recipe",
]
