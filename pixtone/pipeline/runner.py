"""
Recipe runner: load an image, apply recipe steps in order, save it.
"""

from dataclasses import dataclass, field
from pathlib import Path

from pixtone.core.base import ConsoleProgress, ProgressReporter
from pixtone.core.config import Recipe
from pixtone.core.image import RasterImage, load_image, save_image
from pixtone.pipeline.operations import apply_operation, check_params


@dataclass
class RecipeResult:
    """Outcome of running a recipe."""
    output_path: Path
    width: int
    height: int
    steps_applied: list[str] = field(default_factory=list)


def apply_recipe(
    recipe: Recipe,
    image: RasterImage,
    progress: ProgressReporter | None = None,
) -> list[str]:
    """
    Apply every step of a recipe to an image in place.

    Unknown operation names and bad parameters are rejected before any
    step runs.

    Returns:
        Names of the steps applied, in order
    """
    for step in recipe.steps:
        check_params(step.name, step.params)

    applied = []
    for step in recipe.steps:
        apply_operation(step.name, image, progress=progress, **step.params)
        applied.append(step.name)
    return applied


def run_recipe(
    recipe: Recipe,
    input_path: str | Path | None = None,
    output_path: str | Path | None = None,
    progress: ProgressReporter | None = None,
) -> RecipeResult:
    """
    Run a recipe from file to file.

    Args:
        recipe: Recipe to run
        input_path: Image to read (default: recipe.input)
        output_path: Image to write (default: recipe.output)
        progress: Reporter; defaults to console output when the recipe
            is verbose

    Raises:
        ValueError: If no input/output is given, or a step name or its
            parameters are invalid
    """
    input_path = input_path or recipe.input
    output_path = output_path or recipe.output
    if not input_path:
        raise ValueError("No input image given (argument or recipe 'input')")
    if not output_path:
        raise ValueError("No output image given (argument or recipe 'output')")

    for step in recipe.steps:
        check_params(step.name, step.params)

    if progress is None and recipe.global_settings.verbose:
        progress = ConsoleProgress()

    image = load_image(input_path)
    applied = apply_recipe(recipe, image, progress)
    written = save_image(image, output_path, recipe.global_settings.jpeg_quality)

    return RecipeResult(
        output_path=written,
        width=image.width,
        height=image.height,
        steps_applied=applied,
    )
