"""
Configuration management for pixtone.

Recipes are JSON files listing the operations to apply to an image, in
order. Global settings can also come from environment variables.
"""

import json
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any


@dataclass
class GlobalSettings:
    """Global recipe settings."""
    verbose: bool = False
    jpeg_quality: int = 85


@dataclass
class StepConfig:
    """A single operation in a recipe."""
    name: str
    params: dict[str, Any] = field(default_factory=dict)


@dataclass
class Recipe:
    """
    Main configuration container.
    
    Example:
        recipe = Recipe.load("recipe.json")
        for step in recipe.steps:
            apply_operation(step.name, image, **step.params)
    """
    global_settings: GlobalSettings = field(default_factory=GlobalSettings)
    steps: list[StepConfig] = field(default_factory=list)
    input: str | None = None
    output: str | None = None
    
    @classmethod
    def load(cls, path: str | Path) -> "Recipe":
        """Load a recipe from a JSON file."""
        return load_recipe(path)
    
    def save(self, path: str | Path) -> None:
        """Save the recipe to a JSON file."""
        save_recipe(self, path)
    
    def to_dict(self) -> dict:
        """Convert the recipe to a dictionary."""
        data = {
            "global_settings": asdict(self.global_settings),
            "steps": [asdict(s) for s in self.steps],
        }
        if self.input is not None:
            data["input"] = self.input
        if self.output is not None:
            data["output"] = self.output
        return data


def parse_recipe(data: dict) -> Recipe:
    """
    Build a Recipe from already-parsed JSON data.
    
    Raises:
        ValueError: If a step is malformed
    """
    gs_data = data.get("global_settings", {})
    global_settings = GlobalSettings(
        verbose=bool(gs_data.get("verbose", False)),
        jpeg_quality=int(gs_data.get("jpeg_quality", 85)),
    )
    
    steps = []
    for i, step_data in enumerate(data.get("steps", [])):
        if isinstance(step_data, str):
            steps.append(StepConfig(name=step_data))
            continue
        if not isinstance(step_data, dict) or "name" not in step_data:
            raise ValueError(f"Recipe step {i} must be a name or an object with a 'name' key")
        params = step_data.get("params", {})
        if not isinstance(params, dict):
            raise ValueError(f"Recipe step {i} ('{step_data['name']}'): params must be an object")
        steps.append(StepConfig(name=step_data["name"], params=params))
    
    return Recipe(
        global_settings=global_settings,
        steps=steps,
        input=data.get("input"),
        output=data.get("output"),
    )


def load_recipe(path: str | Path) -> Recipe:
    """
    Load a recipe from a JSON file.
    
    Args:
        path: Path to the JSON recipe file
        
    Returns:
        Parsed Recipe object
        
    Raises:
        FileNotFoundError: If the recipe file doesn't exist
        json.JSONDecodeError: If the JSON is invalid
        ValueError: If a step is malformed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Recipe file not found: {path}")
    
    with open(path, "r") as f:
        data = json.load(f)
    
    return parse_recipe(data)


def save_recipe(recipe: Recipe, path: str | Path) -> None:
    """
    Save a recipe to a JSON file.
    
    Args:
        recipe: Recipe object to save
        path: Output path for the JSON file
    """
    path = Path(path)
    with open(path, "w") as f:
        json.dump(recipe.to_dict(), f, indent=2)


def create_example_recipe(path: str | Path = "recipe.json") -> Recipe:
    """
    Create an example recipe file.
    
    Args:
        path: Output path for the example recipe
        
    Returns:
        The created Recipe object
    """
    recipe = Recipe(
        global_settings=GlobalSettings(verbose=True, jpeg_quality=85),
        steps=[
            StepConfig("hue", {"degrees": 30}),
            StepConfig("saturation", {"amount": 25}),
            StepConfig("contrast", {"amount": 10}),
            StepConfig("resize", {"width": 800, "height": 600}),
        ],
        input="input.png",
        output="output.jpg",
    )
    
    recipe.save(path)
    print(f"Created example recipe: {path}")
    return recipe


def get_env_config(prefix: str = "PIXTONE_") -> dict[str, Any]:
    """
    Get configuration from environment variables.
    
    All environment variables starting with the prefix will be included.
    Variable names are converted to lowercase with the prefix removed.
    
    Example:
        PIXTONE_VERBOSE=true -> {"verbose": "true"}
    """
    config = {}
    for key, value in os.environ.items():
        if key.startswith(prefix):
            config_key = key[len(prefix):].lower()
            config[config_key] = value
    return config


def apply_env_overrides(settings: GlobalSettings, env: dict[str, Any] | None = None) -> GlobalSettings:
    """
    Return a copy of `settings` with environment overrides applied.
    
    Recognised keys: verbose, jpeg_quality.
    """
    if env is None:
        env = get_env_config()
    
    verbose = settings.verbose
    if "verbose" in env:
        verbose = str(env["verbose"]).strip().lower() in ("1", "true", "yes", "on")
    
    jpeg_quality = settings.jpeg_quality
    if "jpeg_quality" in env:
        try:
            jpeg_quality = int(env["jpeg_quality"])
        except ValueError:
            raise ValueError(f"Invalid JPEG quality in environment: {env['jpeg_quality']!r}")
    
    return GlobalSettings(verbose=verbose, jpeg_quality=jpeg_quality)
