"""Goal-driven custom meal plan generation."""

__version__ = "0.1.0"
