"""Infrastructure Layer: logging setup. Imported by the composition root only."""
