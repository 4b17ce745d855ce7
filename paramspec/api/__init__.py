"""API Layer: FastAPI glue for declared parameters and paramspec errors."""

from paramspec.api.dependencies import body_dependency, parameters_dependency
from paramspec.api.error_handlers import register_error_handlers

__all__ = ["body_dependency", "parameters_dependency", "register_error_handlers"]
