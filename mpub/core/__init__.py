"""Core types: results, exit codes, configuration and project detection."""

from .config import Config, ConfigError, Coordinates, load_config
from .errors import ErrorCode
from .project import Project, ProjectError, detect_project
from .properties import PropertyStore, load_property_store
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # config
    "Config",
    "ConfigError",
    "Coordinates",
    "load_config",
    # errors
    "ErrorCode",
    # project
    "Project",
    "ProjectError",
    "detect_project",
    # properties
    "PropertyStore",
    "load_property_store",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]
