"""Static file templates for new projects and modules."""

from .module import ModuleFiles, write_module
from .project import ProjectScaffolder, is_dir_empty
from .renderer import TemplateRenderer

__all__ = [
    "ModuleFiles",
    "ProjectScaffolder",
    "TemplateRenderer",
    "is_dir_empty",
    "write_module",
]
