"""Skeleton templates for generated DI modules.

Public API:
    skeleton_for: Skeleton text for a declaration style and module variant
    TemplateProvider: Object wrapper used by the wiring pipelines
"""

from .templates import (
    BINDINGS_PLACEHOLDER,
    IMPORTS_PLACEHOLDER,
    PACKAGE_PLACEHOLDER,
    VARIANTS,
    TemplateProvider,
    get_hilt_module_template,
    get_koin_module_template,
    module_file_name,
    skeleton_for,
    skeleton_intrinsic_imports,
)

__all__ = [
    "BINDINGS_PLACEHOLDER",
    "IMPORTS_PLACEHOLDER",
    "PACKAGE_PLACEHOLDER",
    "VARIANTS",
    "TemplateProvider",
    "get_hilt_module_template",
    "get_koin_module_template",
    "module_file_name",
    "skeleton_for",
    "skeleton_intrinsic_imports",
]
