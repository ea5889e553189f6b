"""Kotlin module skeletons for generated DI wiring files.

Each skeleton carries three placeholders:

    ${PACKAGE}   package of the DI module
    ${IMPORTS}   sorted import lines (the whole line is dropped when empty)
    ${BINDINGS}  declaration body inside the module container
"""

from __future__ import annotations

from wiring_generator.core.models import Style

PACKAGE_PLACEHOLDER = "${PACKAGE}"
IMPORTS_PLACEHOLDER = "${IMPORTS}"
BINDINGS_PLACEHOLDER = "${BINDINGS}"

VARIANTS: tuple[str, ...] = ("repository", "datasource", "usecase")

# variant -> (class name, Koin property name)
_MODULE_NAMES: dict[str, tuple[str, str]] = {
    "repository": ("RepositoryModule", "repositoryModule"),
    "datasource": ("DataSourceModule", "dataSourceModule"),
    "usecase": ("UseCaseModule", "useCaseModule"),
}


def _module_names(variant: str) -> tuple[str, str]:
    try:
        return _MODULE_NAMES[variant]
    except KeyError:
        known = ", ".join(VARIANTS)
        raise ValueError(f"Unknown module variant '{variant}' (expected: {known})") from None


def get_hilt_module_template(class_name: str) -> str:
    """Generate a Hilt ``@Module`` skeleton.

    Args:
        class_name: Name of the abstract module class (e.g. 'RepositoryModule')

    Returns:
        Skeleton text with package/import/binding placeholders
    """
    return f"""package {PACKAGE_PLACEHOLDER}

import dagger.Binds
import dagger.Module
import dagger.hilt.InstallIn
import dagger.hilt.components.SingletonComponent
{IMPORTS_PLACEHOLDER}

@Module
@InstallIn(SingletonComponent::class)
abstract class {class_name} {{
{BINDINGS_PLACEHOLDER}
}}
"""


def get_koin_module_template(property_name: str) -> str:
    """Generate a Koin ``module {}`` skeleton.

    Args:
        property_name: Name of the top-level ``Module`` value (e.g. 'repositoryModule')

    Returns:
        Skeleton text with package/import/binding placeholders
    """
    return f"""package {PACKAGE_PLACEHOLDER}

import org.koin.core.module.Module
import org.koin.dsl.module
{IMPORTS_PLACEHOLDER}

val {property_name}: Module = module {{
{BINDINGS_PLACEHOLDER}
}}
"""


def skeleton_for(style: Style, variant: str) -> str:
    """Return the skeleton for a declaration style and module variant."""
    class_name, property_name = _module_names(variant)
    if style is Style.ANNOTATION_BINDING:
        return get_hilt_module_template(class_name)
    return get_koin_module_template(property_name)


def module_file_name(variant: str) -> str:
    """'repository' -> 'RepositoryModule.kt'."""
    class_name, _ = _module_names(variant)
    return f"{class_name}.kt"


def skeleton_intrinsic_imports(skeleton: str) -> frozenset[str]:
    """Import lines a skeleton already contains."""
    return frozenset(
        line.strip()
        for line in skeleton.splitlines()
        if line.strip().startswith("import ")
    )


class TemplateProvider:
    """Default skeleton source handed to ``WiringGenerator``."""

    def skeleton_for(self, style: Style, variant: str) -> str:
        return skeleton_for(style, variant)
