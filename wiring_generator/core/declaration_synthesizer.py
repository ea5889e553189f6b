"""Build ``Binding`` values and render them as Kotlin DI declarations.

Two idioms are supported:

AnnotationBinding (Hilt / Dagger)::

    @Binds
    abstract fun bindUserRepository(repositoryImpl: UserRepositoryImpl): UserRepository

DslRegistration (Koin)::

    single<UserRepository> { UserRepositoryImpl(get()) }

Rendering is plain text substitution; qualified names are only split into
package + simple name, never resolved.
"""

from __future__ import annotations

from collections.abc import Iterable

from .models import Binding, Style

INDENT = "    "
BINDS_ANNOTATION = "@Binds"

_SEPARATORS: dict[Style, str] = {
    Style.ANNOTATION_BINDING: "\n\n",
    Style.DSL_REGISTRATION: "\n",
}


def simple_name(qualified_name: str) -> str:
    """'com.acme.data.UserRepositoryImpl' -> 'UserRepositoryImpl'."""
    return qualified_name.rsplit(".", 1)[-1]


def normalize_signature(text: str) -> str:
    """Collapse whitespace runs so signatures compare regardless of layout."""
    return " ".join(text.split())


def separator_for(style: Style) -> str:
    """Text placed between two rendered declarations of a style."""
    return _SEPARATORS[style]


def annotation_binding(
    interface_fqn: str,
    implementation_fqn: str,
    param_name: str,
    name: str | None = None,
) -> Binding:
    """Binding rendered as an abstract ``@Binds`` function.

    Args:
        interface_fqn: Qualified interface (return type).
        implementation_fqn: Qualified implementation (sole parameter type).
        param_name: Parameter name, e.g. 'repositoryImpl'.
        name: Suffix of the ``bind`` function; defaults to the interface name.
    """
    iface = simple_name(interface_fqn)
    impl = simple_name(implementation_fqn)
    signature = (
        f"abstract fun bind{name or iface}({param_name}: {impl}): {iface}"
    )
    declaration = f"{INDENT}{BINDS_ANNOTATION}\n{INDENT}{signature}"
    return Binding(interface_fqn, implementation_fqn, signature, declaration)


def dsl_binding(interface_fqn: str, implementation_fqn: str) -> Binding:
    """Binding rendered as a Koin ``single<Interface> { Impl(get()) }`` line."""
    iface = simple_name(interface_fqn)
    impl = simple_name(implementation_fqn)
    signature = normalize_signature(f"single<{iface}> {{ {impl}(get()) }}")
    return Binding(interface_fqn, implementation_fqn, signature, INDENT + signature)


def dsl_factory_binding(type_fqn: str, dependency_fqns: Iterable[str] = ()) -> Binding:
    """Binding for a concrete class registered without an interface.

    Used for use cases: ``single { GetUser(get(), get()) }`` with one ``get()``
    per constructor dependency. The dependencies are imported alongside the type.
    """
    dependencies = tuple(dependency_fqns)
    args = ", ".join("get()" for _ in dependencies)
    signature = normalize_signature(f"single {{ {simple_name(type_fqn)}({args}) }}")
    return Binding(
        type_fqn,
        type_fqn,
        signature,
        INDENT + signature,
        extra_import_paths=dependencies,
    )


def sort_bindings(bindings: Iterable[Binding]) -> list[Binding]:
    """Order bindings deterministically so regenerated files diff cleanly."""
    return sorted(bindings, key=lambda b: b.signature)


def render(bindings: Iterable[Binding], style: Style) -> str:
    """Render bindings in the given order, joined by the style separator."""
    return separator_for(style).join(b.declaration_text for b in bindings)
