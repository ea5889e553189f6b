"""Tests for reading previously generated DI module files."""

from __future__ import annotations

from pathlib import Path

import pytest

from wiring_generator.core.artifact_parser import extract_signatures, parse
from wiring_generator.core.errors import MalformedExistingArtifactError
from wiring_generator.core.models import ParsedArtifact, Style

_HILT_MODULE = """// Copyright Acme
package com.x.di

import dagger.Binds
import dagger.Module
import com.x.domain.repository.UserRepository

@Module
abstract class RepositoryModule {

    @Binds
    abstract fun bindUserRepository(repositoryImpl: UserRepositoryImpl): UserRepository

    // keep me
}

private const val TAG = "di"
"""

_KOIN_MODULE = """package com.x.di

import org.koin.dsl.module

val repositoryModule: Module = module {
    single<A> { AImpl(get()) }
    factory { Helper() }
}
"""


class TestParse:
    """Structure extraction for both declaration styles."""

    def test_absent_file_is_empty(self) -> None:
        assert parse(None, Style.ANNOTATION_BINDING) == ParsedArtifact.empty()
        assert not ParsedArtifact.empty().exists

    def test_whitespace_only_file_exists_with_empty_body(self) -> None:
        parsed = parse("  \n\n", Style.DSL_REGISTRATION)

        assert parsed.exists
        assert parsed.declaration_body == ""
        assert parsed.imports == frozenset()

    def test_annotation_module(self) -> None:
        parsed = parse(_HILT_MODULE, Style.ANNOTATION_BINDING)

        assert parsed.preamble == "// Copyright Acme\n"
        assert parsed.imports == {
            "import dagger.Binds",
            "import dagger.Module",
            "import com.x.domain.repository.UserRepository",
        }
        assert parsed.declaration_body == (
            "    @Binds\n"
            "    abstract fun bindUserRepository(repositoryImpl: UserRepositoryImpl): UserRepository\n"
            "\n"
            "    // keep me"
        )
        assert parsed.trailer == '\n\nprivate const val TAG = "di"\n'
        assert parsed.source_text == _HILT_MODULE

    def test_dsl_module(self) -> None:
        parsed = parse(_KOIN_MODULE, Style.DSL_REGISTRATION)

        assert parsed.preamble == ""
        assert parsed.declaration_body == (
            "    single<A> { AImpl(get()) }\n    factory { Helper() }"
        )
        assert parsed.trailer == "\n"

    def test_nested_braces_stay_in_body(self) -> None:
        text = "package p\n\nval m: Module = module {\n    single { A(get()) }\n}\n"
        parsed = parse(text, Style.DSL_REGISTRATION)
        assert parsed.declaration_body == "    single { A(get()) }"

    def test_missing_container_raises(self) -> None:
        path = Path("/tmp/RepositoryModule.kt")
        with pytest.raises(MalformedExistingArtifactError, match="abstract class") as exc_info:
            parse("package com.x.di\n\nobject RepositoryModule\n", Style.ANNOTATION_BINDING, path)
        assert exc_info.value.path == path
        assert str(path) in str(exc_info.value)

    def test_unbalanced_braces_raise(self) -> None:
        text = "package com.x.di\n\nval m = module {\n    single<A> { AImpl(get()) }\n"
        with pytest.raises(MalformedExistingArtifactError, match="unbalanced"):
            parse(text, Style.DSL_REGISTRATION)

    def test_marker_of_other_style_is_not_accepted(self) -> None:
        with pytest.raises(MalformedExistingArtifactError):
            parse(_KOIN_MODULE, Style.ANNOTATION_BINDING)


class TestHeader:
    """Text between the import block and the container brace is kept verbatim."""

    def test_annotation_header_includes_module_annotations(self) -> None:
        parsed = parse(_HILT_MODULE, Style.ANNOTATION_BINDING)
        assert parsed.header == "\n@Module\nabstract class RepositoryModule {"

    def test_documentation_above_container(self) -> None:
        text = (
            "package com.x.di\n\n"
            "import org.koin.dsl.module\n\n"
            "/** Repositories of the user feature. */\n"
            '@Suppress("unused")\n'
            "val repositoryModule = module {\n}\n"
        )
        parsed = parse(text, Style.DSL_REGISTRATION)

        assert parsed.header == (
            "\n/** Repositories of the user feature. */\n"
            '@Suppress("unused")\n'
            "val repositoryModule = module {"
        )
        assert parsed.imports == {"import org.koin.dsl.module"}

    def test_header_without_imports_starts_after_package(self) -> None:
        parsed = parse("package p\nval m = module {\n}", Style.DSL_REGISTRATION)

        assert parsed.header == "val m = module {"
        assert parsed.trailer == ""

    def test_absent_and_blank_files_have_no_header(self) -> None:
        assert parse(None, Style.DSL_REGISTRATION).header is None
        assert parse("\n", Style.DSL_REGISTRATION).header is None


class TestExtractSignatures:
    """Candidates count as declared when their text appears in the body."""

    def test_whitespace_is_normalized(self) -> None:
        body = "    @Binds\n    abstract  fun bindA(impl: AImpl):\n        A\n"
        assert extract_signatures(body, ["abstract fun bindA(impl: AImpl): A"]) == {
            "abstract fun bindA(impl: AImpl): A",
        }

    def test_annotation_on_the_same_line(self) -> None:
        body = "    @Binds abstract fun bindA(impl: AImpl): A\n"
        assert extract_signatures(body, ["abstract fun bindA(impl: AImpl): A"]) == {
            "abstract fun bindA(impl: AImpl): A",
        }

    def test_trailing_comment(self) -> None:
        body = "    single<A> { AImpl(get()) } // keep singleton\n    factory { B() }\n"
        assert extract_signatures(
            body,
            ["single<A> { AImpl(get()) }", "factory { B() }", "factory { C() }"],
        ) == {"single<A> { AImpl(get()) }", "factory { B() }"}

    def test_commented_out_declaration_does_not_count(self) -> None:
        body = "    // single<A> { AImpl(get()) }\n"
        assert extract_signatures(body, ["single<A> { AImpl(get()) }"]) == set()

    def test_longer_identifier_does_not_match(self) -> None:
        body = "    abstract fun bindA(impl: AImpl): AX\n"
        assert extract_signatures(body, ["abstract fun bindA(impl: AImpl): A"]) == set()
