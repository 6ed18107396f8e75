"""Render the generated project's files from a ``ResolvedConfig``.

Files come from the Jinja2 templates shipped in ``c_init/templates``;
compiler flags are assembled here since they depend on both the compiler
and the strictness level.
"""

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .options import Compiler, ResolvedConfig, Strictness
from .scaffold import RenderedFile

_TEMPLATE_DIR = Path(__file__).parent / "templates"

FLAGS_LOOSE_BASE = ["-std=c2x", "-Iinclude", "-Wall", "-Wextra"]
FLAGS_STRICT_COMMON = [
    "-Werror",
    "-Wpedantic",
    "-Wcast-align",
    "-Wpointer-arith",
    "-Wmissing-prototypes",
    "-Wstrict-prototypes",
    "-Wsign-conversion",
    "-Wswitch-enum",
    "-Wconversion",
    "-Wcast-qual",
    "-Wshadow",
]
FLAGS_STRICTEST_COMMON = [
    "-Wundef",
    "-Wformat=2",
    "-Wfloat-equal",
    "-Wswitch-default",
    "-Wdouble-promotion",
]
FLAGS_CLANG_SYSTEM_INCLUDES = ["-isystem/opt/homebrew/include", "-isystem/usr/local/include"]
FLAGS_CLANG_STRICTEST_EXTRA = ["-Wstrict-overflow=5"]
FLAGS_GCC_STRICT_EXTRA = ["-Wlogical-op", "-Wjump-misses-init"]
FLAGS_GCC_STRICTEST_EXTRA = [
    "-Wstrict-overflow=2",
    "-Wduplicated-cond",
    "-Wduplicated-branches",
    "-Wrestrict",
    "-Wnull-dereference",
    "-Wjump-misses-init",
]
# tests/ is compiled from inside the tests directory by clangd
FLAGS_TEST_INCLUDE = ["-I../include", "-I.", "-isystem", "./test-deps"]


def compile_flags(compiler: Compiler, strictness: Strictness) -> list[str]:
    if compiler is Compiler.CLANG:
        loose = FLAGS_LOOSE_BASE + FLAGS_CLANG_SYSTEM_INCLUDES
        strict = loose + FLAGS_STRICT_COMMON
        strictest = strict + FLAGS_STRICTEST_COMMON + FLAGS_CLANG_STRICTEST_EXTRA
    else:
        loose = list(FLAGS_LOOSE_BASE)
        strict = loose + FLAGS_STRICT_COMMON + FLAGS_GCC_STRICT_EXTRA
        strictest = strict + FLAGS_STRICTEST_COMMON + FLAGS_GCC_STRICTEST_EXTRA
    return {
        Strictness.LOOSE: loose,
        Strictness.STRICT: strict,
        Strictness.STRICTEST: strictest,
    }[strictness]


def flags_for_tests(flags: list[str]) -> list[str]:
    result: list[str] = []
    for flag in flags:
        if flag == "-Iinclude":
            result.extend(FLAGS_TEST_INCLUDE)
        else:
            result.append(flag)
    return result


def _c_string_filter(value: str) -> str:
    """Escape a value for use inside a C string literal."""
    return value.replace("\\", "\\\\").replace("\"", "\\\"")


class TemplateRenderer:
    """Jinja2 environment over the packaged templates."""

    def __init__(self, template_dir: str | Path | None = None) -> None:
        self.template_dir = Path(template_dir) if template_dir is not None else _TEMPLATE_DIR
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        self.env.filters["c_string"] = _c_string_filter

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        return self.env.get_template(template_path).render(**context)


def project_context(config: ResolvedConfig) -> dict[str, Any]:
    return {
        "name": config.name,
        "slug": config.slug,
        "cc": config.actual_compiler,
        "compiler": config.compiler.value,
        "strictness": config.strictness.value,
        "linter_strictness": config.linter_strictness.value,
        "tests": not config.skip_tests,
        "hello": not config.skip_hello,
    }


def render_project(config: ResolvedConfig, renderer: TemplateRenderer | None = None) -> list[RenderedFile]:
    """Produce every generated file as (relative path, content) pairs.

    The vendored test header is not included; it is fetched separately and
    lands at ``vendor.HEADER_PATH``.
    """
    renderer = renderer or TemplateRenderer()
    context = project_context(config)
    flags = compile_flags(config.compiler, config.strictness)

    files: list[RenderedFile] = []
    if not config.skip_hello:
        files.append(RenderedFile("src/main.c", renderer.render("main.c.j2", context)))
    files.append(RenderedFile("Makefile", renderer.render("Makefile.j2", context)))
    files.append(RenderedFile("compile_flags.txt", "\n".join(flags) + "\n"))
    files.append(RenderedFile(".clang-tidy", renderer.render("clang-tidy.yaml.j2", context)))
    files.append(RenderedFile("README.md", renderer.render("README.md.j2", context)))
    if not config.skip_tests:
        files.append(RenderedFile("tests/test_basic.c", renderer.render("test_basic.c.j2", context)))
        files.append(RenderedFile("tests/compile_flags.txt", "\n".join(flags_for_tests(flags)) + "\n"))
    return files
