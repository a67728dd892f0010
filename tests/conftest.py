# topmark:header:start
#
#   project      : Pressroom
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the Pressroom test suite.

Sets up global fixtures and the logging configuration for test runs.

Notes:
    Tests should respect the immutable/mutable settings split:

    - Build settings with `pressroom.config.MutableSettings` (or `make_settings`),
      then `freeze()` into `pressroom.config.Settings` before handing them to
      readers, the scheduler or writers.
    - Do **not** mutate a frozen `Settings`. To tweak one, call
      `Settings.thaw()`, edit the builder, then `freeze()` again.
    - The standard configuration search path is emptied for every test (see
      `isolate_config_search_path`) so a developer's own configuration files
      never leak into results.
"""

from __future__ import annotations

import io
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

# Registers the bundled readers and writers together with their options.
import pressroom.registry  # noqa: F401
from pressroom.config import MutableSettings, logging
from pressroom.config.logging import LOG_LEVEL_ENV_VAR
from pressroom.config.paths import CONFIG_PATH_ENV_VAR
from pressroom.core.reporter import Reporter
from pressroom.document.nodes import Document, NodeKind
from pressroom.transforms.base import Transform

if TYPE_CHECKING:
    from pathlib import Path

    from pressroom.config import Settings
    from pressroom.transforms.base import TransformContext

F = TypeVar("F", bound=Callable[..., object])

DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type."""

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_integration: DecoratorType[Any] = as_typed_mark(pytest.mark.integration)
mark_pipeline: DecoratorType[Any] = as_typed_mark(pytest.mark.pipeline)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)
mark_hypothesis_slow: DecoratorType[Any] = as_typed_mark(pytest.mark.hypothesis_slow)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_pressroom_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure the runtime log level is not forced via env during tests."""
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)


@pytest.fixture(autouse=True)
def isolate_config_search_path(monkeypatch: pytest.MonkeyPatch) -> None:
    """Replace the standard configuration search path with an empty one."""
    monkeypatch.setenv(CONFIG_PATH_ENV_VAR, "")


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE so failing tests show full detail."""
    logging.setup_logging(level=logging.TRACE_LEVEL)


def make_mutable_settings(**overrides: Any) -> MutableSettings:
    """Return a builder holding catalogue defaults plus ``overrides``."""
    m: MutableSettings = MutableSettings.from_defaults()
    if overrides:
        m.apply_overrides(overrides)
    return m


def make_settings(**overrides: Any) -> Settings:
    """Return frozen settings built from catalogue defaults and ``overrides``."""
    return make_mutable_settings(**overrides).freeze()


def make_reporter(settings: Settings) -> tuple[Reporter, io.StringIO]:
    """Return a reporter for ``settings`` writing into an in-memory stream."""
    stream = io.StringIO()
    return Reporter.from_settings(settings, stream=stream), stream


def make_document(paragraphs: int = 1, settings: Settings | None = None) -> Document:
    """Return a document with ``paragraphs`` one-line paragraphs under the root."""
    doc = Document(settings=settings if settings is not None else make_settings())
    for i in range(paragraphs):
        para = doc.append(doc.root, doc.create(NodeKind.PARAGRAPH, line=i + 1))
        doc.append(para, doc.text(f"paragraph {i + 1}\n", line=i + 1))
    return doc


def recording_transform(
    log: list[str],
    label: str,
    priority: int,
    action: Callable[[TransformContext], None] | None = None,
) -> type[Transform]:
    """Build a `Transform` subclass that appends ``label`` to ``log`` when applied.

    ``action`` runs after the label is recorded and may raise a condition or
    schedule further transforms.
    """

    def apply(self: Transform, ctx: TransformContext) -> None:
        log.append(label)
        if action is not None:
            action(ctx)

    return type(
        f"Recording_{label}",
        (Transform,),
        {"default_priority": priority, "apply": apply},
    )


def write_config(path: Path, *lines: str) -> Path:
    """Write a line-format configuration file and return its path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
