# topmark:header:start
#
#   project      : Pressroom
#   file         : publisher.py
#   file_relpath : src/pressroom/publisher.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Publisher facade: resolve settings, read, transform and write in one call.

Example:
    ```python
    from pressroom.publisher import publish

    result = publish(Path("notes.txt"), writer="markdown", overrides={"doctitle": "no"})
    print(result.output)
    ```
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pressroom.config.logging import get_logger
from pressroom.config.resolver import InvalidValuePolicy, SettingsResolver
from pressroom.document.source import as_source
from pressroom.readers.base import read_document
from pressroom.registry import get_reader, get_writer
from pressroom.writers.base import write_document

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from pathlib import Path

    from pressroom.config.logging import PressroomLogger
    from pressroom.config.model import Settings
    from pressroom.config.resolver import FallbackPolicy
    from pressroom.core.errors import Condition
    from pressroom.core.reporter import Reporter
    from pressroom.document.nodes import Document
    from pressroom.document.source import Source
    from pressroom.transforms.base import CreationCounter
    from pressroom.writers.base import Destination, Writer

logger: PressroomLogger = get_logger(__name__)


@dataclass(frozen=True)
class PublishResult:
    """Outcome of one publishing run.

    Attributes:
        output (str): The writer's full output.
        document (Document): The transformed document.
        worst (Condition | None): Most severe recovered condition (transform or
            visitor), or None for a clean run.
        settings (Settings): The settings the run used.
        writer (Writer): The writer instance, still attached to ``document``
            (for `pressroom.writers.base.write_part`).
    """

    output: str
    document: Document
    worst: Condition | None
    settings: Settings
    writer: Writer


def publish(
    source: Any,
    *,
    reader: str = "lines",
    writer: str = "text",
    destination: Destination = None,
    settings: Settings | None = None,
    overrides: Mapping[str, Any] | None = None,
    config_files: Iterable[Path | str] = (),
    no_config: bool = False,
    policy: FallbackPolicy = InvalidValuePolicy.USE_DEFAULT,
    counter: CreationCounter | None = None,
    reporter: Reporter | None = None,
) -> PublishResult:
    """Publish ``source`` with the named reader and writer.

    Args:
        source: A `Source`, a `Path`, in-memory text, a line sequence or a stream.
        reader: Registered reader name.
        writer: Registered writer name.
        destination: Where to deliver the output (path, stream or None).
        settings: Pre-resolved settings; when given, no resolution happens.
        overrides: Highest-precedence option values.
        config_files: Explicit configuration files merged after discovery.
        no_config: Skip the standard and document-specific configuration files.
        policy: Handling of invalid configuration values.
        counter: Creation counter for the transform scheduler.
        reporter: Error-reporting destination for transform conditions.

    Returns:
        PublishResult: Output, document, worst recovered condition and settings.

    Raises:
        KeyError: If the reader or writer name is unknown.
        ConfigError: If configuration resolution fails.
        TransformHalt: If a transform condition reaches the halt-level.
    """
    reader_cls = get_reader(reader)
    writer_cls = get_writer(writer)
    src: Source = as_source(source)

    if settings is None:
        resolver = SettingsResolver(policy=policy)
        settings = resolver.resolve(
            src.path,
            extra_config_files=config_files,
            overrides=overrides,
            no_config=no_config,
        )
    for diagnostic in settings.diagnostics:
        logger.debug("Configuration diagnostic: %s", diagnostic.message)

    document: Document = read_document(
        src, reader_cls(), settings, counter=counter, reporter=reporter
    )
    writer_obj: Writer = writer_cls(settings)
    output: str = write_document(writer_obj, document, destination)

    recovered: list[Condition] = [*document.conditions, *writer_obj.conditions]
    worst: Condition | None = max(recovered, key=lambda c: c.severity, default=None)
    logger.info(
        "Published %s with %s/%s (%d recovered condition(s))",
        src.name,
        reader,
        writer,
        len(recovered),
    )
    return PublishResult(
        output=output, document=document, worst=worst, settings=settings, writer=writer_obj
    )
