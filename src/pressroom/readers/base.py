# topmark:header:start
#
#   project      : Pressroom
#   file         : base.py
#   file_relpath : src/pressroom/readers/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Reader boundary: turn a `Source` into a transformed `Document`.

`read_document` always finishes by running the transform scheduler with the
reader's declared transforms, also for readers that declare none.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from pressroom.config.logging import get_logger
from pressroom.config.model import default_settings
from pressroom.document.nodes import Document
from pressroom.document.source import as_source
from pressroom.transforms.scheduler import TransformScheduler

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path
    from typing import IO

    from pressroom.config.logging import PressroomLogger
    from pressroom.config.model import Settings
    from pressroom.config.registry import OptionSpec
    from pressroom.core.reporter import Reporter
    from pressroom.document.source import Source
    from pressroom.transforms.base import CreationCounter, TransformSpec

    SourceLike = Source | Path | str | Sequence[str] | IO[str]

logger: PressroomLogger = get_logger(__name__)


class Reader:
    """Base class for readers.

    Attributes:
        name (str): Registry name.
        transforms (tuple[TransformSpec, ...]): Specs run after parsing.
        settings_spec (tuple[OptionSpec, ...]): Options the reader itself reads.
    """

    name: ClassVar[str] = "base"
    transforms: ClassVar[tuple[TransformSpec, ...]] = ()
    settings_spec: ClassVar[tuple[OptionSpec, ...]] = ()

    def parse(self, source: Source, document: Document) -> None:
        """Populate ``document`` from ``source``."""
        raise NotImplementedError

    def get_transforms(self) -> list[TransformSpec]:
        """Return the transform specs to run after parsing."""
        return list(self.transforms)

    @classmethod
    def option_specs(cls) -> tuple[OptionSpec, ...]:
        """Return the reader's options followed by those of its transform classes."""
        specs: list[OptionSpec] = list(cls.settings_spec)
        for spec in cls.transforms:
            specs.extend(getattr(spec, "settings_spec", ()))
        return tuple(specs)


def new_document(source: SourceLike, settings: Settings | None = None) -> Document:
    """Return an empty document for ``source``."""
    src: Source = as_source(source)
    return Document(src.name, settings if settings is not None else default_settings())


def read_document(
    source: SourceLike,
    reader: Reader,
    settings: Settings | None = None,
    *,
    counter: CreationCounter | None = None,
    reporter: Reporter | None = None,
) -> Document:
    """Parse ``source`` with ``reader`` and run the reader's transforms.

    Raises:
        TransformHalt: When a transform condition reaches the halt-level.
    """
    src: Source = as_source(source)
    document: Document = new_document(src, settings)
    reader.parse(src, document)
    logger.debug("%s parsed %s into %d node(s)", reader.name, src.name, len(document))
    scheduler = TransformScheduler(document, document.settings, counter=counter, reporter=reporter)
    scheduler.run(reader.get_transforms())
    return document
