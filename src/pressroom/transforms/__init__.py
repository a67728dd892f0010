# topmark:header:start
#
#   project      : Pressroom
#   file         : __init__.py
#   file_relpath : src/pressroom/transforms/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tree-rewriting transforms and the scheduler that runs them."""

from __future__ import annotations

from pressroom.transforms.base import (
    CALLABLE_ORDER,
    CALLABLE_PRIORITY,
    DEFAULT_COUNTER,
    CallableTransform,
    CreationCounter,
    Transform,
    TransformContext,
    TransformSpec,
)
from pressroom.transforms.builtins import DocTitle, FilterMessages, StripComments
from pressroom.transforms.scheduler import TransformScheduler, run_transforms

__all__ = [
    "CALLABLE_ORDER",
    "CALLABLE_PRIORITY",
    "DEFAULT_COUNTER",
    "CallableTransform",
    "CreationCounter",
    "DocTitle",
    "FilterMessages",
    "StripComments",
    "Transform",
    "TransformContext",
    "TransformScheduler",
    "TransformSpec",
    "run_transforms",
]
