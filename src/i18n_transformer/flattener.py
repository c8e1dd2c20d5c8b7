"""Flattening of nested trees into dotted-path maps."""

import logging
from collections.abc import Mapping
from datetime import date, datetime, time
from typing import Any, Optional

from .config import TransformOptions
from .paths import SEPARATOR, is_index, join_path
from .types import FlatMap, MalformedPathError, UnsupportedValueTypeError


SCALAR_TYPES = (str, int, float, bool)


class Flattener:
    """
    Flattens a nested tree of mappings and sequences into a FlatMap.

    Sequence positions become purely numeric path segments, so
    ``{"list": ["a", "b"]}`` flattens to ``{"list.0": "a", "list.1": "b"}``.
    None leaves are emitted as empty strings so every key survives a
    round trip through a spreadsheet.
    """

    def __init__(self, options: Optional[TransformOptions] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the flattener.

        Args:
            options: Optional TransformOptions (unsupported value policy)
            logger: Optional logger instance
        """
        self.options = options or TransformOptions()
        self.logger = logger or logging.getLogger(__name__)

    def flatten(self, tree: Any, prefix: str = "") -> FlatMap:
        """
        Flatten a tree into a mapping of dotted paths to scalar values.

        Args:
            tree: Mapping, sequence or (below the root) scalar value
            prefix: Path of ``tree`` inside a larger tree

        Returns:
            FlatMap with one entry per leaf

        Raises:
            MalformedPathError: If the root is a scalar or a key cannot be
                encoded as a path segment
            UnsupportedValueTypeError: If a leaf has an unsupported type and
                the policy is "reject"
        """
        out: FlatMap = {}
        self._flatten_into(tree, prefix, out)
        return out

    def _flatten_into(self, node: Any, prefix: str, out: FlatMap) -> None:
        if isinstance(node, Mapping):
            if not node:
                self.logger.debug(f"Empty mapping at '{prefix or '<root>'}' has no leaves")
            for name, child in node.items():
                self._flatten_into(child, join_path(prefix, self._check_name(name, prefix)), out)
        elif isinstance(node, (list, tuple)):
            if not node:
                self.logger.debug(f"Empty sequence at '{prefix or '<root>'}' has no leaves")
            for position, child in enumerate(node):
                self._flatten_into(child, join_path(prefix, str(position)), out)
        else:
            if not prefix:
                raise MalformedPathError(
                    f"Root value must be a mapping or a sequence, got {type(node).__name__}",
                    prefix,
                )
            out[prefix] = self._leaf_value(node, prefix)

    def _check_name(self, name: Any, prefix: str) -> str:
        name = str(name)
        if name == "" or SEPARATOR in name:
            path = join_path(prefix, name)
            raise MalformedPathError(
                f"Key '{name}' under '{prefix or '<root>'}' cannot be used as a path segment",
                path,
            )
        if is_index(name):
            raise MalformedPathError(
                f"Key '{name}' under '{prefix or '<root>'}' is all digits and would be read back "
                "as a sequence index",
                join_path(prefix, name),
            )
        return name

    def _leaf_value(self, value: Any, path: str) -> Any:
        if value is None:
            return ""
        if isinstance(value, SCALAR_TYPES):
            return value

        if not self.options.stringify_unsupported:
            raise UnsupportedValueTypeError(
                f"Unsupported value of type {type(value).__name__} at '{path}'",
                path,
                type(value).__name__,
            )

        self.logger.debug(f"Stringifying {type(value).__name__} value at '{path}'")
        if isinstance(value, (datetime, date, time)):
            return value.isoformat()
        return str(value)


def flatten(tree: Any, prefix: str = "", options: Optional[TransformOptions] = None) -> FlatMap:
    """Flatten ``tree`` with a default Flattener."""
    return Flattener(options).flatten(tree, prefix)
