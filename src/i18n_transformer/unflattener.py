"""Reconstruction of nested trees from dotted-path maps."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from .config import TransformOptions
from .paths import canonical_segment, is_index, split_path, validate_segments
from .types import ConflictingSchemaError, MalformedPathError, NodeKind


Address = Tuple[str, ...]


@dataclass
class PathNode:
    """A node of the tree being built, addressed by its full path."""
    children: Dict[str, None] = field(default_factory=dict)
    # First flat path that used this node as a mapping / as a sequence
    container_paths: Dict[NodeKind, str] = field(default_factory=dict)
    has_value: bool = False
    value: Any = None
    value_path: Optional[str] = None
    kind: NodeKind = NodeKind.UNSET


class Unflattener:
    """
    Rebuilds a nested tree from a FlatMap.

    Works in three passes: every path is registered in an index of nodes
    keyed by full path, each node's kind is then resolved once from the
    kinds of its child segments, and only then is the tree materialized.
    A prefix used both as a mapping and as a sequence is therefore detected
    before anything is written.
    """

    def __init__(self, options: Optional[TransformOptions] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the unflattener.

        Args:
            options: Optional TransformOptions (malformed path and root policies)
            logger: Optional logger instance
        """
        self.options = options or TransformOptions()
        self.logger = logger or logging.getLogger(__name__)

    def unflatten(self, flat_map: Union[Mapping, Iterable[Tuple[str, Any]]]) -> Any:
        """
        Reconstruct the tree described by a FlatMap.

        Args:
            flat_map: Mapping of dotted paths to scalar values, or an
                iterable of (path, value) pairs processed in order

        Returns:
            dict or list tree; an empty input yields an empty dict

        Raises:
            MalformedPathError: If a path has an empty segment or an index
                above max_index, and the policy is "raise"
            ConflictingSchemaError: If a prefix is used as more than one
                kind of node
        """
        items = flat_map.items() if isinstance(flat_map, Mapping) else flat_map
        nodes = self._collect(items)
        self._resolve(nodes)
        return self._materialize(nodes, ())

    def _collect(self, items: Iterable[Tuple[str, Any]]) -> Dict[Address, PathNode]:
        entries = []
        for raw_path, value in items:
            segments = split_path(raw_path)
            if not segments:
                self.logger.debug("Skipping entry with empty path")
                continue

            path = str(raw_path).strip()
            try:
                validate_segments(path, segments, self.options.max_index)
            except MalformedPathError as e:
                if not self.options.skip_malformed:
                    raise
                self.logger.warning(f"Skipping malformed path: {e}")
                continue
            entries.append((path, segments, value))

        # Top-level indices stay verbatim unless the root is a sequence
        root_is_sequence = all(is_index(segments[0]) for _, segments, _ in entries)

        nodes: Dict[Address, PathNode] = {(): PathNode()}
        for path, segments, value in entries:
            address = tuple(
                canonical_segment(segment) if depth or root_is_sequence else segment
                for depth, segment in enumerate(segments)
            )
            for depth, segment in enumerate(address):
                parent = nodes.setdefault(address[:depth], PathNode())
                parent.children.setdefault(segment)
                kind = NodeKind.SEQUENCE if is_index(segment) else NodeKind.MAPPING
                parent.container_paths.setdefault(kind, path)

            leaf = nodes.setdefault(address, PathNode())
            if leaf.has_value:
                self.logger.debug(f"'{path}' overwrites value set by '{leaf.value_path}'")
            leaf.has_value = True
            leaf.value = "" if value is None else value
            leaf.value_path = path

        return nodes

    def _resolve(self, nodes: Dict[Address, PathNode]) -> None:
        for address, node in nodes.items():
            prefix = ".".join(address)
            kinds = node.container_paths

            if node.has_value and kinds:
                other = next(iter(kinds.values()))
                raise ConflictingSchemaError(
                    f"Conflicting schema at '{prefix}': '{node.value_path}' sets a value "
                    f"but '{other}' uses it as a container",
                    prefix,
                    [node.value_path, other],
                )

            if len(kinds) > 1:
                paths = [kinds[NodeKind.MAPPING], kinds[NodeKind.SEQUENCE]]
                if address or self.options.strict_root:
                    raise ConflictingSchemaError(
                        f"Conflicting schema at '{prefix or '<root>'}': '{paths[0]}' uses it as a "
                        f"mapping but '{paths[1]}' uses it as a sequence",
                        prefix,
                        paths,
                    )
                self.logger.warning(
                    f"Top-level paths mix indices and names ('{paths[1]}', '{paths[0]}'); "
                    "keeping the root as a mapping"
                )
                node.kind = NodeKind.MAPPING
            elif kinds:
                node.kind = next(iter(kinds))
            elif node.has_value:
                node.kind = NodeKind.SCALAR

    def _materialize(self, nodes: Dict[Address, PathNode], address: Address) -> Any:
        node = nodes[address]

        if node.kind == NodeKind.SCALAR:
            return node.value

        if node.kind == NodeKind.SEQUENCE:
            # Holes left by sparse indices stay None (JSON null)
            items = [None] * (max(int(segment) for segment in node.children) + 1)
            for segment in node.children:
                items[int(segment)] = self._materialize(nodes, address + (segment,))
            return items

        return {
            segment: self._materialize(nodes, address + (segment,))
            for segment in node.children
        }


def unflatten(flat_map: Union[Mapping, Iterable[Tuple[str, Any]]],
              options: Optional[TransformOptions] = None) -> Any:
    """Unflatten ``flat_map`` with a default Unflattener."""
    return Unflattener(options).unflatten(flat_map)
