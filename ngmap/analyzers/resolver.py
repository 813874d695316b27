"""Component containment derived from selector-in-template matching."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Iterator, List, Mapping, Set, Tuple

from ..models import ComponentRecord, TreeLine


@dataclass(frozen=True)
class ComponentGraph:
    """Immutable parent -> children mapping over registry order."""

    order: Tuple[str, ...]
    children: Mapping[str, Tuple[str, ...]]

    def children_of(self, name: str) -> Tuple[str, ...]:
        return self.children.get(name, ())

    def roots(self) -> List[str]:
        """Names that no other component lists as a child."""
        contained: Set[str] = set()
        for parent, kids in self.children.items():
            contained.update(kid for kid in kids if kid != parent)
        return [name for name in self.order if name not in contained]

    def walk(self) -> List[TreeLine]:
        """Pre-order walk from every root, then from anything still unseen.

        Each traversal keeps its own visited set, so cycles end the branch
        instead of recursing forever. Components reachable only through a
        cycle get a traversal of their own, which keeps every component in
        the output at least once.

        A component shared by two parents under the same root (a diamond) is
        printed once, beneath whichever parent comes first in registry order.
        Its second parent still lists it in ``children``; only the printed
        tree omits the repeat. Tracking the ancestor path instead would
        repeat diamond children, but it would also print both members of a
        cycle twice when they hang off a common parent.
        """
        lines: List[TreeLine] = []
        emitted: Set[str] = set()
        for root in self.roots():
            lines.extend(self._walk_from(root, emitted))
        for name in self.order:
            if name not in emitted:
                lines.extend(self._walk_from(name, emitted))
        return lines

    def apply(self, components: Mapping[str, ComponentRecord]) -> Dict[str, ComponentRecord]:
        """Return copies of ``components`` with their child lists filled in."""
        return {
            name: replace(record, children=list(self.children_of(name)))
            for name, record in components.items()
        }

    def _walk_from(self, root: str, emitted: Set[str]) -> Iterator[TreeLine]:
        visited: Set[str] = set()
        stack: List[Tuple[str, int]] = [(root, 0)]
        while stack:
            name, depth = stack.pop()
            if name in visited:
                continue
            visited.add(name)
            emitted.add(name)
            yield TreeLine(name=name, depth=depth)
            for child in reversed(self.children_of(name)):
                if child in self.children and child not in visited:
                    stack.append((child, depth + 1))


def selector_used_in(selector: str, template: str) -> bool:
    """Plain substring test; an empty selector never matches."""
    return bool(selector) and selector in template


def resolve(components: Mapping[str, ComponentRecord]) -> ComponentGraph:
    """Compute containment for every ordered (parent, child) pair, parent != child."""
    names = tuple(components)
    children: Dict[str, Tuple[str, ...]] = {}
    for parent_name in names:
        template = components[parent_name].template
        children[parent_name] = tuple(
            child_name
            for child_name in names
            if child_name != parent_name
            and selector_used_in(components[child_name].selector, template)
        )
    return ComponentGraph(order=names, children=children)


__all__ = ["ComponentGraph", "resolve", "selector_used_in"]
