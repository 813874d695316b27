"""In-memory store for everything the classifier discovers."""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterable, Set

from ..models import ComponentRecord, Declaration, DeclarationKind, PipeRecord


class RegistryFrozenError(RuntimeError):
    """Raised when the registry is mutated after resolution has started."""


class Registry:
    """Holds records keyed by declared name; later duplicates overwrite earlier ones."""

    def __init__(self) -> None:
        self._components: Dict[str, ComponentRecord] = {}
        self._services: Set[str] = set()
        self._modules: Set[str] = set()
        self._pipes: Dict[str, PipeRecord] = {}
        self._routes: Dict[str, str] = {}
        self._dependencies: Dict[str, Set[str]] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True

    def add(self, declaration: Declaration) -> None:
        """Store ``declaration`` in the collection matching its kind."""
        meta = declaration.metadata
        if declaration.kind is DeclarationKind.COMPONENT:
            self.upsert_component(
                ComponentRecord(
                    name=declaration.name,
                    file=declaration.file,
                    selector=meta.get("selector", ""),
                    template=meta.get("template", ""),
                    template_url=meta.get("templateUrl", ""),
                )
            )
        elif declaration.kind is DeclarationKind.SERVICE:
            self.add_service(declaration.name)
        elif declaration.kind is DeclarationKind.MODULE:
            self.add_module(declaration.name)
        elif declaration.kind is DeclarationKind.PIPE:
            self.upsert_pipe(
                PipeRecord(
                    name=declaration.name,
                    file=declaration.file,
                    pipe_name=meta.get("name", ""),
                )
            )

    def upsert_component(self, record: ComponentRecord) -> None:
        self._check_mutable()
        self._components[record.name] = record

    def add_service(self, name: str) -> None:
        self._check_mutable()
        self._services.add(name)

    def add_module(self, name: str) -> None:
        self._check_mutable()
        self._modules.add(name)

    def upsert_pipe(self, record: PipeRecord) -> None:
        self._check_mutable()
        self._pipes[record.name] = record

    def record_route(self, path: str, component: str) -> None:
        self._check_mutable()
        self._routes[path] = component

    def merge_dependencies(self, file_path: str, specifiers: Iterable[str]) -> None:
        self._check_mutable()
        self._dependencies.setdefault(file_path, set()).update(specifiers)

    # Snapshots handed to the resolver and report assembler.

    def all_components(self) -> Dict[str, ComponentRecord]:
        return {
            name: replace(record, children=list(record.children))
            for name, record in self._components.items()
        }

    def all_services(self) -> Set[str]:
        return set(self._services)

    def all_modules(self) -> Set[str]:
        return set(self._modules)

    def all_pipes(self) -> Dict[str, PipeRecord]:
        return {name: replace(record) for name, record in self._pipes.items()}

    def all_routes(self) -> Dict[str, str]:
        return dict(self._routes)

    def all_dependencies(self) -> Dict[str, Set[str]]:
        return {path: set(specs) for path, specs in self._dependencies.items()}

    def _check_mutable(self) -> None:
        if self._frozen:
            raise RegistryFrozenError("Registry is frozen; classification phase already finished")


__all__ = ["Registry", "RegistryFrozenError"]
