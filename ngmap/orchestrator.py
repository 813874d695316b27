"""Two-phase analysis pipeline: classify every file, then resolve containment."""

from __future__ import annotations

from pathlib import Path
from typing import List

from .analyzers import (
    DeclarationClassifier,
    IOFailure,
    ParseFailure,
    Registry,
    SourceParser,
    load_source,
    resolve,
)
from .config import ConfigError, NgMapConfig, load_config
from .logging import get_logger, log_diagnostics
from .models import AnalysisResult, Diagnostic, DiagnosticKind, RepoManifest
from .project_files import load_project_files
from .repo_scanner import RepoScanner
from .structure import render_structure

logger = get_logger("orchestrator")


class Orchestrator:
    """Coordinates scanning, classification, resolution and project metadata."""

    def __init__(
        self,
        config: NgMapConfig | None = None,
        scanner: RepoScanner | None = None,
        parser: SourceParser | None = None,
        classifier: DeclarationClassifier | None = None,
    ) -> None:
        self._config = config
        self._scanner = scanner
        self._parser = parser or SourceParser()
        self._classifier = classifier or DeclarationClassifier()

    def analyze(self, path: str | Path) -> AnalysisResult:
        """Analyze the project rooted at ``path``.

        Only a missing or non-directory root aborts the run; every per-file
        problem ends up in ``AnalysisResult.diagnostics``.
        """
        config = self._resolve_config(Path(path))
        scanner = self._scanner or RepoScanner(config)
        manifest = scanner.scan(str(path))
        root = Path(manifest.root)
        diagnostics: List[Diagnostic] = []

        registry = self._classify_all(manifest, diagnostics)
        registry.freeze()

        components = registry.all_components()
        graph = resolve(components)
        logger.info(
            "Analyzed %d files: %d components, %d services, %d modules, %d pipes, %d routes",
            len(manifest.files),
            len(components),
            len(registry.all_services()),
            len(registry.all_modules()),
            len(registry.all_pipes()),
            len(registry.all_routes()),
        )

        project = load_project_files(root, diagnostics)
        log_diagnostics(logger, diagnostics)

        return AnalysisResult(
            root=str(root),
            structure=render_structure(root),
            components=graph.apply(components),
            services=registry.all_services(),
            modules=registry.all_modules(),
            pipes=registry.all_pipes(),
            routes=registry.all_routes(),
            dependencies=registry.all_dependencies(),
            tree=graph.walk(),
            roots=graph.roots(),
            project=project,
            diagnostics=diagnostics,
        )

    def _classify_all(self, manifest: RepoManifest, diagnostics: List[Diagnostic]) -> Registry:
        registry = Registry()
        root = Path(manifest.root)
        for meta in manifest.files:
            try:
                unit = load_source(root, meta.path)
                tree = self._parser.parse(unit)
            except IOFailure as exc:
                self._skip(diagnostics, DiagnosticKind.IO_FAILURE, meta.path, exc)
                continue
            except ParseFailure as exc:
                self._skip(diagnostics, DiagnosticKind.PARSE_FAILURE, meta.path, exc)
                continue
            self._classifier.classify(unit, tree, registry, diagnostics)
        return registry

    def _resolve_config(self, path: Path) -> NgMapConfig:
        if self._config is not None:
            return self._config
        root = path.expanduser().resolve()
        if not root.is_dir():
            return NgMapConfig(root=root)
        try:
            return load_config(root)
        except ConfigError as exc:
            logger.warning("Ignoring unreadable configuration: %s", exc)
            return NgMapConfig(root=root)

    @staticmethod
    def _skip(
        diagnostics: List[Diagnostic], kind: DiagnosticKind, file: str, exc: Exception
    ) -> None:
        logger.warning("Skipping %s: %s", file, exc)
        diagnostics.append(Diagnostic(kind=kind, file=file, message=str(exc)))


__all__ = ["Orchestrator"]
