"""Tests for the declaration classifier."""

from __future__ import annotations

import textwrap
from typing import List, Tuple

from ngmap.analyzers.classifier import (
    DeclarationClassifier,
    is_relative_specifier,
    match_annotation,
    strip_quotes,
)
from ngmap.analyzers.parser import SourceParser
from ngmap.analyzers.registry import Registry
from ngmap.models import DeclarationKind, Diagnostic, DiagnosticKind, SourceUnit


def _classify(source: str, path: str = "src/app/example.ts") -> Tuple[Registry, List[Diagnostic]]:
    unit = SourceUnit(path=path, text=textwrap.dedent(source).lstrip("\n"))
    tree = SourceParser().parse(unit)
    registry = Registry()
    diagnostics: List[Diagnostic] = []
    DeclarationClassifier().classify(unit, tree, registry, diagnostics)
    return registry, diagnostics


def test_component_selector_and_template_are_extracted() -> None:
    registry, diagnostics = _classify(
        """
        import { Component } from '@angular/core';

        @Component({
          selector: 'app-foo',
          template: '<div>hi</div>'
        })
        export class Foo {}
        """
    )

    foo = registry.all_components()["Foo"]
    assert foo.selector == "app-foo"
    assert foo.template == "<div>hi</div>"
    assert foo.children == []
    assert foo.file == "src/app/example.ts"
    assert diagnostics == []


def test_backtick_template_and_template_url_are_unquoted() -> None:
    registry, _ = _classify(
        """
        @Component({
          selector: "app-shell",
          template: `<app-header></app-header>
            <router-outlet></router-outlet>`,
        })
        class Shell {}

        @Component({ selector: 'app-page', templateUrl: './page.component.html' })
        export class Page {}
        """
    )

    components = registry.all_components()
    assert components["Shell"].selector == "app-shell"
    assert components["Shell"].template.startswith("<app-header></app-header>")
    assert "`" not in components["Shell"].template
    assert components["Page"].template == ""
    assert components["Page"].template_url == "./page.component.html"


def test_missing_component_fields_default_to_empty() -> None:
    registry, diagnostics = _classify(
        """
        @Component({ standalone: true })
        export class Bare {}
        """
    )

    bare = registry.all_components()["Bare"]
    assert bare.selector == ""
    assert bare.template == ""
    assert diagnostics == []


def test_non_object_component_argument_degrades_with_diagnostic() -> None:
    registry, diagnostics = _classify(
        """
        const config = { selector: 'app-x' };

        @Component(config)
        export class Configured {}
        """
    )

    record = registry.all_components()["Configured"]
    assert record.selector == ""
    assert [diag.kind for diag in diagnostics] == [DiagnosticKind.MALFORMED_METADATA]
    assert diagnostics[0].file == "src/app/example.ts"


def test_services_modules_and_pipes_are_recorded() -> None:
    registry, _ = _classify(
        """
        @Injectable({ providedIn: 'root' })
        export class DataService {}

        @NgModule({ declarations: [] })
        export class AppModule {}

        @Pipe({ name: 'shout' })
        export class ShoutPipe {}
        """,
        path="src/app/shared.ts",
    )

    assert registry.all_services() == {"DataService"}
    assert registry.all_modules() == {"AppModule"}
    pipe = registry.all_pipes()["ShoutPipe"]
    assert pipe.file == "src/app/shared.ts"
    assert pipe.pipe_name == "shout"


def test_first_matching_decorator_decides_the_kind() -> None:
    registry, _ = _classify(
        """
        @Injectable()
        @Component({ selector: 'app-odd' })
        export class Odd {}
        """
    )

    assert registry.all_services() == {"Odd"}
    assert registry.all_components() == {}


def test_annotation_priority_prefers_component() -> None:
    assert match_annotation("Component({})") is DeclarationKind.COMPONENT
    assert match_annotation("Injectable()") is DeclarationKind.SERVICE
    assert match_annotation("NgModule({})") is DeclarationKind.MODULE
    assert match_annotation("Pipe({name: 'x'})") is DeclarationKind.PIPE
    assert match_annotation("Input()") is None


def test_anonymous_default_export_gets_placeholder_name() -> None:
    registry, _ = _classify(
        """
        @Injectable()
        export default class {}
        """
    )

    assert registry.all_services() == {"UnnamedService"}


def test_undecorated_classes_are_ignored() -> None:
    registry, _ = _classify(
        """
        export class Plain {
          @Input() label = '';
        }
        """
    )

    assert registry.all_components() == {}
    assert registry.all_services() == set()


def test_routes_are_collected_and_incomplete_entries_skipped() -> None:
    registry, _ = _classify(
        """
        import { Routes } from '@angular/router';

        const routes: Routes = [
          { path: 'home', component: HomeComponent },
          { path: 'missing-component-field' },
          { component: OrphanComponent },
          { path: '', component: LandingComponent },
          { path: 'old', redirectTo: 'home' },
        ];
        """,
        path="src/app/app-routing.module.ts",
    )

    assert registry.all_routes() == {
        "home": "HomeComponent",
        "": "LandingComponent",
    }


def test_exported_route_arrays_are_scanned_and_later_paths_win() -> None:
    registry, _ = _classify(
        """
        export const adminRoutes = [
          { path: "users", component: UsersComponent },
        ];
        export const moreRoutes = [
          { path: "users", component: UserListComponent },
        ];
        """
    )

    assert registry.all_routes() == {"users": "UserListComponent"}


def test_dependency_set_keeps_only_non_relative_imports() -> None:
    registry, _ = _classify(
        """
        import { X } from 'some-lib';
        import { Y } from './local';
        import { Z } from '../parent/thing';
        import 'zone.js';
        import fs = require("fs");
        """,
        path="src/main.ts",
    )

    assert registry.all_dependencies() == {"src/main.ts": {"some-lib", "zone.js", "fs"}}


def test_files_without_imports_still_get_an_empty_dependency_set() -> None:
    registry, _ = _classify("export const answer = 42;\n", path="src/answer.ts")
    assert registry.all_dependencies() == {"src/answer.ts": set()}


def test_quote_and_relative_helpers() -> None:
    assert strip_quotes("'a\"b`c'") == "abc"
    assert is_relative_specifier("./x")
    assert is_relative_specifier("../x")
    assert not is_relative_specifier("@angular/core")
