"""Tests for report section assembly and rendering."""

from __future__ import annotations

import json

import pytest

from ngmap.models import (
    AnalysisResult,
    ComponentRecord,
    Diagnostic,
    DiagnosticKind,
    PipeRecord,
    ProjectFiles,
    TreeLine,
)
from ngmap.report import DEFAULT_SECTIONS, MarkdownRenderer, build_sections, render_json


def _result() -> AnalysisResult:
    return AnalysisResult(
        root="/work/shop",
        structure="└── src\n",
        components={
            "App": ComponentRecord(name="App", file="src/app.ts", selector="app-root", children=["Cart"]),
            "Cart": ComponentRecord(name="Cart", file="src/cart.ts", selector="app-cart"),
        },
        services={"CartService", "ApiService"},
        modules={"AppModule"},
        pipes={"PricePipe": PipeRecord(name="PricePipe", file="src/price.pipe.ts", pipe_name="price")},
        routes={"cart": "CartComponent"},
        dependencies={"src/app.ts": {"rxjs", "@angular/core"}},
        tree=[TreeLine(name="App", depth=0), TreeLine(name="Cart", depth=1)],
        roots=["App"],
        project=ProjectFiles(
            dependencies={"@angular/core": "17.0.0"},
            dev_dependencies={"typescript": "5.2.0"},
            compiler_options={"compilerOptions": {"strict": True}},
            environments=["environment.ts"],
        ),
        diagnostics=[
            Diagnostic(kind=DiagnosticKind.PARSE_FAILURE, file="src/bad.ts", message="Syntax error in src/bad.ts")
        ],
    )


def test_sections_follow_canonical_order() -> None:
    sections = build_sections(_result())
    assert [section.name for section in sections] == list(DEFAULT_SECTIONS)


def test_sections_hold_structured_data() -> None:
    sections = {section.name: section for section in build_sections(_result())}

    assert sections["services"].data == ["ApiService", "CartService"]
    assert sections["dependencies"].data == [
        {"file": "src/app.ts", "specifiers": ["@angular/core", "rxjs"]}
    ]
    assert sections["component_tree"].metadata == {"roots": ["App"]}
    assert sections["diagnostics"].data[0]["kind"] == "parse_failure"


def test_section_filter_and_unknown_names() -> None:
    sections = build_sections(_result(), ["routes", "pipes"])
    assert [section.name for section in sections] == ["pipes", "routes"]
    with pytest.raises(ValueError, match="bogus"):
        build_sections(_result(), ["bogus"])


def test_markdown_report_renders_every_section() -> None:
    text = MarkdownRenderer().render(_result())

    assert text.startswith("# shop: Angular Project Overview\n")
    assert "## 1. Project Structure Overview" in text
    assert "```\n└── src\n```" in text
    assert "- App\n  - Cart\n" in text
    assert "- PricePipe (`price`) (src/price.pipe.ts)" in text
    assert "### src/app.ts\n- @angular/core\n- rxjs" in text
    assert "- /cart -> CartComponent" in text
    assert "- @angular/core: 17.0.0" in text
    assert '"strict": true' in text
    assert "- [parse_failure] src/bad.ts: Syntax error in src/bad.ts" in text


def test_markdown_empty_sections_use_placeholders() -> None:
    result = _result()
    result.routes = {}
    text = MarkdownRenderer().render(result, ["routes"])
    assert "_No routes found._" in text


def test_render_tree_only() -> None:
    assert MarkdownRenderer().render_tree(_result()) == "- App\n  - Cart\n"


def test_render_json_is_valid_json() -> None:
    payload = json.loads(render_json(_result(), ["component_tree", "pipes"]))
    assert payload["project"] == "shop"
    assert payload["sections"]["component_tree"]["roots"] == ["App"]
    assert payload["sections"]["pipes"]["data"][0]["pipe_name"] == "price"


def test_compiler_options_keep_order_and_characters() -> None:
    result = _result()
    result.project.compiler_options = {
        "compilerOptions": {"target": "ES2022", "paths": {"@app/*": ["src/<app>/*"]}, "baseUrl": "./"},
        "exclude": ["it's-generated"],
    }

    text = MarkdownRenderer().render(result, ["tsconfig"])

    assert text.index('"target"') < text.index('"paths"') < text.index('"baseUrl"')
    assert '"src/<app>/*"' in text
    assert "\"it's-generated\"" in text
    assert "\\u003c" not in text


def test_empty_compiler_options_still_render_as_json() -> None:
    result = _result()
    result.project.compiler_options = {}
    assert "```json\n{}\n```" in MarkdownRenderer().render(result, ["tsconfig"])

    result.project.compiler_options = None
    assert "_No tsconfig.json found._" in MarkdownRenderer().render(result, ["tsconfig"])
