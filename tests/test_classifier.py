"""Tests for the declaration classifier."""

import pytest

from dtsgen.extract.classifier import classify, object_literal_type
from dtsgen.extract.models import RawBlock, SymbolKind


def _render(body, fallback="any", comment=None):
    symbol = classify(RawBlock(body=body, keyword=body.split()[0], preceding_comment=comment), fallback)
    return None if symbol is None else symbol.text


# ---------------------------------------------------------------------------
# const / let / var
# ---------------------------------------------------------------------------


class TestVariables:
    def test_numeric_literal_kept(self):
        assert _render("export const X = 42") == "export declare const X: 42;"

    def test_string_literal_kept(self):
        assert _render("export const name = 'dtsgen';") == "export declare const name: 'dtsgen';"

    def test_boolean_literal_kept(self):
        assert _render("export let enabled = false") == "export declare let enabled: false;"

    def test_array_literal(self):
        assert _render("export var items = [1, 2, 3]") == "export declare var items: any[];"

    def test_as_const_suffix_removed(self):
        assert _render("export const modes = ['a', 'b'] as const") == "export declare const modes: any[];"

    def test_annotation_without_initializer(self):
        assert _render("export let current: string") == "export declare let current: string;"

    def test_no_annotation_no_initializer(self):
        assert _render("export let later") == "export declare let later: any;"

    def test_literal_overrides_annotation(self):
        assert _render("export const n: number = 5") == "export declare const n: 5;"

    def test_annotation_beats_fallback(self):
        assert _render("export const d: Date = new Date()") == "export declare const d: Date;"

    def test_fallback_any(self):
        assert _render("export const d = new Date()") == "export declare const d: any;"

    def test_fallback_string_policy(self):
        assert _render("export const d = compute()", fallback="string") == "export declare const d: string;"

    def test_arrow_in_annotation_is_not_the_initializer(self):
        text = _render("export const cb: (x: number) => void = noop")
        assert text == "export declare const cb: (x: number) => void;"

    def test_trailing_line_comment_ignored(self):
        assert _render("export const answer = 42 // the answer") == "export declare const answer: 42;"

    def test_url_in_string_is_not_a_comment(self):
        text = _render("export const api = 'https://example.com/v1'")
        assert text == "export declare const api: 'https://example.com/v1';"

    def test_non_exported_const(self):
        assert _render("export const a = 1").startswith("export declare")
        assert classify(RawBlock(body="const a = 1", keyword="const")).text == "declare const a: 1;"

    def test_kind(self):
        symbol = classify(RawBlock(body="export let a = 1", keyword="export"))
        assert symbol.kind is SymbolKind.LET


class TestObjectLiterals:
    def test_string_fields_preserved_with_quoted_keys(self):
        body = "export const defaultHeaders = {\n  'Content-Type': 'application/json',\n}"
        assert _render(body) == (
            "export declare const defaultHeaders: {\n"
            "  'Content-Type': 'application/json';\n"
            "};"
        )

    def test_field_order_and_nesting(self):
        body = (
            "export const config = {\n"
            "  port: 8080,\n"
            "  name: 'app',\n"
            "  nested: { enabled: true, tags: ['a', 'b'] },\n"
            "  url: 'http://x.com/a,b',\n"
            "}"
        )
        assert _render(body) == (
            "export declare const config: {\n"
            "  port: 8080;\n"
            "  name: 'app';\n"
            "  nested: {\n"
            "    enabled: true;\n"
            "    tags: any[];\n"
            "  };\n"
            "  url: 'http://x.com/a,b';\n"
            "};"
        )

    def test_non_literal_field_falls_back(self):
        assert object_literal_type("{ created: Date.now() }") == "{\n  created: any;\n}"

    def test_shorthand_and_spread(self):
        assert object_literal_type("{ ...base, port, }") == "{\n  port: any;\n}"

    def test_empty_object(self):
        assert _render("export const empty = {}") == "export declare const empty: {};"

    def test_annotated_object_keeps_annotation(self):
        body = "export const opts: Options = {\n  a: 1,\n}"
        assert _render(body) == "export declare const opts: Options;"


# ---------------------------------------------------------------------------
# functions
# ---------------------------------------------------------------------------


class TestFunctions:
    def test_default_value_removed_return_type_kept(self):
        body = "export function f(a: number, b: number = 2): string {\n  return `${a + b}`\n}"
        assert _render(body) == "export declare function f(a: number, b: number): string;"

    def test_async_function(self):
        body = (
            "export async function fetchComments(postId: number): Promise<CommentsResponse> {\n"
            "  const r = await fetch(`/x/${postId}`)\n"
            "  return r.json()\n"
            "}"
        )
        assert _render(body) == (
            "export declare function fetchComments(postId: number): Promise<CommentsResponse>;"
        )

    def test_missing_return_type_left_unspecified(self):
        assert _render("export function log(msg: string) {\n}") == "export declare function log(msg: string);"

    def test_generics_preserved(self):
        body = "export function identity<T>(value: T): T {\n  return value\n}"
        assert _render(body) == "export declare function identity<T>(value: T): T;"

    def test_multiline_params_with_generics_and_callbacks(self):
        body = (
            "export function make(\n"
            "  map: Map<string, number> = new Map(),\n"
            "  cb: (x: number) => void,\n"
            "): void {\n"
            "}"
        )
        assert _render(body) == (
            "export declare function make(map: Map<string, number>, cb: (x: number) => void): void;"
        )

    def test_object_return_type(self):
        body = "export function opts(): { a: string } {\n  return { a: '' }\n}"
        assert _render(body) == "export declare function opts(): { a: string };"

    def test_destructured_param_default(self):
        body = "export function run({ a = 1 }: Opts = {}): void {}"
        assert _render(body) == "export declare function run({ a = 1 }: Opts): void;"

    def test_overload_signature(self):
        assert _render("export function parse(input: string): Ast;") == (
            "export declare function parse(input: string): Ast;"
        )

    def test_default_export_function(self):
        body = "export default function main(argv: string[]) {\n}"
        assert _render(body) == "export default function main(argv: string[]);"

    def test_kind(self):
        symbol = classify(RawBlock(body="export function f() {}", keyword="export"))
        assert symbol.kind is SymbolKind.FUNCTION

    @pytest.mark.parametrize(
        "body, has_body",
        [
            ("export function f(a: string): string;", False),
            ("export function f(a: string): string", False),
            ("export function f(): { a: string };", False),
            ("export function f(a: any): any {\n  return a\n}", True),
            ("export function f(a) {\n}", True),
        ],
    )
    def test_name_and_body_recorded(self, body, has_body):
        symbol = classify(RawBlock(body=body, keyword="export"))
        assert symbol.name == "f"
        assert symbol.has_body is has_body

    def test_non_exported_function_gets_declare(self):
        symbol = classify(RawBlock(body="function helper(a: number): void {\n}", keyword="function"))
        assert symbol.text == "declare function helper(a: number): void;"


# ---------------------------------------------------------------------------
# interfaces, types, re-exports, other
# ---------------------------------------------------------------------------


class TestStructuralDeclarations:
    def test_interface_body_verbatim(self):
        body = "export interface Comment {\n  id: number\n  body: string\n}"
        assert _render(body) == "export declare interface Comment {\n  id: number\n  body: string\n}"

    def test_local_interface(self):
        assert _render("interface Local {\n  a: number\n}") == "declare interface Local {\n  a: number\n}"

    def test_type_alias(self):
        assert _render("export type ID = string | number") == "export declare type ID = string | number"

    def test_generic_type_alias(self):
        assert _render("export type Box<T> = { value: T }") == "export declare type Box<T> = { value: T }"

    @pytest.mark.parametrize(
        "body",
        [
            "export * from './utils'",
            "export * as helpers from './helpers'",
            "export { a, b } from './x'",
            "export type { T } from './t'",
        ],
    )
    def test_reexports_pass_through(self, body):
        symbol = classify(RawBlock(body=body, keyword="export"))
        assert symbol.kind is SymbolKind.REEXPORT
        assert symbol.text == body

    def test_other_export_gets_terminator(self):
        assert _render("export { local }") == "export { local };"
        assert _render("export default config;") == "export default config;"

    def test_unrecognized_block_dropped(self):
        assert classify(RawBlock(body="import x from 'y'", keyword="import")) is None

    def test_comment_carried_on_symbol(self):
        symbol = classify(RawBlock(body="export const a = 1", keyword="export", preceding_comment="/** a */"))
        assert symbol.comment == "/** a */"
        assert symbol.render() == "/** a */\nexport declare const a: 1;"
