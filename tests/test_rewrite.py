from __future__ import annotations

from pathlib import Path

from twformat.rewrite import (
    find_helper,
    find_source_files,
    format_tailwind_in_dir,
    insert_import,
    literal_spans,
    rewrite_source,
    split_call_args,
    static_string_value,
)
from twformat.types import FormatOptions, TailwindOptions


def test_sorts_jsx_class_attribute():
    res = rewrite_source('<div className="p-4 flex">x</div>')
    assert res.code == '<div className="flex p-4">x</div>'
    assert res.mutated


def test_sorts_expression_container_and_keeps_quotes():
    res = rewrite_source("<div className={'p-4 flex'} />")
    assert res.code == "<div className={'flex p-4'} />"


def test_sorts_class_attribute():
    assert rewrite_source('<p class="text-red-500 p-2"></p>').code == '<p class="p-2 text-red-500"></p>'


def test_ordered_source_is_not_mutated():
    code = '<div className="flex p-4" />'
    res = rewrite_source(code)
    assert res.code == code
    assert not res.mutated


def test_empty_and_dynamic_attributes_are_left_alone():
    code = '<div className="" /><div className={styles.box} /><div data-className="p-2 flex" />'
    assert not rewrite_source(code).mutated


def test_sorts_single_argument_helper_call():
    res = rewrite_source('const a = cn("text-red-500 p-2 flex rounded");')
    assert res.code == 'const a = cn("flex p-2 text-red-500 rounded");'


def test_sorts_member_helper_call_and_template_literal():
    assert rewrite_source("utils.cn('p-2 flex')").code == "utils.cn('flex p-2')"
    assert rewrite_source("clsx(`p-2 flex`)").code == "clsx(`flex p-2`)"


def test_multi_argument_call_untouched_without_merge_mode():
    code = 'cn("p-2 flex", active && "bg-red-500")'
    assert not rewrite_source(code).mutated


def test_escaped_literals_are_skipped():
    code = 'cn("p-2 \\u0020 flex")'
    assert not rewrite_source(code).mutated


def test_interpolated_template_is_skipped():
    code = "cn(`p-2 ${size} flex`)"
    assert not rewrite_source(code).mutated


def test_markup_inside_string_literal_is_left_alone():
    code = "const html = '<p class=\"p-2 flex\"></p>';\nconst tpl = `<i className=\"p-2 flex\" />`;\n"
    res = rewrite_source(code)
    assert res.code == code
    assert not res.mutated


def test_commented_out_code_is_left_alone():
    code = '// cn("p-2 flex")\n/* <div className="p-2 flex" /> */\nconst a = cn("p-2 flex");\n'
    res = rewrite_source(code)
    assert res.code == '// cn("p-2 flex")\n/* <div className="p-2 flex" /> */\nconst a = cn("flex p-2");\n'
    assert not rewrite_source(code, use_cn=True).inserted_import


def test_attribute_after_a_string_on_the_same_line_is_still_sorted():
    code = '<a title="x" className="p-2 flex" />'
    assert rewrite_source(code).code == '<a title="x" className="flex p-2" />'


def test_options_are_applied():
    opts = FormatOptions(tailwind=TailwindOptions(variants=("sm", "hover")))
    res = rewrite_source('<a className="hover:bg-blue-500 sm:bg-red-500" />', opts)
    assert res.code == '<a className="sm:bg-red-500 hover:bg-blue-500" />'


# merge-call mode

def test_merge_mode_regroups_helper_call():
    code = 'import { cn } from "./x";\nconst a = cn("text-red-500 p-2 flex rounded");\n'
    res = rewrite_source(code, use_cn=True)
    assert 'cn("flex", "p-2", "text-red-500", "rounded")' in res.code
    assert not res.inserted_import


def test_merge_mode_keeps_non_string_arguments_in_order():
    code = 'import { cn } from "@/lib/utils";\ncn(base, "p-2 flex", isActive && "x", "rounded", props.className)\n'
    res = rewrite_source(code, use_cn=True)
    assert 'cn(base, "flex", "p-2", "rounded", isActive && "x", props.className)' in res.code


def test_merge_mode_wraps_attribute_and_inserts_import_once():
    code = 'export const A = () => (\n  <div className="p-2 flex">\n    <span className="text-sm font-bold p-1" />\n  </div>\n);\n'
    res = rewrite_source(code, use_cn=True)
    assert res.inserted_import
    assert res.code.startswith('import classNames from "classnames";\n')
    assert res.code.count("import classNames") == 1
    assert 'className={classNames("flex", "p-2")}' in res.code
    assert 'className={classNames("p-1", "text-sm font-bold")}' in res.code


def test_merge_mode_uses_helper_in_scope():
    code = 'import { cn } from "@/lib/utils";\nconst A = () => <div className="p-2 flex" />;\n'
    res = rewrite_source(code, use_cn=True)
    assert not res.inserted_import
    assert 'className={cn("flex", "p-2")}' in res.code


def test_merge_mode_import_goes_below_directives():
    code = '"use client";\n\nexport default function A() {\n  return <p className="p-2 flex" />;\n}\n'
    res = rewrite_source(code, use_cn=True)
    assert res.code.startswith('"use client";\nimport classNames from "classnames";\n')


def test_merge_mode_reuses_existing_classnames_import():
    code = 'import cls from "classnames";\nconst A = () => <div className="p-2 flex" />;\n'
    res = rewrite_source(code, use_cn=True)
    assert not res.inserted_import
    assert res.code.count('from "classnames"') == 1
    assert 'className={cls("flex", "p-2")}' in res.code
    assert not rewrite_source(res.code, use_cn=True).mutated


def test_merge_mode_side_effect_classnames_import_is_not_duplicated():
    code = "import 'classnames';\nconst A = () => <div className=\"p-2 flex\" />;\n"
    res = rewrite_source(code, use_cn=True)
    assert not res.inserted_import
    assert res.code.count("classnames") == 1
    assert 'className={classNames("flex", "p-2")}' in res.code


def test_merge_mode_is_idempotent():
    code = (
        'export const A = ({ on }) => (\n'
        '  <div className="rounded p-2 flex">\n'
        '    <b className={cx("text-red-500 font-bold", on && "ring-2")} />\n'
        '  </div>\n'
        ');\n'
    )
    first = rewrite_source(code, use_cn=True)
    assert first.mutated
    second = rewrite_source(first.code, use_cn=True)
    assert not second.mutated
    assert second.code == first.code


def test_merge_mode_leaves_grouped_call_as_written():
    code = "import { cn } from './u';\ncn('flex', 'p-2')\n"
    assert not rewrite_source(code, use_cn=True).mutated


def test_default_mode_is_idempotent():
    code = '<div className="rounded p-2 flex" onClick={() => cn("p-1 block")} />'
    first = rewrite_source(code)
    assert not rewrite_source(first.code).mutated


# helpers

def test_split_call_args_handles_nesting_strings_and_comments():
    code = 'cn(a(1, 2), "x, y", [1, 2], { k: ")" }, /* c, d */ z)'
    args, close = split_call_args(code, 3)
    assert [a.strip() for a in args] == ['a(1, 2)', '"x, y"', '[1, 2]', '{ k: ")" }', '/* c, d */ z']
    assert close == len(code) - 1


def test_split_call_args_unbalanced():
    assert split_call_args('cn("a", b', 3) is None


def test_static_string_value():
    assert static_string_value(' "p-2 flex" ') == "p-2 flex"
    assert static_string_value("`p-2`") == "p-2"
    assert static_string_value("`p-${x}`") is None
    assert static_string_value("a && 'b'") is None


def test_find_helper():
    assert find_helper('import { cn } from "@/lib/utils"') == "cn"
    assert find_helper('import clsx, { type ClassValue } from "clsx"') == "clsx"
    assert find_helper('import * as cx from "x"') == "cx"
    assert find_helper("const classNames = require('classnames')") == "classNames"
    assert find_helper("export function cn(...inputs) {}") == "cn"
    assert find_helper('import React from "react"') is None


def test_insert_import_after_shebang():
    out = insert_import("#!/usr/bin/env node\nfoo()\n", 'import a from "a";')
    assert out == '#!/usr/bin/env node\nimport a from "a";\nfoo()\n'


# directory processing

def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_find_source_files_skips_node_modules(tmp_path: Path):
    _write(tmp_path / "src" / "a.tsx", "")
    _write(tmp_path / "src" / "nested" / "c.js", "")
    _write(tmp_path / "src" / "b.css", "")
    _write(tmp_path / "node_modules" / "x" / "index.js", "")
    files = find_source_files(tmp_path)
    assert files == [tmp_path / "src" / "a.tsx", tmp_path / "src" / "nested" / "c.js"]


def test_dry_run_reports_without_writing(tmp_path: Path, capsys):
    src = _write(tmp_path / "App.jsx", '<div className="p-2 flex" />\n')
    _write(tmp_path / "ok.ts", 'const a = cn("flex p-2");\n')
    assert format_tailwind_in_dir(tmp_path, dry=True) == 1
    assert src.read_text(encoding="utf-8") == '<div className="p-2 flex" />\n'
    out = capsys.readouterr().out
    assert f"[dry] formatted: {src}" in out
    assert "Done. Updated 1 file(s)." in out


def test_writes_changes_then_reports_nothing_to_do(tmp_path: Path, capsys):
    src = _write(tmp_path / "App.tsx", '<div className="p-2 flex" />\n')
    assert format_tailwind_in_dir(tmp_path) == 1
    assert src.read_text(encoding="utf-8") == '<div className="flex p-2" />\n'
    assert format_tailwind_in_dir(tmp_path) == 0
    assert "No changes needed." in capsys.readouterr().out


def test_unreadable_file_does_not_stop_processing(tmp_path: Path, capsys):
    (tmp_path / "bad.js").write_bytes(b"\xff\xfe<div className=\"p-2 flex\" />")
    good = _write(tmp_path / "good.js", '<div className="p-2 flex" />')
    assert format_tailwind_in_dir(tmp_path) == 1
    assert good.read_text(encoding="utf-8") == '<div className="flex p-2" />'
    assert "[ERROR]" in capsys.readouterr().out


def test_literal_spans_cover_strings_and_comments():
    code = 'a("x") // c\nb /* d */ `e`'
    assert [code[s:e] for s, e in literal_spans(code)] == ['"x"', "// c", "/* d */", "`e`"]
