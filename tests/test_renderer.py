"""Tests for proxy_conf.render.renderer."""

from __future__ import annotations

from pathlib import Path

import pytest

from proxy_conf.render.errors import UnknownFunctionError
from proxy_conf.render.renderer import (
    STRIPPED_DIRECTIVE,
    find_placeholders,
    render_file,
    render_template,
    strip_directives,
)


# ── fixtures ─────────────────────────────────────────────────────────

MINI_TEMPLATE = (
    "worker_processes 1;\n"
    "daemon off;\n"
    "http {\n"
    "  server {\n"
    "    listen {{port}};\n"
    '    set $bucket_url {{env "BUCKET_URL"}};\n'
    "  }\n"
    "}\n"
)

MINI_FUNCS = {
    "port": lambda: 9000,
    "env": lambda arg: f"http://{arg}",
}


# ── TestStripDirectives ──────────────────────────────────────────────


class TestStripDirectives:
    def test_removes_daemon_line_keeps_indentation(self):
        template = "  foo;\n  daemon off;\n  bar;\n"
        assert render_template(template, {}) == "  foo;\n  \n  bar;\n"

    def test_removes_inline_occurrence(self):
        assert strip_directives("a; daemon off; b;") == "a;  b;"

    def test_removes_every_occurrence(self):
        result = strip_directives("daemon off;daemon off;\ndaemon off;")
        assert STRIPPED_DIRECTIVE not in result
        assert result == "\n"

    def test_idempotent(self):
        once = strip_directives(MINI_TEMPLATE)
        assert strip_directives(once) == once

    def test_other_daemon_forms_untouched(self):
        template = "daemon on;\ndaemon  off;\n"
        assert strip_directives(template) == template


# ── TestRenderTemplate ───────────────────────────────────────────────


class TestRenderTemplate:
    def test_plain_text_unchanged(self):
        template = "events {\n  worker_connections 1024;\n}\n"
        assert render_template(template, MINI_FUNCS) == template

    def test_empty_template(self):
        assert render_template("", {}) == ""

    def test_no_argument_substitution(self):
        funcs = {"port": lambda: 9000}
        assert render_template("listen {{port}};", funcs) == "listen 9000;"

    def test_argument_substitution(self):
        funcs = {"env": lambda arg: "http://" + arg}
        result = render_template('set $x {{env "BUCKET_URL"}};', funcs)
        assert result == "set $x http://BUCKET_URL;"

    def test_multiline_template(self):
        result = render_template(
            "\n      foo;\n      listen {{port}};\n      bar;\n    ",
            {"port": lambda: 9000},
        )
        assert result == "\n      foo;\n      listen 9000;\n      bar;\n    "

    def test_full_template(self):
        result = render_template(MINI_TEMPLATE, MINI_FUNCS)
        assert "listen 9000;" in result
        assert "set $bucket_url http://BUCKET_URL;" in result
        assert "daemon off;" not in result
        assert "{{" not in result

    def test_whitespace_inside_delimiters(self):
        funcs = {"env": lambda arg: arg.lower()}
        assert render_template('{{ \tenv   "ABC" \t}}', funcs) == "abc"

    def test_empty_argument(self):
        funcs = {"env": lambda arg: f"<{arg}>"}
        assert render_template('{{env ""}}', funcs) == "<>"

    def test_underscore_and_digits_in_name(self):
        funcs = {"_host_2": lambda: "example"}
        assert render_template("{{_host_2}}", funcs) == "example"

    def test_value_conversion(self):
        funcs = {
            "num": lambda: 31536000,
            "flag": lambda: True,
            "off": lambda: False,
            "nothing": lambda: None,
        }
        result = render_template("{{num}} {{flag}} {{off}} [{{nothing}}]", funcs)
        assert result == "31536000 true false [None]"

    def test_calls_in_document_order_without_caching(self):
        calls = []
        counter = iter(range(100))

        def port():
            calls.append("port")
            return next(counter)

        def env(arg):
            calls.append(arg)
            return arg

        result = render_template(
            '{{port}} {{env "A"}} {{port}} {{env "B"}}',
            {"port": port, "env": env},
        )
        assert calls == ["port", "A", "port", "B"]
        assert result == "0 A 1 B"

    def test_substituted_text_not_rescanned(self):
        funcs = {"a": lambda: "{{b}}", "b": lambda: "never"}
        assert render_template("{{a}}", funcs) == "{{b}}"

    def test_substituted_directive_not_stripped(self):
        funcs = {"d": lambda: "daemon off;"}
        assert render_template("{{d}}", funcs) == "daemon off;"

    def test_stripping_can_join_placeholder(self):
        funcs = {"port": lambda: 80}
        assert render_template("{{pordaemon off;t}}", funcs) == "80"

    def test_does_not_mutate_function_table(self):
        funcs = dict(MINI_FUNCS)
        render_template(MINI_TEMPLATE, funcs)
        assert funcs == MINI_FUNCS


# ── TestMalformedPlaceholders ────────────────────────────────────────


class TestMalformedPlaceholders:
    @pytest.mark.parametrize(
        "template",
        [
            "{{port",
            "{{}}",
            "{{ }}",
            "{{1port}}",
            "{{por-t}}",
            '{{env "UNTERMINATED}}',
            "{{env UNQUOTED}}",
            '{{env"NOSPACE"}}',
            "{port}",
            "{{port}\n}",
        ],
    )
    def test_left_untouched(self, template):
        funcs = {"port": lambda: 1, "env": lambda arg: arg}
        assert render_template(template, funcs) == template

    def test_malformed_does_not_require_function(self):
        assert render_template("{{missing", {}) == "{{missing"

    def test_nginx_braces_untouched(self):
        template = "location / {\n  if ($host) { return 404; }\n}\n"
        assert render_template(template, {}) == template

    def test_well_formed_after_malformed(self):
        funcs = {"port": lambda: 8080}
        assert render_template("{{ {{port}}", funcs) == "{{ 8080"


# ── TestErrors ───────────────────────────────────────────────────────


class TestErrors:
    def test_unknown_function(self):
        with pytest.raises(UnknownFunctionError, match="missing") as info:
            render_template("{{missing}}", {})
        assert info.value.name == "missing"
        assert info.value.position == 0
        assert (info.value.line, info.value.column) == (1, 1)

    def test_unknown_function_position(self):
        template = "a;\n  b {{port}} {{nope}};\n"
        with pytest.raises(UnknownFunctionError) as info:
            render_template(template, {"port": lambda: 1})
        assert info.value.name == "nope"
        assert info.value.position == template.index("{{nope}}")
        assert (info.value.line, info.value.column) == (2, 14)

    def test_function_error_propagates_unwrapped(self):
        boom = RuntimeError("lookup failed")

        def env(arg):
            raise boom

        with pytest.raises(RuntimeError) as info:
            render_template('x {{env "BUCKET_URL"}}', {"env": env})
        assert info.value is boom
        assert any("BUCKET_URL" in note for note in info.value.__notes__)
        assert any("'env'" in note for note in info.value.__notes__)

    def test_functions_before_failure_were_called(self):
        calls = []
        funcs = {"port": lambda: calls.append("port") or 1}
        with pytest.raises(UnknownFunctionError):
            render_template("{{port}} {{missing}}", funcs)
        assert calls == ["port"]


# ── TestFindPlaceholders ─────────────────────────────────────────────


class TestFindPlaceholders:
    def test_finds_in_order(self):
        found = find_placeholders(MINI_TEMPLATE)
        assert [p.name for p in found] == ["port", "env"]
        assert found[0].argument is None
        assert found[1].argument == "BUCKET_URL"

    def test_lines_match_raw_template(self):
        found = find_placeholders(MINI_TEMPLATE)
        assert [p.line for p in found] == [5, 6]

    def test_text_and_span(self):
        template = "listen {{ port }};"
        (ph,) = find_placeholders(template)
        assert ph.text == "{{ port }}"
        assert template[ph.start:ph.end] == ph.text
        assert ph.column == 8

    def test_skips_malformed(self):
        assert find_placeholders("{{1x}} {{env X}}") == []


# ── TestRenderFile ───────────────────────────────────────────────────


class TestRenderFile:
    def _write_template(self, tmp_path: Path, text: str = MINI_TEMPLATE) -> Path:
        tpl = tmp_path / "nginx.conf.template"
        tpl.write_text(text, encoding="utf-8")
        return tpl

    def test_writes_rendered_output(self, tmp_path: Path):
        tpl = self._write_template(tmp_path)
        dest = render_file(tpl, tmp_path / "nginx.conf", MINI_FUNCS)
        assert dest == tmp_path / "nginx.conf"
        assert dest.read_text(encoding="utf-8") == render_template(
            MINI_TEMPLATE, MINI_FUNCS
        )

    def test_template_file_untouched(self, tmp_path: Path):
        tpl = self._write_template(tmp_path)
        render_file(tpl, tmp_path / "nginx.conf", MINI_FUNCS)
        assert tpl.read_text(encoding="utf-8") == MINI_TEMPLATE

    def test_creates_parent_dirs(self, tmp_path: Path):
        tpl = self._write_template(tmp_path)
        dest = render_file(tpl, tmp_path / "deep" / "nested" / "nginx.conf", MINI_FUNCS)
        assert dest.is_file()

    def test_no_temp_file_left(self, tmp_path: Path):
        tpl = self._write_template(tmp_path)
        out_dir = tmp_path / "out"
        render_file(tpl, out_dir / "nginx.conf", MINI_FUNCS)
        assert [p.name for p in out_dir.iterdir()] == ["nginx.conf"]

    def test_missing_template_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError, match="Template not found"):
            render_file(tmp_path / "nope.template", tmp_path / "nginx.conf", {})

    def test_failed_render_keeps_existing_output(self, tmp_path: Path):
        tpl = self._write_template(tmp_path, "listen {{missing}};\n")
        dest = tmp_path / "nginx.conf"
        dest.write_text("previous\n", encoding="utf-8")
        with pytest.raises(UnknownFunctionError):
            render_file(tpl, dest, {})
        assert dest.read_text(encoding="utf-8") == "previous\n"

    def test_failed_render_writes_nothing(self, tmp_path: Path):
        tpl = self._write_template(tmp_path, "listen {{missing}};\n")
        out_dir = tmp_path / "out"
        with pytest.raises(UnknownFunctionError):
            render_file(tpl, out_dir / "nginx.conf", {})
        assert not out_dir.exists()
