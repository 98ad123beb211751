#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Unit tests for the templating layer of *privacy_sexy*.

• Expression scanner (tokenize / render round-trip, malformed input).
• Pipes (escapeDoubleQuotes, inlinePowerShell, custom + unknown pipes).
• Parameter substitution (required, optional `with` blocks, nesting).
• Section formatter.
"""
from __future__ import annotations

import sys
import unittest
from pathlib import Path

SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from privacy_sexy.core.errors import ParameterError  # noqa: E402
from privacy_sexy.core.models import OS, ParameterDefinition  # noqa: E402
from privacy_sexy.processing.expressions import (  # noqa: E402
    CurrentValue,
    EndMarker,
    Placeholder,
    Text,
    WithOpen,
    format_placeholder,
    render,
    tokenize,
)
from privacy_sexy.processing.pipes import PipeRegistry, escape_double_quotes, inline_powershell  # noqa: E402
from privacy_sexy.rendering.formatter import format_section  # noqa: E402
from privacy_sexy.rendering.template_engine import ParameterTemplateEngine  # noqa: E402

REQ = ParameterDefinition


def OPT(name: str) -> ParameterDefinition:
    return ParameterDefinition(name, optional=True)


# --------------------------------------------------------------------------- #
#  1. Expression scanner                                                      #
# --------------------------------------------------------------------------- #
class ExpressionScannerTests(unittest.TestCase):
    def test_placeholder_with_pipes_and_loose_whitespace(self) -> None:
        segs = tokenize("a {{$x|  p1 |p2}} b")
        self.assertEqual(segs[0], Text("a "))
        self.assertIsInstance(segs[1], Placeholder)
        self.assertEqual(segs[1].name, "x")
        self.assertEqual(segs[1].pipes, ("p1", "p2"))
        self.assertEqual(segs[2], Text(" b"))

    def test_block_markers(self) -> None:
        segs = tokenize("{{  with   $flag }}{{ . | p }}{{end}}")
        self.assertIsInstance(segs[0], WithOpen)
        self.assertEqual(segs[0].name, "flag")
        self.assertIsInstance(segs[1], CurrentValue)
        self.assertEqual(segs[1].pipes, ("p",))
        self.assertIsInstance(segs[2], EndMarker)

    def test_adjacent_expressions_have_no_empty_text(self) -> None:
        segs = tokenize("{{ $a }}{{ $b }}")
        self.assertEqual([type(s) for s in segs], [Placeholder, Placeholder])
        self.assertEqual(tokenize(""), [])
        self.assertFalse(any(isinstance(s, Text) and not s.raw for s in tokenize("x{{ $a }}{{ end }}y")))

    def test_unknown_expressions_are_text(self) -> None:
        for tpl in ("{{ foo }}", "{{ $ }}", "{{ $x y }}", "{{ without $x }}", "{{ end now }}", "{{ $x"):
            with self.subTest(tpl=tpl):
                self.assertTrue(all(isinstance(s, Text) for s in tokenize(tpl)))

    def test_valid_expression_inside_garbage_is_found(self) -> None:
        segs = tokenize("{{{ $x }}}")
        names = [s.name for s in segs if isinstance(s, Placeholder)]
        self.assertEqual(names, ["x"])

    def test_render_reproduces_source(self) -> None:
        for tpl in (
            "",
            "plain text",
            "echo {{ $a | b }} and {{ with $c }}x{{ . }}{{ end }}",
            "{{ broken",
            "}} {{ {{ $z }}",
        ):
            with self.subTest(tpl=tpl):
                self.assertEqual(render(tokenize(tpl)), tpl)

    def test_format_placeholder(self) -> None:
        self.assertEqual(format_placeholder("x"), "{{ $x }}")
        self.assertEqual(format_placeholder("x", ("a", "b")), "{{ $x | a | b }}")


# --------------------------------------------------------------------------- #
#  2. Pipes                                                                   #
# --------------------------------------------------------------------------- #
class PipeTests(unittest.TestCase):
    def test_escape_double_quotes(self) -> None:
        out = escape_double_quotes('"Hello"')
        self.assertEqual(out, '"^""Hello"^""')
        self.assertFalse(out.startswith('"Hello'))

    def test_inline_powershell_joins_lines(self) -> None:
        self.assertEqual(inline_powershell("$a = 1\n\n  $b = 2  \r\n$c = 3"), "$a = 1; $b = 2; $c = 3")

    def test_inline_powershell_comments(self) -> None:
        self.assertEqual(inline_powershell("$a = 1 # set a\n$b = 2"), "$a = 1 <# set a #>; $b = 2")
        self.assertEqual(inline_powershell("<#note#> $a = 1"), "<# note #> $a = 1")
        self.assertEqual(inline_powershell("$a = 1 #"), "$a = 1 <##>")

    def test_inline_powershell_backtick_continuation(self) -> None:
        self.assertEqual(
            inline_powershell("Get-Item `\n   -Path x `\n -Force"),
            "Get-Item -Path x -Force",
        )

    def test_inline_powershell_single_quoted_here_string(self) -> None:
        src = "$s = @'\nline1\nit's\n'@"
        self.assertEqual(inline_powershell(src), "$s = 'line1'+\"`r`n\"+'it''s'")

    def test_inline_powershell_double_quoted_here_string(self) -> None:
        src = '$s = @"\na "b"\nc\n"@'
        self.assertEqual(inline_powershell(src), '$s = "a `"b`"`r`nc"')

    def test_registry_unknown_pipe_is_identity(self) -> None:
        reg = PipeRegistry.default()
        self.assertEqual(reg.apply('"x"', ["doesNotExist"]), '"x"')
        self.assertEqual(reg.apply('"x"', ["escapeDoubleQuotes", "nope"]), '"^""x"^""')

    def test_registry_custom_pipe_order(self) -> None:
        reg = PipeRegistry.default()
        reg.register("upper", str.upper)
        reg.register("exclaim", lambda s: s + "!")
        self.assertEqual(reg.apply("hi", ["upper", "exclaim"]), "HI!")
        self.assertIn("inlinePowerShell", reg.names())
        self.assertIs(reg.get("escapeDoubleQuotes"), escape_double_quotes)
        self.assertIsNone(reg.get("doesNotExist"))
        with self.assertRaises(ValueError):
            reg.register("  ", str.lower)


# --------------------------------------------------------------------------- #
#  3. Parameter substitution                                                  #
# --------------------------------------------------------------------------- #
class SubstitutionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = ParameterTemplateEngine()

    def test_required_parameter(self) -> None:
        self.assertEqual(self.engine.substitute("echo {{ $x }}", [REQ("x")], {"x": "B"}), "echo B")

    def test_required_parameter_missing(self) -> None:
        with self.assertRaises(ParameterError) as cm:
            self.engine.substitute("echo {{ $x }}", [REQ("x")], {})
        self.assertEqual(cm.exception.name, "x")
        self.assertEqual(cm.exception.kind, "Parameter")

    def test_required_parameter_missing_even_if_unused(self) -> None:
        with self.assertRaises(ParameterError):
            self.engine.substitute("echo", [REQ("x")], {"x": None})

    def test_whitespace_and_pipes(self) -> None:
        out = self.engine.substitute("{{$x}}-{{   $x   |  escapeDoubleQuotes }}", [REQ("x")], {"x": '"q"'})
        self.assertEqual(out, '"q"-"^""q"^""')

    def test_parameters_in_declaration_order(self) -> None:
        out = self.engine.substitute("{{ $a }} {{ $b }}", [REQ("a"), REQ("b")], {"a": "{{ $b }}", "b": "2"})
        self.assertEqual(out, "2 2")

    def test_undeclared_placeholders_left_alone(self) -> None:
        out = self.engine.substitute("{{ $a }} {{ $other }} {{ foo }}", [REQ("a")], {"a": "1", "other": "x"})
        self.assertEqual(out, "1 {{ $other }} {{ foo }}")

    def test_idempotent_second_pass(self) -> None:
        declared, args = [REQ("a"), OPT("b")], {"a": "1", "b": "2"}
        tpl = "x={{ $a }} {{ with $b }}y={{ . }}{{ end }}"
        once = self.engine.substitute(tpl, declared, args)
        self.assertEqual(once, "x=1 y=2")
        self.assertEqual(self.engine.substitute(once, declared, args), once)

    def test_optional_block_with_value(self) -> None:
        out = self.engine.substitute("a {{ with $p }}--p {{ . }}{{ end }} z", [OPT("p")], {"p": "v"})
        self.assertEqual(out, "a --p v z")

    def test_optional_block_without_value_is_deleted(self) -> None:
        tpl = "a {{ with $p }}--p {{ . }}{{ end }} z"
        out = self.engine.substitute(tpl, [OPT("p")], {})
        self.assertEqual(out, "a " + " z")

    def test_optional_block_multiline_with_pipes(self) -> None:
        tpl = "start\n{{ with $p }}\n  echo {{ . | escapeDoubleQuotes }}\n{{ end }}\nend"
        out = self.engine.substitute(tpl, [OPT("p")], {"p": '"x"'})
        self.assertEqual(out, 'start\necho "^""x"^""\nend')

    def test_optional_bare_placeholder_without_value_is_kept(self) -> None:
        self.assertEqual(self.engine.substitute("echo {{ $p }}", [OPT("p")], {}), "echo {{ $p }}")

    def test_optional_placeholder_outside_block_with_value(self) -> None:
        self.assertEqual(self.engine.substitute("echo {{ $p }}", [OPT("p")], {"p": "v"}), "echo v")

    def test_nested_blocks(self) -> None:
        tpl = "{{ with $a }}A={{ . }} {{ with $b }}B={{ . }}{{ end }}{{ end }}"
        declared = [OPT("a"), OPT("b")]
        self.assertEqual(self.engine.substitute(tpl, declared, {"a": "1"}), "A=1 ")
        self.assertEqual(self.engine.substitute(tpl, declared, {"a": "1", "b": "2"}), "A=1 B=2")
        self.assertEqual(self.engine.substitute(tpl, declared, {"b": "2"}), "")

    def test_unterminated_block_left_verbatim(self) -> None:
        out = self.engine.substitute("{{ with $p }} x", [OPT("p")], {"p": "v"})
        self.assertEqual(out, "{{ with $p }} x")

    def test_block_for_required_parameter_is_not_expanded(self) -> None:
        out = self.engine.substitute("{{ with $r }}x{{ end }}", [REQ("r")], {"r": "v"})
        self.assertEqual(out, "{{ with $r }}x{{ end }}")


# --------------------------------------------------------------------------- #
#  4. Formatter                                                               #
# --------------------------------------------------------------------------- #
class FormatterTests(unittest.TestCase):
    RULE = "-" * 60

    def test_linux_banner(self) -> None:
        expected = "\n".join([
            f"# {self.RULE}",
            "# " + "-" * 21 + "Clear bash history" + "-" * 21,
            f"# {self.RULE}",
            "echo --- Clear bash history",
            "rm -f ~/.bash_history",
            f"# {self.RULE}",
        ])
        self.assertEqual(format_section("rm -f ~/.bash_history", "Clear bash history", OS.LINUX, False), expected)

    def test_windows_banner_and_revert_suffix(self) -> None:
        out = format_section("sc start x", "Enable x", OS.WINDOWS, True)
        lines = out.split("\n")
        self.assertTrue(all(ln.startswith(":: ") for ln in (lines[0], lines[1], lines[2], lines[-1])))
        self.assertIn("Enable x (revert)", lines[1])
        self.assertEqual(lines[3], "echo --- Enable x (revert)")
        self.assertEqual(len(lines[1]), len(":: ") + 60)

    def test_odd_padding_goes_right(self) -> None:
        title = format_section("", "ab c", OS.MACOS).split("\n")[1]
        self.assertEqual(title, "# " + "-" * 28 + "ab c" + "-" * 28)
        title = format_section("", "abc", OS.MACOS).split("\n")[1]
        self.assertEqual(title, "# " + "-" * 28 + "abc" + "-" * 29)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
