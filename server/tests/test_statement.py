"""
Tests for parsing single lines of a using block.
"""

import pytest
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from usings.statement import UsingStatement, is_using_directive


class TestUsingStatementParse:
    """Classification of lines by shape."""

    def test_plain_directive(self):
        stmt = UsingStatement.parse("using System.Collections.Generic;")
        assert stmt.is_directive
        assert stmt.namespace == "System.Collections.Generic"
        assert stmt.root_namespace == "System"
        assert not stmt.is_static
        assert not stmt.is_alias

    def test_static_directive(self):
        stmt = UsingStatement.parse("using static System.Math;")
        assert stmt.is_directive
        assert stmt.is_static
        assert stmt.namespace == "System.Math"

    def test_global_static_directive(self):
        stmt = UsingStatement.parse("global using static System.Console;")
        assert stmt.is_global
        assert stmt.is_static
        assert stmt.namespace == "System.Console"

    def test_alias_directive(self):
        stmt = UsingStatement.parse("using Json = Newtonsoft.Json;")
        assert stmt.is_alias
        assert stmt.alias == "Json"
        assert stmt.namespace == "Newtonsoft.Json"
        assert stmt.root_namespace == "Newtonsoft"
        assert stmt.sort_key == "Json = Newtonsoft.Json"

    def test_blank_line(self):
        stmt = UsingStatement.parse("   ")
        assert stmt.is_blank
        assert not stmt.is_directive

    @pytest.mark.parametrize("line", [
        "// a line comment",
        "/* block */",
        "/* opening",
        " * end of block */",
    ])
    def test_comments(self, line):
        stmt = UsingStatement.parse(line)
        assert stmt.is_comment
        assert not stmt.is_directive

    def test_preprocessor_line(self):
        stmt = UsingStatement.parse("#if DEBUG")
        assert stmt.is_conditional_directive
        assert not stmt.is_comment
        assert not stmt.is_directive

    def test_exactly_one_kind(self):
        for line in ["using A;", "// c", "#endif", ""]:
            stmt = UsingStatement.parse(line)
            kinds = [stmt.is_comment, stmt.is_conditional_directive, stmt.is_blank]
            assert sum(kinds) == (0 if stmt.is_directive else 1)

    def test_text_is_kept_verbatim(self):
        stmt = UsingStatement.parse("    using Foo.Bar;")
        assert str(stmt) == "    using Foo.Bar;"


class TestDirectiveShape:
    """Lines that share the keyword but are statements, not directives."""

    @pytest.mark.parametrize("line", [
        "using System;",
        "global using System.Linq;",
        "using static System.Math;",
        "using Alias = Some.Namespace.Type;",
    ])
    def test_directives(self, line):
        assert is_using_directive(line)

    @pytest.mark.parametrize("line", [
        "using (var stream = File.OpenRead(path))",
        "using (stream);",
        "using var reader = new StreamReader(path);",
        "using var scope = CreateScope();",
        "usingSystem;",
        "using ;",
        "var x = 1;",
    ])
    def test_statements_are_not_directives(self, line):
        assert not is_using_directive(line)


class TestAttachedComments:
    """Comments travel with the directive they are attached to."""

    def test_to_lines_includes_attached_comments(self):
        stmt = UsingStatement.parse("using A;")
        stmt.set_attached_comments([UsingStatement.parse("// one"), UsingStatement.parse("// two")])
        assert stmt.to_lines() == ["// one", "// two", "using A;"]

    def test_attaching_non_comment_raises(self):
        stmt = UsingStatement.parse("using A;")
        with pytest.raises(ValueError):
            stmt.attach_comment(UsingStatement.parse("using B;"))
        with pytest.raises(ValueError):
            stmt.set_attached_comments([UsingStatement.blank_line()])

    def test_dedup_key_distinguishes_static(self):
        plain = UsingStatement.parse("using System.Math;")
        static = UsingStatement.parse("using static System.Math;")
        assert plain.dedup_key != static.dedup_key
        assert UsingStatement.parse("// c").dedup_key == ""
