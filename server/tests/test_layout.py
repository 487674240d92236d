"""
Tests for conditional-region handling, group splitting and whitespace
normalization.
"""

import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from usings.conditionals import ConditionalBlockHandler, find_conditional_ranges, is_in_conditional_range
from usings.config import FormatOptions
from usings.grouping import UsingGroupSplitter
from usings.statement import UsingStatement
from usings.whitespace import WhitespaceNormalizer


def _parse_all(lines):
    return [UsingStatement.parse(line) for line in lines]


def _texts(statements):
    return [s.text for s in statements]


class TestConditionalBlockHandler:

    def setup_method(self):
        self.handler = ConditionalBlockHandler()

    def test_separate_simple(self):
        blocks, remaining = self.handler.separate(_parse_all([
            "using B;", "#if DEBUG", "using Debug;", "#else", "using Release;", "#endif", "using A;",
        ]))
        assert [_texts(b) for b in blocks] == [["#if DEBUG", "using Debug;", "#else", "using Release;", "#endif"]]
        assert _texts(remaining) == ["using B;", "using A;"]

    def test_nested_regions_stay_together(self):
        blocks, remaining = self.handler.separate(_parse_all([
            "#if X", "using A;", "#if Y", "using B;", "#endif", "using C;", "#endif", "using D;",
        ]))
        assert len(blocks) == 1
        assert _texts(blocks[0])[-2:] == ["using C;", "#endif"]
        assert _texts(remaining) == ["using D;"]

    def test_standalone_directive_is_its_own_block(self):
        blocks, remaining = self.handler.separate(_parse_all(["#nullable enable", "using A;"]))
        assert [_texts(b) for b in blocks] == [["#nullable enable"]]
        assert _texts(remaining) == ["using A;"]

    def test_unterminated_block_is_emitted_last(self):
        blocks, remaining = self.handler.separate(_parse_all(["using Z;", "#if X", "using A;"]))
        assert [_texts(b) for b in blocks] == [["#if X", "using A;"]]
        assert _texts(remaining) == ["using Z;"]

    def test_recombine(self):
        result = self.handler.recombine(
            _parse_all(["using S;"]),
            [_parse_all(["#if X", "using A;", "#endif"]), _parse_all(["#pragma warning disable"])],
        )
        assert _texts(result) == ["using S;", "#if X", "using A;", "#endif", "", "#pragma warning disable"]

    def _segments(self, lines):
        return [
            (_texts(segment), barrier.text if barrier else None)
            for segment, barrier in self.handler.split_at_barriers(_parse_all(lines))
        ]

    def test_stray_closer_cuts_segments(self):
        assert self._segments(["using Z;", "#endif", "using A;"]) == [
            (["using Z;"], "#endif"),
            (["using A;"], None),
        ]

    def test_balanced_region_is_not_cut(self):
        lines = ["#if X", "using A;", "#endif", "using B;"]
        assert self._segments(lines) == [(lines, None)]

    def test_pragma_cuts_only_outside_regions(self):
        assert self._segments([
            "using B;", "#if X", "#pragma warning disable", "#endif", "#pragma warning restore", "using A;",
        ]) == [
            (["using B;", "#if X", "#pragma warning disable", "#endif"], "#pragma warning restore"),
            (["using A;"], None),
        ]

    def test_stray_else_cuts_segments(self):
        assert self._segments(["using B;", "#else", "using A;", "#endif"]) == [
            (["using B;"], "#else"),
            (["using A;"], "#endif"),
            ([], None),
        ]

    def test_has_conditionals(self):
        assert self.handler.has_conditionals(_parse_all(["using A;", "#region R"]))
        assert not self.handler.has_conditionals(_parse_all(["using A;", "// #if"]))


class TestFindConditionalRanges:

    def test_else_splits_range(self):
        ranges = find_conditional_ranges(_parse_all(["#if X", "using A;", "#else", "using B;", "#endif"]))
        assert ranges == [(0, 2), (2, 4)]

    def test_region(self):
        assert find_conditional_ranges(_parse_all(["#region R", "using A;", "#endregion"])) == [(0, 2)]

    def test_unbalanced_closer_ignored(self):
        assert find_conditional_ranges(_parse_all(["#endif", "using A;"])) == []

    def test_mismatched_closer_pops_without_range(self):
        assert find_conditional_ranges(_parse_all(["#if X", "using A;", "#endregion"])) == []

    def test_membership(self):
        assert is_in_conditional_range(1, [(0, 2)])
        assert not is_in_conditional_range(3, [(0, 2)])


class TestUsingGroupSplitter:

    def _split(self, lines, **options):
        return _texts(UsingGroupSplitter(FormatOptions(**options)).split(_parse_all(lines)))

    def test_blank_between_roots_only(self):
        result = self._split(["using System;", "using System.IO;", "using Zeta;"])
        assert result == ["using System;", "using System.IO;", "", "using Zeta;"]

    def test_leading_comment_gets_blank(self):
        assert self._split(["// orphan", "using A;"]) == ["// orphan", "", "using A;"]

    def test_no_directives_unchanged(self):
        assert self._split(["// only", "#pragma warning disable"]) == ["// only", "#pragma warning disable"]

    def test_consecutive_aliases_stay_together(self):
        result = self._split([
            "using System;", "using Zeta;", "using Json = Newtonsoft.Json;", "using Xml = System.Xml;",
        ])
        assert result == [
            "using System;", "", "using Zeta;", "", "using Json = Newtonsoft.Json;", "using Xml = System.Xml;",
        ]

    def test_bottom_statics_start_new_group(self):
        result = self._split(["using System;", "using static System.Math;", "using static Zeta.Util;"])
        assert result == ["using System;", "", "using static System.Math;", "", "using static Zeta.Util;"]

    def test_grouped_statics_join_their_namespace(self):
        result = self._split(
            ["using System;", "using static System.Math;", "using Zeta;"],
            static_placement="groupedWithNamespace",
        )
        assert result == ["using System;", "using static System.Math;", "", "using Zeta;"]

    def test_intermixed_statics_group_like_regular(self):
        result = self._split(
            ["using System;", "using static System.Math;", "using Zeta;"],
            static_placement="intermixed",
        )
        assert result == ["using System;", "using static System.Math;", "", "using Zeta;"]


class TestWhitespaceNormalizer:

    def setup_method(self):
        self.normalizer = WhitespaceNormalizer()

    def test_conditional_spacing(self):
        result = self.normalizer.normalize(_parse_all([
            "using S;", "#if X", "using A;", "#endif", "using B;",
        ]))
        assert _texts(result) == ["using S;", "", "#if X", "", "using A;", "", "#endif", "", "using B;"]

    def test_else_spacing(self):
        result = self.normalizer.normalize(_parse_all(["#if X", "using A;", "#else", "using B;", "#endif"]))
        assert _texts(result) == ["#if X", "", "using A;", "", "#else", "", "using B;", "", "#endif"]

    def test_orphan_comment_before_directive(self):
        result = self.normalizer.normalize(_parse_all(["// orphan", "using A;"]))
        assert _texts(result) == ["// orphan", "", "using A;"]

    def test_no_blank_before_if_after_comment(self):
        result = self.normalizer.normalize(_parse_all(["// c", "#if X", "#endif"]))
        assert _texts(result) == ["// c", "#if X", "#endif"]

    def test_adjacent_regions_get_one_blank(self):
        result = self.normalizer.normalize(_parse_all(["#if X", "#endif", "#if Y", "#endif"]))
        assert _texts(result) == ["#if X", "#endif", "", "#if Y", "#endif"]

    def test_idempotent(self):
        inputs = [
            ["using S;", "#if X", "using A;", "#else", "using B;", "#endif", "using C;"],
            ["// orphan", "using A;", "#region R", "using B;", "#endregion"],
            ["using A;", "", "", "using B;"],
        ]
        for lines in inputs:
            once = self.normalizer.normalize(_parse_all(lines))
            twice = self.normalizer.normalize(once)
            assert _texts(twice) == _texts(once)
