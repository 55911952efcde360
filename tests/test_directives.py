"""
Directive splitting and classification tests

Tests word splitting of directive lines, keyword lookup, argument count
validation and GLSL pass-through recognition.
"""

import pytest

from shaderweave.lib.directives import DirectiveRegistry, statement_split
from shaderweave.models.directives import (
    CUSTOM_DIRECTIVES,
    PASSTHROUGH_KEYWORDS,
    DirectiveCategory,
    DirectiveKind,
)


@pytest.fixture
def registry():
    return DirectiveRegistry()


class TestStatementSplit:
    """Test whitespace splitting of a directive line"""

    def test_single_word(self):
        """Keyword alone"""
        assert statement_split("end") == ["end"]

    def test_whitespace_runs_collapse(self):
        """Runs of spaces and tabs are one delimiter"""
        assert statement_split("program   main\t\tvs  fs") == ["program", "main", "vs", "fs"]

    def test_leading_and_trailing_whitespace(self):
        """Surrounding whitespace yields no empty words"""
        assert statement_split("  vert  main_vs  ") == ["vert", "main_vs"]

    def test_blank_line(self):
        """Whitespace-only line yields no words"""
        assert statement_split("   \t ") == []

    def test_empty_line(self):
        """Empty line yields no words"""
        assert statement_split("") == []

    def test_no_quoting(self):
        """Quotes are ordinary characters"""
        assert statement_split('include "my file.glsl"') == ["include", '"my', 'file.glsl"']


class TestCustomDirectives:
    """Test classification of the custom keyword table"""

    @pytest.mark.parametrize("words,kind", [
        (["end"], DirectiveKind.END),
        (["module", "common"], DirectiveKind.MODULE),
        (["vert", "vs"], DirectiveKind.VERT),
        (["frag", "fs"], DirectiveKind.FRAG),
        (["program", "main", "vs", "fs"], DirectiveKind.PROGRAM),
        (["include", "lib/noise.glsl"], DirectiveKind.INCLUDE),
        (["include_module", "common"], DirectiveKind.INCLUDE_MODULE),
        (["ctypedef", "vec3", "Vec3"], DirectiveKind.CTYPEDEF),
    ])
    def test_keyword_kinds(self, registry, words, kind):
        """Every custom keyword with its exact argument count"""
        directive = registry.statement_classify(words)
        assert directive.kind is kind
        assert directive.args == tuple(words[1:])
        assert directive.error is None
        assert directive.is_boundary

    def test_too_many_arguments(self, registry):
        """Extra argument is an arity error with expected and actual counts"""
        directive = registry.statement_classify(["end", "now"])
        assert directive.kind is DirectiveKind.INVALID
        assert directive.error == "end: Expected 0 argument(s), got 1."
        assert directive.args == ()

    def test_too_few_arguments(self, registry):
        """Missing arguments is an arity error"""
        directive = registry.statement_classify(["program", "main", "vs"])
        assert directive.kind is DirectiveKind.INVALID
        assert directive.error == "program: Expected 3 argument(s), got 2."

    def test_keywords_are_case_sensitive(self, registry):
        """'Module' is not 'module'"""
        directive = registry.statement_classify(["Module", "x"])
        assert directive.kind is DirectiveKind.INVALID
        assert directive.error == "Module: Invalid token."

    def test_statement_parse(self, registry):
        """Split and classify in one step"""
        directive = registry.statement_parse("ctypedef  mat4\tMat4x4")
        assert directive.kind is DirectiveKind.CTYPEDEF
        assert directive.args == ("mat4", "Mat4x4")


class TestPassthroughAndInvalid:
    """Test GLSL preprocessor keywords and unknown keywords"""

    @pytest.mark.parametrize("keyword", sorted(PASSTHROUGH_KEYWORDS))
    def test_passthrough_keywords(self, registry, keyword):
        """GLSL preprocessor keywords are pass-through, arguments unchecked"""
        directive = registry.statement_classify([keyword, "A", "B", "C", "D", "E"])
        assert directive.kind is DirectiveKind.PASSTHROUGH
        assert directive.error is None
        assert not directive.is_boundary

    def test_empty_directive_is_passthrough(self, registry):
        """A bare marker is GLSL's null directive"""
        directive = registry.statement_classify([])
        assert directive.kind is DirectiveKind.PASSTHROUGH

    def test_unknown_keyword(self, registry):
        """Unknown keyword names itself in the error"""
        directive = registry.statement_classify(["includ", "x.glsl"])
        assert directive.kind is DirectiveKind.INVALID
        assert directive.error == "includ: Invalid token."
        assert directive.is_boundary


class TestRegistry:
    """Test the directive registry tables"""

    def test_all_custom_directives_registered(self, registry):
        """Each spec is reachable by its keyword"""
        for spec in CUSTOM_DIRECTIVES:
            assert registry.spec_get(spec.keyword) is spec

    def test_passthrough_not_registered(self, registry):
        """GLSL keywords are not custom directives"""
        assert registry.spec_get("define") is None

    def test_list_by_category(self, registry):
        """Structural category holds the module openers and #end"""
        keywords = {spec.keyword for spec in registry.directives_listByCategory(DirectiveCategory.STRUCTURAL)}
        assert keywords == {"end", "module", "vert", "frag"}

    def test_usage(self, registry):
        """Usage string lists argument names"""
        assert registry.spec_get("program").usage() == "#program <name> <vert> <frag>"
