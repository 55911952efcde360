"""
Directive splitting and classification for shaderweave

A directive line ("#vert main_vs") is split into words, and its first word is
classified against the custom keyword table, then against GLSL's own
preprocessor keywords. Custom directives get their argument count checked
here so the interpreter only ever sees well-formed directives.
"""

from typing import Dict, List, Optional

from ..models.directives import (
    CUSTOM_DIRECTIVES,
    Directive,
    DirectiveCategory,
    DirectiveKind,
    DirectiveSpec,
    passthrough_is,
)


def statement_split(statement: str) -> List[str]:
    """
    Split one directive line into whitespace-delimited words

    Runs of whitespace are a single delimiter; there is no quoting or
    escaping. A blank line yields no words.

    Args:
        statement: Directive line text, without the marker and newline

    Returns:
        Words in order

    Example:
        >>> statement_split("program  main\\tvs fs ")
        ['program', 'main', 'vs', 'fs']
    """
    return statement.split()


class DirectiveRegistry:
    """
    Registry of custom directive specifications

    Maps directive keywords to DirectiveSpec objects carrying the kind and the
    exact argument count for each keyword.
    """

    def __init__(self) -> None:
        """Initialize the registry with the built-in directive table"""
        self.specs: Dict[str, DirectiveSpec] = {}
        for spec in CUSTOM_DIRECTIVES:
            self.register(spec)

    def register(self, spec: DirectiveSpec) -> None:
        """Register a directive specification"""
        self.specs[spec.keyword] = spec

    def spec_get(self, keyword: str) -> Optional[DirectiveSpec]:
        """Get full directive specification by keyword"""
        return self.specs.get(keyword)

    def directives_listByCategory(self, category: DirectiveCategory) -> List[DirectiveSpec]:
        """Get all directives in a category"""
        return [spec for spec in self.specs.values() if spec.category == category]

    def statement_classify(self, words: List[str]) -> Directive:
        """
        Classify a split directive line

        The first word is looked up in the custom table first; a hit must be
        followed by exactly `arity` arguments. Otherwise a GLSL preprocessor
        keyword (or an empty line) is a pass-through directive, and anything
        else is an invalid token.

        Args:
            words: Output of statement_split()

        Returns:
            Directive; kind INVALID carries the error message

        Example:
            >>> registry.statement_classify(["ctypedef", "vec3", "Vec3"])
            Directive(kind=<DirectiveKind.CTYPEDEF: 'ctypedef'>, keyword='ctypedef', args=('vec3', 'Vec3'), error=None)
            >>> registry.statement_classify(["end", "now"]).error
            'end: Expected 0 argument(s), got 1.'
        """
        if not words:
            return Directive(kind=DirectiveKind.PASSTHROUGH, keyword="")

        keyword, args = words[0], words[1:]

        spec = self.spec_get(keyword)
        if spec is None:
            if passthrough_is(keyword):
                return Directive(kind=DirectiveKind.PASSTHROUGH, keyword=keyword)
            return Directive(
                kind=DirectiveKind.INVALID,
                keyword=keyword,
                error=f"{keyword}: Invalid token.",
            )

        if len(args) != spec.arity:
            return Directive(
                kind=DirectiveKind.INVALID,
                keyword=keyword,
                error=f"{keyword}: Expected {spec.arity} argument(s), got {len(args)}.",
            )

        return Directive(kind=spec.kind, keyword=keyword, args=tuple(args))

    def statement_parse(self, statement: str) -> Directive:
        """Split and classify one directive line"""
        return self.statement_classify(statement_split(statement))
