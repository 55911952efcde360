"""
Custom Pygments lexer for shaderweave syntax highlighting

Highlights GLSL annotated with shaderweave directives, used when the CLI
shows the source line a diagnostic points at.

Token types:
- Keyword.Declaration: Module openers and #end (#module, #vert, #frag, #end)
- Keyword.Namespace: Composition directives (#program, #include, #include_module, #ctypedef)
- Name.Namespace: Directive arguments (module names, paths, type names)
- Comment.Preproc: GLSL's own preprocessor lines (#define, #version, ...)
- Comment.Single: // comments
- Keyword.Type: GLSL types
"""

from pygments.lexer import RegexLexer, bygroups, words
from pygments.token import (
    Text,
    Whitespace,
    Punctuation,
    Name,
    Keyword,
    Comment,
    Number,
    Operator,
    Error,
)

from ..models.directives import PASSTHROUGH_KEYWORDS


GLSL_TYPES = (
    'void', 'bool', 'int', 'uint', 'float', 'double',
    'vec2', 'vec3', 'vec4', 'ivec2', 'ivec3', 'ivec4',
    'uvec2', 'uvec3', 'uvec4', 'bvec2', 'bvec3', 'bvec4',
    'mat2', 'mat3', 'mat4', 'sampler2D', 'sampler3D', 'samplerCube',
)

GLSL_KEYWORDS = (
    'in', 'out', 'inout', 'uniform', 'layout', 'const', 'struct',
    'if', 'else', 'for', 'while', 'do', 'return', 'break', 'continue', 'discard',
)


class ShaderweaveLexer(RegexLexer):
    """
    Lexer for directive-annotated GLSL

    Example:
        #vert main_vs
        layout(location = 0) in vec3 pos;
        #end

    Tokens:
        #vert → Keyword.Declaration
        main_vs → Name.Namespace
        vec3 → Keyword.Type
    """

    name = 'Shaderweave'
    aliases = ['shaderweave', 'glslm']
    filenames = ['*.glslm']

    tokens = {
        'root': [
            (r'//.*?$', Comment.Single),

            # Module structure directives
            (r'(#)(module|vert|frag)\b', bygroups(Punctuation, Keyword.Declaration), 'arguments'),
            (r'(#)(end)\b', bygroups(Punctuation, Keyword.Declaration), 'arguments'),

            # Composition directives
            (r'(#)(program|include_module|include|ctypedef)\b',
             bygroups(Punctuation, Keyword.Namespace), 'arguments'),

            # GLSL preprocessor lines pass through
            (r'#\s*(%s)\b.*?$' % '|'.join(sorted(PASSTHROUGH_KEYWORDS)), Comment.Preproc),

            # Anything else after a marker is an invalid directive
            (r'#\S*', Error),

            (words(GLSL_TYPES, suffix=r'\b'), Keyword.Type),
            (words(GLSL_KEYWORDS, suffix=r'\b'), Keyword),

            (r'\d+\.\d*([eE][+-]?\d+)?|\.\d+([eE][+-]?\d+)?', Number.Float),
            (r'\d+[uU]?', Number.Integer),

            (r'[a-zA-Z_]\w*', Name),
            (r'[-+*/%<>=!&|^~?:]', Operator),
            (r'[()\[\]{};,.]', Punctuation),
            (r'\s+', Whitespace),
            (r'.', Text),
        ],

        'arguments': [
            (r'\n', Whitespace, '#pop'),
            (r'[ \t]+', Whitespace),
            (r'\S+', Name.Namespace),
        ],
    }


def get_lexer() -> ShaderweaveLexer:
    """
    Get the ShaderweaveLexer instance

    Returns:
        ShaderweaveLexer instance ready for use with Pygments
    """
    return ShaderweaveLexer()
