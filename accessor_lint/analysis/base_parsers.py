from pathlib import Path
from typing import Any

from tree_sitter import Language, Parser, Tree


class TreeSitterParser:
    """Thin wrapper around a tree-sitter parser for one grammar."""

    def __init__(self, language_capsule: Any, language_name: str):
        self.language_name = language_name
        self.parser = Parser(Language(language_capsule))

    def parse_tree(self, content: str) -> Tree:
        """Parse content into tree-sitter AST.

        Lone surrogates (text read with errors="surrogateescape") are
        are encoded as-is instead of failing the encode.
        """
        return self.parser.parse(content.encode("utf-8", errors="surrogatepass"))


class JavaScriptParser(TreeSitterParser):
    """Parse JS/TS files with the matching tree-sitter grammar."""

    def __init__(self, file_path: Path | None = None, language: str = "javascript"):
        if file_path is not None and file_path.suffix == ".tsx":
            import tree_sitter_typescript as tsts

            super().__init__(tsts.language_tsx(), "tsx")
        elif language == "typescript" or (
            file_path is not None and file_path.suffix == ".ts"
        ):
            import tree_sitter_typescript as tsts

            super().__init__(tsts.language_typescript(), "typescript")
        else:
            # .js, .jsx, .mjs, .cjs
            import tree_sitter_javascript as tsjs

            super().__init__(tsjs.language(), "javascript")


def create_parser(language: str, file_path: Path | None = None) -> JavaScriptParser | None:
    """Return a parser for the given language, or None when unsupported."""
    if language not in ("javascript", "typescript"):
        return None
    return JavaScriptParser(file_path=file_path, language=language)
