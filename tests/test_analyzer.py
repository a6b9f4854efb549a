"""
Tests for the StructureAnalyzer facade.
"""

import json

from phptokenizer.ast_analysis import tokenize
from phptokenizer.tokens import TokenKind


class TestStructureAnalyzer:
    """Test StructureAnalyzer entry points."""

    def test_analyze_file(self, analyzer, tmp_path):
        path = tmp_path / "loop.php"
        path.write_bytes(b"<?php\nwhile ($a) {\n    $a--;\n}\n")

        result = analyzer.analyze_file(str(path))

        assert result.file_path == str(path)
        assert not result.has_errors
        assert [t.kind for t in result.tokens] == [
            TokenKind.WHILE_BEGIN, TokenKind.ASSIGN, TokenKind.WHILE_END,
        ]

    def test_analyze_file_reports_diagnostics(self, analyzer, tmp_path):
        path = tmp_path / "broken.php"
        path.write_bytes(b"<?php\nfunction f() {\n")

        result = analyzer.analyze_file(str(path))

        assert result.has_errors
        assert json.loads(result.diagnostics_to_json())

    def test_file_and_code_agree(self, analyzer, tmp_path):
        code = "<?php\nforeach ($xs as $x) { echo $x; }\n"
        path = tmp_path / "same.php"
        path.write_text(code)

        from_file = analyzer.analyze_file(str(path)).tokens_to_json()
        from_code = analyzer.analyze_code(code).tokens_to_json()
        assert from_file == from_code

    def test_tokenize_helper(self):
        tokens = tokenize("<?php\nreturn 1;\n")

        assert len(tokens) == 1
        assert tokens[0].kind is TokenKind.RETURN
        assert (tokens[0].line, tokens[0].column, tokens[0].length) == (2, 1, 6)
