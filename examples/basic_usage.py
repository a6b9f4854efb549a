"""
Basic usage example for phptokenizer.
"""

from collections import Counter

from phptokenizer import StructureAnalyzer, TokenKind

analyzer = StructureAnalyzer()

# Two snippets with the same structure and different names
code1 = '''<?php
function total($items) {
    $sum = 0;
    foreach ($items as $item) {
        $sum += $item;
    }
    return $sum;
}
'''

code2 = '''<?php
function count_all($rows) {
    $n = 0;
    foreach ($rows as $row) {
        $n += $row;
    }
    return $n;
}
'''

print("Tokens of the first snippet:")
result1 = analyzer.analyze_code(code1)
for token in result1.tokens:
    print(f"  {token.kind.name:<16} line {token.line}, column {token.column}, length {token.length}")

result2 = analyzer.analyze_code(code2)
kinds1 = [token.kind for token in result1.tokens]
kinds2 = [token.kind for token in result2.tokens]

if kinds1 == kinds2:
    print("\n⚠️  Same structure detected!")
else:
    print("\n✅ Structures differ")

# Broken input still produces tokens, problems come back as diagnostics
broken = analyzer.analyze_code("<?php\nif ($a) {\n    $b = 1;\n")
print(f"\nDiagnostics for broken input: {broken.diagnostics_to_json()}")
counts = Counter(token.kind for token in broken.tokens)
print(f"IF_BEGIN: {counts[TokenKind.IF_BEGIN]}, IF_END: {counts[TokenKind.IF_END]}")
