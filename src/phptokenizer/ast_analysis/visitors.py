"""
Structural visitor for PHP syntax trees.

Each ``visit_<node type>`` method is one emission rule. A rule emits its
leading tokens right away and returns either ``None`` to fall back to the
default rule (descend into the children) or a list of steps that fully
describes what happens with the rest of the node.
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Union

from ..exceptions import TraversalError
from ..tokens import TokenKind
from .models import Span
from .token_builder import TokenBuilder


@dataclass(frozen=True)
class Visit:
    """Dispatch a node through the rules."""
    node: Any


@dataclass(frozen=True)
class Descend:
    """Visit every named child of a node in source order."""
    node: Any


@dataclass(frozen=True)
class Destructure:
    """Apply the list rule to a destructuring pattern."""
    node: Any


@dataclass(frozen=True)
class Emit:
    """Add a token at the start of an anchor."""
    kind: TokenKind
    anchor: Any


@dataclass(frozen=True)
class EmitEnd:
    """Add a closing token on the last character of a node."""
    kind: TokenKind
    node: Any


Step = Union[Visit, Descend, Destructure, Emit, EmitEnd]

ECHO_TAG = b"<?="
PATTERN_TYPES = frozenset({"list_literal", "array_creation_expression"})
PATTERN_DELIMITERS = frozenset({"list", "array", "(", ")", "[", "]"})

# Calls that read like functions but are language constructs.
INTRINSIC_CALLS = {
    "isset": TokenKind.ISSET,
    "eval": TokenKind.EVAL,
    "unset": TokenKind.UNSET,
}
WHOLE_NODE_CALLS = frozenset({"exit", "die", "empty"})
EXIT_NAMES = frozenset({b"exit", b"die"})

# Parents under which a bare ``exit``/``die`` is an expression of its own.
BARE_EXIT_PARENTS = frozenset({
    "expression_statement",
    "binary_expression",
    "conditional_expression",
    "parenthesized_expression",
    "sequence_expression",
    "argument",
    "return_statement",
})


class StructureVisitor:
    """Walks a tree-sitter PHP tree and feeds structural tokens to a builder."""

    def __init__(self, token_builder: TokenBuilder, source: bytes):
        self.token_builder = token_builder
        self.source = source

    def walk(self, root: Any) -> TokenBuilder:
        """
        Visit the tree below ``root`` depth-first, in source order.

        Uses an explicit work stack, so deeply nested sources do not
        exhaust the interpreter stack.
        """
        stack: List[Step] = [Descend(root)]
        while stack:
            step = stack.pop()
            if isinstance(step, Visit):
                stack.extend(reversed(self.visit(step.node)))
            elif isinstance(step, Descend):
                stack.extend(Visit(child) for child in reversed(step.node.named_children))
            elif isinstance(step, Destructure):
                stack.extend(reversed(self._destructure(step.node)))
            elif isinstance(step, Emit):
                self.token_builder.add(step.kind, step.anchor)
            else:
                self.token_builder.add_end(step.kind, step.node)
        return self.token_builder

    def visit(self, node: Any) -> List[Step]:
        """Select the rule for a node and return the steps that follow it."""
        method = getattr(self, f"visit_{node.type}", None)
        if method is None:
            return self.generic_visit(node)
        try:
            steps = method(node)
        except TraversalError:
            raise
        except Exception as e:
            raise TraversalError(f"Failed on {self._describe(node)}: {e}") from e
        if steps is None:
            return self.generic_visit(node)
        return steps

    def generic_visit(self, node: Any) -> List[Step]:
        return [Descend(node)]

    # -- helpers ------------------------------------------------------------

    def _describe(self, node: Any) -> str:
        position = self.token_builder.positions.start_position(node)
        return f"{node.type} at line {position.line}, column {position.column}"

    def _text(self, node: Any) -> bytes:
        return self.source[node.start_byte:node.end_byte]

    def _find_token(self, node: Any, *types: str) -> Optional[Any]:
        for child in node.children:
            if child.type in types:
                return child
        return None

    def _token(self, node: Any, *types: str) -> Any:
        token = self._find_token(node, *types)
        if token is None:
            expected = " or ".join(repr(t) for t in types)
            raise TraversalError(f"{self._describe(node)} has no {expected}")
        return token

    def _field(self, node: Any, name: str) -> Any:
        child = node.child_by_field_name(name)
        if child is None:
            raise TraversalError(f"{self._describe(node)} has no {name!r} field")
        return child

    def _named(self, node: Any, *types: str) -> Any:
        for child in node.named_children:
            if child.type in types:
                return child
        expected = " or ".join(types)
        raise TraversalError(f"{self._describe(node)} has no {expected}")

    def _add(self, kind: TokenKind, anchor: Any) -> None:
        self.token_builder.add(kind, anchor)

    def _mark(self, node: Any, kind: TokenKind, *keywords: str) -> None:
        self._add(kind, self._token(node, *keywords))

    def _bracket(self, node: Any, begin: TokenKind, end: TokenKind, *keywords: str) -> List[Step]:
        self._mark(node, begin, *keywords)
        return [Descend(node), EmitEnd(end, node)]

    # -- declarations -------------------------------------------------------

    def visit_class_declaration(self, node: Any) -> List[Step]:
        """Visit class declarations."""
        return self._bracket(node, TokenKind.CLASS_BEGIN, TokenKind.CLASS_END, "class")

    def visit_interface_declaration(self, node: Any) -> List[Step]:
        """Visit interface declarations."""
        return self._bracket(node, TokenKind.INTERFACE_BEGIN, TokenKind.INTERFACE_END, "interface")

    def visit_trait_declaration(self, node: Any) -> List[Step]:
        """Visit trait declarations."""
        return self._bracket(node, TokenKind.TRAIT_BEGIN, TokenKind.TRAIT_END, "trait")

    def visit_function_definition(self, node: Any) -> List[Step]:
        """Visit functions, methods and closures."""
        return self._bracket(node, TokenKind.FUNCTION_BEGIN, TokenKind.FUNCTION_END, "function")

    visit_method_declaration = visit_function_definition
    visit_anonymous_function = visit_function_definition
    visit_anonymous_function_creation_expression = visit_function_definition

    def visit_namespace_definition(self, node: Any) -> None:
        self._mark(node, TokenKind.NAMESPACE, "namespace")

    def visit_namespace_use_declaration(self, node: Any) -> None:
        self._mark(node, TokenKind.NAMESPACE_USE, "use")

    def visit_static_variable_declaration(self, node: Any) -> None:
        """Visit one variable of a ``static`` list."""
        name = node.child_by_field_name("name")
        if name is None:
            name = self._named(node, "variable_name")
        self._add(TokenKind.VARDEF, name)

    def visit_const_element(self, node: Any) -> None:
        self._add(TokenKind.VARDEF, self._named(node, "name"))

    def visit_property_declaration(self, node: Any) -> List[Step]:
        """Each property is a definition of its own; modifiers and types are skipped."""
        steps: List[Step] = []
        for element in node.named_children:
            if element.type == "property_element":
                steps.append(Emit(TokenKind.VARDEF, element))
                steps.append(Visit(element))
        return steps

    def visit_property_element(self, node: Any) -> None:
        """An initialized property assigns its default value."""
        operator = self._find_token(node, "=")
        if operator is None:
            for child in node.named_children:
                if child.type == "property_initializer":
                    operator = self._find_token(child, "=")
        if operator is not None:
            self._add(TokenKind.ASSIGN, operator)

    def visit_use_declaration(self, node: Any) -> List[Step]:
        """Trait use inside a class body: one token per trait, then the adaptations."""
        steps: List[Step] = []
        for child in node.named_children:
            if child.type in ("name", "qualified_name"):
                steps.append(Emit(TokenKind.TRAIT_USE, child))
                steps.append(Visit(child))
        for child in node.named_children:
            if child.type == "use_list":
                steps.append(Descend(child))
        return steps

    # -- control flow -------------------------------------------------------

    def visit_for_statement(self, node: Any) -> List[Step]:
        """Visit for and foreach loops."""
        return self._bracket(node, TokenKind.FOR_BEGIN, TokenKind.FOR_END, "for", "foreach")

    visit_foreach_statement = visit_for_statement

    def visit_while_statement(self, node: Any) -> List[Step]:
        """Visit while loops."""
        return self._bracket(node, TokenKind.WHILE_BEGIN, TokenKind.WHILE_END, "while")

    def visit_do_statement(self, node: Any) -> List[Step]:
        """Visit do-while loops."""
        return self._bracket(node, TokenKind.DO_BEGIN, TokenKind.DO_END, "do")

    def visit_switch_statement(self, node: Any) -> List[Step]:
        """Visit switch statements."""
        return self._bracket(node, TokenKind.SWITCH_BEGIN, TokenKind.SWITCH_END, "switch")

    def visit_catch_clause(self, node: Any) -> List[Step]:
        """Visit catch clauses."""
        return self._bracket(node, TokenKind.CATCH_BEGIN, TokenKind.CATCH_END, "catch")

    def visit_break_statement(self, node: Any) -> None:
        """Visit break and continue."""
        keyword = self._token(node, "break", "continue")
        kind = TokenKind.BREAK if keyword.type == "break" else TokenKind.CONTINUE
        self._add(kind, keyword)

    visit_continue_statement = visit_break_statement

    def visit_if_statement(self, node: Any) -> List[Step]:
        """
        An ``elseif`` is tokenized like ``else if``, so the chain closes once
        for every ``elseif`` clause and once for itself.
        """
        self._mark(node, TokenKind.IF_BEGIN, "if")
        else_ifs = sum(1 for child in node.named_children if child.type == "else_if_clause")
        return [Descend(node)] + [EmitEnd(TokenKind.IF_END, node)] * (else_ifs + 1)

    def visit_else_if_clause(self, node: Any) -> None:
        keyword = self._token(node, "elseif")
        self._add(TokenKind.ELSE, keyword)
        self._add(TokenKind.IF_BEGIN, keyword)

    def visit_else_clause(self, node: Any) -> None:
        self._mark(node, TokenKind.ELSE, "else")

    def visit_case_statement(self, node: Any) -> None:
        self._mark(node, TokenKind.CASE, "case")

    def visit_default_statement(self, node: Any) -> None:
        self._mark(node, TokenKind.CASE, "default")

    def visit_goto_statement(self, node: Any) -> None:
        self._mark(node, TokenKind.GOTO, "goto")

    def visit_return_statement(self, node: Any) -> None:
        self._mark(node, TokenKind.RETURN, "return")

    def visit_throw_expression(self, node: Any) -> None:
        self._mark(node, TokenKind.THROW, "throw")

    visit_throw_statement = visit_throw_expression

    def visit_try_statement(self, node: Any) -> None:
        # Closed by the catch and finally clauses.
        self._mark(node, TokenKind.TRY, "try")

    def visit_finally_clause(self, node: Any) -> None:
        self._mark(node, TokenKind.FINALLY, "finally")

    # -- markup -------------------------------------------------------------

    def visit_text_interpolation(self, node: Any) -> List[Step]:
        """Visit markup between a closing and an opening tag."""
        return self._markup(node, self._opening_tag(node))

    def visit_text(self, node: Any) -> List[Step]:
        # Markup before the first opening tag of the file.
        return self._markup(node, self._opening_tag(node))

    def visit_php_tag(self, node: Any) -> List[Step]:
        previous = node.prev_named_sibling
        if previous is not None and previous.type in ("text", "text_interpolation"):
            return []
        return self._markup(node, node)

    def _opening_tag(self, segment: Any) -> Optional[Any]:
        if segment.children and segment.children[-1].type == "php_tag":
            return segment.children[-1]
        following = segment.next_named_sibling
        if following is not None and following.type == "php_tag":
            return following
        return None

    def _is_echo_tag(self, tag: Any) -> bool:
        return self._text(tag) == ECHO_TAG

    def _markup(self, segment: Any, tag: Optional[Any]) -> List[Step]:
        if tag is not None and self._is_echo_tag(tag):
            # The echoed expression that follows emits the token.
            return []
        if self.token_builder.positions.start_position(segment) != (1, 1):
            self._add(TokenKind.ECHO, tag if tag is not None else segment)
        return []

    def _is_echo_tag_node(self, node: Optional[Any]) -> bool:
        if node is None:
            return False
        if node.type == "php_tag":
            tag = node
        elif node.type == "text_interpolation":
            tag = self._opening_tag(node)
        else:
            return False
        return tag is not None and self._is_echo_tag(tag)

    def _follows_echo_tag(self, node: Any) -> bool:
        return self._is_echo_tag_node(node.prev_named_sibling)

    def _echo_prefix(self, node: Any) -> Optional[Any]:
        """
        The recovered head of a multi-argument echo shorthand.

        ``<?= $a, $b ?>`` does not parse as a statement: the expressions up
        to the last comma end up in an ERROR node between the tag and the
        statement holding the last expression.
        """
        previous = node.prev_named_sibling
        if previous is None or previous.type != "ERROR":
            return None
        if self._is_echo_tag_node(previous.prev_named_sibling):
            return previous
        if previous.children and self._is_echo_tag_node(previous.children[0]):
            return previous
        return None

    def _prefix_start(self, prefix: Any) -> int:
        for child in prefix.children:
            if not self._is_echo_tag_node(child):
                return child.start_byte
        return prefix.start_byte

    # -- expressions --------------------------------------------------------

    def visit_expression_statement(self, node: Any) -> Optional[List[Step]]:
        """Visit expression statements, which double as echo shorthands after ``<?=``."""
        if self._follows_echo_tag(node):
            return self._echo(node, None)
        prefix = self._echo_prefix(node)
        if prefix is not None:
            self._add(TokenKind.ECHO, Span(self._prefix_start(prefix), node.end_byte))
            return []
        return None

    def visit_ERROR(self, node: Any) -> Optional[List[Step]]:
        # The head of an echo shorthand is covered by the statement after it.
        following = node.next_named_sibling
        if following is not None and following.type == "expression_statement":
            if self._echo_prefix(following) is node:
                return []
        return None

    def visit_echo_statement(self, node: Any) -> List[Step]:
        return self._echo(node, self._find_token(node, "echo"))

    def _echo(self, node: Any, keyword: Optional[Any]) -> List[Step]:
        """Echo covers its arguments; only a broken argument list is visited."""
        expressions = [child for child in node.named_children if child.type != "comment"]
        if keyword is not None:
            anchor = keyword
        elif expressions:
            anchor = Span.between(expressions[0], expressions[-1])
        else:
            anchor = node
        self._add(TokenKind.ECHO, anchor)
        return [
            Visit(child) for child in expressions
            if child.is_missing or child.type == "ERROR"
        ]

    def visit_print_intrinsic(self, node: Any) -> None:
        self._mark(node, TokenKind.ECHO, "print")

    def visit_unset_statement(self, node: Any) -> None:
        self._mark(node, TokenKind.UNSET, "unset")

    def visit_assignment_expression(self, node: Any) -> Optional[List[Step]]:
        """Visit plain, compound and by-reference assignments."""
        left = self._field(node, "left")
        if left.type in PATTERN_TYPES:
            # The pattern's elements are the assignments.
            steps: List[Step] = [Destructure(left)]
            steps.extend(
                Visit(child) for child in node.named_children
                if child.start_byte >= left.end_byte
            )
            return steps
        self._add(TokenKind.ASSIGN, self._operator(node))
        return None

    visit_augmented_assignment_expression = visit_assignment_expression
    visit_reference_assignment_expression = visit_assignment_expression

    def _operator(self, node: Any) -> Any:
        operator = node.child_by_field_name("operator")
        if operator is not None:
            return operator
        for child in node.children:
            if not child.is_named and child.type.endswith("="):
                return child
        raise TraversalError(f"{self._describe(node)} has no assignment operator")

    def visit_update_expression(self, node: Any) -> None:
        """Only postfix increments and decrements count as assignments."""
        operator = node.children[-1]
        if node.children[0].is_named and operator.type in ("++", "--"):
            self._add(TokenKind.ASSIGN, operator)

    def visit_conditional_expression(self, node: Any) -> None:
        self._mark(node, TokenKind.TERNARY, "?", "?:")

    def visit_object_creation_expression(self, node: Any) -> Optional[List[Step]]:
        """Visit ``new``; an anonymous class body is bracketed on its own."""
        self._mark(node, TokenKind.NEW_CLASS, "new")
        class_keyword = self._anonymous_class_keyword(node)
        if class_keyword is None:
            return None
        self._add(TokenKind.IN_CLASS_BEGIN, class_keyword)
        return [Descend(node), EmitEnd(TokenKind.IN_CLASS_END, node)]

    def visit_anonymous_class(self, node: Any) -> Optional[List[Step]]:
        parent = node.parent
        if parent is not None and parent.type == "object_creation_expression":
            return None
        # Grammars that fold ``new`` into the anonymous class itself.
        return self.visit_object_creation_expression(node)

    def _anonymous_class_keyword(self, node: Any) -> Optional[Any]:
        for child in node.children:
            if child.type == "class":
                return child
            if child.type == "anonymous_class":
                return self._token(child, "class")
        return None

    def visit_array_creation_expression(self, node: Any) -> None:
        self._mark(node, TokenKind.NEW_ARRAY, "array", "[")

    def visit_function_call_expression(self, node: Any) -> None:
        """Visit calls, including the constructs that look like calls."""
        callee = self._field(node, "function")
        name = self._text(callee).decode("utf-8", errors="replace").lower() if callee.type == "name" else None
        if name in WHOLE_NODE_CALLS:
            self._add(TokenKind.APPLY, node)
        else:
            self._add(INTRINSIC_CALLS.get(name, TokenKind.APPLY), callee)

    def visit_member_call_expression(self, node: Any) -> None:
        # The callee spans the receiver and the method name.
        name = self._field(node, "name")
        self._add(TokenKind.APPLY, Span(node.start_byte, name.end_byte))

    visit_nullsafe_member_call_expression = visit_member_call_expression
    visit_scoped_call_expression = visit_member_call_expression

    def visit_clone_expression(self, node: Any) -> None:
        self._add(TokenKind.APPLY, node)

    def visit_exit_statement(self, node: Any) -> None:
        """``exit`` covers its keyword and argument list, not the terminator."""
        covered = [child for child in node.children if child.type not in (";", "text_interpolation")]
        self._add(TokenKind.APPLY, Span(node.start_byte, covered[-1].end_byte))

    def visit_name(self, node: Any) -> None:
        """A bare ``exit`` or ``die`` without parentheses."""
        parent = node.parent
        if parent is not None and parent.type in BARE_EXIT_PARENTS:
            if self._text(node).lower() in EXIT_NAMES:
                self._add(TokenKind.APPLY, node)

    def visit_yield_expression(self, node: Any) -> None:
        """Visit ``yield`` and ``yield from``."""
        self._mark(node, TokenKind.YIELD, "yield", "yield from")

    # -- destructuring ------------------------------------------------------

    def visit_list_literal(self, node: Any) -> List[Step]:
        return self._destructure(node)

    def _destructure(self, pattern: Any) -> List[Step]:
        """
        Every element binding a value is an assignment. Elements holding a
        nested pattern are not, their own elements are.
        """
        steps: List[Step] = []
        for element in self._pattern_elements(pattern):
            parts = self._element_parts(element)
            if not parts:
                continue
            value = parts[-1]
            if value.type not in PATTERN_TYPES:
                steps.append(Emit(TokenKind.ASSIGN, Span.between(element[0], element[-1])))
            for part in parts[:-1]:
                steps.append(Visit(part))
            if value.type in PATTERN_TYPES:
                steps.append(Destructure(value))
            else:
                steps.append(Visit(value))
        return steps

    def _pattern_elements(self, pattern: Any) -> List[List[Any]]:
        elements: List[List[Any]] = []
        current: List[Any] = []
        for child in pattern.children:
            if child.type == ",":
                elements.append(current)
                current = []
            elif child.type not in PATTERN_DELIMITERS and child.type != "comment":
                current.append(child)
        elements.append(current)
        return [element for element in elements if element]

    def _element_parts(self, element: List[Any]) -> List[Any]:
        parts: List[Any] = []
        for child in element:
            if child.type == "array_element_initializer":
                parts.extend(c for c in child.named_children if c.type != "comment")
            elif child.is_named and child.type != "comment":
                parts.append(child)
        return parts
