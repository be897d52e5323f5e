import pytest

from postfix_interp.errors import ParseError, ParseErrorKind
from postfix_interp.parser import (
    MAX_DEPTH,
    TreeBuilder,
    is_integer_literal,
    is_symbol_name,
    make_parse_tree,
)
from postfix_interp.tokenizer import TokenStack
from postfix_interp.tree import InteriorNode, LeafKind, LeafNode, Operator


def parse_error_kind(line, allocator):
    with pytest.raises(ParseError) as e:
        make_parse_tree(line, allocator)
    return e.value.kind


# ---------------------------
# Token classification
# ---------------------------

@pytest.mark.parametrize("token", ["0", "42", "-12", "007", "-0"])
def test_integer_literals(token):
    assert is_integer_literal(token)


@pytest.mark.parametrize("token", ["", "-", "+5", "12a", "1.5", "--3", "x"])
def test_not_integer_literals(token):
    assert not is_integer_literal(token)


@pytest.mark.parametrize("token", ["x", "X1", "abc123", "Zz9"])
def test_symbol_names(token):
    assert is_symbol_name(token)


@pytest.mark.parametrize("token", ["", "1x", "x_y", "_a", "é", "aé", "a-b"])
def test_not_symbol_names(token):
    assert not is_symbol_name(token)


# ---------------------------
# Tree shapes
# ---------------------------

def test_binary_operator_builds_left_and_right(allocator):
    root = make_parse_tree("3 4 +", allocator)
    assert isinstance(root, InteriorNode)
    assert root.op is Operator.ADD
    assert root.left.token == "3"
    assert root.right.token == "4"
    assert allocator.live == 3


def test_nested_operands_keep_source_order(allocator):
    root = make_parse_tree("1 2 3 * -", allocator)
    assert root.op is Operator.SUB
    assert root.left.token == "1"
    assert root.right.op is Operator.MUL
    assert [root.right.left.token, root.right.right.token] == ["2", "3"]


def test_assignment_token_and_leaf_kinds(allocator):
    root = make_parse_tree("x 5 <-", allocator)
    assert root.op is Operator.ASSIGN
    assert root.token == "<-"
    assert isinstance(root.left, LeafNode) and root.left.kind is LeafKind.SYMBOL
    assert root.right.kind is LeafKind.INTEGER


def test_conditional_wraps_branches_in_alternative(allocator):
    root = make_parse_tree("c a b ?", allocator)
    assert root.op is Operator.CONDITIONAL
    assert root.left.token == "c"
    alternative = root.right
    assert alternative.op is Operator.ALTERNATIVE
    assert alternative.left.token == "a"
    assert alternative.right.token == "b"
    assert allocator.live == 5


def test_minus_token_is_operator_and_negative_literal_is_leaf(allocator):
    root = make_parse_tree("3 -4 -", allocator)
    assert root.op is Operator.SUB
    assert root.right.kind is LeafKind.INTEGER
    assert root.right.token == "-4"


def test_builder_consumes_only_one_tree():
    stack = TokenStack.from_tokens(["9", "1", "2", "+"])
    root = TreeBuilder(stack).build()
    assert root.op is Operator.ADD
    assert len(stack) == 1 and stack.top() == "9"


# ---------------------------
# Errors and release
# ---------------------------

def test_lone_operator_is_too_few_tokens_and_leaks_nothing(allocator):
    assert parse_error_kind("+", allocator) is ParseErrorKind.TOO_FEW_TOKENS
    assert allocator.live == 0


def test_empty_line_is_too_few_tokens(allocator):
    assert parse_error_kind("", allocator) is ParseErrorKind.TOO_FEW_TOKENS
    assert parse_error_kind("  \t ", allocator) is ParseErrorKind.TOO_FEW_TOKENS
    assert allocator.allocated == 0


def test_leftover_tokens_are_too_many_and_tree_released(allocator):
    assert parse_error_kind("3 4 + 5", allocator) is ParseErrorKind.TOO_MANY_TOKENS
    assert allocator.live == 0

    assert parse_error_kind("1 2 3 +", allocator) is ParseErrorKind.TOO_MANY_TOKENS
    assert allocator.live == 0
    assert allocator.allocated == 4


def test_illegal_token(allocator):
    assert parse_error_kind("3 @", allocator) is ParseErrorKind.ILLEGAL_TOKEN
    assert allocator.live == 0


def test_illegal_left_operand_releases_built_right_operand(allocator):
    assert parse_error_kind("1 @ 2 +", allocator) is ParseErrorKind.ILLEGAL_TOKEN
    assert allocator.allocated == 1
    assert allocator.live == 0


def test_short_conditional_releases_built_branches(allocator):
    assert parse_error_kind("1 2 ?", allocator) is ParseErrorKind.TOO_FEW_TOKENS
    assert allocator.allocated == 2
    assert allocator.live == 0


def test_deep_failure_releases_every_partial_subtree(allocator):
    # the condition token is illegal; both branches were built first
    assert parse_error_kind("@ 1 2 + 3 4 * ?", allocator) is ParseErrorKind.ILLEGAL_TOKEN
    assert allocator.allocated == 6
    assert allocator.live == 0


def test_first_error_wins(allocator):
    # the illegal right operand stops the build before the missing left one
    assert parse_error_kind("@ +", allocator) is ParseErrorKind.ILLEGAL_TOKEN
    assert parse_error_kind("$ 1 ?", allocator) is ParseErrorKind.ILLEGAL_TOKEN
    assert allocator.allocated == 1
    assert allocator.live == 0


def test_equals_sign_is_not_an_assignment_token(allocator):
    assert parse_error_kind("x 5 =", allocator) is ParseErrorKind.ILLEGAL_TOKEN


def test_parse_error_message_names_kind(allocator):
    with pytest.raises(ParseError) as e:
        make_parse_tree("3 @", allocator)
    assert "illegal token" in str(e.value)
    assert "'@'" in str(e.value)


# ---------------------------
# Nesting depth
# ---------------------------

def left_chain(levels):
    return "1 " + "1 + " * levels


def test_nesting_up_to_limit_builds(allocator):
    root = make_parse_tree(left_chain(MAX_DEPTH), allocator)
    assert allocator.allocated == 2 * MAX_DEPTH + 1
    allocator.release(root)
    assert allocator.live == 0


def test_nesting_past_limit_is_rejected_and_leaks_nothing(allocator):
    assert parse_error_kind(left_chain(MAX_DEPTH + 1), allocator) is ParseErrorKind.NESTING_TOO_DEEP
    assert allocator.allocated == MAX_DEPTH
    assert allocator.live == 0


def test_thousands_of_levels_do_not_exhaust_the_call_stack(allocator):
    assert parse_error_kind(left_chain(5000), allocator) is ParseErrorKind.NESTING_TOO_DEEP
    assert parse_error_kind("1 " * 5000 + "+ " * 4999, allocator) is ParseErrorKind.NESTING_TOO_DEEP
    assert allocator.live == 0


def test_max_depth_argument(allocator):
    allocator.release(make_parse_tree("1 2 +", allocator, max_depth=1))
    allocator.release(make_parse_tree("c 1 2 ?", allocator, max_depth=1))
    with pytest.raises(ParseError) as e:
        make_parse_tree("1 2 + 3 *", allocator, max_depth=1)
    assert e.value.kind is ParseErrorKind.NESTING_TOO_DEEP
    assert "more than 1 levels" in str(e.value)
    assert allocator.live == 0


def test_unexpected_error_still_releases_partial_subtrees(allocator, monkeypatch):
    def fail(self, entry):
        raise RuntimeError("allocation failed")

    monkeypatch.setattr(TreeBuilder, "_make_interior", fail)
    with pytest.raises(RuntimeError):
        make_parse_tree("3 1 2 + *", allocator)
    assert allocator.allocated == 2
    assert allocator.live == 0
