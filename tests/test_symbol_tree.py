"""Tests for the symbol tree data model and operation types."""

import pickle

import pytest

from symbolic_generation.errors import ArityMismatchError, CatalogueError
from symbolic_generation.symbol_tree import (
    Variable, NumberLiteral, Operation, NodeType, OperationType,
    InfixOperationType, PrefixOperationType, make_operation_type,
    ADDITION, SIN, DIVISION, INFIX_OPERATION_MAP, PREFIX_OPERATION_MAP
)


class PostfixOperationType(OperationType):
    """Extra rendering strategy defined outside the package."""

    def _compose(self, child_strings):
        return " ".join(child_strings) + self.symbol


class TestOperationTypes:

    def test_infix_binary(self):
        assert InfixOperationType("+", 2).render(["x", "3"]) == "x+3"

    def test_prefix_unary(self):
        assert PrefixOperationType("sin", 1).render(["x"]) == "sin(x)"

    def test_infix_generalizes_beyond_binary(self):
        assert InfixOperationType("+", 3).render(["a", "b", "c"]) == "a+b+c"

    def test_prefix_multiple_arguments(self):
        assert PrefixOperationType("max", 2).render(["a", "b"]) == "max(a, b)"

    def test_render_arity_mismatch(self):
        with pytest.raises(ArityMismatchError):
            ADDITION.render(["x"])
        with pytest.raises(ArityMismatchError):
            SIN.render(["x", "y"])

    @pytest.mark.parametrize("arity", [0, -1, 1.5, True, "2"])
    def test_arity_must_be_positive_int(self, arity):
        with pytest.raises(CatalogueError):
            InfixOperationType("+", arity)

    def test_symbol_must_be_non_empty(self):
        with pytest.raises(CatalogueError):
            PrefixOperationType("", 1)

    @pytest.mark.parametrize("symbol", ["\n", "+\r", "f\u2028g"])
    def test_symbol_must_be_single_line(self, symbol):
        with pytest.raises(CatalogueError):
            InfixOperationType(symbol, 2)
        with pytest.raises(CatalogueError):
            PrefixOperationType(symbol, 1)

    def test_get_arity(self):
        assert ADDITION.get_arity() == 2
        assert SIN.get_arity() == 1
        assert DIVISION.sign == "/"
        assert SIN.name == "sin"

    def test_new_strategy_needs_no_call_site_changes(self):
        factorial = PostfixOperationType("!", 1)
        tree = Operation(ADDITION, [Operation(factorial, [NumberLiteral(3)]), Variable("x")])
        assert tree.to_string() == "3!+x"

    def test_builtin_maps(self):
        assert set(INFIX_OPERATION_MAP) == {"+", "*", "-", "/", "^"}
        assert set(PREFIX_OPERATION_MAP) == {"sin", "cos", "ln", "floor"}

    def test_make_operation_type_reuses_builtins(self):
        assert make_operation_type("infix", "+", 2) is ADDITION
        assert make_operation_type("prefix", "sin", 1) is SIN
        ternary = make_operation_type("infix", "+", 3)
        assert ternary is not ADDITION
        assert ternary.arity == 3
        assert isinstance(make_operation_type("prefix", "max", 2), PrefixOperationType)

    def test_make_operation_type_unknown_kind(self):
        with pytest.raises(CatalogueError):
            make_operation_type("postfix", "!", 1)

    def test_equality_and_pickle(self):
        assert InfixOperationType("+", 2) == ADDITION
        assert InfixOperationType("+", 2) != PrefixOperationType("+", 2)
        assert hash(InfixOperationType("+", 2)) == hash(ADDITION)
        assert pickle.loads(pickle.dumps(SIN)) == SIN


class TestNodeType:

    def test_from_category(self):
        assert NodeType.from_category("variable") is NodeType.VARIABLE
        assert NodeType.from_category("Number") is NodeType.NUMBER
        assert NodeType.from_category(NodeType.OPERATION) is NodeType.OPERATION
        assert NodeType.OPERATION.category == "operation"

    def test_unknown_category(self):
        with pytest.raises(CatalogueError):
            NodeType.from_category("constant")


class TestSymbols:

    def test_leaves_render(self):
        assert Variable("x").to_string() == "x"
        assert NumberLiteral(3).to_string() == "3"
        assert NumberLiteral(-4).to_string() == "-4"
        assert str(Variable("theta")) == "theta"

    def test_leaf_validation(self):
        with pytest.raises(ValueError):
            Variable("")
        with pytest.raises(TypeError):
            NumberLiteral(3.0)
        with pytest.raises(TypeError):
            NumberLiteral(True)

    @pytest.mark.parametrize("name", ["a\nb", "x\r", "y\r\n", "z\x0b"])
    def test_variable_name_must_be_single_line(self, name):
        with pytest.raises(ValueError):
            Variable(name)

    def test_operation_arity_checked_on_construction(self):
        with pytest.raises(ArityMismatchError):
            Operation(ADDITION, [Variable("x")])
        with pytest.raises(ArityMismatchError):
            Operation(SIN, [])

    def test_operation_children_must_be_symbols(self):
        with pytest.raises(TypeError):
            Operation(SIN, ["x"])
        with pytest.raises(TypeError):
            Operation("+", [Variable("x"), Variable("y")])

    def test_operation_renders_children_in_order(self):
        x, three = Variable("x"), NumberLiteral(3)
        tree = Operation(DIVISION, [Operation(SIN, [x]), three])
        assert tree.to_string() == "sin(x)/3"
        assert Operation(DIVISION, [three, x]).to_string() == "3/x"

    def test_size_and_depth(self):
        x = Variable("x")
        tree = Operation(ADDITION, [x, Operation(SIN, [x])])
        assert tree.size() == 4
        assert tree.depth() == 2
        assert x.depth() == 0
        assert x.size() == 1
        assert x.is_leaf()
        assert not tree.is_leaf()

    def test_children_are_immutable(self):
        x = Variable("x")
        children = [x, x]
        tree = Operation(ADDITION, children)
        children.append(x)
        assert tree.children == (x, x)
        assert tree.children[0] is x

    def test_node_types(self):
        assert Variable("x").node_type is NodeType.VARIABLE
        assert NumberLiteral(1).node_type is NodeType.NUMBER
        assert Operation(SIN, [Variable("x")]).node_type is NodeType.OPERATION

    def test_structural_equality(self):
        first = Operation(ADDITION, [Variable("x"), NumberLiteral(3)])
        second = Operation(ADDITION, [Variable("x"), NumberLiteral(3)])
        swapped = Operation(ADDITION, [NumberLiteral(3), Variable("x")])
        assert first == second
        assert hash(first) == hash(second)
        assert first != swapped
        assert Variable("x") != NumberLiteral(3)
        assert len({first, second, swapped}) == 2

    def test_pickle_round_trip(self):
        tree = Operation(ADDITION, [Operation(SIN, [Variable("x")]), NumberLiteral(3)])
        hash(tree)
        restored = pickle.loads(pickle.dumps(tree))
        assert restored == tree
        assert restored.to_string() == "sin(x)+3"
        assert hash(restored) == hash(tree)
