"""Tests for the arena-backed binary tree."""

import pytest

from sch2drawio.drawio.tree import BinaryTree


class TestBinaryTree:
    """Linking and navigation."""

    def test_empty(self):
        tree = BinaryTree()
        assert len(tree) == 0
        assert tree.root is None

    def test_link_children(self):
        tree = BinaryTree()
        root = tree.add_node("root")
        left = tree.add_node("l")
        right = tree.add_node("r")
        tree.set_left(root, left)
        tree.set_right(root, right)
        assert tree.children(root) == [left, right]
        assert tree.parent(left) == root
        assert tree.root == root

    def test_replacing_child_detaches_previous(self):
        tree = BinaryTree()
        root = tree.add_node("root")
        first = tree.add_node("first")
        second = tree.add_node("second")
        tree.set_left(root, first)
        tree.set_left(root, second)
        assert tree.left(root) == second
        assert tree.parent(first) is None

    def test_reparenting_detaches_from_old_parent(self):
        tree = BinaryTree()
        a = tree.add_node("a")
        b = tree.add_node("b")
        child = tree.add_node("child")
        tree.set_left(a, child)
        tree.set_right(b, child)
        assert tree.left(a) is None
        assert tree.right(b) == child
        assert tree.parent(child) == b

    def test_clearing_child(self):
        tree = BinaryTree()
        root = tree.add_node("root")
        leaf = tree.add_node("leaf")
        tree.set_right(root, leaf)
        tree.set_right(root, None)
        assert tree.right(root) is None
        assert tree.parent(leaf) is None

    def test_self_link_rejected(self):
        tree = BinaryTree()
        node = tree.add_node("n")
        with pytest.raises(ValueError):
            tree.set_left(node, node)

    def test_cycle_rejected(self):
        tree = BinaryTree()
        top = tree.add_node("top")
        middle = tree.add_node("middle")
        bottom = tree.add_node("bottom")
        tree.set_left(top, middle)
        tree.set_left(middle, bottom)
        with pytest.raises(ValueError):
            tree.set_right(bottom, top)
        # The failed link leaves the tree unchanged
        assert tree.parent(top) is None
        assert tree.right(bottom) is None

    def test_ancestors(self):
        tree = BinaryTree.from_dict({"a": [{"b": [{"c": []}]}]})
        c = next(i for i in range(len(tree)) if tree.value(i) == "c")
        assert [tree.value(i) for i in tree.ancestors(c)] == ["b", "a"]

    def test_bad_index(self):
        with pytest.raises(IndexError):
            BinaryTree().value(0)


class TestFromDict:
    """Building from nested mappings."""

    def test_nested(self):
        tree = BinaryTree.from_dict({"root": ["a", {"b": ["c", None]}]})
        root = tree.root
        assert tree.value(root) == "root"
        assert tree.value(tree.left(root)) == "a"
        b = tree.right(root)
        assert tree.value(b) == "b"
        assert tree.value(tree.left(b)) == "c"
        assert tree.right(b) is None
        assert tree.parent(b) == root

    def test_right_only(self):
        tree = BinaryTree.from_dict({"root": [None, "r"]})
        assert tree.left(tree.root) is None
        assert tree.value(tree.right(tree.root)) == "r"

    def test_multiple_roots_rejected(self):
        with pytest.raises(ValueError):
            BinaryTree.from_dict({"a": [], "b": []})
