"""Tests for the compound graph and its mutation rules."""

import threading

import pytest
from chemchain import Atom, CompoundGraph, Molecule, MutationConflictError


def _add(graph: CompoundGraph, num: int = 6) -> int:
    return graph.add_compound(Atom.from_atomic_number(num))


class TestArena:
    """Test node storage and lookup."""

    def test_indices_are_sequential(self, graph: CompoundGraph) -> None:
        assert [_add(graph) for _ in range(3)] == [0, 1, 2]
        assert len(graph) == 3
        assert graph.num_compounds == 3

    def test_iteration_order(self, graph: CompoundGraph) -> None:
        for num in (6, 7, 8):
            _add(graph, num)
        assert [c.center.symbol for c in graph] == ["C", "N", "O"]

    def test_unknown_index(self, graph: CompoundGraph) -> None:
        _add(graph)
        with pytest.raises(IndexError):
            graph[1]
        with pytest.raises(IndexError):
            graph[-1]

    def test_contains(self, graph: CompoundGraph) -> None:
        node = graph[_add(graph)]
        other = CompoundGraph()
        assert node in graph
        assert node not in other

    def test_center_must_be_atom(self, graph: CompoundGraph) -> None:
        with pytest.raises(TypeError):
            graph.add_compound(6)


class TestAddSubstituent:
    """Test add_substituent()."""

    def test_appends_in_order(self, graph: CompoundGraph) -> None:
        idx = _add(graph, 3)
        argon = Atom.from_atomic_number(18)
        nitrogen = Molecule.of(7, 7)
        graph.add_substituent(idx, argon)
        graph.add_substituent(idx, nitrogen)
        assert graph[idx].substituents == [argon, nitrogen]

    def test_rejects_non_particle(self, graph: CompoundGraph) -> None:
        idx = _add(graph)
        with pytest.raises(TypeError):
            graph.add_substituent(idx, "H")

    def test_conflict_leaves_node_unchanged(self, graph: CompoundGraph) -> None:
        idx = _add(graph)
        with graph.hold(idx):
            with pytest.raises(MutationConflictError) as exc_info:
                graph.add_substituent(idx, Atom.from_atomic_number(1))
        assert exc_info.value.idx == idx
        assert graph[idx].substituents == []
        # Released after the block
        graph.add_substituent(idx, Atom.from_atomic_number(1))
        assert len(graph[idx].substituents) == 1


class TestAddSideChain:
    """Test add_side_chain() and the reciprocal link invariant."""

    def test_reciprocal(self, graph: CompoundGraph) -> None:
        a, b = _add(graph), _add(graph)
        graph.add_side_chain(a, b)
        assert graph[a].side_chains == [b]
        assert graph[b].side_chains == [a]

    def test_self_link_is_noop(self, graph: CompoundGraph) -> None:
        a = _add(graph)
        graph.add_side_chain(a, a)
        assert graph[a].side_chains == []

    def test_duplicate_is_noop(self, graph: CompoundGraph) -> None:
        a, b = _add(graph), _add(graph)
        graph.add_side_chain(a, b)
        graph.add_side_chain(a, b)
        assert graph[a].side_chains == [b]
        assert graph[b].side_chains == [a]

    def test_reverse_link_is_noop(self, graph: CompoundGraph) -> None:
        """Linking B to A after A to B gives the same state as one call."""
        a, b = _add(graph), _add(graph)
        graph.add_side_chain(a, b)
        graph.add_side_chain(b, a)
        assert graph[a].side_chains == [b]
        assert graph[b].side_chains == [a]

    def test_link_order_preserved(self, graph: CompoundGraph) -> None:
        center = _add(graph)
        others = [_add(graph) for _ in range(3)]
        for idx in reversed(others):
            graph.add_side_chain(center, idx)
        assert graph[center].side_chains == list(reversed(others))

    def test_shared_node(self, graph: CompoundGraph) -> None:
        """One node can be a side chain of several parents."""
        shared = _add(graph, 8)
        parents = [_add(graph), _add(graph)]
        for p in parents:
            graph.add_side_chain(p, shared)
        assert graph[shared].side_chains == parents
        assert all(graph[p].side_chains == [shared] for p in parents)

    def test_cycle(self, graph: CompoundGraph) -> None:
        """Links may close a ring."""
        ring = [_add(graph) for _ in range(3)]
        for i, idx in enumerate(ring):
            graph.add_side_chain(idx, ring[(i + 1) % 3])
        for idx in ring:
            assert graph[idx].degree == 2
            assert idx not in graph[idx].side_chains

    @pytest.mark.parametrize("busy", ["self", "neighbor"])
    def test_conflict_changes_nothing(self, graph: CompoundGraph, busy: str) -> None:
        """A busy endpoint makes the whole link fail with no half applied."""
        a, b = _add(graph), _add(graph)
        held = a if busy == "self" else b
        with graph.hold(held):
            with pytest.raises(MutationConflictError) as exc_info:
                graph.add_side_chain(a, b)
        assert exc_info.value.idx == held
        assert graph[a].side_chains == []
        assert graph[b].side_chains == []
        assert not graph[a].is_busy
        assert not graph[b].is_busy

    def test_conflict_from_other_thread(self, graph: CompoundGraph) -> None:
        """Conflicts fail immediately instead of waiting for the holder."""
        a, b = _add(graph), _add(graph)
        held = threading.Event()
        release = threading.Event()

        def holder() -> None:
            with graph.hold(b):
                held.set()
                release.wait(timeout=5)

        thread = threading.Thread(target=holder)
        thread.start()
        try:
            assert held.wait(timeout=5)
            with pytest.raises(MutationConflictError):
                graph.add_side_chain(a, b)
            assert graph[a].side_chains == []
        finally:
            release.set()
            thread.join()

        graph.add_side_chain(a, b)
        assert graph[b].side_chains == [a]

    def test_self_link_allowed_while_held(self, graph: CompoundGraph) -> None:
        """No-op links never touch the node, so they never conflict."""
        a, b = _add(graph), _add(graph)
        graph.add_side_chain(a, b)
        with graph.hold(a):
            graph.add_side_chain(a, a)
            graph.add_side_chain(a, b)
        assert graph[a].side_chains == [b]


class TestTraversal:
    """Test reachability and components."""

    def test_iter_reachable_terminates_on_cycle(self, graph: CompoundGraph) -> None:
        ring = [_add(graph) for _ in range(4)]
        for i, idx in enumerate(ring):
            graph.add_side_chain(idx, ring[(i + 1) % 4])
        seen = [c.idx for c in graph.iter_reachable(ring[0])]
        assert sorted(seen) == ring
        assert seen[0] == ring[0]

    def test_breadth_first_order(self, graph: CompoundGraph) -> None:
        root, left, right, leaf = (_add(graph) for _ in range(4))
        graph.add_side_chain(root, left)
        graph.add_side_chain(root, right)
        graph.add_side_chain(left, leaf)
        assert [c.idx for c in graph.iter_reachable(root)] == [root, left, right, leaf]

    def test_connected_components(self, graph: CompoundGraph) -> None:
        a, b, c = _add(graph), _add(graph), _add(graph)
        graph.add_side_chain(a, c)
        assert graph.connected_components() == [[a, c], [b]]
        assert not graph.is_connected
        graph.add_side_chain(b, c)
        assert graph.is_connected

    def test_neighbors(self, graph: CompoundGraph) -> None:
        a, b = _add(graph), _add(graph, 8)
        graph.add_side_chain(a, b)
        assert [n.center.symbol for n in graph[a].neighbors(graph)] == ["O"]
