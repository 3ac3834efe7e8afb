"""
Tests for the seven instrumented sorting algorithms.

Property checks run every algorithm over the edge cases plus a seeded
batch of random arrays; the scenario tests pin exact step sequences.
"""

from collections import Counter

import pytest

from algorithms import (
    REGISTRY, run, run_sort, iter_sort, iter_steps,
    StepEmitter, NullEmitter, CallbackEmitter, ListEmitter,
)
from dataset import (
    Dataset, InvalidInput, UnknownAlgorithm,
    Compare, Swap, Overwrite, MarkFinal,
)
from engine import replay
from tests.conftest import ALGO_KEYS, EDGE_INPUTS, random_inputs


ALL_INPUTS = EDGE_INPUTS + random_inputs()
EXACTLY_ONCE = [k for k in ALGO_KEYS if k != "merge"]
SWAP_ONLY = ("bubble", "selection", "quick", "heap")


def last_write_positions(steps):
    """index → position in `steps` of the last Swap/Overwrite touching it."""
    last = {}
    for pos, s in enumerate(steps):
        if s.mutates:
            for idx in s.indices:
                last[idx] = pos
    return last


def value_changing_writes(values, steps):
    current = list(values)
    changed = 0
    for s in steps:
        if s.mutates:
            before = [current[k] for k in s.indices]
            s.apply(current)
            if [current[k] for k in s.indices] != before:
                changed += 1
    return changed


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------
class TestSortingProperties:
    @pytest.mark.parametrize("values", ALL_INPUTS)
    def test_output_is_sorted_permutation(self, algo_key, values):
        result, _ = run_sort(algo_key, values)
        assert result == sorted(values)
        assert Counter(result) == Counter(values)

    @pytest.mark.parametrize("values", ALL_INPUTS)
    def test_replay_matches_direct_output(self, algo_key, values):
        result, steps = run_sort(algo_key, values)
        assert replay(values, steps) == result

    @pytest.mark.parametrize("values", ALL_INPUTS)
    def test_trace_never_diverges_from_dataset(self, algo_key, values):
        ds = Dataset(values)
        mirror = list(values)

        def check(step):
            step.apply(mirror)
            assert mirror == ds.snapshot()

        run(REGISTRY[algo_key].fn, ds, CallbackEmitter(check))
        assert mirror == sorted(values)

    @pytest.mark.parametrize("values", ALL_INPUTS)
    def test_trace_is_replayable_many_times(self, algo_key, values):
        result, steps = run_sort(algo_key, values)
        assert replay(values, steps) == replay(values, steps) == result

    @pytest.mark.parametrize("key", EXACTLY_ONCE)
    @pytest.mark.parametrize("values", ALL_INPUTS)
    def test_mark_final_exactly_once_after_last_write(self, key, values):
        _, steps = run_sort(key, values)
        finals = [(pos, s.index) for pos, s in enumerate(steps) if isinstance(s, MarkFinal)]

        assert sorted(idx for _, idx in finals) == list(range(len(values)))

        last_write = last_write_positions(steps)
        for pos, idx in finals:
            assert pos > last_write.get(idx, -1)

    @pytest.mark.parametrize("values", ALL_INPUTS)
    def test_merge_finalises_eagerly(self, values):
        _, steps = run_sort("merge", values)
        finals = [(pos, s.index) for pos, s in enumerate(steps) if isinstance(s, MarkFinal)]

        # every index covered, each write immediately finalised
        assert {idx for _, idx in finals} == set(range(len(values)))
        for pos, s in enumerate(steps):
            if isinstance(s, Overwrite):
                assert steps[pos + 1] == MarkFinal(s.index)

        last_write = last_write_positions(steps)
        last_final = {}
        for pos, idx in finals:
            last_final[idx] = pos
        for idx, pos in last_write.items():
            assert last_final[idx] > pos

    @pytest.mark.parametrize("values", ALL_INPUTS)
    def test_all_indices_in_range(self, algo_key, values):
        _, steps = run_sort(algo_key, values)
        for s in steps:
            assert all(0 <= idx < len(values) for idx in s.indices)

    def test_input_is_not_modified(self, algo_key):
        values = [4, 2, 9, 1]
        run_sort(algo_key, values)
        assert values == [4, 2, 9, 1]

    def test_steps_are_an_immutable_sequence(self, algo_key):
        _, steps = run_sort(algo_key, [3, 1, 2])
        assert isinstance(steps, tuple)

    def test_deterministic(self, algo_key):
        values = random_inputs(count=1, max_len=25, seed=7)[0]
        assert run_sort(algo_key, values) == run_sort(algo_key, values)


# ---------------------------------------------------------------------------
# Boundaries
# ---------------------------------------------------------------------------
class TestBoundaries:
    def test_empty_input_has_empty_trace(self, algo_key):
        result, steps = run_sort(algo_key, [])
        assert result == []
        assert steps == ()

    def test_single_element_emits_one_mark_final(self, algo_key):
        result, steps = run_sort(algo_key, [42])
        assert result == [42]
        assert steps == (MarkFinal(0),)

    @pytest.mark.parametrize("values", [[1, 2, 3, 4, 5], [1, 1, 2, 3, 3, 8], [-3.5, 0, 0, 2]])
    def test_sorted_input_stays_unchanged(self, algo_key, values):
        result, steps = run_sort(algo_key, values)
        assert result == values
        marks = [s for s in steps if isinstance(s, MarkFinal)]
        if algo_key != "merge":
            assert len(marks) == len(values)
        if algo_key != "heap":
            # only self-assignments: every intermediate state equals the input
            assert value_changing_writes(values, steps) == 0

    def test_sorted_input_has_no_swaps_for_exchange_sorts(self):
        for key in ("bubble", "selection", "quick"):
            _, steps = run_sort(key, [1, 2, 3, 4, 5])
            assert not any(isinstance(s, (Swap, Overwrite)) for s in steps), key

    def test_all_equal_values_never_change_a_slot(self, algo_key):
        result, steps = run_sort(algo_key, [2, 2, 2])
        assert result == [2, 2, 2]
        assert value_changing_writes([2, 2, 2], steps) == 0


# ---------------------------------------------------------------------------
# Failure semantics
# ---------------------------------------------------------------------------
class TestFailures:
    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_values_rejected(self, algo_key, bad):
        with pytest.raises(InvalidInput):
            run_sort(algo_key, [3, bad, 1])

    def test_int_too_large_for_float_rejected(self, algo_key):
        with pytest.raises(InvalidInput, match="not representable as a float"):
            run_sort(algo_key, [10 ** 400, 1])

    def test_unknown_algorithm(self):
        with pytest.raises(UnknownAlgorithm):
            run_sort("bogo", [3, 1])

    def test_iter_sort_validates_before_first_step(self):
        with pytest.raises(InvalidInput):
            iter_sort("bubble", [1, float("nan")])
        with pytest.raises(UnknownAlgorithm):
            iter_sort("bogo", [1])

    def test_nothing_emitted_on_invalid_input(self):
        emitter = ListEmitter()
        with pytest.raises(InvalidInput):
            run(REGISTRY["bubble"].fn, Dataset([1, float("nan")]), emitter)
        assert emitter.steps == []


# ---------------------------------------------------------------------------
# Emitters and cancellation
# ---------------------------------------------------------------------------
class TestEmitters:
    def test_run_counts_steps_without_an_emitter(self):
        ds = Dataset([5, 3, 8, 1])
        assert run(REGISTRY["bubble"].fn, ds) == 14
        assert ds.snapshot() == [1, 3, 5, 8]

    def test_null_emitter_discards(self):
        ds = Dataset([2, 1])
        assert run(REGISTRY["merge"].fn, ds, NullEmitter()) == 5
        assert ds.is_sorted()

    def test_callback_emitter_sees_steps_in_order(self):
        seen = []
        run(REGISTRY["selection"].fn, Dataset([3, 1, 2]), CallbackEmitter(seen.append))
        assert seen == list(run_sort("selection", [3, 1, 2])[1])

    def test_base_emitter_is_abstract(self):
        with pytest.raises(NotImplementedError):
            StepEmitter().emit(Compare(0, 1))

    def test_cancel_mid_run_leaves_dataset_consistent(self, algo_key):
        values = [9, 4, 7, 1, 8, 2, 6]
        ds = Dataset(values)
        stream = iter_steps(REGISTRY[algo_key].fn, ds)
        taken = [next(stream) for _ in range(6)]
        stream.close()

        assert ds.snapshot() == replay(values, taken)
        if algo_key in SWAP_ONLY:
            # shift and merge writes may hold a duplicate mid-walk
            assert Counter(ds.snapshot()) == Counter(values)
        with pytest.raises(StopIteration):
            next(stream)

    def test_iter_sort_matches_run_sort(self, algo_key):
        values = [4, 4, 1, 3]
        assert tuple(iter_sort(algo_key, values)) == run_sort(algo_key, values)[1]


# ---------------------------------------------------------------------------
# Exact scenarios
# ---------------------------------------------------------------------------
class TestScenarios:
    def test_bubble_5_3_8_1(self):
        result, steps = run_sort("bubble", [5, 3, 8, 1])
        assert result == [1, 3, 5, 8]
        assert list(steps) == [
            Compare(0, 1), Swap(0, 1),
            Compare(1, 2),
            Compare(2, 3), Swap(2, 3),
            Compare(0, 1),
            Compare(1, 2), Swap(1, 2),
            Compare(0, 1), Swap(0, 1),
            MarkFinal(0), MarkFinal(1), MarkFinal(2), MarkFinal(3),
        ]

    def test_bubble_intermediate_states(self):
        _, steps = run_sort("bubble", [5, 3, 8, 1])
        swaps = [k for k, s in enumerate(steps) if isinstance(s, Swap)]
        states = [replay([5, 3, 8, 1], steps[: k + 1]) for k in swaps]
        assert states == [[3, 5, 8, 1], [3, 5, 1, 8], [3, 1, 5, 8], [1, 3, 5, 8]]

    def test_selection_3_1_2(self):
        _, steps = run_sort("selection", [3, 1, 2])
        assert list(steps) == [
            Compare(1, 0), Compare(2, 1), Swap(0, 1), MarkFinal(0),
            Compare(2, 1), Swap(1, 2), MarkFinal(1),
            MarkFinal(2),
        ]

    def test_insertion_shifts_with_overwrites(self):
        _, steps = run_sort("insertion", [3, 1, 2])
        assert list(steps) == [
            Compare(0, 1), Overwrite(1, 3), Overwrite(0, 1),
            Compare(1, 2), Overwrite(2, 3), Compare(0, 1), Overwrite(1, 2),
            MarkFinal(0), MarkFinal(1), MarkFinal(2),
        ]

    def test_shell_with_gap_one_matches_insertion(self):
        _, shell_steps = run_sort("shell", [3, 1, 2])
        _, insertion_steps = run_sort("insertion", [3, 1, 2])
        assert shell_steps == insertion_steps

    def test_quick_3_1_2(self):
        _, steps = run_sort("quick", [3, 1, 2])
        assert list(steps) == [
            Compare(0, 2), Compare(1, 2), Swap(0, 1), Swap(1, 2), MarkFinal(1),
            MarkFinal(0), MarkFinal(2),
        ]

    def test_quick_reverse_sorted_worst_case(self):
        values = [9, 7, 5, 3, 1]
        result, steps = run_sort("quick", values)
        n = len(values)
        assert result == [1, 3, 5, 7, 9]
        assert sum(isinstance(s, Compare) for s in steps) == n * (n - 1) // 2

    def test_quick_handles_long_degenerate_input(self):
        values = list(range(500, 0, -1))
        result, _ = run_sort("quick", values)
        assert result == sorted(values)

    def test_merge_2_1(self):
        _, steps = run_sort("merge", [2, 1])
        assert list(steps) == [
            Compare(0, 1), Overwrite(0, 1), MarkFinal(0), Overwrite(1, 2), MarkFinal(1),
        ]

    def test_merge_marks_inner_slots_again_in_outer_merge(self):
        _, steps = run_sort("merge", [3, 1, 2])
        marks = Counter(s.index for s in steps if isinstance(s, MarkFinal))
        assert marks == {0: 2, 1: 2, 2: 1}

    def test_heap_1_2_3(self):
        _, steps = run_sort("heap", [1, 2, 3])
        assert list(steps) == [
            Compare(1, 0), Compare(2, 1), Swap(0, 2),
            Swap(0, 2), MarkFinal(2), Compare(1, 0), Swap(0, 1),
            Swap(0, 1), MarkFinal(1),
            MarkFinal(0),
        ]
