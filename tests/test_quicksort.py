import random
from collections import Counter

import pytest

from quicksort import EmptySequenceError, OutOfRangeError, SortStats, partition, sort


def test_sorts_first_demo_sequence():
    data = [9, 2, 20, 15, 65, 32, 11, 100, 43, 5, 2, 18]
    sort(data, 0, len(data) - 1)
    assert data == [2, 2, 5, 9, 11, 15, 18, 20, 32, 43, 65, 100]


def test_sorts_second_demo_sequence():
    data = [92, 20, 18, 65, 32, 51, 100, 43, 5, 4, 18]
    sort(data)
    assert data == [4, 5, 18, 18, 20, 32, 43, 51, 65, 92, 100]


def test_single_element_needs_no_partition():
    data = [7]
    stats = SortStats()
    sort(data, 0, 0, stats)
    assert data == [7]
    assert stats.partitions == 0


def test_empty_sequence_is_a_no_op():
    data = []
    stats = SortStats()
    sort(data, stats=stats)
    assert data == []
    assert stats.partitions == 0


def test_reverse_sorted_takes_n_minus_one_partitions():
    data = [5, 4, 3, 2, 1]
    stats = SortStats()
    sort(data, stats=stats)
    assert data == [1, 2, 3, 4, 5]
    assert stats.partitions == len(data) - 1


@pytest.mark.parametrize("seed", range(20))
def test_random_input_is_sorted_permutation(seed):
    rng = random.Random(seed)
    data = [rng.randrange(0, 50) for _ in range(rng.randrange(0, 60))]
    before = Counter(data)
    sort(data)
    assert all(data[i] <= data[i + 1] for i in range(len(data) - 1))
    assert Counter(data) == before


def test_sorting_sorted_input_is_idempotent():
    data = [1, 3, 3, 8, 12, 40]
    sort(data)
    assert data == [1, 3, 3, 8, 12, 40]
    sort(data)
    assert data == [1, 3, 3, 8, 12, 40]


def test_all_equal_values():
    data = [6, 6, 6, 6, 6, 3]
    sort(data)
    assert data == [3, 6, 6, 6, 6, 6]


def test_large_sorted_input_does_not_exhaust_the_stack():
    data = list(range(2000))
    stats = SortStats()
    sort(data, stats=stats)
    assert data == list(range(2000))
    assert stats.partitions == 1999


def test_sub_range_leaves_outside_untouched():
    data = [50, 40, 9, 3, 7, 1, 30, 20]
    sort(data, 2, 5)
    assert data == [50, 40, 1, 3, 7, 9, 30, 20]


def test_sub_range_where_pivot_is_range_minimum():
    # pivot lands on low, which is not 0
    data = [0, 9, 8, 7, 1, 4]
    sort(data, 1, 4)
    assert data == [0, 1, 7, 8, 9, 4]


def test_partition_postcondition():
    data = [9, 2, 20, 15, 65, 32, 11, 100, 43, 5, 2, 18]
    p = partition(data, 0, len(data) - 1)
    assert data[p] == 18
    assert all(v < data[p] for v in data[:p])
    assert all(v >= data[p] for v in data[p + 1:])


def test_empty_suffix_range_is_a_no_op():
    data = [3, 2, 1]
    sort(data, 3, 2)
    sort(data, 3)
    assert data == [3, 2, 1]


@pytest.mark.parametrize("seed", range(20))
def test_random_partition_postcondition(seed):
    rng = random.Random(seed)
    data = [rng.randrange(0, 30) for _ in range(rng.randrange(1, 40))]
    low = rng.randrange(0, len(data))
    high = rng.randrange(low, len(data))
    before = list(data)

    p = partition(data, low, high)

    assert low <= p <= high
    assert data[p] == before[high]
    assert all(v < data[p] for v in data[low:p])
    assert all(v >= data[p] for v in data[p + 1:high + 1])
    assert data[:low] == before[:low]
    assert data[high + 1:] == before[high + 1:]
    assert Counter(data[low:high + 1]) == Counter(before[low:high + 1])


def test_partition_only_touches_its_range():
    data = [100, 0, 5, 3, 9, 4, -1]
    p = partition(data, 2, 5)
    assert data[0] == 100 and data[1] == 0 and data[6] == -1
    assert data[p] == 4
    assert sorted(data[2:6]) == [3, 4, 5, 9]
    assert all(v < 4 for v in data[2:p])
    assert all(v >= 4 for v in data[p + 1:6])


def test_partition_pivot_is_minimum():
    data = [4, 3, 2, 1]
    assert partition(data, 0, 3) == 0
    assert data == [1, 3, 2, 4]


def test_partition_counts_work():
    stats = SortStats()
    partition([3, 1, 2], 0, 2, stats)
    assert stats.partitions == 1
    assert stats.comparisons == 3


@pytest.mark.parametrize("low, high", [(-1, 2), (0, 3), (0, 10), (2, 1)])
def test_partition_rejects_bad_range(low, high):
    data = [3, 2, 1]
    with pytest.raises(OutOfRangeError):
        partition(data, low, high)
    assert data == [3, 2, 1]


def test_partition_rejects_empty_sequence():
    with pytest.raises(EmptySequenceError):
        partition([], 0, 0)


@pytest.mark.parametrize("low, high", [(-1, 2), (0, 3), (0, -2), (1, 99), (5, 2), (5, None)])
def test_sort_rejects_bad_bounds_before_mutating(low, high):
    data = [3, 2, 1]
    with pytest.raises(OutOfRangeError) as excinfo:
        sort(data, low, high)
    assert data == [3, 2, 1]
    assert excinfo.value.length == 3


def test_sort_with_explicit_bounds_on_empty_sequence():
    with pytest.raises(EmptySequenceError):
        sort([], 0, -1)


def test_out_of_range_is_an_index_error():
    with pytest.raises(IndexError):
        sort([1, 2], 0, 2)
