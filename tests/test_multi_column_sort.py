import random
from collections import Counter

from tablesorter.domain.models import ColumnType, ColumnTypeConfig, SortSpecification
from tablesorter.services.column_registry import ColumnRegistry
from tablesorter.services.multi_column_sort import MultiColumnSorter, sort_rows


def _spec(*pairs):
    return SortSpecification.from_pairs(pairs)


def test_single_key_ascending():
    rows = [["5"], ["1"], ["3"]]
    assert MultiColumnSorter(rows).sort(_spec((0, True))) == [["1"], ["3"], ["5"]]


def test_single_key_descending():
    rows = [["5"], ["1"], ["3"]]
    assert MultiColumnSorter(rows).sort(_spec((0, False))) == [["5"], ["3"], ["1"]]


def test_empty_spec_preserves_original_order():
    rows = [["b"], ["a"], ["c"]]
    out = sort_rows(rows, SortSpecification())
    assert out == rows
    assert out is not rows
    assert all(x is y for x, y in zip(out, rows))


def test_multi_key_priority():
    rows = [
        ["Gamma", "22"],
        ["Beta", "20"],
        ["Alpha", "20"],
        ["Delta", "9"],
    ]
    out = sort_rows(rows, _spec((1, False), (0, True)))
    assert [r[0] for r in out] == ["Gamma", "Alpha", "Beta", "Delta"]


def test_stability_for_full_ties():
    rows = [["x", str(i)] for i in range(10)]
    out = sort_rows(rows, _spec((0, True)))
    assert [r[1] for r in out] == [str(i) for i in range(10)]
    out = sort_rows(rows, _spec((0, False)))
    assert [r[1] for r in out] == [str(i) for i in range(10)]


def test_missing_cells_read_as_empty():
    rows = [["a", "2"], ["b"], ["c", "1"]]
    out = sort_rows(rows, _spec((1, True)))
    assert [r[0] for r in out] == ["b", "c", "a"]


def test_forced_text_type_from_registry():
    registry = ColumnRegistry()
    registry.register(0, forced_type=ColumnType.TEXT)
    rows = [["10"], ["9"], ["100"]]
    assert [r[0] for r in sort_rows(rows, _spec((0, True)), registry)] == ["10", "100", "9"]
    assert [r[0] for r in sort_rows(rows, _spec((0, True)))] == ["9", "10", "100"]


def test_date_format_from_config_mapping():
    columns = {0: ColumnTypeConfig(index=0, forced_type=ColumnType.DATE, date_format="DD/MM/YYYY")}
    rows = [["03/02/2023"], ["01/03/2022"], ["01/02/2023"]]
    out = sort_rows(rows, _spec((0, True)), columns)
    assert [r[0] for r in out] == ["01/03/2022", "01/02/2023", "03/02/2023"]


def test_cell_getter_for_row_objects():
    rows = [{"pts": "3"}, {"pts": "12"}, {"pts": "7"}]
    out = sort_rows(rows, _spec((0, False)), cell_getter=lambda r, i: r["pts"])
    assert [r["pts"] for r in out] == ["12", "7", "3"]


def test_sort_is_a_permutation_and_stable_randomized():
    rnd = random.Random(1234)
    for _ in range(25):
        rows = [
            [rnd.choice(["a", "B", "c", ""]), str(rnd.randint(0, 5)), f"id{i}"]
            for i in range(rnd.randint(0, 30))
        ]
        spec = _spec((1, rnd.random() < 0.5), (0, True))
        out = sort_rows(rows, spec)
        assert Counter(map(tuple, out)) == Counter(map(tuple, rows))
        # rows tied on both keys keep original relative order (ids increase)
        position = {id(r): i for i, r in enumerate(rows)}
        for prev, cur in zip(out, out[1:]):
            if prev[0] == cur[0] and prev[1] == cur[1]:
                assert position[id(prev)] < position[id(cur)]
