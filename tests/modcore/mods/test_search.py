from modcore.mods.search import scoreFields, searchList


def test_scoreFields():
    assert scoreFields(["timesaver"], "timesaver") == 3
    assert scoreFields(["timesaver"], "time") == 2
    assert scoreFields(["timesaver"], "saver") == 1
    assert scoreFields(["timesaver"], "nope") == 0
    assert scoreFields(["other", "timesaver"], "timesaver") == 3


def test_searchList_orders_by_score_then_input():
    items = ["Saver Deluxe", "TimeSaver", "Saver", "Unrelated"]

    results = searchList(items, "saver", lambda item: [item])

    assert results == ["Saver", "Saver Deluxe", "TimeSaver"]


def test_searchList_empty_query_returns_everything():
    items = ["a", "b"]
    assert searchList(items, "   ", lambda item: [item]) == ["a", "b"]


def test_searchList_skips_empty_fields():
    items = [("x", ""), ("y", "match")]
    assert searchList(items, "match", lambda item: [item[1]]) == [("y", "match")]
