from tidy_data.dedupe import (
    column_key,
    deduplicate,
    find_email_column,
    prefer_lowercase_email,
    row_signature,
    select_dedupe_strategy,
    whole_row_key,
)


def test_whole_row_is_case_insensitive_and_keeps_first():
    rows = [["a", "1"], ["A", "1"], ["b", "2"]]
    assert deduplicate(rows) == [["a", "1"], ["b", "2"]]


def test_whole_row_key_does_not_merge_shifted_delimiters():
    assert whole_row_key(["a,b", "c"]) != whole_row_key(["a", "b,c"])


def test_column_key_trims_and_lowercases():
    rows = [["1", " Ann "], ["2", "ann"], ["3", "Bea"]]
    assert deduplicate(rows, column_key(1)) == [["1", " Ann "], ["3", "Bea"]]


def test_out_of_range_column_collapses_to_one_key():
    rows = [["a"], ["b"], ["c"]]
    assert deduplicate(rows, column_key(5)) == [["a"]]


def test_find_email_column():
    assert find_email_column(["Name", "E-mail", "Work Email"]) == 2
    assert find_email_column(["name", "EMAIL"]) == 1
    assert find_email_column(["name"]) is None
    assert find_email_column(None) is None


def test_email_dedupe_keeps_lowercase_first_row():
    strategy = select_dedupe_strategy(None, ["name", "email"])
    rows = [["Bob", "bob@x.com"], ["Bob", "BOB@x.com"]]
    assert strategy.apply(rows) == [["Bob", "bob@x.com"]]


def test_lowercase_email_replaces_uppercase_one_in_its_position():
    strategy = select_dedupe_strategy(None, ["name", "email"])
    rows = [
        ["Bob", "BOB@x.com"],
        ["Ann", "ann@x.com"],
        ["Bobby", "bob@x.com"],
    ]
    assert strategy.apply(rows) == [["Ann", "ann@x.com"], ["Bobby", "bob@x.com"]]


def test_prefer_lowercase_email_rule():
    prefer = prefer_lowercase_email(0)
    assert prefer(["BOB@x.com"], ["bob@x.com"]) is True
    assert prefer(["bob@x.com"], ["BOB@x.com"]) is False
    assert prefer(["Bob@x.com"], ["BOB@x.com"]) is False
    assert prefer(["bob@x.com"], ["bob@x.com"]) is False
    assert prefer(["bob@x.com"], ["ann@x.com"]) is False


def test_missing_email_falls_back_to_row_signature():
    assert row_signature(["Ann-Lee", " ", "NY!"]) == "ann lee ny"
    strategy = select_dedupe_strategy(None, ["name", "email"])
    rows = [["Ann Lee", ""], ["ann-lee", ""], ["Bea", ""]]
    assert strategy.apply(rows) == [["Ann Lee", ""], ["Bea", ""]]


def test_explicit_column_wins_over_email_detection():
    strategy = select_dedupe_strategy(0, ["name", "email"])
    assert strategy.name == "column:0"
    rows = [["Bob", "a@x.com"], ["bob", "b@x.com"]]
    assert strategy.apply(rows) == [["Bob", "a@x.com"]]


def test_email_detection_can_be_disabled():
    assert select_dedupe_strategy(None, ["name", "email"], detect_email_column=False).name == "row"
    assert select_dedupe_strategy(None, None).name == "row"


def test_input_rows_are_not_mutated():
    rows = [["a", "1"], ["a", "1"]]
    out = deduplicate(rows)
    out[0][0] = "z"
    assert rows == [["a", "1"], ["a", "1"]]
