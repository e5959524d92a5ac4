from rabi import advisory


def test_max_ids():
    assert advisory.max_ids(total_length=5, redundancy=2, alphabet_size=6) == 216
    assert advisory.max_ids(total_length=4, redundancy=1, alphabet_size=5) == 125
    assert advisory.max_ids(total_length=3, redundancy=3, alphabet_size=5) == 1
    assert advisory.max_ids(total_length=2, redundancy=3, alphabet_size=5) is None


def test_is_exact_supported():
    assert advisory.is_exact_supported(total_length=5, alphabet_size=5)
    assert advisory.is_exact_supported(total_length=3, alphabet_size=7)
    assert not advisory.is_exact_supported(total_length=5, alphabet_size=6)
    assert not advisory.is_exact_supported(total_length=6, alphabet_size=5)


def test_how_many_defaults():
    tables = advisory.how_many()
    assert [table.redundancy for table in tables] == [1, 2, 3, 4]

    table = tables[1]
    assert table.total_lengths  == [3, 4, 5, 6, 7]
    assert table.alphabet_sizes == [4, 5, 6, 7, 8]

    row = table.cells[table.total_lengths.index(5)]
    col = table.alphabet_sizes.index(6)
    assert row[col] == advisory.Cell(216, exact_unsupported=True)
    assert row[table.alphabet_sizes.index(5)] == advisory.Cell(125, exact_unsupported=False)


def test_how_many_lower_bounds():
    tables = advisory.how_many(total_length=1, redundancy=1, alphabet_size=2)
    assert [table.redundancy for table in tables] == [1, 2, 3]
    assert tables[0].total_lengths  == [1, 2, 3]
    assert tables[0].alphabet_sizes == [2, 3, 4]


def test_format_how_many():
    text = advisory.format_how_many(advisory.how_many(total_length=4, redundancy=1, alphabet_size=5))
    assert "redundancy: 1" in text
    assert "length: 4" in text
    assert "alphabet: 5" in text
    assert "125" in text
    assert "NA" in text
    assert text.endswith(advisory.EXACT_UNSUPPORTED_NOTE)

    # 4**3 with alphabet 4 is not prime, so it is marked
    assert "64*" in text
