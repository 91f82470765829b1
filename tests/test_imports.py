def test_import_storysheet_package() -> None:
    import importlib

    module = importlib.import_module("storysheet")
    assert module.__version__


def test_import_parser_no_side_effects() -> None:
    from storysheet.data.csv_parser import parse_rows

    assert parse_rows("a,b") == [["a", "b"]]
