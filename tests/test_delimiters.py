from loader.delimiters import (
    humanize,
    split_associations,
    split_chain,
    split_facets,
    split_name_value,
    split_values,
)


def test_absent_delimiter_yields_single_token():
    assert split_associations("mime_type:jpeg") == ["mime_type:jpeg"]
    assert split_values("jpeg") == ["jpeg"]
    assert split_facets("size:S") == ["size:S"]


def test_tokens_are_trimmed_and_empties_dropped():
    assert split_associations(" a | b ||c ") == ["a", "b", "c"]
    assert split_values("S, M ,L,") == ["S", "M", "L"]


def test_blank_cell_yields_nothing():
    assert split_associations("") == []
    assert split_associations(None) == []
    assert split_values("   ") == []


def test_variant_notation_splits_in_layers():
    cell = "mime_type:jpeg;print_type:black_white|mime_type:png, PDF"
    specs = split_associations(cell)
    assert specs == ["mime_type:jpeg;print_type:black_white", "mime_type:png, PDF"]
    assert split_facets(specs[0]) == ["mime_type:jpeg", "print_type:black_white"]
    name, values = split_name_value(split_facets(specs[1])[0])
    assert name == "mime_type"
    assert split_values(values) == ["png", "PDF"]


def test_name_value_splits_on_first_delimiter_only():
    assert split_name_value("care:Wash at 30:40") == ("care", "Wash at 30:40")
    assert split_name_value("washable") == ("washable", None)
    assert split_name_value("colour:") == ("colour", None)
    assert split_name_value(" size : M ") == ("size", "M")


def test_chain():
    assert split_chain("Clothing > Shirts>Casual") == ["Clothing", "Shirts", "Casual"]
    assert split_chain("Brands") == ["Brands"]


def test_input_is_not_modified():
    cell = " a|b "
    split_associations(cell)
    assert cell == " a|b "


def test_humanize():
    assert humanize("print_type") == "Print type"
    assert humanize("size") == "Size"
