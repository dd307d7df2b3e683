from __future__ import annotations

from pathlib import Path

from cmtstringer.extractor import (
    extract_candidates,
    is_exported,
    iter_effective_types,
)
from cmtstringer.model import ValueSpec
from fixtures import const_group, make_package, spec


def _names(package, type_name="T"):
    return [c.name for c in extract_candidates(package, type_name)]


def test_explicitly_typed_specs_are_filtered_by_type():
    package = make_package(
        const_group(
            spec("A", type_name="T", value="1"),
            spec("B", type_name="U", value="2"),
            spec("C", type_name="T", value="3"),
        )
    )

    assert _names(package) == ["A", "C"]
    assert _names(package, "U") == ["B"]


def test_bare_names_inherit_nearest_explicit_type():
    package = make_package(
        const_group(
            spec("A", type_name="T", value="iota"),
            spec("B"),
            spec("C"),
            spec("D", type_name="U", value="iota"),
            spec("E"),
        )
    )

    assert _names(package) == ["A", "B", "C"]
    assert _names(package, "U") == ["D", "E"]


def test_untyped_value_breaks_inheritance_until_next_type():
    package = make_package(
        const_group(
            spec("A", type_name="T", value="iota"),
            spec("B"),
            spec("Untyped", value="10"),
            spec("C"),
            spec("D", type_name="T", value="20"),
            spec("E"),
        )
    )

    assert _names(package) == ["A", "B", "D", "E"]


def test_typed_spec_without_value_sets_remembered_type():
    package = make_package(
        const_group(
            spec("Untyped", value="1"),
            spec("A", type_name="T"),
            spec("B"),
        )
    )

    assert _names(package) == ["A", "B"]


def test_non_identifier_type_is_skipped_without_resetting():
    package = make_package(
        const_group(
            spec("A", type_name="T", value="1"),
            spec("Q", type_name="other.T", value="2"),
            spec("B"),
        )
    )

    assert _names(package) == ["A", "B"]
    assert _names(package, "other.T") == []


def test_remembered_type_does_not_leak_between_groups():
    package = make_package(
        [
            const_group(spec("A", type_name="T", value="iota"), spec("B")),
            const_group(spec("C")),
        ]
    )

    assert _names(package) == ["A", "B"]


def test_blank_and_unexported_names_are_never_candidates():
    package = make_package(
        const_group(
            spec("_", type_name="T", value="iota"),
            spec("hidden"),
            spec("Shown", "_", "alsoHidden", "Other"),
        )
    )

    assert _names(package) == ["Shown", "Other"]


def test_candidates_keep_file_and_declaration_order():
    package = make_package(
        const_group(spec("Z", type_name="T", value="1")),
        [
            const_group(spec("B", type_name="T", value="2")),
            const_group(spec("A", type_name="T", value="3")),
        ],
    )

    candidates = extract_candidates(package, "T")

    assert [c.name for c in candidates] == ["Z", "B", "A"]
    assert candidates[0].path == Path("file0.go")
    assert candidates[1].path == Path("file1.go")


def test_candidate_carries_doc_of_its_spec():
    package = make_package(
        const_group(
            spec("A", type_name="T", value="1", doc="A first\n"),
            spec("B"),
        )
    )

    candidates = extract_candidates(package, "T")

    assert candidates[0].doc == "A first\n"
    assert candidates[1].doc is None
    assert all(c.type_name == "T" for c in candidates)


def test_no_matching_type_yields_empty_list():
    package = make_package(const_group(spec("A", type_name="U", value="1")))

    assert extract_candidates(package, "T") == []


def test_iter_effective_types_reports_each_spec():
    specs = [
        ValueSpec(names=("A",), type_name="T", type_is_identifier=True,
                  values=("1",)),
        ValueSpec(names=("B",)),
        ValueSpec(names=("C",), values=("2",)),
        ValueSpec(names=("D",)),
    ]

    resolved = [effective for _, effective in iter_effective_types(specs)]

    assert resolved == ["T", "T", None, None]


def test_is_exported():
    assert is_exported("Exported")
    assert is_exported("Ünicode")
    assert not is_exported("lower")
    assert not is_exported("_")
    assert not is_exported("")
