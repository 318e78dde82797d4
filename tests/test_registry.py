import dataclasses

import pytest

from abbreviator.core.abbreviation import AbbreviationEntry
from abbreviator.core.exceptions import DuplicateAbbreviationError, ValidationError
from abbreviator.core.registry import AbbreviationRegistry, build_registry, load_registry
from conftest import FUBAR_MEANING, FUBAR_TAG, SNAFU_MEANING, SNAFU_TAG


def test_entry_is_trimmed_and_renders_tag():
    entry = AbbreviationEntry("  FUBAR ", f" {FUBAR_MEANING}\n")

    assert entry.abbreviation == "FUBAR"
    assert entry.meaning == FUBAR_MEANING
    assert entry.tag == FUBAR_TAG


def test_entry_is_immutable():
    entry = AbbreviationEntry("FUBAR", FUBAR_MEANING)
    with pytest.raises(dataclasses.FrozenInstanceError):
        entry.meaning = "something else"


@pytest.mark.parametrize("abbreviation, meaning", [
    ("", FUBAR_MEANING),
    ("   ", FUBAR_MEANING),
    ("FUBAR", ""),
    ("FUBAR", "\t"),
    ("<b>", "bold"),
])
def test_invalid_entries_are_rejected(abbreviation, meaning):
    with pytest.raises(ValidationError):
        AbbreviationRegistry().add(abbreviation, meaning)


def test_validation_error_is_a_value_error():
    with pytest.raises(ValueError):
        AbbreviationEntry("", "nothing")


def test_duplicate_abbreviation_is_rejected():
    with pytest.raises(DuplicateAbbreviationError) as excinfo:
        build_registry([("FUBAR", "x"), ("FUBAR", "y")])

    assert excinfo.value.abbreviation == "FUBAR"


def test_duplicate_detection_happens_after_trimming():
    registry = AbbreviationRegistry()
    registry.add("FUBAR", "x")

    with pytest.raises(DuplicateAbbreviationError):
        registry.add(" FUBAR ", "y")
    assert len(registry) == 1


def test_sequences_are_parallel_and_ordered(registry):
    assert registry.abbreviations() == ["FUBAR", "SNAFU"]
    assert registry.tags() == [FUBAR_TAG, SNAFU_TAG]


def test_meaning_of(registry):
    assert registry.meaning_of("SNAFU") == SNAFU_MEANING
    assert registry.meaning_of("TARFU") is None


def test_as_map(registry):
    assert registry.as_map() == {"FUBAR": FUBAR_MEANING, "SNAFU": SNAFU_MEANING}


def test_add_entry_rejects_other_values():
    with pytest.raises(TypeError):
        AbbreviationRegistry().add_entry(("FUBAR", FUBAR_MEANING))


def test_build_registry_accepts_mappings_and_entries():
    registry = build_registry([
        {"abbreviation": "FUBAR", "meaning": FUBAR_MEANING},
        AbbreviationEntry("SNAFU", SNAFU_MEANING),
    ])

    assert registry.abbreviations() == ["FUBAR", "SNAFU"]


@pytest.mark.parametrize("item", ["FUBAR", ("FUBAR",), {"abbreviation": "FUBAR"}])
def test_build_registry_rejects_incomplete_entries(item):
    with pytest.raises(ValidationError):
        build_registry([item])


def test_container_protocol(registry):
    assert len(registry) == 2
    assert "FUBAR" in registry
    assert "TARFU" not in registry
    assert [entry.abbreviation for entry in registry] == ["FUBAR", "SNAFU"]


def test_records_round_trip(registry):
    records = registry.to_records()

    assert records == [
        {"abbreviation": "FUBAR", "meaning": FUBAR_MEANING},
        {"abbreviation": "SNAFU", "meaning": SNAFU_MEANING},
    ]
    assert AbbreviationRegistry.from_records(records).as_map() == registry.as_map()


def test_fingerprint_tracks_contents_and_order(registry):
    same = build_registry([("FUBAR", FUBAR_MEANING), ("SNAFU", SNAFU_MEANING)])
    reordered = build_registry([("SNAFU", SNAFU_MEANING), ("FUBAR", FUBAR_MEANING)])

    assert registry.fingerprint() == same.fingerprint()
    assert registry.fingerprint() != reordered.fingerprint()


def test_load_registry_from_mapping_file(tmp_path):
    path = tmp_path / "abbreviations.yaml"
    path.write_text(f"FUBAR: {FUBAR_MEANING}\nSNAFU: '{SNAFU_MEANING}'\n", encoding="utf-8")

    registry = load_registry(path)
    assert registry.as_map() == {"FUBAR": FUBAR_MEANING, "SNAFU": SNAFU_MEANING}


def test_load_registry_from_record_list(tmp_path):
    path = tmp_path / "abbreviations.yaml"
    path.write_text(
        "- abbreviation: FUBAR\n"
        f"  meaning: {FUBAR_MEANING}\n"
        "- abbreviation: FUBAR\n"
        "  meaning: again\n",
        encoding="utf-8",
    )

    with pytest.raises(DuplicateAbbreviationError):
        load_registry(path)


def test_load_registry_missing_or_empty_file(tmp_path):
    assert len(load_registry(tmp_path / "missing.yaml")) == 0

    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    assert len(load_registry(empty)) == 0


def test_load_registry_rejects_scalar_file(tmp_path):
    path = tmp_path / "abbreviations.yaml"
    path.write_text("just a string\n", encoding="utf-8")

    with pytest.raises(ValidationError):
        load_registry(path)
