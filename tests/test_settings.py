from abbreviator.core.settings import (
    NOT_A_LIST_MESSAGE,
    UNEQUAL_ROWS_MESSAGE,
    PostValidity,
    SettingsService,
    validate_posted_data,
)
from conftest import FUBAR_MEANING, SNAFU_MEANING


def test_blank_rows_are_dropped_and_values_trimmed():
    validity, rows = validate_posted_data(
        [" FUBAR ", "", "SNAFU"],
        [FUBAR_MEANING, "  ", f"{SNAFU_MEANING} "],
    )

    assert validity.valid
    assert rows == [("FUBAR", FUBAR_MEANING), ("SNAFU", SNAFU_MEANING)]


def test_unequal_rows_are_a_problem():
    validity, _ = validate_posted_data(["FUBAR", "SNAFU"], [FUBAR_MEANING])

    assert not validity.valid
    assert validity.problems == [UNEQUAL_ROWS_MESSAGE]


def test_missing_lists_are_empty():
    validity, rows = validate_posted_data(None, None)

    assert validity.valid
    assert rows == []


def test_post_validity_to_dict():
    assert PostValidity().to_dict() == {"valid": True, "problems": []}
    assert PostValidity(["x"]).to_dict() == {"valid": False, "problems": ["x"]}


def test_save_and_load(store):
    settings = SettingsService(store)
    validity = settings.save(["FUBAR", "SNAFU"], [FUBAR_MEANING, SNAFU_MEANING])

    assert validity.valid
    assert store.get("abbreviator-abbreviations") == [
        {"abbreviation": "FUBAR", "meaning": FUBAR_MEANING},
        {"abbreviation": "SNAFU", "meaning": SNAFU_MEANING},
    ]
    assert settings.load().abbreviations() == ["FUBAR", "SNAFU"]
    assert settings.abbreviation_map() == {"FUBAR": FUBAR_MEANING, "SNAFU": SNAFU_MEANING}


def test_invalid_save_keeps_previous_settings(store):
    settings = SettingsService(store, prefix="site-")
    settings.save(["FUBAR"], [FUBAR_MEANING])

    validity = settings.save(["FUBAR", "FUBAR"], ["x", "y"])

    assert not validity.valid
    assert "FUBAR" in validity.problems[0]
    assert store.get("site-abbreviations") == [{"abbreviation": "FUBAR", "meaning": FUBAR_MEANING}]


def test_load_from_empty_store(store):
    assert len(SettingsService(store).load()) == 0


def test_non_list_values_are_a_problem():
    validity, rows = validate_posted_data("AB", "xy")

    assert validity.problems == [NOT_A_LIST_MESSAGE]
    assert rows == []


def test_tuples_are_accepted():
    validity, rows = validate_posted_data(("FUBAR",), (FUBAR_MEANING,))

    assert validity.valid
    assert rows == [("FUBAR", FUBAR_MEANING)]
