import pytest

from atlasit.core.catalog.ramps import VOLUME_BAND_LABELS
from atlasit.core.logic.tables import (
    parse_header_table,
    parse_key_value_lines,
    table_column_map,
    table_row_labels,
    table_row_values,
    top_n,
)

READING = (
    "Titolo della tavola\n"
    "Regioni;Poco;Molto\n"
    "Piemonte;45,2;-\n"
    "Lazio;1.200,5;3\n"
    "Fonte: Istat\n"
)


def test_header_table_drops_title_and_footer():
    df = parse_header_table(READING)

    assert list(df.index) == ["Piemonte", "Lazio"]
    assert list(df.columns) == ["Poco", "Molto"]
    assert df.loc["Piemonte", "Poco"] == pytest.approx(45.2)
    assert df.loc["Lazio", "Poco"] == pytest.approx(1200.5)
    # Placeholder cells become 0
    assert df.loc["Piemonte", "Molto"] == 0


def test_header_table_without_body_is_empty():
    assert parse_header_table("solo titolo").empty


def test_key_value_lines_and_top_n():
    df = parse_key_value_lines("Roma=3\nbroken\nMilano=10\n=5\nTorino=abc\nNapoli=10")

    assert df["city"].tolist() == ["Roma", "Milano", "Torino", "Napoli"]
    assert df.loc[df["city"] == "Torino", "value"].item() == 0

    top = top_n(df, n=2)
    # Ties keep input order
    assert top["city"].tolist() == ["Milano", "Napoli"]


@pytest.fixture
def tav_records():
    return [
        {"Column1": "ANNO 2013"},
        {"Column1": "REGIONI", "Column2": "Non indicato"},
        {"Column1": "Piemonte", "Column2": 5, "Column3": "12", "Column4": "-"},
        {"Column1": "Piemonte", "Column2": 99},
        {"Column1": "Umbria", "Column2": 1},
        {"Column1": None},
        {"Column1": "Totale", "Column2": 6},
    ]


def test_row_labels_skip_totals_and_headers(tav_records):
    assert table_row_labels(tav_records) == ["Piemonte", "Umbria"]


def test_row_values_use_first_matching_row(tav_records):
    values = table_row_values(tav_records, "Piemonte", VOLUME_BAND_LABELS)

    assert list(values) == list(VOLUME_BAND_LABELS)
    assert values["Non indicato"] == 5
    assert values["Fino a 2.000 volumi"] == 12
    assert values["Da 2.001 a 5.000"] == 0
    assert values["Oltre 1.000.000 di volumi"] == 0


def test_row_values_missing_label(tav_records):
    assert table_row_values(tav_records, "Molise", VOLUME_BAND_LABELS) is None


def test_column_map(tav_records):
    assert table_column_map(tav_records, "Column3") == {"Piemonte": 12, "Umbria": 0}
