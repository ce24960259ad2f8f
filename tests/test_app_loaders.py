import pytest

from atlasit.app.events import load_top_event_cities
from atlasit.app.libraries import (
    list_volume_regions,
    load_library_points,
    load_library_volumes,
    load_state_libraries_map,
    volume_colors,
)
from atlasit.app.loans import load_loans, loans_series
from atlasit.app.reading import load_reading_habits, reading_chart_data
from atlasit.app.session import VizSession
from atlasit.infra.adapters.files import SourceNotFoundError


def test_load_loans_routes_every_group(data_root):
    ds = load_loans(data_root=data_root)

    assert ds.regions["Piemonte"] == 1500
    assert ds.regions["Lombardia"] == 12345
    assert ds.geographical == {"Nord-ovest": 14165, "Centro": 9001}
    assert ds.population == {"Fino a 2.000 abitanti": 700}
    assert ds.classification == {"Comune Polo": 5432}
    assert "Italia" in ds.dropped


def test_load_loans_commits_to_session(data_root):
    session = VizSession()
    ds = load_loans(data_root=data_root, session=session)
    assert session.current("loans") is ds
    assert session.current_source("loans") == "prestiti_regioni_2022"


def test_loans_series_shape(data_root):
    series = loans_series(load_loans(data_root=data_root), "geographical")
    assert series.label == "Number of Loans"
    assert series.labels == ["Nord-ovest", "Centro"]
    assert series.values == [14165, 9001]


def test_load_loans_rejects_non_delimited_source(data_root):
    with pytest.raises(ValueError):
        load_loans("eventi_citta_2023", data_root=data_root)


def test_load_loans_missing_file(tmp_path):
    with pytest.raises(SourceNotFoundError):
        load_loans(data_root=str(tmp_path))


def test_load_reading_habits(data_root):
    df = load_reading_habits(data_root=data_root)

    assert list(df.index) == ["Piemonte", "Lombardia"]
    assert df.shape[1] == 5
    assert df.loc["Lombardia", "1-3 libri"] == pytest.approx(43.9)

    chart = reading_chart_data(df)
    assert chart["labels"] == ["Piemonte", "Lombardia"]
    assert [d["label"] for d in chart["datasets"]][0] == "1-3 libri"
    assert chart["datasets"][0]["borderColor"] == "rgba(255, 99, 132, 1)"


def test_library_volumes_default_region(data_root):
    assert list_volume_regions("2014", data_root=data_root) == ["Emilia Romagna", "Toscana"]

    series = load_library_volumes("2014", data_root=data_root)
    assert series.label == "Emilia Romagna"
    assert series.values == [3, 40, 120, 90, 210, 25, 2, 0]
    assert len(volume_colors()) == len(series.labels)


def test_library_volumes_unknown_region(data_root):
    assert load_library_volumes("2014", "Molise", data_root=data_root) is None


def test_library_volumes_missing_row_clears_previous_selection(data_root):
    session = VizSession()

    load_library_volumes("2014", "Toscana", data_root=data_root, session=session)
    assert session.current("volumes").label == "Toscana"

    assert load_library_volumes("2014", "Molise", data_root=data_root, session=session) is None
    assert session.current("volumes") is None
    assert session.current_source("volumes") == "2014:Molise"


def test_library_volumes_unknown_year(data_root):
    with pytest.raises(ValueError):
        load_library_volumes("1999", data_root=data_root)


def test_state_libraries_map(data_root):
    fc = load_state_libraries_map(2010, data_root=data_root)

    props = [f["properties"] for f in fc["features"]]
    assert [p["value"] for p in props] == [150000, 1000, 0]
    assert [p["fillColor"] for p in props] == ["#800026", "#FFEDA0", "#FFEDA0"]


def test_state_libraries_map_reuses_base_geometry(data_root, mocker):
    from atlasit.infra.adapters import files

    spy = mocker.spy(files, "fetch_json")
    session = VizSession()
    load_state_libraries_map(2010, data_root=data_root, session=session)
    load_state_libraries_map(2010, data_root=data_root, session=session)
    assert spy.call_count == 2


def test_library_points(data_root):
    gdf = load_library_points(data_root=data_root)
    assert gdf["name"].tolist() == ["Biblioteca Nazionale Braidense"]
    assert gdf["markerColor"].iloc[0] == "#6786ad"

    fc = load_library_points(data_root=data_root, as_geojson=True)
    assert len(fc["features"]) == 1


def test_top_event_cities(data_root):
    df = load_top_event_cities(2, data_root=data_root)
    assert df["city"].tolist() == ["Roma", "Milano"]
    assert df["value"].tolist() == [120, 95.5]
