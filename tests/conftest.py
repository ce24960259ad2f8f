import json

import pytest
from shapely.geometry import Polygon, mapping

from atlasit.core.catalog.whitelists import Whitelists
from atlasit.settings import Settings


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Points the cache at a temp dir and re-reads the environment per test."""
    monkeypatch.setenv("ATLASIT_CACHE_DIR", str(tmp_path / "cache"))
    monkeypatch.delenv("ATLASIT_DATA_ROOT", raising=False)
    Settings.reset()
    yield
    Settings.reset()


@pytest.fixture
def small_whitelists():
    """Returns the whitelists used by the end-to-end scenario."""
    return Whitelists(
        regions=("Piemonte", "Lombardia", "Valle d'Aosta - Vallée d'Aoste"),
        geographical=("Nord-ovest", "Centro"),
        population=("Fino a 2.000 abitanti",),
        classification=("Comune Polo",),
    )


@pytest.fixture
def loans_csv():
    """Returns a loans table shaped like the published ISTAT export."""
    return "\n".join([
        "Prestiti delle biblioteche,Anno 2022",
        "Territorio,Prestiti",
        'Piemonte,"1,500"',
        'Valle d\'Aosta - Vallée d\'Aoste,"320"',
        'Lombardia,"12,345"',
        'Nord-ovest,"14,165"',
        'Centro,"9,001"',
        'Fino a 2.000 abitanti,"700"',
        'Comune Polo,"5,432"',
        'Italia,"60,000"',
        "",
        "Fonte: Istat",
    ])


@pytest.fixture
def base_regions_geojson():
    """Returns a minimal region FeatureCollection keyed by top-level id."""
    square = mapping(Polygon([(0, 0), (1, 0), (1, 1), (0, 1)]))
    return {
        "type": "FeatureCollection",
        "features": [
            {"type": "Feature", "id": 1, "properties": {"name": "Piemonte"}, "geometry": square},
            {"type": "Feature", "id": 2, "properties": {"name": "Lombardia"}, "geometry": square},
            {"type": "Feature", "id": 3, "properties": {"name": "Liguria"}, "geometry": square},
        ],
    }


@pytest.fixture
def data_root(tmp_path, loans_csv, base_regions_geojson):
    """Builds a data directory laid out like the catalog expects."""
    root = tmp_path / "site"
    libs = root / "data" / "Dati_biblioteche"
    general = libs / "Dati_Generali_biblioteche"
    general.mkdir(parents=True)
    (general / "PrestitiBiblioRegioni2022.csv").write_text(loans_csv, encoding="utf-8")

    (root / "Dati-Abitudini-lettura-regioni-2021.csv").write_text(
        "Persone di 6 anni e più per libri letti - Anno 2021\n"
        "Regioni;1-3 libri;4-6 libri;7-11 libri;12 o più;Non indicato\n"
        "Piemonte;45,2;22,1;13,4;12,0;7,3\n"
        "Lombardia;43,9;23,5;14,2;13,1;5,3\n"
        "Fonte: Istat, Aspetti della vita quotidiana\n",
        encoding="utf-8",
    )

    (general / "Biblio_Italia_General_info_2014.json").write_text(json.dumps({
        "Tav 4.3": [
            {"Column1": "ANNO 2014"},
            {"Column1": "REGIONI", "Column2": "Non indicato"},
            {"Column1": "Emilia Romagna", "Column2": 3, "Column3": 40, "Column4": 120,
             "Column5": 90, "Column6": 210, "Column7": 25, "Column8": 2, "Column9": None},
            {"Column1": "Toscana", "Column2": 1, "Column3": 55},
            {"Column1": "Totale", "Column2": 4},
        ]
    }), encoding="utf-8")

    mibact = libs / "Datasets_MibactLibraries"
    mibact.mkdir()
    (mibact / "Biblio_Mibact_Statali_Ministero_2010.json").write_text(
        json.dumps([{"id": 1, "value": 150000}, {"id": 2, "value": 1000}]),
        encoding="utf-8",
    )
    (root / "data" / "baseGeoJson.geojson").write_text(
        json.dumps(base_regions_geojson), encoding="utf-8"
    )

    (libs / "Libraries_luoghi_Cultura.csv").write_text(
        "Library_ID,Library_Name,Library_City,Library_Region,Library_Latitude,Library_Longitude\n"
        "1,Biblioteca Nazionale Braidense,Milano,Lombardia,45.4719,9.1880\n"
        "2,Biblioteca Medica Statale di Roma,Roma,Lazio,41.9000,12.5000\n"
        "3,Biblioteca senza posizione,Torino,Piemonte,,\n",
        encoding="utf-8",
    )

    events = root / "data" / "Dati_eventi"
    events.mkdir()
    (events / "city_events_2023.json").write_text(
        "Roma=120\nMilano=95.5\nTorino=40\nnot a row\nNapoli=70\n", encoding="utf-8"
    )
    return str(root)
