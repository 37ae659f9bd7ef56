import pytest

from inventory_data import loader


SCENARIO_CSV = (
    "date,US,CA,TX\n"
    "2024-01-01,100,30,20\n"
    "2024-01-08,110,33,18\n"
)

STATES_CSV = (
    "date,United States,California,Florida,Texas\n"
    '2024-01-06,"1,000",300,250,"1,200"\n'
    "2024-01-13,1010,310,,1190\n"
    "2024-01-20,1030,0,260,1210\n"
)

REGIONS_CSV = (
    "RegionID,RegionName,StateName,2024-01-06,2024-01-13,2024-01-20\n"
    '1,United States,,"9,000","9,100","9,200"\n'
    '2,"New York, NY",NY,"2,500","2,400","2,450"\n'
    '3,"Houston, TX",TX,"2,200","2,600",\n'
    '4,"Miami, FL",FL,"3,100","3,000","3,050"\n'
    ",,,1,2,3\n"
)


@pytest.fixture
def write_csv(tmp_path):
    def _write(name, text):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return name
    return _write


@pytest.fixture
def scenario_store(tmp_path, write_csv):
    return loader.load(write_csv("scenario.csv", SCENARIO_CSV), base_path=tmp_path)


@pytest.fixture
def states_store(tmp_path, write_csv):
    return loader.load(write_csv("states.csv", STATES_CSV), base_path=tmp_path)


@pytest.fixture
def region_table(tmp_path, write_csv):
    return loader.load_region_table(write_csv("regions.csv", REGIONS_CSV), base_path=tmp_path)
