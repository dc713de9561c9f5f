import csv
import io
import json

from lead_finder.models import Lead
from lead_finder.store import EXPORT_HEADERS, CurationStore, JsonFileStorage, MemoryStorage


def test_saving_with_one_duplicate_adds_two(make_lead) -> None:
    store = CurationStore(MemoryStorage())
    store.add([make_lead("a")])

    outcome = store.add([make_lead("a", company="Changed"), make_lead("b"), make_lead("c")])

    assert len(store) == 3
    assert [lead.id for lead in outcome.added] == ["b", "c"]
    assert outcome.duplicates == 1
    assert "2 lead(s) saved" in outcome.message()
    assert "1 already saved" in outcome.message()
    assert store.get("a").company == "Acme"


def test_duplicates_inside_one_batch_are_saved_once(make_lead) -> None:
    store = CurationStore()
    outcome = store.add([make_lead("a"), make_lead("a")])

    assert len(store) == 1
    assert outcome.duplicates == 1


def test_all_duplicates_message(make_lead) -> None:
    store = CurationStore()
    store.add([make_lead("a")])
    assert store.add([make_lead("a")]).message() == "All selected leads are already saved."


def test_remove_and_clear(make_lead) -> None:
    store = CurationStore()
    store.add([make_lead("a"), make_lead("b")])

    assert store.remove("missing") is False
    assert store.remove("a") is True
    assert [lead.id for lead in store.leads] == ["b"]

    store.clear()
    assert len(store) == 0


def test_update_never_reinserts_removed_lead(make_lead) -> None:
    store = CurationStore()
    store.add([make_lead("a"), make_lead("b")])
    store.remove("b")

    assert store.update(make_lead("b", employee_count="201-500")) is False
    assert store.update(make_lead("a", employee_count="201-500")) is True
    assert "b" not in store
    assert store.get("a").employee_count == "201-500"


def test_contents_survive_restart(tmp_path, make_lead) -> None:
    path = tmp_path / "state" / "saved.json"
    CurationStore(JsonFileStorage(path)).add([make_lead("a"), make_lead("b")])

    restored = CurationStore(JsonFileStorage(path))

    assert [lead.id for lead in restored.leads] == ["a", "b"]
    assert restored.get("a") == make_lead("a")


def test_every_mutation_is_persisted(make_lead) -> None:
    storage = MemoryStorage()
    store = CurationStore(storage)
    store.add([make_lead("a")])
    assert len(json.loads(storage.values["savedLeads"])) == 1

    store.remove("a")
    assert json.loads(storage.values["savedLeads"]) == []


def test_corrupt_data_starts_empty(tmp_path, make_lead) -> None:
    assert len(CurationStore(MemoryStorage({"savedLeads": "{not json"}))) == 0
    assert len(CurationStore(MemoryStorage({"savedLeads": json.dumps({"id": "x"})}))) == 0
    assert len(CurationStore(MemoryStorage({"savedLeads": json.dumps([{"name": "no id"}])}))) == 0

    path = tmp_path / "saved.json"
    path.write_text("garbage", encoding="utf-8")
    store = CurationStore(JsonFileStorage(path))
    assert len(store) == 0
    store.add([make_lead("a")])
    assert len(CurationStore(JsonFileStorage(path))) == 1


def test_export_quotes_every_cell_but_not_headers(make_lead) -> None:
    store = CurationStore()
    store.add([make_lead("a", full_name='Ana "The Boss" Silva', email=None)])

    text = store.export()
    lines = text.splitlines()

    assert lines[0] == "Name,Job Title,Company,Location,Email,LinkedIn URL"
    assert lines[1].startswith('"Ana ""The Boss"" Silva","CIO","Acme"')
    rows = list(csv.reader(io.StringIO(text)))
    assert rows[0] == list(EXPORT_HEADERS)
    assert rows[1][4] == ""


def test_export_to_csv_file(tmp_path, make_lead) -> None:
    store = CurationStore()
    store.add([make_lead("a")])

    path = store.export_to(tmp_path / "leads.csv")

    assert path.read_text(encoding="utf-8") == store.export()


def test_lead_round_trips_through_dict(make_lead) -> None:
    lead = make_lead("a")
    assert Lead.from_dict({**lead.to_dict(), "unknown": 1}) == lead
