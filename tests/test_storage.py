import json

from critic.utils.storage import ConversationStore, generate_file_id


def test_file_id_is_deterministic():
    data = b"\x00\x01 some song bytes"
    assert generate_file_id(data) == generate_file_id(bytes(data))
    assert len(generate_file_id(data)) == 64


def test_file_id_differs_for_distinct_buffers():
    ids = {generate_file_id(f"buffer-{i}".encode()) for i in range(200)}
    assert len(ids) == 200
    assert generate_file_id(b"a") != generate_file_id(b"b")


def test_load_missing_file_returns_empty(store):
    assert not store.path.exists()
    assert store.load() == {}


def test_load_corrupt_file_returns_empty(tmp_path):
    path = tmp_path / "conversations.json"
    path.write_text("{not json", encoding="utf-8")
    assert ConversationStore(path).load() == {}


def test_save_then_load(store):
    record = [{"role": "system", "content": "sys"}]
    store.save({"abc": record})

    assert store.path.exists()
    assert json.loads(store.path.read_text(encoding="utf-8")) == {"abc": record}
    assert store.load() == {"abc": record}


def test_overlapping_saves_lose_first_update(store):
    # Both writers load before either saves; the last save wins for the whole file
    first = store.load()
    second = store.load()

    first["file-a"] = [{"role": "system", "content": "a"}]
    store.save(first)
    second["file-b"] = [{"role": "system", "content": "b"}]
    store.save(second)

    final = store.load()
    assert "file-b" in final
    assert "file-a" not in final
