import json

import pytest

from zit.errors import CorruptStateError
from zit.index import StagingArea
from zit.records import StagingEntry
from zit.storage import MemoryStateStore

SHA_A = "a" * 40
SHA_B = "b" * 40
SHA_C = "c" * 40


@pytest.fixture
def staging():
    state = MemoryStateStore()
    state.initialize()
    return StagingArea(state)


def test_fresh_index_is_empty(staging):
    assert staging.load() == []


def test_never_initialized_index_is_empty():
    assert StagingArea(MemoryStateStore()).load() == []


def test_stage_appends_in_order(staging):
    staging.stage("a.txt", SHA_A)
    staging.stage("b.txt", SHA_B)
    assert staging.load() == [StagingEntry("a.txt", SHA_A), StagingEntry("b.txt", SHA_B)]


def test_restaging_replaces_in_place(staging):
    staging.stage("a.txt", SHA_A)
    staging.stage("b.txt", SHA_B)
    staging.stage("a.txt", SHA_C)
    assert staging.load() == [StagingEntry("a.txt", SHA_C), StagingEntry("b.txt", SHA_B)]


def test_stage_all_keeps_paths_unique(staging):
    staging.stage_all([("a.txt", SHA_A), ("a.txt", SHA_B), ("b.txt", SHA_C)])
    entries = staging.load()
    assert [e.path for e in entries] == ["a.txt", "b.txt"]
    assert entries[0].digest == SHA_B


def test_index_is_persisted_as_path_hash_objects(staging):
    staging.stage("a.txt", SHA_A)
    assert json.loads(staging.state.read_index()) == [{"path": "a.txt", "hash": SHA_A}]


def test_clear_persists_empty_list(staging):
    staging.stage("a.txt", SHA_A)
    staging.clear()
    assert staging.state.read_index() == "[]"
    assert staging.load() == []


@pytest.mark.parametrize("text", [
    "{not json",
    '{"path": "a.txt"}',
    '[{"path": "a.txt"}]',
    '[{"path": "a.txt", "hash": "xyz"}]',
    '[{"path": "", "hash": "%s"}]' % SHA_A,
    '[{"path": "a.txt", "hash": "%s"}, {"path": "a.txt", "hash": "%s"}]' % (SHA_A, SHA_B),
])
def test_corrupt_index_raises(staging, text):
    staging.state.write_index(text)
    with pytest.raises(CorruptStateError):
        staging.load()
