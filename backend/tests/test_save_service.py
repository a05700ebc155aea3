from pathlib import Path

from savedata.application.services import SaveService
from savedata.domain.errors import PersistenceError
from savedata.domain.models import SaveRequest, StorageKind
from savedata.infra.ports.storage import StoragePort
from savedata.infra.storage.factory import StorageFactory
from savedata.infra.storage.memory import MemoryStore


class RecordingStorage(StoragePort):
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls: list[bytes] = []

    def persist(self, payload: bytes) -> None:
        self.calls.append(payload)
        if self.fail:
            raise PersistenceError("disk full")


def _service_with(storage: StoragePort) -> SaveService:
    factory = StorageFactory()
    for kind in StorageKind:
        factory.register(kind, lambda: storage)
    return SaveService(factory=factory)


def test_success_persists_exact_bytes(tmp_path: Path):
    store = MemoryStore()
    factory = StorageFactory.default(file_path=tmp_path / "data.txt", memory_store=store)
    service = SaveService(factory=factory)
    payload = bytes(range(256))

    memory_outcome = service.save_data(SaveRequest(payload=payload, storage_kind="memory"))
    file_outcome = service.save_data(SaveRequest(payload=payload, storage_kind="file"))

    assert memory_outcome.is_success
    assert memory_outcome.kind is StorageKind.MEMORY
    assert file_outcome.is_success
    assert store.get() == payload
    assert (tmp_path / "data.txt").read_bytes() == payload


def test_empty_payload_is_validation_error_for_every_kind():
    storage = RecordingStorage()
    service = _service_with(storage)

    for kind in [*(k.value for k in StorageKind), "redis", ""]:
        outcome = service.save_data(SaveRequest(payload=b"", storage_kind=kind))
        assert outcome.status == "validation_error"
        assert outcome.detail == "payload empty"

    assert storage.calls == []


def test_unknown_kind_never_reaches_a_strategy():
    storage = RecordingStorage()
    outcome = _service_with(storage).save_data(SaveRequest(payload=b"x", storage_kind="redis"))

    assert outcome.status == "unsupported_storage_kind"
    assert outcome.detail == "unsupported storage kind: redis"
    assert storage.calls == []


def test_persistence_failure_is_classified():
    storage = RecordingStorage(fail=True)
    outcome = _service_with(storage).save_data(SaveRequest(payload=b"x", storage_kind="file"))

    assert outcome.status == "persistence_error"
    assert outcome.detail == "disk full"
    assert outcome.kind is StorageKind.FILE
    assert storage.calls == [b"x"]


def test_selector_gap_is_reported_as_unsupported():
    class NarrowFactory(StorageFactory):
        @property
        def supported_kinds(self):
            return frozenset(StorageKind)

    factory = NarrowFactory()
    outcome = SaveService(factory=factory).save_data(SaveRequest(payload=b"x", storage_kind="memory"))

    assert outcome.status == "unsupported_storage_kind"
    assert outcome.kind is StorageKind.MEMORY
