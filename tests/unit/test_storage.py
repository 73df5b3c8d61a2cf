"""
Unit tests for persistence gateways.
"""
import pytest
from pathlib import Path

from wagerbook.core.protocols import PersistenceGateway
from wagerbook.core.storage import InMemoryRepository, LocalJsonRepository
from wagerbook.exceptions import PersistenceError


class TestLocalJsonRepository:

    @pytest.fixture
    def repo(self, tmp_path):
        return LocalJsonRepository(tmp_path / "data" / "bet_history_v1.json")

    def test_implements_protocol(self, repo):
        assert isinstance(repo, PersistenceGateway)

    def test_missing_file_loads_none(self, repo):
        assert repo.load() is None

    def test_save_then_load(self, repo):
        assert repo.save('[{"id": 1}]') is True
        assert repo.load() == '[{"id": 1}]'

    def test_save_failure_returns_false(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("file, not a directory")
        repo = LocalJsonRepository(blocker / "ledger.json")

        assert repo.save("[]") is False

    def test_unreadable_file_raises(self, tmp_path):
        path = tmp_path / "ledger.json"
        path.mkdir()
        repo = LocalJsonRepository(path)

        with pytest.raises(PersistenceError):
            repo.load()

    def test_undecodable_file_raises(self, tmp_path):
        path = tmp_path / "ledger.json"
        path.write_bytes(b"\xff\xfe\xfa")

        with pytest.raises(PersistenceError):
            LocalJsonRepository(path).load()


class TestInMemoryRepository:

    def test_round_trip(self):
        repo = InMemoryRepository()
        assert repo.load() is None
        repo.save("[]")
        assert repo.load() == "[]"
        assert repo.saves == 1

    def test_implements_protocol(self):
        assert isinstance(InMemoryRepository(), PersistenceGateway)


class TestQuarantine:

    def test_moves_file_aside_with_bytes_intact(self, tmp_path):
        path = tmp_path / "ledger.json"
        path.write_bytes(b'[{"id": "broken"}]')
        repo = LocalJsonRepository(path)

        location = repo.quarantine("bad record")

        assert not path.exists()
        assert Path(location).name.startswith("ledger.json.corrupt-")
        assert Path(location).read_bytes() == b'[{"id": "broken"}]'

    def test_missing_file_is_noop(self, tmp_path):
        assert LocalJsonRepository(tmp_path / "ledger.json").quarantine("bad") is None

    def test_repeated_quarantine_keeps_every_copy(self, tmp_path):
        path = tmp_path / "ledger.json"
        repo = LocalJsonRepository(path)

        path.write_text("first")
        repo.quarantine("bad")
        path.write_text("second")
        repo.quarantine("bad")

        kept = sorted(p.read_text() for p in tmp_path.glob("ledger.json.corrupt-*"))
        assert kept == ["first", "second"]

    def test_rename_failure_raises(self, tmp_path, mocker):
        path = tmp_path / "ledger.json"
        path.write_text("[]")
        mocker.patch.object(Path, "rename", side_effect=PermissionError("read-only"))

        with pytest.raises(PersistenceError):
            LocalJsonRepository(path).quarantine("bad")

    def test_in_memory(self):
        repo = InMemoryRepository("garbage")

        assert repo.quarantine("bad") is not None
        assert repo.load() is None
        assert repo.quarantined == ["garbage"]
        assert repo.quarantine("bad") is None
