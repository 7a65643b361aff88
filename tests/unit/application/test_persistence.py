"""Unit tests for registry persistence – stores, load/save, auto-save, wiring."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from mp_rbac.application.persistence import (
    FileRegistryStore,
    RegistryPersistence,
    build_store,
    configure_logging,
    create_registry,
)
from mp_rbac.config.settings import RegistrySettings
from mp_rbac.kernel.errors import SerializationError, StorageError, ValidationError
from mp_rbac.kernel.security import Permission, Principal, Registry, Role
from mp_rbac.kernel.types import Ok
from mp_rbac.testing.fakes import InMemoryRegistryStore


def _populated() -> Registry:
    reg = Registry()
    reg.add_permission(Permission("view", "View"))
    reg.add_permission(Permission("edit", "Edit"))
    reg.add_role(Role("editor", "Editor", permission_ids={"view", "edit"}))
    return reg


# ---------------------------------------------------------------------------
# FileRegistryStore
# ---------------------------------------------------------------------------


class TestFileRegistryStore:
    def test_read_missing_is_ok_none(self, tmp_path: Path) -> None:
        assert FileRegistryStore(tmp_path).read("rbac") == Ok(None)

    def test_write_then_read(self, tmp_path: Path) -> None:
        store = FileRegistryStore(tmp_path / "nested")
        assert store.write("rbac", '{"a": 1}').is_ok()
        assert store.read("rbac").unwrap() == '{"a": 1}'
        assert (tmp_path / "nested" / "rbac.json").exists()

    def test_write_leaves_no_temp_files(self, tmp_path: Path) -> None:
        store = FileRegistryStore(tmp_path)
        store.write("rbac", "one")
        store.write("rbac", "two")
        assert sorted(p.name for p in tmp_path.iterdir()) == ["rbac.json"]

    def test_delete_is_idempotent(self, tmp_path: Path) -> None:
        store = FileRegistryStore(tmp_path)
        store.write("rbac", "x")
        assert store.delete("rbac").is_ok()
        assert store.delete("rbac").is_ok()
        assert store.read("rbac") == Ok(None)

    def test_read_error_is_returned(self, tmp_path: Path) -> None:
        (tmp_path / "rbac.json").mkdir()
        result = FileRegistryStore(tmp_path).read("rbac")
        assert result.is_err()
        assert isinstance(result.error, StorageError)
        assert result.error.backend == "file"
        assert result.error.key == "rbac"

    def test_write_error_is_returned(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        result = FileRegistryStore(blocker).write("rbac", "x")
        assert result.is_err()
        assert isinstance(result.error.__cause__, OSError)

    @pytest.mark.parametrize("key", ["../escape", "", "a/b", ".hidden", "my key"])
    def test_path_for_rejects_unsafe_keys(self, tmp_path: Path, key: str) -> None:
        with pytest.raises(ValidationError):
            FileRegistryStore(tmp_path).path_for(key)

    @pytest.mark.parametrize("key", ["../escape", "my key"])
    def test_invalid_key_is_returned_as_storage_error(self, tmp_path: Path, key: str) -> None:
        store = FileRegistryStore(tmp_path)
        for result in (store.read(key), store.write(key, "{}"), store.delete(key)):
            assert result.is_err()
            assert isinstance(result.error, StorageError)
            assert result.error.key == key
            assert isinstance(result.error.__cause__, ValidationError)
        assert list(tmp_path.iterdir()) == []


# ---------------------------------------------------------------------------
# RegistryPersistence
# ---------------------------------------------------------------------------


class TestRegistryPersistenceSave:
    def test_save_writes_registry_and_principal(self) -> None:
        store = InMemoryRegistryStore()
        registry = _populated()
        registry.set_active_principal(Principal("u", "Ada", role_ids={"editor"}))
        assert RegistryPersistence(store).save(registry).is_ok()
        assert store.get("rbac") == registry.serialize()
        assert json.loads(store.get("rbac.principal"))["roleIds"] == ["editor"]

    def test_save_without_principal_deletes_key(self) -> None:
        store = InMemoryRegistryStore().seed("rbac.principal", "{}")
        RegistryPersistence(store).save(Registry())
        assert store.get("rbac.principal") is None

    def test_persist_principal_disabled(self) -> None:
        store = InMemoryRegistryStore()
        registry = Registry()
        registry.set_active_principal(Principal("u", "U"))
        RegistryPersistence(store, persist_principal=False).save(registry)
        assert store.keys() == ["rbac"]

    def test_custom_key(self) -> None:
        store = InMemoryRegistryStore()
        persistence = RegistryPersistence(store, key="tenantless")
        persistence.save(Registry())
        assert persistence.principal_key == "tenantless.principal"
        assert store.keys() == ["tenantless"]

    def test_save_returns_storage_error(self) -> None:
        store = InMemoryRegistryStore()
        store.fail_next_write()
        result = RegistryPersistence(store).save(Registry())
        assert result.is_err()
        assert isinstance(result.error, StorageError)


class TestRegistryPersistenceLoad:
    def test_empty_store(self) -> None:
        registry = Registry()
        assert RegistryPersistence(InMemoryRegistryStore()).load(registry) == Ok(False)

    def test_restores_registry_and_principal(self) -> None:
        source = _populated()
        source.set_active_principal(Principal("u", "Ada", role_ids={"editor"}))
        store = InMemoryRegistryStore()
        RegistryPersistence(store).save(source)

        target = Registry()
        assert RegistryPersistence(store).load(target) == Ok(True)
        assert [p.id for p in target.list_permissions()] == ["view", "edit"]
        assert target.active_principal == Principal("u", "Ada")
        assert target.has_permission("edit") is True

    def test_rejected_document_leaves_registry_unchanged(self) -> None:
        store = InMemoryRegistryStore().seed("rbac", '{"invalid"')
        registry = _populated()
        before = registry.serialize()
        result = RegistryPersistence(store).load(registry)
        assert result.is_err()
        assert isinstance(result.error, SerializationError)
        assert registry.serialize() == before

    def test_rejected_principal_leaves_registry_unchanged(self) -> None:
        store = InMemoryRegistryStore()
        store.seed("rbac", Registry().serialize()).seed("rbac.principal", "[]")
        registry = _populated()
        result = RegistryPersistence(store).load(registry)
        assert isinstance(result.error, SerializationError)
        assert len(registry.list_permissions()) == 2

    def test_principal_only(self) -> None:
        store = InMemoryRegistryStore().seed(
            "rbac.principal", '{"id": "u", "name": "U", "roleIds": [], "directPermissionIds": ["x"]}'
        )
        registry = Registry()
        assert RegistryPersistence(store).load(registry) == Ok(True)
        assert registry.has_permission("x") is True

    def test_load_does_not_trigger_autosave(self) -> None:
        store = InMemoryRegistryStore()
        RegistryPersistence(store).save(_populated())
        writes = store.writes

        registry = Registry()
        persistence = RegistryPersistence(store)
        persistence.attach(registry)
        persistence.load(registry)
        assert store.writes == writes

    def test_clear(self) -> None:
        store = InMemoryRegistryStore()
        registry = _populated()
        registry.set_active_principal(Principal("u", "U"))
        persistence = RegistryPersistence(store)
        persistence.save(registry)
        assert persistence.clear().is_ok()
        assert store.keys() == []


class TestAutoSave:
    def test_every_mutation_is_saved(self) -> None:
        store = InMemoryRegistryStore()
        registry = Registry()
        RegistryPersistence(store).attach(registry)

        registry.add_permission(Permission("view", "View"))
        assert "view" in store.get("rbac")
        registry.add_role(Role("viewer", "Viewer", permission_ids={"view"}))
        assert "viewer" in store.get("rbac")
        registry.remove_permission("view")
        assert json.loads(store.get("rbac"))["roles"]["viewer"]["permissionIds"] == []
        registry.set_active_principal(Principal("u", "U"))
        assert store.get("rbac.principal") is not None
        registry.clear_active_principal()
        assert store.get("rbac.principal") is None

    def test_failure_is_recorded_and_cleared(self) -> None:
        store = InMemoryRegistryStore()
        registry = Registry()
        persistence = RegistryPersistence(store)
        persistence.attach(registry)

        store.fail_next_write()
        registry.add_permission(Permission("a", "A"))
        assert isinstance(persistence.last_error, StorageError)
        assert registry.get_permission("a") is not None

        registry.add_permission(Permission("b", "B"))
        assert persistence.last_error is None
        assert "a" in json.loads(store.get("rbac"))["permissions"]

    def test_invalid_key_is_recorded_not_raised(self, tmp_path: Path) -> None:
        registry = Registry()
        persistence = RegistryPersistence(FileRegistryStore(tmp_path), key="my key")
        assert isinstance(persistence.load(registry).error, StorageError)

        persistence.attach(registry)
        registry.add_permission(Permission("a", "A"))
        assert isinstance(persistence.last_error, StorageError)
        assert registry.get_permission("a") is not None

    def test_detach(self) -> None:
        store = InMemoryRegistryStore()
        registry = Registry()
        persistence = RegistryPersistence(store)
        persistence.attach(registry)
        persistence.detach(registry)
        registry.add_permission(Permission("a", "A"))
        assert store.writes == 0


# ---------------------------------------------------------------------------
# Host wiring
# ---------------------------------------------------------------------------


class TestCreateRegistry:
    @pytest.fixture(autouse=True)
    def configure(self):  # type: ignore[no-untyped-def]
        with patch("mp_rbac.application.persistence.factory.JsonLoggerFactory.configure") as mock:
            yield mock

    def test_logging_settings_are_applied(self, configure) -> None:  # type: ignore[no-untyped-def]
        create_registry(RegistrySettings(log_level="debug", json_logs=True))
        configure.assert_called_once_with("DEBUG", json=True)

    def test_logging_setup_can_be_skipped(self, configure) -> None:  # type: ignore[no-untyped-def]
        create_registry(RegistrySettings(), setup_logging=False)
        configure.assert_not_called()

    def test_configure_logging_helper(self, configure) -> None:  # type: ignore[no-untyped-def]
        configure_logging(RegistrySettings(log_level="warning"))
        configure.assert_called_once_with("WARNING", json=False)

    def test_memory_backend_has_no_persistence(self) -> None:
        registry, persistence = create_registry(RegistrySettings())
        assert isinstance(registry, Registry)
        assert persistence is None
        assert build_store(RegistrySettings()) is None

    def test_file_backend_round_trip(self, tmp_path: Path) -> None:
        settings = RegistrySettings(backend="file", storage_dir=str(tmp_path))
        registry, persistence = create_registry(settings)
        assert isinstance(persistence.store, FileRegistryStore)
        registry.add_permission(Permission("view", "View"))

        restored, _ = create_registry(settings)
        assert restored.get_permission("view") == Permission("view", "View")

    def test_autosave_disabled(self, tmp_path: Path) -> None:
        settings = RegistrySettings(backend="file", storage_dir=str(tmp_path), autosave=False)
        registry, _ = create_registry(settings)
        registry.add_permission(Permission("view", "View"))
        assert not (tmp_path / "rbac.json").exists()

    def test_strict_restore_raises(self, tmp_path: Path) -> None:
        (tmp_path / "rbac.json").write_text("garbage")
        settings = RegistrySettings(backend="file", storage_dir=str(tmp_path))
        with pytest.raises(SerializationError):
            create_registry(settings)

    def test_lenient_restore_starts_empty(self, tmp_path: Path) -> None:
        (tmp_path / "rbac.json").write_text("garbage")
        settings = RegistrySettings(backend="file", storage_dir=str(tmp_path))
        registry, persistence = create_registry(settings, strict=False)
        assert registry.list_permissions() == []
        assert persistence is not None

    def test_redis_backend_builds_redis_store(self) -> None:
        sentinel = object()
        with patch("mp_rbac.adapters.redis.RedisRegistryStore", return_value=sentinel) as ctor:
            store = build_store(RegistrySettings(backend="redis", redis_url="redis://h:1/0"))
        assert store is sentinel
        ctor.assert_called_once_with("redis://h:1/0")
