"""Tests for list, backup and delete operations."""

from branch_db_switcher.core.operations import (
    backup_databases,
    backup_files,
    delete_all_snapshots,
    delete_snapshot,
    list_snapshots,
)


class TestListSnapshots:
    """Tests for list_snapshots function."""

    def test_empty_backup_dir(self, fake_endpoint):
        """Test that an empty backup directory lists nothing."""
        assert list_snapshots(fake_endpoint) == []

    def test_lists_artifact_names(self, fake_endpoint):
        """Test that artifact names are listed without the directory."""
        backup_databases(fake_endpoint, "main")
        assert list_snapshots(fake_endpoint) == ["app-main", "app_test-main"]

    def test_does_not_mutate(self, fake_endpoint):
        """Test that listing never changes databases or artifacts."""
        backup_databases(fake_endpoint, "main")
        databases = dict(fake_endpoint.databases)
        artifacts = dict(fake_endpoint.artifacts)
        fake_endpoint.calls.clear()

        list_snapshots(fake_endpoint)
        list_snapshots(fake_endpoint)

        assert fake_endpoint.databases == databases
        assert fake_endpoint.artifacts == artifacts
        assert fake_endpoint.mutations() == []


class TestBackupDatabases:
    """Tests for backup_databases function."""

    def test_dumps_every_database(self, fake_endpoint):
        """Test one artifact per configured database."""
        stats = backup_databases(fake_endpoint, "feature_login")

        assert stats == {"succeeded": 2, "failed": 0}
        assert fake_endpoint.artifacts == {
            "/bds_backups/app-feature_login": "app-state",
            "/bds_backups/app_test-feature_login": "app_test-state",
        }

    def test_overwrites_existing(self, fake_endpoint):
        """Test that a second backup with the same name replaces the artifact."""
        backup_databases(fake_endpoint, "main")
        fake_endpoint.databases["app"] = "changed"

        backup_databases(fake_endpoint, "main")

        assert fake_endpoint.artifacts["/bds_backups/app-main"] == "changed"

    def test_failure_does_not_abort_remaining(self, fake_endpoint):
        """Test that a failing dump is counted and later databases still run."""
        fake_endpoint.fail_dump.add("app")

        stats = backup_databases(fake_endpoint, "main")

        assert stats == {"succeeded": 1, "failed": 1}
        assert "/bds_backups/app_test-main" in fake_endpoint.artifacts
        assert "/bds_backups/app-main" not in fake_endpoint.artifacts


class TestBackupFiles:
    """Tests for backup_files function."""

    def test_no_files_configured(self, fake_endpoint):
        """Test that nothing happens without configured files."""
        stats = backup_files(fake_endpoint, "main")

        assert stats == {"succeeded": 0, "failed": 0}
        assert fake_endpoint.calls == []

    def test_copies_existing_files(self, fake_endpoint, tmp_path):
        """Test that files are stored in the snapshot directory by base name."""
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "settings.json").write_text("{}")

        stats = backup_files(fake_endpoint, "main", files=["config/settings.json"])

        assert stats == {"succeeded": 1, "failed": 0}
        assert fake_endpoint.stored_files == {"main": {"settings.json": "{}"}}
        assert (
            "copy_to_container",
            str(tmp_path / "config" / "settings.json"),
            "/bds_backups/main/settings.json",
        ) in fake_endpoint.calls

    def test_missing_file_is_reported(self, fake_endpoint, tmp_path):
        """Test that a missing file counts as failed and others are still copied."""
        (tmp_path / ".env.local").write_text("DEBUG=1")

        stats = backup_files(fake_endpoint, "main", files=["missing.txt", ".env.local"])

        assert stats == {"succeeded": 1, "failed": 1}
        assert fake_endpoint.stored_files["main"] == {".env.local": "DEBUG=1"}


class TestDeleteSnapshot:
    """Tests for delete_snapshot function."""

    def test_deletes_one_artifact_per_database(self, fake_endpoint):
        """Test that only the named snapshot is removed."""
        backup_databases(fake_endpoint, "main")
        backup_databases(fake_endpoint, "develop")

        stats = delete_snapshot(fake_endpoint, "main")

        assert stats == {"succeeded": 2, "failed": 0}
        assert list_snapshots(fake_endpoint) == ["app-develop", "app_test-develop"]

    def test_missing_artifact_is_reported(self, fake_endpoint):
        """Test that a missing artifact fails without stopping the others."""
        fake_endpoint.artifacts["/bds_backups/app_test-main"] = "state"

        stats = delete_snapshot(fake_endpoint, "main")

        assert stats == {"succeeded": 1, "failed": 1}
        assert fake_endpoint.artifacts == {}


class TestDeleteAllSnapshots:
    """Tests for delete_all_snapshots function."""

    def test_list_is_empty_afterwards(self, fake_endpoint, tmp_path):
        """Test that delete-all leaves nothing to list."""
        (tmp_path / ".env.local").write_text("DEBUG=1")
        backup_databases(fake_endpoint, "main")
        backup_databases(fake_endpoint, "develop")
        backup_files(fake_endpoint, "main", files=[".env.local"])

        assert delete_all_snapshots(fake_endpoint) is True
        assert list_snapshots(fake_endpoint) == []

    def test_failure_returns_false(self, fake_endpoint):
        """Test that a failing removal is reported."""
        from branch_db_switcher.__util__ import CommandError

        def fail():
            raise CommandError(["rm", "-R", "/bds_backups"], 1, "busy")

        fake_endpoint.delete_all = fail

        assert delete_all_snapshots(fake_endpoint) is False
