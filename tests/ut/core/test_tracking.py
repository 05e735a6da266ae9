"""安装追踪测试"""

from pathlib import Path

from assetpkg.core.models import InstallLocation, PackageManifest
from assetpkg.core.tracking import InstalledPackage, TrackingStore


class TestTrackingStore:
    def test_add_and_persist(self, tmp_path: Path) -> None:
        registry = tmp_path / "installed.yml"
        store = TrackingStore(registry)
        manifest = PackageManifest("Foo", "1.0")
        store.add_package(manifest)
        store.add_location(manifest, "Root", tmp_path / "UPackages" / "Foo~1.0")
        store.add_guid(manifest, "Base", "abc123", tmp_path / "Assets" / "a.cs")

        # 未保存前不落盘
        assert not registry.exists()
        store.save_file()

        reloaded = TrackingStore(registry).get_installed_package("Foo")
        assert reloaded is not None
        assert reloaded.version == "1.0"
        assert [loc.type for loc in reloaded.locations] == ["Root", "Base"]
        assert reloaded.guids == ["abc123"]
        assert reloaded.locations[1].path == str(tmp_path / "Assets" / "a.cs")

    def test_add_package_replaces_record(self, tmp_path: Path) -> None:
        store = TrackingStore(tmp_path / "installed.yml")
        store.add_package(PackageManifest("Foo", "1.0"))
        store.add_location(PackageManifest("Foo", "1.0"), "Base", "x")
        store.add_package(PackageManifest("Foo", "2.0"))
        pkg = store.get_installed_package("Foo")
        assert pkg is not None
        assert pkg.version == "2.0"
        assert pkg.locations == []

    def test_remove_and_list(self, tmp_path: Path) -> None:
        store = TrackingStore(tmp_path / "installed.yml")
        store.add_package(PackageManifest("A", "1"))
        store.add_package(PackageManifest("B", "1"))
        assert [p.name for p in store.installed_packages] == ["A", "B"]
        assert store.remove_package("A") is True
        assert store.remove_package("A") is False
        assert [p.name for p in store.installed_packages] == ["B"]

    def test_remove_file(self, tmp_path: Path) -> None:
        registry = tmp_path / "installed.yml"
        store = TrackingStore(registry)
        store.add_package(PackageManifest("A", "1"))
        store.save_file()
        store.remove_file()
        assert not registry.exists()
        assert store.installed_packages == []


class TestInstalledPackageNuke:
    def test_removes_recorded_footprint(self, tmp_path: Path) -> None:
        root = tmp_path / "UPackages" / "Foo~1.0"
        (root / "sub").mkdir(parents=True)
        (root / "sub" / "x.txt").write_text("x")
        dest = tmp_path / "Assets" / "Foo~1.0"
        dest.mkdir(parents=True)
        (dest / "a.cs").write_text("a")
        (dest / "a.cs.meta").write_text("guid: 1")
        unrelated = tmp_path / "Assets" / "mine.cs"
        unrelated.write_text("mine")

        pkg = InstalledPackage("Foo", "1.0", [
            InstallLocation("Root", str(root)),
            InstallLocation("Base", str(dest)),
            InstallLocation("Base", str(dest / "a.cs"), guid="1"),
        ])
        removed = pkg.nuke()

        assert not root.exists()
        assert not dest.exists()
        assert unrelated.exists()
        assert dest / "a.cs" in removed

    def test_non_empty_directory_kept(self, tmp_path: Path) -> None:
        dest = tmp_path / "Assets" / "Shared"
        dest.mkdir(parents=True)
        (dest / "other.txt").write_text("not ours")
        pkg = InstalledPackage("Foo", "1.0", [InstallLocation("Base", str(dest))])
        pkg.nuke()
        assert (dest / "other.txt").exists()

    def test_missing_paths_skipped(self, tmp_path: Path) -> None:
        pkg = InstalledPackage("Foo", "1.0", [
            InstallLocation("Base", str(tmp_path / "gone.txt")),
        ])
        assert pkg.nuke() == []

    def test_nested_directories_deepest_first(self, tmp_path: Path) -> None:
        outer = tmp_path / "Assets" / "Outer"
        inner = outer / "Inner"
        inner.mkdir(parents=True)
        (tmp_path / "Assets" / "Outer.meta").write_text("guid: o")
        pkg = InstalledPackage("Foo", "1.0", [
            InstallLocation("Base", str(outer)),
            InstallLocation("Base", str(inner)),
        ])
        pkg.nuke()
        assert not outer.exists()
        assert not (tmp_path / "Assets" / "Outer.meta").exists()
