import unittest
from pathlib import Path

from wasm_locate.errors import LibNameNotFound, RootPackageNotFound
from wasm_locate.identifiers import normalize_crate_name
from wasm_locate.models import CompilationTarget, Package, WorkspaceMetadata
from wasm_locate.resolver import (
    CDYLIB_KIND,
    find_cdylib_target,
    find_root_package,
    resolve_target,
)


def _meta(packages, root_id):
    return WorkspaceMetadata(
        packages=tuple(packages),
        resolved_root_id=root_id,
        target_directory=Path("/ws/target"),
        workspace_root=Path("/ws"),
    )


def _pkg(pkg_id, name, *targets):
    return Package(id=pkg_id, name=name, targets=tuple(targets))


def _target(name, *kinds):
    return CompilationTarget(name=name, kind=frozenset(kinds))


class TestTargetResolver(unittest.TestCase):
    def test_root_is_looked_up_by_id_not_position(self) -> None:
        dep = _pkg("dep 1.0", "dep", _target("dep", "lib"))
        root = _pkg("root 0.1", "root", _target("root", CDYLIB_KIND))
        meta = _meta([dep, root], "root 0.1")

        self.assertIs(root, find_root_package(meta))
        resolved = resolve_target(meta)
        self.assertEqual("root", resolved.package.name)
        self.assertEqual("root", resolved.lib_target.name)

    def test_missing_root_id_raises_root_package_not_found(self) -> None:
        meta = _meta([_pkg("a", "a", _target("a", CDYLIB_KIND))], None)
        with self.assertRaises(RootPackageNotFound) as ctx:
            resolve_target(meta, manifest_path=Path("/ws/Cargo.toml"))
        self.assertEqual(Path("/ws/Cargo.toml"), ctx.exception.manifest_path)

    def test_dangling_root_id_raises_root_package_not_found(self) -> None:
        meta = _meta([_pkg("a", "a", _target("a", CDYLIB_KIND))], "b")
        with self.assertRaises(RootPackageNotFound):
            resolve_target(meta)

    def test_no_cdylib_raises_lib_name_not_found(self) -> None:
        pkg = _pkg("cli 0.1", "my-cli", _target("my-cli", "bin"), _target("my_cli", "lib", "rlib"))
        with self.assertRaises(LibNameNotFound) as ctx:
            resolve_target(_meta([pkg], "cli 0.1"))
        self.assertEqual("my-cli", ctx.exception.package_name)

    def test_first_cdylib_target_in_declaration_order_wins(self) -> None:
        pkg = _pkg(
            "p",
            "p",
            _target("runner", "bin"),
            _target("first_lib", CDYLIB_KIND, "rlib"),
            _target("second_lib", CDYLIB_KIND),
        )
        self.assertEqual("first_lib", find_cdylib_target(pkg).name)

    def test_names_are_normalized_independently(self) -> None:
        pkg = _pkg("p", "my-crate", _target("other-lib-name", CDYLIB_KIND))
        resolved = resolve_target(_meta([pkg], "p"))

        self.assertEqual("my_crate", resolved.package_name)
        self.assertEqual("other_lib_name", resolved.lib_name)

    def test_normalize_crate_name(self) -> None:
        self.assertEqual("my_crate", normalize_crate_name("my-crate"))
        self.assertEqual("a_b_c", normalize_crate_name("a-b_c"))
        self.assertEqual("plain", normalize_crate_name("plain"))


if __name__ == "__main__":
    unittest.main()
