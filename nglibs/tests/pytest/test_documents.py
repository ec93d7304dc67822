"""
Tests for loading and saving the workspace manifest and path map.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from nglibs.core.errors import ConfigParseError
from nglibs.sync.documents import ConfigDocument, DocumentKind


@pytest.mark.evergreen
class TestLoad:
    """ConfigDocument.load validates the collection shape."""

    def test_manifest_collection(self, tmp_path: Path, write_json, manifest_data) -> None:
        path = write_json(tmp_path / "angular.json", manifest_data)
        document = ConfigDocument.load(path, DocumentKind.MANIFEST)

        assert document.keys() == ["showcase", "liba", "libb", "liborphan"]

    def test_path_map_collection(self, tmp_path: Path, write_json) -> None:
        path = write_json(tmp_path / "tsconfig.json", {
            "compilerOptions": {"paths": {"liba": ["dist/liba", "projects/liba/src/public-api.ts"]}},
        })
        document = ConfigDocument.load(path, DocumentKind.PATH_MAP)

        assert document.collection["liba"][0] == "dist/liba"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigParseError) as excinfo:
            ConfigDocument.load(tmp_path / "angular.json", DocumentKind.MANIFEST)
        assert "angular.json" in str(excinfo.value)

    def test_malformed_json(self, tmp_path: Path) -> None:
        path = tmp_path / "angular.json"
        path.write_text('{"projects": ')
        with pytest.raises(ConfigParseError):
            ConfigDocument.load(path, DocumentKind.MANIFEST)

    def test_missing_collection(self, tmp_path: Path, write_json) -> None:
        path = write_json(tmp_path / "tsconfig.json", {"compilerOptions": {}})
        with pytest.raises(ConfigParseError) as excinfo:
            ConfigDocument.load(path, DocumentKind.PATH_MAP)
        assert "compilerOptions.paths" in str(excinfo.value)

    def test_wrong_collection_shape(self, tmp_path: Path, write_json) -> None:
        path = write_json(tmp_path / "tsconfig.json", {"compilerOptions": {"paths": {"liba": "dist/liba"}}})
        with pytest.raises(ConfigParseError):
            ConfigDocument.load(path, DocumentKind.PATH_MAP)


@pytest.mark.evergreen
class TestSave:
    """save() rewrites the whole file and keeps unknown keys."""

    def test_collection_is_live(self, tmp_path: Path, write_json, manifest_data) -> None:
        path = write_json(tmp_path / "angular.json", manifest_data)
        document = ConfigDocument.load(path, DocumentKind.MANIFEST)

        del document.collection["liborphan"]
        document.save()

        saved = json.loads(path.read_text())
        assert "liborphan" not in saved["projects"]
        assert saved["$schema"] == manifest_data["$schema"]
        assert saved["projects"]["liba"]["architect"]["test"]["builder"].endswith(":karma")

    def test_two_space_indent(self, tmp_path: Path, write_json) -> None:
        path = write_json(tmp_path / "tsconfig.json", {"compilerOptions": {"paths": {}}})
        ConfigDocument.load(path, DocumentKind.PATH_MAP).save()

        text = path.read_text()
        assert text.startswith('{\n  "compilerOptions": {\n    "paths": {}')
        assert text.endswith("}\n")
