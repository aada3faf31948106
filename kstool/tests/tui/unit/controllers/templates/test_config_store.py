"""Tests for the configuration store."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from kstool.controllers.templates.store import ConfigStore, bundled_template
from kstool.models.templates.errors import ConfigStoreError
from kstool.models.templates.parameter_set import NamedConfiguration


@pytest.fixture
def store(tmp_path: Path) -> ConfigStore:
    """Create a ConfigStore rooted in a temporary directory."""
    return ConfigStore(tmp_path / "kstool")


class TestValidateName:
    """Tests for ConfigStore.validate_name."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("a100-job", "a100-job"), ("  spaced  ", "spaced"), ("big.yaml", "big")],
    )
    def test_accepts(self, raw: str, expected: str) -> None:
        assert ConfigStore.validate_name(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        ["", "   ", ".yaml", "../escape", "a/b", "a\\b", ".", "..", "base_apply", "base_apply_template"],
    )
    def test_rejects(self, raw: str) -> None:
        with pytest.raises(ConfigStoreError):
            ConfigStore.validate_name(raw)


class TestBaseTemplate:
    """Tests for base template bootstrap and the normalized artifact."""

    def test_bootstraps_bundled_template(self, store: ConfigStore) -> None:
        assert not store.base_template_path.exists()

        text = store.read_base_template()

        assert store.base_template_path.is_file()
        assert text == bundled_template()
        assert "${GPU_PRODUCT:-" in text

    def test_existing_template_is_not_overwritten(self, store: ConfigStore) -> None:
        store.root.mkdir(parents=True)
        store.base_template_path.write_text("x: ${X:-1}\n", encoding="utf-8")

        assert store.read_base_template() == "x: ${X:-1}\n"

    def test_write_normalized_template(self, store: ConfigStore) -> None:
        path = store.write_normalized_template("x: ${X}\n")

        assert path == store.normalized_template_path
        assert path.read_text(encoding="utf-8") == "x: ${X}\n"


class TestNamedConfigurations:
    """Tests for save, load, list and delete."""

    def test_save_then_load(self, store: ConfigStore) -> None:
        store.save(
            NamedConfiguration(name="h100", parameters={"GPU_COUNT": "2", "USER": "alice"})
        )

        loaded = store.load("h100")

        assert loaded.name == "h100"
        assert loaded.parameters == {"GPU_COUNT": "2", "USER": "alice"}
        assert list(loaded.parameters) == ["GPU_COUNT", "USER"]

    def test_save_writes_flat_yaml(self, store: ConfigStore) -> None:
        path = store.save(NamedConfiguration(name="plain", parameters={"A": "1"}))

        assert path == store.config_dir / "plain.yaml"
        assert yaml.safe_load(path.read_text(encoding="utf-8")) == {"A": "1"}

    def test_save_overwrites(self, store: ConfigStore) -> None:
        store.save(NamedConfiguration(name="cfg", parameters={"A": "1"}))
        store.save(NamedConfiguration(name="cfg", parameters={"A": "2"}))

        assert store.load("cfg").parameters == {"A": "2"}
        assert store.list_names() == ["cfg"]

    def test_load_reads_scalars_as_text(self, store: ConfigStore) -> None:
        store.config_dir.mkdir(parents=True)
        (store.config_dir / "hand.yaml").write_text(
            "GPU_COUNT: 4\nDEBUG: true\nEMPTY:\n", encoding="utf-8"
        )

        assert store.load("hand").parameters == {
            "GPU_COUNT": "4",
            "DEBUG": "true",
            "EMPTY": "",
        }

    @pytest.mark.parametrize("literal", ["1.10", "yes", "1:30", "1_000", "0755"])
    def test_load_keeps_literals_as_written(self, store: ConfigStore, literal: str) -> None:
        store.config_dir.mkdir(parents=True)
        (store.config_dir / "hand.yaml").write_text(f"TAG: {literal}\n", encoding="utf-8")

        assert store.load("hand").parameters == {"TAG": literal}

    @pytest.mark.parametrize("literal", ["1.10", "yes", "1_000", "0755", ""])
    def test_saved_literals_load_unchanged(self, store: ConfigStore, literal: str) -> None:
        store.save(NamedConfiguration(name="cfg", parameters={"TAG": literal}))

        assert store.load("cfg").parameters == {"TAG": literal}

    def test_load_rejects_nested_values(self, store: ConfigStore) -> None:
        store.config_dir.mkdir(parents=True)
        (store.config_dir / "deep.yaml").write_text("A:\n  b: c\n", encoding="utf-8")

        with pytest.raises(ConfigStoreError, match="nested values: A"):
            store.load("deep")

    def test_load_missing(self, store: ConfigStore) -> None:
        with pytest.raises(ConfigStoreError, match="does not exist"):
            store.load("nope")

    def test_load_rejects_non_mapping(self, store: ConfigStore) -> None:
        store.config_dir.mkdir(parents=True)
        (store.config_dir / "list.yaml").write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ConfigStoreError, match="mapping"):
            store.load("list")

    def test_load_rejects_invalid_yaml(self, store: ConfigStore) -> None:
        store.config_dir.mkdir(parents=True)
        (store.config_dir / "bad.yaml").write_text("a: [\n", encoding="utf-8")

        with pytest.raises(ConfigStoreError, match="Cannot read"):
            store.load("bad")

    def test_list_names_sorted_and_filtered(self, store: ConfigStore) -> None:
        assert store.list_names() == []

        for name in ("zeta", "alpha", "mid"):
            store.save(NamedConfiguration(name=name, parameters={}))
        (store.config_dir / "notes.txt").write_text("x", encoding="utf-8")
        (store.config_dir / "base_apply.yaml").write_text("x: 1", encoding="utf-8")

        assert store.list_names() == ["alpha", "mid", "zeta"]

    def test_delete(self, store: ConfigStore) -> None:
        path = store.save(NamedConfiguration(name="cfg", parameters={}))
        assert path.is_file()

        store.delete("cfg")

        assert not path.is_file()
        assert store.list_names() == []
        with pytest.raises(ConfigStoreError):
            store.delete("cfg")
