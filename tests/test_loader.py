# tests/test_loader.py
"""Tests for YAML contract loading and project settings."""

from decimal import Decimal

import pytest

import parakontra
from parakontra import Accepted, ContractConfigError, ContractLoadError, ContractLoader
from parakontra.config.loader import resolve_object
from parakontra.config.settings import ParakontraConfig, load_config
from parakontra.errors import SettingsError


class TestContractLoader:
    """Tests for ContractLoader."""

    def test_list_form(self, write_contract):
        path = write_contract(
            [
                {"name": "a", "type": "integer", "default": 1},
                {"name": "b", "type": "integer", "required": True, "numericality": {"greater_than": 0}},
            ]
        )
        contract = parakontra.load_contract(path)
        assert contract.name == "test_contract"
        assert parakontra.validate(contract, {"b": 5}) == Accepted({"a": 1, "b": 5})

    def test_mapping_form(self, write_contract):
        path = write_contract({"email": {"type": "string", "format": "@"}, "tags": None})
        contract = ContractLoader.from_path(path)
        assert contract.names == ["email", "tags"]

    def test_validate_with_path(self, write_contract):
        path = write_contract({"n": {"required": True}})
        assert parakontra.validate(str(path), {}).errors == {"n": ["is required"]}

    def test_name_defaults_to_file_stem(self, tmp_path):
        path = tmp_path / "create_order.yml"
        path.write_text("parameters:\n  qty: {type: integer}\n")
        assert ContractLoader.from_path(path).name == "create_order"

    def test_func_reference(self, write_contract):
        path = write_contract({"cb": {"func": "builtins:callable"}})
        contract = ContractLoader.from_path(path)
        assert parakontra.validate(contract, {"cb": 1}).errors == {"cb": ["is invalid"]}
        assert parakontra.validate(contract, {"cb": len}).passed

    def test_struct_reference(self, write_contract):
        path = write_contract({"amount": {"struct": "decimal:Decimal"}})
        contract = ContractLoader.from_path(path)
        assert parakontra.validate(contract, {"amount": Decimal("1.0")}).passed
        assert parakontra.validate(contract, {"amount": 1.0}).errors == {"amount": ["has wrong struct"]}

    def test_struct_plain_name_kept(self, write_contract):
        path = write_contract({"amount": {"struct": "Decimal"}})
        contract = ContractLoader.from_path(path)
        assert contract.get("amount").get("struct") == "Decimal"
        assert parakontra.validate(contract, {"amount": Decimal("2")}).passed

    def test_inner_references(self, write_contract):
        path = write_contract(
            {"cfg": {"type": "map", "inner": {"hook": {"func": "builtins:callable", "required": True}}}}
        )
        contract = ContractLoader.from_path(path)
        assert parakontra.validate(contract, {"cfg": {"hook": 3}}).errors == {
            "cfg": {"hook": ["is invalid"]}
        }

    def test_missing_file(self, tmp_path):
        with pytest.raises(ContractLoadError, match="file not found"):
            ContractLoader.from_path(tmp_path / "nope.yml")

    def test_directory(self, tmp_path):
        with pytest.raises(ContractLoadError):
            ContractLoader.from_path(tmp_path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yml"
        path.write_text("parameters: [unclosed\n")
        with pytest.raises(ContractLoadError, match="invalid YAML"):
            ContractLoader.from_path(path)

    def test_not_utf8(self, tmp_path):
        path = tmp_path / "latin1.yml"
        path.write_bytes("name: caf\xe9\n".encode("latin-1"))
        with pytest.raises(ContractLoadError, match="cannot read file"):
            ContractLoader.from_path(path)

    def test_top_level_not_mapping(self, tmp_path):
        path = tmp_path / "list.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ContractLoadError):
            ContractLoader.from_path(path)

    def test_unknown_top_level_key(self, write_contract):
        path = write_contract({"a": {}}, rules=[])
        with pytest.raises(ContractConfigError, match="rules"):
            ContractLoader.from_path(path)

    def test_duplicate_names(self, write_contract):
        path = write_contract([{"name": "a"}, {"name": "a"}])
        with pytest.raises(ContractConfigError):
            ContractLoader.from_path(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("")
        assert len(ContractLoader.from_path(path)) == 0


class TestResolveObject:
    """Tests for import references."""

    def test_dotted_attr(self):
        assert resolve_object("decimal:Decimal.from_float") == Decimal.from_float

    @pytest.mark.parametrize("ref", ["nocolon", "no_such_module_xyz:thing", "decimal:Nope"])
    def test_bad_references(self, ref):
        with pytest.raises(ContractConfigError):
            resolve_object(ref)


class TestSettings:
    """Tests for ParakontraConfig loading."""

    def test_defaults(self, isolated_config):
        cfg = load_config()
        assert cfg == ParakontraConfig()
        assert cfg.log_level == "WARNING"
        assert cfg.on_fail == "return_result"
        assert cfg.output_format == "rich"

    def test_config_file(self, isolated_config):
        cfg_dir = isolated_config / ".parakontra"
        cfg_dir.mkdir()
        (cfg_dir / "config.yml").write_text("log_level: debug\noutput_format: json\n")
        cfg = load_config()
        assert cfg.log_level == "DEBUG"
        assert cfg.output_format == "json"

    def test_environment_wins(self, isolated_config, monkeypatch):
        cfg_dir = isolated_config / ".parakontra"
        cfg_dir.mkdir()
        (cfg_dir / "config.yml").write_text("output_format: json\n")
        monkeypatch.setenv("PARAKONTRA_OUTPUT_FORMAT", "rich")
        assert load_config().output_format == "rich"

    def test_explicit_missing_path(self, isolated_config):
        with pytest.raises(SettingsError):
            load_config(isolated_config / "missing.yml")

    def test_invalid_value(self, isolated_config, monkeypatch):
        monkeypatch.setenv("PARAKONTRA_ON_FAIL", "explode")
        with pytest.raises(SettingsError):
            load_config()
