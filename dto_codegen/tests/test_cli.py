import json

import click
import pytest
from click.testing import CliRunner

from dto_codegen import __version__
from dto_codegen.cli_utils import reconstruct_command_line
from dto_codegen.dto_codegen import dto_codegen, load_builder_config, typescript
from dto_codegen.logging import configure_logging

SCHEMA = """\
Order:
  fields:
    id:
      type: int
      required: true
    items:
      type: Item[]
      collection: true

Item:
  fields:
    sku: string
"""


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    configure_logging()


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def schema_path(tmp_path):
    path = tmp_path / "dto.yml"
    path.write_text(SCHEMA, encoding="utf-8")
    return path


class TestBuildCommand:
    """Test cases for the build command"""

    def test_prints_resolved_model(self, runner, schema_path):
        result = runner.invoke(dto_codegen, ["build", str(schema_path)])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["Order"]["className"] == "OrderDto"
        assert data["Order"]["fields"]["items"]["singular"] == "item"

    def test_writes_output_file(self, runner, schema_path, tmp_path):
        output = tmp_path / "resolved.json"

        result = runner.invoke(dto_codegen, ["build", str(schema_path), str(output)])

        assert result.exit_code == 0, result.output
        assert "Generated: resolved.json" in result.output
        assert json.loads(output.read_text(encoding="utf-8"))["Item"]["namespace"] == "App\\Dto"

    def test_namespace_option(self, runner, schema_path):
        result = runner.invoke(dto_codegen, ["build", "-n", "Shop", str(schema_path)])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["Order"]["namespace"] == "Shop\\Dto"

    def test_config_file(self, runner, schema_path, tmp_path):
        config = tmp_path / "config.yml"
        config.write_text("suffix: Data\nnamespace: Shop\n", encoding="utf-8")

        result = runner.invoke(dto_codegen, ["build", "--config", str(config), str(schema_path)])

        assert result.exit_code == 0, result.output
        order = json.loads(result.output)["Order"]
        assert order["className"] == "OrderData"
        assert order["namespace"] == "Shop\\Dto"

    def test_json_format(self, runner, tmp_path):
        path = tmp_path / "dto.json"
        path.write_text(json.dumps({"Event": {"fields": {"id": "int"}}}), encoding="utf-8")

        result = runner.invoke(dto_codegen, ["build", "--format", "json", str(path)])

        assert result.exit_code == 0, result.output
        assert list(json.loads(result.output)) == ["Event"]

    def test_directory(self, runner, schema_path, tmp_path):
        (tmp_path / "more.yml").write_text("Item:\n  fields:\n    price: float\n", encoding="utf-8")

        result = runner.invoke(dto_codegen, ["build", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert list(json.loads(result.output)["Item"]["fields"]) == ["sku", "price"]

    def test_config_error(self, runner, tmp_path):
        path = tmp_path / "dto.yml"
        path.write_text("order:\n  fields: {}\n", encoding="utf-8")

        result = runner.invoke(dto_codegen, ["build", str(path)])

        assert result.exit_code == 1
        assert "Error: Invalid DTO name `order`." in result.output
        assert "Hint:" in result.output

    def test_engine_error(self, runner, tmp_path):
        path = tmp_path / "dto.yml"
        path.write_text("Order: [unclosed", encoding="utf-8")

        result = runner.invoke(dto_codegen, ["build", str(path)])

        assert result.exit_code == 1
        assert "Invalid YML file" in result.output

    def test_verbose_logs_phases(self, runner, schema_path):
        result = runner.invoke(dto_codegen, ["build", "-v", str(schema_path)])

        assert result.exit_code == 0
        assert "[dto_codegen] DEBUG Building" in result.output

    def test_log_file(self, runner, schema_path, tmp_path):
        log_file = tmp_path / "build.log"

        result = runner.invoke(dto_codegen, ["build", "-v", "--log-file", str(log_file), str(schema_path)])
        configure_logging()

        assert result.exit_code == 0, result.output
        content = log_file.read_text(encoding="utf-8")
        assert "DEBUG dto_codegen.cli: Building" in content
        assert "INFO dto_codegen.builder: Built 2 DTO(s)" in content


class TestEmitCommands:
    """Test cases for the typescript and jsonschema commands"""

    def test_typescript(self, runner, schema_path, tmp_path):
        output = tmp_path / "ts"

        result = runner.invoke(dto_codegen, ["typescript", "--readonly", str(schema_path), str(output)])

        assert result.exit_code == 0, result.output
        assert "Generated: dto.ts" in result.output
        content = (output / "dto.ts").read_text(encoding="utf-8")
        assert "// Generated by: dto_codegen typescript dto.yml" in content
        assert "--readonly" in content
        assert "    readonly items: ItemDto[];\n" in content

    def test_typescript_export_style(self, runner, schema_path, tmp_path):
        result = runner.invoke(dto_codegen, ["typescript", "--export-style", "type", str(schema_path), str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert "export type OrderDto = {" in (tmp_path / "dto.ts").read_text(encoding="utf-8")

    def test_jsonschema(self, runner, schema_path, tmp_path):
        output = tmp_path / "schemas"

        result = runner.invoke(dto_codegen, ["jsonschema", str(schema_path), str(output)])

        assert result.exit_code == 0, result.output
        assert "Generated: dto-schemas.json" in result.output
        document = json.loads((output / "dto-schemas.json").read_text(encoding="utf-8"))
        assert set(document["$defs"]) == {"OrderDto", "ItemDto"}
        assert "dto_codegen jsonschema dto.yml" in document["description"]

    def test_version(self, runner):
        result = runner.invoke(dto_codegen, ["--version"])
        assert f"dto_codegen, version {__version__}" in result.output


class TestLoadBuilderConfig:
    """Test cases for builder config files"""

    def test_defaults(self):
        assert load_builder_config(None).namespace == "App"

    def test_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"immutable": True, "unknown": 1}), encoding="utf-8")

        config = load_builder_config(str(path))

        assert config.immutable is True
        assert not hasattr(config, "unknown")

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("", encoding="utf-8")
        assert load_builder_config(str(path)).suffix == "Dto"


class TestReconstructCommandLine:
    """Test cases for command line reconstruction inside a click context"""

    def test_arguments_then_changed_options(self, schema_path, tmp_path):
        params = {
            "config_format": "yml",
            "namespace": "Shop",
            "config": None,
            "verbose": False,
            "readonly": True,
            "strict_nulls": False,
            "export_style": "type",
            "config_path": str(schema_path),
            "output": "out",
        }

        with click.Context(dto_codegen) as parent:
            with click.Context(typescript, parent=parent, info_name="typescript") as ctx:
                ctx.params = params
                result = reconstruct_command_line(typescript)

        assert result == "dto_codegen typescript dto.yml out --namespace Shop --readonly --export-style type"


if __name__ == "__main__":
    pytest.main([__file__])
