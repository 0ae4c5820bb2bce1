"""Configuration inspection commands."""

from __future__ import annotations

from typing import Any

import typer

from cli.common import emit_json, load_tables
from core.config import Settings, get_settings
from schemas.requests import AugmentOptions


app = typer.Typer(
    help="配置查看与导出",
    context_settings={"help_option_names": ["-h", "--help"]},
    add_completion=False,
    no_args_is_help=True,
    options_metavar="[选项]",
    subcommand_metavar="命令 [参数]",
)


@app.command("show", help="查看当前生效配置")
def show_config(
    json_out: bool = typer.Option(True, "--json/--no-json", help="输出 JSON"),
) -> None:
    payload = get_settings().model_dump()
    if json_out:
        emit_json(payload)
        return
    for key, value in payload.items():
        typer.echo(f"{key}={value}")


@app.command("diff", help="显示与默认值的差异")
def diff_config() -> None:
    defaults = _settings_defaults()
    diff: dict[str, dict[str, Any]] = {}
    for key, value in get_settings().model_dump().items():
        default = defaults.get(key)
        if value != default:
            diff[key] = {"value": value, "default": default}
    emit_json(diff)


@app.command("options", help="查看可设置的运行参数")
def list_run_options() -> None:
    emit_json(AugmentOptions.model_json_schema())


@app.command("tables", help="输出当前生效的展示配置表")
def show_tables(
    path: str | None = typer.Option(None, "--path", help="展示配置 YAML 路径"),
) -> None:
    emit_json(load_tables(path).model_dump())


def _settings_defaults() -> dict[str, Any]:
    return {name: field.default for name, field in Settings.model_fields.items()}


__all__ = ["app"]
