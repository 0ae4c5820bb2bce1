"""Typer CLI entrypoint for card augmentation."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cards import __version__
from cards.augment import augment
from cards.classifier import classify
from cards.normalizer import normalize_many
from cli.commands import config as config_command
from cli.common import (
    build_options,
    emit_json,
    load_source,
    load_tables,
    read_source,
    resolve_options,
    write_json,
)
from core.config import get_settings
from schemas.responses import AugmentResult
from services.host_payload import build_host_payload
from services.io import parse_generation_envelope

app = typer.Typer(
    help="Adaptive Card 规范化与展示增强工具\n\n将任意（可能损坏的）卡片 JSON 规范化、分类并合成为单个可渲染卡片\n",
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    add_completion=False,
    options_metavar="[选项]",
    subcommand_metavar="命令 [参数]",
)
app.add_typer(config_command.app, name="config")
console = Console()


def _source_argument() -> typer.models.ArgumentInfo:
    return typer.Argument(..., metavar="输入", help="卡片 JSON 文件路径，- 表示 stdin")


@app.callback()
def root(
    ctx: typer.Context,
    version_flag: bool = typer.Option(
        False,
        "-v",
        "--version",
        help="输出版本信息",
    ),
) -> None:
    if version_flag:
        typer.echo(__version__)
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("augment", help="规范化、分类并合成卡片，输出文档与描述")
def augment_command(
    source: str = _source_argument(),
    options: str | None = typer.Option(None, "--options", help="AugmentOptions 的 JSON 字符串"),
    options_file: Path | None = typer.Option(
        None, "--options-file", help="包含 AugmentOptions 的 JSON/YAML 文件路径"
    ),
    set_values: list[str] | None = typer.Option(
        None, "--set", help="使用 key=value 覆盖单个选项，可重复传入"
    ),
    json_out: bool = typer.Option(True, "--json/--no-json", help="输出 JSON 结果"),
    output: Path | None = typer.Option(None, "--output", help="将 JSON 结果写入文件"),
) -> None:
    options_obj = resolve_options(options, options_file, set_values)
    tables = load_tables(options_obj.presentation_tables)
    result = augment(load_source(source), options=options_obj, tables=tables)
    payload = result.to_payload()

    if output is not None:
        write_json(payload, output)
        typer.echo(f"已写入: {output}")
    if json_out:
        emit_json(payload)
        return

    _print_summary(result)


@app.command("classify", help="仅输出每张卡片的分类描述")
def classify_command(
    source: str = _source_argument(),
    max_depth: int | None = typer.Option(None, "--max-depth", min=1, help="遍历深度上限"),
) -> None:
    depth = max_depth or get_settings().card_max_depth
    tables = load_tables()
    documents = normalize_many(load_source(source))
    descriptors = [
        classify(document, index=index, tables=tables, max_depth=depth)
        for index, document in enumerate(documents)
    ]
    emit_json([descriptor.model_dump(by_alias=True) for descriptor in descriptors])


@app.command("coords", help="输出带坐标提示的元素列表")
def coords_command(source: str = _source_argument()) -> None:
    result = augment(load_source(source), tables=load_tables())
    emit_json([record.model_dump() for record in result.coordinates])


@app.command("inputs", help="输出表单输入默认值")
def inputs_command(
    source: str = _source_argument(),
    pairs: bool = typer.Option(False, "--pairs", help="以 key/value 列表输出"),
    separator: str | None = typer.Option(None, "--separator", help="多选值分隔符"),
) -> None:
    options = build_options({"value_separator": separator})
    result = augment(load_source(source), options=options, tables=load_tables())
    emit_json(result.input_pairs() if pairs else result.input_defaults)


@app.command("payload", help="生成宿主应用使用的卡片载荷")
def payload_command(
    source: str = _source_argument(),
    envelope: bool = typer.Option(
        False, "--envelope", help="输入为生成服务返回的 {cardJson, cardPage, notes} 包"
    ),
) -> None:
    if envelope:
        try:
            raw = parse_generation_envelope(read_source(source)).card_json
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from exc
    else:
        raw = load_source(source)
    emit_json(build_host_payload(raw, tables=load_tables()).model_dump(by_alias=True))


def _print_summary(result: AugmentResult) -> None:
    table = Table(title="卡片摘要")
    table.add_column("#", justify="right")
    table.add_column("布局")
    table.add_column("主题")
    table.add_column("标题")
    table.add_column("元素", justify="right")
    for descriptor in result.descriptors:
        table.add_row(
            str(descriptor.index),
            descriptor.layout_type,
            descriptor.theme,
            escape(descriptor.title),
            str(descriptor.stats.element_count),
        )
    console.print(table)
    console.print(
        f"sections={len(result.document.content)} inputs={len(result.input_defaults)} "
        f"coordinates={len(result.coordinates)}"
    )


def main() -> None:
    app()


__all__ = ["app", "main"]
