"""
cli/app.py - 메인 CLI 엔트리포인트

Click 기반의 CLI 애플리케이션 진입점입니다.

명령어 구조:
    tgcp                           # 대시보드 (마지막 리소스 또는 vm-instances)
    tgcp --version                 # 버전 표시
    tgcp -p my-proj -z europe-west1-b
    tgcp --resource buckets --readonly
    tgcp --resource buckets --once [--json]   # 한 번 조회 후 출력
    tgcp --list-resources          # 카탈로그 리소스 목록

아키텍처:
    1. 언어/로깅 설정 (로그는 파일로)
    2. 카탈로그 로드 (core.catalog)
    3. 프로젝트/존 결정: 옵션 → 환경 변수 → 설정 파일 → 자격 증명/메타데이터
    4. --once면 한 번 조회, 아니면 cli.ui.loop.run_dashboard

Usage:
    $ tgcp
    $ python -m cli.app
"""

import json as json_module
import logging
import sys
from typing import Optional

import click

from cli.i18n import SUPPORTED_LANGS, set_lang, t
from core.catalog import Catalog
from core.config import DEFAULT_RESOURCE, UserConfig, effective_project, effective_zone, get_version
from core.exceptions import CatalogError, TgcpError, format_error_for_user
from core.gcp import GcpClient, list_resources
from core.gcp.auth import TokenProvider
from core.navigation import Navigator

logger = logging.getLogger(__name__)

VERSION = get_version()

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _resolve_project(option: Optional[str], config: UserConfig, provider: TokenProvider) -> Optional[str]:
    """옵션 → 환경 변수 → 설정 파일 → 자격 증명/메타데이터"""
    return option or effective_project(config) or provider.get_project()


def _resolve_resource(option: Optional[str], config: UserConfig, catalog: Catalog) -> str:
    if option:
        if option not in catalog:
            raise click.BadParameter(t("cli.unknown_resource", resource=option), param_hint="--resource")
        return option
    if config.last_resource and config.last_resource in catalog:
        return config.last_resource
    if config.last_resource:
        logger.warning("Ignoring unknown last_resource in config: %s", config.last_resource)
    return DEFAULT_RESOURCE


def _stdin_is_tty() -> bool:
    return sys.stdin.isatty()


def _print_resources(catalog: Catalog) -> None:
    from rich.table import Table

    from cli.ui.console import console

    table = Table(show_header=True)
    table.add_column(t("cli.resources_header"), style="cyan")
    table.add_column(t("cli.service_header"), style="white")
    table.add_column(t("cli.name_header"), style="yellow")
    for key in catalog.keys():
        resource = catalog.get(key)
        table.add_row(key, resource.service, resource.display_name)
    console.print(table)


def _run_once(catalog: Catalog, client: GcpClient, resource_key: str, as_json: bool) -> None:
    """대시보드 없이 한 번 조회하고 출력"""
    from cli.ui.console import console
    from cli.ui.render import build_items_table

    resource = catalog.get(resource_key)
    items = list_resources(client, resource)
    if as_json:
        click.echo(json_module.dumps(items, ensure_ascii=False, indent=2))
        return
    table = build_items_table(catalog, resource, items)
    table.title = f"{resource.display_name} ({client.project}, {client.zone})"
    console.print(table)


@click.command(help=t("cli.help"))
@click.version_option(VERSION, prog_name="tgcp")
@click.option("-p", "--project", default=None, help=t("cli.opt_project"))
@click.option("-z", "--zone", default=None, help=t("cli.opt_zone"))
@click.option("-r", "--resource", default=None, help=t("cli.opt_resource"))
@click.option("--readonly", is_flag=True, help=t("cli.opt_readonly"))
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="INFO",
    help=t("cli.opt_log_level"),
)
@click.option("--lang", type=click.Choice(SUPPORTED_LANGS), default="en", help=t("cli.opt_lang"))
@click.option("--once", is_flag=True, help=t("cli.opt_once"))
@click.option("--json", "as_json", is_flag=True, help=t("cli.opt_json"))
@click.option("--list-resources", "show_resources", is_flag=True, help=t("cli.opt_list_resources"))
def cli(
    project: Optional[str],
    zone: Optional[str],
    resource: Optional[str],
    readonly: bool,
    log_level: str,
    lang: str,
    once: bool,
    as_json: bool,
    show_resources: bool,
) -> None:
    """tgcp - GCP 터미널 대시보드"""
    from cli.ui.console import get_logger, print_error, setup_logging

    set_lang(lang)
    log_path = setup_logging(log_level)
    logger.info("tgcp %s starting (log: %s)", VERSION, log_path)

    try:
        catalog = Catalog.load_builtin()
    except CatalogError as e:
        print_error(t("cli.catalog_failed", error=e))
        raise SystemExit(1) from e

    if show_resources:
        _print_resources(catalog)
        return

    config = UserConfig.load()
    resource_key = _resolve_resource(resource, config, catalog)
    provider = TokenProvider()
    client = GcpClient(
        project=_resolve_project(project, config, provider),
        zone=zone or effective_zone(config),
        token_provider=provider,
    )

    if once:
        # 한 번 실행 모드에서는 core 로그도 콘솔에 표시 (JSON 출력은 제외)
        if not as_json:
            get_logger("core")
        if not client.has_project:
            print_error(t("cli.project_required"))
            raise SystemExit(2)
        try:
            _run_once(catalog, client, resource_key, as_json)
        except TgcpError as e:
            logger.error("List failed: %s", e)
            print_error(format_error_for_user(e))
            raise SystemExit(1) from e
        return

    if not _stdin_is_tty():
        print_error(t("cli.not_a_terminal"))
        raise SystemExit(1)

    from cli.ui.loop import run_dashboard

    nav = Navigator(catalog, client, config=config, readonly=readonly, resource_key=resource_key)
    run_dashboard(nav)
    logger.info("tgcp exited")


if __name__ == "__main__":
    cli()
