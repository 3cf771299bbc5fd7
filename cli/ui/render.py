"""
cli/ui/render.py - 대시보드 렌더러

Navigator의 관찰 지점만 읽어 Rich 렌더러블을 만듭니다. 상태를 바꾸지 않습니다.

화면 구성:
    ┌ 헤더: 프로젝트/존/리전, 브레드크럼, 항목 수, 로딩 표시
    ├ 본문: 리소스 테이블 (또는 모드별 화면: 도움말, 확인, 경고, 선택 목록, 상세)
    └ 푸터: 필터/명령 입력줄 또는 단축키 힌트
"""

from typing import Any, List, Optional, Sequence, Tuple

from rich.align import Align
from rich.color import Color
from rich.console import Group, RenderableType
from rich.layout import Layout
from rich.panel import Panel
from rich.style import Style
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from cli.i18n import t
from core.catalog import Catalog, ResourceDef, extract_value
from core.config import ZONE_HOTKEYS
from core.navigation import Mode, Navigator, Picker

HEADER_HEIGHT = 4
FOOTER_HEIGHT = 4
# 테이블 테두리 + 헤더 행
TABLE_CHROME = 4

SELECTED_STYLE = "reverse bold"


# =============================================================================
# 공통
# =============================================================================


def visible_window(selected: int, total: int, rows: int) -> Tuple[int, int]:
    """선택 행이 보이도록 표시 범위 [start, end) 계산"""
    if rows <= 0 or total <= 0:
        return 0, 0
    start = max(0, selected - rows + 1)
    start = min(start, max(0, total - rows))
    return start, min(total, start + rows)


def body_rows(height: int) -> int:
    return max(1, height - HEADER_HEIGHT - FOOTER_HEIGHT - TABLE_CHROME)


def _cell_style(catalog: Catalog, color_map: Optional[str], value: str) -> Optional[Style]:
    rgb = catalog.color_for(color_map, value)
    if rgb is None:
        return None
    return Style(color=Color.from_rgb(*rgb))


def _truncate(value: str, width: int) -> str:
    if width > 1 and len(value) > width:
        return value[: width - 1] + "…"
    return value


# =============================================================================
# 헤더/푸터
# =============================================================================


def render_header(nav: Navigator) -> Panel:
    grid = Table.grid(expand=True, padding=(0, 2))
    grid.add_column(ratio=1)
    grid.add_column(justify="right")

    project = nav.project or t("ui.no_project")
    context = Text.assemble(
        (f"{t('ui.project')}: ", "dim"),
        (project, "bold cyan"),
        "  ",
        (f"{t('ui.zone')}: ", "dim"),
        (nav.zone, "bold green"),
        "  ",
        (f"{t('ui.region')}: ", "dim"),
        (nav.client.region, "green"),
    )
    status = Text()
    if nav.readonly:
        status.append(f" {t('ui.readonly_badge')} ", style="bold white on red")
        status.append(" ")
    if nav.loading:
        status.append(t("ui.loading"), style="yellow")
    grid.add_row(context, status)

    crumbs = Text(" > ".join(nav.breadcrumb()), style="bold magenta")
    if nav.filter_text or nav.filter_active:
        count = t("ui.filtered_count", shown=len(nav.filtered_items), total=len(nav.items))
    else:
        count = t("ui.items_count", count=len(nav.items))
    grid.add_row(crumbs, Text(count, style="dim"))

    resource = nav.current_resource()
    title = resource.display_name if resource else nav.resource_key
    return Panel(grid, title=f"[bold]tgcp[/bold] - {title}", title_align="left", border_style="blue")


def render_footer(nav: Navigator) -> Panel:
    if nav.mode is Mode.COMMAND:
        line = Text.assemble((f"{t('ui.command_prompt')}: ", "bold yellow"), (":" + nav.command.text, "bold"))
        line.append("█", style="blink")
        preview = nav.command.preview
        if preview and preview != nav.command.text:
            line.append(f"  → {preview}", style="dim")
        shown = nav.command.suggestions[:8]
        if shown:
            line.append("\n")
            for i, suggestion in enumerate(shown):
                style = SELECTED_STYLE if i == nav.command.selected else "dim"
                line.append(suggestion, style=style)
                line.append("  ")
        return Panel(line, border_style="yellow")

    if nav.filter_active or nav.filter_text:
        line = Text.assemble((f"{t('ui.filter_prompt')}: ", "bold cyan"), ("/" + nav.filter_text, "bold"))
        if nav.filter_active:
            line.append("█", style="blink")
        return Panel(line, border_style="cyan")

    hints = Text()
    for shortcut, name in nav.action_hints():
        hints.append(f"<{shortcut}>", style="bold cyan")
        hints.append(f" {name}  ")
    if nav.parent_context is not None:
        hints.append("<backspace>", style="bold cyan")
        hints.append(" Back  ")
    hints.append("\n")
    hints.append(t("ui.hint_normal"), style="dim")
    return Panel(hints, border_style="blue")


# =============================================================================
# 리소스 테이블
# =============================================================================


def build_items_table(
    catalog: Catalog,
    resource: ResourceDef,
    items: Sequence[Any],
    selected: Optional[int] = None,
    start: int = 0,
    end: Optional[int] = None,
) -> Table:
    """리소스 컬럼 정의대로 테이블 생성 (--once 출력에도 사용)"""
    table = Table(expand=True, header_style="bold", border_style="blue", show_edge=True)
    for column in resource.columns:
        table.add_column(column.header, min_width=min(column.width, 8), max_width=column.width, no_wrap=True)

    stop = len(items) if end is None else end
    for index in range(start, stop):
        item = items[index]
        cells: List[Text] = []
        for column in resource.columns:
            value = extract_value(item, column.json_path)
            cells.append(Text(_truncate(value, column.width), style=_cell_style(catalog, column.color_map, value) or ""))
        table.add_row(*cells, style=SELECTED_STYLE if index == selected else None)
    return table


def render_resource_table(nav: Navigator, height: int) -> RenderableType:
    resource = nav.current_resource()
    if resource is None:
        return Align.center(Text(t("nav.resource_not_found", resource=nav.resource_key), style="red"))
    if not nav.filtered_items:
        message = t("ui.loading") if nav.loading else t("ui.empty")
        return Group(build_items_table(nav.catalog, resource, []), Align.center(Text(message, style="dim")))

    start, end = visible_window(nav.selected, len(nav.filtered_items), body_rows(height))
    return build_items_table(nav.catalog, resource, nav.filtered_items, nav.selected, start, end)


# =============================================================================
# 모드별 화면
# =============================================================================


def _dialog(body: RenderableType, title: str, border_style: str) -> RenderableType:
    panel = Panel(body, title=title, border_style=border_style, width=72, padding=(1, 2))
    return Align.center(panel, vertical="middle")


def render_confirm(nav: Navigator) -> RenderableType:
    pending = nav.pending_action
    if pending is None:
        return Text("")
    yes_style = "bold white on red" if pending.destructive else "bold black on green"
    buttons = Text.assemble(
        (f" {t('ui.yes')} ", yes_style if pending.selected_yes else "dim"),
        "   ",
        (f" {t('ui.no')} ", "bold black on white" if not pending.selected_yes else "dim"),
    )
    body = Group(Text(pending.message), Text(""), Align.center(buttons))
    if pending.destructive:
        return _dialog(body, t("ui.destructive_title"), "red")
    return _dialog(body, t("ui.confirm_title"), "yellow")


def render_message(nav: Navigator) -> RenderableType:
    footer = Text(t("ui.dismiss_hint"), style="dim")
    if nav.error is not None:
        return _dialog(Group(Text(nav.error, style="red"), Text(""), footer), t("ui.error_title"), "red")
    return _dialog(Group(Text(nav.warning_message or ""), Text(""), footer), t("ui.warning_title"), "yellow")


def render_picker(picker: Picker, title: str, current: str, height: int) -> RenderableType:
    rows = body_rows(height)
    start, end = visible_window(picker.selected, len(picker.options), rows)
    lines = Text()
    for index in range(start, end):
        option = picker.options[index]
        marker = "* " if option == current else "  "
        style = SELECTED_STYLE if index == picker.selected else ""
        lines.append(f"{marker}{option}\n", style=style)
    if not picker.options:
        lines.append(t("ui.empty"), style="dim")
    body = Group(lines, Text(t("ui.picker_hint"), style="dim"))
    return Align.center(Panel(body, title=title, border_style="cyan", width=60), vertical="top")


def render_describe(nav: Navigator, height: int) -> RenderableType:
    text = nav.describe_text()
    rows = body_rows(height)
    scroll = nav.describe.scroll if nav.describe else 0
    syntax = Syntax(
        text,
        "json",
        theme="ansi_dark",
        line_numbers=True,
        line_range=(scroll + 1, scroll + rows),
        word_wrap=False,
    )
    subtitle = f"{scroll + 1}-{min(scroll + rows, nav.describe_line_count())}/{nav.describe_line_count()}"
    return Panel(
        syntax,
        title=t("ui.describe_title"),
        subtitle=f"{subtitle}  {t('ui.describe_hint')}",
        border_style="green",
    )


def render_help(nav: Navigator) -> RenderableType:
    table = Table.grid(padding=(0, 3))
    table.add_column(style="bold cyan", no_wrap=True)
    table.add_column()

    def section(title: str) -> None:
        table.add_row(Text(title, style="bold underline"), "")

    section(t("ui.help_navigation"))
    table.add_row("j / k, ↓ / ↑", t("ui.help_move"))
    table.add_row("gg / G, Home / End", t("ui.help_top_bottom"))
    table.add_row("Enter, d", t("ui.help_describe"))
    table.add_row("Backspace", t("ui.help_back"))
    table.add_row("r", t("ui.help_refresh"))
    table.add_row("/", t("ui.help_filter"))
    table.add_row(":", t("ui.help_command"))
    table.add_row("0-5", t("ui.help_zones") + "  " + " ".join(f"{k}={v}" for k, v in ZONE_HOTKEYS.items()))
    table.add_row("q, Ctrl+C", t("ui.help_quit"))

    table.add_row("", "")
    section(t("ui.help_views"))
    table.add_row(":projects", t("ui.projects_title"))
    table.add_row(":zones", t("ui.zones_title"))
    table.add_row(":back", t("ui.help_back"))
    table.add_row(":<resource>", nav.resource_key)

    hints = nav.action_hints()
    if hints:
        table.add_row("", "")
        section(t("ui.help_actions"))
        for shortcut, name in hints:
            table.add_row(shortcut, name)

    body = Group(table, Text(""), Text(t("ui.help_close"), style="dim"))
    return _dialog(body, t("ui.help_title"), "cyan")


def render_body(nav: Navigator, height: int) -> RenderableType:
    if nav.mode is Mode.HELP:
        return render_help(nav)
    if nav.mode is Mode.CONFIRM:
        return render_confirm(nav)
    if nav.mode is Mode.WARNING:
        return render_message(nav)
    if nav.mode is Mode.PROJECTS:
        return render_picker(nav.projects, t("ui.projects_title"), nav.project, height)
    if nav.mode is Mode.ZONES:
        return render_picker(nav.zones, t("ui.zones_title"), nav.zone, height)
    if nav.mode is Mode.DESCRIBE:
        return render_describe(nav, height)
    return render_resource_table(nav, height)


def render_dashboard(nav: Navigator, height: int) -> Layout:
    """전체 화면 레이아웃"""
    layout = Layout()
    layout.split_column(
        Layout(render_header(nav), name="header", size=HEADER_HEIGHT),
        Layout(render_body(nav, height), name="body"),
        Layout(render_footer(nav), name="footer", size=FOOTER_HEIGHT),
    )
    return layout
