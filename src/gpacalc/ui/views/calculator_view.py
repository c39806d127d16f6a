from typing import Dict, Tuple
import flet as ft

from gpacalc.config.settings import Settings
from gpacalc.core.gpa import (
    format_credits,
    format_gpa,
    format_points,
    level_label,
    semester_label,
)
from gpacalc.state.app_state import (
    AppState,
    calculate,
    is_level_open,
    is_semester_open,
    toggle_level,
    toggle_semester,
    update_field,
)


def _toggle_marker(is_open: bool) -> str:
    return "−" if is_open else "+"


def build_calculator_view(page: ft.Page, settings: Settings) -> ft.View:
    state = AppState.initial(settings)

    level_markers: Dict[int, ft.Text] = {}
    level_bodies: Dict[int, ft.Column] = {}
    semester_markers: Dict[Tuple[int, int], ft.Text] = {}
    semester_bodies: Dict[Tuple[int, int], ft.ResponsiveRow] = {}

    results_column = ft.Column(spacing=6)
    cumulative_text = ft.Text(size=18, weight=ft.FontWeight.BOLD, color=ft.Colors.INDIGO_800)
    credits_text = ft.Text(size=13, color=ft.Colors.GREY_700)
    points_text = ft.Text(size=13, color=ft.Colors.GREY_700)

    def sync_visibility() -> None:
        for level, body in level_bodies.items():
            is_open = is_level_open(state, level)
            body.visible = is_open
            level_markers[level].value = _toggle_marker(is_open)
        for (level, sem), body in semester_bodies.items():
            is_open = is_semester_open(state, level, sem)
            body.visible = is_open
            semester_markers[(level, sem)].value = _toggle_marker(is_open)

    def render_results() -> None:
        results = state.results
        results_column.controls.clear()
        for level in state.entries.levels:
            results_column.controls.append(
                ft.Text(level_label(level), size=16, weight=ft.FontWeight.W_600, color=ft.Colors.PURPLE_800)
            )
            for sem in state.entries.semesters:
                results_column.controls.append(
                    ft.Container(
                        padding=ft.padding.only(left=16),
                        content=ft.Text(
                            f"{semester_label(sem)} GPA: {format_gpa(results.semester_gpa(level, sem))}"
                        ),
                    )
                )
        cumulative_text.value = f"Cumulative GPA: {format_gpa(results.cumulative_gpa)}"
        credits_text.value = f"Total Credits: {format_credits(results.total_credits)}"
        points_text.value = f"Total Points: {format_points(results.total_quality_points)}"

    def on_toggle_level(level: int):
        def handler(_):
            nonlocal state
            state = toggle_level(state, level)
            sync_visibility()
            page.update()

        return handler

    def on_toggle_semester(level: int, sem: int):
        def handler(_):
            nonlocal state
            state = toggle_semester(state, level, sem)
            sync_visibility()
            page.update()

        return handler

    def on_field_change(level: int, sem: int, field_name: str):
        def handler(e: ft.ControlEvent):
            nonlocal state
            state = update_field(state, level, sem, field_name, e.control.value or "")

        return handler

    def on_calculate(_):
        nonlocal state
        state = calculate(state)
        render_results()
        page.update()

    def build_semester(level: int, sem: int) -> ft.Container:
        entry = state.entries.get(level, sem)
        gpa_field = ft.TextField(
            label="Semester GPA",
            hint_text="e.g. 9.5",
            helper_text=f"0 to {format_credits(settings.gpa_max)}, step 0.01",
            value=entry.gpa_text,
            keyboard_type=ft.KeyboardType.NUMBER,
            on_change=on_field_change(level, sem, "gpa"),
            col={"xs": 12, "md": 6},
        )
        credits_field = ft.TextField(
            label="Total Credits",
            hint_text="e.g. 20",
            helper_text="0 or more, step 0.5",
            value=entry.credits_text,
            keyboard_type=ft.KeyboardType.NUMBER,
            on_change=on_field_change(level, sem, "credits"),
            col={"xs": 12, "md": 6},
        )
        body = ft.ResponsiveRow(controls=[gpa_field, credits_field], visible=False)
        marker = ft.Text(_toggle_marker(False), weight=ft.FontWeight.BOLD)
        semester_bodies[(level, sem)] = body
        semester_markers[(level, sem)] = marker

        header = ft.Container(
            padding=12,
            bgcolor=ft.Colors.PURPLE_100,
            ink=True,
            on_click=on_toggle_semester(level, sem),
            content=ft.Row(
                alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                controls=[
                    ft.Text(semester_label(sem), weight=ft.FontWeight.W_600, color=ft.Colors.PURPLE_800),
                    marker,
                ],
            ),
        )
        return ft.Container(
            border=ft.border.all(1, ft.Colors.PURPLE_200),
            border_radius=6,
            content=ft.Column(spacing=0, controls=[header, ft.Container(padding=12, content=body)]),
        )

    def build_level(level: int) -> ft.Container:
        body = ft.Column(
            spacing=12,
            visible=False,
            controls=[build_semester(level, sem) for sem in state.entries.semesters],
        )
        marker = ft.Text(_toggle_marker(False), size=20, weight=ft.FontWeight.BOLD)
        level_bodies[level] = body
        level_markers[level] = marker

        header = ft.Container(
            padding=16,
            bgcolor=ft.Colors.INDIGO_100,
            ink=True,
            on_click=on_toggle_level(level),
            content=ft.Row(
                alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                controls=[
                    ft.Text(level_label(level), size=20, weight=ft.FontWeight.BOLD, color=ft.Colors.INDIGO_800),
                    marker,
                ],
            ),
        )
        return ft.Container(
            border=ft.border.all(1, ft.Colors.INDIGO_200),
            border_radius=8,
            content=ft.Column(spacing=0, controls=[header, ft.Container(padding=16, content=body)]),
        )

    levels = [build_level(level) for level in state.entries.levels]
    sync_visibility()
    render_results()

    return ft.View(
        route="/",
        scroll=ft.ScrollMode.AUTO,
        controls=[
            ft.AppBar(title=ft.Text("GPA Calculator")),
            ft.Container(
                padding=20,
                content=ft.Column(
                    spacing=16,
                    controls=[
                        ft.Text("University GPA Calculator", size=28, weight=ft.FontWeight.BOLD),
                        ft.Text(
                            "Expand a level, open a semester, then add your semester GPA and total credits. "
                            "Leave unused fields blank."
                        ),
                        *levels,
                        ft.Row(
                            alignment=ft.MainAxisAlignment.CENTER,
                            controls=[ft.Button("Calculate Cumulative GPA", on_click=on_calculate)],
                        ),
                        ft.Divider(),
                        ft.Text("Results", size=22, weight=ft.FontWeight.BOLD),
                        results_column,
                        cumulative_text,
                        credits_text,
                        points_text,
                    ],
                ),
            ),
        ],
    )
