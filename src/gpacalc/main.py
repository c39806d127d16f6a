import logging

import flet as ft

from gpacalc.config.settings import settings
from gpacalc.ui.views.calculator_view import build_calculator_view


logger = logging.getLogger(__name__)


def main(page: ft.Page) -> None:
    page.title = "University GPA Calculator"
    page.views.clear()
    page.views.append(build_calculator_view(page, settings))
    page.update()


def run() -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(
        "Starting GPA calculator (%s mode, port %d)",
        "web" if settings.web_mode else "desktop",
        settings.port,
    )
    ft.app(
        target=main,
        view=ft.AppView.WEB_BROWSER if settings.web_mode else ft.AppView.FLET_APP,
        port=settings.port,
    )


if __name__ == "__main__":
    run()
