import estate_trends.bootstrap_env  # must be first to set env/secrets
import streamlit as st

from estate_trends.config import Settings
from estate_trends.controller import DashboardController
from estate_trends.ui.layout import setup_page, sidebar_controls, tab_bar
from estate_trends.ui.pages import monthly_trend, observed_trend, records
from estate_trends.ui.pages.context import PageContext

CONTROLLER_KEY = "et_controller"

PAGE_RENDERERS = {
    "records": records.render,
    "monthly_trend": monthly_trend.render,
    "observed_trend": observed_trend.render,
}


def _get_controller(settings: Settings) -> DashboardController:
    # One controller per browser session; it owns every cache and chart slot
    controller = st.session_state.get(CONTROLLER_KEY)
    if controller is None:
        controller = DashboardController.from_settings(settings)
        controller.bootstrap()
        st.session_state[CONTROLLER_KEY] = controller
    return controller


def main() -> None:
    setup_page()
    st.title("Real Estate Transaction Dashboard")

    settings = Settings.from_env()
    controller = _get_controller(settings)
    sidebar_controls(controller)

    if controller.status:
        st.error(controller.status)

    tab_bar(controller)
    context = PageContext(controller=controller, settings=settings)
    for panel, renderer in PAGE_RENDERERS.items():
        if controller.tabs.is_visible(panel):
            renderer(context)


if __name__ == "__main__":
    main()
