"""
Unit tests for the screen templates.

Templates are rendered straight from the Jinja2 environment; the login
screen needs url_for and is covered by the page integration tests.
"""

from datetime import datetime

import pytest

from endorseme.backend.core.session import WorkflowState
from endorseme.backend.schemas.endorsement import EndorsementHistoryItem
from endorseme.frontend.views import ABOUT_TEXT, templates


def _render(name: str, **context) -> str:
    return templates.get_template(name).render(**context)


@pytest.fixture
def history_item() -> EndorsementHistoryItem:
    return EndorsementHistoryItem(
        id=1,
        username="@alice",
        category_id=3,
        note="pays on time",
        endorsed_by="bob",
        trust_level=4,
        timestamp=datetime(2026, 5, 17, 9, 30),
        category_name="Services",
    )


class TestConfigErrorTemplate:
    def test_lists_missing_variables(self):
        html = _render("config_error.html", missing_vars=["TELEGRAM_BOT_TOKEN", "TELEGRAM_WEBAPP_URL"])

        assert "Missing environment variables: TELEGRAM_BOT_TOKEN, TELEGRAM_WEBAPP_URL" in html
        assert "Please check your .env file" in html


class TestMainTemplate:
    """Tests for main.html."""

    def _main(self, telegram_user, state: WorkflowState) -> str:
        return _render(
            "main.html",
            app_name="Endorse Me",
            user=telegram_user,
            state=state,
            categories=("Money exchange", "Services"),
            trust_levels={1: "Level 1 - Basic Trust", 3: "Level 3 - High Trust"},
            about_text=ABOUT_TEXT,
            learn_more_url="https://endorse-me.com",
        )

    def test_form_reflects_state(self, telegram_user):
        state = WorkflowState(telegram_id="@alice", category="Services", trust_level="1")

        html = self._main(telegram_user, state)

        assert "Welcome, Bob" in html
        assert 'value="@alice"' in html
        assert '<option value="Services" selected>' in html
        assert '<option value="1" selected>' in html
        assert '<option value="3" selected>' not in html

    def test_logout_is_a_post_form(self, telegram_user):
        html = self._main(telegram_user, WorkflowState())

        assert '<form id="logout" method="post" action="/logout">' in html
        assert 'href="/logout"' not in html

    def test_history_and_status(self, telegram_user, history_item):
        state = WorkflowState(success="Retrieved endorsements for @alice", endorsements=[history_item])

        html = self._main(telegram_user, state)

        assert '<p class="success">Retrieved endorsements for @alice</p>' in html
        assert "Endorsement History" in html
        assert "<b>bob</b>" in html
        assert "pays on time" in html
        assert "2026-05-17" in html

    def test_no_history_section_without_endorsements(self, telegram_user):
        assert "Endorsement History" not in self._main(telegram_user, WorkflowState())

    def test_user_content_is_escaped(self, telegram_user):
        state = WorkflowState(telegram_id='"><script>x</script>', error="<b>bad</b>")

        html = self._main(telegram_user, state)

        assert "<script>x</script>" not in html
        assert "&lt;script&gt;" in html
        assert "&lt;b&gt;bad&lt;/b&gt;" in html
