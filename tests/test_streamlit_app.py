from __future__ import annotations

from datetime import datetime, timezone

import streamlit_app
from urbanplan_app.report import build_report

GENERATED_AT = datetime(2025, 1, 20, tzinfo=timezone.utc)


def test_report_is_shown_for_the_location_it_was_built_for(sample_responses):
    document = build_report("Delhi, NCT", sample_responses, generated_at=GENERATED_AT)

    assert streamlit_app._current_report({"report": document}, "Delhi, NCT") is document


def test_changing_location_hides_the_previous_report(sample_responses):
    document = build_report("Delhi, NCT", sample_responses, generated_at=GENERATED_AT)

    assert streamlit_app._current_report({"report": document}, "Mumbai, Maharashtra") is None
    assert streamlit_app._current_report({}, "Delhi, NCT") is None
