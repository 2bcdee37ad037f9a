"""Streamlit version of the NASA urban planning dashboard.

Mocked Earth-observation metrics for a handful of Indian cities sit next to
a resident survey, the analysis engine built on it, report exports, scenario
simulation, the city health index and a small city-builder game. Everything
under ``urbanplan_app`` is synchronous; the artificial processing pauses are
applied here, at the UI boundary.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

import numpy as np
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from urbanplan_app.airquality import aqi_info
from urbanplan_app.analysis import analyze_responses
from urbanplan_app.constants import (
    ALL_CITIES,
    CATEGORY_DISPLAY,
    CITIES,
    DEFAULT_CITY,
    HEALTH_DISPLAY,
    LOG_LEVEL,
    PROCESSING_DELAY_SECONDS,
    READING_COLOR_SCHEMES,
    SURVEY_STORE_PATH,
)
from urbanplan_app.gamification import (
    INTERVENTIONS,
    MISSIONS,
    InsufficientBudget,
    apply_intervention,
    new_game,
)
from urbanplan_app.maps import city_map
from urbanplan_app.models import DEFAULT_HEALTH_METRICS, HealthMetrics, ReportDocument, dashboard_metrics
from urbanplan_app.nasa import (
    air_quality_readings,
    city_insights,
    flood_risk_readings,
    historical_series,
    temperature_readings,
    vegetation_readings,
)
from urbanplan_app.predictions import generate_forecast
from urbanplan_app.report import (
    build_report,
    category_radar_png,
    generate_pdf_report,
    metric_csv,
    metric_csv_filename,
    report_chart_frames,
    report_filename,
    report_text,
)
from urbanplan_app.scoring import (
    health_index,
    health_label,
    health_recommendations,
    history_trend,
    synthetic_history,
)
from urbanplan_app.simulator import SCENARIOS, simulate
from urbanplan_app.storage import (
    JsonFileSurveyRepository,
    MalformedSurveyData,
    SurveyRepository,
    record_response,
)
from urbanplan_app.survey import (
    SURVEY_QUESTIONS,
    InvalidSurveyAnswer,
    build_answers,
    responses_frame,
    survey_summary,
    validate_answers,
)

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("urbanplan.streamlit")

st.set_page_config(page_title="NASA Urban Planning Dashboard", layout="wide")


READING_LAYERS = {
    "Surface temperature": (temperature_readings, "temperature", "temperature", "°F"),
    "Vegetation (NDVI)": (vegetation_readings, "ndvi", "ndvi", ""),
    "Air quality": (air_quality_readings, "aqi", "aqi", "AQI"),
    "Flood risk (elevation)": (flood_risk_readings, "elevation", "elevation", "m"),
}


@st.cache_resource(show_spinner=False)
def _repository() -> SurveyRepository:
    return JsonFileSurveyRepository(SURVEY_STORE_PATH)


def processing_delay(message: str) -> None:
    with st.spinner(message):
        time.sleep(PROCESSING_DELAY_SECONDS)


def _load_responses() -> Optional[List]:
    try:
        return _repository().load_all()
    except MalformedSurveyData as exc:
        st.error(f"Stored survey data could not be read: {exc}")
        return None


def _legend_html(name: str, colors: List[List[int]], legend_text: Optional[str]) -> Optional[str]:
    if not colors:
        return None
    total = max(len(colors) - 1, 1)
    stops = ", ".join(
        f"#{r:02x}{g:02x}{b:02x} {idx / total * 100:.0f}%" for idx, (r, g, b) in enumerate(colors)
    )
    low_text, high_text = "Low", "High"
    if legend_text:
        parts = [part.strip() for part in legend_text.split("·")]
        low_text = parts[0]
        if len(parts) > 1:
            high_text = parts[1]
    return f"""
<div style="font-size:0.7rem;margin:0.35rem 0 0.6rem 0;">
  <div style="font-weight:600;text-align:center;">{name}</div>
  <div style="display:grid;grid-template-columns:auto 1fr auto;align-items:center;column-gap:0.5rem;">
    <span>{low_text}</span>
    <div style="height:12px;border-radius:999px;background:linear-gradient(90deg, {stops});"></div>
    <span>{high_text}</span>
  </div>
</div>
"""


def _health_radar(metrics: HealthMetrics) -> go.Figure:
    values = metrics.as_dict()
    labels = [HEALTH_DISPLAY[key][0] for key in values]
    scores = list(values.values())
    return go.Figure(
        data=go.Scatterpolar(r=scores + scores[:1], theta=labels + labels[:1], fill="toself")
    ).update_layout(
        polar={"radialaxis": {"visible": True, "range": [0, 100]}},
        showlegend=False,
        margin=dict(l=20, r=20, t=20, b=20),
    )


def _render_dashboard(city: str) -> None:
    timestamp = datetime.now(timezone.utc).isoformat()
    cards = st.columns(4)
    for column, reading in zip(cards, dashboard_metrics(timestamp)):
        with column:
            st.metric(f"{reading.title} ({reading.unit})", reading.value, reading.change)
            st.caption(f"{reading.description} · {reading.source.name}")
            st.download_button(
                "Download CSV",
                data=metric_csv(reading),
                file_name=metric_csv_filename(reading.title),
                mime="text/csv",
                key=f"csv-{reading.title}",
            )

    insights = city_insights(city)
    band = aqi_info(insights["airQualityIndex"])
    st.subheader(f"🛰️ NASA insights · {city}")
    cols = st.columns(4)
    cols[0].metric("Heat island intensity", f"{insights['heatIslandIntensity']} °C")
    cols[1].metric("Green space deficit", f"{insights['greenSpaceDeficit']}%")
    cols[2].metric("Air quality index", insights["airQualityIndex"], band.level, delta_color="off")
    cols[3].metric("Flood risk areas", f"{insights['floodRiskAreas']}%")
    st.caption(f"{band.description}. Sources: {', '.join(insights['dataSources'])}")

    map_col, history_col = st.columns([1.2, 1], gap="large")
    with map_col:
        layer_name = st.selectbox("Map layer", list(READING_LAYERS))
        loader, value_column, scheme_key, units = READING_LAYERS[layer_name]
        readings = loader(city)
        scheme = READING_COLOR_SCHEMES[scheme_key]
        st.pydeck_chart(
            city_map(city, readings, value_column, label=units, colors=scheme["colors"]),
            use_container_width=True,
        )
        legend = _legend_html(layer_name, scheme["colors"], scheme["legend"])
        if legend:
            st.markdown(legend, unsafe_allow_html=True)
    with history_col:
        metric = st.selectbox("Historical metric", ["temperature", "vegetation", "airquality"])
        series = historical_series(city, metric, 12, rng=np.random.default_rng())
        st.plotly_chart(px.line(series, x="date", y="value", markers=True), use_container_width=True)
        st.caption("Sample series for illustration.")


def _render_health_index() -> None:
    st.subheader("🏙️ City Health Index")
    inputs: Dict[str, float] = {}
    defaults = DEFAULT_HEALTH_METRICS.as_dict()
    slider_cols = st.columns(4)
    for idx, (key, default) in enumerate(defaults.items()):
        name, icon, description = HEALTH_DISPLAY[key]
        with slider_cols[idx % 4]:
            inputs[key] = st.slider(f"{icon} {name}", 0, 100, int(default), help=description)

    metrics = HealthMetrics(**inputs)
    score = health_index(metrics)
    history = synthetic_history(score, np.random.default_rng())
    trend = history_trend(history)

    left, right = st.columns([1, 1.2], gap="large")
    with left:
        st.metric("Overall score", f"{score}/100", health_label(score), delta_color="off")
        st.caption(f"12-month trend: {trend}")
        for recommendation in health_recommendations(score):
            st.markdown(f"- {recommendation}")
        st.plotly_chart(
            px.line(pd.DataFrame({"month": range(1, len(history) + 1), "score": history}), x="month", y="score"),
            use_container_width=True,
        )
    with right:
        st.plotly_chart(_health_radar(metrics), use_container_width=True)


def _render_survey() -> None:
    st.subheader("📝 Community survey")
    with st.form("survey", clear_on_submit=True):
        raw: Dict[str, object] = {}
        for question in SURVEY_QUESTIONS:
            label = question.question + ("" if question.required else " (optional)")
            if question.type == "rating":
                raw[question.id] = st.slider(label, 1, 5, 3, key=question.id)
            elif question.options:
                raw[question.id] = st.selectbox(label, question.options, key=question.id)
            else:
                raw[question.id] = st.text_area(label, key=question.id)
        submitted = st.form_submit_button("Submit survey", type="primary")

    if submitted:
        try:
            answers = build_answers(raw)
            validate_answers(answers)
            processing_delay("Saving your response...")
            response = record_response(_repository(), answers)
        except InvalidSurveyAnswer as exc:
            logger.info("Rejected survey submission: %s", exc)
            st.warning(str(exc))
        except MalformedSurveyData as exc:
            st.error(f"Stored survey data could not be read: {exc}")
        else:
            st.success(f"Thank you! Response {response.id[:8]} recorded for {response.location}.")

    responses = _load_responses()
    if responses:
        st.markdown("#### Quick analysis")
        summary = survey_summary(responses)
        st.dataframe(summary, use_container_width=True, hide_index=True)
        st.caption(f"{len(responses)} responses collected")
        with st.expander("All responses"):
            st.dataframe(responses_frame(responses), use_container_width=True, hide_index=True)


def _render_analysis() -> None:
    st.subheader("🔬 Analysis engine")
    responses = _load_responses()
    if responses is None:
        return
    if not responses:
        st.info("No survey responses yet. Submit one from the Survey tab.")
        return
    if st.button("Run analysis", type="primary"):
        processing_delay("Analyzing survey responses...")
        st.session_state["analysis"] = analyze_responses(responses)

    for result in st.session_state.get("analysis", []):
        with st.expander(
            f"{CATEGORY_DISPLAY[result.category]} · {result.score}/5 · {result.trend} · {result.priority} priority",
            expanded=result.priority == "high",
        ):
            st.markdown("**Insights**")
            for insight in result.insights:
                st.markdown(f"- {insight}")
            st.markdown("**Recommendations**")
            for recommendation in result.recommendations:
                st.markdown(f"- {recommendation}")


def _current_report(state: Mapping[str, Any], location: str) -> Optional[ReportDocument]:
    document = state.get("report")
    if document is None or document.location != location:
        return None
    return document


def _render_reports() -> None:
    st.subheader("📄 Reports")
    location = st.selectbox("Location", (ALL_CITIES,) + CITIES)
    responses = _load_responses()
    if responses is None:
        return
    if st.button("Generate report", type="primary"):
        processing_delay("Generating report...")
        st.session_state["report"] = build_report(location, responses)

    document = _current_report(st.session_state, location)
    if document is None:
        return

    st.markdown(f"### {document.title}")
    cols = st.columns(2)
    cols[0].metric("Total surveys", document.total_surveys)
    cols[1].metric("Average score", f"{document.average_score}/5")
    for finding in document.key_findings:
        st.markdown(f"- {finding}")

    selected = [r for r in responses if document.location == ALL_CITIES or r.location == document.location]
    frames = report_chart_frames(selected, np.random.default_rng())
    trend = frames["trend"].melt(id_vars="week", var_name="category", value_name="score")
    chart_cols = st.columns(2)
    chart_cols[0].plotly_chart(
        px.line(trend, x="week", y="score", color="category", title="Category Trends Over Time"),
        use_container_width=True,
    )
    chart_cols[1].plotly_chart(
        px.bar(frames["performance"], x="category", y="score", title="Category Performance Scores"),
        use_container_width=True,
    )

    download_cols = st.columns(2)
    download_cols[0].download_button(
        "Download text report",
        data=report_text(document),
        file_name=report_filename(document.generated_at),
        mime="text/plain",
    )
    download_cols[1].download_button(
        "Download PDF report",
        data=generate_pdf_report(document, category_radar_png(document)),
        file_name=report_filename(document.generated_at).replace(".txt", ".pdf"),
        mime="application/pdf",
    )


def _render_scenarios(city: str) -> None:
    st.subheader("🧪 Scenario simulation")
    names = {scenario.name: scenario for scenario in SCENARIOS}
    choice = st.selectbox("Scenario", list(names))
    scenario = names[choice]
    st.caption(f"{scenario.description} · {scenario.estimated_cost} · {scenario.timeline} · {scenario.status}")
    for intervention in scenario.interventions:
        st.markdown(f"- {intervention}")

    if st.button("Run simulation", type="primary"):
        processing_delay("Simulating scenario...")
        st.session_state["simulation"] = simulate(scenario.id, city)

    result = st.session_state.get("simulation")
    if result is None:
        return
    st.markdown(f"### {result.scenario_name} · {result.city}")
    rows = [
        {"metric": key.replace("_", " ").title(), "before": change.before, "after": change.after, "change": change.delta}
        for key, change in result.before_after.items()
    ]
    st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)

    cost = result.cost_benefit
    cols = st.columns(4)
    cols[0].metric("Total cost", cost.total_cost)
    cols[1].metric("Annual savings", cost.annual_savings_display)
    cols[2].metric("Payback", cost.payback_display)
    cols[3].metric("ROI", cost.roi_display)

    impact = result.environmental_impact
    st.caption(
        f"CO₂ reduction {impact.co2_reduction} t/yr · Energy savings {impact.energy_savings} MWh/yr"
        f" · Flood risk reduction {impact.flood_risk_reduction}%"
    )
    plan_col, risk_col = st.columns(2)
    with plan_col:
        st.markdown("**Implementation plan**")
        for phase in result.implementation_plan:
            st.markdown(f"*{phase.phase}* ({phase.duration}): " + "; ".join(phase.activities))
        st.markdown("**Recommendations**")
        for recommendation in result.recommendations:
            st.markdown(f"- {recommendation}")
    with risk_col:
        st.markdown("**Risks**")
        for level in ("high", "medium", "low"):
            for risk in getattr(result.risks, level):
                st.markdown(f"- {level.title()}: {risk}")


def _render_city_builder() -> None:
    st.subheader("🎮 City builder")
    state = st.session_state.setdefault("game", new_game())
    city = state.city
    cols = st.columns(5)
    cols[0].metric("AQI", f"{city.aqi:.0f}")
    cols[1].metric("Temperature", f"{city.temperature:.0f} °C")
    cols[2].metric("Vegetation", f"{city.vegetation:.0f}%")
    cols[3].metric("Health", f"{city.health:.0f}")
    cols[4].metric("Budget", f"${city.budget:,}")

    labels = {f"{item.name} (${item.cost:,})": item for item in INTERVENTIONS}
    choice = st.selectbox("Intervention", list(labels))
    st.caption(labels[choice].description)
    action_cols = st.columns(2)
    if action_cols[0].button("Apply intervention", type="primary"):
        try:
            st.session_state["game"] = apply_intervention(state, labels[choice].id)
        except InsufficientBudget as exc:
            st.warning(str(exc))
        else:
            st.rerun()
    if action_cols[1].button("Reset game"):
        st.session_state["game"] = new_game()
        st.rerun()

    st.markdown("**Missions**")
    progress = state.mission_progress()
    for mission in MISSIONS:
        done = "✅" if mission.id in state.completed_missions else "⬜"
        st.markdown(
            f"{done} **{mission.title}** · {mission.description} "
            f"(current {progress[mission.id]:.0f}, reward ${mission.reward:,})"
        )


def _render_forecast() -> None:
    st.subheader("🔮 24-hour forecast")
    forecast = generate_forecast(rng=np.random.default_rng())
    metric = st.selectbox("Forecast metric", ["aqi", "temperature", "humidity", "windSpeed"])
    st.plotly_chart(px.line(forecast, x="timestamp", y=metric), use_container_width=True)
    peak = int(forecast["aqi"].max())
    st.caption(f"Peak AQI {peak} ({aqi_info(peak).level}). Confidence falls from 100% to {forecast['confidence'].iloc[-1]:.0%}.")


def main() -> None:
    st.title("NASA Urban Planning Dashboard")
    city = st.sidebar.selectbox("City", CITIES, index=CITIES.index(DEFAULT_CITY))
    st.sidebar.caption("NASA readings are sample data for illustration.")

    tabs = st.tabs(
        ["Dashboard", "Health Index", "Survey", "Analysis", "Reports", "Scenarios", "City Builder", "Forecast"]
    )
    with tabs[0]:
        _render_dashboard(city)
    with tabs[1]:
        _render_health_index()
    with tabs[2]:
        _render_survey()
    with tabs[3]:
        _render_analysis()
    with tabs[4]:
        _render_reports()
    with tabs[5]:
        _render_scenarios(city)
    with tabs[6]:
        _render_city_builder()
    with tabs[7]:
        _render_forecast()


if __name__ == "__main__":
    main()
