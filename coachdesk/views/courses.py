from __future__ import annotations

import pandas as pd
import streamlit as st

from coachdesk.components.metrics import format_currency
from coachdesk.components.narrative import render_page_intro, run_action
from coachdesk.config import AppConfig
from coachdesk.data.models import Course
from coachdesk.data.service import DataContext


def _course_form(key: str, course: Course | None = None) -> dict | None:
    c = course
    with st.form(key, clear_on_submit=course is None):
        c1, c2 = st.columns(2)
        name = c1.text_input("Name *", value=c.name if c else "")
        fee = c2.number_input("Fee *", min_value=0.0, step=500.0, value=float(c.feeAmount) if c else 0.0)
        duration = c1.text_input("Duration", value=c.duration if c else "", placeholder="e.g. 6 months")
        description = c2.text_area("Description", value=c.description if c else "", height=80)
        submitted = st.form_submit_button("Save changes" if c else "Add course")

    if not submitted:
        return None
    if not name.strip():
        st.error("Name is required")
        return None
    return {
        "name": name.strip(),
        "feeAmount": float(fee),
        "duration": duration.strip(),
        "description": description.strip(),
    }


def render(cfg: AppConfig, ctx: DataContext) -> None:
    render_page_intro("Courses", "Subjects on offer and their fees.")

    with st.expander("➕ Add course", expanded=False):
        data = _course_form("add_course")
        if data:
            run_action(ctx.courses.create, data)

    courses = ctx.courses.list()
    st.subheader(f"All courses ({len(courses)})")
    if not courses:
        st.info("No courses yet.")
        return

    enrolled = pd.Series([s.course for s in ctx.students.list()]).value_counts()
    st.dataframe(
        pd.DataFrame(
            [
                {
                    "Name": c.name,
                    "Fee": format_currency(c.feeAmount, cfg.currency_symbol),
                    "Duration": c.duration,
                    "Students": int(enrolled.get(c.name, 0)),
                    "Description": c.description,
                }
                for c in courses
            ]
        ),
        hide_index=True,
        use_container_width=True,
    )

    st.subheader("Edit or delete")
    by_id = {c.id: c for c in courses}
    selected = st.selectbox("Course", list(by_id), format_func=lambda i: by_id[i].name)
    course = by_id[selected]
    data = _course_form(f"edit_course_{course.id}", course)
    if data:
        changed = {k: v for k, v in data.items() if getattr(course, k) != v}
        run_action(ctx.courses.update, course.id, changed)
    if st.button("🗑️ Delete course", key=f"delete_course_{course.id}"):
        run_action(ctx.courses.delete, course.id)
