from __future__ import annotations

from datetime import date

import pandas as pd
import streamlit as st

from coachdesk.components.metrics import Kpi, render_kpi_row
from coachdesk.components.narrative import render_page_intro, run_action
from coachdesk.config import AppConfig
from coachdesk.data.models import BATCHES, STUDENT_STATUSES, Student
from coachdesk.data.reports import dashboard_stats, search_students
from coachdesk.data.service import DataContext


def _student_form(key: str, course_names: list[str], student: Student | None = None) -> dict | None:
    s = student
    with st.form(key, clear_on_submit=student is None):
        c1, c2 = st.columns(2)
        name = c1.text_input("Name *", value=s.name if s else "")
        email = c2.text_input("Email", value=s.email if s else "")
        phone = c1.text_input("Phone", value=s.phone if s else "")
        courses = [""] + course_names
        course = c2.selectbox(
            "Course",
            courses,
            index=courses.index(s.course) if s and s.course in courses else 0,
        )
        batches = BATCHES if not s or s.batch in BATCHES else BATCHES + [s.batch]
        batch = c1.selectbox("Batch", batches, index=batches.index(s.batch) if s else 0)
        join_date = c2.date_input("Join date", value=date.fromisoformat(s.joinDate) if s else date.today())
        status = c1.selectbox(
            "Status",
            STUDENT_STATUSES,
            index=STUDENT_STATUSES.index(s.status) if s else 0,
            format_func=str.title,
        )
        submitted = st.form_submit_button("Save changes" if s else "Add student")

    if not submitted:
        return None
    if not name.strip():
        st.error("Name is required")
        return None
    return {
        "name": name.strip(),
        "email": email.strip(),
        "phone": phone.strip(),
        "course": course,
        "batch": batch,
        "joinDate": join_date.isoformat(),
        "status": status,
    }


def render(cfg: AppConfig, ctx: DataContext) -> None:
    render_page_intro("Students", "Enrolment records for every batch.")

    students = ctx.students.list()
    course_names = [c.name for c in ctx.courses.list()]
    stats = dashboard_stats(students, [], [], [])
    render_kpi_row(
        [
            Kpi("Total", f"{stats.total_students}"),
            Kpi("Active", f"{stats.active_students}"),
            Kpi("Inactive", f"{stats.inactive_students}"),
            Kpi("New this month", f"{stats.new_students_this_month}"),
        ]
    )

    with st.expander("➕ Add student", expanded=False):
        data = _student_form("add_student", course_names)
        if data:
            run_action(ctx.students.create, data)

    c1, c2 = st.columns([3, 1])
    term = c1.text_input("Search", placeholder="Name, email or course")
    batches = sorted({s.batch for s in students if s.batch})
    batch = c2.selectbox("Batch", ["All"] + batches)

    shown = search_students(students, term)
    if batch != "All":
        shown = [s for s in shown if s.batch == batch]

    st.subheader(f"All students ({len(shown)})")
    if not shown:
        st.info("No students found.")
        return

    st.dataframe(
        pd.DataFrame(
            [
                {
                    "Name": s.name,
                    "Email": s.email,
                    "Phone": s.phone,
                    "Course": s.course,
                    "Batch": s.batch,
                    "Joined": s.joinDate,
                    "Status": s.status.title(),
                }
                for s in shown
            ]
        ),
        hide_index=True,
        use_container_width=True,
    )

    st.subheader("Edit or delete")
    by_id = {s.id: s for s in shown}
    selected = st.selectbox("Student", list(by_id), format_func=lambda i: f"{by_id[i].name} ({by_id[i].course or 'no course'})")
    student = by_id[selected]
    data = _student_form(f"edit_student_{student.id}", course_names, student)
    if data:
        changed = {k: v for k, v in data.items() if getattr(student, k) != v}
        run_action(ctx.students.update, student.id, changed)
    if st.button("🗑️ Delete student", key=f"delete_student_{student.id}"):
        run_action(ctx.students.delete, student.id)
