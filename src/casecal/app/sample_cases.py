from __future__ import annotations

from datetime import date, timedelta

from casecal.app.tracker_models import CaseRecord, Hearing


def sample_cases(today: date | None = None) -> tuple[CaseRecord, ...]:
    anchor = today or date.today()
    tomorrow = anchor + timedelta(days=1)
    day_after = anchor + timedelta(days=2)
    return (
        CaseRecord(
            case_id="1",
            case_number="2024-001",
            title="Smith vs. Johnson Contract Dispute",
            description="Contract dispute regarding construction services",
            tags=("contract", "construction", "dispute", "commercial"),
            hearings=(
                Hearing(
                    hearing_id="1-h1",
                    title="Initial Hearing",
                    notes="Bring all preliminary documents and evidence",
                    date=anchor,
                    start_time="09:00",
                    end_time="10:30",
                    status="new",
                ),
                Hearing(
                    hearing_id="1-h2",
                    title="Evidence Review Hearing",
                    notes="Schedule moved due to judge availability",
                    date=anchor,
                    start_time="11:00",
                    end_time="12:30",
                    status="rescheduled",
                ),
                Hearing(
                    hearing_id="1-h3",
                    title="Closing Arguments",
                    notes="Prepare final statement summary",
                    date=anchor,
                    start_time="14:00",
                    end_time="16:00",
                    status="new",
                ),
            ),
        ),
        CaseRecord(
            case_id="2",
            case_number="2024-002",
            title="Williams Personal Injury Case",
            description="Personal injury claim from vehicle accident",
            tags=("personal-injury", "accident", "insurance", "medical"),
            hearings=(
                Hearing(
                    hearing_id="2-h1",
                    title="Settlement Conference",
                    notes="Cancelled due to plaintiff unavailability",
                    date=tomorrow,
                    start_time="10:00",
                    end_time="15:00",
                    status="cancelled",
                ),
                Hearing(
                    hearing_id="2-h2",
                    title="Mediation Hearing",
                    notes="Court-ordered mediation attempt",
                    date=day_after,
                    start_time="09:00",
                    end_time="12:00",
                    status="new",
                ),
            ),
        ),
    )
