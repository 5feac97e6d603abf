from datetime import date, datetime

from health_pdf.assembler import assemble
from health_pdf.layout import ROW_SPACE, SECTION_SPACE, TextLayout
from health_pdf.stream import truncate

# (heading, x offset, display width)
REPORT_COLUMNS = (("Report Name", 0, 30), ("Type", 180, 15), ("Date", 280, None))
VISIT_COLUMNS = (
    ("Doctor", 0, 20),
    ("Specialization", 150, 18),
    ("Date", 280, None),
    ("Diagnosis", 360, 20),
)
MEDICATION_COLUMNS = (
    ("Medicine", 0, 20),
    ("Dosage", 140, 12),
    ("Frequency", 230, 15),
    ("Status", 340, None),
    ("Start Date", 420, None),
)
VACCINATION_COLUMNS = (("Vaccine", 0, 30), ("Date Taken", 200, None), ("Next Due", 320, None))
FITNESS_COLUMNS = (
    ("Date", 0, None),
    ("Steps", 80, None),
    ("Distance (km)", 150, None),
    ("Calories", 240, None),
    ("Water (ml)", 310, None),
    ("Heart Rate", 390, None),
)

FOOTER_LINES = (
    "This document was generated by Personal Health Record Manager",
    "For medical emergencies, please contact your healthcare provider immediately.",
)


def format_date(value):
    if value is None:
        return ""
    if isinstance(value, (datetime, date)):
        return value.strftime('%Y-%m-%d')
    return str(value)


def _generated(generated_on):
    return (generated_on or date.today()).strftime('%B %d, %Y')


def _or(value, default="N/A"):
    if value is None or value == "":
        return default
    return value


def _section(layout, title):
    layout.ensure_space(SECTION_SPACE)
    layout.emit_line(title, 14, bold=True, advance=20)


def _table(layout, columns, rows, empty_message):
    if not rows:
        layout.emit_line(empty_message)
        return

    layout.emit_row([(x, heading) for heading, x, _ in columns], bold=True)
    for row in rows:
        layout.ensure_space(ROW_SPACE)
        layout.emit_row([
            (x, truncate(value, width))
            for (_, x, width), value in zip(columns, row)
        ])


def _footer(layout):
    layout.ensure_space(40)
    for line in FOOTER_LINES:
        layout.emit_line(line, 8, advance=12)


def build_health_summary(profile, reports, visits, medications, vaccinations,
                         email="", generated_on=None):
    """Render the complete health summary as PDF bytes"""
    layout = TextLayout()

    # Title
    layout.emit_line('PERSONAL HEALTH RECORD', 18, bold=True, advance=25)
    layout.emit_line('Complete Health Summary', 12, advance=15)
    layout.emit_line(f"Generated: {_generated(generated_on)}", advance=40)

    # Health ID card
    layout.emit_line('HEALTH ID CARD', 14, bold=True, advance=25)
    if profile:
        layout.emit_line(f"Name: {_or(profile.get('name'))}")
        layout.emit_line(f"Email: {email}")
        layout.emit_line(f"Age: {_or(profile.get('age'))}", advance=0)
        layout.emit_line(f"Gender: {_or(profile.get('gender'))}", x_offset=150)
        layout.emit_line(f"Blood Group: {_or(profile.get('blood_group'))}")
        layout.emit_line(f"Allergies: {_or(profile.get('allergies'), 'None reported')}")
        layout.emit_line(f"Emergency Contact: {_or(profile.get('emergency_contact'))}", advance=0)
    else:
        layout.emit_line('Profile not set up', advance=0)
    layout.skip(35)

    # Medical reports
    _section(layout, 'MEDICAL REPORTS')
    _table(layout, REPORT_COLUMNS, [
        (report.get('report_name'), report.get('report_type'), format_date(report.get('report_date')))
        for report in reports
    ], 'No medical reports recorded')
    layout.skip(25)

    # Doctor visits
    _section(layout, 'DOCTOR VISITS')
    _table(layout, VISIT_COLUMNS, [
        (
            visit.get('doctor_name'),
            visit.get('specialization'),
            format_date(visit.get('visit_date')),
            _or(visit.get('diagnosis')),
        )
        for visit in visits
    ], 'No doctor visits recorded')
    layout.skip(25)

    # Medications
    _section(layout, 'MEDICATIONS')
    _table(layout, MEDICATION_COLUMNS, [
        (
            med.get('medicine_name'),
            med.get('dosage'),
            med.get('frequency'),
            'Active' if med.get('is_active') else 'Completed',
            format_date(med.get('start_date')),
        )
        for med in medications
    ], 'No medications recorded')
    layout.skip(25)

    # Vaccinations
    _section(layout, 'VACCINATIONS')
    _table(layout, VACCINATION_COLUMNS, [
        (
            vac.get('vaccine_name'),
            format_date(vac.get('date_taken')),
            _or(format_date(vac.get('next_due_date'))),
        )
        for vac in vaccinations
    ], 'No vaccinations recorded')
    layout.skip(30)

    _footer(layout)
    return assemble(layout.finish())


def build_fitness_report(profile, logs, summary, start_date, end_date, generated_on=None):
    """Render a fitness report for one period as PDF bytes.

    ``summary`` is the FitnessSummary computed over the same ``logs``.
    """
    layout = TextLayout()
    profile = profile or {}

    # Title
    layout.emit_line('Fitness Report', 24, bold=True, advance=20)
    layout.emit_line(f"Generated: {_generated(generated_on)}")
    layout.emit_line(f"Period: {format_date(start_date)} to {format_date(end_date)}", advance=35)

    # Health ID card
    layout.emit_line('Health ID Card', 14, bold=True, advance=18)
    layout.emit_line(f"Name: {_or(profile.get('name'))}")
    layout.emit_line(
        f"Age: {_or(profile.get('age'))} | Gender: {_or(profile.get('gender'))} | "
        f"Blood Group: {_or(profile.get('blood_group'))}"
    )
    layout.emit_line(f"Allergies: {_or(profile.get('allergies'), 'None reported')}")
    layout.emit_line(f"Emergency Contact: {_or(profile.get('emergency_contact'))}", advance=30)

    # Totals
    _section(layout, 'Fitness Summary')
    layout.emit_line(f"Total Steps: {summary.total_steps:,}")
    layout.emit_line(f"Total Distance: {summary.total_distance:.2f} km")
    layout.emit_line(f"Total Calories Burned: {summary.total_calories:,}")
    layout.emit_line(f"Average Water Intake: {summary.avg_water} ml/day", advance=30)

    _section(layout, 'Heart Rate Analysis')
    layout.emit_line(f"Average Heart Rate: {summary.avg_heart_rate} BPM")
    layout.emit_line(f"Minimum Heart Rate: {summary.min_heart_rate} BPM")
    layout.emit_line(f"Maximum Heart Rate: {summary.max_heart_rate} BPM")
    layout.emit_line(f"Heart Rate Status: {summary.heart_rate_status}", advance=30)

    # Daily logs
    _section(layout, 'Daily Logs')
    _table(layout, FITNESS_COLUMNS, [
        (
            format_date(log.get('date')),
            f"{log.get('steps') or 0:,}",
            f"{log.get('distance_km') or 0:.2f}",
            f"{log.get('calories') or 0:,}",
            f"{log.get('water_ml') or 0:,}",
            '-' if log.get('heart_rate') is None else log['heart_rate'],
        )
        for log in logs
    ], 'No fitness logs recorded for this period')
    layout.skip(30)

    _footer(layout)
    return assemble(layout.finish())
