from concurrent.futures import ThreadPoolExecutor

from chronos.schemas.subjects import LectureType
from chronos.schemas.timetables import DaySchedule, TimetableData, TimetableEntry
from chronos.services import export_service
from chronos.services.export_service import (
    _entry_text,
    entries_frame,
    export_filename,
    grid_dimensions,
    group_concurrent_entries,
    render_timetable_png,
)


def _entry(start, end, name, **kwargs):
    return TimetableEntry(time_start=start, time_end=end, subject_name=name, **kwargs)


def _week():
    return TimetableData(days=[
        DaySchedule(day="Monday", entries=[
            _entry("08:30", "09:30", "Algebra", teacher="Dr. Rao", room="LH-101"),
            _entry("09:30", "11:30", "Physics Lab", teacher="Dr. Iyer", room="Lab 12",
                   type=LectureType.PRACTICAL, batches=["X"]),
            _entry("09:30", "11:30", "Chemistry Lab", teacher="Dr. Sen", room="Lab 13",
                   type=LectureType.PRACTICAL, batches=["Y"]),
            _entry("11:30", "11:45", "Break", room="-", is_break=True, break_label="Short Break"),
        ]),
        DaySchedule(day="Tuesday", entries=[
            _entry("12:00", "13:10", "Biology", teacher="Dr. Das"),
        ]),
    ])


def test_filename_is_derived_from_the_college_name():
    assert export_filename("Chronos Tech Institute") == "chronos_tech_institute_schedule.png"
    assert export_filename("St. Mary's") == "st__mary_s_schedule.png"
    assert export_filename("") == "timetable_schedule.png"
    assert export_filename(None) == "timetable_schedule.png"


def test_empty_timetable_spans_eight_to_three():
    dims = grid_dimensions(TimetableData(days=[DaySchedule(day="Monday")]))

    assert (dims["start_hour"], dims["end_hour"]) == (8, 15)
    assert dims["hours"] == [8, 9, 10, 11, 12, 13, 14]


def test_grid_covers_every_entry_rounding_the_end_up():
    dims = grid_dimensions(_week())

    assert (dims["start_hour"], dims["end_hour"]) == (8, 14)


def test_entries_frame_has_one_row_per_entry():
    df = entries_frame(_week())

    assert len(df) == 5
    assert list(df["row"]) == [0, 0, 0, 0, 1]
    assert df.iloc[0]["start_min"] == 510


def test_concurrent_entries_share_a_group():
    groups = group_concurrent_entries(_week().days[0].entries)

    assert [[e.subject_name for e in g] for g in groups] == [
        ["Algebra"], ["Physics Lab", "Chemistry Lab"], ["Break"]
    ]


def test_entry_text_can_hide_the_room():
    lab = _week().days[0].entries[1]

    assert _entry_text(lab, show_room=True) == "Physics Lab\n9:30 AM - 11:30 AM\nDr. Iyer\nLab 12\nBatch X"
    assert _entry_text(lab, show_room=False) == "Physics Lab\n9:30 AM - 11:30 AM\nDr. Iyer\nBatch X"
    assert _entry_text(_week().days[0].entries[3], show_room=True) == "Short Break"


def test_render_produces_a_png():
    image = render_timetable_png(_week(), title="Chronos Tech Institute")

    assert image[:4] == b"\x89PNG"


def test_render_handles_an_empty_timetable():
    assert render_timetable_png(TimetableData()).startswith(b"\x89PNG")


def test_renders_can_run_in_parallel_threads():
    week = _week()

    with ThreadPoolExecutor(max_workers=4) as pool:
        images = list(pool.map(lambda _: render_timetable_png(week, show_room=False), range(8)))

    assert all(image.startswith(b"\x89PNG") for image in images)
    assert not hasattr(export_service, "plt")
