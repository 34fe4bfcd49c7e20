from datetime import date, time

from agenda.models import AppointmentCreate, AppointmentType
from agenda.services.appointment_service import (
    appointments_in_week,
    appointments_on_day,
    copy_week,
    delete_appointment,
    delete_week,
    save_appointment,
    suggest_slot,
    week_overview,
)
from agenda.services.slot_service import FreeSlot
from agenda.services.state import AgendaError, AgendaState


def _form(day=date(2024, 6, 3), start=time(9), end=time(10, 30), **kwargs):
    return AppointmentCreate(
        date=day,
        start_time=start,
        end_time=end,
        type=kwargs.pop("type", AppointmentType.OSS),
        patient_id=kwargs.pop("patient_id", "p1"),
        **kwargs,
    )


def test_create_appointment_derives_duration():
    state, result = save_appointment(AgendaState(), _form(notes="cambio medicazione"))

    assert result.ok
    (appointment,) = state.appointments
    assert result.affected_ids == (appointment.id,)
    assert appointment.date == "2024-06-03"
    assert (appointment.start_time, appointment.end_time) == ("09:00", "10:30")
    assert appointment.duration == 1.5
    assert appointment.notes == "cambio medicazione"


def test_invalid_time_range_changes_nothing():
    initial = AgendaState()
    for start, end in [(time(10), time(9)), (time(10), time(10))]:
        state, result = save_appointment(initial, _form(start=start, end=end))
        assert not result.ok
        assert result.error is AgendaError.INVALID_TIME_RANGE
        assert state is initial


def test_update_keeps_id_and_recomputes_duration():
    state, created = save_appointment(AgendaState(), _form())
    appointment_id = created.affected_ids[0]

    state, result = save_appointment(state, _form(start=time(14), end=time(14, 45)), appointment_id)

    assert result.ok
    (appointment,) = state.appointments
    assert appointment.id == appointment_id
    assert appointment.start_time == "14:00"
    assert appointment.duration == 0.75


def test_update_does_not_touch_previous_snapshot():
    before, created = save_appointment(AgendaState(), _form())
    after, _ = save_appointment(before, _form(start=time(15), end=time(16)), created.affected_ids[0])
    assert before.appointments[0].start_time == "09:00"
    assert after.appointments[0].start_time == "15:00"


def test_update_unknown_id():
    state = AgendaState()
    new_state, result = save_appointment(state, _form(), "missing")
    assert result.error is AgendaError.NOT_FOUND
    assert new_state is state


def test_delete_appointment(make_appointment):
    state = AgendaState(appointments=(make_appointment("2024-06-03", id="x"), make_appointment("2024-06-04", id="y")))
    state, result = delete_appointment(state, "x")
    assert result.ok
    assert [a.id for a in state.appointments] == ["y"]
    _, result = delete_appointment(state, "x")
    assert result.error is AgendaError.NOT_FOUND


def test_week_and_day_queries_are_sorted(make_appointment):
    state = AgendaState(
        appointments=(
            make_appointment("2024-06-05", "11:00", "12:00", id="c"),
            make_appointment("2024-06-03", "15:00", "16:00", id="b"),
            make_appointment("2024-06-03", "08:00", "09:00", id="a"),
            make_appointment("2024-06-10", "08:00", "09:00", id="next-week"),
            make_appointment("2024-06-02", "08:00", "09:00", id="last-week"),
        )
    )
    assert [a.id for a in appointments_in_week(state, date(2024, 6, 6))] == ["a", "b", "c"]
    assert [a.id for a in appointments_on_day(state, "2024-06-03")] == ["a", "b"]


def test_week_overview(make_appointment):
    state = AgendaState(
        appointments=(
            make_appointment("2024-12-23", "09:00", "10:30"),
            make_appointment("2024-12-23", "14:00", "15:00"),
            make_appointment("2024-12-27", "08:00", "08:30"),
        )
    )
    overview = week_overview(state, date(2024, 12, 25))

    assert overview.week_start == date(2024, 12, 23)
    assert overview.week_end == date(2024, 12, 29)
    assert [d.weekday for d in overview.days][0] == "Lunedì"
    assert [d.holiday for d in overview.days] == [None, None, "Natale", "Santo Stefano", None, None, None]
    assert overview.days[0].total_hours == 2.5
    assert overview.total_hours == 3.0
    assert not overview.can_copy
    assert overview.can_delete


def test_empty_week_overview_offers_copy():
    overview = week_overview(AgendaState(), date(2024, 6, 3))
    assert overview.can_copy
    assert not overview.can_delete
    assert overview.total_hours == 0


def test_delete_week(make_appointment):
    state = AgendaState(
        appointments=(
            make_appointment("2024-06-03", id="mon"),
            make_appointment("2024-06-09", id="sun"),
            make_appointment("2024-06-10", id="other"),
        )
    )
    state, result = delete_week(state, date(2024, 6, 5))
    assert result.ok
    assert set(result.affected_ids) == {"mon", "sun"}
    assert [a.id for a in state.appointments] == ["other"]

    _, result = delete_week(state, date(2024, 6, 5))
    assert result.error is AgendaError.EMPTY_WEEK


def test_copy_week_from_two_weeks_ago(make_appointment):
    state = AgendaState(
        appointments=(
            make_appointment("2024-06-03", "09:00", "10:00", id="mon"),
            make_appointment("2024-06-07", "14:00", "15:00", id="fri"),
        )
    )
    new_state, result = copy_week(state, date(2024, 6, 19), weeks_ago=2)

    assert result.ok
    copied = appointments_in_week(new_state, date(2024, 6, 17))
    assert [a.date for a in copied] == ["2024-06-17", "2024-06-21"]
    assert len(copied) == len(appointments_in_week(state, date(2024, 6, 3)))
    assert set(result.affected_ids) == {a.id for a in copied}
    assert len(new_state.appointments) == 4


def test_copy_week_refuses_non_empty_target(make_appointment):
    state = AgendaState(
        appointments=(make_appointment("2024-06-03"), make_appointment("2024-06-12")),
    )
    new_state, result = copy_week(state, date(2024, 6, 10))
    assert result.error is AgendaError.TARGET_NOT_EMPTY
    assert new_state is state


def test_copy_week_with_empty_source(make_appointment):
    state = AgendaState(appointments=(make_appointment("2024-05-01"),))
    new_state, result = copy_week(state, date(2024, 6, 10))
    assert result.error is AgendaError.EMPTY_SOURCE
    assert "settimana scorsa" in result.message
    assert new_state is state


def test_suggest_slot(make_appointment):
    state = AgendaState(
        appointments=(
            make_appointment("2024-06-03", "09:00", "10:00"),
            make_appointment("2024-06-03", "08:00", "09:00"),
        )
    )
    slot, result = suggest_slot(state, date(2024, 6, 3))
    assert result.ok
    assert slot == FreeSlot(start="10:00", end="11:00")


def test_suggest_slot_on_full_day(make_appointment):
    state = AgendaState(appointments=(make_appointment("2024-06-03", "08:00", "18:00"),))
    slot, result = suggest_slot(state, date(2024, 6, 3))
    assert slot is None
    assert result.error is AgendaError.NO_SLOT
