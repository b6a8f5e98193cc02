"""
Tests for the Remindly reminder list

Tests the in-memory store including:
- Reminder creation from form values
- Index-based removal and block moves
- Due-date sorting
- Past-due projection and reconciliation (with injected datetime)
"""

from datetime import datetime, timedelta, timezone

import pytest

from remindly.memory import (
    ICONS,
    Reminder,
    ReminderForm,
    ReminderStore,
    create_reminder,
    format_due_date,
    naive_local,
    stale_reminder_ids,
    visible_entries,
)


NOW = datetime(2026, 10, 19, 12, 0)


def _reminder(title: str, hours: float = 1, icon: str = "🔔") -> Reminder:
    return create_reminder(ReminderForm(
        title=title,
        description=f"{title} details",
        due_date=NOW + timedelta(hours=hours),
        icon=icon
    ))


def _titles(store: ReminderStore):
    return [r.title for r in store]


def test_reminder_models():
    """Test reminder data models"""
    print("\n" + "="*70)
    print("TEST 1: Reminder Models")
    print("="*70)

    print("\n[1.1] Testing reminder creation...")
    form = ReminderForm(title="Pay rent", description="", due_date=NOW + timedelta(days=1), icon="📅")
    reminder = create_reminder(form)

    assert reminder.id
    assert reminder.title == "Pay rent"
    assert reminder.description == ""
    assert reminder.icon == "📅"
    assert reminder.display_title == "📅 Pay rent"
    print(f"✓ Reminder created: {reminder.id}")

    print("\n[1.2] Testing unique ids...")
    other = create_reminder(form)
    assert other.id != reminder.id
    print("✓ Each reminder gets its own id")

    print("\n[1.3] Testing no validation on title...")
    blank = create_reminder(ReminderForm(title="", description="", due_date=NOW))
    assert blank.title == ""
    assert blank.icon == ICONS[0]
    print("✓ Empty title accepted, default icon applied")

    print("\n[1.4] Testing type check on due date...")
    with pytest.raises(TypeError):
        Reminder(title="x", description="", due_date="tomorrow")
    print("✓ Non-datetime due date rejected")


def test_apply_keeps_id():
    """Editing replaces every field except id"""
    reminder = _reminder("Old title")
    original_id = reminder.id

    reminder.apply(ReminderForm(
        title="New title",
        description="New description",
        due_date=NOW + timedelta(hours=5),
        icon="📌"
    ))

    assert reminder.id == original_id
    assert reminder.title == "New title"
    assert reminder.description == "New description"
    assert reminder.due_date == NOW + timedelta(hours=5)
    assert reminder.icon == "📌"

    form = reminder.to_form()
    assert form.title == "New title"
    assert form.icon == "📌"


def test_visibility():
    """Test past-due detection"""
    future = _reminder("Future", hours=1)
    past = _reminder("Past", hours=-1)
    exact = create_reminder(ReminderForm(title="Exact", description="", due_date=NOW))

    assert future.is_visible(NOW)
    assert not past.is_visible(NOW)
    assert not exact.is_visible(NOW), "Reminder due exactly now is no longer shown"


def test_aware_due_dates_compare_with_naive_clock():
    """Offset-aware due dates are compared in local time"""
    aware_future = (NOW + timedelta(hours=1)).astimezone()
    aware_past = (NOW - timedelta(hours=1)).astimezone(timezone.utc)

    assert naive_local(NOW) is NOW
    assert naive_local(aware_future) == NOW + timedelta(hours=1)
    assert naive_local(aware_future).tzinfo is None

    later = create_reminder(ReminderForm(title="Later", description="", due_date=aware_future))
    earlier = create_reminder(ReminderForm(title="Earlier", description="", due_date=aware_past))
    naive = _reminder("Naive", hours=0.5)
    assert later.is_visible(NOW)
    assert not earlier.is_visible(NOW)

    store = ReminderStore([later, naive, earlier])
    store.sort_by_due_date()
    assert _titles(store) == ["Earlier", "Naive", "Later"]


def test_format_due_date():
    assert format_due_date(datetime(2026, 10, 20, 9, 0)) == "10/20/26, 9:00 AM"
    assert format_due_date(datetime(2026, 1, 5, 0, 7)) == "1/5/26, 12:07 AM"
    assert format_due_date(datetime(2026, 12, 31, 15, 30)) == "12/31/26, 3:30 PM"


def test_reminder_store():
    """Test reminder store"""
    print("\n" + "="*70)
    print("TEST 2: Reminder Store")
    print("="*70)

    store = ReminderStore()

    print("\n[2.1] Testing append and lookup...")
    first = _reminder("First", hours=2)
    second = _reminder("Second", hours=1)
    store.append(first)
    store.append(second)

    assert len(store) == 2
    assert store.get_reminder(first.id) is first
    assert store.index_of(second.id) == 1
    assert store.get_reminder("missing") is None
    print("✓ Reminders appended in insertion order")

    print("\n[2.2] Testing sort by due date...")
    store.sort_by_due_date()
    assert _titles(store) == ["Second", "First"]
    print("✓ Sorted ascending")

    print("\n[2.3] Testing remove by id...")
    assert store.remove_by_id(second.id)
    assert not store.remove_by_id(second.id)
    assert _titles(store) == ["First"]
    print("✓ Removed once, second removal reports not found")


def test_remove_at_offsets():
    store = ReminderStore([_reminder(t) for t in "ABCDE"])

    removed = store.remove_at_offsets({3, 1, 99})

    assert [r.title for r in removed] == ["B", "D"]
    assert _titles(store) == ["A", "C", "E"]


def test_move_single_down():
    store = ReminderStore([_reminder(t) for t in "ABCD"])

    # Drop A before the element originally at index 3 (D)
    store.move({0}, 3)

    assert _titles(store) == ["B", "C", "A", "D"]


def test_move_to_end_and_up():
    store = ReminderStore([_reminder(t) for t in "ABCD"])
    store.move({1}, 4)
    assert _titles(store) == ["A", "C", "D", "B"]

    store.move({3}, 0)
    assert _titles(store) == ["B", "A", "C", "D"]


def test_move_block_keeps_order():
    store = ReminderStore([_reminder(t) for t in "ABCDE"])

    store.move({0, 2}, 4)

    assert _titles(store) == ["B", "D", "A", "C", "E"]


def test_move_onto_itself_is_noop():
    store = ReminderStore([_reminder(t) for t in "ABC"])
    store.move({1}, 1)
    assert _titles(store) == ["A", "B", "C"]
    store.move({1}, 2)
    assert _titles(store) == ["A", "B", "C"]


def test_visible_entries_hide_past_due():
    """Past-due reminders are hidden but stay in the store"""
    past = _reminder("Past", hours=-2)
    soon = _reminder("Soon", hours=1)
    later = _reminder("Later", hours=3)
    store = ReminderStore([past, soon, later])

    entries = visible_entries(store, NOW)

    assert [(i, r.title) for i, r in entries] == [(1, "Soon"), (2, "Later")]
    assert len(store) == 3
    assert store.get_reminder(past.id) is past


def test_reconcile():
    """Reminders missing from the pending set are dropped"""
    kept = _reminder("Kept")
    fired = _reminder("Fired", hours=-1)
    cancelled = _reminder("Cancelled elsewhere")
    store = ReminderStore([kept, fired, cancelled])

    assert stale_reminder_ids(store, {kept.id}) == {fired.id, cancelled.id}
    assert len(store) == 3, "Pure check must not mutate"

    removed = store.reconcile([kept.id, "unrelated"])

    assert removed == {fired.id, cancelled.id}
    assert _titles(store) == ["Kept"]
    assert store.reconcile({kept.id}) == set()
